"""Shared pytest fixtures: an in-memory API behind httpx.MockTransport."""
from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from kadai.api import ApiClient
from kadai.persistence import TokenStore

Handler = Callable[[httpx.Request], httpx.Response]


class Notices:
    """Collects notifier calls as ``(severity, message)`` pairs."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def __call__(self, message: str, severity: str) -> None:
        self.calls.append((severity, message))

    @property
    def messages(self) -> list[str]:
        return [message for _, message in self.calls]


class FakeApi:
    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], Handler] = {}

    def on(self, method: str, path: str, status: int = 200, body: Any = None) -> None:
        self.routes[(method, path)] = lambda request: httpx.Response(status, json=body)

    def on_call(self, method: str, path: str, handler: Handler) -> None:
        self.routes[(method, path)] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"detail": "Not Found"})
        return route(request)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def json_body(self, method: str, path: str, index: int = -1) -> Any:
        return json.loads(self.calls(method, path)[index].content)


@pytest.fixture()
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture()
def notices() -> Notices:
    return Notices()


@pytest.fixture()
def client(fake_api: FakeApi, notices: Notices) -> ApiClient:
    return ApiClient("http://kadai.test", notify=notices, transport=fake_api.transport())


@pytest.fixture()
def token_store(tmp_path) -> TokenStore:
    return TokenStore(str(tmp_path / "kadai.db"))


@pytest.fixture()
def menu_rows() -> list[dict[str, Any]]:
    return [
        {"id": "m1", "name": "Idli", "description": "Two pieces", "price": 50, "category": "Breakfast", "available": True},
        {"id": "m2", "name": "Vada", "description": "", "price": 30, "category": "Breakfast", "available": True},
        {"id": "m3", "name": "Pongal", "description": "", "price": 70.5, "category": "Breakfast", "available": False},
    ]
