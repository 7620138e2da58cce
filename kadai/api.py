"""HTTP client for the ordering API.

Attaches the bearer token, maps failures to ``kadai.errors`` kinds and sends
non-validation failures to a single notifier. A 401 on an authenticated call is
reported through ``on_unauthorized``; what happens next is the session's
business, not this module's.
"""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import Any, Callable, TypeVar

import httpx

from kadai.constant import (
    MSG_FORBIDDEN,
    MSG_MALFORMED,
    MSG_NETWORK,
    MSG_NOT_FOUND,
    MSG_SERVER,
    MSG_SESSION_EXPIRED,
)
from kadai.errors import (
    ApiError,
    Forbidden,
    NetworkUnreachable,
    NotFound,
    ServerFault,
    Unauthorized,
    ValidationFailed,
    error_for_status,
    error_messages,
)
from kadai.models import CartLine, Identity, MenuItem, Order

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str], None]
T = TypeVar("T")


def _silent(message: str, severity: str) -> None:
    return None


class ApiClient:
    """Thin async wrapper over ``httpx.AsyncClient``."""

    def __init__(
        self,
        base_url: str,
        *,
        notify: Notifier | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        # No client-side timeout: a request waits until the server answers or the connection fails.
        self._http = httpx.AsyncClient(base_url=base_url, timeout=None, transport=transport)
        self.notify: Notifier = notify or _silent
        self.token_provider: Callable[[], str | None] = lambda: None
        self.on_unauthorized: Callable[[], None] | None = None

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        data: dict[str, str] | None = None,
        files: dict[str, tuple[str, bytes, str]] | None = None,
        authenticated: bool = True,
        token: str | None = None,
    ) -> Any:
        headers: dict[str, str] = {}
        token = token or self.token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = await self._http.request(method, path, json=json, data=data, files=files, headers=headers)
        except httpx.TransportError as exc:
            logger.warning("request_failed method=%s path=%s error=%r", method, path, exc)
            self.notify(MSG_NETWORK, "error")
            raise NetworkUnreachable([MSG_NETWORK]) from exc

        logger.debug("response method=%s path=%s status=%s", method, path, response.status_code)
        if response.is_success:
            return _decode(response)
        raise self._failure(response, authenticated)

    def _failure(self, response: httpx.Response, authenticated: bool) -> ApiError:
        status = response.status_code
        messages = error_messages(_decode(response))
        error = error_for_status(status, messages)
        logger.info("api_error status=%s path=%s messages=%r", status, response.request.url.path, messages)

        if isinstance(error, Unauthorized):
            if authenticated:
                self.notify(MSG_SESSION_EXPIRED, "error")
                if self.on_unauthorized is not None:
                    self.on_unauthorized()
        elif isinstance(error, Forbidden):
            self.notify(error.message or MSG_FORBIDDEN, "error")
        elif isinstance(error, NotFound):
            self.notify(error.message or MSG_NOT_FOUND, "error")
        elif isinstance(error, ServerFault):
            self.notify(error.message or MSG_SERVER, "error")
        # Validation failures are left to the caller.
        return error

    def _parse(self, path: str, body: Any, parse: Callable[[Any], T]) -> T:
        """Turn a 2xx body into models; a body that does not fit is a server fault."""
        try:
            return parse(body)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            logger.warning("malformed_response path=%s error=%r", path, exc)
            self.notify(MSG_MALFORMED, "error")
            raise ServerFault([MSG_MALFORMED]) from exc

    async def login(self, username: str, password: str) -> tuple[str, Identity | None]:
        body = await self.request(
            "POST", "/token", json={"username": username, "password": password}, authenticated=False
        ) or {}
        if not isinstance(body, dict) or not body.get("access_token"):
            raise ValidationFailed(["Login response did not include a token"])
        user = body.get("user")
        identity = self._parse("/token", user, Identity.from_api) if user else None
        return str(body["access_token"]), identity

    async def register(self, username: str, email: str, password: str, role: str) -> Any:
        return await self.request(
            "POST",
            "/register",
            json={"username": username, "email": email, "password": password, "role": role},
            authenticated=False,
        )

    async def fetch_identity(self, token: str | None = None) -> Identity:
        """Fetch the current user.

        With an explicit ``token`` (a login still in progress) a 401 belongs to
        the caller and does not end the stored session.
        """
        body = await self.request("GET", "/me", authenticated=token is None, token=token)
        return self._parse("/me", body, Identity.from_api)

    async def fetch_menu(self) -> list[MenuItem]:
        body = await self.request("GET", "/menu")
        return self._parse("/menu", body, lambda rows: [MenuItem.from_api(row) for row in rows or []])

    async def fetch_orders(self) -> list[Order]:
        body = await self.request("GET", "/orders")
        return self._parse("/orders", body, lambda rows: [Order.from_api(row) for row in rows or []])

    async def create_order(
        self,
        lines: list[CartLine],
        total: float,
        customer_name: str,
        customer_phone: str,
        description: str,
    ) -> Order:
        body = await self.request(
            "POST",
            "/orders",
            json={
                "items": [line.to_payload() for line in lines],
                "total": total,
                "customer_name": customer_name,
                "customer_phone": customer_phone,
                "description": description,
                # Older servers still read the address field.
                "customer_address": description,
            },
        )
        return self._parse("/orders", body or {}, Order.from_api)

    async def update_order_status(self, order_id: str, status: str) -> Any:
        return await self.request("PUT", f"/orders/{order_id}/status", json={"status": status})

    async def save_menu_item(
        self,
        fields: dict[str, Any],
        *,
        item_id: str | None = None,
        image_path: str | None = None,
    ) -> Any:
        method, path = ("PUT", f"/menu/{item_id}") if item_id else ("POST", "/menu")
        if not image_path:
            return await self.request(method, path, json=fields)

        data = {key: _form_value(value) for key, value in fields.items() if value not in (None, "")}
        return await self.request(method, path, data=data, files={"image": _image_part(image_path)})

    async def delete_menu_item(self, item_id: str) -> Any:
        return await self.request("DELETE", f"/menu/{item_id}")

    async def create_seller(self, username: str, email: str, password: str) -> Any:
        return await self.request(
            "POST", "/sellers", json={"username": username, "email": email, "password": password}
        )


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _image_part(image_path: str) -> tuple[str, bytes, str]:
    path = Path(image_path).expanduser()
    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return (path.name, path.read_bytes(), content_type)
