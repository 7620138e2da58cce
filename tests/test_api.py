from __future__ import annotations

import json
from decimal import Decimal

import httpx
import pytest

from kadai.api import ApiClient
from kadai.constant import MSG_FORBIDDEN, MSG_NETWORK, MSG_NOT_FOUND, MSG_SERVER, MSG_SESSION_EXPIRED
from kadai.errors import Forbidden, NetworkUnreachable, NotFound, ServerFault, Unauthorized, ValidationFailed


@pytest.mark.asyncio
async def test_bearer_token_is_attached_when_present(client: ApiClient, fake_api) -> None:
    fake_api.on("GET", "/menu", body=[])
    client.token_provider = lambda: "tok-123"

    await client.fetch_menu()

    assert fake_api.requests[-1].headers["Authorization"] == "Bearer tok-123"


@pytest.mark.asyncio
async def test_no_authorization_header_without_token(client: ApiClient, fake_api) -> None:
    fake_api.on("GET", "/menu", body=[])

    await client.fetch_menu()

    assert "Authorization" not in fake_api.requests[-1].headers


@pytest.mark.asyncio
async def test_401_on_authenticated_call_reports_unauthorized(client: ApiClient, fake_api, notices) -> None:
    fake_api.on("GET", "/orders", 401, {"detail": "Token expired"})
    hits = []
    client.on_unauthorized = lambda: hits.append(True)

    with pytest.raises(Unauthorized):
        await client.fetch_orders()

    assert hits == [True]
    assert notices.calls == [("error", MSG_SESSION_EXPIRED)]


@pytest.mark.asyncio
async def test_401_on_login_is_left_to_the_caller(client: ApiClient, fake_api, notices) -> None:
    fake_api.on("POST", "/token", 401, {"detail": "Invalid credentials"})
    hits = []
    client.on_unauthorized = lambda: hits.append(True)

    with pytest.raises(Unauthorized) as exc_info:
        await client.login("alice", "wrong")

    assert exc_info.value.message == "Invalid credentials"
    assert hits == []
    assert notices.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status", "body", "kind", "expected"),
    [
        (403, {"detail": "Sellers only"}, Forbidden, "Sellers only"),
        (403, {}, Forbidden, MSG_FORBIDDEN),
        (404, None, NotFound, MSG_NOT_FOUND),
        (500, {"detail": "db down"}, ServerFault, "db down"),
        (502, None, ServerFault, MSG_SERVER),
    ],
)
async def test_central_notifications(client: ApiClient, fake_api, notices, status, body, kind, expected) -> None:
    fake_api.on("GET", "/menu", status, body)

    with pytest.raises(kind):
        await client.fetch_menu()

    assert notices.calls == [("error", expected)]


@pytest.mark.asyncio
async def test_validation_failures_are_not_notified(client: ApiClient, fake_api, notices) -> None:
    fake_api.on("POST", "/orders", 400, {"errors": ["items required", "total mismatch"]})

    with pytest.raises(ValidationFailed) as exc_info:
        await client.create_order([], 0.0, "Asha", "9876543210", "pickup")

    assert exc_info.value.messages == ["items required", "total mismatch"]
    assert notices.calls == []


@pytest.mark.asyncio
async def test_network_failure_is_notified(fake_api, notices) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    fake_api.on_call("GET", "/menu", refuse)
    client = ApiClient("http://kadai.test", notify=notices, transport=fake_api.transport())

    with pytest.raises(NetworkUnreachable):
        await client.fetch_menu()

    assert notices.calls == [("error", MSG_NETWORK)]


@pytest.mark.asyncio
async def test_fetch_orders_parses_money_as_decimal(client: ApiClient, fake_api) -> None:
    fake_api.on(
        "GET",
        "/orders",
        body=[
            {
                "_id": "65f0c0ffee42abcdef",
                "items": [{"menu_item_id": "m1", "name": "Idli", "price": 50, "quantity": 2}],
                "total": 100.0,
                "status": "preparing",
            }
        ],
    )

    [order] = await client.fetch_orders()

    assert order.id == "65f0c0ffee42abcdef"
    assert order.total == Decimal("100.0")
    assert order.items[0].subtotal == Decimal("100")
    assert order.status == "preparing"


@pytest.mark.asyncio
async def test_menu_save_without_image_sends_json(client: ApiClient, fake_api) -> None:
    fake_api.on("PUT", "/menu/m1", body={"id": "m1"})

    await client.save_menu_item({"name": "Idli", "price": 55.0, "available": True}, item_id="m1")

    request = fake_api.requests[-1]
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == {"name": "Idli", "price": 55.0, "available": True}


@pytest.mark.asyncio
async def test_menu_save_with_image_sends_multipart(client: ApiClient, fake_api, tmp_path) -> None:
    image = tmp_path / "dosa.png"
    image.write_bytes(b"\x89PNG fake")
    fake_api.on("POST", "/menu", body={"id": "m9"})

    await client.save_menu_item(
        {"name": "Dosa", "price": 60.0, "available": False, "image_url": None},
        image_path=str(image),
    )

    request = fake_api.requests[-1]
    assert request.headers["Content-Type"].startswith("multipart/form-data")
    body = request.content
    assert b'name="name"' in body and b"Dosa" in body
    assert b'name="price"' in body and b"60.0" in body
    assert b'name="available"' in body and b"false" in body
    assert b'name="image_url"' not in body
    assert b'filename="dosa.png"' in body
    assert b"\x89PNG fake" in body
