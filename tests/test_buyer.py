"""Buyer dashboard: menu filtering, checkout and stale responses."""
from __future__ import annotations

import json
from decimal import Decimal

import httpx
import pytest

from kadai.buyer import BuyerDashboard
from kadai.models import CheckoutForm, MenuItem

GOOD_FORM = CheckoutForm(customer_name=" Asha ", customer_phone="9876543210 ", description=" Pickup at 9am ")


def _dashboard(client, notices) -> BuyerDashboard:
    dashboard = BuyerDashboard(client, notices)
    dashboard.cart.add(MenuItem(id="1", name="Idli", price=Decimal("50")))
    dashboard.cart.add(MenuItem(id="1", name="Idli", price=Decimal("50")))
    dashboard.cart.add(MenuItem(id="2", name="Vada", price=Decimal("30")))
    return dashboard


@pytest.mark.asyncio
async def test_load_shows_only_available_items(client, fake_api, notices, menu_rows) -> None:
    fake_api.on("GET", "/menu", body=menu_rows)
    fake_api.on("GET", "/orders", body=[])
    dashboard = BuyerDashboard(client, notices)

    await dashboard.load()

    assert [item.name for item in dashboard.menu] == ["Idli", "Vada"]
    assert dashboard.menu_loading is False


@pytest.mark.asyncio
async def test_checkout_with_empty_name_never_reaches_the_network(client, fake_api, notices) -> None:
    dashboard = _dashboard(client, notices)
    assert dashboard.cart.total() == Decimal("130")

    placed = await dashboard.checkout(CheckoutForm(customer_name="", customer_phone="9876543210", description="Pickup"))

    assert placed is False
    assert fake_api.requests == []
    assert any("Name" in message for message in notices.messages)
    assert len(dashboard.cart) == 2


@pytest.mark.asyncio
async def test_checkout_with_empty_cart_is_rejected(client, fake_api, notices) -> None:
    dashboard = BuyerDashboard(client, notices)

    assert await dashboard.checkout(GOOD_FORM) is False
    assert fake_api.requests == []
    assert notices.messages == ["Your cart is empty"]


@pytest.mark.asyncio
async def test_successful_checkout_clears_cart_and_refreshes_orders(client, fake_api, notices) -> None:
    placed_orders = []

    def create(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        placed_orders.append({"id": "o-000001", "status": "pending", **body})
        return httpx.Response(201, json=placed_orders[-1])

    fake_api.on_call("POST", "/orders", create)
    fake_api.on_call("GET", "/orders", lambda request: httpx.Response(200, json=placed_orders))
    dashboard = _dashboard(client, notices)

    placed = await dashboard.checkout(GOOD_FORM)

    assert placed is True
    assert dashboard.cart.is_empty
    assert fake_api.json_body("POST", "/orders") == {
        "items": [
            {"menu_item_id": "1", "name": "Idli", "price": 50.0, "quantity": 2},
            {"menu_item_id": "2", "name": "Vada", "price": 30.0, "quantity": 1},
        ],
        "total": 130.0,
        "customer_name": "Asha",
        "customer_phone": "9876543210",
        "description": "Pickup at 9am",
        "customer_address": "Pickup at 9am",
    }
    assert [r.method for r in fake_api.requests] == ["POST", "GET"]
    assert [order.id for order in dashboard.orders] == ["o-000001"]
    assert notices.calls == [("information", "Order placed successfully!")]


@pytest.mark.asyncio
async def test_rejected_checkout_surfaces_server_messages_and_keeps_cart(client, fake_api, notices) -> None:
    fake_api.on("POST", "/orders", 400, {"errors": ["Vada is sold out", "total mismatch"]})
    dashboard = _dashboard(client, notices)

    placed = await dashboard.checkout(GOOD_FORM)

    assert placed is False
    assert notices.messages == ["Vada is sold out", "total mismatch"]
    assert {line.menu_item_id: line.quantity for line in dashboard.cart} == {"1": 2, "2": 1}
    assert fake_api.calls("GET", "/orders") == []


@pytest.mark.asyncio
async def test_server_fault_is_announced_once(client, fake_api, notices) -> None:
    fake_api.on("POST", "/orders", 500, {"detail": "db down"})
    dashboard = _dashboard(client, notices)

    assert await dashboard.checkout(GOOD_FORM) is False
    assert notices.calls == [("error", "db down")]
    assert len(dashboard.cart) == 2


@pytest.mark.asyncio
async def test_responses_after_deactivate_are_discarded(client, fake_api, notices) -> None:
    fake_api.on("GET", "/orders", body=[{"id": "late", "total": 10}])
    dashboard = BuyerDashboard(client, notices)
    changes = []
    dashboard.on_orders_changed = lambda: changes.append(True)
    dashboard.deactivate()

    assert await dashboard.refresh_orders() is False
    assert dashboard.orders == []
    assert changes == []


@pytest.mark.asyncio
async def test_malformed_menu_is_reported_not_raised(client, fake_api, notices) -> None:
    fake_api.on("GET", "/menu", body=[{"id": "1", "name": "Idli", "price": "N/A"}])
    dashboard = BuyerDashboard(client, notices)

    assert await dashboard.refresh_menu() is False
    assert dashboard.menu == []
    assert dashboard.menu_loading is False
    assert notices.calls == [("error", "Unexpected response from the server.")]


@pytest.mark.asyncio
async def test_orders_that_are_not_records_are_reported_not_raised(client, fake_api, notices) -> None:
    fake_api.on("GET", "/orders", body=["o-1", "o-2"])
    dashboard = BuyerDashboard(client, notices)

    assert await dashboard.refresh_orders() is False
    assert dashboard.orders == []
    assert notices.messages == ["Unexpected response from the server."]
