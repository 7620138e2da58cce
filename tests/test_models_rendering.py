from __future__ import annotations

from decimal import Decimal

import pytest
from rich.text import Text

from kadai.cart import Cart
from kadai.constant import UNKNOWN_STATUS_STYLE
from kadai.models import Identity, MenuForm, MenuItem, Order, to_decimal
from kadai.rendering import (
    format_cart,
    format_money,
    format_order_details,
    format_order_label,
    render_list,
    status_style,
    window_bounds,
)


def test_identity_accepts_mongo_style_id() -> None:
    identity = Identity.from_api({"_id": "abc", "username": "meena", "role": "seller"})
    assert identity.user_id == "abc"
    assert identity.is_seller


def test_order_defaults_and_legacy_address() -> None:
    order = Order.from_api({"id": "65f0c0ffee42abcdef", "total": "99.5", "customer_address": "Door 4"})

    assert order.status == "pending"
    assert order.description == "Door 4"
    assert order.total == Decimal("99.5")
    assert order.short_id == "ABCDEF"


def test_order_without_id_has_placeholder_short_id() -> None:
    assert Order.from_api({"total": 0}).short_id == "N/A"


def test_to_decimal_rejects_garbage() -> None:
    assert to_decimal(None) == Decimal("0")
    assert to_decimal(0.1) == Decimal("0.1")
    with pytest.raises(ValueError):
        to_decimal("abc")


def test_menu_form_prefills_from_item() -> None:
    item = MenuItem(id="m1", name="Idli", price=Decimal("50"), category="Breakfast", available=False)
    form = MenuForm.from_item(item)
    assert (form.name, form.price, form.available, form.image_url) == ("Idli", "50", False, "")


@pytest.mark.parametrize(
    ("total", "rows", "selected", "expected"),
    [
        (0, 5, None, (0, 0)),
        (3, 5, 2, (0, 3)),
        (10, 4, None, (0, 4)),
        (10, 4, 5, (3, 7)),
        (10, 4, 9, (6, 10)),
    ],
)
def test_window_bounds(total, rows, selected, expected) -> None:
    assert window_bounds([1] * total, rows, selected) == expected


def test_window_bounds_counts_lines_of_tall_rows() -> None:
    # Row 2 is expanded with its details.
    heights = [1, 1, 5, 1, 1]
    assert window_bounds(heights, 6, 2) == (1, 3)
    assert window_bounds(heights, 6, None) == (0, 2)
    assert window_bounds(heights, 3, 2) == (2, 3)


def test_money_and_status_styles() -> None:
    assert format_money(Decimal("130")) == "Rs. 130.00"
    assert status_style("shipped") == UNKNOWN_STATUS_STYLE
    assert status_style("ready") != UNKNOWN_STATUS_STYLE


def test_format_cart_shows_total() -> None:
    cart = Cart()
    assert format_cart(cart, None).plain == "Your cart is empty"

    cart.add(MenuItem(id="1", name="Idli", price=Decimal("50")))
    cart.add(MenuItem(id="1", name="Idli", price=Decimal("50")))
    plain = format_cart(cart, 0).plain
    assert "➤ Idli  Rs. 50.00  x2" in plain
    assert "Total: Rs. 100.00" in plain


def test_order_label_and_list_window() -> None:
    order = Order.from_api({"id": "o-1234567", "total": 80, "status": "ready"})
    assert format_order_label(order).plain == "Order #234567  READY   Rs. 80.00"

    rows = [Text(f"row {idx}") for idx in range(10)]
    plain = render_list(rows, 5, 5, "empty").plain
    assert plain.splitlines() == ["⋮", "  row 4", "➤ row 5", "  row 6", "⋮"]
    assert render_list([], 3, None, "empty").plain == "empty"


def test_render_list_fits_expanded_order_in_the_pane() -> None:
    orders = [Order.from_api({"id": f"o-00000{idx}", "total": 10, "description": "Pickup at 9am"}) for idx in range(6)]
    rows = [format_order_label(order) for order in orders]
    rows[3].append_text(format_order_details(orders[3]))

    plain = render_list(rows, 6, 3, "empty").plain

    assert len(plain.splitlines()) == 6
    assert "➤ Order #000003" in plain
    assert "Pickup at 9am" in plain
