"""Buyer dashboard controller: menu, cart and checkout."""

from __future__ import annotations

import logging

from kadai.api import ApiClient, Notifier
from kadai.cart import Cart
from kadai.dashboard import Dashboard
from kadai.errors import ApiError
from kadai.models import CheckoutForm, MenuItem
from kadai.validation import validate_checkout

logger = logging.getLogger(__name__)


class BuyerDashboard(Dashboard):
    def __init__(self, client: ApiClient, notify: Notifier) -> None:
        super().__init__(client, notify)
        self.cart = Cart()
        self.placing_order = False

    def _visible_menu(self, items: list[MenuItem]) -> list[MenuItem]:
        return [item for item in items if item.available]

    def add_to_cart(self, item: MenuItem) -> None:
        line = self.cart.add(item)
        logger.debug("cart_add item=%s quantity=%s", item.id, line.quantity)

    async def checkout(self, form: CheckoutForm) -> bool:
        """Submit the cart as an order; ``True`` means the form can close."""
        errors = validate_checkout(self.cart, form)
        if errors:
            self.report_messages(errors)
            return False

        self.placing_order = True
        try:
            order = await self.client.create_order(
                self.cart.lines,
                float(self.cart.total()),
                form.customer_name.strip(),
                form.customer_phone.strip(),
                form.description.strip(),
            )
        except ApiError as exc:
            self.report(exc, "Failed to place order")
            return False
        finally:
            self.placing_order = False

        logger.info("order_placed id=%s lines=%s", order.id, len(self.cart))
        self.cart.clear()
        self.notify("Order placed successfully!", "information")
        await self.refresh_orders()
        return True
