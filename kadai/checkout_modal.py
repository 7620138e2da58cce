"""Checkout form modal screen."""

from __future__ import annotations

from textual import on, work
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static

from kadai.buyer import BuyerDashboard
from kadai.constant import MIN_CUSTOMER_NAME, MIN_CUSTOMER_PHONE, MIN_ORDER_DESCRIPTION
from kadai.models import CheckoutForm
from kadai.rendering import format_money


class CheckoutModal(ModalScreen[bool]):
    """Collect customer details and place the order.

    Dismisses with ``True`` once the order went through, ``False`` on cancel.
    """

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
    ]

    CSS = """
    CheckoutModal {
        align: center middle;
        background: $background 60%;
    }

    #checkout-dialog {
        width: 72;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #checkout-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #checkout-total {
        margin-bottom: 1;
    }

    #checkout-actions {
        height: auto;
    }

    #checkout-actions Button {
        margin-right: 2;
    }
    """

    def __init__(self, dashboard: BuyerDashboard) -> None:
        super().__init__()
        self.dashboard = dashboard

    def compose(self) -> ComposeResult:
        with Container(id="checkout-dialog"):
            yield Static("Checkout", id="checkout-title")
            yield Static(f"Total: {format_money(self.dashboard.cart.total())}", id="checkout-total")
            yield Input(placeholder=f"Name * (min {MIN_CUSTOMER_NAME})", id="customer-name")
            yield Input(placeholder=f"Phone * (min {MIN_CUSTOMER_PHONE})", id="customer-phone")
            yield Input(
                placeholder=f"Order description * (address, instructions, pickup/delivery; min {MIN_ORDER_DESCRIPTION})",
                id="description",
            )
            with Horizontal(id="checkout-actions"):
                yield Button("Place Order", id="place-order", variant="primary")
                yield Button("Cancel", id="cancel")

    def on_mount(self) -> None:
        self.query_one("#customer-name", Input).focus()

    @on(Button.Pressed, "#cancel")
    def action_cancel(self) -> None:
        if self.dashboard.placing_order:
            return
        self.dismiss(False)

    @on(Button.Pressed, "#place-order")
    @on(Input.Submitted)
    def submit(self) -> None:
        self._place_order()

    def _form(self) -> CheckoutForm:
        return CheckoutForm(
            customer_name=self.query_one("#customer-name", Input).value,
            customer_phone=self.query_one("#customer-phone", Input).value,
            description=self.query_one("#description", Input).value,
        )

    @work(exclusive=True)
    async def _place_order(self) -> None:
        button = self.query_one("#place-order", Button)
        button.disabled = True
        button.label = "Placing Order..."
        placed = await self.dashboard.checkout(self._form())
        if placed:
            self.dismiss(True)
            return
        button.disabled = False
        button.label = "Place Order"
