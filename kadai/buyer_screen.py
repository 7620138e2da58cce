"""Buyer dashboard screen: menu, cart and own orders."""

from __future__ import annotations

from typing import Callable

from textual import work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from kadai.buyer import BuyerDashboard
from kadai.checkout_modal import CheckoutModal
from kadai.constant import SHOP_NAME
from kadai.guard import ROUTE_SELLER
from kadai.rendering import (
    format_cart,
    format_menu_row,
    format_order_details,
    format_order_label,
    render_list,
)
from kadai.session import SessionStore

PANES = ("menu", "cart", "orders")


class BuyerScreen(Screen):
    """Keyboard-driven ordering view."""

    CSS = """
    #main-layout {
        height: 2fr;
    }

    #menu-pane {
        width: 3fr;
        border: round $primary;
        padding: 0 1;
    }

    #cart-pane {
        width: 2fr;
        border: round $secondary;
        padding: 0 1;
    }

    #orders-pane {
        height: 1fr;
        border: round $surface;
        padding: 0 1;
    }

    .active-pane {
        border: heavy $accent;
    }

    .pane-title {
        text-style: bold;
    }

    .pane-body {
        height: 1fr;
    }
    """

    BINDINGS = [
        ("tab", "cycle_pane", "Switch pane"),
        ("j", "move(1)", "Down"),
        ("k", "move(-1)", "Up"),
        ("down", "move(1)", "Down"),
        ("up", "move(-1)", "Up"),
        ("enter", "add_selected", "Add to cart"),
        ("plus", "change_quantity(1)", "Qty +"),
        ("minus", "change_quantity(-1)", "Qty -"),
        ("d", "remove_line", "Remove line"),
        ("c", "checkout", "Checkout"),
        ("r", "refresh", "Refresh"),
        ("s", "seller_panel", "Seller panel"),
        ("ctrl+l", "logout", "Logout"),
        ("ctrl+q", "app.quit", "Quit"),
    ]

    active_pane = reactive("menu")
    menu_index = reactive(0)
    cart_index = reactive(0)
    order_index = reactive(0)

    def __init__(
        self,
        session: SessionStore,
        dashboard: BuyerDashboard,
        navigate: Callable[[str], None],
        logout: Callable[[], None],
    ) -> None:
        super().__init__()
        self.session = session
        self.dashboard = dashboard
        self.navigate = navigate
        self.logout = logout

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="menu-pane", classes="active-pane"):
                yield Static("Menu", classes="pane-title")
                yield Static("Loading menu...", id="menu-list", classes="pane-body")
            with Vertical(id="cart-pane"):
                yield Static("Cart (0)", id="cart-title", classes="pane-title")
                yield Static(id="cart-list", classes="pane-body")
        with Vertical(id="orders-pane"):
            yield Static("My Orders", classes="pane-title")
            yield Static(id="orders-list", classes="pane-body")
        yield Footer()

    def on_mount(self) -> None:
        identity = self.session.identity
        self.title = SHOP_NAME
        self.sub_title = f"Welcome, {identity.username}" if identity else ""
        self.dashboard.on_menu_changed = self._refresh_menu
        self.dashboard.on_orders_changed = self._refresh_orders
        self._refresh_all()
        self._load()

    def on_unmount(self) -> None:
        self.dashboard.deactivate()

    @work(exclusive=True, group="load")
    async def _load(self) -> None:
        await self.dashboard.load()
        self._refresh_all()

    def action_cycle_pane(self) -> None:
        idx = PANES.index(self.active_pane)
        self.active_pane = PANES[(idx + 1) % len(PANES)]
        for pane in PANES:
            self.query_one(f"#{pane}-pane").set_class(pane == self.active_pane, "active-pane")

    def action_move(self, delta: int) -> None:
        if self.active_pane == "menu" and self.dashboard.menu:
            self.menu_index = (self.menu_index + delta) % len(self.dashboard.menu)
        elif self.active_pane == "cart" and len(self.dashboard.cart):
            self.cart_index = (self.cart_index + delta) % len(self.dashboard.cart)
        elif self.active_pane == "orders" and self.dashboard.orders:
            self.order_index = (self.order_index + delta) % len(self.dashboard.orders)
        self._refresh_all()

    def action_add_selected(self) -> None:
        if self.active_pane != "menu" or not self.dashboard.menu:
            return
        item = self.dashboard.menu[min(self.menu_index, len(self.dashboard.menu) - 1)]
        self.dashboard.add_to_cart(item)
        self._refresh_cart()

    def action_change_quantity(self, delta: int) -> None:
        line = self._selected_line()
        if line is None:
            return
        if delta > 0:
            self.dashboard.cart.increment(line.menu_item_id)
        else:
            self.dashboard.cart.decrement(line.menu_item_id)
        self._refresh_cart()

    def action_remove_line(self) -> None:
        line = self._selected_line()
        if line is None:
            return
        self.dashboard.cart.remove(line.menu_item_id)
        self._refresh_cart()

    def action_checkout(self) -> None:
        if self.dashboard.cart.is_empty:
            self.app.notify("Your cart is empty", severity="error")
            return
        self.app.push_screen(CheckoutModal(self.dashboard), self._after_checkout)

    def _after_checkout(self, placed: bool | None) -> None:
        if placed:
            self.cart_index = 0
        self._refresh_all()

    def action_refresh(self) -> None:
        self._load()

    def action_seller_panel(self) -> None:
        if self.session.is_seller:
            self.navigate(ROUTE_SELLER)

    def action_logout(self) -> None:
        self.logout()

    def _selected_line(self):
        if self.active_pane != "cart" or self.dashboard.cart.is_empty:
            return None
        lines = self.dashboard.cart.lines
        return lines[min(self.cart_index, len(lines) - 1)]

    def _visible_lines(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _refresh_all(self) -> None:
        self._refresh_menu()
        self._refresh_cart()
        self._refresh_orders()

    def _refresh_menu(self) -> None:
        try:
            widget = self.query_one("#menu-list", Static)
        except NoMatches:
            return
        if self.dashboard.menu_loading and not self.dashboard.menu:
            widget.update("Loading menu...")
            return
        menu = self.dashboard.menu
        if self.menu_index >= len(menu):
            self.menu_index = max(0, len(menu) - 1)
        rows = [format_menu_row(item) for item in menu]
        # Menu rows take two lines when a description is present.
        widget.update(render_list(rows, self._visible_lines(widget), self.menu_index, "No menu items available"))

    def _refresh_cart(self) -> None:
        try:
            widget = self.query_one("#cart-list", Static)
            title = self.query_one("#cart-title", Static)
        except NoMatches:
            return
        cart = self.dashboard.cart
        if self.cart_index >= len(cart):
            self.cart_index = max(0, len(cart) - 1)
        title.update(f"Cart ({len(cart)})")
        selected = self.cart_index if self.active_pane == "cart" else None
        widget.update(format_cart(cart, selected))

    def _refresh_orders(self) -> None:
        try:
            widget = self.query_one("#orders-list", Static)
        except NoMatches:
            return
        orders = self.dashboard.orders
        if self.order_index >= len(orders):
            self.order_index = max(0, len(orders) - 1)
        rows = []
        for idx, order in enumerate(orders):
            row = format_order_label(order)
            if idx == self.order_index:
                row.append_text(format_order_details(order))
            rows.append(row)
        widget.update(
            render_list(
                rows,
                self._visible_lines(widget),
                self.order_index,
                "No orders yet. Start ordering from the menu above!",
            )
        )
