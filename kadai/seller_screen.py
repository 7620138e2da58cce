"""Seller dashboard screen: menu management and live order board."""

from __future__ import annotations

from typing import Callable

from textual import work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from kadai.confirm_modal import ConfirmModal
from kadai.constant import ORDER_STATUSES, SHOP_NAME
from kadai.guard import ROUTE_DASHBOARD
from kadai.menu_form_modal import MenuFormModal
from kadai.models import MenuItem, Order
from kadai.rendering import (
    format_menu_row,
    format_order_details,
    format_order_label,
    render_list,
)
from kadai.seller import SellerDashboard
from kadai.seller_account_modal import SellerAccountModal
from kadai.session import SessionStore

STATUS_KEYS_HELP = "  ".join(f"{idx + 1}={status}" for idx, status in enumerate(ORDER_STATUSES))


class SellerScreen(Screen):
    """Orders are re-fetched on a fixed interval for as long as this screen is mounted."""

    CSS = """
    #main-layout {
        height: 1fr;
    }

    #menu-pane {
        width: 2fr;
        border: round $primary;
        padding: 0 1;
    }

    #orders-pane {
        width: 3fr;
        border: round $secondary;
        padding: 0 1;
    }

    .active-pane {
        border: heavy $accent;
    }

    .pane-title {
        text-style: bold;
    }

    .pane-help {
        color: $text-muted;
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
        ("n", "new_item", "New item"),
        ("e", "edit_item", "Edit item"),
        ("d", "delete_item", "Delete item"),
        ("1", "set_status(0)", "Pending"),
        ("2", "set_status(1)", "Preparing"),
        ("3", "set_status(2)", "Ready"),
        ("4", "set_status(3)", "Completed"),
        ("5", "set_status(4)", "Cancelled"),
        ("a", "add_seller", "Add seller"),
        ("r", "refresh", "Refresh"),
        ("b", "buyer_view", "Buyer view"),
        ("ctrl+l", "logout", "Logout"),
        ("ctrl+q", "app.quit", "Quit"),
    ]

    active_pane = reactive("orders")
    menu_index = reactive(0)
    order_index = reactive(0)

    def __init__(
        self,
        session: SessionStore,
        dashboard: SellerDashboard,
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
            with Vertical(id="menu-pane"):
                yield Static("Menu Items", classes="pane-title")
                yield Static("n new  e edit  d delete", classes="pane-help")
                yield Static("Loading menu...", id="menu-list", classes="pane-body")
            with Vertical(id="orders-pane", classes="active-pane"):
                yield Static("All Orders", classes="pane-title")
                yield Static(STATUS_KEYS_HELP, classes="pane-help")
                yield Static(id="orders-list", classes="pane-body")
        yield Footer()

    def on_mount(self) -> None:
        identity = self.session.identity
        self.title = f"{SHOP_NAME} - Seller Panel"
        self.sub_title = f"Welcome, {identity.username}" if identity else ""
        self.dashboard.on_menu_changed = self._refresh_menu
        self.dashboard.on_orders_changed = self._refresh_orders
        self._refresh_all()
        self._load()
        self.dashboard.start_polling(self.set_interval)

    def on_unmount(self) -> None:
        self.dashboard.deactivate()

    @work(exclusive=True, group="load")
    async def _load(self) -> None:
        await self.dashboard.load()
        self._refresh_all()

    def action_cycle_pane(self) -> None:
        self.active_pane = "menu" if self.active_pane == "orders" else "orders"
        self.query_one("#menu-pane").set_class(self.active_pane == "menu", "active-pane")
        self.query_one("#orders-pane").set_class(self.active_pane == "orders", "active-pane")

    def action_move(self, delta: int) -> None:
        if self.active_pane == "menu" and self.dashboard.menu:
            self.menu_index = (self.menu_index + delta) % len(self.dashboard.menu)
        elif self.active_pane == "orders" and self.dashboard.orders:
            self.order_index = (self.order_index + delta) % len(self.dashboard.orders)
        self._refresh_all()

    def action_new_item(self) -> None:
        self.app.push_screen(MenuFormModal(self.dashboard), self._after_form)

    def action_edit_item(self) -> None:
        item = self._selected_item()
        if item is None:
            return
        self.app.push_screen(MenuFormModal(self.dashboard, item), self._after_form)

    def _after_form(self, saved: bool | None) -> None:
        self._refresh_menu()

    def action_delete_item(self) -> None:
        item = self._selected_item()
        if item is None:
            return
        self._delete_item(item)

    @work(exclusive=True, group="delete")
    async def _delete_item(self, item: MenuItem) -> None:
        async def confirm() -> bool:
            return bool(await self.app.push_screen_wait(ConfirmModal(f"Delete '{item.name}'?")))

        await self.dashboard.delete_menu_item(item.id, confirm)

    def action_set_status(self, status_index: int) -> None:
        order = self._selected_order()
        if order is None:
            return
        status = ORDER_STATUSES[status_index]
        if status == order.status:
            return
        self._set_status(order.id, status)

    @work(group="status")
    async def _set_status(self, order_id: str, status: str) -> None:
        await self.dashboard.update_order_status(order_id, status)

    def action_add_seller(self) -> None:
        self.app.push_screen(SellerAccountModal(self.dashboard))

    def action_refresh(self) -> None:
        self._load()

    def action_buyer_view(self) -> None:
        self.navigate(ROUTE_DASHBOARD)

    def action_logout(self) -> None:
        self.logout()

    def _selected_item(self) -> MenuItem | None:
        if self.active_pane != "menu" or not self.dashboard.menu:
            return None
        return self.dashboard.menu[min(self.menu_index, len(self.dashboard.menu) - 1)]

    def _selected_order(self) -> Order | None:
        if self.active_pane != "orders" or not self.dashboard.orders:
            return None
        return self.dashboard.orders[min(self.order_index, len(self.dashboard.orders) - 1)]

    def _visible_lines(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _refresh_all(self) -> None:
        self._refresh_menu()
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
        rows = [format_menu_row(item, show_availability=True) for item in menu]
        selected = self.menu_index if self.active_pane == "menu" else None
        widget.update(render_list(rows, self._visible_lines(widget), selected, "No menu items yet"))

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
        selected = self.order_index if self.active_pane == "orders" else None
        widget.update(render_list(rows, self._visible_lines(widget), selected, "No orders yet"))
