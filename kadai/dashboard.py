"""Shared state and fetch logic for the buyer and seller dashboards."""

from __future__ import annotations

import logging
from typing import Callable

from kadai.api import ApiClient, Notifier
from kadai.errors import ApiError, ValidationFailed
from kadai.models import MenuItem, Order

logger = logging.getLogger(__name__)


class Dashboard:
    """Owns the fetched menu and order lists for one mounted view.

    Once ``deactivate`` is called (the view went away), late responses are
    dropped instead of being written into the lists.
    """

    def __init__(self, client: ApiClient, notify: Notifier) -> None:
        self.client = client
        self.notify = notify
        self.menu: list[MenuItem] = []
        self.orders: list[Order] = []
        self.menu_loading = False
        self.active = True
        self.on_menu_changed: Callable[[], None] | None = None
        self.on_orders_changed: Callable[[], None] | None = None

    def deactivate(self) -> None:
        self.active = False

    def _visible_menu(self, items: list[MenuItem]) -> list[MenuItem]:
        return items

    async def load(self) -> None:
        await self.refresh_menu()
        await self.refresh_orders()

    async def refresh_menu(self) -> bool:
        self.menu_loading = True
        try:
            items = await self.client.fetch_menu()
        except ApiError as exc:
            self.report(exc, "Failed to load menu items")
            return False
        finally:
            self.menu_loading = False

        if not self.active:
            logger.debug("menu_response_discarded view=%s", type(self).__name__)
            return False
        self.menu = self._visible_menu(items)
        if self.on_menu_changed is not None:
            self.on_menu_changed()
        return True

    async def refresh_orders(self) -> bool:
        try:
            orders = await self.client.fetch_orders()
        except ApiError as exc:
            self.report(exc, "Failed to load orders")
            return False

        if not self.active:
            logger.debug("orders_response_discarded view=%s", type(self).__name__)
            return False
        self.orders = orders
        if self.on_orders_changed is not None:
            self.on_orders_changed()
        return True

    def report(self, exc: ApiError, fallback: str) -> None:
        """Surface a failure the API client did not already announce."""
        logger.info("%s: %s", fallback, exc)
        if not self.active or not isinstance(exc, ValidationFailed):
            return
        for message in exc.messages or [fallback]:
            self.notify(message, "error")

    def report_messages(self, messages: list[str]) -> None:
        for message in messages:
            self.notify(message, "error")
