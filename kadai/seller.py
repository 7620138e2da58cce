"""Seller dashboard controller: menu CRUD, order status, seller accounts, polling."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Protocol

from kadai.api import ApiClient, Notifier
from kadai.config import ORDER_POLL_SECONDS
from kadai.constant import ORDER_STATUSES
from kadai.dashboard import Dashboard
from kadai.errors import ApiError
from kadai.models import MenuForm
from kadai.validation import parse_price, validate_account, validate_menu_form

logger = logging.getLogger(__name__)


class Stoppable(Protocol):
    def stop(self) -> Any: ...


Scheduler = Callable[[float, Callable[[], Awaitable[bool]]], Stoppable]


class SellerDashboard(Dashboard):
    def __init__(
        self,
        client: ApiClient,
        notify: Notifier,
        poll_seconds: float = ORDER_POLL_SECONDS,
    ) -> None:
        super().__init__(client, notify)
        self.poll_seconds = poll_seconds
        self.saving = False
        self._poll_handle: Stoppable | None = None

    @property
    def polling(self) -> bool:
        return self._poll_handle is not None

    def start_polling(self, schedule: Scheduler) -> None:
        """Re-fetch orders every ``poll_seconds`` until ``stop_polling``."""
        if self._poll_handle is not None:
            return
        self._poll_handle = schedule(self.poll_seconds, self.refresh_orders)
        logger.info("order_polling_started every=%ss", self.poll_seconds)

    def stop_polling(self) -> None:
        if self._poll_handle is None:
            return
        self._poll_handle.stop()
        self._poll_handle = None
        logger.info("order_polling_stopped")

    def deactivate(self) -> None:
        self.stop_polling()
        super().deactivate()

    async def save_menu_item(self, form: MenuForm, editing_id: str | None = None) -> bool:
        errors = validate_menu_form(form)
        if errors:
            self.report_messages(errors)
            return False

        fields = {
            "name": form.name.strip(),
            "description": form.description.strip(),
            "price": parse_price(form.price),
            "category": form.category.strip(),
            "available": bool(form.available),
            "image_url": form.image_url.strip() or None,
        }
        self.saving = True
        try:
            await self.client.save_menu_item(fields, item_id=editing_id, image_path=form.image_path.strip() or None)
        except OSError as exc:
            self.report_messages([f"Could not read image: {exc}"])
            return False
        except ApiError as exc:
            self.report(exc, "Failed to save menu item")
            return False
        finally:
            self.saving = False

        self.notify("Menu item updated successfully!" if editing_id else "Menu item added successfully!", "information")
        await self.refresh_menu()
        return True

    async def delete_menu_item(self, item_id: str, confirm: Callable[[], Awaitable[bool]]) -> bool:
        if not await confirm():
            return False

        try:
            await self.client.delete_menu_item(item_id)
        except ApiError as exc:
            self.report(exc, "Failed to delete menu item")
            return False

        self.notify("Menu item deleted successfully!", "information")
        await self.refresh_menu()
        return True

    async def update_order_status(self, order_id: str, status: str) -> bool:
        if status not in ORDER_STATUSES:
            self.report_messages([f"Unknown order status: {status}"])
            return False

        try:
            await self.client.update_order_status(order_id, status)
        except ApiError as exc:
            self.report(exc, "Failed to update order status")
            return False

        logger.info("order_status order=%s status=%s", order_id, status)
        self.notify(f"Order status updated to {status}", "information")
        await self.refresh_orders()
        return True

    async def create_seller(self, username: str, email: str, password: str) -> bool:
        errors = validate_account(username, email, password)
        if errors:
            self.report_messages(errors)
            return False

        try:
            await self.client.create_seller(username.strip(), email.strip().lower(), password)
        except ApiError as exc:
            self.report(exc, "Failed to create seller")
            return False

        self.notify("New seller created successfully!", "information")
        return True
