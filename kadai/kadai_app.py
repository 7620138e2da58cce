"""Main Textual app class."""

from __future__ import annotations

import logging

from textual.app import App
from textual.screen import Screen

from kadai.api import ApiClient
from kadai.auth_screens import LoadingScreen, LoginScreen, RegisterScreen
from kadai.buyer import BuyerDashboard
from kadai.buyer_screen import BuyerScreen
from kadai.config import Settings, get_settings
from kadai.constant import MSG_PAGE_FORBIDDEN, SHOP_NAME
from kadai.guard import (
    DECISION_PLACEHOLDER,
    DECISION_REDIRECT,
    ROUTE_DASHBOARD,
    ROUTE_LOGIN,
    ROUTE_REGISTER,
    ROUTE_SELLER,
    home_route,
    resolve_route,
)
from kadai.persistence import TokenStore
from kadai.seller import SellerDashboard
from kadai.seller_screen import SellerScreen
from kadai.session import SessionStore

logger = logging.getLogger(__name__)


class KadaiApp(App):
    """Terminal ordering client for the idli kadai stall."""

    TITLE = SHOP_NAME
    SUB_TITLE = "Order / Track / Manage"

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        settings: Settings | None = None,
        client: ApiClient | None = None,
        storage: TokenStore | None = None,
    ) -> None:
        super().__init__()
        self.settings = settings or get_settings()
        self.client = client or ApiClient(self.settings.api_base_url)
        self.client.notify = self._notify_from_api
        self.session = SessionStore(self.client, storage or TokenStore(self.settings.db_path))
        self.session.add_forced_logout_listener(self._on_forced_logout)
        self.current_route: str | None = None

    def _notify_from_api(self, message: str, severity: str) -> None:
        self.notify(message, severity=severity)

    def on_mount(self) -> None:
        self.push_screen(LoadingScreen())
        self._start()

    async def on_unmount(self) -> None:
        await self.client.aclose()

    def _start(self) -> None:
        self.run_worker(self._initialize_session(), exclusive=True, group="session")

    async def _initialize_session(self) -> None:
        await self.session.initialize()
        self.navigate(home_route(self.session) if self.session.is_authenticated else ROUTE_LOGIN)

    def navigate(self, route: str) -> None:
        """Show ``route`` if the guard allows it, following redirects."""
        decision = resolve_route(self.session, route)
        while decision.kind == DECISION_REDIRECT:
            logger.debug("redirect from=%s to=%s", route, decision.route)
            if decision.denied:
                self.notify(MSG_PAGE_FORBIDDEN, severity="error")
            route = decision.route
            decision = resolve_route(self.session, route)

        if decision.kind == DECISION_PLACEHOLDER:
            screen: Screen = LoadingScreen()
        else:
            screen = self._build_screen(route)

        # Modals belong to the view being left.
        while len(self.screen_stack) > 2:
            self.pop_screen()
        self.switch_screen(screen)
        self.current_route = route
        logger.info("navigate route=%s", route)

    def _build_screen(self, route: str) -> Screen:
        if route == ROUTE_LOGIN:
            return LoginScreen(self.session, self.navigate)
        if route == ROUTE_REGISTER:
            return RegisterScreen(self.session, self.navigate)
        if route == ROUTE_SELLER:
            dashboard = SellerDashboard(
                self.client, self._notify_from_api, poll_seconds=self.settings.order_poll_seconds
            )
            return SellerScreen(self.session, dashboard, self.navigate, self.logout)
        if route == ROUTE_DASHBOARD:
            return BuyerScreen(self.session, BuyerDashboard(self.client, self._notify_from_api), self.navigate, self.logout)
        raise ValueError(f"unknown route: {route}")

    def logout(self) -> None:
        self.session.logout()
        self.notify("Logged out")
        self.navigate(ROUTE_LOGIN)

    def _on_forced_logout(self) -> None:
        self.navigate(ROUTE_LOGIN)
