"""Route guard: which screen a session may see."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

ROUTE_LOGIN = "login"
ROUTE_REGISTER = "register"
ROUTE_DASHBOARD = "dashboard"
ROUTE_SELLER = "seller"

PUBLIC_ROUTES = frozenset({ROUTE_LOGIN, ROUTE_REGISTER})
SELLER_ROUTES = frozenset({ROUTE_SELLER})

DECISION_PLACEHOLDER = "placeholder"
DECISION_REDIRECT = "redirect"
DECISION_RENDER = "render"


class SessionView(Protocol):
    loading: bool

    @property
    def is_authenticated(self) -> bool: ...

    @property
    def is_seller(self) -> bool: ...


@dataclass(frozen=True)
class RouteDecision:
    kind: str
    route: str
    # Set when the redirect is a missing capability, not a missing session.
    denied: bool = False


def home_route(session: SessionView) -> str:
    """Entry point for the session's role."""
    return ROUTE_SELLER if session.is_seller else ROUTE_DASHBOARD


def resolve_route(session: SessionView, route: str) -> RouteDecision:
    if session.loading:
        return RouteDecision(DECISION_PLACEHOLDER, route)

    if route in PUBLIC_ROUTES:
        if session.is_authenticated:
            return RouteDecision(DECISION_REDIRECT, home_route(session))
        return RouteDecision(DECISION_RENDER, route)

    if not session.is_authenticated:
        return RouteDecision(DECISION_REDIRECT, ROUTE_LOGIN)

    if route in SELLER_ROUTES and not session.is_seller:
        return RouteDecision(DECISION_REDIRECT, ROUTE_DASHBOARD, denied=True)

    return RouteDecision(DECISION_RENDER, route)
