"""Domain models for the ordering client."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

from kadai.constant import ROLE_BUYER, ROLE_SELLER, STATUS_PENDING


def to_decimal(value: Any) -> Decimal:
    """Convert a JSON number (or numeric string) to Decimal without float noise."""
    if isinstance(value, Decimal):
        return value
    if value is None or value == "":
        return Decimal("0")
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"not a number: {value!r}") from exc


def _record_id(data: dict[str, Any]) -> str:
    raw = data.get("id", data.get("_id"))
    return "" if raw is None else str(raw)


@dataclass(frozen=True)
class Identity:
    """The authenticated user."""

    user_id: str
    username: str
    role: str

    @property
    def is_seller(self) -> bool:
        return self.role == ROLE_SELLER

    @property
    def is_buyer(self) -> bool:
        return self.role == ROLE_BUYER

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Identity:
        return cls(
            user_id=_record_id(data),
            username=str(data.get("username", "")),
            role=str(data.get("role", ROLE_BUYER)),
        )


@dataclass(frozen=True)
class MenuItem:
    """A menu entry as served by the API."""

    id: str
    name: str
    price: Decimal
    description: str = ""
    category: str = ""
    available: bool = True
    image_url: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> MenuItem:
        return cls(
            id=_record_id(data),
            name=str(data.get("name", "")),
            price=to_decimal(data.get("price")),
            description=str(data.get("description") or ""),
            category=str(data.get("category") or ""),
            available=bool(data.get("available", True)),
            image_url=data.get("image_url") or None,
        )


@dataclass
class CartLine:
    """One distinct menu item and its quantity inside the cart."""

    menu_item_id: str
    name: str
    price: Decimal
    quantity: int = 1

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity

    def to_payload(self) -> dict[str, Any]:
        return {
            "menu_item_id": self.menu_item_id,
            "name": self.name,
            "price": float(self.price),
            "quantity": self.quantity,
        }

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> CartLine:
        return cls(
            menu_item_id=str(data.get("menu_item_id", data.get("id", ""))),
            name=str(data.get("name", "")),
            price=to_decimal(data.get("price")),
            quantity=int(data.get("quantity", 1)),
        )


@dataclass(frozen=True)
class Order:
    """A submitted order."""

    id: str
    total: Decimal
    status: str = STATUS_PENDING
    items: tuple[CartLine, ...] = field(default_factory=tuple)
    customer_name: str = ""
    customer_phone: str = ""
    description: str = ""
    created_at: str | None = None

    @property
    def short_id(self) -> str:
        if not self.id:
            return "N/A"
        return self.id[-6:].upper()

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Order:
        return cls(
            id=_record_id(data),
            total=to_decimal(data.get("total")),
            status=str(data.get("status") or STATUS_PENDING),
            items=tuple(CartLine.from_api(item) for item in data.get("items") or []),
            customer_name=str(data.get("customer_name") or ""),
            customer_phone=str(data.get("customer_phone") or ""),
            # Older orders only carry customer_address.
            description=str(data.get("description") or data.get("customer_address") or ""),
            created_at=data.get("created_at"),
        )


@dataclass
class CheckoutForm:
    """Customer fields entered at checkout."""

    customer_name: str = ""
    customer_phone: str = ""
    description: str = ""


@dataclass
class MenuForm:
    """Seller-side menu item form values, as typed."""

    name: str = ""
    description: str = ""
    price: str = ""
    category: str = ""
    available: bool = True
    image_url: str = ""
    image_path: str = ""

    @classmethod
    def from_item(cls, item: MenuItem) -> MenuForm:
        return cls(
            name=item.name,
            description=item.description,
            price=str(item.price),
            category=item.category,
            available=item.available,
            image_url=item.image_url or "",
        )


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a login or registration attempt."""

    success: bool
    error: str | None = None
    errors: tuple[str, ...] = ()
    data: dict[str, Any] | None = None
