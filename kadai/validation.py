"""Client-side form checks run before any request is sent.

Each validator returns a list of messages; an empty list means the form may be
submitted.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from kadai.cart import Cart
from kadai.constant import (
    EMAIL_PATTERN,
    MIN_CUSTOMER_NAME,
    MIN_CUSTOMER_PHONE,
    MIN_ORDER_DESCRIPTION,
    MIN_PASSWORD,
    MIN_USERNAME,
)
from kadai.models import CheckoutForm, MenuForm

_EMAIL_RE = re.compile(EMAIL_PATTERN)


def validate_checkout(cart: Cart, form: CheckoutForm) -> list[str]:
    if cart.is_empty:
        return ["Your cart is empty"]

    errors = []
    if len(form.customer_name.strip()) < MIN_CUSTOMER_NAME:
        errors.append(f"Name must be at least {MIN_CUSTOMER_NAME} characters")
    if len(form.customer_phone.strip()) < MIN_CUSTOMER_PHONE:
        errors.append(f"Phone must be at least {MIN_CUSTOMER_PHONE} characters")
    if len(form.description.strip()) < MIN_ORDER_DESCRIPTION:
        errors.append(f"Order description must be at least {MIN_ORDER_DESCRIPTION} characters")
    return errors


def validate_account(username: str, email: str, password: str) -> list[str]:
    errors = []
    if len(username.strip()) < MIN_USERNAME:
        errors.append(f"Username must be at least {MIN_USERNAME} characters")
    if not _EMAIL_RE.match(email.strip()):
        errors.append("Please enter a valid email")
    if len(password) < MIN_PASSWORD:
        errors.append(f"Password must be at least {MIN_PASSWORD} characters")
    return errors


def parse_price(raw: str) -> float | None:
    """Parse a typed price; ``None`` when it is not a non-negative number."""
    try:
        value = Decimal(raw.strip())
    except (InvalidOperation, AttributeError):
        return None
    if not value.is_finite() or value < 0:
        return None
    return float(value)


def validate_menu_form(form: MenuForm) -> list[str]:
    errors = []
    if not form.name.strip():
        errors.append("Name is required")
    if parse_price(form.price) is None:
        errors.append("Price must be a non-negative number")
    if not form.category.strip():
        errors.append("Category is required")
    return errors
