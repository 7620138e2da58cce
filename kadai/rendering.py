"""Rendering helpers for menu, cart and order panes."""

from __future__ import annotations

from decimal import Decimal

from rich.text import Text

from kadai.cart import Cart
from kadai.constant import CURRENCY_PREFIX, STATUS_STYLES, UNKNOWN_STATUS_STYLE
from kadai.models import MenuItem, Order


def status_style(status: str) -> str:
    """Return a consistent badge style for an order status."""
    return STATUS_STYLES.get(status, UNKNOWN_STATUS_STYLE)


def format_money(amount: Decimal) -> str:
    return f"{CURRENCY_PREFIX} {amount:.2f}"


def window_bounds(heights: list[int], budget: int, selected: int | None) -> tuple[int, int]:
    """Slice of a list to show so that the selected row stays visible.

    ``heights`` holds the number of lines each row takes; the slice grows
    around the selected row (the first row when nothing is selected) while
    its lines still fit in ``budget``. The selected row is always included.
    """
    total = len(heights)
    if total <= 0:
        return (0, 0)

    budget = max(1, budget)
    if sum(heights) <= budget:
        return (0, total)

    anchor = 0 if selected is None else min(max(selected, 0), total - 1)
    start, end = anchor, anchor + 1
    used = heights[anchor]
    while True:
        grew = False
        if start > 0 and used + heights[start - 1] <= budget:
            start -= 1
            used += heights[start]
            grew = True
        if end < total and used + heights[end] <= budget:
            used += heights[end]
            end += 1
            grew = True
        if not grew:
            return (start, end)


def format_status_badge(status: str) -> Text:
    text = Text()
    text.append(f" {status.upper()} ", style=status_style(status))
    return text


def format_menu_row(item: MenuItem, show_availability: bool = False) -> Text:
    text = Text()
    text.append(item.name, style="bold")
    text.append(f"  {format_money(item.price)}")
    if item.category:
        text.append(f"  [{item.category}]", style="dim")
    if show_availability and not item.available:
        text.append("  unavailable", style="bold #f44336")
    if item.description:
        text.append(f"\n      {item.description}", style="dim")
    return text


def format_cart(cart: Cart, selected: int | None) -> Text:
    if cart.is_empty:
        return Text("Your cart is empty")

    lines = Text()
    for idx, line in enumerate(cart):
        if idx > 0:
            lines.append("\n")
        pointer = "➤ " if idx == selected else "  "
        lines.append(pointer)
        lines.append(f"{line.name}  {format_money(line.price)}  x{line.quantity}")
    lines.append("\n\n")
    lines.append(f"Total: {format_money(cart.total())}", style="bold")
    return lines


def format_order_label(order: Order) -> Text:
    """Order id, status badge and total on one line."""
    text = Text()
    text.append(f"Order #{order.short_id} ")
    text.append_text(format_status_badge(order.status))
    text.append(f"  {format_money(order.total)}")
    return text


def format_order_details(order: Order) -> Text:
    text = Text()
    for line in order.items:
        text.append(f"\n      {line.name} x {line.quantity} - {format_money(line.subtotal)}", style="dim")
    if order.customer_name:
        text.append(f"\n      Customer: {order.customer_name}")
        if order.customer_phone:
            text.append(f"  Phone: {order.customer_phone}")
    if order.description:
        text.append(f"\n      Order Description: {order.description}")
    text.append(f"\n      {order.created_at or 'Date not available'}", style="dim")
    return text


def render_list(
    rows: list[Text],
    visible_lines: int,
    selected: int | None,
    empty: str,
) -> Text:
    """Join pre-rendered rows into one windowed block with a selection pointer."""
    if not rows:
        return Text(empty)

    heights = [row.plain.count("\n") + 1 for row in rows]
    if sum(heights) > visible_lines:
        # Leave room for the two overflow markers.
        visible_lines -= 2
    start, end = window_bounds(heights, visible_lines, selected)
    lines = Text()
    if start > 0:
        lines.append("⋮\n", style="dim")

    for idx in range(start, end):
        if idx > start:
            lines.append("\n")
        pointer = "➤ " if idx == selected else "  "
        lines.append(pointer)
        lines.append_text(rows[idx])

    if end < len(rows):
        lines.append("\n⋮", style="dim")
    return lines
