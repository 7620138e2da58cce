"""Buyer cart: one line per menu item, quantities merged on repeat adds."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterator

from kadai.models import CartLine, MenuItem


class Cart:
    def __init__(self) -> None:
        self._lines: list[CartLine] = []

    def __iter__(self) -> Iterator[CartLine]:
        return iter(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def line_for(self, menu_item_id: str) -> CartLine | None:
        for line in self._lines:
            if line.menu_item_id == menu_item_id:
                return line
        return None

    def add(self, item: MenuItem) -> CartLine:
        line = self.line_for(item.id)
        if line is not None:
            line.quantity += 1
            return line

        line = CartLine(menu_item_id=item.id, name=item.name, price=item.price, quantity=1)
        self._lines.append(line)
        return line

    def set_quantity(self, menu_item_id: str, quantity: int) -> None:
        if quantity <= 0:
            self.remove(menu_item_id)
            return

        line = self.line_for(menu_item_id)
        if line is not None:
            line.quantity = int(quantity)

    def increment(self, menu_item_id: str) -> None:
        line = self.line_for(menu_item_id)
        if line is not None:
            self.set_quantity(menu_item_id, line.quantity + 1)

    def decrement(self, menu_item_id: str) -> None:
        line = self.line_for(menu_item_id)
        if line is not None:
            self.set_quantity(menu_item_id, line.quantity - 1)

    def remove(self, menu_item_id: str) -> None:
        self._lines = [line for line in self._lines if line.menu_item_id != menu_item_id]

    def total(self) -> Decimal:
        return sum((line.subtotal for line in self._lines), Decimal("0"))

    def clear(self) -> None:
        self._lines.clear()
