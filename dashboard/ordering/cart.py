"""
Order Cart Manager

Holds the draft for one order-entry session:
- Selected table and waiter
- Line items, unique per menu item, quantity >= 1
- Free-text special note

Totals and validity are computed on every read and never stored.
No operation raises; unknown menu item ids are treated as no-ops.
"""

import logging
from dataclasses import replace
from typing import Iterable, List, Optional

from dashboard.ordering.models import DraftSnapshot, MenuItem, OrderLineItem

logger = logging.getLogger(__name__)


class OrderCartManager:
    """In-memory order draft for a single editing session."""

    def __init__(
        self,
        initial_items: Optional[Iterable[OrderLineItem]] = None,
        initial_table: str = "",
        initial_waiter: str = "",
        initial_note: str = "",
    ):
        # Initial values are trusted as-is.
        self._order_items: List[OrderLineItem] = [replace(item) for item in (initial_items or [])]
        self._selected_table = initial_table
        self._selected_waiter = initial_waiter
        self._special_note = initial_note

    # ==========================================================================
    # STATE
    # ==========================================================================

    @property
    def selected_table(self) -> str:
        return self._selected_table

    @property
    def selected_waiter(self) -> str:
        return self._selected_waiter

    @property
    def special_note(self) -> str:
        return self._special_note

    @property
    def order_items(self) -> List[OrderLineItem]:
        """Copies of the current line items, in insertion order."""
        return [replace(item) for item in self._order_items]

    @property
    def total_amount(self) -> float:
        """Sum of price * quantity over all line items."""
        return sum(item.price * item.quantity for item in self._order_items)

    @property
    def is_valid(self) -> bool:
        """True when a table and waiter are selected and there is at least one item."""
        return bool(self._selected_table) and bool(self._selected_waiter) and len(self._order_items) > 0

    # ==========================================================================
    # ACTIONS
    # ==========================================================================

    def set_selected_table(self, value: str) -> None:
        self._selected_table = value

    def set_selected_waiter(self, value: str) -> None:
        self._selected_waiter = value

    def set_special_note(self, value: str) -> None:
        self._special_note = value

    def add_to_order(self, menu_item: MenuItem) -> None:
        """
        Add one unit of a menu item.

        Repeated adds increment the existing line and keep the unit price
        captured on the first add, even if the catalog price has changed.
        """
        existing = self._find(menu_item.id)
        if existing is not None:
            existing.quantity += 1
            logger.debug(f"Incremented {menu_item.id} to {existing.quantity}")
            return

        self._order_items.append(
            OrderLineItem(
                menu_item_id=menu_item.id,
                quantity=1,
                price=menu_item.price,
                special_instructions="",
            )
        )
        logger.debug(f"Added {menu_item.id} at {menu_item.price:.2f}")

    def remove_from_order(self, menu_item_id: str) -> None:
        """Remove one unit; the line is dropped when its quantity reaches zero."""
        existing = self._find(menu_item_id)
        if existing is None:
            return

        if existing.quantity > 1:
            existing.quantity -= 1
        else:
            self._order_items = [
                item for item in self._order_items if item.menu_item_id != menu_item_id
            ]

    def get_item_quantity(self, menu_item_id: str) -> int:
        item = self._find(menu_item_id)
        return item.quantity if item is not None else 0

    def reset_form(self) -> None:
        """
        Clear the draft to its empty state.

        Does not restore the values passed to the constructor.
        """
        self._selected_table = ""
        self._selected_waiter = ""
        self._order_items = []
        self._special_note = ""

    def snapshot(self) -> DraftSnapshot:
        """Detached copy of the draft for submission or display."""
        return DraftSnapshot(
            selected_table=self._selected_table,
            selected_waiter=self._selected_waiter,
            order_items=self.order_items,
            special_note=self._special_note,
            total_amount=self.total_amount,
            is_valid=self.is_valid,
        )

    def _find(self, menu_item_id: str) -> Optional[OrderLineItem]:
        for item in self._order_items:
            if item.menu_item_id == menu_item_id:
                return item
        return None

    def __repr__(self):
        return (
            f"<OrderCartManager table={self._selected_table!r} "
            f"waiter={self._selected_waiter!r} items={len(self._order_items)}>"
        )
