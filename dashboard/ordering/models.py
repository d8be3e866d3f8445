"""
Order Entry Domain Models

Plain dataclasses shared by the catalog, the cart and the draft registry.
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, List


@dataclass(frozen=True)
class MenuItem:
    """A catalog entry. Referenced read-only by the cart."""
    id: str
    name: str
    description: str
    category: str
    price: float
    available: bool = True
    preparation_time: int = 0  # minutes

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class OrderLineItem:
    """
    One menu item within a draft.

    ``price`` is the unit price captured when the item was first added,
    so later catalog price changes do not affect the draft.
    """
    menu_item_id: str
    quantity: int
    price: float
    special_instructions: str = ""

    @property
    def line_total(self) -> float:
        """Unit price times quantity."""
        return self.price * self.quantity

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "OrderLineItem":
        """Create from dictionary."""
        return cls(
            menu_item_id=data["menu_item_id"],
            quantity=data["quantity"],
            price=data["price"],
            special_instructions=data.get("special_instructions", ""),
        )


@dataclass(frozen=True)
class DraftSnapshot:
    """Read-only view of a draft handed to submission collaborators."""
    selected_table: str
    selected_waiter: str
    order_items: List[OrderLineItem]
    special_note: str
    total_amount: float
    is_valid: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON responses."""
        return {
            "selected_table": self.selected_table,
            "selected_waiter": self.selected_waiter,
            "order_items": [item.to_dict() for item in self.order_items],
            "special_note": self.special_note,
            "total_amount": self.total_amount,
            "is_valid": self.is_valid,
        }


@dataclass(frozen=True)
class OrderSubmission:
    """A draft that passed validation and was handed off for fulfilment."""
    order_id: str
    draft: DraftSnapshot
    created_at: datetime
    estimated_ready_time: datetime
    status: str = "pending"
