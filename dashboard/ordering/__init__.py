"""
Order entry: the draft cart, menu filters, catalog and draft sessions.
"""

from dashboard.ordering.cart import OrderCartManager
from dashboard.ordering.catalog import MenuCatalog, get_menu_catalog
from dashboard.ordering.drafts import (
    DraftNotFoundError,
    DraftRegistry,
    InvalidDraftError,
    get_draft_registry,
)
from dashboard.ordering.menu_filters import MenuFilters
from dashboard.ordering.models import DraftSnapshot, MenuItem, OrderLineItem, OrderSubmission

__all__ = [
    "OrderCartManager",
    "MenuCatalog",
    "get_menu_catalog",
    "DraftRegistry",
    "DraftNotFoundError",
    "InvalidDraftError",
    "get_draft_registry",
    "MenuFilters",
    "MenuItem",
    "OrderLineItem",
    "DraftSnapshot",
    "OrderSubmission",
]
