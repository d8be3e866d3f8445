"""
Menu search and category filtering for the order-entry screen.
"""

from typing import List, Sequence

from dashboard.ordering.models import MenuItem

ALL_CATEGORIES = "all"


class MenuFilters:
    """Search query plus category selection over a fixed list of menu items."""

    def __init__(self, menu_items: Sequence[MenuItem]):
        self.menu_items = list(menu_items)
        self.search_query = ""
        self.selected_category = ALL_CATEGORIES

    @property
    def categories(self) -> List[str]:
        """``"all"`` followed by each distinct category in first-seen order."""
        seen = dict.fromkeys(item.category for item in self.menu_items)
        return [ALL_CATEGORIES, *seen]

    @property
    def filtered_items(self) -> List[MenuItem]:
        query = self.search_query.lower()
        return [
            item
            for item in self.menu_items
            if (query in item.name.lower() or query in item.description.lower())
            and (self.selected_category == ALL_CATEGORIES or item.category == self.selected_category)
        ]

    def set_search_query(self, value: str) -> None:
        self.search_query = value

    def set_selected_category(self, value: str) -> None:
        self.selected_category = value

    def reset_filters(self) -> None:
        self.search_query = ""
        self.selected_category = ALL_CATEGORIES
