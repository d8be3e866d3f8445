"""
In-memory Menu Catalog

Read-only source of menu items for the order-entry screen. Items are
looked up by id when added to a draft; the cart copies the price at
that moment and never writes back to the catalog.
"""

import logging
from functools import lru_cache
from typing import Dict, Iterable, List, Optional

from dashboard.ordering.models import MenuItem

logger = logging.getLogger(__name__)


SAMPLE_MENU: List[dict] = [
    {"id": "1", "name": "Caesar Salad", "description": "Fresh romaine lettuce with parmesan cheese and croutons", "price": 12.99, "category": "appetizer", "preparation_time": 10},
    {"id": "2", "name": "Grilled Salmon", "description": "Atlantic salmon with lemon herb butter and seasonal vegetables", "price": 24.99, "category": "main", "preparation_time": 20},
    {"id": "3", "name": "Chocolate Cake", "description": "Rich chocolate cake with vanilla ice cream", "price": 8.99, "category": "dessert", "preparation_time": 5},
    {"id": "4", "name": "House Wine", "description": "Red or white wine selection", "price": 7.99, "category": "beverage", "preparation_time": 2},
    {"id": "5", "name": "Buffalo Wings", "description": "Crispy chicken wings with spicy buffalo sauce and blue cheese dip", "price": 14.99, "category": "appetizer", "preparation_time": 15},
    {"id": "6", "name": "Bruschetta", "description": "Toasted bread with fresh tomatoes, basil, and mozzarella", "price": 9.99, "category": "appetizer", "preparation_time": 8},
    {"id": "7", "name": "Calamari Rings", "description": "Golden fried squid rings with marinara sauce", "price": 13.99, "category": "appetizer", "preparation_time": 12},
    {"id": "8", "name": "Ribeye Steak", "description": "12oz prime ribeye with garlic mashed potatoes and asparagus", "price": 32.99, "category": "main", "preparation_time": 25},
    {"id": "9", "name": "Chicken Parmesan", "description": "Breaded chicken breast with marinara sauce and melted mozzarella", "price": 19.99, "category": "main", "preparation_time": 18},
    {"id": "10", "name": "Vegetarian Pasta", "description": "Penne pasta with roasted vegetables in olive oil and herbs", "price": 16.99, "category": "main", "preparation_time": 15},
    {"id": "11", "name": "Fish Tacos", "description": "Three soft tacos with grilled fish, cabbage slaw, and lime crema", "price": 17.99, "category": "main", "preparation_time": 16},
    {"id": "12", "name": "BBQ Ribs", "description": "Half rack of baby back ribs with coleslaw and fries", "price": 26.99, "category": "main", "preparation_time": 30},
    {"id": "13", "name": "Tiramisu", "description": "Classic Italian dessert with coffee-soaked ladyfingers and mascarpone", "price": 9.99, "category": "dessert", "preparation_time": 3},
    {"id": "14", "name": "Crème Brûlée", "description": "Vanilla custard with caramelized sugar crust", "price": 8.99, "category": "dessert", "preparation_time": 5},
    {"id": "15", "name": "Apple Pie", "description": "Homemade apple pie with cinnamon and vanilla ice cream", "price": 7.99, "category": "dessert", "preparation_time": 4},
    {"id": "16", "name": "Craft Beer", "description": "Local IPA or Lager selection", "price": 6.99, "category": "beverage", "preparation_time": 1},
    {"id": "17", "name": "Fresh Lemonade", "description": "House-made lemonade with fresh lemons", "price": 4.99, "category": "beverage", "preparation_time": 2},
    {"id": "18", "name": "Espresso", "description": "Double shot of premium espresso", "price": 3.99, "category": "beverage", "preparation_time": 3},
    {"id": "19", "name": "Cocktail Special", "description": "Chef's signature cocktail of the day", "price": 12.99, "category": "beverage", "preparation_time": 5},
]


class MenuCatalog:
    """Menu items indexed by id."""

    def __init__(self, items: Iterable[MenuItem]):
        self.items: List[MenuItem] = list(items)
        self.by_id: Dict[str, MenuItem] = {item.id: item for item in self.items}

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "MenuCatalog":
        return cls(MenuItem(**record) for record in records)

    def get(self, item_id: str) -> Optional[MenuItem]:
        return self.by_id.get(item_id)

    def list_items(self, include_unavailable: bool = False) -> List[MenuItem]:
        if include_unavailable:
            return list(self.items)
        return [item for item in self.items if item.available]

    def categories(self) -> List[str]:
        return list(dict.fromkeys(item.category for item in self.items))


@lru_cache()
def get_menu_catalog() -> MenuCatalog:
    """Get the shared catalog seeded with the sample menu."""
    catalog = MenuCatalog.from_records(SAMPLE_MENU)
    logger.info(f"Menu catalog loaded: {len(catalog.items)} items")
    return catalog
