"""Category aggregate: the static reference list products are filed under."""

from enum import Enum

from protean.fields import Integer, String

from craftmarket.domain import marketplace


class CategoryType(Enum):
    FOOD = "food"
    CRAFT = "craft"


# Seeded by `manage.py seed-categories`; the application never edits categories.
DEFAULT_CATEGORIES = [
    {"name": "Baked Goods", "type": "food", "icon": "🥖", "display_order": 1},
    {"name": "Pickles & Preserves", "type": "food", "icon": "🫙", "display_order": 2},
    {"name": "Sweets & Desserts", "type": "food", "icon": "🍬", "display_order": 3},
    {"name": "Snacks", "type": "food", "icon": "🥨", "display_order": 4},
    {"name": "Home Meals", "type": "food", "icon": "🍲", "display_order": 5},
    {"name": "Pottery", "type": "craft", "icon": "🏺", "display_order": 6},
    {"name": "Textiles", "type": "craft", "icon": "🧵", "display_order": 7},
    {"name": "Jewelry", "type": "craft", "icon": "💍", "display_order": 8},
    {"name": "Woodwork", "type": "craft", "icon": "🪵", "display_order": 9},
    {"name": "Home Decor", "type": "craft", "icon": "🕯️", "display_order": 10},
]


@marketplace.aggregate
class Category:
    name: String(required=True, max_length=100, unique=True)
    type: String(required=True, choices=CategoryType)
    icon: String(max_length=20)
    display_order: Integer(default=0)
