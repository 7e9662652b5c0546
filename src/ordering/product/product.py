"""Product aggregate — catalogue entries that orders reference by identifier.

Prices are copied onto order items when an item is added, so later price
changes never alter an existing order.
"""

from enum import Enum

from protean.fields import Float, String, Text

from ordering.domain import ordering


class ProductCategory(Enum):
    SNACK = "Snack"
    SIDE = "Side"
    DRINK = "Drink"
    DESSERT = "Dessert"


@ordering.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = Text()
    category = String(
        required=True,
        choices=ProductCategory,
        max_length=20,
    )
    price = Float(required=True, min_value=0.01)
