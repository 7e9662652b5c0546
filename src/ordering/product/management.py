"""Product catalogue management — command and handler."""

from protean import handle
from protean.fields import Float, String, Text
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.product.product import Product


@ordering.command(part_of="Product")
class AddProduct:
    name = String(required=True, max_length=255)
    description = Text()
    category = String(required=True, max_length=20)
    price = Float(required=True, min_value=0.01)


@ordering.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product(
            name=command.name,
            description=command.description,
            category=command.category,
            price=command.price,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product added", product_id=str(product.id), category=product.category)
        return str(product.id)
