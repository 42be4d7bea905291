"""Outbound read from the Catalogue domain — product snapshots for carts and orders.

Ordering stores a product's name and price at the moment it is added to a
cart or ordered directly; later catalogue edits never change them. The
product is read inside the Catalogue domain's own context.
"""

from dataclasses import dataclass

from catalogue.domain import catalogue
from catalogue.product.product import Product
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain


@dataclass(frozen=True)
class ProductSnapshot:
    product_id: str
    product_name: str
    unit_price: float


def snapshot_product(product_id: str) -> ProductSnapshot:
    """Return the product's current name and price.

    Raises ``ObjectNotFoundError`` for unknown products and ``ValidationError``
    for products that are out of stock.
    """
    with catalogue.domain_context():
        product = current_domain.repository_for(Product).get(product_id)
        if not product.in_stock:
            raise ValidationError({"product_id": [f"{product.name} is out of stock"]})
        return ProductSnapshot(
            product_id=str(product.id),
            product_name=product.name,
            unit_price=product.price,
        )
