"""Read-side queries for the storefront and the admin dashboard."""

from protean.utils.globals import current_domain

from catalogue.category.category import Category
from catalogue.product.product import Product

_PAGE_SIZE = 100


def scan(aggregate_cls, order_by="name"):
    """Yield every stored record of ``aggregate_cls`` a page at a time."""
    dao = current_domain.repository_for(aggregate_cls)._dao
    offset = 0
    while True:
        page = dao.query.order_by(order_by).offset(offset).limit(_PAGE_SIZE).all().items
        yield from page
        if len(page) < _PAGE_SIZE:
            return
        offset += _PAGE_SIZE


def list_categories() -> list[Category]:
    return list(scan(Category))


def list_products(category=None, search=None, in_stock=None) -> list[Product]:
    """Products sorted by name, filtered the way the storefront filters them.

    ``category`` matches the label case-insensitively; ``search`` matches a
    substring of the name or description.
    """
    needle = search.strip().lower() if search else None
    wanted_category = category.strip().lower() if category else None

    products = []
    for product in scan(Product):
        if wanted_category and (product.category or "").lower() != wanted_category:
            continue
        if in_stock is not None and bool(product.in_stock) != in_stock:
            continue
        if needle and needle not in product.name.lower() and needle not in (product.description or "").lower():
            continue
        products.append(product)
    return products


def orphaned_products() -> list[Product]:
    """Products whose category label matches no existing category."""
    known = {category.name.lower() for category in scan(Category)}
    return [product for product in scan(Product) if product.category and product.category.lower() not in known]
