"""Catalogue mutations that storefront sessions hear about.

Each function runs the admin command and, once ``process`` has returned and
the change is stored, announces it on the change channel. A failed command
publishes nothing.
"""

from protean.utils.globals import current_domain

from catalogue.category.management import AddCategory, RemoveCategory, UpdateCategory
from catalogue.channel import Operation, Topic, get_channel
from catalogue.product.management import AddProduct, RemoveProduct, UpdateProduct


def _process_and_publish(command, topic: Topic, operation: Operation):
    result = current_domain.process(command, asynchronous=False)
    get_channel().publish(topic, operation)
    return result


def add_product(**fields) -> str:
    return _process_and_publish(AddProduct(**fields), Topic.PRODUCTS, Operation.INSERT)


def update_product(product_id: str, **changes) -> None:
    _process_and_publish(UpdateProduct(product_id=product_id, **changes), Topic.PRODUCTS, Operation.UPDATE)


def remove_product(product_id: str) -> None:
    _process_and_publish(RemoveProduct(product_id=product_id), Topic.PRODUCTS, Operation.DELETE)


def add_category(name: str, description: str | None = None) -> str:
    return _process_and_publish(
        AddCategory(name=name, description=description),
        Topic.CATEGORIES,
        Operation.INSERT,
    )


def update_category(category_id: str, name: str | None = None, description: str | None = None) -> None:
    _process_and_publish(
        UpdateCategory(category_id=category_id, name=name, description=description),
        Topic.CATEGORIES,
        Operation.UPDATE,
    )


def remove_category(category_id: str) -> None:
    _process_and_publish(RemoveCategory(category_id=category_id), Topic.CATEGORIES, Operation.DELETE)
