"""Product management — admin commands and handler."""

from protean import handle
from protean.fields import Boolean, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=255)
    price: Float(required=True, min_value=0.01)
    category: String(max_length=100)
    in_stock: Boolean(default=True)
    image: String(max_length=500)
    description: Text()


@catalogue.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    price: Float(min_value=0.01)
    category: String(max_length=100)
    in_stock: Boolean()
    image: String(max_length=500)
    description: Text()


@catalogue.command(part_of="Product")
class RemoveProduct:
    product_id: Identifier(required=True)


@catalogue.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.create(
            name=command.name,
            price=command.price,
            category=command.category,
            in_stock=command.in_stock if command.in_stock is not None else True,
            image=command.image,
            description=command.description,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update(
            name=command.name,
            price=command.price,
            category=command.category,
            in_stock=command.in_stock,
            image=command.image,
            description=command.description,
        )
        repo.add(product)

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)
