"""Category management — commands and handlers."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from catalogue.category.category import Category
from catalogue.domain import catalogue
from catalogue.queries import scan


@catalogue.command(part_of="Category")
class AddCategory:
    name: String(required=True, max_length=100)
    description: Text()


@catalogue.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    name: String(max_length=100)
    description: Text()


@catalogue.command(part_of="Category")
class RemoveCategory:
    category_id: Identifier(required=True)


def _ensure_name_available(name, exclude_id=None):
    wanted = name.strip().lower()
    for category in scan(Category):
        if category.name.lower() == wanted and str(category.id) != str(exclude_id):
            raise ValidationError({"name": [f"Category '{name.strip()}' already exists"]})


@catalogue.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(AddCategory)
    def add_category(self, command):
        _ensure_name_available(command.name)
        category = Category.create(name=command.name, description=command.description)
        current_domain.repository_for(Category).add(category)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        if command.name:
            _ensure_name_available(command.name, exclude_id=category.id)
        category.update_details(name=command.name, description=command.description)
        repo.add(category)

    @handle(RemoveCategory)
    def remove_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        repo._dao.delete(category)
