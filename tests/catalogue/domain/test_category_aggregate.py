import pytest
from catalogue.category.category import Category
from protean.exceptions import ValidationError


class TestCategory:
    def test_create(self):
        category = Category.create(name=" Kitchen ", description="Pots and pans")
        assert category.name == "Kitchen"
        assert category._events == []

    def test_name_required(self):
        with pytest.raises(ValidationError):
            Category(description="No name")

    def test_rename(self):
        category = Category.create(name="Kitchen")
        category.update_details(name=" Kitchenware ")
        assert category.name == "Kitchenware"
        assert category._events == []

    def test_description_only(self):
        category = Category.create(name="Kitchen")
        category.update_details(description="Everything for cooking")
        assert category.name == "Kitchen"
        assert category.description == "Everything for cooking"
