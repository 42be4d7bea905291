"""Product aggregate root."""

from datetime import datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, String, Text

from catalogue.domain import catalogue

_EDITABLE_FIELDS = ("name", "price", "category", "in_stock", "image", "description")


@catalogue.aggregate
class Product:
    """Something the store sells, with its current price and availability.

    ``category`` is a free-text label matched against category names; it is
    not a reference, so renaming or deleting a category leaves it untouched.
    """

    name: String(required=True, max_length=255)
    price: Float(required=True, min_value=0.01)
    category: String(max_length=100)
    in_stock: Boolean(default=True)
    image: String(max_length=500)
    description: Text()
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def create(cls, name, price, category=None, in_stock=True, image=None, description=None):
        now = datetime.now()
        return cls(
            name=name.strip(),
            price=round(price, 2),
            category=category.strip() if category else None,
            in_stock=in_stock,
            image=image,
            description=description,
            created_at=now,
            updated_at=now,
        )

    def update(self, **changes):
        """Apply an admin edit. ``None`` values leave a field unchanged."""
        unknown = set(changes) - set(_EDITABLE_FIELDS)
        if unknown:
            raise ValidationError({field: ["Field cannot be edited"] for field in sorted(unknown)})

        for field in _EDITABLE_FIELDS:
            value = changes.get(field)
            if value is None:
                continue
            if field == "price":
                value = round(value, 2)
            elif field in ("name", "category"):
                value = value.strip()
            setattr(self, field, value)

        self.updated_at = datetime.now()
