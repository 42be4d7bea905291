"""Category aggregate root for grouping products on the storefront."""

from datetime import datetime

from protean.fields import DateTime, String, Text

from catalogue.domain import catalogue


@catalogue.aggregate
class Category:
    """A named grouping shown as a filter on the storefront.

    Products point at categories by name only, so categories can be renamed
    or removed without touching any product.
    """

    name: String(required=True, max_length=100)
    description: Text()
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def create(cls, name, description=None):
        now = datetime.now()
        return cls(
            name=name.strip(),
            description=description,
            created_at=now,
            updated_at=now,
        )

    def update_details(self, name=None, description=None):
        if name is not None:
            self.name = name.strip()
        if description is not None:
            self.description = description

        self.updated_at = datetime.now()
