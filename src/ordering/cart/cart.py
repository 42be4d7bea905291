"""Shopping Cart aggregate — a session's selection of products before checkout.

Each storefront session owns its own cart. Product name and price are
snapshotted when an item is added, so the price shown in the cart is the
price the order is placed at. Clearing the cart happens only after the order
it became has been stored, and remembers that order.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from ordering.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
)
from ordering.domain import ordering
from ordering.order.pricing import ShippingPolicy, to_cents


@ordering.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@ordering.aggregate
class ShoppingCart:
    session_id = String(max_length=255)
    items = HasMany(CartItem)
    last_order_id = String(max_length=40)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, session_id=None):
        now = datetime.now(UTC)
        return cls(
            session_id=session_id,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def _find_item(self, item_id):
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise ValidationError({"item_id": ["Item not found in cart"]})
        return item

    def add_item(self, product_id, product_name, unit_price, quantity=1):
        """Add a product to the cart, or increase its quantity if already present."""
        existing = next((i for i in self.items if str(i.product_id) == str(product_id)), None)
        now = datetime.now(UTC)

        if existing:
            existing.quantity += quantity
            item_id = str(existing.id)
        else:
            item = CartItem(
                product_id=product_id,
                product_name=product_name,
                unit_price=to_cents(unit_price),
                quantity=quantity,
                added_at=now,
            )
            self.add_items(item)
            item_id = str(item.id)

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=item_id,
                product_id=str(product_id),
                quantity=quantity,
            )
        )
        return item_id

    def update_item_quantity(self, item_id, new_quantity):
        """Set an item's quantity. A quantity below 1 removes the item."""
        item = self._find_item(item_id)
        if new_quantity < 1:
            self.remove_item(item_id)
            return

        previous_quantity = item.quantity
        item.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, item_id):
        item = self._find_item(item_id)
        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                item_id=str(item_id),
            )
        )

    def clear(self, order_id):
        """Empty the cart once ``order_id`` has been stored."""
        for item in list(self.items):
            self.remove_items(item)
        self.last_order_id = order_id
        self.updated_at = datetime.now(UTC)

        self.raise_(CartCleared(cart_id=str(self.id), order_id=order_id))

    # -------------------------------------------------------------------
    # Read helpers
    # -------------------------------------------------------------------
    def line_items(self) -> list[dict]:
        """The cart's contents in the shape order placement accepts."""
        return [
            {
                "product_id": str(item.product_id),
                "product_name": item.product_name,
                "unit_price": item.unit_price,
                "quantity": item.quantity,
            }
            for item in self.items
        ]

    def quote(self, policy=None):
        return (policy or ShippingPolicy.from_env()).quote(self.items)
