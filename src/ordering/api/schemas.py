"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands. Checkout fields are deliberately lenient here so
that the domain's checkout validation produces the field-specific errors.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class CustomerDetails(BaseModel):
    full_name: str | None = None
    phone: str | None = None
    city: str | None = None
    address: str | None = None
    email: str | None = None


class OrderItemRequest(BaseModel):
    product_id: str
    quantity: int = 1


class LineItemResponse(BaseModel):
    product_id: str
    product_name: str
    unit_price: float
    quantity: int


# ---------------------------------------------------------------------------
# Cart Schemas
# ---------------------------------------------------------------------------
class CreateCartRequest(BaseModel):
    session_id: str | None = None


class AddCartItemRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int  # below 1 removes the item


class CheckoutRequest(CustomerDetails):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "full_name": "Amina Yusuf",
                    "phone": "+234 801 234 5678",
                    "city": "Lagos",
                    "address": "12 Marina Road, Apt 4",
                    "email": "amina@example.com",
                    "notes": "Call before delivery",
                    "terms_accepted": True,
                    "idempotency_key": "checkout-7f3a9c",
                }
            ]
        }
    }

    notes: str | None = None
    terms_accepted: bool = False
    idempotency_key: str | None = Field(None, max_length=100)

    def customer(self) -> dict:
        return self.model_dump(include=set(CustomerDetails.model_fields))


class CartIdResponse(BaseModel):
    cart_id: str


class CartItemIdResponse(BaseModel):
    item_id: str


class CartItemResponse(LineItemResponse):
    item_id: str
    line_total: float


class CartResponse(BaseModel):
    cart_id: str
    items: list[CartItemResponse]
    subtotal: float
    shipping: float
    total: float
    last_order_id: str | None = None

    @classmethod
    def from_cart(cls, cart) -> "CartResponse":
        quote = cart.quote()
        return cls(
            cart_id=str(cart.id),
            items=[
                CartItemResponse(
                    item_id=str(item.id),
                    product_id=str(item.product_id),
                    product_name=item.product_name,
                    unit_price=item.unit_price,
                    quantity=item.quantity,
                    line_total=round(item.unit_price * item.quantity, 2),
                )
                for item in cart.items
            ],
            subtotal=quote.subtotal,
            shipping=quote.shipping_fee,
            total=quote.total,
            last_order_id=cart.last_order_id,
        )


# ---------------------------------------------------------------------------
# Order Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(CheckoutRequest):
    items: list[OrderItemRequest] = []


class OrderConfirmationResponse(BaseModel):
    order_id: str
    tracking_code: str
    subtotal: float
    shipping: float
    total: float
    status: str
    created_at: datetime
    cart_cleared: bool | None = None

    @classmethod
    def from_confirmation(cls, confirmation, cart_cleared=None) -> "OrderConfirmationResponse":
        return cls(
            order_id=confirmation.order_id,
            tracking_code=confirmation.tracking_code,
            subtotal=confirmation.subtotal,
            shipping=confirmation.shipping_fee,
            total=confirmation.total,
            status=confirmation.status,
            created_at=confirmation.created_at,
            cart_cleared=cart_cleared,
        )


class OrderResponse(BaseModel):
    """The stored order as a flat record."""

    order_id: str
    tracking_code: str
    customer_first_name: str
    customer_last_name: str | None = None
    customer_phone: str
    customer_email: str | None = None
    shipping_city: str
    shipping_address: str
    items: list[LineItemResponse]
    subtotal: float
    shipping: float
    total: float
    status: str
    notes: str | None = None
    created_at: datetime

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        return cls(
            order_id=order.order_id,
            tracking_code=order.tracking_code,
            customer_first_name=order.customer.first_name,
            customer_last_name=order.customer.last_name,
            customer_phone=order.customer.phone,
            customer_email=order.customer.email,
            shipping_city=order.shipping.city,
            shipping_address=order.shipping.address,
            items=[
                LineItemResponse(
                    product_id=str(item.product_id),
                    product_name=item.product_name,
                    unit_price=item.unit_price,
                    quantity=item.quantity,
                )
                for item in order.items
            ],
            subtotal=order.pricing.subtotal,
            shipping=order.pricing.shipping_fee,
            total=order.pricing.total,
            status=order.status,
            notes=order.notes,
            created_at=order.created_at,
        )


class UpdateStatusRequest(BaseModel):
    status: str
    override: bool = False


class StatusChangeResponse(BaseModel):
    order_id: str
    status: str
    changed: bool


class StatusLogEntryResponse(BaseModel):
    previous_status: str | None = None
    new_status: str
    changed_by: str
    override: bool
    occurred_at: datetime


# ---------------------------------------------------------------------------
# Tracking Schemas
# ---------------------------------------------------------------------------
class TrackingEventResponse(BaseModel):
    status: str
    occurred_at: datetime
    description: str


class TrackedOrderResponse(BaseModel):
    order_id: str
    tracking_code: str
    customer_name: str
    shipping_city: str
    items: list[LineItemResponse]
    total: float
    status: str
    created_at: datetime


class TrackingResponse(BaseModel):
    order: TrackedOrderResponse
    history: list[TrackingEventResponse]
    estimated_delivery: datetime

    @classmethod
    def from_result(cls, result) -> "TrackingResponse":
        order = result.order
        return cls(
            order=TrackedOrderResponse(
                order_id=order.order_id,
                tracking_code=order.tracking_code,
                customer_name=order.full_name,
                shipping_city=order.shipping.city,
                items=[
                    LineItemResponse(
                        product_id=str(item.product_id),
                        product_name=item.product_name,
                        unit_price=item.unit_price,
                        quantity=item.quantity,
                    )
                    for item in order.items
                ],
                total=order.pricing.total,
                status=order.status,
                created_at=order.created_at,
            ),
            history=[
                TrackingEventResponse(
                    status=event.status,
                    occurred_at=event.occurred_at,
                    description=event.description,
                )
                for event in result.history
            ],
            estimated_delivery=result.estimated_delivery,
        )


# ---------------------------------------------------------------------------
# Analytics Schemas
# ---------------------------------------------------------------------------
class ProductSalesResponse(BaseModel):
    rank: int
    product_name: str
    total_quantity: int
    total_revenue: float


class CitySalesResponse(BaseModel):
    rank: int
    city: str
    total_orders: int
    total_revenue: float


class AnalyticsResponse(BaseModel):
    total_revenue: float
    total_orders: int
    avg_order_value: float
    top_products: list[ProductSalesResponse]
    status_counts: dict[str, int]
    city_breakdown: list[CitySalesResponse]
