"""FastAPI routes for the Ordering domain — carts, orders, tracking and analytics."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from ordering.analytics.aggregator import DEFAULT_TOP_N, compute_snapshot
from ordering.api.schemas import (
    AddCartItemRequest,
    AnalyticsResponse,
    CartIdResponse,
    CartItemIdResponse,
    CartResponse,
    CheckoutRequest,
    CitySalesResponse,
    CreateCartRequest,
    OrderConfirmationResponse,
    OrderResponse,
    PlaceOrderRequest,
    ProductSalesResponse,
    StatusChangeResponse,
    StatusLogEntryResponse,
    TrackingResponse,
    UpdateCartItemRequest,
    UpdateStatusRequest,
)
from ordering.cart.cart import ShoppingCart
from ordering.cart.catalogue_lookup import snapshot_product
from ordering.cart.checkout import checkout_cart
from ordering.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from ordering.cart.management import CreateCart
from ordering.order.fulfillment import UpdateOrderStatus
from ordering.order.order import Order
from ordering.order.placement import place_order
from ordering.projections.order_status_log import entries_for
from ordering.tracking.lookup import OrderNotFound, lookup_order
from shared.admin_gate import require_admin

# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.post("", status_code=201, response_model=CartIdResponse)
async def create_cart(body: CreateCartRequest) -> CartIdResponse:
    result = current_domain.process(CreateCart(session_id=body.session_id), asynchronous=False)
    return CartIdResponse(cart_id=result)


@cart_router.get("/{cart_id}", response_model=CartResponse)
async def get_cart(cart_id: str) -> CartResponse:
    cart = current_domain.repository_for(ShoppingCart).get(cart_id)
    return CartResponse.from_cart(cart)


@cart_router.post("/{cart_id}/items", status_code=201, response_model=CartItemIdResponse)
async def add_cart_item(cart_id: str, body: AddCartItemRequest) -> CartItemIdResponse:
    product = snapshot_product(body.product_id)
    command = AddToCart(
        cart_id=cart_id,
        product_id=product.product_id,
        product_name=product.product_name,
        unit_price=product.unit_price,
        quantity=body.quantity,
    )
    item_id = current_domain.process(command, asynchronous=False)
    return CartItemIdResponse(item_id=item_id)


@cart_router.put("/{cart_id}/items/{item_id}", response_model=CartResponse)
async def update_cart_item(cart_id: str, item_id: str, body: UpdateCartItemRequest) -> CartResponse:
    command = UpdateCartQuantity(
        cart_id=cart_id,
        item_id=item_id,
        new_quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return CartResponse.from_cart(current_domain.repository_for(ShoppingCart).get(cart_id))


@cart_router.delete("/{cart_id}/items/{item_id}", response_model=CartResponse)
async def remove_cart_item(cart_id: str, item_id: str) -> CartResponse:
    current_domain.process(RemoveFromCart(cart_id=cart_id, item_id=item_id), asynchronous=False)
    return CartResponse.from_cart(current_domain.repository_for(ShoppingCart).get(cart_id))


@cart_router.post("/{cart_id}/checkout", status_code=201, response_model=OrderConfirmationResponse)
async def checkout(cart_id: str, body: CheckoutRequest) -> OrderConfirmationResponse:
    result = checkout_cart(
        cart_id,
        customer=body.customer(),
        terms_accepted=body.terms_accepted,
        notes=body.notes,
        idempotency_key=body.idempotency_key,
    )
    return OrderConfirmationResponse.from_confirmation(result.confirmation, cart_cleared=result.cart_cleared)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderConfirmationResponse)
async def create_order(body: PlaceOrderRequest) -> OrderConfirmationResponse:
    """Buy-now checkout of one or more products without a cart."""
    items = []
    for item in body.items:
        product = snapshot_product(item.product_id)
        items.append(
            {
                "product_id": product.product_id,
                "product_name": product.product_name,
                "unit_price": product.unit_price,
                "quantity": item.quantity,
            }
        )

    confirmation = place_order(
        customer=body.customer(),
        items=items,
        terms_accepted=body.terms_accepted,
        notes=body.notes,
        idempotency_key=body.idempotency_key,
    )
    return OrderConfirmationResponse.from_confirmation(confirmation)


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(
    status: str | None = None,
    limit: int = Query(50, ge=1, le=500),
    _admin: str = Depends(require_admin),
) -> list[OrderResponse]:
    orders = current_domain.repository_for(Order).list_recent(limit=limit, status=status)
    return [OrderResponse.from_order(order) for order in orders]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, _admin: str = Depends(require_admin)) -> OrderResponse:
    return OrderResponse.from_order(current_domain.repository_for(Order).get(order_id))


@order_router.put("/{order_id}/status", response_model=StatusChangeResponse)
async def update_order_status(
    order_id: str,
    body: UpdateStatusRequest,
    admin: str = Depends(require_admin),
) -> StatusChangeResponse:
    command = UpdateOrderStatus(
        order_id=order_id,
        status=body.status,
        changed_by=admin,
        override=body.override,
    )
    changed = current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get(order_id)
    return StatusChangeResponse(order_id=order_id, status=order.status, changed=bool(changed))


@order_router.get("/{order_id}/status-log", response_model=list[StatusLogEntryResponse])
async def get_status_log(order_id: str, _admin: str = Depends(require_admin)) -> list[StatusLogEntryResponse]:
    current_domain.repository_for(Order).get(order_id)
    return [
        StatusLogEntryResponse(
            previous_status=entry.previous_status,
            new_status=entry.new_status,
            changed_by=entry.changed_by,
            override=bool(entry.override),
            occurred_at=entry.occurred_at,
        )
        for entry in entries_for(order_id)
    ]


# ---------------------------------------------------------------------------
# Tracking Router
# ---------------------------------------------------------------------------
tracking_router = APIRouter(prefix="/tracking", tags=["tracking"])


@tracking_router.get("/{tracking_code}", response_model=TrackingResponse)
async def track_order(tracking_code: str):
    result = lookup_order(tracking_code)
    if isinstance(result, OrderNotFound):
        return JSONResponse(
            status_code=404,
            content={"error": "No order found with this tracking code. Please check and try again."},
        )
    return TrackingResponse.from_result(result)


# ---------------------------------------------------------------------------
# Analytics Router
# ---------------------------------------------------------------------------
analytics_router = APIRouter(prefix="/analytics", tags=["analytics"])


@analytics_router.get("/summary", response_model=AnalyticsResponse)
async def analytics_summary(
    top: int = Query(DEFAULT_TOP_N, ge=0, le=100),
    since: datetime | None = None,
    until: datetime | None = None,
    _admin: str = Depends(require_admin),
) -> AnalyticsResponse:
    snapshot = compute_snapshot(top_n=top, since=since, until=until)
    return AnalyticsResponse(
        total_revenue=snapshot.total_revenue,
        total_orders=snapshot.total_orders,
        avg_order_value=snapshot.avg_order_value,
        top_products=[
            ProductSalesResponse(
                rank=sales.rank,
                product_name=sales.product_name,
                total_quantity=sales.total_quantity,
                total_revenue=sales.total_revenue,
            )
            for sales in snapshot.top_products
        ],
        status_counts=snapshot.status_counts,
        city_breakdown=[
            CitySalesResponse(
                rank=sales.rank,
                city=sales.city,
                total_orders=sales.total_orders,
                total_revenue=sales.total_revenue,
            )
            for sales in snapshot.city_breakdown
        ],
    )
