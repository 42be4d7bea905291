"""FastAPI endpoints for the Catalogue domain."""

import asyncio
import json

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import StreamingResponse
from protean.utils.globals import current_domain

from catalogue import services
from catalogue.api.schemas import (
    CategoryIdResponse,
    CategoryResponse,
    CreateCategoryRequest,
    CreateProductRequest,
    InquiryLinkResponse,
    ProductIdResponse,
    ProductResponse,
    StatusResponse,
    UpdateCategoryRequest,
    UpdateProductRequest,
)
from catalogue.channel import get_channel
from catalogue.product.product import Product
from catalogue.queries import list_categories, list_products, orphaned_products
from shared.admin_gate import require_admin
from shared.messaging import build_whatsapp_link, store_phone

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])
changes_router = APIRouter(prefix="/catalogue", tags=["catalogue"])

HEARTBEAT_SECONDS = 15.0


# --- Product endpoints ---


@product_router.get("", response_model=list[ProductResponse])
async def get_products(
    category: str | None = None,
    search: str | None = None,
    in_stock: bool | None = None,
) -> list[ProductResponse]:
    products = list_products(category=category, search=search, in_stock=in_stock)
    return [ProductResponse.from_product(product) for product in products]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).get(product_id)
    return ProductResponse.from_product(product)


@product_router.get("/{product_id}/inquiry-link", response_model=InquiryLinkResponse)
async def get_inquiry_link(product_id: str) -> InquiryLinkResponse:
    product = current_domain.repository_for(Product).get(product_id)
    lines = [
        "Hi! I'm interested in this product:",
        "",
        f"*{product.name}*",
        f"Price: ${product.price:.2f}",
    ]
    if product.description:
        lines += ["", product.description]
    lines += ["", "Please let me know about availability and delivery details."]
    return InquiryLinkResponse(url=build_whatsapp_link(store_phone(), lines))


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest, _admin: str = Depends(require_admin)) -> ProductIdResponse:
    result = services.add_product(**body.model_dump())
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}", response_model=StatusResponse)
async def update_product(
    product_id: str,
    body: UpdateProductRequest,
    _admin: str = Depends(require_admin),
) -> StatusResponse:
    services.update_product(product_id, **body.model_dump())
    return StatusResponse()


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str, _admin: str = Depends(require_admin)) -> StatusResponse:
    services.remove_product(product_id)
    return StatusResponse()


# --- Category endpoints ---


@category_router.get("", response_model=list[CategoryResponse])
async def get_categories() -> list[CategoryResponse]:
    return [CategoryResponse.from_category(category) for category in list_categories()]


@category_router.get("/orphaned-products", response_model=list[ProductResponse])
async def get_orphaned_products(_admin: str = Depends(require_admin)) -> list[ProductResponse]:
    return [ProductResponse.from_product(product) for product in orphaned_products()]


@category_router.post("", status_code=201, response_model=CategoryIdResponse)
async def create_category(body: CreateCategoryRequest, _admin: str = Depends(require_admin)) -> CategoryIdResponse:
    result = services.add_category(name=body.name, description=body.description)
    return CategoryIdResponse(category_id=result)


@category_router.put("/{category_id}", response_model=StatusResponse)
async def update_category(
    category_id: str,
    body: UpdateCategoryRequest,
    _admin: str = Depends(require_admin),
) -> StatusResponse:
    services.update_category(category_id, name=body.name, description=body.description)
    return StatusResponse()


@category_router.delete("/{category_id}", response_model=StatusResponse)
async def delete_category(category_id: str, _admin: str = Depends(require_admin)) -> StatusResponse:
    services.remove_category(category_id)
    return StatusResponse()


# --- Change stream ---


def _sse_frame(change) -> str:
    return f"event: {change.topic.value}\ndata: {json.dumps(change.to_dict())}\n\n"


@changes_router.get("/changes")
async def stream_changes(request: Request, topics: list[str] | None = Query(None)) -> StreamingResponse:
    """Server-sent events: one frame per catalogue change, comments as heartbeats."""
    channel = get_channel()
    try:
        subscription = channel.subscribe(topics, loop=asyncio.get_running_loop())
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown topic in {topics}") from None

    async def event_stream():
        try:
            yield ": connected\n\n"
            while not await request.is_disconnected():
                change = await subscription.next_change(HEARTBEAT_SECONDS)
                if change is None:
                    yield ": heartbeat\n\n"
                else:
                    yield _sse_frame(change)
        finally:
            channel.unsubscribe(subscription)

    return StreamingResponse(event_stream(), media_type="text/event-stream")
