"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the domain's validation rules
(required checkout fields, phone shape, positive prices) and match the exact
field names expected by the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

CATEGORY_NAMES = ["Electronics", "Kitchen", "Home Decor", "Fashion", "Beauty", "Toys", "Garden"]

# ---------- Catalogue Domain ----------


def category_name() -> str:
    """Generate a category name unique enough to avoid duplicate-name rejections."""
    return f"{fake.word().capitalize()} {uuid.uuid4().hex[:6]}"[:100]


def product_data(category: str | None = None) -> dict:
    """Generate CreateProductRequest payload matching schema field names."""
    word = fake.word().capitalize()
    return {
        "name": f"{word} {fake.word().capitalize()}"[:255],
        "price": round(random.uniform(2.99, 149.99), 2),
        "category": category or random.choice(CATEGORY_NAMES),
        "in_stock": True,
        "image": f"/images/{uuid.uuid4().hex}.jpg",
        "description": fake.paragraph(nb_sentences=2),
    }


def product_update_data() -> dict:
    """Generate an UpdateProductRequest that touches one or two fields."""
    return random.choice(
        [
            {"price": round(random.uniform(2.99, 149.99), 2)},
            {"description": fake.sentence()},
            {"price": round(random.uniform(2.99, 149.99), 2), "name": fake.word().capitalize()},
        ]
    )


def search_term() -> str:
    return fake.word()[:3]


# ---------- Ordering Domain ----------


def valid_phone() -> str:
    """Generate phones matching the checkout rule: digits, spaces, hyphens, parens, optional +."""
    return f"+{random.randint(1, 299)} {random.randint(200, 999)} {random.randint(100, 999)} {random.randint(1000, 9999)}"


def customer_data() -> dict:
    """Generate the customer half of a CheckoutRequest."""
    payload = {
        "full_name": fake.name()[:200],
        "phone": valid_phone(),
        "city": fake.city()[:100],
        "address": fake.street_address(),
    }
    if random.random() < 0.6:
        payload["email"] = fake.email()
    return payload


def checkout_data(idempotency_key: str | None = None) -> dict:
    """Generate CheckoutRequest payload with terms accepted."""
    payload = {
        **customer_data(),
        "terms_accepted": True,
        "idempotency_key": idempotency_key or f"chk-{uuid.uuid4().hex}",
    }
    if random.random() < 0.3:
        payload["notes"] = fake.sentence()
    return payload


def invalid_checkout_data() -> dict:
    """Generate a checkout that fails one validation rule."""
    payload = checkout_data()
    broken = random.choice(["phone", "terms_accepted", "city"])
    if broken == "phone":
        payload["phone"] = "12-34"
    elif broken == "terms_accepted":
        payload["terms_accepted"] = False
    else:
        payload["city"] = ""
    return payload


def order_data(product_ids: list[str]) -> dict:
    """Generate a buy-now PlaceOrderRequest for the given products."""
    return {
        **checkout_data(),
        "items": [{"product_id": product_id, "quantity": random.randint(1, 3)} for product_id in product_ids],
    }


def unknown_tracking_code() -> str:
    return f"TRACK-{random.randint(0, 999999):06d}-{uuid.uuid4().hex[:6].upper()}"
