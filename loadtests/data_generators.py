"""Faker-based data generators for Locust load test scenarios.

Each generator produces form payloads that pass the API's validation
(EmailAddress VO, PhoneNumber VO, Location ranges) under the camelCase
field names the endpoints expect.
"""

import random
import uuid

from faker import Faker

fake = Faker("id_ID")

CATEGORIES = ["sayur", "buah", "daging", "ikan", "bumbu"]


def valid_email() -> str:
    """Unique emails that pass EmailAddress VO validation."""
    local = fake.user_name()[:20]
    return f"{local}.{uuid.uuid4().hex[:6]}@pasarku.test"


def valid_phone() -> str:
    """Phones matching the PhoneNumber VO regex: ^\\+?[\\d\\s\\-()]+$"""
    return f"+62 812-{random.randint(1000, 9999)}-{random.randint(1000, 9999)}"


def registration_data() -> dict:
    return {
        "email": valid_email(),
        "password": "rahasia123",
        "name": fake.name()[:100],
        "address": fake.address().replace("\n", ", "),
        "phoneNumber": valid_phone(),
    }


def merchant_data(category: str | None = None) -> dict:
    """Storefronts scattered around Bandung."""
    return {
        "name": f"Toko {fake.first_name()} {uuid.uuid4().hex[:4]}",
        "category": category or random.choice(CATEGORIES),
        "lat": f"{random.uniform(-7.0, -6.8):.6f}",
        "lng": f"{random.uniform(107.5, 107.7):.6f}",
        "norek": str(random.randint(10**9, 10**10 - 1)),
    }


def item_data(merchant_id: str, quantity: int | None = None) -> dict:
    return {
        "merchantId": merchant_id,
        "name": f"{fake.word().title()} {uuid.uuid4().hex[:4]}",
        "category": random.choice(CATEGORIES),
        "basePrice": str(random.randrange(1000, 100000, 500)),
        "quantity": str(quantity if quantity is not None else random.randint(10, 200)),
    }


def order_data(merchant_id: str, item_id: str, quantity: int = 1) -> dict:
    """Pickup/cod orders, or delivery with an address; never digital (needs a file)."""
    payload = {
        "merchantId": merchant_id,
        "itemId": item_id,
        "quantity": str(quantity),
        "paymentMethod": "cod",
    }
    if random.random() < 0.5:
        payload["deliveryMethod"] = "delivery"
        payload["address"] = fake.address().replace("\n", ", ")
    else:
        payload["deliveryMethod"] = "pickup"
    return payload


def message_text() -> str:
    return fake.sentence(nb_words=8)
