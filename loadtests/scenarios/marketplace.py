"""Pasarku load test scenarios.

Two stateful SequentialTaskSet journeys (a seller stocking a storefront and
a shopper browsing, carting and ordering) plus a contention scenario where
every user orders from the same small stock.
"""

import random

import requests
from locust import HttpUser, SequentialTaskSet, between, events, task

from loadtests.data_generators import (
    item_data,
    merchant_data,
    message_text,
    order_data,
    registration_data,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ContentionTarget, SellerState, ShopperState

CONTENTION_STOCK = 50


def _sign_up(client, state):
    """Register and log in, filling ``state`` with the uid and token."""
    payload = registration_data()
    with client.post("/api/register", data=payload, catch_response=True, name="POST /api/register") as resp:
        if resp.status_code != 200:
            resp.failure(f"Register failed: {resp.status_code} - {extract_error_detail(resp)}")
            return False
        state.uid = resp.json()["uid"]

    credentials = {"email": payload["email"], "password": payload["password"]}
    with client.post("/api/login", data=credentials, catch_response=True, name="POST /api/login") as resp:
        if resp.status_code != 200:
            resp.failure(f"Login failed: {resp.status_code} - {extract_error_detail(resp)}")
            return False
        state.token = resp.json()["token"]
    return True


class SellerJourney(SequentialTaskSet):
    """Register -> Open Merchant -> List Items -> Restock -> Check Orders -> Dashboard."""

    def on_start(self):
        self.state = SellerState()
        if not _sign_up(self.client, self.state):
            self.interrupt()

    @task
    def open_merchant(self):
        with self.client.post(
            "/api/merchant",
            data=merchant_data(),
            headers=self.state.headers,
            catch_response=True,
            name="POST /api/merchant",
        ) as resp:
            if resp.status_code == 200:
                self.state.merchant_id = resp.json()["id"]
            else:
                resp.failure(f"Open merchant failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def list_items(self):
        for _ in range(random.randint(2, 5)):
            with self.client.post(
                "/api/item",
                data=item_data(self.state.merchant_id),
                headers=self.state.headers,
                catch_response=True,
                name="POST /api/item",
            ) as resp:
                if resp.status_code == 200:
                    self.state.item_ids.append(resp.json()["id"])
                else:
                    resp.failure(f"List item failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def restock(self):
        if not self.state.item_ids:
            return
        with self.client.post(
            "/api/stock",
            data={
                "itemId": random.choice(self.state.item_ids),
                "merchantId": self.state.merchant_id,
                "quantity": str(random.randint(50, 500)),
            },
            headers=self.state.headers,
            catch_response=True,
            name="POST /api/stock",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Restock failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def check_orders(self):
        self.client.get(
            "/api/merchant/orders",
            params={"merchantId": self.state.merchant_id},
            headers=self.state.headers,
            name="GET /api/merchant/orders",
        )

    @task
    def dashboard(self):
        self.client.get(
            "/api/dashboard",
            params={"merchantId": self.state.merchant_id},
            headers=self.state.headers,
            name="GET /api/dashboard",
        )
        self.interrupt()


class ShopperJourney(SequentialTaskSet):
    """Register -> Search -> Add to Cart -> Order -> Message Merchant -> Order History."""

    def on_start(self):
        self.state = ShopperState()
        self.product = None
        if not _sign_up(self.client, self.state):
            self.interrupt()

    @task
    def search(self):
        params = {"sortBy": random.choice(["termurah", "termahal"])}
        with self.client.get(
            "/api/product/search", params=params, catch_response=True, name="GET /api/product/search"
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Search failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()
                return
            in_stock = [product for product in resp.json() if product["quantity"] > 0 and product["item"]]
            if not in_stock:
                resp.success()
                self.interrupt()
                return
            self.product = random.choice(in_stock)

    @task
    def add_to_cart(self):
        with self.client.post(
            "/api/cart",
            data={"merchantId": self.product["merchantId"], "itemId": self.product["itemId"], "quantity": "1"},
            headers=self.state.headers,
            catch_response=True,
            name="POST /api/cart",
        ) as resp:
            if resp.status_code == 200:
                self.state.cart_entry_ids.append(resp.json()["id"])
            elif resp.status_code == 400:
                # Sold out between search and cart
                resp.success()
            else:
                resp.failure(f"Add to cart failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def place_order(self):
        with self.client.post(
            "/api/order",
            data=order_data(self.product["merchantId"], self.product["itemId"]),
            headers=self.state.headers,
            catch_response=True,
            name="POST /api/order",
        ) as resp:
            if resp.status_code == 200:
                self.state.order_ids.append(resp.json()["id"])
            elif resp.status_code == 400:
                resp.success()
            else:
                resp.failure(f"Order failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def message_merchant(self):
        self.client.post(
            "/api/send-message",
            data={"merchantId": self.product["merchantId"], "message": message_text()},
            headers=self.state.headers,
            name="POST /api/send-message",
        )

    @task
    def order_history(self):
        self.client.get("/api/order", headers=self.state.headers, name="GET /api/order")
        self.interrupt()


class SellerUser(HttpUser):
    wait_time = between(1.0, 3.0)
    weight = 1
    tasks = [SellerJourney]


class ShopperUser(HttpUser):
    wait_time = between(0.5, 2.0)
    weight = 4
    tasks = [ShopperJourney]


# --- Stock contention ---

TARGET = ContentionTarget()


@events.test_start.add_listener
def seed_contention_target(environment, **_kwargs):
    """Create one seller, merchant and item with a small stock before users spawn."""
    if StockContentionUser not in environment.user_classes or not environment.host:
        return

    session = requests.Session()
    payload = registration_data()
    session.post(f"{environment.host}/api/register", data=payload, timeout=10).raise_for_status()
    token = session.post(
        f"{environment.host}/api/login",
        data={"email": payload["email"], "password": payload["password"]},
        timeout=10,
    ).json()["token"]
    headers = {"Authorization": f"Bearer {token}"}

    merchant = session.post(f"{environment.host}/api/merchant", data=merchant_data("sayur"), headers=headers, timeout=10)
    merchant.raise_for_status()
    TARGET.merchant_id = merchant.json()["id"]

    item = session.post(
        f"{environment.host}/api/item",
        data=item_data(TARGET.merchant_id, quantity=CONTENTION_STOCK),
        headers=headers,
        timeout=10,
    )
    item.raise_for_status()
    TARGET.item_id = item.json()["id"]
    TARGET.initial_quantity = CONTENTION_STOCK
    print(f"[LOADTEST] Contention target item {TARGET.item_id} with stock {CONTENTION_STOCK}")


class StockContentionUser(HttpUser):
    """Every user hammers one item until its stock runs out.

    Successful orders must never exceed the initial stock; ``GET /api/stock``
    must never report a negative quantity.
    """

    wait_time = between(0.05, 0.2)

    def on_start(self):
        self.state = ShopperState()
        _sign_up(self.client, self.state)

    @task(5)
    def order_one(self):
        if not TARGET.item_id or not self.state.token:
            return
        with self.client.post(
            "/api/order",
            data={
                "merchantId": TARGET.merchant_id,
                "itemId": TARGET.item_id,
                "quantity": "1",
                "deliveryMethod": "pickup",
                "paymentMethod": "cod",
            },
            headers=self.state.headers,
            catch_response=True,
            name="POST /api/order",
        ) as resp:
            if resp.status_code == 200:
                self.state.order_ids.append(resp.json()["id"])
            elif resp.status_code in (400, 409):
                # Sold out or lost the race: expected under contention
                resp.success()
            else:
                resp.failure(f"Order failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task(1)
    def check_stock(self):
        if not TARGET.merchant_id:
            return
        with self.client.get(
            "/api/stock",
            params={"merchantId": TARGET.merchant_id},
            catch_response=True,
            name="GET /api/stock",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Stock check failed: {resp.status_code} - {extract_error_detail(resp)}")
            elif any(level["quantity"] < 0 for level in resp.json()):
                resp.failure("Stock went negative")
