"""Integration tests for ordering, order status, cart, messages and dashboard endpoints."""

from unittest import mock

import pytest
from marketplace.order.order import Order
from marketplace.stock.ledger import StockLedger
from marketplace.stock.stock import Stock
from protean import current_domain
from protean.exceptions import ExpectedVersionError


def _order_form(merchant_id, item_id, quantity="1", **overrides):
    return {
        "merchantId": merchant_id,
        "itemId": item_id,
        "quantity": quantity,
        "deliveryMethod": "pickup",
        "paymentMethod": "cod",
        **overrides,
    }


@pytest.fixture()
def place(client, buyer, merchant, item, auth_header):
    def _place(quantity="1", **overrides):
        return client.post("/api/order", data=_order_form(merchant, item, quantity, **overrides), headers=auth_header(buyer))

    return _place


class TestPlaceOrder:
    def test_selling_out_then_rejecting(self, place, item):
        first = place(quantity="5")

        assert first.status_code == 200
        assert first.json()["message"] == "Pemesanan berhasil"
        order = current_domain.repository_for(Order).get(first.json()["id"])
        assert order.total == 50000.0
        assert current_domain.repository_for(Stock).get(item).quantity == 0

        second = place(quantity="1")
        assert second.status_code == 400
        assert second.json() == {"error": "Stok tidak cukup"}

    def test_delivery_without_address(self, place, item):
        response = place(deliveryMethod="delivery")
        assert response.status_code == 400
        assert current_domain.repository_for(Stock).get(item).quantity == 5

    def test_digital_payment_with_proof(self, client, buyer, merchant, item, auth_header, image_host):
        response = client.post(
            "/api/order",
            data=_order_form(merchant, item, paymentMethod="digital"),
            files={"paymentProof": ("bukti.jpg", b"jpeg-bytes", "image/jpeg")},
            headers=auth_header(buyer),
        )

        assert response.status_code == 200
        order = current_domain.repository_for(Order).get(response.json()["id"])
        assert order.payment_proof == image_host.uploads[0]["url"]
        assert image_host.uploads[0]["folder"] == f"pasarku/payment-proofs/{buyer}"

    def test_digital_payment_without_proof(self, place):
        response = place(paymentMethod="digital")
        assert response.status_code == 400

    def test_unknown_item(self, client, buyer, merchant, auth_header):
        response = client.post("/api/order", data=_order_form(merchant, "no-such-item"), headers=auth_header(buyer))
        assert response.status_code == 404

    def test_lost_stock_race_is_a_conflict(self, place, item):
        conflict = ExpectedVersionError("Stock changed by another writer")
        with mock.patch.object(StockLedger, "decrement", side_effect=conflict):
            response = place(quantity="2")

        assert response.status_code == 409
        assert response.json() == {"error": "Data sedang diubah oleh permintaan lain, silakan coba lagi"}
        assert current_domain.repository_for(Order).find_all_orders() == []
        assert current_domain.repository_for(Stock).get(item).quantity == 5

    def test_buyer_sees_own_orders(self, client, place, buyer, stranger, auth_header):
        order_id = place().json()["id"]

        [listed] = client.get("/api/order", headers=auth_header(buyer)).json()
        assert listed["id"] == order_id
        assert listed["item"] == "Bayam Organik"
        assert listed["status"] == "konfirmasi pembayaran"
        assert client.get("/api/order", headers=auth_header(stranger)).json() == []


class TestOrderStatus:
    @pytest.fixture()
    def order_id(self, place):
        return place().json()["id"]

    def test_json_body(self, client, seller, order_id, auth_header):
        response = client.patch(f"/api/order/{order_id}/status", json={"status": "pending"}, headers=auth_header(seller))
        assert response.status_code == 200
        assert current_domain.repository_for(Order).get(order_id).status == "pending"

    def test_form_body(self, client, seller, order_id, auth_header):
        response = client.patch(f"/api/order/{order_id}/status", data={"status": "canceled"}, headers=auth_header(seller))
        assert response.status_code == 200
        assert current_domain.repository_for(Order).get(order_id).status == "canceled"

    def test_unknown_status(self, client, seller, order_id, auth_header):
        response = client.patch(f"/api/order/{order_id}/status", json={"status": "lost"}, headers=auth_header(seller))
        assert response.status_code == 400

    def test_malformed_json_body(self, client, seller, order_id, auth_header):
        response = client.patch(
            f"/api/order/{order_id}/status",
            content='{"status": ',
            headers={**auth_header(seller), "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Body JSON tidak valid"}
        assert current_domain.repository_for(Order).get(order_id).status == "konfirmasi pembayaran"

    def test_illegal_transition(self, client, seller, order_id, auth_header):
        response = client.patch(f"/api/order/{order_id}/status", json={"status": "completed"}, headers=auth_header(seller))
        assert response.status_code == 409

    def test_buyer_cannot_change_status(self, client, buyer, order_id, auth_header):
        response = client.patch(f"/api/order/{order_id}/status", json={"status": "pending"}, headers=auth_header(buyer))
        assert response.status_code == 403

    def test_unknown_order(self, client, seller, auth_header):
        response = client.patch("/api/order/nope/status", json={"status": "pending"}, headers=auth_header(seller))
        assert response.status_code == 404
        assert response.json() == {"error": "Pesanan tidak ditemukan"}

    def test_merchant_orders(self, client, seller, merchant, order_id, auth_header):
        response = client.get("/api/merchant/orders", params={"merchantId": merchant}, headers=auth_header(seller))
        assert [order["id"] for order in response.json()] == [order_id]


class TestOwnerEndpoints:
    @pytest.fixture()
    def order_id(self, place):
        return place().json()["id"]

    def test_regular_user_is_rejected(self, client, seller, order_id, auth_header):
        response = client.get("/api/owner/orders", headers=auth_header(seller))
        assert response.status_code == 403

    def test_lists_all_orders_with_parties(self, client, platform_owner, order_id, auth_header):
        [order] = client.get("/api/owner/orders", headers=auth_header(platform_owner)).json()
        assert order["id"] == order_id
        assert order["merchant"] == {"name": "Toko Sayur Segar", "category": "sayur"}
        assert order["user"]["name"] == "Andi Pembeli"

    @pytest.mark.parametrize("path", ["/api/owner/orders/{}/status", "/api/owner/order/{}/status"])
    def test_override_skips_transition_graph(self, client, platform_owner, order_id, auth_header, path):
        response = client.patch(path.format(order_id), json={"status": "completed"}, headers=auth_header(platform_owner))
        assert response.status_code == 200
        assert current_domain.repository_for(Order).get(order_id).status == "completed"

    def test_override_by_regular_user(self, client, seller, order_id, auth_header):
        response = client.patch(
            f"/api/owner/orders/{order_id}/status", json={"status": "completed"}, headers=auth_header(seller)
        )
        assert response.status_code == 403
        assert response.json() == {"error": "Hanya pengguna dengan peran owner yang dapat mengubah status pesanan"}


class TestCartEndpoints:
    def test_cart_lifecycle(self, client, buyer, merchant, item, auth_header):
        headers = auth_header(buyer)
        added = client.post("/api/cart", data={"merchantId": merchant, "itemId": item, "quantity": "2"}, headers=headers)
        entry_id = added.json()["id"]

        [entry] = client.get("/api/cart", headers=headers).json()
        assert entry["quantity"] == 2
        assert entry["item"]["name"] == "Bayam Organik"

        assert client.put(f"/api/cart/{entry_id}", data={"quantity": "3"}, headers=headers).status_code == 200
        assert client.get("/api/cart", headers=headers).json()[0]["quantity"] == 3

        assert client.delete(f"/api/cart/{entry_id}", headers=headers).status_code == 200
        assert client.get("/api/cart", headers=headers).json() == []

    def test_more_than_stock(self, client, buyer, merchant, item, auth_header):
        response = client.post(
            "/api/cart", data={"merchantId": merchant, "itemId": item, "quantity": "6"}, headers=auth_header(buyer)
        )
        assert response.status_code == 400

    def test_someone_elses_entry(self, client, buyer, stranger, merchant, item, auth_header):
        added = client.post(
            "/api/cart", data={"merchantId": merchant, "itemId": item, "quantity": "1"}, headers=auth_header(buyer)
        )
        response = client.delete(f"/api/cart/{added.json()['id']}", headers=auth_header(stranger))
        assert response.status_code == 403


class TestMessagesAndDashboard:
    def test_message_reaches_merchant_inbox(self, client, buyer, seller, merchant, auth_header):
        sent = client.post(
            "/api/send-message",
            data={"storeName": merchant, "message": "Apakah bayam masih ada?"},
            headers=auth_header(buyer),
        )
        assert sent.status_code == 200

        [message] = client.get("/api/merchant/messages", params={"merchantId": merchant}, headers=auth_header(seller)).json()
        assert message["message"] == "Apakah bayam masih ada?"
        assert message["status"] == "unread"
        assert message["user"]["name"] == "Andi Pembeli"

    def test_dashboard(self, client, place, seller, merchant, auth_header):
        completed = place(quantity="2").json()["id"]
        place(quantity="1")
        headers = auth_header(seller)
        for status in ("pending", "shipped", "completed"):
            client.patch(f"/api/order/{completed}/status", json={"status": status}, headers=headers)

        body = client.get("/api/dashboard", params={"merchantId": merchant}, headers=headers).json()

        assert body["totalSales"] == 20000.0
        assert body["ordersByStatus"] == {"completed": 1, "konfirmasi pembayaran": 1}
        assert body["topProducts"] == [{"item": "Bayam Organik", "count": 2, "totalQuantity": 3}]
