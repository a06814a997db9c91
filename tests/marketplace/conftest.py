"""Shared fixtures for the marketplace tests.

Factories go through the same entry points the API uses, so every record a
test starts from passed the real validation and ownership checks.
"""

import pytest
from marketplace.account.registration import register
from marketplace.account.user import User
from marketplace.identity.tokens import issue_token
from marketplace.imaging import set_image_host
from marketplace.imaging.fake_adapter import FakeImageHost
from marketplace.imaging.port import ImageUpload
from marketplace.item.management import list_item
from marketplace.merchant.registration import open_merchant
from protean import current_domain


@pytest.fixture()
def image_host():
    host = FakeImageHost()
    set_image_host(host)
    return host


@pytest.fixture()
def photo():
    return ImageUpload(content=b"\x89PNG fake image bytes", filename="photo.png", content_type="image/png")


@pytest.fixture()
def register_user():
    counter = {"n": 0}

    def _register(name="Budi", email=None, password="rahasia123"):
        counter["n"] += 1
        email = email or f"user{counter['n']}@pasarku.test"
        return register(email, password, name, "Jl. Merdeka No. 1, Bandung", "+62 812-3456-7890")

    return _register


@pytest.fixture()
def seller(register_user):
    return register_user(name="Siti Penjual")


@pytest.fixture()
def buyer(register_user):
    return register_user(name="Andi Pembeli")


@pytest.fixture()
def stranger(register_user):
    return register_user(name="Orang Lain")


@pytest.fixture()
def platform_owner(register_user):
    user_id = register_user(name="Admin Pasarku")
    repo = current_domain.repository_for(User)
    user = repo.get(user_id)
    user.grant_owner_role()
    repo.add(user)
    return user_id


@pytest.fixture()
def merchant(seller):
    return open_merchant(seller, "Toko Sayur Segar", "sayur", "-6.9175", "107.6191")


@pytest.fixture()
def make_item(seller, merchant):
    def _make(name="Bayam Organik", base_price="10000", quantity="5", category="sayur", owner=None, merchant_id=None):
        return list_item(owner or seller, merchant_id or merchant, name, category, base_price, quantity)

    return _make


@pytest.fixture()
def item(make_item):
    return make_item()


@pytest.fixture()
def auth_header():
    def _header(user_id):
        return {"Authorization": f"Bearer {issue_token(user_id)}"}

    return _header
