"""Application tests for merchant registration, catalogue listings and product search."""

import pytest
from marketplace.catalog.listing import list_merchant_items, list_merchants, list_stock_levels
from marketplace.catalog.search import search_products
from marketplace.merchant.merchant import Merchant
from marketplace.merchant.registration import open_merchant
from marketplace.shared.errors import AuthorizationError, NotFoundError
from protean import current_domain
from protean.exceptions import ValidationError


class TestOpenMerchant:
    def test_opens_merchant(self, seller):
        merchant_id = open_merchant(seller, "Toko Buah", "buah", "-6.9", "107.6", norek="1234567890")

        merchant = current_domain.repository_for(Merchant).get(merchant_id)
        assert merchant.location.lat == -6.9
        assert merchant.norek == "1234567890"
        assert merchant.photo_url == ""

    def test_photo_uploaded_to_root_folder(self, seller, image_host, photo):
        merchant_id = open_merchant(seller, "Toko Buah", "buah", "-6.9", "107.6", photo=photo)
        assert image_host.uploads[0]["folder"] == "pasarku"
        assert current_domain.repository_for(Merchant).get(merchant_id).photo_url == image_host.uploads[0]["url"]

    def test_missing_location(self, seller):
        with pytest.raises(ValidationError) as exc:
            open_merchant(seller, "Toko Buah", "buah", None, "107.6")
        assert exc.value.messages["merchant"] == ["Nama, kategori, dan lokasi wajib"]

    def test_latitude_out_of_range(self, seller):
        with pytest.raises(ValidationError):
            open_merchant(seller, "Toko Buah", "buah", "95", "107.6")


class TestListings:
    def test_merchants_by_category_and_owner(self, seller, stranger, merchant):
        open_merchant(stranger, "Toko Buah", "buah", "-6.9", "107.6")

        assert {m.name for m in list_merchants()} == {"Toko Sayur Segar", "Toko Buah"}
        assert [m.name for m in list_merchants(category="buah")] == ["Toko Buah"]
        assert [m.name for m in list_merchants(owned_by=seller)] == ["Toko Sayur Segar"]

    def test_items_of_merchant(self, merchant, item):
        assert [i.name for i in list_merchant_items(merchant)] == ["Bayam Organik"]

    def test_items_need_merchant_id(self):
        with pytest.raises(ValidationError):
            list_merchant_items(None)

    def test_items_of_unknown_merchant(self):
        with pytest.raises(NotFoundError):
            list_merchant_items("no-such-merchant")

    def test_owned_items_of_someone_elses_merchant(self, stranger, merchant, item):
        with pytest.raises(AuthorizationError) as exc:
            list_merchant_items(merchant, owned_by=stranger)
        assert exc.value.message == "Merchant bukan milik Anda"

    def test_stock_levels_join_items(self, merchant, item):
        [(stock, stock_item)] = list_stock_levels(merchant)
        assert stock.quantity == 5
        assert stock_item.name == "Bayam Organik"


class TestSearch:
    @pytest.fixture()
    def catalogue(self, seller, merchant, make_item):
        buah = open_merchant(seller, "Toko Buah", "buah", "-6.9", "107.6")
        make_item(name="Bayam Organik", base_price="10000")
        make_item(name="Kangkung", base_price="4000")
        make_item(name="Apel Malang", base_price="25000", category="buah", merchant_id=buah)

    def test_unknown_category_is_empty(self, catalogue):
        assert search_products(category="daging") == []

    def test_category_matches_merchant_category(self, catalogue):
        results = search_products(category="buah")
        assert [item.name for _, item, _ in results] == ["Apel Malang"]

    def test_name_is_case_insensitive_substring(self, catalogue):
        results = search_products(name="BAYAM")
        assert [item.name for _, item, _ in results] == ["Bayam Organik"]

    def test_sort_cheapest(self, catalogue):
        results = search_products(sort_by="termurah")
        assert [item.base_price for _, item, _ in results] == [4000.0, 10000.0, 25000.0]

    def test_sort_priciest(self, catalogue):
        results = search_products(sort_by="termahal")
        assert [item.base_price for _, item, _ in results] == [25000.0, 10000.0, 4000.0]

    def test_results_carry_merchant(self, catalogue):
        [(stock, item, merchant)] = search_products(name="apel")
        assert merchant.name == "Toko Buah"
        assert stock.quantity == 5
