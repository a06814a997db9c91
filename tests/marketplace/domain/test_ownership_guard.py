"""Tests for the ownership guard."""

from types import SimpleNamespace

import pytest
from marketplace.shared.errors import AuthorizationError
from marketplace.shared.ownership import (
    assert_owns_cart_entry,
    assert_owns_item,
    assert_owns_merchant,
    assert_platform_owner,
)


def _owned_by(user_id):
    return SimpleNamespace(user_id=user_id)


class TestOwnership:
    @pytest.mark.parametrize("guard", [assert_owns_merchant, assert_owns_item, assert_owns_cart_entry])
    def test_owner_passes(self, guard):
        guard(_owned_by("user-001"), "user-001")

    @pytest.mark.parametrize("guard", [assert_owns_merchant, assert_owns_item, assert_owns_cart_entry])
    def test_other_user_is_forbidden(self, guard):
        with pytest.raises(AuthorizationError) as exc:
            guard(_owned_by("user-001"), "user-002")
        assert exc.value.status_code == 403

    def test_missing_merchant_is_forbidden(self):
        with pytest.raises(AuthorizationError) as exc:
            assert_owns_merchant(None, "user-001")
        assert exc.value.message == "Merchant tidak ditemukan atau bukan milik Anda"

    def test_custom_message(self):
        with pytest.raises(AuthorizationError) as exc:
            assert_owns_item(_owned_by("user-001"), "user-002", "Anda tidak memiliki akses untuk mengelola stok ini")
        assert exc.value.message == "Anda tidak memiliki akses untuk mengelola stok ini"


class TestPlatformOwner:
    def test_owner_role_passes(self):
        assert_platform_owner(SimpleNamespace(is_platform_owner=True))

    @pytest.mark.parametrize("user", [None, SimpleNamespace(is_platform_owner=False)])
    def test_others_are_forbidden(self, user):
        with pytest.raises(AuthorizationError):
            assert_platform_owner(user)
