"""Ownership guard applied before every mutation of an owned resource.

Merchants, items, stock and cart entries record the id of the user who owns
them; the acting user must match it.
"""

from marketplace.shared.errors import AuthorizationError


def _assert_owner(owner_id, actor_id, message):
    if owner_id is None or str(owner_id) != str(actor_id):
        raise AuthorizationError(message)


def assert_owns_merchant(merchant, actor_id, message="Merchant tidak ditemukan atau bukan milik Anda"):
    """A missing merchant is reported the same way as someone else's."""
    _assert_owner(merchant.user_id if merchant is not None else None, actor_id, message)


def assert_owns_item(item, actor_id, message="Anda tidak memiliki akses untuk mengelola barang ini"):
    _assert_owner(item.user_id, actor_id, message)


def assert_owns_cart_entry(entry, actor_id, message="Anda tidak memiliki akses untuk mengubah item keranjang ini"):
    _assert_owner(entry.user_id, actor_id, message)


def assert_platform_owner(user, message="Hanya pengguna dengan peran owner yang dapat mengakses data ini"):
    if user is None or not user.is_platform_owner:
        raise AuthorizationError(message)
