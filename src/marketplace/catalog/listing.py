"""Public catalogue listings: merchants, a merchant's items, stock levels."""

from protean.exceptions import ValidationError

from marketplace.catalog.accessor import CatalogAccessor
from marketplace.shared.errors import AuthorizationError, NotFoundError


def list_merchants(category=None, owned_by=None, accessor=None):
    """``owned_by`` restricts to one user's merchants when given."""
    accessor = accessor or CatalogAccessor()
    return accessor.list_merchants(category=category, owner_id=owned_by)


def list_merchant_items(merchant_id, owned_by=None, accessor=None):
    accessor = accessor or CatalogAccessor()
    if not merchant_id:
        raise ValidationError({"merchant_id": ["merchantId wajib"]})

    merchant = accessor.find_merchant(merchant_id)
    if merchant is None:
        raise NotFoundError("Merchant tidak ditemukan")
    if owned_by and str(merchant.user_id) != str(owned_by):
        raise AuthorizationError("Merchant bukan milik Anda")

    return accessor.list_items(merchant_id, owner_id=owned_by)


def list_stock_levels(merchant_id=None, accessor=None):
    """Stock records as ``(stock, item)``; item is None when it is gone."""
    accessor = accessor or CatalogAccessor()
    return [(stock, accessor.find_item(stock.item_id)) for stock in accessor.list_stocks(merchant_id=merchant_id)]
