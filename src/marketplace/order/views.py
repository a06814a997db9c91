"""Read-side order listings for buyers, merchant owners and platform owners."""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from marketplace.catalog.accessor import CatalogAccessor
from marketplace.order.order import Order
from marketplace.shared.ownership import assert_owns_merchant, assert_platform_owner


def owned_merchant(user_id, merchant_id, accessor=None):
    """Resolve a ``merchantId`` query parameter the caller must own."""
    if not merchant_id:
        raise ValidationError({"merchant_id": ["merchantId wajib"]})
    accessor = accessor or CatalogAccessor()
    merchant = accessor.find_merchant(merchant_id)
    assert_owns_merchant(merchant, user_id)
    return merchant


def buyer_orders(user_id) -> list[Order]:
    return current_domain.repository_for(Order).find_for_buyer(user_id)


def merchant_orders(user_id, merchant_id) -> list[Order]:
    owned_merchant(user_id, merchant_id)
    return current_domain.repository_for(Order).find_for_merchant(merchant_id)


def all_orders(user_id, accessor=None):
    """Every order as ``(order, merchant, buyer)``; platform owners only."""
    accessor = accessor or CatalogAccessor()
    assert_platform_owner(accessor.find_user(user_id))

    orders = current_domain.repository_for(Order).find_all_orders()
    return [(order, accessor.find_merchant(order.merchant_id), accessor.find_user(order.user_id)) for order in orders]
