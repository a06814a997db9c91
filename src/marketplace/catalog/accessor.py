"""Read-only lookups over merchants, items, stock and users.

Single-record lookups return ``None`` for a missing record instead of
raising, so callers decide which status a missing record maps to.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.account.user import User
from marketplace.item.item import Item
from marketplace.merchant.merchant import Merchant
from marketplace.stock.stock import Stock


class CatalogAccessor:
    def _get(self, aggregate_cls, identifier):
        if not identifier:
            return None
        try:
            return current_domain.repository_for(aggregate_cls).get(str(identifier))
        except ObjectNotFoundError:
            return None

    def _filter(self, aggregate_cls, **criteria):
        query = current_domain.repository_for(aggregate_cls)._dao.query
        if criteria:
            query = query.filter(**criteria)
        return query.limit(None).all().items

    def find_merchant(self, merchant_id) -> Merchant | None:
        return self._get(Merchant, merchant_id)

    def find_item(self, item_id) -> Item | None:
        return self._get(Item, item_id)

    def find_stock(self, item_id) -> Stock | None:
        return self._get(Stock, item_id)

    def find_user(self, user_id) -> User | None:
        return self._get(User, user_id)

    def list_merchants(self, category=None, owner_id=None) -> list[Merchant]:
        criteria = {}
        if category:
            criteria["category"] = category
        if owner_id:
            criteria["user_id"] = str(owner_id)
        return self._filter(Merchant, **criteria)

    def list_items(self, merchant_id, owner_id=None) -> list[Item]:
        criteria = {"merchant_id": str(merchant_id)}
        if owner_id:
            criteria["user_id"] = str(owner_id)
        return self._filter(Item, **criteria)

    def list_stocks(self, merchant_id=None, merchant_ids=None) -> list[Stock]:
        criteria = {}
        if merchant_id:
            criteria["merchant_id"] = str(merchant_id)
        if merchant_ids is not None:
            criteria["merchant_id__in"] = [str(identifier) for identifier in merchant_ids]
        return self._filter(Stock, **criteria)
