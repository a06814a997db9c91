from marketplace.domain import marketplace
from marketplace.order.order import Order


@marketplace.repository(part_of=Order)
class OrderRepository:
    """Order lookups, newest first."""

    def find_for_buyer(self, user_id) -> list[Order]:
        return self._dao.query.filter(user_id=str(user_id)).order_by("-created_at").limit(None).all().items

    def find_for_merchant(self, merchant_id) -> list[Order]:
        return self._dao.query.filter(merchant_id=str(merchant_id)).order_by("-created_at").limit(None).all().items

    def find_all_orders(self) -> list[Order]:
        return self._dao.query.order_by("-created_at").limit(None).all().items
