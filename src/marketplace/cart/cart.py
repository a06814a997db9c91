"""CartEntry aggregate: one item a user intends to buy, with a quantity."""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, Integer

from marketplace.domain import marketplace


@marketplace.aggregate
class CartEntry:
    user_id = Identifier(required=True)
    merchant_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def add(cls, user_id, merchant_id, item_id, quantity):
        now = datetime.now(UTC)
        return cls(
            user_id=user_id,
            merchant_id=merchant_id,
            item_id=item_id,
            quantity=quantity,
            created_at=now,
            updated_at=now,
        )

    def change(self, quantity, merchant_id=None, item_id=None):
        self.quantity = quantity
        if merchant_id:
            self.merchant_id = merchant_id
        if item_id:
            self.item_id = item_id
        self.updated_at = datetime.now(UTC)
