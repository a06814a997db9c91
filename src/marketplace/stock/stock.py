"""Stock aggregate: available quantity of one item, keyed by the item id."""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer

from marketplace.domain import marketplace
from marketplace.stock.events import StockDecremented, StockLevelSet

INSUFFICIENT_STOCK = "Stok tidak cukup"


@marketplace.aggregate
class Stock:
    item_id = Identifier(identifier=True)
    merchant_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=0)
    user_id = Identifier(required=True)
    updated_at = DateTime()

    def can_fulfil(self, quantity):
        return self.quantity >= quantity

    def set_quantity(self, quantity, merchant_id=None, user_id=None):
        now = datetime.now(UTC)
        self.quantity = quantity
        if merchant_id:
            self.merchant_id = merchant_id
        if user_id:
            self.user_id = user_id
        self.updated_at = now

        self.raise_(
            StockLevelSet(
                item_id=str(self.item_id),
                merchant_id=str(self.merchant_id),
                quantity=quantity,
                set_at=now,
            )
        )

    def decrement(self, quantity, order_id=None):
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity harus berupa angka positif"]})
        if not self.can_fulfil(quantity):
            raise ValidationError({"quantity": [INSUFFICIENT_STOCK]})

        now = datetime.now(UTC)
        self.quantity -= quantity
        self.updated_at = now

        self.raise_(
            StockDecremented(
                item_id=str(self.item_id),
                order_id=str(order_id) if order_id else None,
                quantity=quantity,
                remaining=self.quantity,
                decremented_at=now,
            )
        )
