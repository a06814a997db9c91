"""Item aggregate: a product a merchant sells.

The item's available quantity is not stored here; it lives in the Stock
aggregate keyed by the item id (see ``marketplace.stock``).
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, Identifier, String

from marketplace.domain import marketplace
from marketplace.item.events import ItemListed, ItemRevised


@marketplace.aggregate
class Item:
    merchant_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    category = String(required=True, max_length=100)
    base_price = Float(required=True, min_value=0.0)
    photo_url = String(max_length=1024, default="")
    user_id = Identifier(required=True)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, merchant_id, user_id, name, category, base_price, photo_url=""):
        now = datetime.now(UTC)
        item = cls(
            merchant_id=merchant_id,
            name=name,
            category=category,
            base_price=base_price,
            photo_url=photo_url or "",
            user_id=user_id,
            created_at=now,
            updated_at=now,
        )
        item.raise_(
            ItemListed(
                item_id=str(item.id),
                merchant_id=str(merchant_id),
                name=name,
                category=category,
                base_price=base_price,
                listed_at=now,
            )
        )
        return item

    def revise(self, name, category, base_price, photo_url=None):
        """Replace name, category and price; keep the photo unless a new one is given."""
        now = datetime.now(UTC)
        self.name = name
        self.category = category
        self.base_price = base_price
        if photo_url:
            self.photo_url = photo_url
        self.updated_at = now

        self.raise_(
            ItemRevised(
                item_id=str(self.id),
                name=name,
                category=category,
                base_price=base_price,
                revised_at=now,
            )
        )

