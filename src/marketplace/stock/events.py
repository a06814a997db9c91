"""Domain events for the Stock aggregate."""

from protean.fields import DateTime, Identifier, Integer

from marketplace.domain import marketplace


@marketplace.event(part_of="Stock")
class StockLevelSet:
    """Quantity was initialised or overwritten by the merchant owner."""

    __version__ = "v1"

    item_id = Identifier(required=True)
    merchant_id = Identifier(required=True)
    quantity = Integer(required=True)
    set_at = DateTime(required=True)


@marketplace.event(part_of="Stock")
class StockDecremented:
    """Quantity dropped because an order was placed."""

    __version__ = "v1"

    item_id = Identifier(required=True)
    order_id = Identifier()
    quantity = Integer(required=True)
    remaining = Integer(required=True)
    decremented_at = DateTime(required=True)
