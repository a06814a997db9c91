"""Domain events for the Order aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Order")
class OrderPlaced:
    """A buyer placed an order and the item's stock was decremented."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    merchant_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True)
    total = Float(required=True)
    delivery_method = String(required=True)
    payment_method = String(required=True)
    placed_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderStatusChanged:
    __version__ = "v1"

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    status = String(required=True)
    changed_by = Identifier(required=True)
    by_platform_owner = Boolean(default=False)
    changed_at = DateTime(required=True)
