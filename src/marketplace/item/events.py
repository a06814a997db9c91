"""Domain events for the Item aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Item")
class ItemListed:
    """A merchant put a new item on sale."""

    __version__ = "v1"

    item_id = Identifier(required=True)
    merchant_id = Identifier(required=True)
    name = String(required=True)
    category = String(required=True)
    base_price = Float(required=True)
    listed_at = DateTime(required=True)


@marketplace.event(part_of="Item")
class ItemRevised:
    __version__ = "v1"

    item_id = Identifier(required=True)
    name = String(required=True)
    category = String(required=True)
    base_price = Float(required=True)
    revised_at = DateTime(required=True)

