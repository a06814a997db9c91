"""Domain events for the Merchant aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Merchant")
class MerchantOpened:
    """A user opened a new storefront."""

    __version__ = "v1"

    merchant_id = Identifier(required=True)
    user_id = Identifier(required=True)
    name = String(required=True)
    category = String(required=True)
    lat = Float(required=True)
    lng = Float(required=True)
    opened_at = DateTime(required=True)
