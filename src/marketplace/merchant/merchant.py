"""Merchant aggregate with the Location value object."""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String, ValueObject

from marketplace.domain import marketplace
from marketplace.merchant.events import MerchantOpened


@marketplace.value_object(part_of="Merchant")
class Location:
    """Latitude/longitude of a storefront.

    Latitude ranges from -90 to 90, longitude from -180 to 180.
    """

    lat = Float(min_value=-90.0, max_value=90.0)
    lng = Float(min_value=-180.0, max_value=180.0)

    @invariant.post
    def both_coordinates_required(self):
        if self.lat is None or self.lng is None:
            raise ValidationError({"location": ["Latitude dan longitude wajib"]})


@marketplace.aggregate
class Merchant:
    """A seller's storefront, owned by exactly one user for its whole life."""

    name = String(required=True, max_length=255)
    category = String(required=True, max_length=100)
    location = ValueObject(Location, required=True)
    photo_url = String(max_length=1024, default="")
    norek = String(max_length=100, default="")
    user_id = Identifier(required=True)
    created_at = DateTime()

    @classmethod
    def open(cls, user_id, name, category, lat, lng, photo_url="", norek=""):
        now = datetime.now(UTC)
        merchant = cls(
            name=name,
            category=category,
            location=Location(lat=lat, lng=lng),
            photo_url=photo_url or "",
            norek=norek or "",
            user_id=user_id,
            created_at=now,
        )
        merchant.raise_(
            MerchantOpened(
                merchant_id=str(merchant.id),
                user_id=str(user_id),
                name=name,
                category=category,
                lat=lat,
                lng=lng,
                opened_at=now,
            )
        )
        return merchant
