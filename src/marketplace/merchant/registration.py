"""Merchant registration: command, handler and the upload-aware entry point."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.imaging import get_image_host
from marketplace.merchant.merchant import Merchant
from marketplace.shared.parsing import is_blank, parse_float
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

MERCHANT_PHOTO_FOLDER = "pasarku"


@marketplace.command(part_of="Merchant")
class OpenMerchant:
    user_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    category = String(required=True, max_length=100)
    lat = Float(required=True)
    lng = Float(required=True)
    photo_url = String(max_length=1024)
    norek = String(max_length=100)


@marketplace.command_handler(part_of=Merchant)
class OpenMerchantHandler:
    @handle(OpenMerchant)
    def open_merchant(self, command):
        merchant = Merchant.open(
            user_id=command.user_id,
            name=command.name,
            category=command.category,
            lat=command.lat,
            lng=command.lng,
            photo_url=command.photo_url,
            norek=command.norek,
        )
        current_domain.repository_for(Merchant).add(merchant)
        logger.info("merchant_opened", merchant_id=str(merchant.id), user_id=str(command.user_id))
        return str(merchant.id)


def open_merchant(user_id, name, category, lat, lng, norek=None, photo=None):
    """Validate the raw request, upload the photo if any, then open the merchant."""
    if is_blank(name, category, lat, lng):
        raise ValidationError({"merchant": ["Nama, kategori, dan lokasi wajib"]})

    lat = parse_float(lat, "lat", "Lokasi tidak valid")
    lng = parse_float(lng, "lng", "Lokasi tidak valid")

    photo_url = ""
    if photo is not None:
        photo_url = get_image_host().upload(photo, MERCHANT_PHOTO_FOLDER)

    command = OpenMerchant(
        user_id=user_id,
        name=name,
        category=category,
        lat=lat,
        lng=lng,
        photo_url=photo_url,
        norek=norek or "",
    )
    return current_domain.process(command, asynchronous=False)
