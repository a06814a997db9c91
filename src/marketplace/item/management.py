"""Item listing, revision and removal.

Creating an item initialises its stock record and deleting an item removes
it, both inside the same unit of work as the item write.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from marketplace.catalog.accessor import CatalogAccessor
from marketplace.domain import marketplace
from marketplace.imaging import get_image_host
from marketplace.item.item import Item
from marketplace.shared.errors import NotFoundError
from marketplace.shared.ownership import assert_owns_item, assert_owns_merchant
from marketplace.shared.parsing import is_blank, parse_float, parse_int
from marketplace.stock.ledger import StockLedger
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

ITEM_PHOTO_FOLDER = "pasarku/items"
ITEM_NOT_FOUND = "Barang tidak ditemukan"
EDIT_FORBIDDEN = "Anda tidak memiliki akses untuk mengedit barang ini"
DELETE_FORBIDDEN = "Anda tidak memiliki akses untuk menghapus barang ini"


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
@marketplace.command(part_of="Item")
class ListItem:
    user_id = Identifier(required=True)
    merchant_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    category = String(required=True, max_length=100)
    base_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=0)
    photo_url = String(max_length=1024)


@marketplace.command(part_of="Item")
class ReviseItem:
    item_id = Identifier(required=True)
    user_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    category = String(required=True, max_length=100)
    base_price = Float(required=True, min_value=0.0)
    photo_url = String(max_length=1024)


@marketplace.command(part_of="Item")
class DelistItem:
    item_id = Identifier(required=True)
    user_id = Identifier(required=True)


# ---------------------------------------------------------------------------
# Handler
# ---------------------------------------------------------------------------
def _owned_item(item_id, user_id, message) -> Item:
    item = CatalogAccessor().find_item(item_id)
    if item is None:
        raise NotFoundError(ITEM_NOT_FOUND)
    assert_owns_item(item, user_id, message)
    return item


@marketplace.command_handler(part_of=Item)
class ItemManagementHandler:
    @handle(ListItem)
    def list_item(self, command):
        merchant = CatalogAccessor().find_merchant(command.merchant_id)
        assert_owns_merchant(merchant, command.user_id)

        item = Item.create(
            merchant_id=command.merchant_id,
            user_id=command.user_id,
            name=command.name,
            category=command.category,
            base_price=command.base_price,
            photo_url=command.photo_url,
        )
        current_domain.repository_for(Item).add(item)
        StockLedger().initialize(item.id, command.merchant_id, command.quantity, command.user_id)

        logger.info("item_listed", item_id=str(item.id), merchant_id=str(command.merchant_id))
        return str(item.id)

    @handle(ReviseItem)
    def revise_item(self, command):
        item = _owned_item(command.item_id, command.user_id, EDIT_FORBIDDEN)
        item.revise(
            name=command.name,
            category=command.category,
            base_price=command.base_price,
            photo_url=command.photo_url,
        )
        current_domain.repository_for(Item).add(item)

        logger.info("item_revised", item_id=str(item.id))
        return str(item.id)

    @handle(DelistItem)
    def delist_item(self, command):
        item = _owned_item(command.item_id, command.user_id, DELETE_FORBIDDEN)
        StockLedger().remove(item.id)
        current_domain.repository_for(Item)._dao.delete(item)

        logger.info("item_delisted", item_id=str(item.id))
        return str(item.id)


# ---------------------------------------------------------------------------
# Entry points used by the API
# ---------------------------------------------------------------------------
def _parse_price(base_price):
    return parse_float(base_price, "base_price", "Harga harus berupa angka non-negatif", minimum=0)


def list_item(user_id, merchant_id, name, category, base_price, quantity, photo=None):
    if is_blank(merchant_id, name, category, base_price, quantity):
        raise ValidationError({"item": ["Data barang tidak lengkap, termasuk stok awal (quantity)"]})

    quantity = parse_int(quantity, "quantity", "Stok awal harus berupa angka positif", minimum=0)
    base_price = _parse_price(base_price)

    merchant = CatalogAccessor().find_merchant(merchant_id)
    assert_owns_merchant(merchant, user_id)

    photo_url = ""
    if photo is not None:
        photo_url = get_image_host().upload(photo, ITEM_PHOTO_FOLDER)

    command = ListItem(
        user_id=user_id,
        merchant_id=merchant_id,
        name=name,
        category=category,
        base_price=base_price,
        quantity=quantity,
        photo_url=photo_url,
    )
    return current_domain.process(command, asynchronous=False)


def revise_item(item_id, user_id, name, category, base_price, photo=None):
    """Existence and ownership are checked before the payload is looked at."""
    _owned_item(item_id, user_id, EDIT_FORBIDDEN)

    if is_blank(name, category, base_price):
        raise ValidationError({"item": ["Data barang tidak lengkap"]})
    base_price = _parse_price(base_price)

    photo_url = None
    if photo is not None:
        photo_url = get_image_host().upload(photo, ITEM_PHOTO_FOLDER)

    command = ReviseItem(
        item_id=item_id,
        user_id=user_id,
        name=name,
        category=category,
        base_price=base_price,
        photo_url=photo_url,
    )
    return current_domain.process(command, asynchronous=False)


def delist_item(item_id, user_id):
    return current_domain.process(DelistItem(item_id=item_id, user_id=user_id), asynchronous=False)
