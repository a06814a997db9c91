"""Cart entry commands: add, update and remove.

Adding or updating checks that the item exists, belongs to the merchant and
that its stock covers the quantity. Stock is not reserved.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from marketplace.cart.cart import CartEntry
from marketplace.catalog.accessor import CatalogAccessor
from marketplace.domain import marketplace
from marketplace.shared.errors import NotFoundError
from marketplace.shared.ownership import assert_owns_cart_entry
from marketplace.shared.parsing import is_blank, parse_int
from marketplace.stock.ledger import StockLedger
from marketplace.stock.stock import INSUFFICIENT_STOCK
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

POSITIVE_QUANTITY = "Quantity harus berupa angka positif"
ITEM_NOT_LINKED = "Barang tidak ditemukan atau tidak terkait dengan merchant"


@marketplace.command(part_of="CartEntry")
class AddToCart:
    user_id = Identifier(required=True)
    merchant_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@marketplace.command(part_of="CartEntry")
class UpdateCartEntry:
    entry_id = Identifier(required=True)
    user_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    merchant_id = Identifier()
    item_id = Identifier()


@marketplace.command(part_of="CartEntry")
class RemoveCartEntry:
    entry_id = Identifier(required=True)
    user_id = Identifier(required=True)


def _check_item(merchant_id, item_id):
    item = CatalogAccessor().find_item(item_id)
    if item is None or str(item.merchant_id) != str(merchant_id):
        raise NotFoundError(ITEM_NOT_LINKED)


def _check_stock(item_id, quantity):
    if not StockLedger().check_available(item_id, quantity):
        raise ValidationError({"quantity": [INSUFFICIENT_STOCK]})


def _owned_entry(entry_id, user_id, message) -> CartEntry:
    try:
        entry = current_domain.repository_for(CartEntry).get(str(entry_id))
    except ObjectNotFoundError:
        raise NotFoundError("Item keranjang tidak ditemukan") from None
    assert_owns_cart_entry(entry, user_id, message)
    return entry


@marketplace.command_handler(part_of=CartEntry)
class CartEntryHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        _check_item(command.merchant_id, command.item_id)
        _check_stock(command.item_id, command.quantity)

        entry = CartEntry.add(
            user_id=command.user_id,
            merchant_id=command.merchant_id,
            item_id=command.item_id,
            quantity=command.quantity,
        )
        current_domain.repository_for(CartEntry).add(entry)
        logger.info("cart_entry_added", entry_id=str(entry.id), item_id=str(command.item_id))
        return str(entry.id)

    @handle(UpdateCartEntry)
    def update_cart_entry(self, command):
        entry = _owned_entry(command.entry_id, command.user_id, "Anda tidak memiliki akses untuk mengedit item ini")

        item_id = entry.item_id
        if command.item_id and str(command.item_id) != str(entry.item_id):
            _check_item(command.merchant_id or entry.merchant_id, command.item_id)
            item_id = command.item_id

        if command.merchant_id and str(command.merchant_id) != str(entry.merchant_id):
            current_item = CatalogAccessor().find_item(entry.item_id)
            if current_item is None or str(current_item.merchant_id) != str(command.merchant_id):
                raise ValidationError({"merchant_id": ["Merchant tidak sesuai dengan barang"]})

        _check_stock(item_id, command.quantity)

        entry.change(command.quantity, merchant_id=command.merchant_id, item_id=command.item_id)
        current_domain.repository_for(CartEntry).add(entry)
        return str(entry.id)

    @handle(RemoveCartEntry)
    def remove_cart_entry(self, command):
        entry = _owned_entry(command.entry_id, command.user_id, "Anda tidak memiliki akses untuk menghapus item ini")
        current_domain.repository_for(CartEntry)._dao.delete(entry)
        return str(entry.id)


def add_to_cart(user_id, merchant_id, item_id, quantity):
    if is_blank(merchant_id, item_id, quantity):
        raise ValidationError({"cart": ["merchantId, itemId, dan quantity wajib"]})
    quantity = parse_int(quantity, "quantity", POSITIVE_QUANTITY, minimum=1)

    command = AddToCart(user_id=user_id, merchant_id=merchant_id, item_id=item_id, quantity=quantity)
    return current_domain.process(command, asynchronous=False)


def update_cart_entry(entry_id, user_id, quantity, merchant_id=None, item_id=None):
    if is_blank(quantity):
        raise ValidationError({"quantity": ["Quantity wajib diisi"]})
    quantity = parse_int(quantity, "quantity", POSITIVE_QUANTITY, minimum=1)

    command = UpdateCartEntry(
        entry_id=entry_id,
        user_id=user_id,
        quantity=quantity,
        merchant_id=merchant_id or None,
        item_id=item_id or None,
    )
    return current_domain.process(command, asynchronous=False)


def remove_cart_entry(entry_id, user_id):
    return current_domain.process(RemoveCartEntry(entry_id=entry_id, user_id=user_id), asynchronous=False)


def list_cart(user_id, accessor=None):
    """Own entries as ``(entry, item, merchant)`` triples."""
    accessor = accessor or CatalogAccessor()
    entries = current_domain.repository_for(CartEntry)._dao.query.filter(user_id=str(user_id)).limit(None).all().items
    return [(entry, accessor.find_item(entry.item_id), accessor.find_merchant(entry.merchant_id)) for entry in entries]
