"""Stock set by the merchant owner (restock or correction)."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from marketplace.catalog.accessor import CatalogAccessor
from marketplace.domain import marketplace
from marketplace.shared.errors import NotFoundError
from marketplace.shared.ownership import assert_owns_item
from marketplace.shared.parsing import is_blank, parse_int
from marketplace.stock.ledger import StockLedger
from marketplace.stock.stock import Stock


@marketplace.command(part_of="Stock")
class SetStock:
    item_id = Identifier(required=True)
    merchant_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=0)
    user_id = Identifier(required=True)


@marketplace.command_handler(part_of=Stock)
class SetStockHandler:
    @handle(SetStock)
    def set_stock(self, command):
        item = CatalogAccessor().find_item(command.item_id)
        if item is None or str(item.merchant_id) != str(command.merchant_id):
            raise NotFoundError("Barang tidak ditemukan atau tidak terkait dengan merchant")
        assert_owns_item(item, command.user_id, "Anda tidak memiliki akses untuk mengelola stok ini")

        StockLedger().set_quantity(item.id, command.merchant_id, command.quantity, command.user_id)
        return str(item.id)


def set_stock(user_id, item_id, merchant_id, quantity):
    if is_blank(item_id, merchant_id, quantity):
        raise ValidationError({"stock": ["Data stok tidak lengkap"]})
    quantity = parse_int(quantity, "quantity", "Stok harus berupa angka non-negatif", minimum=0)

    command = SetStock(item_id=item_id, merchant_id=merchant_id, quantity=quantity, user_id=user_id)
    return current_domain.process(command, asynchronous=False)
