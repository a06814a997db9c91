"""Order placement: request validation, command, handler and entry point.

The checks run in a fixed order. Field-level checks come first and touch
nothing; stock and item checks follow; the payment proof is uploaded only
after all of them pass. The handler repeats the stock and item checks inside
its unit of work, creates the order and decrements the stock, so either both
writes land or neither does.
"""

from dataclasses import dataclass

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.catalog.accessor import CatalogAccessor
from marketplace.domain import marketplace
from marketplace.imaging import get_image_host
from marketplace.item.item import Item
from marketplace.order.order import DeliveryMethod, Order, PaymentMethod
from marketplace.shared.errors import NotFoundError
from marketplace.shared.parsing import is_blank, parse_int
from marketplace.stock.ledger import StockLedger
from marketplace.stock.stock import INSUFFICIENT_STOCK
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

PAYMENT_PROOF_FOLDER = "pasarku/payment-proofs"


@dataclass(frozen=True)
class OrderRequest:
    merchant_id: str
    item_id: str
    quantity: int
    delivery_method: str
    payment_method: str
    address: str | None


def validate_order_request(
    merchant_id,
    item_id,
    quantity,
    delivery_method,
    payment_method,
    address=None,
    has_payment_proof=False,
) -> OrderRequest:
    """Field-level checks that need no lookups."""
    if is_blank(merchant_id, item_id, quantity, delivery_method, payment_method):
        raise ValidationError({"order": ["Data pemesanan tidak lengkap"]})

    quantity = parse_int(quantity, "quantity", "Quantity harus berupa angka positif", minimum=1)

    if delivery_method not in [method.value for method in DeliveryMethod]:
        raise ValidationError({"delivery_method": ["Metode pengiriman harus delivery atau pickup"]})
    if payment_method not in [method.value for method in PaymentMethod]:
        raise ValidationError({"payment_method": ["Metode pembayaran harus cod atau digital"]})

    is_delivery = delivery_method == DeliveryMethod.DELIVERY.value
    if is_delivery and is_blank(address):
        raise ValidationError({"address": ["Alamat wajib untuk pengiriman delivery"]})
    if payment_method == PaymentMethod.DIGITAL.value and not has_payment_proof:
        raise ValidationError({"payment_proof": ["Bukti pembayaran wajib untuk metode digital"]})

    return OrderRequest(
        merchant_id=merchant_id,
        item_id=item_id,
        quantity=quantity,
        delivery_method=delivery_method,
        payment_method=payment_method,
        address=address if is_delivery else None,
    )


def check_orderable(merchant_id, item_id, quantity, ledger=None, accessor=None) -> Item:
    """Stock, then item, then the item's merchant. Returns the item."""
    ledger = ledger or StockLedger()
    accessor = accessor or CatalogAccessor()

    stock = ledger.find(item_id)
    if stock is None:
        raise NotFoundError("Produk tidak ditemukan")
    if not stock.can_fulfil(quantity):
        raise ValidationError({"quantity": [INSUFFICIENT_STOCK]})

    item = accessor.find_item(item_id)
    if item is None:
        raise NotFoundError("Item tidak ditemukan")
    if str(item.merchant_id) != str(merchant_id):
        raise NotFoundError("Item tidak ditemukan pada merchant ini")
    return item


@marketplace.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    merchant_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    delivery_method = String(required=True, choices=DeliveryMethod)
    payment_method = String(required=True, choices=PaymentMethod)
    address = Text()
    payment_proof = String(max_length=1024)


@marketplace.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        ledger = StockLedger()
        item = check_orderable(command.merchant_id, command.item_id, command.quantity, ledger=ledger)

        order = Order.place(
            user_id=command.user_id,
            merchant_id=command.merchant_id,
            item=item,
            quantity=command.quantity,
            delivery_method=command.delivery_method,
            payment_method=command.payment_method,
            address=command.address,
            payment_proof=command.payment_proof,
        )
        ledger.decrement(command.item_id, command.quantity, order_id=order.id)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            item_id=str(command.item_id),
            quantity=command.quantity,
            total=order.total,
        )
        return str(order.id)


def place_order(
    user_id,
    merchant_id,
    item_id,
    quantity,
    delivery_method,
    payment_method,
    address=None,
    payment_proof=None,
):
    """Validate, upload the payment proof if any, then place the order."""
    request = validate_order_request(
        merchant_id,
        item_id,
        quantity,
        delivery_method,
        payment_method,
        address=address,
        has_payment_proof=payment_proof is not None,
    )
    check_orderable(request.merchant_id, request.item_id, request.quantity)

    proof_url = ""
    if payment_proof is not None:
        proof_url = get_image_host().upload(payment_proof, f"{PAYMENT_PROOF_FOLDER}/{user_id}")

    command = PlaceOrder(
        user_id=user_id,
        merchant_id=request.merchant_id,
        item_id=request.item_id,
        quantity=request.quantity,
        delivery_method=request.delivery_method,
        payment_method=request.payment_method,
        address=request.address,
        payment_proof=proof_url,
    )
    return current_domain.process(command, asynchronous=False)
