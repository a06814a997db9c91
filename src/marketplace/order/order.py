"""Order aggregate: one item bought from one merchant.

Item name and price are copied onto the order when it is placed, so later
edits to the item never change existing orders.

Status graph:
    konfirmasi pembayaran → pending, shipped, canceled
    pending → shipped, canceled
    shipped → completed, canceled
    completed, canceled: terminal

A platform owner may set any settable status regardless of the graph.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from marketplace.domain import marketplace
from marketplace.order.events import OrderPlaced, OrderStatusChanged
from marketplace.shared.errors import InvalidStatusTransition


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    AWAITING_CONFIRMATION = "konfirmasi pembayaran"
    PENDING = "pending"
    SHIPPED = "shipped"
    COMPLETED = "completed"
    CANCELED = "canceled"


class DeliveryMethod(Enum):
    DELIVERY = "delivery"
    PICKUP = "pickup"


class PaymentMethod(Enum):
    COD = "cod"
    DIGITAL = "digital"


# Statuses a caller may ask for; the initial status is never settable.
SETTABLE_STATUSES = (
    OrderStatus.PENDING,
    OrderStatus.SHIPPED,
    OrderStatus.COMPLETED,
    OrderStatus.CANCELED,
)

_VALID_TRANSITIONS = {
    OrderStatus.AWAITING_CONFIRMATION: {OrderStatus.PENDING, OrderStatus.SHIPPED, OrderStatus.CANCELED},
    OrderStatus.PENDING: {OrderStatus.SHIPPED, OrderStatus.CANCELED},
    OrderStatus.SHIPPED: {OrderStatus.COMPLETED, OrderStatus.CANCELED},
    OrderStatus.COMPLETED: set(),  # Terminal
    OrderStatus.CANCELED: set(),  # Terminal
}


def parse_settable_status(value) -> OrderStatus:
    """Map a requested status string onto a settable ``OrderStatus``."""
    for status in SETTABLE_STATUSES:
        if value == status.value:
            return status
    allowed = ", ".join(status.value for status in SETTABLE_STATUSES)
    raise ValidationError({"status": [f"Status tidak valid. Gunakan: {allowed}"]})


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@marketplace.aggregate
class Order:
    user_id = Identifier(required=True)
    merchant_id = Identifier(required=True)
    item_id = Identifier(required=True)
    item_name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    total = Float(required=True, min_value=0.0)
    delivery_method = String(required=True, choices=DeliveryMethod)
    payment_method = String(required=True, choices=PaymentMethod)
    payment_proof = String(max_length=1024, default="")
    status = String(choices=OrderStatus, default=OrderStatus.AWAITING_CONFIRMATION.value)
    address = Text()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def address_only_for_delivery(self):
        if self.delivery_method == DeliveryMethod.DELIVERY.value and not self.address:
            raise ValidationError({"address": ["Alamat wajib untuk pengiriman delivery"]})
        if self.delivery_method == DeliveryMethod.PICKUP.value and self.address:
            raise ValidationError({"address": ["Alamat hanya untuk pengiriman delivery"]})

    @invariant.post
    def proof_required_for_digital_payment(self):
        if self.payment_method == PaymentMethod.DIGITAL.value and not self.payment_proof:
            raise ValidationError({"payment_proof": ["Bukti pembayaran wajib untuk metode digital"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        user_id,
        merchant_id,
        item,
        quantity,
        delivery_method,
        payment_method,
        address=None,
        payment_proof="",
    ):
        """Create an order for ``quantity`` units of ``item`` at its current price."""
        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            merchant_id=merchant_id,
            item_id=str(item.id),
            item_name=item.name,
            price=item.base_price,
            quantity=quantity,
            total=quantity * item.base_price,
            delivery_method=delivery_method,
            payment_method=payment_method,
            payment_proof=payment_proof or "",
            address=address if delivery_method == DeliveryMethod.DELIVERY.value else None,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                merchant_id=str(merchant_id),
                item_id=str(item.id),
                quantity=quantity,
                total=order.total,
                delivery_method=delivery_method,
                payment_method=payment_method,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------
    def can_transition_to(self, target_status: OrderStatus) -> bool:
        return target_status in _VALID_TRANSITIONS.get(OrderStatus(self.status), set())

    def _assert_can_transition(self, target_status):
        """Validate that the current state allows transition to target."""
        if not self.can_transition_to(target_status):
            raise InvalidStatusTransition(
                f"Status pesanan tidak dapat diubah dari {self.status} ke {target_status.value}"
            )

    def change_status(self, target_status: OrderStatus, changed_by, by_platform_owner=False):
        if not by_platform_owner:
            self._assert_can_transition(target_status)

        previous = self.status
        now = datetime.now(UTC)
        self.status = target_status.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                status=target_status.value,
                changed_by=str(changed_by),
                by_platform_owner=by_platform_owner,
                changed_at=now,
            )
        )
