"""Order status changes by the merchant owner or a platform owner."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from marketplace.catalog.accessor import CatalogAccessor
from marketplace.domain import marketplace
from marketplace.order.order import Order, parse_settable_status
from marketplace.shared.errors import NotFoundError
from marketplace.shared.ownership import assert_owns_merchant, assert_platform_owner
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

UPDATE_FORBIDDEN = "Anda tidak memiliki akses untuk mengupdate pesanan ini"
OWNER_ONLY_UPDATE = "Hanya pengguna dengan peran owner yang dapat mengubah status pesanan"


@marketplace.command(part_of="Order")
class ChangeOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True)
    actor_id = Identifier(required=True)
    as_platform_owner = Boolean(default=False)


def _authorise(order, actor_id, as_platform_owner, accessor) -> bool:
    """Return True when the change goes through the platform-owner override.

    The merchant owner is held to the status graph. Anyone else must hold the
    platform owner role.
    """
    user = accessor.find_user(actor_id)
    if as_platform_owner:
        assert_platform_owner(user, OWNER_ONLY_UPDATE)
        return True

    merchant = accessor.find_merchant(order.merchant_id)
    owns_merchant = merchant is not None and str(merchant.user_id) == str(actor_id)
    if not owns_merchant and user is not None and user.is_platform_owner:
        return True
    assert_owns_merchant(merchant, actor_id, UPDATE_FORBIDDEN)
    return False


@marketplace.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(ChangeOrderStatus)
    def change_order_status(self, command):
        target = parse_settable_status(command.status)

        repo = current_domain.repository_for(Order)
        try:
            order = repo.get(str(command.order_id))
        except ObjectNotFoundError:
            raise NotFoundError("Pesanan tidak ditemukan") from None

        override = _authorise(order, command.actor_id, command.as_platform_owner, CatalogAccessor())
        order.change_status(target, changed_by=command.actor_id, by_platform_owner=override)
        repo.add(order)

        logger.info(
            "order_status_changed",
            order_id=str(order.id),
            status=order.status,
            by_platform_owner=override,
        )
        return str(order.id)


def change_order_status(order_id, status, actor_id, as_platform_owner=False):
    """Platform owners are checked for their role before the status value is."""
    if as_platform_owner:
        assert_platform_owner(CatalogAccessor().find_user(actor_id), OWNER_ONLY_UPDATE)
    parse_settable_status(status)

    command = ChangeOrderStatus(
        order_id=order_id,
        status=status,
        actor_id=actor_id,
        as_platform_owner=as_platform_owner,
    )
    return current_domain.process(command, asynchronous=False)
