"""Sending messages to a store and reading a store's inbox."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from marketplace.catalog.accessor import CatalogAccessor
from marketplace.domain import marketplace
from marketplace.message.message import Message
from marketplace.order.views import owned_merchant
from marketplace.shared.errors import NotFoundError
from marketplace.shared.parsing import is_blank
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


@marketplace.command(part_of="Message")
class SendMessage:
    user_id = Identifier(required=True)
    merchant_id = Identifier(required=True)
    body = Text(required=True)


@marketplace.command_handler(part_of=Message)
class SendMessageHandler:
    @handle(SendMessage)
    def send_message(self, command):
        if CatalogAccessor().find_merchant(command.merchant_id) is None:
            raise NotFoundError("Toko tidak ditemukan")

        message = Message.send(command.user_id, command.merchant_id, command.body)
        current_domain.repository_for(Message).add(message)
        logger.info("message_sent", message_id=str(message.id), merchant_id=str(command.merchant_id))
        return str(message.id)


def send_message(user_id, merchant_id, body):
    if is_blank(merchant_id, body):
        raise ValidationError({"message": ["Nama toko dan pesan wajib"]})
    command = SendMessage(user_id=user_id, merchant_id=merchant_id, body=body)
    return current_domain.process(command, asynchronous=False)


def merchant_inbox(user_id, merchant_id, accessor=None):
    """A store's messages as ``(message, sender)``; sender is None when gone."""
    accessor = accessor or CatalogAccessor()
    owned_merchant(user_id, merchant_id, accessor=accessor)

    messages = (
        current_domain.repository_for(Message)
        ._dao.query.filter(merchant_id=str(merchant_id))
        .order_by("-created_at")
        .limit(None)
        .all()
        .items
    )
    return [(message, accessor.find_user(message.user_id)) for message in messages]
