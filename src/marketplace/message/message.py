"""Message aggregate: a buyer's note to a store."""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Identifier, String, Text

from marketplace.domain import marketplace


class MessageStatus(Enum):
    UNREAD = "unread"


@marketplace.aggregate
class Message:
    user_id = Identifier(required=True)
    merchant_id = Identifier(required=True)
    body = Text(required=True)
    status = String(choices=MessageStatus, default=MessageStatus.UNREAD.value)
    created_at = DateTime()

    @classmethod
    def send(cls, user_id, merchant_id, body):
        return cls(user_id=user_id, merchant_id=merchant_id, body=body, created_at=datetime.now(UTC))
