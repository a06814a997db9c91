"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own ids and token; nothing is shared
between simulated users except the contended stock in ``ContentionTarget``.
"""

from dataclasses import dataclass, field


@dataclass
class SessionState:
    """Credentials of one simulated account."""

    uid: str | None = None
    token: str | None = None

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}


@dataclass
class SellerState(SessionState):
    merchant_id: str | None = None
    item_ids: list[str] = field(default_factory=list)
    order_ids: list[str] = field(default_factory=list)


@dataclass
class ShopperState(SessionState):
    cart_entry_ids: list[str] = field(default_factory=list)
    order_ids: list[str] = field(default_factory=list)


@dataclass
class ContentionTarget:
    """One item every StockContentionUser orders from."""

    merchant_id: str | None = None
    item_id: str | None = None
    initial_quantity: int = 0
