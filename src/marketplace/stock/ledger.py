"""Stock ledger: the only way order placement and restocking touch Stock.

Every method is expected to run inside the unit of work opened by the
calling command handler. ``decrement`` re-reads the record there, so the
check and the write are based on the same version of the stock; a
concurrent write to the same record fails the commit with
``ExpectedVersionError`` and nothing is persisted.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.stock.stock import Stock
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


class StockLedger:
    def __init__(self, repository=None):
        self._repository = repository

    @property
    def repository(self):
        if self._repository is None:
            self._repository = current_domain.repository_for(Stock)
        return self._repository

    def find(self, item_id) -> Stock | None:
        try:
            return self.repository.get(str(item_id))
        except ObjectNotFoundError:
            return None

    def check_available(self, item_id, quantity) -> bool:
        stock = self.find(item_id)
        return stock is not None and stock.can_fulfil(quantity)

    def decrement(self, item_id, quantity, order_id=None) -> Stock:
        """Take ``quantity`` units out of stock, refusing to go below zero.

        Raises ``ObjectNotFoundError`` when the item has no stock record and
        ``ValidationError`` when it holds fewer than ``quantity`` units.
        """
        stock = self.repository.get(str(item_id))
        stock.decrement(quantity, order_id=order_id)
        self.repository.add(stock)

        logger.info(
            "stock_decremented",
            item_id=str(item_id),
            quantity=quantity,
            remaining=stock.quantity,
        )
        return stock

    def set_quantity(self, item_id, merchant_id, quantity, owner_id) -> Stock:
        stock = self.find(item_id)
        if stock is None:
            stock = Stock(
                item_id=str(item_id),
                merchant_id=merchant_id,
                quantity=quantity,
                user_id=owner_id,
            )
        stock.set_quantity(quantity, merchant_id=merchant_id, user_id=owner_id)
        self.repository.add(stock)

        logger.info("stock_level_set", item_id=str(item_id), quantity=quantity)
        return stock

    def initialize(self, item_id, merchant_id, quantity, owner_id) -> Stock:
        return self.set_quantity(item_id, merchant_id, quantity, owner_id)

    def remove(self, item_id) -> None:
        stock = self.find(item_id)
        if stock is not None:
            self.repository._dao.delete(stock)
            logger.info("stock_removed", item_id=str(item_id))
