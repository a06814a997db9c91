"""Marketplace bounded context: merchants, catalogue, stock, carts and orders.

A single bounded context so that an order and the stock it consumes are
persisted in one Unit of Work.
"""

from protean.domain import Domain

from marketplace.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

marketplace = Domain(name="marketplace")
