"""Shared BDD fixtures and step definitions for order placement and status changes."""

import pytest
from marketplace.merchant.registration import open_merchant
from marketplace.order.order import Order
from marketplace.order.placement import place_order
from marketplace.stock.stock import Stock
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then


@pytest.fixture()
def outcome():
    """What the last When step produced: an order id or the raised error."""
    return {"order_id": None, "error": None}


@pytest.fixture()
def placed_order():
    """Overridden by the Given step that places an order up front."""
    return None


@given(parsers.cfparse('a merchant "{name}" selling "{category}"'), target_fixture="shop")
def _(seller, name, category):
    return open_merchant(seller, name, category, "-6.9175", "107.6191")


@given(
    parsers.cfparse('the merchant lists "{name}" at {price:d} with {quantity:d} in stock'),
    target_fixture="listed_item",
)
def _(make_item, shop, name, price, quantity):
    return make_item(name=name, base_price=str(price), quantity=str(quantity), merchant_id=shop)


@given(
    parsers.cfparse("the buyer has already ordered {quantity:d} for {delivery} paying {payment}"),
    target_fixture="placed_order",
)
def _(buyer, shop, listed_item, quantity, delivery, payment):
    return place_order(buyer, shop, listed_item, str(quantity), delivery, payment)


@then(parsers.cfparse('the order is rejected with "{message}"'))
def _(outcome, message):
    assert isinstance(outcome["error"], ValidationError)
    assert message in [text for texts in outcome["error"].messages.values() for text in texts]


@then(parsers.cfparse("{quantity:d} remain in stock"))
def _(listed_item, quantity):
    assert current_domain.repository_for(Stock).get(listed_item).quantity == quantity


@then(parsers.cfparse('the order status is "{status}"'))
def _(outcome, placed_order, status):
    order_id = outcome["order_id"] or placed_order
    assert current_domain.repository_for(Order).get(order_id).status == status
