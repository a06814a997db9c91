"""BDD tests for placing orders against stock."""

from marketplace.order.order import Order
from marketplace.order.placement import place_order
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/order_placement.feature")


@when(parsers.cfparse("the buyer orders {quantity:d} for {delivery} paying {payment}"))
def _(outcome, buyer, shop, listed_item, quantity, delivery, payment):
    try:
        outcome["order_id"] = place_order(buyer, shop, listed_item, str(quantity), delivery, payment)
    except ValidationError as exc:
        outcome["error"] = exc


@then(parsers.cfparse("the order is placed with a total of {total:d}"))
def _(outcome, total):
    assert outcome["error"] is None
    assert current_domain.repository_for(Order).get(outcome["order_id"]).total == total
