"""BDD tests for order status changes by merchant owners, buyers and the platform owner."""

from marketplace.order.status import change_order_status
from marketplace.shared.errors import AuthorizationError, InvalidStatusTransition
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/order_status.feature")


@given(parsers.cfparse('the platform owner has set the status to "{status}"'))
def _(platform_owner, placed_order, status):
    change_order_status(placed_order, status, platform_owner, as_platform_owner=True)


@when(parsers.cfparse('the merchant owner sets the status to "{status}"'))
def _(outcome, seller, placed_order, status):
    try:
        change_order_status(placed_order, status, seller)
    except InvalidStatusTransition as exc:
        outcome["error"] = exc


@when(parsers.cfparse('the buyer sets the status to "{status}"'))
def _(outcome, buyer, placed_order, status):
    try:
        change_order_status(placed_order, status, buyer)
    except AuthorizationError as exc:
        outcome["error"] = exc


@then("the status change is refused as a conflict")
def _(outcome):
    assert isinstance(outcome["error"], InvalidStatusTransition)
    assert outcome["error"].status_code == 409


@then("the status change is refused as forbidden")
def _(outcome):
    assert isinstance(outcome["error"], AuthorizationError)
