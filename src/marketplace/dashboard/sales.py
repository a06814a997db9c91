"""Sales summary for a merchant's dashboard."""

from collections import Counter
from dataclasses import dataclass, field

from marketplace.order.order import OrderStatus
from marketplace.order.views import merchant_orders

TOP_PRODUCTS = 5


@dataclass
class ProductSales:
    item: str
    count: int = 0
    total_quantity: int = 0


@dataclass
class SalesSummary:
    total_sales: float = 0.0
    orders_by_status: dict[str, int] = field(default_factory=dict)
    top_products: list[ProductSales] = field(default_factory=list)


def summarize_sales(orders) -> SalesSummary:
    """Completed revenue, order counts per status and best sellers by order count.

    Products are grouped by the item name captured on each order. Ties keep the
    order in which the product first appeared.
    """
    total_sales = sum(order.total for order in orders if order.status == OrderStatus.COMPLETED.value)
    by_status = Counter(order.status for order in orders)

    products: dict[str, ProductSales] = {}
    for order in orders:
        sales = products.setdefault(order.item_name, ProductSales(item=order.item_name))
        sales.count += 1
        sales.total_quantity += order.quantity

    top = sorted(products.values(), key=lambda sales: sales.count, reverse=True)[:TOP_PRODUCTS]
    return SalesSummary(total_sales=total_sales, orders_by_status=dict(by_status), top_products=top)


def merchant_dashboard(user_id, merchant_id) -> SalesSummary:
    return summarize_sales(merchant_orders(user_id, merchant_id))
