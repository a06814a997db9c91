"""Product search over stock records joined with their item and merchant."""

from marketplace.catalog.accessor import CatalogAccessor

SORT_CHEAPEST = "termurah"
SORT_PRICIEST = "termahal"


def _price(result):
    _, item, _ = result
    return item.base_price if item is not None else 0.0


def search_products(name=None, category=None, sort_by=None, accessor=None):
    """Return ``(stock, item, merchant)`` triples matching the filters.

    ``name`` is a case-insensitive substring of the item name; ``category``
    matches the merchant category and yields nothing when no merchant has it.
    Item or merchant is ``None`` when the referenced record is gone.
    """
    accessor = accessor or CatalogAccessor()

    if category:
        merchants = accessor.list_merchants(category=category)
        if not merchants:
            return []
        stocks = accessor.list_stocks(merchant_ids=[merchant.id for merchant in merchants])
    else:
        stocks = accessor.list_stocks()

    results = [
        (stock, accessor.find_item(stock.item_id), accessor.find_merchant(stock.merchant_id)) for stock in stocks
    ]

    if name:
        needle = name.lower()
        results = [result for result in results if result[1] is not None and needle in result[1].name.lower()]

    if sort_by == SORT_CHEAPEST:
        results.sort(key=_price)
    elif sort_by == SORT_PRICIEST:
        results.sort(key=_price, reverse=True)
    return results
