"""Pydantic response schemas for the marketplace API.

Responses use camelCase keys. A view of a referenced record that no longer
exists is rendered as an empty object.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Mutation responses ---


class MessageResponse(CamelModel):
    message: str
    id: str | None = None


class RegisterResponse(CamelModel):
    message: str
    uid: str


class LoginResponse(CamelModel):
    message: str
    token: str


# --- Records ---


class ProfileView(CamelModel):
    uid: str
    email: str
    name: str
    address: str
    phone_number: str
    role: str
    created_at: datetime | None = None

    @classmethod
    def from_user(cls, user) -> ProfileView:
        return cls(
            uid=str(user.id),
            email=user.email.address,
            name=user.name,
            address=user.address,
            phone_number=user.phone_number.number,
            role=user.role,
            created_at=user.created_at,
        )


class LocationView(CamelModel):
    lat: float
    lng: float


class MerchantView(CamelModel):
    id: str
    name: str
    category: str
    location: LocationView
    photo_url: str = ""
    norek: str = ""
    user_id: str
    created_at: datetime | None = None

    @classmethod
    def from_merchant(cls, merchant) -> MerchantView | dict:
        if merchant is None:
            return {}
        return cls(
            id=str(merchant.id),
            name=merchant.name,
            category=merchant.category,
            location=LocationView(lat=merchant.location.lat, lng=merchant.location.lng),
            photo_url=merchant.photo_url or "",
            norek=merchant.norek or "",
            user_id=str(merchant.user_id),
            created_at=merchant.created_at,
        )


class ItemView(CamelModel):
    id: str
    merchant_id: str
    name: str
    category: str
    base_price: float
    photo_url: str = ""
    user_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_item(cls, item) -> ItemView | dict:
        if item is None:
            return {}
        return cls(
            id=str(item.id),
            merchant_id=str(item.merchant_id),
            name=item.name,
            category=item.category,
            base_price=item.base_price,
            photo_url=item.photo_url or "",
            user_id=str(item.user_id),
            created_at=item.created_at,
            updated_at=item.updated_at,
        )


class StockView(CamelModel):
    id: str
    item_id: str
    merchant_id: str
    quantity: int
    user_id: str
    updated_at: datetime | None = None
    item: ItemView | dict = Field(default_factory=dict)

    @classmethod
    def from_stock(cls, stock, item=None) -> StockView:
        return cls(
            id=str(stock.item_id),
            item_id=str(stock.item_id),
            merchant_id=str(stock.merchant_id),
            quantity=stock.quantity,
            user_id=str(stock.user_id),
            updated_at=stock.updated_at,
            item=ItemView.from_item(item),
        )


class ProductView(StockView):
    merchant: MerchantView | dict = Field(default_factory=dict)

    @classmethod
    def from_result(cls, stock, item, merchant) -> ProductView:
        return cls(
            id=str(stock.item_id),
            item_id=str(stock.item_id),
            merchant_id=str(stock.merchant_id),
            quantity=stock.quantity,
            user_id=str(stock.user_id),
            updated_at=stock.updated_at,
            item=ItemView.from_item(item),
            merchant=MerchantView.from_merchant(merchant),
        )


class CartEntryView(CamelModel):
    id: str
    user_id: str
    merchant_id: str
    item_id: str
    quantity: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
    item: ItemView | dict = Field(default_factory=dict)
    merchant: MerchantView | dict = Field(default_factory=dict)

    @classmethod
    def from_entry(cls, entry, item, merchant) -> CartEntryView:
        return cls(
            id=str(entry.id),
            user_id=str(entry.user_id),
            merchant_id=str(entry.merchant_id),
            item_id=str(entry.item_id),
            quantity=entry.quantity,
            created_at=entry.created_at,
            updated_at=entry.updated_at,
            item=ItemView.from_item(item),
            merchant=MerchantView.from_merchant(merchant),
        )


class OrderView(CamelModel):
    id: str
    user_id: str
    merchant_id: str
    item_id: str
    item_name: str = Field(alias="item")
    quantity: int
    price: float
    total: float
    delivery_method: str
    payment_method: str
    payment_proof: str = ""
    status: str
    address: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> OrderView:
        return cls(
            id=str(order.id),
            user_id=str(order.user_id),
            merchant_id=str(order.merchant_id),
            item_id=str(order.item_id),
            item_name=order.item_name,
            quantity=order.quantity,
            price=order.price,
            total=order.total,
            delivery_method=order.delivery_method,
            payment_method=order.payment_method,
            payment_proof=order.payment_proof or "",
            status=order.status,
            address=order.address,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class MerchantSummary(CamelModel):
    name: str
    category: str


class UserSummary(CamelModel):
    name: str
    email: str


class OwnerOrderView(OrderView):
    merchant: MerchantSummary
    user: UserSummary

    @classmethod
    def from_result(cls, order, merchant, buyer) -> OwnerOrderView:
        view = OrderView.from_order(order)
        return cls(
            **view.model_dump(),
            merchant=MerchantSummary(
                name=merchant.name if merchant else "Unknown",
                category=merchant.category if merchant else "N/A",
            ),
            user=_sender_summary(buyer),
        )


def _sender_summary(user) -> UserSummary:
    return UserSummary(
        name=user.name if user else "Unknown",
        email=user.email.address if user else "N/A",
    )


class MessageView(CamelModel):
    id: str
    user_id: str
    merchant_id: str
    message: str
    status: str
    created_at: datetime | None = None
    user: UserSummary

    @classmethod
    def from_message(cls, message, sender) -> MessageView:
        return cls(
            id=str(message.id),
            user_id=str(message.user_id),
            merchant_id=str(message.merchant_id),
            message=message.body,
            status=message.status,
            created_at=message.created_at,
            user=_sender_summary(sender),
        )


# --- Dashboard ---


class ProductSalesView(CamelModel):
    item: str
    count: int
    total_quantity: int


class DashboardView(CamelModel):
    total_sales: float
    orders_by_status: dict[str, int]
    top_products: list[ProductSalesView]

    @classmethod
    def from_summary(cls, summary) -> DashboardView:
        return cls(
            total_sales=summary.total_sales,
            orders_by_status=summary.orders_by_status,
            top_products=[
                ProductSalesView(item=sales.item, count=sales.count, total_quantity=sales.total_quantity)
                for sales in summary.top_products
            ],
        )
