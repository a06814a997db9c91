"""FastAPI endpoints for the marketplace.

Writes take form fields (multipart when a photo or payment proof is sent)
and answer ``{"message": ..., "id": ...}``. Status changes also accept JSON.
"""

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile
from protean.exceptions import ValidationError

from marketplace.account.registration import login, profile, register
from marketplace.api.dependencies import Authenticated, RequestContext, optional_user, owned_filter, require_user
from marketplace.api.schemas import (
    CartEntryView,
    DashboardView,
    ItemView,
    LoginResponse,
    MerchantView,
    MessageResponse,
    MessageView,
    OrderView,
    OwnerOrderView,
    ProductView,
    ProfileView,
    RegisterResponse,
    StockView,
)
from marketplace.cart.entries import add_to_cart, list_cart, remove_cart_entry, update_cart_entry
from marketplace.catalog.listing import list_merchant_items, list_merchants, list_stock_levels
from marketplace.catalog.search import search_products
from marketplace.dashboard.sales import merchant_dashboard
from marketplace.imaging.port import ImageUpload
from marketplace.item.management import delist_item, list_item, revise_item
from marketplace.merchant.registration import open_merchant
from marketplace.message.sending import merchant_inbox, send_message
from marketplace.order.placement import place_order
from marketplace.order.status import change_order_status
from marketplace.order.views import all_orders, buyer_orders, merchant_orders
from marketplace.stock.restocking import set_stock

account_router = APIRouter(prefix="/api", tags=["account"])
catalog_router = APIRouter(prefix="/api", tags=["catalog"])
cart_router = APIRouter(prefix="/api/cart", tags=["cart"])
order_router = APIRouter(prefix="/api", tags=["orders"])
message_router = APIRouter(prefix="/api", tags=["messages"])
owner_router = APIRouter(prefix="/api/owner", tags=["owner"])


async def _image(upload: UploadFile | None) -> ImageUpload | None:
    if upload is None or not upload.filename:
        return None
    return ImageUpload(
        content=await upload.read(),
        filename=upload.filename,
        content_type=upload.content_type,
    )


async def _status_from(request: Request):
    """``status`` from a JSON body or form fields."""
    if request.headers.get("content-type", "").startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise ValidationError({"status": ["Body JSON tidak valid"]}) from None
        return body.get("status") if isinstance(body, dict) else None
    form = await request.form()
    return form.get("status")


# --- Account ---


@account_router.post("/register", response_model=RegisterResponse)
async def register_user(
    email: str | None = Form(None),
    password: str | None = Form(None),
    name: str | None = Form(None),
    address: str | None = Form(None),
    phone_number: str | None = Form(None, alias="phoneNumber"),
) -> RegisterResponse:
    uid = register(email, password, name, address, phone_number)
    return RegisterResponse(message="User berhasil register", uid=uid)


@account_router.post("/login", response_model=LoginResponse)
async def login_user(
    email: str | None = Form(None),
    password: str | None = Form(None),
) -> LoginResponse:
    token = login(email, password)
    return LoginResponse(message="Login berhasil", token=token)


@account_router.get("/profile", response_model=ProfileView)
async def get_profile(user: Authenticated = Depends(require_user)) -> ProfileView:
    return ProfileView.from_user(profile(user.subject_id))


# --- Merchants, items, stock, search ---


@catalog_router.post("/merchant", response_model=MessageResponse, response_model_exclude_none=True)
async def create_merchant(
    name: str | None = Form(None),
    category: str | None = Form(None),
    lat: str | None = Form(None),
    lng: str | None = Form(None),
    norek: str | None = Form(None),
    photo: UploadFile | None = File(None),
    user: Authenticated = Depends(require_user),
) -> MessageResponse:
    merchant_id = open_merchant(user.subject_id, name, category, lat, lng, norek=norek, photo=await _image(photo))
    return MessageResponse(message="Toko Berhasil Ditambahkan", id=merchant_id)


@catalog_router.get("/merchants", response_model=list[MerchantView])
async def get_merchants(
    category: str | None = None,
    owned: str | None = None,
    context: RequestContext = Depends(optional_user),
) -> list[MerchantView]:
    merchants = list_merchants(category=category, owned_by=owned_filter(context, owned))
    return [MerchantView.from_merchant(merchant) for merchant in merchants]


@catalog_router.post("/item", response_model=MessageResponse, response_model_exclude_none=True)
async def create_item(
    merchant_id: str | None = Form(None, alias="merchantId"),
    name: str | None = Form(None),
    category: str | None = Form(None),
    base_price: str | None = Form(None, alias="basePrice"),
    quantity: str | None = Form(None),
    photo: UploadFile | None = File(None),
    user: Authenticated = Depends(require_user),
) -> MessageResponse:
    item_id = list_item(
        user.subject_id,
        merchant_id,
        name,
        category,
        base_price,
        quantity,
        photo=await _image(photo),
    )
    return MessageResponse(message="Barang dan stok awal berhasil ditambahkan", id=item_id)


@catalog_router.put("/item/{item_id}", response_model=MessageResponse, response_model_exclude_none=True)
async def update_item(
    item_id: str,
    name: str | None = Form(None),
    category: str | None = Form(None),
    base_price: str | None = Form(None, alias="basePrice"),
    photo: UploadFile | None = File(None),
    user: Authenticated = Depends(require_user),
) -> MessageResponse:
    revise_item(item_id, user.subject_id, name, category, base_price, photo=await _image(photo))
    return MessageResponse(message="Barang berhasil diperbarui", id=item_id)


@catalog_router.delete("/item/{item_id}", response_model=MessageResponse, response_model_exclude_none=True)
async def delete_item(item_id: str, user: Authenticated = Depends(require_user)) -> MessageResponse:
    delist_item(item_id, user.subject_id)
    return MessageResponse(message="Barang berhasil dihapus", id=item_id)


@catalog_router.get("/items", response_model=list[ItemView])
async def get_items(
    merchant_id: str | None = Query(None, alias="merchantId"),
    owned: str | None = None,
    context: RequestContext = Depends(optional_user),
) -> list[ItemView]:
    items = list_merchant_items(merchant_id, owned_by=owned_filter(context, owned))
    return [ItemView.from_item(item) for item in items]


@catalog_router.post("/stock", response_model=MessageResponse, response_model_exclude_none=True)
async def update_stock(
    item_id: str | None = Form(None, alias="itemId"),
    merchant_id: str | None = Form(None, alias="merchantId"),
    quantity: str | None = Form(None),
    user: Authenticated = Depends(require_user),
) -> MessageResponse:
    stock_id = set_stock(user.subject_id, item_id, merchant_id, quantity)
    return MessageResponse(message="Stok diperbarui", id=stock_id)


@catalog_router.get("/stock", response_model=list[StockView])
async def get_stock(merchant_id: str | None = Query(None, alias="merchantId")) -> list[StockView]:
    return [StockView.from_stock(stock, item) for stock, item in list_stock_levels(merchant_id)]


@catalog_router.get("/product/search", response_model=list[ProductView])
async def search(
    name: str | None = None,
    category: str | None = None,
    sort_by: str | None = Query(None, alias="sortBy"),
) -> list[ProductView]:
    results = search_products(name=name, category=category, sort_by=sort_by)
    return [ProductView.from_result(stock, item, merchant) for stock, item, merchant in results]


# --- Cart ---


@cart_router.post("", response_model=MessageResponse, response_model_exclude_none=True)
async def add_cart_entry(
    merchant_id: str | None = Form(None, alias="merchantId"),
    item_id: str | None = Form(None, alias="itemId"),
    quantity: str | None = Form(None),
    user: Authenticated = Depends(require_user),
) -> MessageResponse:
    entry_id = add_to_cart(user.subject_id, merchant_id, item_id, quantity)
    return MessageResponse(message="Barang berhasil ditambahkan ke keranjang", id=entry_id)


@cart_router.get("", response_model=list[CartEntryView])
async def get_cart(user: Authenticated = Depends(require_user)) -> list[CartEntryView]:
    return [CartEntryView.from_entry(entry, item, merchant) for entry, item, merchant in list_cart(user.subject_id)]


@cart_router.put("/{entry_id}", response_model=MessageResponse, response_model_exclude_none=True)
async def update_cart(
    entry_id: str,
    merchant_id: str | None = Form(None, alias="merchantId"),
    item_id: str | None = Form(None, alias="itemId"),
    quantity: str | None = Form(None),
    user: Authenticated = Depends(require_user),
) -> MessageResponse:
    update_cart_entry(entry_id, user.subject_id, quantity, merchant_id=merchant_id, item_id=item_id)
    return MessageResponse(message="Item keranjang berhasil diperbarui", id=entry_id)


@cart_router.delete("/{entry_id}", response_model=MessageResponse, response_model_exclude_none=True)
async def delete_cart_entry(entry_id: str, user: Authenticated = Depends(require_user)) -> MessageResponse:
    remove_cart_entry(entry_id, user.subject_id)
    return MessageResponse(message="Item keranjang berhasil dihapus", id=entry_id)


# --- Orders ---


@order_router.post("/order", response_model=MessageResponse, response_model_exclude_none=True)
async def create_order(
    merchant_id: str | None = Form(None, alias="merchantId"),
    item_id: str | None = Form(None, alias="itemId"),
    quantity: str | None = Form(None),
    delivery_method: str | None = Form(None, alias="deliveryMethod"),
    payment_method: str | None = Form(None, alias="paymentMethod"),
    address: str | None = Form(None),
    payment_proof: UploadFile | None = File(None, alias="paymentProof"),
    user: Authenticated = Depends(require_user),
) -> MessageResponse:
    order_id = place_order(
        user.subject_id,
        merchant_id,
        item_id,
        quantity,
        delivery_method,
        payment_method,
        address=address,
        payment_proof=await _image(payment_proof),
    )
    return MessageResponse(message="Pemesanan berhasil", id=order_id)


@order_router.get("/order", response_model=list[OrderView])
async def get_orders(user: Authenticated = Depends(require_user)) -> list[OrderView]:
    return [OrderView.from_order(order) for order in buyer_orders(user.subject_id)]


@order_router.get("/merchant/orders", response_model=list[OrderView])
async def get_merchant_orders(
    merchant_id: str | None = Query(None, alias="merchantId"),
    user: Authenticated = Depends(require_user),
) -> list[OrderView]:
    return [OrderView.from_order(order) for order in merchant_orders(user.subject_id, merchant_id)]


@order_router.patch("/order/{order_id}/status", response_model=MessageResponse, response_model_exclude_none=True)
async def update_order_status(
    order_id: str,
    request: Request,
    user: Authenticated = Depends(require_user),
) -> MessageResponse:
    change_order_status(order_id, await _status_from(request), user.subject_id)
    return MessageResponse(message="Status pesanan diperbarui", id=order_id)


@order_router.get("/dashboard", response_model=DashboardView)
async def get_dashboard(
    merchant_id: str | None = Query(None, alias="merchantId"),
    user: Authenticated = Depends(require_user),
) -> DashboardView:
    return DashboardView.from_summary(merchant_dashboard(user.subject_id, merchant_id))


# --- Messages ---


@message_router.post("/send-message", response_model=MessageResponse, response_model_exclude_none=True)
async def post_message(
    merchant_id: str | None = Form(None, alias="merchantId"),
    store_name: str | None = Form(None, alias="storeName"),
    message: str | None = Form(None),
    user: Authenticated = Depends(require_user),
) -> MessageResponse:
    message_id = send_message(user.subject_id, merchant_id or store_name, message)
    return MessageResponse(message="Pesan berhasil dikirim", id=message_id)


@message_router.get("/merchant/messages", response_model=list[MessageView])
async def get_merchant_messages(
    merchant_id: str | None = Query(None, alias="merchantId"),
    user: Authenticated = Depends(require_user),
) -> list[MessageView]:
    inbox = merchant_inbox(user.subject_id, merchant_id)
    return [MessageView.from_message(message, sender) for message, sender in inbox]


# --- Platform owner ---


@owner_router.get("/orders", response_model=list[OwnerOrderView])
async def get_all_orders(user: Authenticated = Depends(require_user)) -> list[OwnerOrderView]:
    return [OwnerOrderView.from_result(order, merchant, buyer) for order, merchant, buyer in all_orders(user.subject_id)]


@owner_router.patch("/orders/{order_id}/status", response_model=MessageResponse, response_model_exclude_none=True)
@owner_router.patch("/order/{order_id}/status", response_model=MessageResponse, response_model_exclude_none=True)
async def override_order_status(
    order_id: str,
    request: Request,
    user: Authenticated = Depends(require_user),
) -> MessageResponse:
    change_order_status(order_id, await _status_from(request), user.subject_id, as_platform_owner=True)
    return MessageResponse(message="Status pesanan berhasil diperbarui", id=order_id)
