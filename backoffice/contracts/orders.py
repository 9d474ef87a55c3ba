from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from backoffice.contracts.base import Contract, Endpoint
from backoffice.schemas import ErrorBody, GetResponse, ImageResponse, PageQuery, PostResponse


class OrderStatus(str, Enum):
    NEW = "new"
    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    REFUNDED = "refunded"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ShippingMethod(str, Enum):
    SELF_PICKUP = "self_pickup"
    EXPRESS = "express"


class ContactInfo(BaseModel):
    address: str
    phone: str
    email: str


class OrderItem(BaseModel):
    product_name: str
    product_id: str
    size: str
    price: str
    order_id: str
    promotion_note: str = ""
    product_images: List[ImageResponse] = []


class Order(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    vendor_id: str
    order_id: str
    order_detail: List[OrderItem]
    order_status: OrderStatus
    contact_info: ContactInfo
    remark: str = ""
    delivery_fee: str
    delivery_note: str = ""
    delivery_time: str = ""
    total_order_fee: str
    user_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderPatch(BaseModel):
    """Every Order field, all optional."""
    model_config = ConfigDict(use_enum_values=True)

    vendor_id: Optional[str] = None
    order_id: Optional[str] = None
    order_detail: Optional[List[OrderItem]] = None
    order_status: Optional[OrderStatus] = None
    contact_info: Optional[ContactInfo] = None
    remark: Optional[str] = None
    delivery_fee: Optional[str] = None
    delivery_note: Optional[str] = None
    delivery_time: Optional[str] = None
    total_order_fee: Optional[str] = None
    user_id: Optional[str] = None


class OrderQuery(PageQuery):
    order_status: Optional[OrderStatus] = None


class OrderLookup(BaseModel):
    order_id: str


class OrderStatusUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    order_id: str
    order_status: OrderStatus


_list_responses = {200: GetResponse[List[Order]], 400: ErrorBody, 500: ErrorBody}
_post_responses = {200: PostResponse, 400: ErrorBody, 500: ErrorBody}

order_contract = Contract(
    "order",
    get_orders=Endpoint("GET", "/admin/order", query=OrderQuery, responses=_list_responses),
    get_order=Endpoint("GET", "/admin/order", query=OrderLookup, responses=_list_responses),
    update_order=Endpoint("POST", "/admin/order", body=OrderPatch, responses=_post_responses),
    update_order_status=Endpoint(
        "POST", "/admin/order/update", body=OrderStatusUpdate, responses=_post_responses
    ),
    delete_order=Endpoint("DELETE", "/orders/:orderId", responses=_post_responses),
)

batch_order_contract = Contract(
    "batchOrder",
    get_batch_orders=Endpoint("GET", "/orders/batch", responses=_list_responses),
    get_batch_order=Endpoint(
        "GET", "/orders/batch/:orderId",
        responses={200: GetResponse[Order], 400: ErrorBody, 500: ErrorBody},
    ),
    update_batch_order=Endpoint(
        "PUT", "/orders/batch/:orderId", body=OrderPatch, responses=_post_responses
    ),
    delete_batch_order=Endpoint("DELETE", "/orders/batch/:orderId", responses=_post_responses),
)
