from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict

from backoffice.contracts.base import Contract, Endpoint
from backoffice.contracts.orders import ContactInfo, OrderItem
from backoffice.schemas import ErrorBody, GetResponse, Pagination, SortOrder


class Customer(BaseModel):
    user_id: str
    email: str
    first_name: str
    last_name: str
    phone_number: str
    total_spent: float
    order_count: int
    last_order_date: Optional[datetime] = None
    created_at: datetime


class CustomerQuery(Pagination):
    model_config = ConfigDict(use_enum_values=True)

    user_id: Optional[str] = None
    sort_by: Optional[Literal["total_spent", "order_count"]] = None
    order: Optional[SortOrder] = None


class TransactionHistoryOrder(BaseModel):
    order_id: str
    vendor_id: str
    contact_info: ContactInfo
    created_at: str
    order_detail: List[OrderItem]
    order_status: str
    remark: Optional[str] = None
    delivery_fee: str
    delivery_note: str
    delivery_time: str
    total_order_fee: str
    updated_at: str
    user_id: str


class TransactionHistoryQuery(Pagination):
    user_id: str


class TransactionHistoryResponse(BaseModel):
    code: int
    data: List[TransactionHistoryOrder]
    msg: str
    total: int


customer_contract = Contract(
    "customer",
    get_customers=Endpoint(
        "GET", "/admin/customers", query=CustomerQuery,
        responses={200: GetResponse[List[Customer]], 400: ErrorBody, 500: ErrorBody},
    ),
    get_transaction_history=Endpoint(
        "GET", "/admin/transaction_history", query=TransactionHistoryQuery,
        responses={200: TransactionHistoryResponse, 400: ErrorBody, 500: ErrorBody},
    ),
)
