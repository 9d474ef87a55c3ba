from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from backoffice.contracts.base import Contract, Endpoint
from backoffice.contracts.user import EMAIL_RE
from backoffice.schemas import ErrorBody, GetResponse, PageQuery, PostResponse


class SupplierContact(BaseModel):
    phone: str
    email: str
    address: str


class NewSupplierContact(BaseModel):
    phone: str = Field(..., min_length=1)
    email: str
    address: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        if not EMAIL_RE.match(v):
            raise ValueError("Invalid email")
        return v


class SupplierCreate(BaseModel):
    supplier_name: str = Field(..., min_length=1)
    contact_info: NewSupplierContact
    remark: Optional[str] = None


class SupplierUpdate(BaseModel):
    supplier_id: str
    supplier_name: str
    contact_info: SupplierContact
    remark: Optional[str] = None


class Supplier(SupplierUpdate):
    created_at: datetime
    updated_at: datetime


class SupplierLookup(BaseModel):
    supplier_id: str


class SupplierQuery(PageQuery):
    search: Optional[str] = None


_post_responses = {200: PostResponse, 400: ErrorBody, 500: ErrorBody}

supplier_contract = Contract(
    "supplier",
    get_all_suppliers=Endpoint(
        "GET", "/admin/supplier",
        responses={200: GetResponse[List[Supplier]], 400: ErrorBody, 500: ErrorBody},
    ),
    get_suppliers=Endpoint(
        "GET", "/admin/supplier", query=SupplierQuery,
        responses={200: GetResponse[List[Supplier]], 400: ErrorBody, 500: ErrorBody},
    ),
    get_supplier=Endpoint(
        "GET", "/admin/supplier", query=SupplierLookup,
        responses={200: GetResponse[Supplier], 400: ErrorBody, 500: ErrorBody},
    ),
    create_supplier=Endpoint("POST", "/admin/supplier", body=SupplierCreate, responses=_post_responses),
    update_supplier=Endpoint("PUT", "/admin/supplier", body=SupplierUpdate, responses=_post_responses),
    delete_supplier=Endpoint("DELETE", "/admin/supplier", body=SupplierLookup, responses=_post_responses),
)
