from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from backoffice.contracts.base import Contract, Endpoint
from backoffice.schemas import ErrorBody, GetResponse, PageQuery, PostResponse


class StaffUser(BaseModel):
    staff_id: str
    account: str
    email: str
    first_name: str
    last_name: str
    role: str
    created_at: datetime
    updated_at: datetime


class StaffCreate(BaseModel):
    account: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=6)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)


class StaffId(BaseModel):
    staff_id: str


class StaffQuery(PageQuery):
    role: Optional[str] = None
    staff_id: Optional[str] = None


_post_responses = {200: PostResponse, 400: ErrorBody, 500: ErrorBody}

staff_contract = Contract(
    "staff",
    get_staff=Endpoint(
        "GET", "/admin/staff", query=StaffQuery,
        responses={200: GetResponse[List[StaffUser]], 400: ErrorBody, 500: ErrorBody},
    ),
    create_staff=Endpoint("POST", "/admin/staff", body=StaffCreate, responses=_post_responses),
    update_staff=Endpoint("PUT", "/admin/staff", body=StaffUser, responses=_post_responses),
    delete_staff=Endpoint("DELETE", "/admin/staff", body=StaffId, responses=_post_responses),
)
