import re
from datetime import datetime
from enum import Enum
from typing import Any, List

from pydantic import BaseModel, Field, field_validator

from backoffice.contracts.base import Contract, Endpoint
from backoffice.schemas import ErrorBody, GetResponse, PageQuery

EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


class UserRole(str, Enum):
    GUEST = "guest"
    USER = "user"
    PREMIUM = "premium"
    PARTNER = "partner"
    SUPPORT = "support"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"

    @classmethod
    def parse(cls, value: Any) -> "UserRole":
        """Unknown or missing values fall back to GUEST."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.GUEST


class UserBase(BaseModel):
    user_id: str
    email: str
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    phone_number: str
    address: str = Field(..., min_length=1)
    remark: str = ""
    role: UserRole

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        if not EMAIL_RE.match(v):
            raise ValueError("Invalid email")
        return v

    @field_validator("phone_number")
    @classmethod
    def validate_phone(cls, v):
        if not re.match(r"^[0-9]{10}$", v):
            raise ValueError("Invalid phone number format")
        return v


class User(UserBase):
    created_at: datetime
    updated_at: datetime


class UserProfileUpdate(UserBase):
    pass


class UserRoleUpdate(BaseModel):
    target_user_id: str
    role: UserRole


class UserRoleResponse(BaseModel):
    role: UserRole
    code: int = 0
    error: str = ""
    msg: str = ""


user_contract = Contract(
    "user",
    get_user_list=Endpoint(
        "GET", "/users", query=PageQuery,
        responses={200: GetResponse[List[User]], 400: ErrorBody, 500: ErrorBody},
    ),
    get_user_profile=Endpoint("GET", "/user/me/profile", responses={200: User}),
    get_user_role=Endpoint("GET", "/user/role", responses={200: UserRoleResponse}),
    update_user_role=Endpoint(
        "POST", "/admin/user/role", body=UserRoleUpdate,
        responses={200: GetResponse[UserRoleResponse], 400: ErrorBody, 500: ErrorBody},
    ),
    update_user_profile=Endpoint(
        "PUT", "/user/me/profile", body=UserProfileUpdate,
        responses={200: GetResponse[User], 400: ErrorBody, 500: ErrorBody},
    ),
)
