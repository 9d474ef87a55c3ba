from datetime import datetime
from typing import List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, field_validator

from backoffice.contracts.base import Contract, Endpoint
from backoffice.schemas import (
    ActiveStatus,
    ErrorBody,
    GetResponse,
    ImageResponse,
    Pagination,
    PostResponse,
)


def is_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class BannerFields(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: str
    desktop_image_url: ImageResponse
    mobile_image_url: ImageResponse
    redirect_url: str
    sort_order: int
    banner_status: ActiveStatus

    @field_validator("redirect_url")
    @classmethod
    def validate_redirect_url(cls, v):
        if not is_url(v):
            raise ValueError("Invalid url")
        return v


class BannerCreate(BannerFields):
    pass


class BannerUpdate(BannerFields):
    banner_id: str


class Banner(BannerUpdate):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BannerLookup(BaseModel):
    banner_id: str


_post_responses = {200: PostResponse, 400: ErrorBody, 500: ErrorBody}

banner_contract = Contract(
    "banner",
    get_banners=Endpoint(
        "GET", "/admin/banners", query=Pagination,
        responses={200: GetResponse[List[Banner]], 400: ErrorBody, 500: ErrorBody},
    ),
    get_banner=Endpoint(
        "GET", "/admin/banners", query=BannerLookup,
        responses={200: GetResponse[List[Banner]], 400: ErrorBody, 500: ErrorBody},
    ),
    create_banner=Endpoint("POST", "/admin/banners", body=BannerCreate, responses=_post_responses),
    update_banner=Endpoint("PUT", "/admin/banners", body=BannerUpdate, responses=_post_responses),
    delete_banner=Endpoint("DELETE", "/admin/banners", body=BannerLookup, responses=_post_responses),
)
