"""
Shared wire types

Models reused by every contract: localized text, images, pagination,
sorting and the response envelopes returned by the admin API.
"""

from enum import Enum
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

LANGUAGES = ("zh", "en", "th")


class ActiveStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class LangContent(BaseModel):
    zh: str
    en: str
    th: str


class Image(BaseModel):
    """Upload body: base64 payload under its file name."""
    file_name: str
    file_value: str


class ImageResponse(BaseModel):
    file_name: str
    file_url: str


class Pagination(BaseModel):
    page: int = 1
    limit: int = 20


class Sort(BaseModel):
    sort_by: Optional[str] = None
    order: Optional[SortOrder] = None


class PageQuery(Pagination, Sort):
    model_config = ConfigDict(use_enum_values=True)


class GetResponse(BaseModel, Generic[T]):
    code: int = 0
    msg: str = ""
    error: str = ""
    data: Optional[T] = None
    total: Optional[int] = None


class PostResponse(BaseModel):
    message: str = ""


class ErrorBody(BaseModel):
    error: str


class ImageDelete(BaseModel):
    file_names: List[str] = Field(default_factory=list)


def default_page():
    return Pagination()
