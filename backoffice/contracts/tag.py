from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from backoffice.contracts.base import Contract, Endpoint
from backoffice.schemas import ErrorBody, GetResponse, Pagination, PostResponse, SortOrder


class Tag(BaseModel):
    tag_id: str
    tag_name: str


class TagCreate(BaseModel):
    tag_name: str = Field(..., min_length=1)


class TagUpdate(BaseModel):
    tag_id: str
    tag_name: str = Field(..., min_length=1)


class TagLookup(BaseModel):
    tag_id: str


class TagQuery(Pagination):
    model_config = ConfigDict(use_enum_values=True)

    sort_by: Optional[Literal["tag_id", "tag_name"]] = None
    order: Optional[SortOrder] = None
    search: Optional[str] = None


_post_responses = {200: PostResponse, 400: ErrorBody, 500: ErrorBody}

tag_contract = Contract(
    "tag",
    get_all_tags=Endpoint(
        "GET", "/admin/tag",
        responses={200: GetResponse[List[Tag]], 400: ErrorBody, 500: ErrorBody},
    ),
    get_tags=Endpoint(
        "GET", "/admin/tag", query=TagQuery,
        responses={200: GetResponse[List[Tag]], 400: ErrorBody, 500: ErrorBody},
    ),
    get_tag=Endpoint(
        "GET", "/admin/tag", query=TagLookup,
        responses={200: GetResponse[Tag], 400: ErrorBody, 500: ErrorBody},
    ),
    create_tag=Endpoint("POST", "/admin/tag", body=TagCreate, responses=_post_responses),
    update_tag=Endpoint("PUT", "/admin/tag", body=TagUpdate, responses=_post_responses),
    delete_tag=Endpoint("DELETE", "/admin/tag", body=TagLookup, responses=_post_responses),
)
