from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from backoffice.contracts.base import Contract, Endpoint
from backoffice.schemas import (
    ActiveStatus,
    ErrorBody,
    GetResponse,
    Image,
    ImageDelete,
    ImageResponse,
    LangContent,
    PageQuery,
    PostResponse,
)


class ProductType(str, Enum):
    ELECTRONICS = "ELECTRONICS"
    ACCESSORIES = "ACCESSORIES"
    CONSUMABLES = "CONSUMABLES"
    DEVICES = "DEVICES"
    MATERIALS = "MATERIALS"
    FOOD = "FOOD"
    CLOTHING = "CLOTHING"
    OTHER = "OTHER"
    NO_TYPE = "NO_TYPE"


# Localized product_detail fields, in display order.
LOCALIZED_DETAIL_FIELDS = (
    "product_description",
    "short_title",
    "ingredients",
    "introduction",
    "precautions",
    "origin",
    "flavor",
    "appearance",
    "best_occasion",
    "scene_matching",
    "food_pairing",
)
PLAIN_DETAIL_FIELDS = ("shelf_life", "aroma_level")


class ProductDetail(BaseModel):
    product_description: LangContent
    short_title: LangContent
    ingredients: LangContent
    introduction: LangContent
    precautions: LangContent
    shelf_life: str
    origin: LangContent
    aroma_level: str
    flavor: LangContent
    appearance: LangContent
    best_occasion: LangContent
    scene_matching: LangContent
    food_pairing: LangContent


class ProductBase(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    product_type: Optional[ProductType] = None
    product_name: str
    product_images: List[ImageResponse]
    product_price: str
    product_status: Optional[ActiveStatus] = None
    product_size: Optional[str] = None
    vendor_id: Optional[List[str]] = None
    tag_id: Optional[List[str]] = None
    product_detail: ProductDetail


class ProductCreate(ProductBase):
    pass


class Product(ProductBase):
    product_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductQuery(PageQuery):
    product_status: Optional[ActiveStatus] = None


class ProductLookup(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    product_id: str
    product_status: Optional[ActiveStatus] = None


class ProductId(BaseModel):
    product_id: str


_list_responses = {200: GetResponse[List[Product]], 400: ErrorBody, 500: ErrorBody}
_post_responses = {200: PostResponse, 400: ErrorBody, 500: ErrorBody}

product_contract = Contract(
    "product",
    get_products=Endpoint("GET", "/admin/products", query=ProductQuery, responses=_list_responses),
    get_all_products=Endpoint("GET", "/admin/products", responses=_list_responses),
    get_product=Endpoint("GET", "/admin/products", query=ProductLookup, responses=_list_responses),
    create_product=Endpoint("POST", "/admin/products", body=ProductCreate, responses=_post_responses),
    update_product=Endpoint("POST", "/admin/products/update", body=Product, responses=_post_responses),
    delete_product=Endpoint("DELETE", "/admin/products", body=ProductId, responses=_post_responses),
    upload_product_image=Endpoint(
        "POST", "/admin/images", body=Image,
        responses={200: GetResponse[ImageResponse], 400: ErrorBody, 500: ErrorBody},
    ),
    delete_product_image=Endpoint("DELETE", "/admin/images", body=ImageDelete, responses=_post_responses),
)
