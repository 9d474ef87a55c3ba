"""
Form schemas

Pydantic models describing what each admin form accepts, and the mapping
from their validation errors to localized inline messages keyed by dotted
field path.
"""
from typing import Callable, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from backoffice.contracts.banner import is_url
from backoffice.contracts.product import LOCALIZED_DETAIL_FIELDS, ProductType
from backoffice.contracts.user import EMAIL_RE
from backoffice.forms.messages import ValidationMessages
from backoffice.schemas import LANGUAGES, ActiveStatus, ImageResponse

EMPTY_EDITOR_CONTENT = ("", "<p></p>")


class RequiredLangContent(BaseModel):
    zh: str = Field(..., min_length=1)
    en: str = Field(..., min_length=1)
    th: str = Field(..., min_length=1)


class OptionalLangContent(BaseModel):
    zh: Optional[str] = None
    en: Optional[str] = None
    th: Optional[str] = None


class ProductDetailCreateForm(BaseModel):
    product_description: RequiredLangContent
    short_title: RequiredLangContent
    ingredients: RequiredLangContent
    introduction: RequiredLangContent
    precautions: RequiredLangContent
    shelf_life: str = Field(..., min_length=1)
    origin: RequiredLangContent
    aroma_level: str = Field(..., min_length=1)
    flavor: RequiredLangContent
    appearance: RequiredLangContent
    best_occasion: RequiredLangContent
    scene_matching: RequiredLangContent
    food_pairing: RequiredLangContent


class ProductDetailEditForm(BaseModel):
    product_description: Optional[OptionalLangContent] = None
    short_title: Optional[OptionalLangContent] = None
    ingredients: Optional[OptionalLangContent] = None
    introduction: Optional[OptionalLangContent] = None
    precautions: Optional[OptionalLangContent] = None
    shelf_life: Optional[str] = None
    origin: Optional[OptionalLangContent] = None
    aroma_level: Optional[str] = None
    flavor: Optional[OptionalLangContent] = None
    appearance: Optional[OptionalLangContent] = None
    best_occasion: Optional[OptionalLangContent] = None
    scene_matching: Optional[OptionalLangContent] = None
    food_pairing: Optional[OptionalLangContent] = None


class ProductFormBase(BaseModel):
    product_price: float = Field(..., ge=1)
    product_size: float = Field(..., ge=1)
    product_status: Optional[ActiveStatus] = None
    product_type: Optional[ProductType] = None
    vendor_id: Optional[List[str]] = None
    tag_id: Optional[List[str]] = None


class ProductCreateForm(ProductFormBase):
    product_name: str = Field(..., min_length=1)
    product_images: List[ImageResponse] = Field(..., min_length=1)
    product_detail: ProductDetailCreateForm


class ProductEditForm(ProductFormBase):
    product_name: Optional[str] = None
    product_images: Optional[List[ImageResponse]] = None
    product_detail: ProductDetailEditForm = Field(default_factory=ProductDetailEditForm)


class BannerForm(BaseModel):
    title: str = Field(..., min_length=1)
    redirect_url: str = Field(..., min_length=1)
    desktop_image_url: str = Field(..., min_length=1)
    mobile_image_url: str = Field(..., min_length=1)
    banner_status: ActiveStatus = ActiveStatus.INACTIVE
    sort_order: Optional[int] = None

    @field_validator("redirect_url")
    @classmethod
    def https_only(cls, value):
        if not value:
            return value
        if not is_url(value):
            raise PydanticCustomError("url_invalid", "Invalid URL")
        if not value.startswith("https://"):
            raise PydanticCustomError("url_https", "URL must use https")
        return value


class ArticleImage(BaseModel):
    file_name: str = Field(..., min_length=1)
    file_url: str = Field(..., min_length=1)


class ArticleFormInput(BaseModel):
    title: str = Field(..., min_length=1)
    image_url: ArticleImage
    tags: Optional[List[str]] = None
    describe: Optional[str] = None
    content_html: str = ""

    @field_validator("content_html")
    @classmethod
    def has_content(cls, value):
        if value.strip() in EMPTY_EDITOR_CONTENT:
            raise PydanticCustomError("content_required", "Content is required")
        return value


class SupplierContactForm(BaseModel):
    phone: str = Field(..., min_length=1)
    email: str
    address: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def valid_email(cls, value):
        if not EMAIL_RE.match(value):
            raise PydanticCustomError("email_invalid", "Invalid email")
        return value


class SupplierForm(BaseModel):
    supplier_name: str = Field(..., min_length=1)
    contact_info: SupplierContactForm
    remark: Optional[str] = None


# Error types whose message does not depend on the field.
FIXED_MESSAGES = {
    "url_invalid": "validation.url.invalid",
    "url_https": "validation.url.https",
    "email_invalid": "validation.email.invalid",
    "content_required": "validation.article.content.required",
}
NUMBER_ERRORS = ("greater_than_equal", "float_parsing", "float_type", "int_parsing", "int_type")


def _camel(name):
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def product_label(path):
    field = path.split(".")[-1]
    if field == "product_price":
        return "pages.product.productCreate.price"
    return f"pages.product.productCreate.{_camel(field)}"


def _section_label(section):
    def label(path):
        return f"pages.{section}.{_camel(path.split('.')[-1])}"
    return label


def banner_label(path):
    names = {"desktop_image_url": "desktopImage", "mobile_image_url": "mobileImage"}
    field = path.split(".")[-1]
    return f"pages.banner.bannerCreate.{names.get(field, _camel(field))}"


def article_label(path):
    return "pages.article.coverImage" if path.startswith("image_url") else _section_label("article")(path)


def form_errors(model, values: Mapping, t, label: Callable[[str], str]) -> Dict[str, str]:
    """Validate ``values`` against ``model``; ``{}`` when valid."""
    try:
        model.model_validate(values)
    except ValidationError as e:
        messages = ValidationMessages(t)
        found = {}
        for error in e.errors():
            path = ".".join(str(part) for part in error["loc"])
            found.setdefault(path, _message(error, path, messages, t, label))
        return found
    return {}


def _message(error, path, messages, t, label):
    kind = error["type"]
    if kind in FIXED_MESSAGES:
        return t(FIXED_MESSAGES[kind])
    parts = path.split(".")
    if len(parts) > 1 and parts[-1] in LANGUAGES:
        return messages.required_lang(label(".".join(parts[:-1])))
    if kind in NUMBER_ERRORS:
        return messages.min_number(label(path), 1)
    if path == "product_images":
        return messages.min_images()
    if path.startswith("image_url"):
        return messages.required(label("image_url"))
    return messages.required(label(path))


def validate_product_form(values, t, mode="create"):
    model = ProductCreateForm if mode == "create" else ProductEditForm
    return form_errors(model, values, t, product_label)


def validate_banner_form(values, t):
    return form_errors(BannerForm, values, t, banner_label)


def validate_article_form(values, t):
    return form_errors(ArticleFormInput, values, t, article_label)


def validate_supplier_form(values, t):
    return form_errors(SupplierForm, values, t, _section_label("supplier"))


REQUIRED_PRODUCT_FIELDS = ("product_name", "product_price", "product_size")
CHECKABLE_PRODUCT_FIELDS = ("product_name", "product_price", "product_size", "product_type", "product_status")


def check_required_fields_filled(form_data: Mapping) -> bool:
    """Enough of the product is filled in to enable the submit button."""
    basics = all(form_data.get(f) not in (None, "", 0) for f in REQUIRED_PRODUCT_FIELDS)
    return basics and bool(form_data.get("product_images"))


def check_has_changes(current: Mapping, original: Mapping) -> bool:
    return any(current.get(f) != original.get(f) for f in CHECKABLE_PRODUCT_FIELDS)


def localized_product_fields():
    return [(name, product_label(name)) for name in LOCALIZED_DETAIL_FIELDS]
