"""
Submission normalisers

Each ``normalize_*_submission`` turns loosely filled form values into the
exact wire shape of its entity: localized fields completed to zh/en/th,
numbers rendered as strings, enums forced back into range. Running one on
its own output changes nothing.
"""
from enum import Enum
from typing import Mapping, Optional, Sequence, Type

from backoffice.contracts.product import LOCALIZED_DETAIL_FIELDS, PLAIN_DETAIL_FIELDS, ProductType
from backoffice.forms.arrays import ensure_array
from backoffice.forms.lang_fields import ensure_lang_field
from backoffice.schemas import ActiveStatus

DEFAULT_PRICE = 10
DEFAULT_SIZE = 15
DEFAULT_SORT_ORDER = 9

BANNER_PREFIXES = {"desktop": "d_", "mobile": "m_"}


def coerce_enum(enum: Type[Enum], value, default: Enum) -> str:
    values = {member.value for member in enum}
    if isinstance(value, Enum):
        value = value.value
    return value if value in values else default.value


def to_wire_number(value, default="0") -> str:
    if value is None or value == "":
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _parse_int(value, default):
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return default


def normalize_product_submission(form: Mapping) -> dict:
    detail = form.get("product_detail") or {}
    normalized_detail = dict(detail)
    for name in LOCALIZED_DETAIL_FIELDS:
        normalized_detail[name] = ensure_lang_field(detail.get(name))
    for name in PLAIN_DETAIL_FIELDS:
        normalized_detail[name] = detail.get(name) or ""

    return {
        **form,
        "product_name": form.get("product_name") or "",
        "product_images": list(form.get("product_images") or []),
        "product_price": to_wire_number(form.get("product_price")),
        "product_size": to_wire_number(form.get("product_size")),
        "product_type": coerce_enum(ProductType, form.get("product_type"), ProductType.NO_TYPE),
        "product_status": coerce_enum(ActiveStatus, form.get("product_status"), ActiveStatus.INACTIVE),
        "vendor_id": list(ensure_array(form.get("vendor_id"))),
        "tag_id": list(ensure_array(form.get("tag_id"))),
        "product_detail": normalized_detail,
    }


def product_to_form_data(product: Mapping) -> dict:
    """Editable form values for a product loaded from the API."""
    detail = product.get("product_detail") or {}
    form_detail = {name: ensure_lang_field(detail.get(name)) for name in LOCALIZED_DETAIL_FIELDS}
    for name in PLAIN_DETAIL_FIELDS:
        form_detail[name] = detail.get(name) or ""

    return {
        "product_name": product.get("product_name") or "",
        "product_price": _parse_int(product.get("product_price") or DEFAULT_PRICE, DEFAULT_PRICE),
        "product_size": _parse_int(product.get("product_size") or DEFAULT_SIZE, DEFAULT_SIZE),
        "product_images": list(product.get("product_images") or []),
        "vendor_id": list(product.get("vendor_id") or []),
        "tag_id": list(product.get("tag_id") or []),
        "product_type": coerce_enum(ProductType, product.get("product_type"), ProductType.NO_TYPE),
        "product_status": coerce_enum(ActiveStatus, product.get("product_status"), ActiveStatus.INACTIVE),
        "product_detail": form_detail,
    }


def banner_image(kind: str, value, uploaded: Optional[Mapping] = None) -> dict:
    """
    The ``{file_name, file_url}`` pair for one banner image. A fresh upload
    wins; otherwise the name is derived from the URL with the kind prefix.
    """
    if uploaded:
        return {"file_name": uploaded.get("file_name") or "", "file_url": uploaded.get("file_url") or ""}
    if isinstance(value, Mapping):
        return {"file_name": value.get("file_name") or "", "file_url": value.get("file_url") or ""}
    if not value:
        return {"file_name": "", "file_url": ""}
    prefix = BANNER_PREFIXES[kind]
    file_name = value.rstrip("/").split("/")[-1]
    if not file_name.startswith(prefix):
        file_name = prefix + file_name
    return {"file_name": file_name, "file_url": value}


def normalize_banner_submission(form: Mapping, desktop_upload=None, mobile_upload=None) -> dict:
    sort_order = form.get("sort_order")
    banner = {
        "title": form.get("title") or "",
        "redirect_url": form.get("redirect_url") or "",
        "banner_status": coerce_enum(ActiveStatus, form.get("banner_status"), ActiveStatus.INACTIVE),
        "desktop_image_url": banner_image("desktop", form.get("desktop_image_url"), desktop_upload),
        "mobile_image_url": banner_image("mobile", form.get("mobile_image_url"), mobile_upload),
        "sort_order": _parse_int(sort_order, DEFAULT_SORT_ORDER) if sort_order is not None else DEFAULT_SORT_ORDER,
    }
    if form.get("banner_id"):
        banner["banner_id"] = form["banner_id"]
    return banner


def normalize_article_submission(form: Mapping, uploaded_images: Sequence[Mapping] = ()) -> dict:
    image = uploaded_images[0] if uploaded_images else form.get("image_url") or {}
    article = {key: value for key, value in form.items() if key != "tag_inputs"}
    article.update(
        user_id=form.get("user_id") or "",
        nick_name=form.get("nick_name") or "",
        title=form.get("title") or "",
        tags=[tag for tag in ensure_array(form.get("tags")) if tag],
        image_url={"file_name": image.get("file_name") or "", "file_url": image.get("file_url") or ""},
        content_html=form.get("content_html") or "",
    )
    if article.get("describe") is None:
        article.pop("describe", None)
    return article


def normalize_supplier_submission(form: Mapping) -> dict:
    contact = form.get("contact_info") or {}
    supplier = {
        "supplier_name": (form.get("supplier_name") or "").strip(),
        "contact_info": {
            "phone": (contact.get("phone") or "").strip(),
            "email": (contact.get("email") or "").strip(),
            "address": (contact.get("address") or "").strip(),
        },
    }
    if form.get("supplier_id"):
        supplier["supplier_id"] = form["supplier_id"]
    if form.get("remark"):
        supplier["remark"] = form["remark"]
    return supplier
