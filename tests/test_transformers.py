import pytest

from backoffice.contracts.product import LOCALIZED_DETAIL_FIELDS, ProductCreate
from backoffice.forms.transformers import (
    DEFAULT_PRICE,
    DEFAULT_SIZE,
    DEFAULT_SORT_ORDER,
    banner_image,
    normalize_article_submission,
    normalize_banner_submission,
    normalize_product_submission,
    normalize_supplier_submission,
    product_to_form_data,
    to_wire_number,
)

IMAGE = {"file_name": "tea.webp", "file_url": "https://img.example.com/tea.webp"}


def _product_form(**overrides):
    form = {
        "product_name": "Green Tea",
        "product_price": 128,
        "product_size": 15.0,
        "product_images": [IMAGE],
        "product_type": "FOOD",
        "product_status": "active",
        "vendor_id": ["sup_1"],
        "tag_id": None,
        "product_detail": {"origin": {"zh": "云南"}, "shelf_life": "18"},
    }
    form.update(overrides)
    return form


def test_product_submission_fills_every_language_and_stringifies_numbers():
    payload = normalize_product_submission(_product_form())
    assert payload["product_price"] == "128"
    assert payload["product_size"] == "15"
    assert payload["tag_id"] == []
    assert payload["product_detail"]["origin"] == {"zh": "云南", "en": "", "th": ""}
    assert payload["product_detail"]["aroma_level"] == ""
    for name in LOCALIZED_DETAIL_FIELDS:
        assert set(payload["product_detail"][name]) == {"zh", "en", "th"}


def test_product_submission_matches_the_create_contract():
    ProductCreate.model_validate(normalize_product_submission(_product_form()))


def test_out_of_range_enums_fall_back():
    payload = normalize_product_submission(_product_form(product_type="SPACESHIP", product_status=None))
    assert payload["product_type"] == "NO_TYPE"
    assert payload["product_status"] == "inactive"


def test_product_submission_is_idempotent():
    once = normalize_product_submission(_product_form())
    assert normalize_product_submission(once) == once


def test_wire_numbers():
    assert to_wire_number(None) == "0"
    assert to_wire_number("") == "0"
    assert to_wire_number("12.50") == "12.50"
    assert to_wire_number(12.5) == "12.5"
    assert to_wire_number(3.0) == "3"


def test_product_to_form_data_uses_defaults_for_missing_numbers():
    form = product_to_form_data({"product_name": "Oolong", "product_price": "", "product_size": None})
    assert form["product_price"] == DEFAULT_PRICE
    assert form["product_size"] == DEFAULT_SIZE
    assert form["product_type"] == "NO_TYPE"
    assert form["product_detail"]["flavor"] == {"zh": "", "en": "", "th": ""}


def test_product_to_form_data_parses_wire_numbers():
    form = product_to_form_data({"product_price": "198", "product_size": "20.0"})
    assert (form["product_price"], form["product_size"]) == (198, 20)


@pytest.mark.parametrize("kind,prefix", [("desktop", "d_"), ("mobile", "m_")])
def test_banner_image_name_gets_the_kind_prefix(kind, prefix):
    image = banner_image(kind, "https://cdn.example.com/banners/spring.webp")
    assert image == {"file_name": prefix + "spring.webp", "file_url": "https://cdn.example.com/banners/spring.webp"}


def test_banner_image_keeps_an_existing_prefix_and_prefers_uploads():
    assert banner_image("desktop", "https://cdn.example.com/d_spring.webp")["file_name"] == "d_spring.webp"
    upload = {"file_name": "d_new.webp", "file_url": "https://cdn.example.com/d_new.webp"}
    assert banner_image("desktop", "https://cdn.example.com/old.webp", upload) == upload
    assert banner_image("mobile", None) == {"file_name": "", "file_url": ""}


def test_banner_submission_defaults_and_idempotence():
    form = {
        "title": "Spring",
        "redirect_url": "https://shop.example.com",
        "banner_status": "unknown",
        "desktop_image_url": "https://cdn.example.com/a.webp",
        "mobile_image_url": "https://cdn.example.com/b.webp",
        "sort_order": None,
        "banner_id": "bnr_1",
    }
    payload = normalize_banner_submission(form)
    assert payload["banner_status"] == "inactive"
    assert payload["sort_order"] == DEFAULT_SORT_ORDER
    assert payload["mobile_image_url"]["file_name"] == "m_b.webp"
    assert payload["banner_id"] == "bnr_1"
    assert normalize_banner_submission(payload) == payload


def test_article_submission_prefers_the_fresh_upload_and_drops_tag_inputs():
    form = {
        "title": "Brewing",
        "tags": ["guide", ""],
        "tag_inputs": "gu",
        "image_url": {"file_name": "old.webp", "file_url": "https://img.example.com/old.webp"},
        "content_html": "<p>hi</p>",
        "describe": None,
    }
    payload = normalize_article_submission(form, [IMAGE])
    assert payload["image_url"] == IMAGE
    assert payload["tags"] == ["guide"]
    assert "tag_inputs" not in payload
    assert "describe" not in payload
    assert normalize_article_submission(payload) == payload


def test_supplier_submission_trims_and_omits_empty_remark():
    payload = normalize_supplier_submission({
        "supplier_name": "  Leaf & Co ",
        "contact_info": {"phone": " 0911 ", "email": "a@b.co", "address": "Hill"},
        "remark": "",
    })
    assert payload == {
        "supplier_name": "Leaf & Co",
        "contact_info": {"phone": "0911", "email": "a@b.co", "address": "Hill"},
    }
    assert normalize_supplier_submission(payload) == payload
