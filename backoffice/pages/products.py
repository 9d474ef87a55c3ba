import pandas as pd
import streamlit as st

from backoffice.contracts.product import LOCALIZED_DETAIL_FIELDS, PLAIN_DETAIL_FIELDS, ProductType
from backoffice.forms.field_changes import get_actual_changes
from backoffice.forms.image_upload import ImageUploader
from backoffice.forms.lang_fields import LocalizedFieldGroup
from backoffice.forms.multi_select import MultiSelectField
from backoffice.forms.schemas import (
    check_has_changes,
    check_required_fields_filled,
    product_label,
    validate_product_form,
)
from backoffice.forms.state import FormState
from backoffice.forms.transformers import normalize_product_submission, product_to_form_data
from backoffice.hooks import products as product_hooks
from backoffice.hooks.suppliers import get_all_suppliers
from backoffice.hooks.tags import get_all_tags
from backoffice.image_validation import general_image_manager
from backoffice.pages import widgets
from backoffice.schemas import ActiveStatus

COLUMNS = {
    "product_id": "common.id",
    "product_name": "pages.product.productCreate.productName",
    "product_price": "pages.product.productCreate.price",
    "product_size": "pages.product.productCreate.productSize",
    "product_type": "pages.product.productCreate.productType",
    "product_status": "pages.product.productCreate.productStatus",
    "updated_at": "common.updatedAt",
}
SORTABLE = {
    "product_name": "pages.product.productCreate.productName",
    "product_price": "pages.product.productCreate.price",
    "updated_at": "common.updatedAt",
}
STATUSES = [s.value for s in ActiveStatus]
TYPES = [t.value for t in ProductType]


def render_list(ctx, params):
    st.header(ctx.t("dashboard.menu.products.title"))
    if st.button(ctx.t("common.create"), type="primary"):
        widgets.navigate("/products/create")

    status = st.selectbox(ctx.t("pages.product.productCreate.productStatus"), [""] + STATUSES,
                          format_func=lambda s: ctx.t(f"status.{s}") if s else ctx.t("common.all"))
    sorting = widgets.sort_picker(ctx, "products", SORTABLE)
    paging = st.session_state.get("products_page", {"page": 1, "limit": 20})
    query = dict(paging, **sorting, product_status=status or None)

    with st.spinner(ctx.t("common.loading")):
        envelope = product_hooks.get_product_list(ctx, query) or {}
    rows = envelope.get("data") or []
    widgets.table(rows, COLUMNS, ctx.t)
    widgets.pager(ctx, "products", envelope.get("total"))

    for row in rows:
        c1, c2, c3 = st.columns([4, 1, 1])
        c1.write(row["product_name"])
        if c2.button(ctx.t("common.edit"), key=f"edit_{row['product_id']}"):
            widgets.navigate(f"/products/edit/{row['product_id']}")
        if c3.button(ctx.t("common.delete"), key=f"delete_{row['product_id']}"):
            product_hooks.delete_product(ctx, row["product_id"])
            st.rerun()


def _session_form(ctx, key, defaults, mode):
    forms = st.session_state.setdefault("forms", {})
    if key not in forms:
        forms[key] = FormState(defaults, validator=lambda values: validate_product_form(values, ctx.t, mode))
        forms[key + ":images"] = ImageUploader(ctx, defaults.get("product_images"))
    return forms[key], forms[key + ":images"]


def _drop_form(key):
    forms = st.session_state.get("forms", {})
    forms.pop(key, None)
    forms.pop(key + ":images", None)


def _set(form, path, value):
    if form.get_value(path) != value:
        form.set_value(path, value, should_dirty=True, should_touch=True, should_validate=True)


def _multi_select(ctx, form, key, name, label_key, options):
    field = MultiSelectField(form, name)
    chosen = st.multiselect(ctx.t(label_key), list(options), default=[i for i in field.items if i in options],
                            format_func=lambda i: options.get(i, i), key=f"{key}_{name}")
    for item in chosen:
        field.add_item(item)
    for item in field.items:
        if item not in chosen:
            field.remove_item(item)
    if field.has_error:
        st.caption(f":red[{field.error_message}]")


def _images(ctx, form, uploader, key):
    st.markdown(f"**{ctx.t('pages.product.productCreate.images')}**")
    cols = st.columns(4)
    for i, image in enumerate(list(uploader.images)):
        with cols[i % 4]:
            st.image(image["file_url"], caption=image["file_name"])
            if st.button(ctx.t("common.delete"), key=f"{key}_rm_{image['file_name']}"):
                uploader.remove(image["file_name"])
                _set(form, "product_images", list(uploader.images))
                st.rerun()

    uploaded = st.file_uploader(ctx.t("pages.product.productCreate.uploadImage"), type=["jpg", "jpeg", "png", "webp"],
                                key=f"{key}_upload")
    if uploaded is not None and st.button(ctx.t("common.upload"), key=f"{key}_do_upload"):
        file = widgets.uploaded_image(uploaded)
        result = general_image_manager().validate_image(file, t=ctx.t)
        if not result.is_valid:
            widgets.show_validation(result)
            return
        with st.spinner(ctx.t("common.loading")):
            uploader.upload(file.name, file.data)
        _set(form, "product_images", list(uploader.images))
        st.rerun()
    widgets.field_error(form, "product_images")


def _fields(ctx, form, uploader, key):
    _set(form, "product_name", st.text_input(ctx.t(product_label("product_name")),
                                             value=form.get_value("product_name") or "", key=f"{key}_name"))
    widgets.field_error(form, "product_name")

    c1, c2 = st.columns(2)
    _set(form, "product_price", c1.number_input(ctx.t(product_label("product_price")), min_value=0, step=1,
                                                value=int(form.get_value("product_price") or 0), key=f"{key}_price"))
    _set(form, "product_size", c2.number_input(ctx.t(product_label("product_size")), min_value=0, step=1,
                                               value=int(form.get_value("product_size") or 0), key=f"{key}_size"))
    widgets.field_error(form, "product_price")
    widgets.field_error(form, "product_size")

    c1, c2 = st.columns(2)
    current_type = form.get_value("product_type") or ProductType.NO_TYPE.value
    _set(form, "product_type", c1.selectbox(ctx.t(product_label("product_type")), TYPES,
                                            index=TYPES.index(current_type), key=f"{key}_type"))
    current_status = form.get_value("product_status") or ActiveStatus.INACTIVE.value
    _set(form, "product_status", c2.selectbox(ctx.t(product_label("product_status")), STATUSES,
                                              index=STATUSES.index(current_status), key=f"{key}_status",
                                              format_func=lambda s: ctx.t(f"status.{s}")))

    suppliers = {s["supplier_id"]: s["supplier_name"] for s in get_all_suppliers(ctx) or []}
    tags = {t["tag_id"]: t["tag_name"] for t in get_all_tags(ctx) or []}
    _multi_select(ctx, form, key, "vendor_id", "pages.product.productCreate.supplier", suppliers)
    _multi_select(ctx, form, key, "tag_id", "pages.product.productCreate.tag", tags)

    _images(ctx, form, uploader, key)

    for name in LOCALIZED_DETAIL_FIELDS:
        group = LocalizedFieldGroup(form, f"product_detail.{name}", product_label(name))
        widgets.localized_input(ctx, group, key, area=name in ("product_description", "introduction"))
    for name in PLAIN_DETAIL_FIELDS:
        path = f"product_detail.{name}"
        _set(form, path, st.text_input(ctx.t(product_label(name)), value=form.get_value(path) or "",
                                       key=f"{key}_{name}"))
        widgets.field_error(form, path)


def render_create(ctx, params):
    st.header(ctx.t("pages.product.productCreate.title"))
    key = "product:create"
    form, uploader = _session_form(ctx, key, product_to_form_data({}), "create")
    _fields(ctx, form, uploader, key)

    ready = check_required_fields_filled(form.values)
    if st.button(ctx.t("common.create"), type="primary", disabled=not ready):
        if not form.validate():
            st.error(ctx.t("validation.form.invalid"))
            return
        state = product_hooks.create_product(ctx, normalize_product_submission(form.values))
        if state.is_success:
            _drop_form(key)
            widgets.navigate("/products")


def _confirm_changes(ctx, form, original, suppliers, tags):
    changes = get_actual_changes(form, original, suppliers, tags)
    if not changes:
        st.info(ctx.t("pages.product.confirm.noChanges"))
        return False
    st.dataframe(pd.DataFrame([
        {
            ctx.t("pages.product.confirm.fieldName"): c.field_name,
            ctx.t("pages.product.confirm.originalValue"): c.original_value,
            ctx.t("pages.product.confirm.newValue"): c.new_value,
        }
        for c in changes
    ]), use_container_width=True, hide_index=True)
    return True


def render_edit(ctx, params):
    product_id = params.get("id")
    st.header(ctx.t("pages.product.productEdit.title"))
    with st.spinner(ctx.t("common.loading")):
        product = product_hooks.get_product(ctx, product_id)
    if not product:
        st.warning(ctx.t("common.notFound"))
        return

    original = product_to_form_data(product)
    key = f"product:edit:{product_id}"
    form, uploader = _session_form(ctx, key, original, "edit")
    _fields(ctx, form, uploader, key)

    changed = form.is_dirty or check_has_changes(form.values, original)
    with st.expander(ctx.t("pages.product.confirm.title"), expanded=changed):
        has_changes = _confirm_changes(ctx, form, original, get_all_suppliers(ctx), get_all_tags(ctx))
        if st.button(ctx.t("common.confirm"), type="primary", disabled=not has_changes, key=f"{key}_confirm"):
            if not form.validate():
                st.error(ctx.t("validation.form.invalid"))
                return
            payload = dict(normalize_product_submission(form.values), product_id=product_id)
            state = product_hooks.update_product(ctx, payload)
            if state.is_success:
                _drop_form(key)
                widgets.navigate("/products")
