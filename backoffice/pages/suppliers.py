import streamlit as st

from backoffice.forms.schemas import validate_supplier_form
from backoffice.forms.transformers import normalize_supplier_submission
from backoffice.hooks import suppliers as supplier_hooks
from backoffice.pages import widgets

COLUMNS = {
    "supplier_id": "common.id",
    "supplier_name": "pages.supplier.supplierName",
    "phone": "pages.supplier.phone",
    "email": "pages.supplier.email",
    "address": "pages.supplier.address",
    "remark": "pages.supplier.remark",
}


def _supplier_form(ctx, key, supplier=None):
    supplier = supplier or {}
    contact = supplier.get("contact_info") or {}
    with st.form(key):
        values = {
            "supplier_name": st.text_input(ctx.t("pages.supplier.supplierName"), value=supplier.get("supplier_name", "")),
            "contact_info": {
                "phone": st.text_input(ctx.t("pages.supplier.phone"), value=contact.get("phone", "")),
                "email": st.text_input(ctx.t("pages.supplier.email"), value=contact.get("email", "")),
                "address": st.text_input(ctx.t("pages.supplier.address"), value=contact.get("address", "")),
            },
            "remark": st.text_input(ctx.t("pages.supplier.remark"), value=supplier.get("remark") or ""),
        }
        if not st.form_submit_button(ctx.t("common.save")):
            return None
    errors = validate_supplier_form(values, ctx.t)
    for message in errors.values():
        st.error(message)
    if errors:
        return None
    if supplier.get("supplier_id"):
        values["supplier_id"] = supplier["supplier_id"]
    return normalize_supplier_submission(values)


def render(ctx, params):
    st.header(ctx.t("dashboard.menu.suppliers.title"))
    search = st.text_input(ctx.t("common.search"))
    paging = st.session_state.get("suppliers_page", {"page": 1, "limit": 20})
    with st.spinner(ctx.t("common.loading")):
        envelope = supplier_hooks.get_suppliers(ctx, dict(paging, search=search or None)) or {}
    rows = envelope.get("data") or []
    widgets.table([dict(r, **(r.get("contact_info") or {})) for r in rows], COLUMNS, ctx.t)
    widgets.pager(ctx, "suppliers", envelope.get("total"))

    for row in rows:
        with st.expander(row["supplier_name"]):
            payload = _supplier_form(ctx, f"supplier_{row['supplier_id']}", row)
            if payload and supplier_hooks.update_supplier(ctx, payload).is_success:
                st.rerun()
            if st.button(ctx.t("common.delete"), key=f"delete_{row['supplier_id']}"):
                supplier_hooks.delete_supplier(ctx, row["supplier_id"])
                st.rerun()

    with st.expander(ctx.t("pages.supplier.create")):
        payload = _supplier_form(ctx, "supplier_create")
        if payload and supplier_hooks.create_supplier(ctx, payload).is_success:
            st.rerun()
