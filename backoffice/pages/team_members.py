import streamlit as st

from backoffice.contracts.user import UserRole
from backoffice.hooks import staff as staff_hooks
from backoffice.pages import widgets

COLUMNS = {
    "staff_id": "common.id",
    "account": "pages.staff.account",
    "email": "pages.staff.email",
    "first_name": "pages.staff.firstName",
    "last_name": "pages.staff.lastName",
    "role": "pages.staff.role",
}
ROLES = [r.value for r in UserRole]


def render(ctx, params):
    st.header(ctx.t("dashboard.menu.teamMembers.title"))
    role = st.selectbox(ctx.t("pages.staff.role"), [""] + ROLES, format_func=lambda r: r or ctx.t("common.all"))
    paging = st.session_state.get("staff_page", {"page": 1, "limit": 20})
    with st.spinner(ctx.t("common.loading")):
        envelope = staff_hooks.get_staff(ctx, dict(paging, role=role or None)) or {}
    rows = envelope.get("data") or []
    widgets.table(rows, COLUMNS, ctx.t)
    widgets.pager(ctx, "staff", envelope.get("total"))

    for row in rows:
        c1, c2 = st.columns([5, 1])
        c1.write(f"{row['account']} ({row['role']})")
        if c2.button(ctx.t("common.delete"), key=f"delete_{row['staff_id']}"):
            staff_hooks.delete_staff(ctx, row["staff_id"])
            st.rerun()

    with st.expander(ctx.t("pages.staff.create")):
        with st.form("staff_create"):
            account = st.text_input(ctx.t("pages.staff.account"))
            email = st.text_input(ctx.t("pages.staff.email"))
            password = st.text_input(ctx.t("pages.staff.password"), type="password")
            first_name = st.text_input(ctx.t("pages.staff.firstName"))
            last_name = st.text_input(ctx.t("pages.staff.lastName"))
            new_role = st.selectbox(ctx.t("pages.staff.role"), ROLES)
            if st.form_submit_button(ctx.t("common.create")):
                staff_hooks.create_staff(ctx, {
                    "account": account, "email": email, "password": password,
                    "first_name": first_name, "last_name": last_name, "role": new_role,
                })
                st.rerun()
