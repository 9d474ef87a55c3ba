import streamlit as st

from backoffice.contracts.user import UserRole
from backoffice.hooks import users as user_hooks
from backoffice.pages import widgets

COLUMNS = {
    "user_id": "common.userId",
    "email": "pages.user.email",
    "first_name": "pages.user.firstName",
    "last_name": "pages.user.lastName",
    "role": "pages.user.role",
}
ROLES = [r.value for r in UserRole]


def render_list(ctx, params):
    st.header(ctx.t("dashboard.menu.users.title"))
    permissions = user_hooks.get_user_permissions(ctx)
    if not permissions.can_view_user_list:
        widgets.unauthorized(ctx)
        return
    paging = st.session_state.get("users_page", {"page": 1, "limit": 20})
    with st.spinner(ctx.t("common.loading")):
        users = user_hooks.get_user_list(ctx, paging) or []
    widgets.table(users, COLUMNS, ctx.t)
    widgets.pager(ctx, "users", None)

    if permissions.can_edit_user_role:
        for user in users:
            c1, c2 = st.columns([5, 1])
            c1.write(f"{user.get('email')} ({user.get('role')})")
            if c2.button(ctx.t("common.edit"), key=f"edit_{user['user_id']}"):
                widgets.navigate(f"/users/edit/{user['user_id']}")


def render_edit(ctx, params):
    user_id = params.get("id")
    permissions = user_hooks.get_user_permissions(ctx)
    if not permissions.can_edit_user_role:
        widgets.unauthorized(ctx)
        return
    st.header(ctx.t("pages.user.editRole"))
    st.write(user_id)
    role = st.selectbox(ctx.t("pages.user.role"), ROLES)
    if st.button(ctx.t("common.save"), type="primary"):
        if user_hooks.update_user_role(ctx, user_id, role).is_success:
            widgets.navigate("/users")
