import streamlit as st

from backoffice.hooks.users import get_user_permissions, get_user_profile


def render(ctx, params):
    st.header(ctx.t("pages.home.title"))
    profile = get_user_profile(ctx) or {}
    name = " ".join(filter(None, [profile.get("first_name"), profile.get("last_name")])) or profile.get("email", "")
    st.write(ctx.t("pages.home.welcome", name=name))
    permissions = get_user_permissions(ctx)
    st.caption(f"{ctx.t('pages.user.role')}: {permissions.user_role.value}")
