import logging

import streamlit as st

from backoffice import config
from backoffice.auth import AuthSession, SignInError
from backoffice.context import AppContext
from backoffice.hooks.users import get_user_permissions, prefetch_user_role, resolve_access
from backoffice.i18n import LOCALES, LanguagePreference, Translator
from backoffice.pages import PAGES, widgets
from backoffice.permissions import AccessGate, AccessState
from backoffice.routing import HOME, LOGIN, MENU, match

logger = logging.getLogger("app_ui")

LANGUAGE_NAMES = {"zh": "中文", "en": "English", "th": "ไทย"}

st.set_page_config(page_title="Backoffice", page_icon="🗂️", layout="wide")

# --- SESSION ---
if "ctx" not in st.session_state:
    config.configure_logging()
    st.session_state["ctx"] = AppContext(
        auth=AuthSession(),
        translator=Translator(preference=LanguagePreference()),
    )
    st.session_state["gate"] = AccessGate()
    st.session_state.setdefault("path", HOME)
    st.session_state.setdefault("forms", {})

ctx: AppContext = st.session_state["ctx"]
gate: AccessGate = st.session_state["gate"]

# Notifications left over from a run cut short by st.rerun()
widgets.flush_notifications(ctx)


def sign_out():
    ctx.sign_out()
    gate.refresh()
    st.session_state["forms"] = {}
    st.session_state["path"] = LOGIN


# ==========================================
# SIDEBAR
# ==========================================
with st.sidebar:
    st.title(ctx.t("dashboard.title"))
    lang = st.selectbox(
        ctx.t("common.language"), LOCALES,
        index=LOCALES.index(ctx.translator.language),
        format_func=lambda code: LANGUAGE_NAMES.get(code, code),
    )
    if lang != ctx.translator.language:
        ctx.translator.change_language(lang)
        st.rerun()

    if not ctx.auth.signed_in:
        with st.form("sign_in"):
            email = st.text_input(ctx.t("auth.email"))
            password = st.text_input(ctx.t("auth.password"), type="password")
            if st.form_submit_button(ctx.t("auth.signIn")):
                try:
                    ctx.auth.sign_in(email, password)
                    gate.refresh()
                    widgets.navigate(HOME)
                except SignInError as e:
                    logger.info("Sign-in rejected for %s", email)
                    st.error(ctx.t("auth.signInFailed"))
                    st.caption(str(e))
    else:
        st.caption(ctx.auth.claims.get("sub", ""))
        if st.button(ctx.t("auth.signOut")):
            sign_out()
            st.rerun()
        st.divider()
        if (gate.permissions or get_user_permissions(ctx)).can_view_user_list and st.button(
                ctx.t("dashboard.menu.users.title"), key="menu_/users", use_container_width=True):
            widgets.navigate("/users")
        for item in MENU:
            if st.button(ctx.t(item.label), key=f"menu_{item.path}", use_container_width=True):
                widgets.navigate(item.path)
            for sub in item.sub:
                if st.button(f"· {ctx.t(sub.label)}", key=f"menu_{sub.path}", use_container_width=True):
                    widgets.navigate(sub.path)

# ==========================================
# CONTENT
# ==========================================
if not ctx.auth.signed_in:
    st.info(ctx.t("auth.signInPrompt"))
else:
    prefetch_user_role(ctx)
    if gate.state == AccessState.LOADING:
        with st.spinner(ctx.t("common.loading")):
            resolve_access(ctx, gate)

    if gate.state == AccessState.DENIED:
        widgets.unauthorized(ctx)
        if st.button(ctx.t("auth.signOut"), key="denied_sign_out"):
            sign_out()
            st.rerun()
    else:
        widgets.breadcrumbs(ctx)
        found = match(widgets.current_path())
        if found is None or found[0].page not in PAGES:
            st.warning(ctx.t("common.notFound"))
            if st.button(ctx.t("breadcrumb.home")):
                widgets.navigate(HOME)
        else:
            route, params = found
            PAGES[route.page](ctx, params)

widgets.flush_notifications(ctx)
