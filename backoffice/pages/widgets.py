"""Streamlit pieces shared by every page."""
import pandas as pd
import streamlit as st

from backoffice.forms.lang_fields import LocalizedFieldGroup
from backoffice.image_validation import ImageFile
from backoffice.notifications import DESTRUCTIVE, SUCCESS
from backoffice.routing import build_breadcrumbs, normalize_path
from backoffice.schemas import LANGUAGES
from backoffice.table import from_api_sorting, page_count, to_api_sorting

PAGE_SIZES = (10, 20, 50)


def current_path():
    return st.session_state.get("path", "/")


def navigate(path):
    st.session_state["path"] = normalize_path(path)
    st.rerun()


def flush_notifications(ctx):
    for note in ctx.notifier.drain():
        if note.variant == DESTRUCTIVE:
            st.error(f"**{note.title}**  \n{note.description}")
        else:
            st.toast(f"**{note.title}**  \n{note.description}", icon="✅" if note.variant == SUCCESS else None)


def breadcrumbs(ctx):
    crumbs = build_breadcrumbs(current_path(), ctx.t)
    cols = st.columns(len(crumbs) * 2)
    for i, crumb in enumerate(crumbs):
        with cols[i * 2]:
            if crumb.is_active:
                st.markdown(f"**{crumb.label}**")
            elif st.button(crumb.label, key=f"crumb_{crumb.path}"):
                navigate(crumb.path)
        if not crumb.is_active:
            cols[i * 2 + 1].markdown("›")


def unauthorized(ctx):
    st.error(ctx.t("pages.unauthorized.title"))
    st.caption(ctx.t("pages.unauthorized.description"))


def pager(ctx, key, total):
    """Page and page size pickers; returns ``{"page", "limit"}``."""
    state = st.session_state.setdefault(f"{key}_page", {"page": 1, "limit": 20})
    c1, c2, c3, c4 = st.columns([1, 1, 2, 1])
    pages = page_count(total, state["limit"])
    if c1.button(ctx.t("common.previous"), key=f"{key}_prev", disabled=state["page"] <= 1):
        state["page"] -= 1
        st.rerun()
    if c2.button(ctx.t("common.next"), key=f"{key}_next", disabled=state["page"] >= pages):
        state["page"] += 1
        st.rerun()
    c3.caption(ctx.t("common.pageOf", page=state["page"], total=pages))
    limit = c4.selectbox(ctx.t("common.pageSize"), PAGE_SIZES, index=PAGE_SIZES.index(state["limit"])
                         if state["limit"] in PAGE_SIZES else 1, key=f"{key}_limit")
    if limit != state["limit"]:
        state.update(page=1, limit=limit)
        st.rerun()
    return dict(state)


def sort_picker(ctx, key, columns):
    """Column and direction selectors; returns ``{sort_by, order}`` or ``{}``."""
    state = st.session_state.setdefault(f"{key}_sort", [])
    current = to_api_sorting(state)
    c1, c2 = st.columns(2)
    options = [""] + list(columns)
    sort_by = c1.selectbox(ctx.t("common.sortBy"), options, key=f"{key}_sort_by",
                           index=options.index(current.get("sort_by", "")),
                           format_func=lambda c: ctx.t(columns[c]) if c else "-")
    order = c2.radio(ctx.t("common.order"), ["ASC", "DESC"], horizontal=True, key=f"{key}_order",
                     index=1 if current.get("order") == "DESC" else 0)
    new_state = from_api_sorting({"sort_by": sort_by, "order": order})
    if new_state != state:
        st.session_state[f"{key}_sort"] = new_state
        st.session_state.get(f"{key}_page", {})["page"] = 1
    return to_api_sorting(new_state)


def table(rows, columns, t):
    """Render ``rows`` with ``columns`` (field -> label key) as a dataframe."""
    if not rows:
        st.info(t("common.noData"))
        return
    df = pd.DataFrame([{t(label): row.get(field) for field, label in columns.items()} for row in rows])
    st.dataframe(df, use_container_width=True, hide_index=True)


def localized_input(ctx, group: LocalizedFieldGroup, key_prefix, area=False):
    st.markdown(f"**{ctx.t(group.label_key)}**")
    values = group.values
    for col, lang in zip(st.columns(len(LANGUAGES)), LANGUAGES):
        widget = col.text_area if area else col.text_input
        value = widget(lang.upper(), value=values[lang], key=f"{key_prefix}_{group.name}_{lang}")
        if value != values[lang]:
            group.set(lang, value)
    if group.error:
        st.caption(f":red[{group.error}]")


def field_error(form, path):
    message = form.error_for(path)
    if message:
        st.caption(f":red[{message}]")


def uploaded_image(uploaded) -> ImageFile:
    return ImageFile(name=uploaded.name, data=uploaded.getvalue(), content_type=uploaded.type or "")


def show_validation(result):
    for error in result.errors:
        st.error(error.message)
    for warning in result.warnings:
        st.warning(warning.message)
