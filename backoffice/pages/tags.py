import streamlit as st

from backoffice.hooks import tags as tag_hooks
from backoffice.pages import widgets

COLUMNS = {"tag_id": "common.id", "tag_name": "pages.tag.tagName"}


def render(ctx, params):
    st.header(ctx.t("dashboard.menu.tags.title"))
    search = st.text_input(ctx.t("common.search"))
    sorting = widgets.sort_picker(ctx, "tags", {"tag_id": "common.id", "tag_name": "pages.tag.tagName"})
    paging = st.session_state.get("tags_page", {"page": 1, "limit": 20})
    with st.spinner(ctx.t("common.loading")):
        envelope = tag_hooks.get_tags(ctx, dict(paging, **sorting, search=search or None)) or {}
    rows = envelope.get("data") or []
    widgets.table(rows, COLUMNS, ctx.t)
    widgets.pager(ctx, "tags", envelope.get("total"))

    for row in rows:
        c1, c2, c3 = st.columns([4, 1, 1])
        name = c1.text_input(ctx.t("pages.tag.tagName"), value=row["tag_name"], key=f"tag_{row['tag_id']}",
                             label_visibility="collapsed")
        if c2.button(ctx.t("common.save"), key=f"save_{row['tag_id']}", disabled=name == row["tag_name"] or not name):
            tag_hooks.update_tag(ctx, row["tag_id"], name)
            st.rerun()
        if c3.button(ctx.t("common.delete"), key=f"delete_{row['tag_id']}"):
            tag_hooks.delete_tag(ctx, row["tag_id"])
            st.rerun()

    with st.form("tag_create", clear_on_submit=True):
        name = st.text_input(ctx.t("pages.tag.tagName"))
        if st.form_submit_button(ctx.t("common.create")) and name:
            tag_hooks.create_tag(ctx, name)
            st.rerun()
