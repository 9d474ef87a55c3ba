import streamlit as st

from backoffice.forms.image_upload import ImageUploader
from backoffice.forms.schemas import article_label, validate_article_form
from backoffice.forms.state import FormState
from backoffice.forms.transformers import normalize_article_submission
from backoffice.hooks import articles as article_hooks
from backoffice.image_validation import general_image_manager
from backoffice.pages import widgets

COLUMNS = {
    "title": "pages.article.title",
    "nick_name": "pages.article.author",
    "tags": "pages.article.tags",
    "updated_at": "common.updatedAt",
}


def render_list(ctx, params):
    st.header(ctx.t("dashboard.menu.articles.title"))
    if st.button(ctx.t("common.create"), type="primary"):
        widgets.navigate("/articles/create")
    sorting = widgets.sort_picker(ctx, "articles", {"updated_at": "common.updatedAt", "title": "pages.article.title"})
    paging = st.session_state.get("articles_page", {"page": 1, "limit": 20})
    with st.spinner(ctx.t("common.loading")):
        envelope = article_hooks.get_article_list(ctx, dict(paging, **sorting)) or {}
    rows = envelope.get("data") or []
    widgets.table([dict(r, tags=", ".join(r.get("tags") or [])) for r in rows], COLUMNS, ctx.t)
    widgets.pager(ctx, "articles", envelope.get("total"))
    for row in rows:
        c1, c2, c3 = st.columns([4, 1, 1])
        c1.write(row["title"])
        if c2.button(ctx.t("common.edit"), key=f"edit_{row['article_id']}"):
            widgets.navigate(f"/articles/edit/{row['article_id']}")
        if c3.button(ctx.t("common.delete"), key=f"delete_{row['article_id']}"):
            article_hooks.delete_article(ctx, row["article_id"])
            st.rerun()


def render_form(ctx, params):
    article_id = params.get("id")
    article = {}
    if article_id:
        with st.spinner(ctx.t("common.loading")):
            article = article_hooks.get_article(ctx, article_id)
        if not article:
            st.warning(ctx.t("common.notFound"))
            return
    st.header(ctx.t("pages.article.editTitle" if article_id else "pages.article.createTitle"))

    key = f"article:{article_id or 'create'}"
    forms = st.session_state.setdefault("forms", {})
    if key not in forms:
        defaults = {
            "title": article.get("title", ""),
            "describe": article.get("describe") or "",
            "tags": list(article.get("tags") or []),
            "image_url": article.get("image_url"),
            "content_html": article.get("content_html", ""),
        }
        forms[key] = FormState(defaults, validator=lambda values: validate_article_form(values, ctx.t))
        forms[key + ":images"] = ImageUploader(ctx)
    form, uploader = forms[key], forms[key + ":images"]

    title = st.text_input(ctx.t(article_label("title")), value=form.get_value("title") or "", key=f"{key}_title")
    form.set_value("title", title, should_dirty=True)
    widgets.field_error(form, "title")
    describe = st.text_area(ctx.t(article_label("describe")), value=form.get_value("describe") or "",
                            key=f"{key}_describe")
    form.set_value("describe", describe, should_dirty=True)
    tags = st.text_input(ctx.t(article_label("tags")), value=", ".join(form.get_value("tags") or []),
                         key=f"{key}_tags")
    form.set_value("tags", [tag.strip() for tag in tags.split(",") if tag.strip()], should_dirty=True)

    cover = uploader.images[-1] if uploader.images else form.get_value("image_url")
    if cover:
        st.image(cover["file_url"], width=320)
    uploaded = st.file_uploader(ctx.t(article_label("image_url")), type=["jpg", "jpeg", "png", "webp"],
                                key=f"{key}_cover")
    if uploaded is not None and st.button(ctx.t("common.upload"), key=f"{key}_upload"):
        file = widgets.uploaded_image(uploaded)
        result = general_image_manager().validate_image(file, t=ctx.t)
        if result.is_valid:
            uploader.upload(file.name, file.data)
            if uploader.images:
                form.set_value("image_url", uploader.images[-1], should_dirty=True)
            st.rerun()
        widgets.show_validation(result)
    widgets.field_error(form, "image_url")

    content = st.text_area(ctx.t("pages.article.content"), value=form.get_value("content_html") or "",
                           height=300, key=f"{key}_content")
    form.set_value("content_html", content, should_dirty=True)
    widgets.field_error(form, "content_html")

    if st.button(ctx.t("common.save"), type="primary"):
        if not form.validate():
            st.error(ctx.t("validation.form.invalid"))
            return
        claims = ctx.auth.claims
        payload = normalize_article_submission(
            dict(form.values, user_id=article.get("user_id") or claims.get("sub", ""),
                 nick_name=article.get("nick_name") or claims.get("name", "")),
            uploader.images[-1:],
        )
        if article_id:
            state = article_hooks.update_article(ctx, dict(payload, article_id=article_id))
        else:
            state = article_hooks.create_article(ctx, payload)
        if state.is_success:
            forms.pop(key, None)
            forms.pop(key + ":images", None)
            widgets.navigate("/articles")
