import streamlit as st

from backoffice.banner_sort import BannerSorter
from backoffice.forms.image_upload import ImageUploader
from backoffice.forms.schemas import banner_label, validate_banner_form
from backoffice.forms.state import FormState
from backoffice.forms.transformers import normalize_banner_submission
from backoffice.hooks import banners as banner_hooks
from backoffice.image_validation import banner_manager
from backoffice.pages import widgets
from backoffice.schemas import ActiveStatus

STATUSES = [s.value for s in ActiveStatus]


def _banner_row(ctx, sorter, banner, index, active):
    c1, c2, c3, c4, c5 = st.columns([4, 1, 1, 1, 1])
    c1.markdown(f"**{banner.get('title')}**  \n{banner.get('redirect_url')}")
    bid = banner["banner_id"]
    if active:
        order = list(sorter.active)
        if c2.button("↑", key=f"up_{bid}", disabled=index == 0 or sorter.busy):
            order[index - 1], order[index] = order[index], order[index - 1]
            sorter.reorder(order)
            st.rerun()
        if c3.button("↓", key=f"down_{bid}", disabled=index == len(order) - 1 or sorter.busy):
            order[index + 1], order[index] = order[index], order[index + 1]
            sorter.reorder(order)
            st.rerun()
        if c4.button(ctx.t("pages.banner.list.demote"), key=f"demote_{bid}"):
            sorter.demote(banner)
            st.rerun()
    elif c4.button(ctx.t("pages.banner.list.promote"), key=f"promote_{bid}"):
        sorter.promote(banner)
        st.rerun()
    if c5.button(ctx.t("common.edit"), key=f"edit_{bid}"):
        widgets.navigate(f"/banners/edit/{bid}")


def render_list(ctx, params):
    st.header(ctx.t("dashboard.menu.banners.title"))
    if st.button(ctx.t("common.create"), type="primary"):
        widgets.navigate("/banners/create")

    paging = st.session_state.get("banners_page", {"page": 1, "limit": 50})
    with st.spinner(ctx.t("common.loading")):
        envelope = banner_hooks.get_banner_list(ctx, paging) or {}
    banners = envelope.get("data") or []
    sorter = BannerSorter(
        ctx,
        active=[b for b in banners if b.get("banner_status") == ActiveStatus.ACTIVE.value],
        inactive=[b for b in banners if b.get("banner_status") != ActiveStatus.ACTIVE.value],
    )

    st.subheader(ctx.t("pages.banner.list.active"))
    if not sorter.active:
        st.info(ctx.t("common.noData"))
    for index, banner in enumerate(sorter.active):
        _banner_row(ctx, sorter, banner, index, active=True)

    st.subheader(ctx.t("pages.banner.list.inactive"))
    if not sorter.inactive:
        st.info(ctx.t("common.noData"))
    for index, banner in enumerate(sorter.inactive):
        _banner_row(ctx, sorter, banner, index, active=False)
    widgets.pager(ctx, "banners", envelope.get("total"))


def _form_defaults(banner):
    if not banner:
        return {"title": "", "redirect_url": "", "banner_status": ActiveStatus.INACTIVE.value,
                "desktop_image_url": "", "mobile_image_url": ""}
    return {
        "banner_id": banner["banner_id"],
        "title": banner.get("title", ""),
        "redirect_url": banner.get("redirect_url", ""),
        "banner_status": banner.get("banner_status", ActiveStatus.INACTIVE.value),
        "sort_order": banner.get("sort_order"),
        "desktop_image_url": (banner.get("desktop_image_url") or {}).get("file_url", ""),
        "mobile_image_url": (banner.get("mobile_image_url") or {}).get("file_url", ""),
    }


def _image_input(ctx, form, uploaders, kind, key):
    path = f"{kind}_image_url"
    st.markdown(f"**{ctx.t(banner_label(path))}**")
    if form.get_value(path):
        st.image(form.get_value(path), width=320)
    uploaded = st.file_uploader(ctx.t("pages.banner.bannerCreate.webpOnly"), type=["webp"], key=f"{key}_{kind}")
    if uploaded is not None and st.button(ctx.t("common.upload"), key=f"{key}_{kind}_upload"):
        file = widgets.uploaded_image(uploaded)
        result = banner_manager(kind).validate_image(file, image_type=kind, t=ctx.t)
        if not result.is_valid:
            widgets.show_validation(result)
            return
        uploader = uploaders[kind]
        if uploader.upload(file.name, file.data).is_success and uploader.images:
            form.set_value(path, uploader.images[-1]["file_url"], should_dirty=True, should_touch=True,
                           should_validate=True)
        st.rerun()
    widgets.field_error(form, path)


def render_form(ctx, params):
    banner_id = params.get("id")
    banner = None
    if banner_id:
        with st.spinner(ctx.t("common.loading")):
            banner = banner_hooks.get_banner(ctx, banner_id)
        if not banner:
            st.warning(ctx.t("common.notFound"))
            return
    st.header(ctx.t("pages.banner.bannerEdit.title" if banner_id else "pages.banner.bannerCreate.pageTitle"))

    key = f"banner:{banner_id or 'create'}"
    forms = st.session_state.setdefault("forms", {})
    if key not in forms:
        forms[key] = FormState(_form_defaults(banner), validator=lambda values: validate_banner_form(values, ctx.t))
        forms[key + ":images"] = {"desktop": ImageUploader(ctx), "mobile": ImageUploader(ctx)}
    form, uploaders = forms[key], forms[key + ":images"]

    for path in ("title", "redirect_url"):
        value = st.text_input(ctx.t(banner_label(path)), value=form.get_value(path) or "", key=f"{key}_{path}")
        if value != form.get_value(path):
            form.set_value(path, value, should_dirty=True, should_touch=True, should_validate=True)
        widgets.field_error(form, path)
    status = st.selectbox(ctx.t("pages.banner.bannerCreate.status"), STATUSES,
                          index=STATUSES.index(form.get_value("banner_status")), key=f"{key}_status",
                          format_func=lambda s: ctx.t(f"status.{s}"))
    form.set_value("banner_status", status, should_dirty=True)

    c1, c2 = st.columns(2)
    with c1:
        _image_input(ctx, form, uploaders, "desktop", key)
    with c2:
        _image_input(ctx, form, uploaders, "mobile", key)

    if st.button(ctx.t("common.save"), type="primary"):
        if not form.validate():
            st.error(ctx.t("validation.form.invalid"))
            return
        latest = {kind: (u.images[-1] if u.images else None) for kind, u in uploaders.items()}
        payload = normalize_banner_submission(form.values, latest["desktop"], latest["mobile"])
        if banner_id:
            state = banner_hooks.update_banner(ctx, payload)
        else:
            payload.pop("banner_id", None)
            state = banner_hooks.create_banner(ctx, payload)
        if state.is_success:
            forms.pop(key, None)
            forms.pop(key + ":images", None)
            widgets.navigate("/banners")
