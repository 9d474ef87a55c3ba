import pandas as pd
import streamlit as st

from backoffice.contracts.orders import OrderStatus
from backoffice.hooks import orders as order_hooks
from backoffice.order_utils import order_copy_text, order_status_text
from backoffice.pages import widgets

COLUMNS = {
    "order_id": "order.orderNumber",
    "user_id": "common.userId",
    "order_status": "order.status",
    "total_order_fee": "order.totalAmount",
    "created_at": "order.createdAt",
}
SORTABLE = {"created_at": "order.createdAt", "total_order_fee": "order.totalAmount"}
STATUSES = [s.value for s in OrderStatus]


def _status_select(ctx, order, key):
    current = order.get("order_status") if order.get("order_status") in STATUSES else OrderStatus.NEW.value
    return st.selectbox(ctx.t("order.status"), STATUSES, index=STATUSES.index(current), key=key,
                        format_func=lambda s: order_status_text(s, ctx.t))


def render_list(ctx, params):
    st.header(ctx.t("dashboard.menu.orders.sub.orderList"))
    status = st.selectbox(ctx.t("order.status"), [""] + STATUSES,
                          format_func=lambda s: order_status_text(s, ctx.t) if s else ctx.t("common.all"))
    sorting = widgets.sort_picker(ctx, "orders", SORTABLE)
    paging = st.session_state.get("orders_page", {"page": 1, "limit": 20})

    with st.spinner(ctx.t("common.loading")):
        envelope = order_hooks.get_order_list(ctx, dict(paging, **sorting, order_status=status or None)) or {}
    rows = [dict(row, order_status=order_status_text(row.get("order_status"), ctx.t))
            for row in envelope.get("data") or []]
    widgets.table(rows, COLUMNS, ctx.t)
    widgets.pager(ctx, "orders", envelope.get("total"))

    for order in envelope.get("data") or []:
        c1, c2, c3 = st.columns([3, 2, 1])
        c1.write(order["order_id"])
        with c2:
            new_status = _status_select(ctx, order, key=f"status_{order['order_id']}")
        if new_status != order.get("order_status"):
            order_hooks.update_order_status(ctx, order["order_id"], new_status)
            st.rerun()
        if c3.button(ctx.t("common.view"), key=f"view_{order['order_id']}"):
            widgets.navigate(f"/orders/order-list/{order['order_id']}")


def render_detail(ctx, params):
    order_id = params.get("id")
    with st.spinner(ctx.t("common.loading")):
        order = order_hooks.get_order_detail(ctx, order_id)
    if not order:
        st.warning(ctx.t("common.notFound"))
        return

    st.header(f"{ctx.t('order.orderNumber')}: {order_id}")
    c1, c2 = st.columns(2)
    with c1:
        st.metric(ctx.t("order.totalAmount"), order.get("total_order_fee"))
        st.write(f"{ctx.t('order.remark')}: {order.get('remark') or '-'}")
        new_status = _status_select(ctx, order, key=f"detail_status_{order_id}")
        if new_status != order.get("order_status") and st.button(ctx.t("common.save")):
            order_hooks.update_order_status(ctx, order_id, new_status)
            st.rerun()
    with c2:
        contact = order.get("contact_info") or {}
        st.markdown(f"**{ctx.t('order.contactInfo')}**")
        st.write(contact.get("email", ""))
        st.write(contact.get("phone", ""))
        st.write(contact.get("address", ""))

    st.subheader(ctx.t("order.orderDetails"))
    items = order.get("order_detail") or []
    if items:
        st.dataframe(pd.DataFrame([
            {
                ctx.t("order.productName"): item.get("product_name"),
                ctx.t("order.productId"): item.get("product_id"),
                ctx.t("order.quantity"): item.get("size"),
                ctx.t("order.price"): item.get("price"),
                ctx.t("order.discountRemark"): item.get("promotion_note"),
            }
            for item in items
        ]), use_container_width=True, hide_index=True)

    with st.expander(ctx.t("common.copy")):
        st.code(order_copy_text(order, ctx.t), language=None)
