import streamlit as st

from backoffice.hooks.customers import get_customers, get_transaction_history
from backoffice.order_utils import order_status_text
from backoffice.pages import widgets

COLUMNS = {
    "user_id": "common.userId",
    "email": "pages.customer.email",
    "first_name": "pages.customer.firstName",
    "last_name": "pages.customer.lastName",
    "phone_number": "pages.customer.phone",
    "total_spent": "pages.customer.totalSpent",
    "order_count": "pages.customer.orderCount",
    "last_order_date": "pages.customer.lastOrderDate",
}
SORTABLE = {"total_spent": "pages.customer.totalSpent", "order_count": "pages.customer.orderCount"}


def render(ctx, params):
    st.header(ctx.t("dashboard.menu.customers.title"))
    user_id = st.text_input(ctx.t("common.search"), placeholder=ctx.t("common.userId"))
    sorting = widgets.sort_picker(ctx, "customers", SORTABLE)
    paging = st.session_state.get("customers_page", {"page": 1, "limit": 20})
    with st.spinner(ctx.t("common.loading")):
        envelope = get_customers(ctx, dict(paging, **sorting, user_id=user_id or None)) or {}
    rows = envelope.get("data") or []
    widgets.table(rows, COLUMNS, ctx.t)
    widgets.pager(ctx, "customers", envelope.get("total"))

    selected = st.selectbox(ctx.t("pages.customer.transactionHistory"), [""] + [r["user_id"] for r in rows])
    if selected:
        _history(ctx, selected)


def _history(ctx, user_id):
    with st.spinner(ctx.t("common.loading")):
        history = get_transaction_history(ctx, user_id) or {}
    orders = history.get("data") or []
    if not orders:
        st.info(ctx.t("common.noData"))
    for order in orders:
        with st.container(border=True):
            c1, c2, c3 = st.columns([2, 1, 1])
            c1.markdown(f"**{order['order_id']}**  \n{order.get('created_at', '')}")
            c2.write(order_status_text(order.get("order_status"), ctx.t))
            c3.write(order.get("total_order_fee"))
            for item in order.get("order_detail") or []:
                st.caption(f"{item.get('product_name')} × {item.get('size')} · {item.get('price')}")
