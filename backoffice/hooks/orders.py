import logging

from backoffice.cache import MINUTE, QueryOptions
from backoffice.contracts.orders import batch_order_contract, order_contract
from backoffice.hooks.base import first, mutate, page_key, page_query, request, unwrap

logger = logging.getLogger(__name__)

LIST_OPTIONS = QueryOptions(stale_time=2 * MINUTE, gc_time=5 * MINUTE)
DETAIL_OPTIONS = QueryOptions(stale_time=MINUTE, gc_time=5 * MINUTE)

FILTERS = ("order_status",)


def get_order_list(ctx, query=None):
    query = query or {}

    def fetch():
        return request(ctx, order_contract, "get_orders", "toast.order.get.error",
                       query=page_query(query, FILTERS))

    return ctx.cache.fetch(page_key("orderList", query, FILTERS), fetch, LIST_OPTIONS)


def get_order(ctx, order_id):
    if not order_id:
        return None

    def fetch():
        return first(unwrap(request(ctx, order_contract, "get_order", "toast.order.get.error",
                                    query={"order_id": order_id})))

    return ctx.cache.fetch(("order", order_id), fetch)


def find_cached_order(ctx, order_id):
    """Look an order up in any cached order list page."""
    for _, envelope in ctx.cache.find_all("orderList"):
        for order in unwrap(envelope) or []:
            if order.get("order_id") == order_id:
                return order
    return None


def get_order_detail(ctx, order_id):
    """Order detail seeded from cached lists so the page renders without waiting."""
    if not order_id:
        return None
    key = ("orderDetail", order_id)
    if ctx.cache.get_query_data(key) is None:
        cached = find_cached_order(ctx, order_id)
        if cached is not None:
            logger.debug("Seeding order %s from list cache", order_id)
            ctx.cache.set_query_data(key, cached, DETAIL_OPTIONS)

    def fetch():
        return get_order(ctx, order_id)

    return ctx.cache.fetch(key, fetch, DETAIL_OPTIONS)


def _invalidate(order_id=None):
    keys = ["orderList"]
    if order_id:
        keys += [("order", order_id), ("orderDetail", order_id)]
    return keys


def update_order(ctx, data):
    def run():
        return request(ctx, order_contract, "update_order", "toast.order.update.error", body=data)

    return mutate(ctx, run, invalidate=_invalidate(data.get("order_id")),
                  success_key="toast.order.update.success")


def update_order_status(ctx, order_id, order_status):
    def run():
        return request(ctx, order_contract, "update_order_status", "toast.order.update.error",
                       body={"order_id": order_id, "order_status": order_status})

    return mutate(ctx, run, invalidate=_invalidate(order_id), success_key="toast.order.update.success")


def delete_order(ctx, order_id):
    def run():
        return request(ctx, order_contract, "delete_order", "toast.order.delete.error",
                       params={"orderId": order_id})

    return mutate(ctx, run, invalidate=_invalidate(order_id), success_key="toast.order.delete.success")


def get_batch_orders(ctx):
    def fetch():
        return unwrap(request(ctx, batch_order_contract, "get_batch_orders", "toast.order.get.error"))

    return ctx.cache.fetch(("batchOrders",), fetch, LIST_OPTIONS)


def update_batch_order(ctx, order_id, data):
    def run():
        return request(ctx, batch_order_contract, "update_batch_order", "toast.order.update.error",
                       body=data, params={"orderId": order_id})

    return mutate(ctx, run, invalidate=["batchOrders"] + _invalidate(order_id),
                  success_key="toast.order.update.success")
