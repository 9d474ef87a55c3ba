from backoffice.cache import MINUTE, QueryOptions
from backoffice.contracts.customer import customer_contract
from backoffice.hooks.base import page_key, page_query, request

LIST_OPTIONS = QueryOptions(stale_time=2 * MINUTE, gc_time=5 * MINUTE, refetch_on_mount=False)
# Always fetched fresh and dropped as soon as nothing reads it.
HISTORY_OPTIONS = QueryOptions(stale_time=0, gc_time=0)

FILTERS = ("user_id",)


def get_customers(ctx, query=None):
    query = query or {}

    def fetch():
        return request(ctx, customer_contract, "get_customers", "toast.customer.get.error",
                       query=page_query(query, FILTERS))

    return ctx.cache.fetch(page_key("customers", query, FILTERS), fetch, LIST_OPTIONS)


def get_transaction_history(ctx, user_id, pagination=None):
    if not user_id:
        return None
    pagination = pagination or {}
    query = dict(page_query(pagination) or {}, user_id=user_id)

    def fetch():
        return request(ctx, customer_contract, "get_transaction_history", "toast.customer.get.error",
                       query=query)

    key = ("transactionHistory", user_id) + page_key("", pagination)[1:3]
    return ctx.cache.fetch(key, fetch, HISTORY_OPTIONS)
