from backoffice.cache import MINUTE, QueryOptions
from backoffice.contracts.product import product_contract
from backoffice.hooks.base import first, mutate, page_key, page_query, request, unwrap

LIST_OPTIONS = QueryOptions(stale_time=2 * MINUTE, gc_time=5 * MINUTE)
ALL_OPTIONS = QueryOptions(stale_time=5 * MINUTE, gc_time=10 * MINUTE)

FILTERS = ("product_status",)


def get_product_list(ctx, query=None):
    """One page of products as the raw envelope (``data`` plus ``total``)."""
    query = query or {}

    def fetch():
        return request(ctx, product_contract, "get_products", "toast.product.get.error",
                       query=page_query(query, FILTERS))

    return ctx.cache.fetch(page_key("productList", query, FILTERS), fetch, LIST_OPTIONS)


def get_all_products(ctx):
    def fetch():
        return unwrap(request(ctx, product_contract, "get_all_products", "toast.product.get.error"))

    return ctx.cache.fetch(("allProducts",), fetch, ALL_OPTIONS)


def get_product(ctx, product_id, product_status=None):
    if not product_id:
        return None
    lookup = {"product_id": product_id, "product_status": product_status}

    def fetch():
        return first(unwrap(request(ctx, product_contract, "get_product", "toast.product.get.error",
                                    query=lookup)))

    return ctx.cache.fetch(("product", product_id, product_status), fetch)


def _invalidate(product_id=None):
    keys = ["productList", "allProducts"]
    if product_id:
        keys.append(("product", product_id))
    return keys


def create_product(ctx, data):
    def run():
        return request(ctx, product_contract, "create_product", "toast.product.create.error", body=data)

    return mutate(ctx, run, invalidate=_invalidate(), success_key="toast.product.create.success")


def update_product(ctx, data):
    def run():
        return request(ctx, product_contract, "update_product", "toast.product.update.error", body=data)

    return mutate(ctx, run, invalidate=_invalidate(data.get("product_id")),
                  success_key="toast.product.update.success")


def delete_product(ctx, product_id):
    def run():
        return request(ctx, product_contract, "delete_product", "toast.product.delete.error",
                       body={"product_id": product_id})

    return mutate(ctx, run, invalidate=_invalidate(product_id), success_key="toast.product.delete.success")
