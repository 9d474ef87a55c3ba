from backoffice.cache import MINUTE, QueryOptions
from backoffice.contracts.supplier import supplier_contract
from backoffice.hooks.base import mutate, page_key, page_query, request, unwrap

OPTIONS = QueryOptions(stale_time=2 * MINUTE, gc_time=5 * MINUTE)

FILTERS = ("search",)


def get_all_suppliers(ctx):
    def fetch():
        return unwrap(request(ctx, supplier_contract, "get_all_suppliers", "toast.supplier.get.error"))

    return ctx.cache.fetch(("suppliers", "all"), fetch, OPTIONS)


def get_suppliers(ctx, query=None):
    query = query or {}

    def fetch():
        return request(ctx, supplier_contract, "get_suppliers", "toast.supplier.get.error",
                       query=page_query(query, FILTERS))

    return ctx.cache.fetch(page_key("suppliers", query, FILTERS), fetch, OPTIONS)


def get_supplier(ctx, supplier_id):
    def fetch():
        return unwrap(request(ctx, supplier_contract, "get_supplier", "toast.supplier.get.error",
                              query={"supplier_id": supplier_id}))

    return ctx.cache.fetch(("supplier", supplier_id), fetch, OPTIONS)


def create_supplier(ctx, data):
    def run():
        return request(ctx, supplier_contract, "create_supplier", "toast.supplier.create.error", body=data)

    return mutate(ctx, run, invalidate=["suppliers"], success_key="toast.supplier.create.success")


def update_supplier(ctx, data):
    def run():
        return request(ctx, supplier_contract, "update_supplier", "toast.supplier.update.error", body=data)

    return mutate(ctx, run, invalidate=["suppliers", ("supplier", data.get("supplier_id"))],
                  success_key="toast.supplier.update.success")


def delete_supplier(ctx, supplier_id):
    def run():
        return request(ctx, supplier_contract, "delete_supplier", "toast.supplier.delete.error",
                       body={"supplier_id": supplier_id})

    return mutate(ctx, run, invalidate=["suppliers", ("supplier", supplier_id)],
                  success_key="toast.supplier.delete.success")
