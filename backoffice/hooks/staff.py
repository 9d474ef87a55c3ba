from backoffice.cache import MINUTE, QueryOptions
from backoffice.contracts.staff import staff_contract
from backoffice.hooks.base import mutate, page_key, page_query, request

OPTIONS = QueryOptions(stale_time=2 * MINUTE, gc_time=5 * MINUTE)

FILTERS = ("role", "staff_id")


def get_staff(ctx, query=None):
    query = query or {}

    def fetch():
        return request(ctx, staff_contract, "get_staff", "toast.staff.get.error",
                       query=page_query(query, FILTERS))

    return ctx.cache.fetch(page_key("staff", query, FILTERS), fetch, OPTIONS)


def create_staff(ctx, data):
    def run():
        return request(ctx, staff_contract, "create_staff", "toast.staff.create.error", body=data)

    return mutate(ctx, run, invalidate=["staff"], success_key="toast.staff.create.success")


def update_staff(ctx, data):
    def run():
        return request(ctx, staff_contract, "update_staff", "toast.staff.update.error", body=data)

    return mutate(ctx, run, invalidate=["staff"], success_key="toast.staff.update.success")


def delete_staff(ctx, staff_id):
    def run():
        return request(ctx, staff_contract, "delete_staff", "toast.staff.delete.error",
                       body={"staff_id": staff_id})

    return mutate(ctx, run, invalidate=["staff"], success_key="toast.staff.delete.success")
