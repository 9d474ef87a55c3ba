from backoffice.cache import MINUTE, QueryOptions
from backoffice.contracts.tag import tag_contract
from backoffice.hooks.base import mutate, page_key, page_query, request, unwrap

OPTIONS = QueryOptions(stale_time=2 * MINUTE, gc_time=5 * MINUTE)

FILTERS = ("search",)


def get_all_tags(ctx):
    def fetch():
        return unwrap(request(ctx, tag_contract, "get_all_tags", "toast.tag.get.error"))

    return ctx.cache.fetch(("tags", "all"), fetch, OPTIONS)


def get_tags(ctx, query=None):
    query = query or {}

    def fetch():
        return request(ctx, tag_contract, "get_tags", "toast.tag.get.error",
                       query=page_query(query, FILTERS))

    return ctx.cache.fetch(page_key("tags", query, FILTERS), fetch, OPTIONS)


def get_tag(ctx, tag_id):
    def fetch():
        return unwrap(request(ctx, tag_contract, "get_tag", "toast.tag.get.error",
                              query={"tag_id": tag_id}))

    return ctx.cache.fetch(("tag", tag_id), fetch, OPTIONS)


def create_tag(ctx, tag_name):
    def run():
        return request(ctx, tag_contract, "create_tag", "toast.tag.create.error",
                       body={"tag_name": tag_name})

    return mutate(ctx, run, invalidate=["tags"], success_key="toast.tag.create.success")


def update_tag(ctx, tag_id, tag_name):
    def run():
        return request(ctx, tag_contract, "update_tag", "toast.tag.update.error",
                       body={"tag_id": tag_id, "tag_name": tag_name})

    return mutate(ctx, run, invalidate=["tags", ("tag", tag_id)], success_key="toast.tag.update.success")


def delete_tag(ctx, tag_id):
    def run():
        return request(ctx, tag_contract, "delete_tag", "toast.tag.delete.error", body={"tag_id": tag_id})

    return mutate(ctx, run, invalidate=["tags", ("tag", tag_id)], success_key="toast.tag.delete.success")
