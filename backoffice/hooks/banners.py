from backoffice.cache import MINUTE, QueryOptions
from backoffice.contracts.banner import banner_contract
from backoffice.hooks.base import first, mutate, page_key, page_query, request, unwrap

LIST_OPTIONS = QueryOptions(stale_time=2 * MINUTE, gc_time=5 * MINUTE)


def get_banner_list(ctx, pagination=None):
    pagination = pagination or {}

    def fetch():
        return request(ctx, banner_contract, "get_banners", "toast.banner.get.error",
                       query=page_query(pagination))

    return ctx.cache.fetch(page_key("bannerList", pagination)[:3], fetch, LIST_OPTIONS)


def get_banner(ctx, banner_id):
    if not banner_id:
        return None

    def fetch():
        return first(unwrap(request(ctx, banner_contract, "get_banner", "toast.banner.get.error",
                                    query={"banner_id": banner_id})))

    return ctx.cache.fetch(("getBanner", banner_id), fetch)


def _invalidate(banner_id=None):
    return ["bannerList", ("getBanner", banner_id)] if banner_id else ["bannerList"]


def create_banner(ctx, data, notify=True):
    def run():
        return request(ctx, banner_contract, "create_banner", "toast.banner.create.error", body=data)

    return mutate(ctx, run, invalidate=_invalidate(),
                  success_key="toast.banner.create.success" if notify else None)


def update_banner(ctx, data, notify=True):
    """``notify=False`` lets batch callers (reordering) post a single summary instead."""
    def run():
        return request(ctx, banner_contract, "update_banner", "toast.banner.update.error", body=data)

    return mutate(ctx, run, invalidate=_invalidate(data.get("banner_id")),
                  success_key="toast.banner.update.success" if notify else None)


def delete_banner(ctx, banner_id):
    def run():
        return request(ctx, banner_contract, "delete_banner", "toast.banner.delete.error",
                       body={"banner_id": banner_id})

    return mutate(ctx, run, invalidate=_invalidate(banner_id), success_key="toast.banner.delete.success")
