from backoffice.cache import MINUTE, QueryOptions
from backoffice.contracts.article import article_contract
from backoffice.hooks.base import first, mutate, page_key, page_query, request, unwrap

LIST_OPTIONS = QueryOptions(stale_time=2 * MINUTE, gc_time=5 * MINUTE)


def get_article_list(ctx, query=None):
    query = query or {}

    def fetch():
        return request(ctx, article_contract, "get_articles", "toast.article.get.error",
                       query=page_query(query))

    return ctx.cache.fetch(page_key("articleList", query), fetch, LIST_OPTIONS)


def get_article(ctx, article_id):
    if not article_id:
        return None

    def fetch():
        return first(unwrap(request(ctx, article_contract, "get_article", "toast.article.get.error",
                                    query={"article_id": article_id})))

    return ctx.cache.fetch(("getArticle", article_id), fetch)


def _invalidate(article_id=None):
    return ["articleList", ("getArticle", article_id)] if article_id else ["articleList"]


def create_article(ctx, data):
    def run():
        return request(ctx, article_contract, "create_article", "toast.article.create.error", body=data)

    return mutate(ctx, run, invalidate=_invalidate(), success_key="toast.article.create.success")


def update_article(ctx, data):
    def run():
        return request(ctx, article_contract, "update_article", "toast.article.update.error", body=data)

    return mutate(ctx, run, invalidate=_invalidate(data.get("article_id")),
                  success_key="toast.article.update.success")


def delete_article(ctx, article_id):
    def run():
        return request(ctx, article_contract, "delete_article", "toast.article.delete.error",
                       body={"article_id": article_id})

    return mutate(ctx, run, invalidate=_invalidate(article_id),
                  success_key="toast.article.delete.success")
