import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional

import httpx

from backoffice.client import ContractClient
from backoffice.context import AppContext
from backoffice.contracts.base import Contract
from backoffice.errors import BackofficeError
from backoffice.schemas import default_page

logger = logging.getLogger(__name__)

SORT_FIELDS = ("sort_by", "order")


def notify_unauthorized(ctx: AppContext):
    ctx.notifier.error(
        ctx.t("toast.auth.unauthorized.title"),
        ctx.t("toast.auth.unauthorized.description"),
    )


def notify_error(ctx: AppContext, message_key: str):
    ctx.notifier.error(ctx.t("common.error"), ctx.t(message_key))


def authorized_client(ctx: AppContext, contract: Contract) -> Optional[ContractClient]:
    """Client carrying the session token, or None (with a notification) when signed out."""
    token = ctx.auth.get_token()
    if not token:
        notify_unauthorized(ctx)
        return None
    return ctx.client(contract, token)


def request(ctx: AppContext, contract: Contract, endpoint: str, error_key: str, **call_kwargs):
    """
    Issue one call and return the response body, or None after notifying
    when the token is missing or the status is not 200.
    """
    client = authorized_client(ctx, contract)
    if client is None:
        return None
    response = client.call(endpoint, **call_kwargs)
    if response.status != 200:
        notify_error(ctx, error_key)
        return None
    return response.body if response.body is not None else {}


def unwrap(body, key="data"):
    if body is None:
        return None
    return body.get(key) if isinstance(body, dict) else body


def first(items):
    if isinstance(items, list):
        return items[0] if items else None
    return items


def page_query(query: Mapping[str, Any], extra: Iterable[str] = ()) -> Optional[dict]:
    """Pagination plus any set filters; None when the caller set nothing."""
    fields = ("page", "limit") + SORT_FIELDS + tuple(extra)
    if not any(query.get(f) for f in fields):
        return None
    defaults = default_page()
    result = {
        "page": query.get("page") or defaults.page,
        "limit": query.get("limit") or defaults.limit,
    }
    for f in SORT_FIELDS + tuple(extra):
        if query.get(f):
            result[f] = query[f]
    return result


def page_key(name: str, query: Mapping[str, Any], extra: Iterable[str] = ()) -> tuple:
    defaults = default_page()
    return (
        name,
        query.get("page") or defaults.page,
        query.get("limit") or defaults.limit,
        *(query.get(f) for f in SORT_FIELDS + tuple(extra)),
    )


@dataclass
class MutationState:
    status: str = "idle"
    data: Any = None
    error: Optional[Exception] = None

    @property
    def is_success(self):
        return self.status == "success"

    @property
    def is_error(self):
        return self.status == "error"


def mutate(
    ctx: AppContext,
    fn: Callable[[], Any],
    invalidate: Iterable = (),
    success_key: Optional[str] = None,
    on_success: Optional[Callable[[Any], None]] = None,
) -> MutationState:
    """
    Run a write. On success the listed cache keys are invalidated before the
    success notification goes out. A None result is a failure the write
    already reported; raised transport or validation errors are reported here.
    """
    try:
        data = fn()
    except (httpx.HTTPError, BackofficeError) as exc:
        logger.warning("Mutation failed: %s", exc)
        ctx.notifier.error(ctx.t("common.error"), str(exc))
        return MutationState("error", error=exc)

    if data is None:
        return MutationState("error")

    for key in invalidate:
        ctx.cache.invalidate(key)
    if success_key:
        ctx.notifier.success(ctx.t("common.success"), ctx.t(success_key))
    if on_success:
        on_success(data)
    return MutationState("success", data=data)
