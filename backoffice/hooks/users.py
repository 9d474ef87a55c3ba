import logging

import httpx

from backoffice.cache import DAY, HOUR, MINUTE, QueryOptions
from backoffice.contracts.user import user_contract
from backoffice.errors import BackofficeError
from backoffice.hooks.base import authorized_client, mutate, page_key, page_query, request, unwrap
from backoffice.permissions import AccessGate, AccessState, fallback_role, resolve_permissions

logger = logging.getLogger(__name__)

ROLE_KEY = ("user", "role")
PROFILE_KEY = ("user", "profile")

USER_LIST_OPTIONS = QueryOptions(stale_time=2 * MINUTE, gc_time=5 * MINUTE, refetch_on_mount=False)
ROLE_OPTIONS = QueryOptions(stale_time=HOUR, gc_time=DAY, refetch_on_mount=False, retry=3)


class RoleFetchError(BackofficeError):
    pass


def get_user_list(ctx, pagination):
    query = page_query({k: pagination.get(k) for k in ("page", "limit")})

    def fetch():
        return unwrap(request(ctx, user_contract, "get_user_list", "toast.user.get.error",
                              query=query or {}))

    return ctx.cache.fetch(page_key("users", pagination)[:3], fetch, USER_LIST_OPTIONS)


def get_user_profile(ctx):
    def fetch():
        return request(ctx, user_contract, "get_user_profile", "toast.user.get.error")

    return ctx.cache.fetch(PROFILE_KEY, fetch)


def get_user_role(ctx):
    def fetch():
        return request(ctx, user_contract, "get_user_role", "toast.user.get.error")

    return ctx.cache.fetch(ROLE_KEY, fetch, ROLE_OPTIONS)


def prefetch_user_role(ctx):
    """
    Warm the role cache once per session. Never raises: a failure is logged
    and the gate falls back to a normal fetch.
    """
    if ctx.role_prefetched:
        return
    ctx.role_prefetched = True
    try:
        token = ctx.auth.get_token()
        if not token or ctx.cache.get_query_data(ROLE_KEY) is not None:
            return

        def fetch():
            response = ctx.client(user_contract, token).get_user_role()
            if response.status != 200:
                raise RoleFetchError(f"Failed to fetch user role ({response.status})")
            return response.body

        ctx.cache.prefetch(ROLE_KEY, fetch, QueryOptions(stale_time=HOUR, gc_time=DAY, refetch_on_mount=False))
    except (httpx.HTTPError, BackofficeError) as exc:
        logger.warning("Failed to prefetch global user role: %s", exc)


def role_of(role_response):
    return role_response.get("role") if isinstance(role_response, dict) else None


def get_user_permissions(ctx):
    """Capabilities of the signed-in user; the configured fallback role applies when the lookup fails."""
    try:
        role = role_of(get_user_role(ctx))
    except httpx.HTTPError as exc:
        logger.warning("Role lookup failed: %s", exc)
        role = None
    return resolve_permissions(role if role is not None else fallback_role())


def resolve_access(ctx, gate: AccessGate) -> AccessState:
    if gate.state != AccessState.LOADING:
        return gate.state
    try:
        role = role_of(get_user_role(ctx))
    except httpx.HTTPError as exc:
        logger.warning("Role lookup failed: %s", exc)
        role = None
    return gate.resolve(role)


def update_user_profile(ctx, data):
    def run():
        return unwrap(request(ctx, user_contract, "update_user_profile", "toast.user.update.error",
                              body=data))

    return mutate(ctx, run, invalidate=[PROFILE_KEY], success_key="toast.user.update.success")


def update_user_role(ctx, target_user_id, role):
    def run():
        client = authorized_client(ctx, user_contract)
        if client is None:
            return None
        response = client.update_user_role(body={"target_user_id": target_user_id, "role": role})
        if response.status != 200:
            ctx.notifier.error(ctx.t("common.error"), ctx.t("toast.user.update.error"))
            return None
        return unwrap(response.body) or {"role": role}

    return mutate(ctx, run, invalidate=["users"], success_key="toast.user.update.success")
