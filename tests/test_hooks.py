import base64
import logging

import httpx
import pytest

from backoffice.forms.image_upload import ImageUploader
from backoffice.hooks import orders, products, users
from backoffice.hooks.users import ROLE_KEY, prefetch_user_role
from backoffice.permissions import AccessGate, AccessState
from tests.conftest import json_body


def order(order_id, status="paid"):
    return {
        "vendor_id": "sup_leaf",
        "order_id": order_id,
        "order_detail": [],
        "order_status": status,
        "contact_info": {"address": "8 Tea Lane", "phone": "0912345678", "email": "buyer@example.com"},
        "delivery_fee": "0",
        "total_order_fee": "256",
        "user_id": "usr_buyer",
    }


def envelope(data, total=None):
    return {"code": 0, "msg": "", "error": "", "data": data, "total": total}


def descriptions(ctx):
    return [n.description for n in ctx.notifier.pending]


def test_list_is_served_from_cache_until_stale(ctx, api, clock):
    api.on("GET", "/admin/products", body=envelope([], 0))

    first = products.get_product_list(ctx, {"page": 1})
    second = products.get_product_list(ctx, {"page": 1})
    assert first == second == envelope([], 0)
    assert len(api.calls("GET", "/admin/products")) == 1
    assert dict(api.requests[0].url.params) == {"page": "1", "limit": "20"}

    clock.advance(121)
    products.get_product_list(ctx, {"page": 1})
    assert len(api.calls("GET", "/admin/products")) == 2


def test_filters_are_part_of_the_key(ctx, api):
    api.on("GET", "/admin/order", body=envelope([order("ord_1")], 1))

    orders.get_order_list(ctx, {"page": 1})
    orders.get_order_list(ctx, {"page": 1, "order_status": "paid"})

    sent = [dict(r.url.params) for r in api.calls("GET", "/admin/order")]
    assert sent == [{"page": "1", "limit": "20"}, {"page": "1", "limit": "20", "order_status": "paid"}]


def test_failed_read_notifies_and_is_not_cached(ctx, api):
    api.on("GET", "/admin/order", status=500, body={"error": "down"})

    assert orders.get_order_list(ctx, {"page": 1}) is None
    assert descriptions(ctx) == ["Failed to load orders"]

    orders.get_order_list(ctx, {"page": 1})
    assert len(api.calls("GET", "/admin/order")) == 2


def test_signed_out_reads_never_reach_the_api(signed_out_ctx, api):
    assert products.get_all_products(signed_out_ctx) is None
    assert api.requests == []
    note = signed_out_ctx.notifier.pending[0]
    assert (note.title, note.description) == ("Not signed in", "Please sign in again")


def test_write_invalidates_before_notifying(ctx, api):
    api.on("GET", "/admin/order", body=envelope([order("ord_1")], 1))
    api.on("POST", "/admin/order/update", body={"message": "ok"})
    orders.get_order_list(ctx, {"page": 1})

    state = orders.update_order_status(ctx, "ord_1", "shipped")
    assert state.is_success
    assert json_body(api.calls("POST", "/admin/order/update")[0]) == {
        "order_id": "ord_1", "order_status": "shipped",
    }
    assert ctx.cache.get_entry(("orderList", 1, 20, None, None, None)).invalidated
    assert descriptions(ctx) == ["Order updated"]

    orders.get_order_list(ctx, {"page": 1})
    assert len(api.calls("GET", "/admin/order")) == 2


def test_invalid_write_is_reported_without_a_request(ctx, api):
    state = orders.update_order_status(ctx, "ord_1", "teleported")

    assert state.is_error
    assert api.requests == []
    assert ctx.notifier.pending[0].title == "Error"
    assert "order_status" in ctx.notifier.pending[0].description


def test_delete_order_fills_the_path(ctx, api):
    api.on("DELETE", "/orders/ord_9", body={"message": "deleted"})
    assert orders.delete_order(ctx, "ord_9").is_success
    assert descriptions(ctx) == ["Order deleted"]


def test_order_detail_is_seeded_from_list_pages(ctx, api):
    api.on("GET", "/admin/order", body=envelope([order("ord_1"), order("ord_2", "new")], 2))
    orders.get_order_list(ctx, {"page": 1})

    detail = orders.get_order_detail(ctx, "ord_2")

    assert detail["order_status"] == "new"
    assert len(api.calls("GET", "/admin/order")) == 1


def test_order_detail_fetches_when_not_listed(ctx, api):
    api.on("GET", "/admin/order", body=lambda request: envelope([order(request.url.params["order_id"])]))

    detail = orders.get_order_detail(ctx, "ord_7")

    assert detail["order_id"] == "ord_7"
    assert orders.get_order_detail(ctx, None) is None


def test_role_prefetch_runs_once(ctx, api):
    api.on("GET", "/user/role", body={"role": "admin"})

    prefetch_user_role(ctx)
    prefetch_user_role(ctx)
    assert ctx.cache.get_query_data(ROLE_KEY) == {"role": "admin"}

    permissions = users.get_user_permissions(ctx)
    assert permissions.is_admin and permissions.can_access_admin_panel
    assert not permissions.can_edit_user_role
    assert len(api.calls("GET", "/user/role")) == 1


def test_role_prefetch_failure_is_quiet(ctx, api):
    api.on("GET", "/user/role", status=500, body={"error": "down"})

    prefetch_user_role(ctx)

    assert ctx.role_prefetched
    assert ROLE_KEY not in ctx.cache
    assert ctx.notifier.pending == []


def test_permissions_fall_back_when_role_lookup_fails(ctx, api):
    api.on("GET", "/user/role", status=500, body={"error": "down"})

    permissions = users.get_user_permissions(ctx)

    assert permissions.is_guest
    assert not permissions.can_access_admin_panel
    assert descriptions(ctx) == ["Failed to load user information"]


def test_gate_follows_the_role(ctx, api):
    api.on("GET", "/user/role", body={"role": "superadmin"})
    gate = AccessGate()
    assert users.resolve_access(ctx, gate) == AccessState.GRANTED
    assert gate.permissions.can_edit_user_role

    ctx.cache.clear()
    api.on("GET", "/user/role", body={"role": "user"})
    assert users.resolve_access(ctx, gate) == AccessState.GRANTED
    gate.refresh()
    assert users.resolve_access(ctx, gate) == AccessState.DENIED


def test_update_user_role(ctx, api):
    api.on("POST", "/admin/user/role", body=envelope({"role": "support"}))
    api.on("GET", "/users", body=envelope([], 0))
    users.get_user_list(ctx, {"page": 1})

    state = users.update_user_role(ctx, "usr_buyer", "support")

    assert state.data == {"role": "support"}
    assert json_body(api.calls("POST", "/admin/user/role")[0]) == {
        "target_user_id": "usr_buyer", "role": "support",
    }
    assert ctx.cache.get_entry(("users", 1, 20)).invalidated


def test_uploader_adds_and_removes_images(ctx, api):
    def stored(request):
        body = json_body(request)
        assert base64.b64decode(body["file_value"]) == b"\x89PNG"
        return envelope({"file_name": body["file_name"], "file_url": "https://cdn.test/" + body["file_name"]})

    api.on("POST", "/admin/images", body=stored)
    api.on("DELETE", "/admin/images", body={"message": "deleted"})
    uploader = ImageUploader(ctx, [{"file_name": "old.png", "file_url": "https://cdn.test/old.png"}])

    assert uploader.upload("new.png", b"\x89PNG").is_success
    assert uploader.file_names == ["old.png", "new.png"]

    assert uploader.remove("old.png").is_success
    assert json_body(api.calls("DELETE", "/admin/images")[0]) == {"file_names": ["old.png"]}
    assert uploader.images == [{"file_name": "new.png", "file_url": "https://cdn.test/new.png"}]
    assert descriptions(ctx) == ["Image uploaded", "Image deleted"]


def test_failed_upload_keeps_images(ctx, api):
    api.on("POST", "/admin/images", status=400, body={"error": "bad image"})
    uploader = ImageUploader(ctx)

    state = uploader.upload("new.png", "aGVsbG8=")

    assert state.is_error
    assert uploader.images == []
    assert descriptions(ctx) == ["Failed to upload image"]


def test_reads_let_transport_errors_through(offline_ctx):
    with pytest.raises(httpx.ConnectError):
        orders.get_order_list(offline_ctx, {"page": 1})
    assert offline_ctx.notifier.pending == []


def test_write_reports_transport_errors(offline_ctx):
    state = orders.update_order_status(offline_ctx, "ord_1", "shipped")

    assert state.is_error
    assert isinstance(state.error, httpx.ConnectError)
    note = offline_ctx.notifier.pending[0]
    assert (note.title, note.description) == ("Error", "api down")


def test_unreachable_api_falls_back_to_the_default_role(offline_ctx, caplog):
    with caplog.at_level(logging.WARNING, logger="backoffice.hooks.users"):
        permissions = users.get_user_permissions(offline_ctx)

    assert permissions.is_guest
    assert not permissions.can_view_user_list
    assert "Role lookup failed: api down" in caplog.text
    assert users.resolve_access(offline_ctx, AccessGate()) == AccessState.DENIED
