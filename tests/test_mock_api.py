import base64

import pytest
from fastapi.testclient import TestClient

from backoffice.auth import AuthSession
from backoffice.banner_sort import BannerSorter
from backoffice.cache import QueryCache
from backoffice.context import AppContext
from backoffice.forms.image_upload import ImageUploader
from backoffice.hooks import banners, customers, orders, users
from backoffice.i18n import Translator
from mock_api_service.main import create_app
from mock_api_service.seed import DEMO_PASSWORD, IMAGE_BASE_URL, seed_store
from mock_api_service.security import decode_token


@pytest.fixture
def client():
    with TestClient(create_app(seed_store())) as client:
        yield client


def login(client, email):
    res = client.post("/login", json={"email": email, "password": DEMO_PASSWORD})
    assert res.status_code == 200
    return {"Authorization": f"Bearer {res.json()['access_token']}"}


@pytest.fixture
def admin(client):
    return login(client, "admin@example.com")


@pytest.fixture
def root(client):
    return login(client, "superadmin@example.com")


def test_login_issues_a_signed_token(client):
    res = client.post("/login", json={"email": "Admin@Example.com", "password": DEMO_PASSWORD})
    body = res.json()
    assert body["role"] == "admin"
    claims = decode_token(body["access_token"])
    assert claims["sub"] == "usr_admin"
    assert claims["role"] == "admin"


def test_bad_credentials(client):
    res = client.post("/login", json={"email": "admin@example.com", "password": "nope"})
    assert res.status_code == 401
    assert res.json() == {"error": "Incorrect email/password"}


def test_token_is_required(client):
    assert client.get("/user/role").json() == {"error": "Missing Token"}
    res = client.get("/user/role", headers={"Authorization": "Bearer junk"})
    assert res.status_code == 401
    assert res.json() == {"error": "Invalid Token"}


def test_roles_limit_routes(client, admin):
    support = login(client, "support@example.com")
    assert client.get("/admin/order", headers=support).status_code == 200
    assert client.get("/admin/banners", headers=support).status_code == 403
    assert client.post("/admin/user/role", headers=admin,
                       json={"target_user_id": "usr_buyer", "role": "admin"}).status_code == 403


def test_superadmin_changes_roles(client, root):
    res = client.post("/admin/user/role", headers=root, json={"target_user_id": "usr_buyer", "role": "support"})
    assert res.json()["data"]["role"] == "support"
    buyer = login(client, "buyer@example.com")
    assert client.get("/user/role", headers=buyer).json()["role"] == "support"


def test_profile_hides_the_password_hash(client, admin):
    profile = client.get("/user/me/profile", headers=admin).json()
    assert profile["email"] == "admin@example.com"
    assert "password_hash" not in profile


def test_malformed_body_is_a_bad_request(client, admin):
    res = client.post("/admin/order/update", headers=admin, json={"order_id": "ord_1001"})
    assert res.status_code == 400
    assert res.json() == {"error": "Invalid request"}


def test_products_all_paged_and_by_id(client, admin):
    everything = client.get("/admin/products", headers=admin).json()
    assert everything["total"] == 3

    page = client.get("/admin/products", headers=admin, params={"page": 1, "limit": 2}).json()
    assert (len(page["data"]), page["total"]) == (2, 3)

    inactive = client.get("/admin/products", headers=admin, params={"product_status": "inactive"}).json()
    assert [p["product_id"] for p in inactive["data"]] == ["prd_draft"]

    one = client.get("/admin/products", headers=admin, params={"product_id": "prd_green"}).json()
    assert one["data"][0]["product_name"] == "Green Tea"

    missing = client.get("/admin/products", headers=admin, params={"product_id": "prd_none"})
    assert missing.status_code == 404


def test_orders_newest_first_with_status_filter(client, admin):
    listed = client.get("/admin/order", headers=admin, params={"page": 1, "limit": 20}).json()
    assert [o["order_id"] for o in listed["data"]] == ["ord_1003", "ord_1002", "ord_1001"]

    paid = client.get("/admin/order", headers=admin, params={"order_status": "paid"}).json()
    assert [o["order_id"] for o in paid["data"]] == ["ord_1001"]


def test_images_must_be_base64(client, admin):
    bad = client.post("/admin/images", headers=admin, json={"file_name": "a.png", "file_value": "***"})
    assert bad.status_code == 400

    good = client.post("/admin/images", headers=admin,
                       json={"file_name": "a.png", "file_value": base64.b64encode(b"png").decode()})
    assert good.json()["data"] == {"file_name": "a.png", "file_url": f"{IMAGE_BASE_URL}/a.png"}

    res = client.request("DELETE", "/admin/images", headers=admin, json={"file_names": ["a.png"]})
    assert res.json() == {"message": "success"}


def test_tag_crud(client, admin):
    assert client.get("/admin/tag", headers=admin, params={"tag_id": "tag_gift"}).json()["data"] == {
        "tag_id": "tag_gift", "tag_name": "Gift",
    }
    created = client.post("/admin/tag", headers=admin, json={"tag_name": "Herbal"}).json()["message"]
    client.put("/admin/tag", headers=admin, json={"tag_id": created, "tag_name": "Herbal tea"})
    found = client.get("/admin/tag", headers=admin, params={"search": "herbal"}).json()["data"]
    assert found == [{"tag_id": created, "tag_name": "Herbal tea"}]

    assert client.request("DELETE", "/admin/tag", headers=admin, json={"tag_id": created}).status_code == 200
    assert client.request("DELETE", "/admin/tag", headers=admin, json={"tag_id": created}).status_code == 404


def test_customers_aggregate_orders(client, admin):
    rows = client.get("/admin/customers", headers=admin).json()["data"]
    by_id = {c["user_id"]: c for c in rows}
    assert set(by_id) == {"usr_buyer", "usr_buyer2"}
    assert by_id["usr_buyer"]["order_count"] == 2
    assert by_id["usr_buyer"]["total_spent"] == 384


@pytest.fixture
def live_ctx(client, clock):
    ctx = AppContext(
        auth=AuthSession(auth_url="http://testserver", http=client),
        translator=Translator("en"),
        cache=QueryCache(clock=clock),
        http=client,
        base_url="http://testserver",
    )
    ctx.auth.sign_in("admin@example.com", DEMO_PASSWORD)
    return ctx


def test_hooks_against_the_mock_api(live_ctx):
    assert live_ctx.auth.claims["name"] == "Ada"
    assert users.get_user_permissions(live_ctx).is_admin

    listed = orders.get_order_list(live_ctx, {"page": 1})
    assert listed["total"] == 3

    assert orders.update_order_status(live_ctx, "ord_1001", "shipped").is_success
    assert orders.get_order(live_ctx, "ord_1001")["order_status"] == "shipped"

    history = customers.get_transaction_history(live_ctx, "usr_buyer")
    assert history["total"] == 2


def test_uploads_and_banner_promotion_against_the_mock_api(live_ctx):
    uploader = ImageUploader(live_ctx)
    assert uploader.upload("d_new.webp", b"RIFF....WEBP").is_success
    assert uploader.images == [{"file_name": "d_new.webp", "file_url": f"{IMAGE_BASE_URL}/d_new.webp"}]

    listed = banners.get_banner_list(live_ctx, {"page": 1})["data"]
    active = [b for b in listed if b["banner_status"] == "active"]
    inactive = [b for b in listed if b["banner_status"] == "inactive"]
    sorter = BannerSorter(live_ctx, active, inactive)

    assert sorter.promote(inactive[0])

    refreshed = banners.get_banner_list(live_ctx, {"page": 1})["data"]
    assert [(b["banner_id"], b["sort_order"]) for b in refreshed] == [
        ("bnr_spring", 1), ("bnr_gift", 2), ("bnr_winter", 3),
    ]
