import base64
import binascii
import logging
import os
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, Header, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from backoffice.contracts.article import ArticleForm, ArticleLookup, ArticleUpdate
from backoffice.contracts.banner import BannerCreate, BannerLookup, BannerUpdate
from backoffice.contracts.orders import OrderPatch, OrderStatusUpdate
from backoffice.contracts.product import Product, ProductCreate, ProductId
from backoffice.contracts.staff import StaffCreate, StaffId, StaffUser
from backoffice.contracts.supplier import SupplierCreate, SupplierLookup, SupplierUpdate
from backoffice.contracts.tag import TagCreate, TagLookup, TagUpdate
from backoffice.contracts.user import UserProfileUpdate, UserRoleUpdate
from backoffice.schemas import Image, ImageDelete
from mock_api_service.security import create_access_token, decode_token, get_password_hash, verify_password
from mock_api_service.seed import IMAGE_BASE_URL, seed_store
from mock_api_service.store import Store, paginate

logger = logging.getLogger(__name__)

ADMINS = ("admin", "superadmin")
STAFF = ADMINS + ("support", "partner")


class LoginRequest(BaseModel):
    email: str
    password: str


def envelope(data, total=None):
    return {"code": 0, "msg": "success", "error": "", "data": data, "total": total}


def done(message="success"):
    return {"message": message}


def public(record):
    return {k: v for k, v in record.items() if k != "password_hash"}


def get_store(request: Request) -> Store:
    return request.app.state.store


def verify_token(authorization: str = Header(None), store: Store = Depends(get_store)):
    if not authorization:
        raise HTTPException(401, "Missing Token")
    claims = decode_token(authorization.replace("Bearer ", ""))
    if claims is None:
        raise HTTPException(401, "Invalid Token")
    user = store.users.get(claims.get("sub"))
    if user is None:
        raise HTTPException(401, "Unknown user")
    return user


def require_role(*roles):
    def check(user=Depends(verify_token)):
        if user["role"] not in roles:
            raise HTTPException(403, "Forbidden")
        return user
    return check


def _find(collection, record_id, label):
    record = collection.get(record_id)
    if record is None:
        raise HTTPException(404, f"{label} not found")
    return record


def create_app(store: Optional[Store] = None) -> FastAPI:
    app = FastAPI(title="Backoffice mock API")
    app.state.store = store if store is not None else seed_store()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse({"error": "Invalid request"}, status_code=400)

    register_routes(app)
    return app


def register_routes(app: FastAPI):
    admin = Depends(require_role(*ADMINS))
    staff = Depends(require_role(*STAFF))

    # --- AUTH ---
    @app.post("/login")
    def login(req: LoginRequest, store: Store = Depends(get_store)):
        user = store.find_user_by_email(req.email)
        if not user or not verify_password(req.password, user["password_hash"]):
            raise HTTPException(401, "Incorrect email/password")
        token = create_access_token({"sub": user["user_id"], "email": user["email"],
                                     "name": user["first_name"], "role": user["role"]})
        return {"access_token": token, "token_type": "bearer", "role": user["role"]}

    # --- USERS ---
    @app.get("/users", dependencies=[admin])
    def list_users(page: int = 1, limit: int = 20, sort_by: str = None, order: str = None,
                   store: Store = Depends(get_store)):
        rows, total = paginate([public(u) for u in store.users.all()], page, limit, sort_by, order)
        return envelope(rows, total)

    @app.get("/user/me/profile")
    def my_profile(user=Depends(verify_token)):
        return public(user)

    @app.put("/user/me/profile")
    def update_profile(body: UserProfileUpdate, user=Depends(verify_token), store: Store = Depends(get_store)):
        changes = body.model_dump(mode="json", exclude={"user_id", "role"})
        return envelope(public(store.users.update(user["user_id"], changes)))

    @app.get("/user/role")
    def my_role(user=Depends(verify_token)):
        return {"role": user["role"], "code": 0, "error": "", "msg": "success"}

    @app.post("/admin/user/role", dependencies=[Depends(require_role("superadmin"))])
    def update_role(body: UserRoleUpdate, store: Store = Depends(get_store)):
        data = body.model_dump(mode="json")
        _find(store.users, data["target_user_id"], "User")
        store.users.update(data["target_user_id"], {"role": data["role"]})
        return envelope({"role": data["role"], "code": 0, "error": "", "msg": "success"})

    # --- PRODUCTS ---
    @app.get("/admin/products", dependencies=[staff])
    def get_products(product_id: str = None, product_status: str = None, page: int = None,
                     limit: int = None, sort_by: str = None, order: str = None,
                     store: Store = Depends(get_store)):
        products = store.products.all()
        if product_id:
            product = _find(store.products, product_id, "Product")
            if product_status and product["product_status"] != product_status:
                raise HTTPException(404, "Product not found")
            return envelope([product], 1)
        if product_status:
            products = [p for p in products if p["product_status"] == product_status]
        if page is None:
            return envelope(products, len(products))
        rows, total = paginate(products, page, limit, sort_by, order)
        return envelope(rows, total)

    @app.post("/admin/products", dependencies=[staff])
    def create_product(body: ProductCreate, store: Store = Depends(get_store)):
        product = store.products.insert(body.model_dump(mode="json"))
        return done(product["product_id"])

    @app.post("/admin/products/update", dependencies=[staff])
    def update_product(body: Product, store: Store = Depends(get_store)):
        data = body.model_dump(mode="json", exclude={"created_at", "updated_at"})
        _find(store.products, data["product_id"], "Product")
        store.products.update(data["product_id"], data)
        return done()

    @app.delete("/admin/products", dependencies=[staff])
    def delete_product(body: ProductId, store: Store = Depends(get_store)):
        if not store.products.delete(body.product_id):
            raise HTTPException(404, "Product not found")
        return done()

    # --- IMAGES ---
    @app.post("/admin/images", dependencies=[staff])
    def upload_image(body: Image, store: Store = Depends(get_store)):
        try:
            data = base64.b64decode(body.file_value, validate=True)
        except (binascii.Error, ValueError):
            raise HTTPException(400, "file_value is not valid base64")
        if not data:
            raise HTTPException(400, "Empty file")
        store.images[body.file_name] = data
        return envelope({"file_name": body.file_name, "file_url": f"{IMAGE_BASE_URL}/{body.file_name}"})

    @app.delete("/admin/images", dependencies=[staff])
    def delete_images(body: ImageDelete, store: Store = Depends(get_store)):
        for name in body.file_names:
            store.images.pop(name, None)
        return done()

    # --- ORDERS ---
    @app.get("/admin/order", dependencies=[staff])
    def get_orders(order_id: str = None, order_status: str = None, page: int = 1, limit: int = 20,
                   sort_by: str = None, order: str = None, store: Store = Depends(get_store)):
        if order_id:
            return envelope([_find(store.orders, order_id, "Order")], 1)
        orders = store.orders.all()
        if order_status:
            orders = [o for o in orders if o["order_status"] == order_status]
        rows, total = paginate(orders, page, limit, sort_by or "created_at", order or "DESC")
        return envelope(rows, total)

    @app.post("/admin/order", dependencies=[staff])
    def update_order(body: OrderPatch, store: Store = Depends(get_store)):
        data = body.model_dump(mode="json", exclude_none=True)
        if not data.get("order_id"):
            raise HTTPException(400, "order_id is required")
        _find(store.orders, data["order_id"], "Order")
        store.orders.update(data["order_id"], data)
        return done()

    @app.post("/admin/order/update", dependencies=[staff])
    def update_order_status(body: OrderStatusUpdate, store: Store = Depends(get_store)):
        data = body.model_dump(mode="json")
        _find(store.orders, data["order_id"], "Order")
        store.orders.update(data["order_id"], {"order_status": data["order_status"]})
        return done()

    @app.get("/orders/batch", dependencies=[staff])
    def get_batch_orders(store: Store = Depends(get_store)):
        orders = [o for o in store.orders.all() if o["order_status"] in ("new", "pending", "paid")]
        return envelope(orders, len(orders))

    @app.get("/orders/batch/{order_id}", dependencies=[staff])
    def get_batch_order(order_id: str, store: Store = Depends(get_store)):
        return envelope(_find(store.orders, order_id, "Order"))

    @app.put("/orders/batch/{order_id}", dependencies=[staff])
    def update_batch_order(order_id: str, body: OrderPatch, store: Store = Depends(get_store)):
        _find(store.orders, order_id, "Order")
        store.orders.update(order_id, body.model_dump(mode="json", exclude_none=True))
        return done()

    @app.delete("/orders/batch/{order_id}", dependencies=[admin])
    def delete_batch_order(order_id: str, store: Store = Depends(get_store)):
        if not store.orders.delete(order_id):
            raise HTTPException(404, "Order not found")
        return done()

    @app.delete("/orders/{order_id}", dependencies=[admin])
    def delete_order(order_id: str, store: Store = Depends(get_store)):
        if not store.orders.delete(order_id):
            raise HTTPException(404, "Order not found")
        return done()

    # --- BANNERS ---
    @app.get("/admin/banners", dependencies=[admin])
    def get_banners(banner_id: str = None, page: int = 1, limit: int = 20, store: Store = Depends(get_store)):
        if banner_id:
            return envelope([_find(store.banners, banner_id, "Banner")], 1)
        banners = sorted(store.banners.all(), key=lambda b: (b["sort_order"], b["created_at"]))
        rows, total = paginate(banners, page, limit)
        return envelope(rows, total)

    @app.post("/admin/banners", dependencies=[admin])
    def create_banner(body: BannerCreate, store: Store = Depends(get_store)):
        return done(store.banners.insert(body.model_dump(mode="json"))["banner_id"])

    @app.put("/admin/banners", dependencies=[admin])
    def update_banner(body: BannerUpdate, store: Store = Depends(get_store)):
        data = body.model_dump(mode="json")
        _find(store.banners, data["banner_id"], "Banner")
        store.banners.update(data["banner_id"], data)
        return done()

    @app.delete("/admin/banners", dependencies=[admin])
    def delete_banner(body: BannerLookup, store: Store = Depends(get_store)):
        if not store.banners.delete(body.banner_id):
            raise HTTPException(404, "Banner not found")
        return done()

    # --- ARTICLES ---
    @app.get("/admin/articles", dependencies=[staff])
    def get_articles(article_id: str = None, page: int = 1, limit: int = 20, sort_by: str = None,
                     order: str = None, store: Store = Depends(get_store)):
        if article_id:
            return envelope([_find(store.articles, article_id, "Article")], 1)
        rows, total = paginate(store.articles.all(), page, limit, sort_by or "updated_at", order or "DESC")
        return envelope(rows, total)

    @app.post("/admin/articles", dependencies=[staff])
    def create_article(body: ArticleForm, store: Store = Depends(get_store)):
        return done(store.articles.insert(body.model_dump(mode="json"))["article_id"])

    @app.put("/admin/articles", dependencies=[staff])
    def update_article(body: ArticleUpdate, store: Store = Depends(get_store)):
        data = body.model_dump(mode="json")
        _find(store.articles, data["article_id"], "Article")
        store.articles.update(data["article_id"], data)
        return done()

    @app.delete("/admin/articles", dependencies=[staff])
    def delete_article(body: ArticleLookup, store: Store = Depends(get_store)):
        if not store.articles.delete(body.article_id):
            raise HTTPException(404, "Article not found")
        return done()

    # --- CUSTOMERS ---
    @app.get("/admin/customers", dependencies=[staff])
    def get_customers(user_id: str = None, page: int = 1, limit: int = 20, sort_by: str = None,
                      order: str = None, store: Store = Depends(get_store)):
        customers = store.customers()
        if user_id:
            customers = [c for c in customers if c["user_id"] == user_id]
        rows, total = paginate(customers, page, limit, sort_by, order)
        return envelope(rows, total)

    @app.get("/admin/transaction_history", dependencies=[staff])
    def transaction_history(user_id: str, page: int = 1, limit: int = 20, store: Store = Depends(get_store)):
        orders = [o for o in store.orders.all() if o["user_id"] == user_id]
        rows, total = paginate(orders, page, limit, "created_at", "DESC")
        return {"code": 0, "msg": "success", "data": rows, "total": total}

    # --- STAFF ---
    @app.get("/admin/staff", dependencies=[admin])
    def get_staff(role: str = None, staff_id: str = None, page: int = 1, limit: int = 20,
                  sort_by: str = None, order: str = None, store: Store = Depends(get_store)):
        members = [public(s) for s in store.staff.all()]
        if role:
            members = [s for s in members if s["role"] == role]
        if staff_id:
            members = [s for s in members if s["staff_id"] == staff_id]
        rows, total = paginate(members, page, limit, sort_by, order)
        return envelope(rows, total)

    @app.post("/admin/staff", dependencies=[admin])
    def create_staff(body: StaffCreate, store: Store = Depends(get_store)):
        data = body.model_dump(mode="json")
        data["password_hash"] = get_password_hash(data.pop("password"))
        return done(store.staff.insert(data)["staff_id"])

    @app.put("/admin/staff", dependencies=[admin])
    def update_staff(body: StaffUser, store: Store = Depends(get_store)):
        data = body.model_dump(mode="json", exclude={"created_at", "updated_at"})
        _find(store.staff, data["staff_id"], "Staff member")
        store.staff.update(data["staff_id"], data)
        return done()

    @app.delete("/admin/staff", dependencies=[admin])
    def delete_staff(body: StaffId, store: Store = Depends(get_store)):
        if not store.staff.delete(body.staff_id):
            raise HTTPException(404, "Staff member not found")
        return done()

    # --- SUPPLIERS ---
    @app.get("/admin/supplier", dependencies=[staff])
    def get_suppliers(supplier_id: str = None, search: str = None, page: int = None, limit: int = None,
                      sort_by: str = None, order: str = None, store: Store = Depends(get_store)):
        if supplier_id:
            return envelope(_find(store.suppliers, supplier_id, "Supplier"))
        suppliers = store.suppliers.all()
        if search:
            suppliers = [s for s in suppliers if search.lower() in s["supplier_name"].lower()]
        if page is None:
            return envelope(suppliers, len(suppliers))
        rows, total = paginate(suppliers, page, limit, sort_by, order)
        return envelope(rows, total)

    @app.post("/admin/supplier", dependencies=[admin])
    def create_supplier(body: SupplierCreate, store: Store = Depends(get_store)):
        return done(store.suppliers.insert(body.model_dump(mode="json"))["supplier_id"])

    @app.put("/admin/supplier", dependencies=[admin])
    def update_supplier(body: SupplierUpdate, store: Store = Depends(get_store)):
        data = body.model_dump(mode="json")
        _find(store.suppliers, data["supplier_id"], "Supplier")
        store.suppliers.update(data["supplier_id"], data)
        return done()

    @app.delete("/admin/supplier", dependencies=[admin])
    def delete_supplier(body: SupplierLookup, store: Store = Depends(get_store)):
        if not store.suppliers.delete(body.supplier_id):
            raise HTTPException(404, "Supplier not found")
        return done()

    # --- TAGS ---
    @app.get("/admin/tag", dependencies=[staff])
    def get_tags(tag_id: str = None, search: str = None, page: int = None, limit: int = None,
                 sort_by: str = None, order: str = None, store: Store = Depends(get_store)):
        if tag_id:
            tag = _find(store.tags, tag_id, "Tag")
            return envelope({"tag_id": tag["tag_id"], "tag_name": tag["tag_name"]})
        tags = [{"tag_id": t["tag_id"], "tag_name": t["tag_name"]} for t in store.tags.all()]
        if search:
            tags = [t for t in tags if search.lower() in t["tag_name"].lower()]
        if page is None:
            return envelope(tags, len(tags))
        rows, total = paginate(tags, page, limit, sort_by, order)
        return envelope(rows, total)

    @app.post("/admin/tag", dependencies=[admin])
    def create_tag(body: TagCreate, store: Store = Depends(get_store)):
        return done(store.tags.insert(body.model_dump(mode="json"))["tag_id"])

    @app.put("/admin/tag", dependencies=[admin])
    def update_tag(body: TagUpdate, store: Store = Depends(get_store)):
        _find(store.tags, body.tag_id, "Tag")
        store.tags.update(body.tag_id, {"tag_name": body.tag_name})
        return done()

    @app.delete("/admin/tag", dependencies=[admin])
    def delete_tag(body: TagLookup, store: Store = Depends(get_store)):
        if not store.tags.delete(body.tag_id):
            raise HTTPException(404, "Tag not found")
        return done()


app = create_app()

if __name__ == "__main__":
    uvicorn.run("mock_api_service.main:app", host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", 8000)))
