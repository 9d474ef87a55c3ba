"""Demo data for the mock admin API."""
from mock_api_service.security import get_password_hash
from mock_api_service.store import Store

DEMO_PASSWORD = "Admin@123"
IMAGE_BASE_URL = "https://images.example.com"


def lang(zh, en=None, th=None):
    return {"zh": zh, "en": en or zh, "th": th or en or zh}


def image(file_name):
    return {"file_name": file_name, "file_url": f"{IMAGE_BASE_URL}/{file_name}"}


def _user(user_id, email, first_name, last_name, role, phone):
    return {
        "user_id": user_id,
        "email": email,
        "first_name": first_name,
        "last_name": last_name,
        "phone_number": phone,
        "address": "1 Market Street",
        "remark": "",
        "role": role,
        "password_hash": get_password_hash(DEMO_PASSWORD),
        "created_at": "2024-01-02T08:00:00+00:00",
        "updated_at": "2024-01-02T08:00:00+00:00",
    }


def _product(product_id, name, price, status, vendor_id, tag_ids):
    return {
        "product_id": product_id,
        "product_type": "FOOD",
        "product_name": name,
        "product_images": [image(f"{product_id}.webp")],
        "product_price": price,
        "product_status": status,
        "product_size": "15",
        "vendor_id": [vendor_id],
        "tag_id": tag_ids,
        "product_detail": {
            "product_description": lang(name),
            "short_title": lang(name),
            "ingredients": lang("茶叶", "Tea leaves"),
            "introduction": lang("精选好茶", "Selected tea"),
            "precautions": lang("密封保存", "Keep sealed"),
            "shelf_life": "18",
            "origin": lang("云南", "Yunnan"),
            "aroma_level": "3",
            "flavor": lang("清香", "Fresh"),
            "appearance": lang("条索紧结", "Tightly rolled"),
            "best_occasion": lang("下午茶", "Afternoon tea"),
            "scene_matching": lang("办公室", "Office"),
            "food_pairing": lang("点心", "Pastry"),
        },
        "created_at": "2024-02-01T08:00:00+00:00",
        "updated_at": "2024-02-01T08:00:00+00:00",
    }


def _order(order_id, user_id, status, fee, created_at):
    return {
        "order_id": order_id,
        "vendor_id": "sup_leaf",
        "user_id": user_id,
        "order_status": status,
        "order_detail": [{
            "product_name": "Green Tea",
            "product_id": "prd_green",
            "size": "2",
            "price": fee,
            "order_id": order_id,
            "promotion_note": "",
            "product_images": [image("prd_green.webp")],
        }],
        "contact_info": {"address": "8 Tea Lane", "phone": "0912345678", "email": "buyer@example.com"},
        "remark": "",
        "delivery_fee": "0",
        "delivery_note": "",
        "delivery_time": "",
        "total_order_fee": fee,
        "created_at": created_at,
        "updated_at": created_at,
    }


def _banner(banner_id, title, status, sort_order, created_at):
    return {
        "banner_id": banner_id,
        "title": title,
        "desktop_image_url": image(f"d_{banner_id}.webp"),
        "mobile_image_url": image(f"m_{banner_id}.webp"),
        "redirect_url": "https://shop.example.com/promo",
        "sort_order": sort_order,
        "banner_status": status,
        "created_at": created_at,
        "updated_at": "2024-03-10T08:00:00+00:00",
    }


def seed_store(store: Store = None) -> Store:
    store = store or Store()
    for user in (
        _user("usr_root", "superadmin@example.com", "Root", "Admin", "superadmin", "0900000001"),
        _user("usr_admin", "admin@example.com", "Ada", "Admin", "admin", "0900000002"),
        _user("usr_support", "support@example.com", "Sam", "Support", "support", "0900000003"),
        _user("usr_buyer", "buyer@example.com", "Bea", "Buyer", "user", "0900000004"),
        _user("usr_buyer2", "buyer2@example.com", "Ben", "Buyer", "user", "0900000005"),
    ):
        store.users.insert(user)

    store.staff.insert({
        "staff_id": "stf_ops", "account": "ops", "email": "ops@example.com",
        "first_name": "Olive", "last_name": "Ops", "role": "support",
    })
    store.suppliers.insert({
        "supplier_id": "sup_leaf", "supplier_name": "Leaf & Co",
        "contact_info": {"phone": "0911111111", "email": "sales@leaf.example.com", "address": "3 Hill Road"},
        "remark": "",
    })
    store.suppliers.insert({
        "supplier_id": "sup_river", "supplier_name": "River Farms",
        "contact_info": {"phone": "0922222222", "email": "hello@river.example.com", "address": "9 River Bend"},
    })
    for tag_id, tag_name in (("tag_green", "Green"), ("tag_oolong", "Oolong"), ("tag_gift", "Gift")):
        store.tags.insert({"tag_id": tag_id, "tag_name": tag_name})

    store.products.insert(_product("prd_green", "Green Tea", "128", "active", "sup_leaf", ["tag_green"]))
    store.products.insert(_product("prd_oolong", "Oolong", "198", "active", "sup_river", ["tag_oolong", "tag_gift"]))
    store.products.insert(_product("prd_draft", "Winter Blend", "88", "inactive", "sup_leaf", []))

    store.orders.insert(_order("ord_1001", "usr_buyer", "paid", "256", "2024-04-01T09:30:00+00:00"))
    store.orders.insert(_order("ord_1002", "usr_buyer", "shipped", "128", "2024-04-03T10:00:00+00:00"))
    store.orders.insert(_order("ord_1003", "usr_buyer2", "new", "396", "2024-04-05T11:15:00+00:00"))

    store.banners.insert(_banner("bnr_spring", "Spring sale", "active", 1, "2024-03-01T08:00:00+00:00"))
    store.banners.insert(_banner("bnr_gift", "Gift boxes", "active", 2, "2024-03-02T08:00:00+00:00"))
    store.banners.insert(_banner("bnr_winter", "Winter blend", "inactive", 9, "2024-03-03T08:00:00+00:00"))

    store.articles.insert({
        "article_id": "art_brew",
        "user_id": "usr_admin",
        "nick_name": "Ada",
        "title": "How to brew oolong",
        "tags": ["guide"],
        "describe": "Water, time and temperature",
        "image_url": image("brew.webp"),
        "content_html": "<p>Rinse the leaves first.</p>",
    })
    return store
