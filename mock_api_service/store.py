"""In-memory collections behind the mock admin API."""
import threading
import uuid
from datetime import datetime, timezone


def now():
    return datetime.now(timezone.utc).isoformat()


def new_id(prefix):
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


class Collection:
    def __init__(self, id_field, prefix, records=()):
        self.id_field = id_field
        self.prefix = prefix
        self._lock = threading.Lock()
        self._records = {}
        for record in records:
            self._records[record[id_field]] = dict(record)

    def all(self):
        with self._lock:
            return [dict(r) for r in self._records.values()]

    def get(self, record_id):
        with self._lock:
            record = self._records.get(record_id)
            return dict(record) if record else None

    def insert(self, data):
        record = dict(data)
        record.setdefault(self.id_field, new_id(self.prefix))
        record.setdefault("created_at", now())
        record["updated_at"] = now()
        with self._lock:
            self._records[record[self.id_field]] = record
        return dict(record)

    def update(self, record_id, changes):
        with self._lock:
            record = self._records.get(record_id)
            if record is None:
                return None
            record.update({k: v for k, v in changes.items() if k != self.id_field})
            record["updated_at"] = now()
            return dict(record)

    def delete(self, record_id):
        with self._lock:
            return self._records.pop(record_id, None) is not None


def _sort_key(field):
    def key(record):
        value = record.get(field)
        return (value is None, value if value is not None else "")
    return key


def paginate(records, page=1, limit=20, sort_by=None, order=None):
    """One page of ``records`` plus the total before slicing."""
    if sort_by:
        records = sorted(records, key=_sort_key(sort_by), reverse=order == "DESC")
    page = max(1, int(page or 1))
    limit = max(1, int(limit or 20))
    start = (page - 1) * limit
    return records[start:start + limit], len(records)


class Store:
    def __init__(self):
        self.users = Collection("user_id", "usr")
        self.staff = Collection("staff_id", "stf")
        self.suppliers = Collection("supplier_id", "sup")
        self.tags = Collection("tag_id", "tag")
        self.products = Collection("product_id", "prd")
        self.orders = Collection("order_id", "ord")
        self.banners = Collection("banner_id", "bnr")
        self.articles = Collection("article_id", "art")
        self.images = {}

    def find_user_by_email(self, email):
        for user in self.users.all():
            if user["email"].lower() == (email or "").lower():
                return user
        return None

    def customers(self):
        """Shoppers with their order totals."""
        orders = self.orders.all()
        result = []
        for user in self.users.all():
            if user["role"] != "user":
                continue
            mine = [o for o in orders if o["user_id"] == user["user_id"]]
            result.append({
                "user_id": user["user_id"],
                "email": user["email"],
                "first_name": user["first_name"],
                "last_name": user["last_name"],
                "phone_number": user["phone_number"],
                "total_spent": round(sum(float(o["total_order_fee"]) for o in mine), 2),
                "order_count": len(mine),
                "last_order_date": max((o["created_at"] for o in mine), default=None),
                "created_at": user["created_at"],
            })
        return result
