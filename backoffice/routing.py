"""
Routes, navigation menu and breadcrumbs

Paths look like the browser's (``/products/edit/<id>``). The Streamlit
shell keeps the current path in the session and renders the page bound to
the matching route.
"""
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

HOME = "/"
LOGIN = "/login"


@dataclass(frozen=True)
class Route:
    pattern: str
    page: str
    public: bool = False

    @property
    def regex(self):
        parts = [
            f"(?P<{seg[1:]}>[^/]+)" if seg.startswith(":") else re.escape(seg)
            for seg in self.pattern.strip("/").split("/")
            if seg
        ]
        return re.compile("^/" + "/".join(parts) + "/?$") if parts else re.compile("^/?$")


ROUTES = (
    Route(LOGIN, "login", public=True),
    Route("/", "home"),
    Route("/users", "users"),
    Route("/users/edit/:id", "user_edit"),
    Route("/products", "products"),
    Route("/products/create", "product_create"),
    Route("/products/edit/:id", "product_edit"),
    Route("/products/draft/:id", "product_edit"),
    Route("/orders/order-list", "orders"),
    Route("/orders/order-list/:id", "order_detail"),
    Route("/banners", "banners"),
    Route("/banners/create", "banner_form"),
    Route("/banners/edit/:id", "banner_form"),
    Route("/customers", "customers"),
    Route("/team-members", "team_members"),
    Route("/suppliers", "suppliers"),
    Route("/tags", "tags"),
    Route("/articles", "articles"),
    Route("/articles/create", "article_form"),
    Route("/articles/edit/:id", "article_form"),
)

REDIRECTS = {"/orders": "/orders/order-list"}


def normalize_path(path: Optional[str]) -> str:
    path = "/" + (path or "").strip().strip("/")
    return REDIRECTS.get(path, path)


def match(path: str) -> Optional[Tuple[Route, Dict[str, str]]]:
    path = normalize_path(path)
    for route in ROUTES:
        found = route.regex.match(path)
        if found:
            return route, found.groupdict()
    return None


@dataclass(frozen=True)
class MenuItem:
    label: str
    path: str
    sub: Tuple["MenuItem", ...] = field(default_factory=tuple)


MENU = (
    MenuItem("dashboard.menu.customers.title", "/customers"),
    MenuItem("dashboard.menu.teamMembers.title", "/team-members"),
    MenuItem("dashboard.menu.suppliers.title", "/suppliers"),
    MenuItem("dashboard.menu.tags.title", "/tags"),
    MenuItem("dashboard.menu.products.title", "/products"),
    MenuItem(
        "dashboard.menu.orders.title",
        "/orders",
        (MenuItem("dashboard.menu.orders.sub.orderList", "/orders/order-list"),),
    ),
    MenuItem("dashboard.menu.banners.title", "/banners"),
    MenuItem("dashboard.menu.articles.title", "/articles"),
)

SEGMENT_LABELS = {
    "orders": "dashboard.menu.orders.title",
    "products": "dashboard.menu.products.title",
    "users": "dashboard.menu.users.title",
    "banners": "dashboard.menu.banners.title",
    "articles": "dashboard.menu.articles.title",
    "customers": "dashboard.menu.customers.title",
    "team-members": "dashboard.menu.teamMembers.title",
    "suppliers": "dashboard.menu.suppliers.title",
    "tags": "dashboard.menu.tags.title",
    "create": "breadcrumb.create",
    "edit": "breadcrumb.edit",
    "order-list": "dashboard.menu.orders.sub.orderList",
    "batch-orders": "dashboard.menu.orders.sub.batchOrders",
}


@dataclass(frozen=True)
class Breadcrumb:
    label: str
    path: str
    is_active: bool


def build_breadcrumbs(path: str, t) -> List[Breadcrumb]:
    """Home first, then one crumb per path segment; ids and other unknown segments show as-is."""
    segments = [s for s in (path or "").split("/") if s]
    if not segments:
        return [Breadcrumb(t("breadcrumb.home"), HOME, True)]

    crumbs = [Breadcrumb(t("breadcrumb.home"), HOME, False)]
    current = ""
    for index, segment in enumerate(segments):
        current += f"/{segment}"
        key = SEGMENT_LABELS.get(segment)
        crumbs.append(Breadcrumb(
            label=t(key) if key else segment,
            path=current,
            is_active=index == len(segments) - 1,
        ))
    return crumbs
