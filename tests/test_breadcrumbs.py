from backoffice.routing import MENU, build_breadcrumbs, match, normalize_path


def test_root_is_a_single_active_home_crumb(t):
    crumbs = build_breadcrumbs("/", t)
    assert [(c.label, c.path, c.is_active) for c in crumbs] == [("Home", "/", True)]


def test_known_segments_are_translated_and_last_is_active(t):
    crumbs = build_breadcrumbs("/products/edit/prd_1", t)
    assert [c.label for c in crumbs] == ["Home", "Products", "Edit", "prd_1"]
    assert [c.path for c in crumbs] == ["/", "/products", "/products/edit", "/products/edit/prd_1"]
    assert [c.is_active for c in crumbs] == [False, False, False, True]


def test_order_list_crumb(t):
    crumbs = build_breadcrumbs("/orders/order-list", t)
    assert [c.label for c in crumbs] == ["Home", "Orders", "Order list"]


def test_repeated_slashes_are_ignored(t):
    crumbs = build_breadcrumbs("//banners//create/", t)
    assert [c.path for c in crumbs] == ["/", "/banners", "/banners/create"]


def test_routes_match_with_params():
    route, params = match("/products/edit/prd_9")
    assert route.page == "product_edit"
    assert params == {"id": "prd_9"}
    route, params = match("/products/draft/prd_9")
    assert route.page == "product_edit"
    assert match("/banners/create")[0].page == "banner_form"
    assert match("/nowhere") is None


def test_orders_redirects_to_order_list():
    assert normalize_path("/orders") == "/orders/order-list"
    assert match("/orders")[0].page == "orders"
    assert match("orders/order-list/ord_1")[1] == {"id": "ord_1"}


def test_every_menu_path_resolves():
    for item in MENU:
        for entry in (item,) + item.sub:
            assert match(entry.path) is not None, entry.path
