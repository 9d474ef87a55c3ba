from backoffice.pages import (
    articles,
    banners,
    customers,
    home,
    orders,
    products,
    suppliers,
    tags,
    team_members,
    users,
)

# Route page name -> render(ctx, params)
PAGES = {
    "home": home.render,
    "users": users.render_list,
    "user_edit": users.render_edit,
    "products": products.render_list,
    "product_create": products.render_create,
    "product_edit": products.render_edit,
    "orders": orders.render_list,
    "order_detail": orders.render_detail,
    "banners": banners.render_list,
    "banner_form": banners.render_form,
    "customers": customers.render,
    "team_members": team_members.render,
    "suppliers": suppliers.render,
    "tags": tags.render,
    "articles": articles.render_list,
    "article_form": articles.render_form,
}
