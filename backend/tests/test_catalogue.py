from storefront.db import SessionLocal
from storefront.models.product import Product
from storefront.models.site_settings import SiteSettings

from conftest import seed_product


def _slugs(res):
    return [p["slug"] for p in res.json()["products"]]


def _seed_three():
    # insertion order and creation time deliberately disagree
    seed_product("oolong", created_at=3000)
    seed_product("sencha", created_at=1000)
    seed_product("matcha", created_at=2000)


def test_list_products_default_order_is_reverse_insertion(client):
    _seed_three()
    res = client.get("/api/products")
    assert res.status_code == 200
    assert _slugs(res) == ["matcha", "sencha", "oolong"]


def test_list_products_sort_new_orders_by_creation_time(client):
    _seed_three()
    assert _slugs(client.get("/api/products?sort=new")) == ["oolong", "matcha", "sencha"]
    assert _slugs(client.get("/api/products?sort=NEW")) == ["oolong", "matcha", "sencha"]


def test_unknown_sort_falls_back_to_default(client):
    _seed_three()
    assert _slugs(client.get("/api/products?sort=price")) == ["matcha", "sencha", "oolong"]


def test_limit_truncates_in_selected_order(client):
    _seed_three()
    assert _slugs(client.get("/api/products?limit=2")) == ["matcha", "sencha"]
    assert _slugs(client.get("/api/products?sort=new&limit=1")) == ["oolong"]


def test_non_positive_or_junk_limit_returns_everything(client):
    _seed_three()
    for q in ("limit=0", "limit=-3", "limit=abc", "limit=", "limit=1e20", "limit=99999999999999999999"):
        res = client.get(f"/api/products?{q}")
        assert res.status_code == 200, q
        assert len(res.json()["products"]) == 3, q


def test_listing_includes_settings(client):
    db = SessionLocal()
    try:
        s = db.get(SiteSettings, 1)
        s.currency = "EUR"
        s.phone = "+33 1 23 45 67 89"
        db.commit()
    finally:
        db.close()

    body = client.get("/api/products").json()
    assert body["currency"] == "EUR"
    assert body["phone"] == "+33 1 23 45 67 89"
    assert body["products"] == []


def test_missing_settings_row_reads_as_default(client):
    db = SessionLocal()
    try:
        db.query(SiteSettings).delete()
        db.commit()
    finally:
        db.close()

    res = client.get("/api/products")
    assert res.status_code == 200
    body = res.json()
    assert body["currency"] == "USD"
    assert body["phone"] == ""


def test_get_product_by_slug(client):
    seed_product("rooibos", created_at=1234, name="Rooibos", price=4.5, grams=100,
                 category="tea", image="/images/rooibos.jpg", short_desc="Red bush")
    res = client.get("/api/products/rooibos")
    assert res.status_code == 200
    body = res.json()
    assert body["slug"] == "rooibos"
    assert body["name"] == "Rooibos"
    assert body["price"] == 4.5
    assert body["grams"] == 100
    assert body["category"] == "tea"
    assert body["image"] == "/images/rooibos.jpg"
    assert body["shortDesc"] == "Red bush"
    assert body["createdAt"] == 1234
    assert isinstance(body["id"], int)


def test_get_unknown_slug_is_404_without_side_effects(client):
    seed_product("kukicha", created_at=1)
    res = client.get("/api/products/does-not-exist")
    assert res.status_code == 404
    assert res.json() == {"error": "Not found"}

    db = SessionLocal()
    try:
        assert db.query(Product).count() == 1
    finally:
        db.close()
