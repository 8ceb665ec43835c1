import threading

from storefront.db import SessionLocal
from storefront.errors import Conflict
from storefront.models.product import Product
from storefront.services.catalog_service import CatalogService


def _product_count(slug=None):
    db = SessionLocal()
    try:
        q = db.query(Product)
        if slug is not None:
            q = q.filter(Product.slug == slug)
        return q.count()
    finally:
        db.close()


def test_create_then_get_round_trip(admin_client, client):
    payload = {
        "name": "Genmaicha",
        "slug": "genmaicha",
        "price": 7.25,
        "grams": 250,
        "category": "green",
        "image": "/images/genmaicha.jpg",
        "shortDesc": "Toasted rice blend",
    }
    res = admin_client.post("/api/admin/products", json=payload)
    assert res.status_code == 201
    created = res.json()
    assert created["slug"] == "genmaicha"
    assert created["createdAt"] > 0

    public = client.get("/api/products/genmaicha").json()
    assert public == created
    for key, value in payload.items():
        assert public[key] == value

    listed = client.get("/api/products").json()["products"]
    assert [p["slug"] for p in listed] == ["genmaicha"]


def test_create_applies_defaults(admin_client):
    res = admin_client.post("/api/admin/products", json={"name": "Plain", "slug": "plain"})
    assert res.status_code == 201
    body = res.json()
    assert body["price"] == 0
    assert body["grams"] == 0
    assert body["category"] == ""
    assert body["image"] == ""
    assert body["shortDesc"] == ""


def test_create_requires_name_and_slug(admin_client):
    for payload in ({"name": "No slug"}, {"slug": "no-name"}, {"name": "  ", "slug": "blank"}, {}):
        res = admin_client.post("/api/admin/products", json=payload)
        assert res.status_code == 400, payload
        assert res.json() == {"error": "Name and slug required"}
    assert _product_count() == 0


def test_create_rejects_negative_numbers(admin_client):
    res = admin_client.post("/api/admin/products", json={"name": "X", "slug": "x", "price": -1})
    assert res.status_code == 400
    res = admin_client.post("/api/admin/products", json={"name": "X", "slug": "x", "grams": -5})
    assert res.status_code == 400
    assert _product_count() == 0


def test_malformed_body_is_400_with_error_field(admin_client):
    res = admin_client.post("/api/admin/products", json={"name": "X", "slug": "x", "price": "cheap"})
    assert res.status_code == 400
    assert "error" in res.json()
    assert "price" in res.json()["error"]


def test_duplicate_slug_is_conflict(admin_client):
    first = admin_client.post("/api/admin/products", json={"name": "A", "slug": "dup"})
    second = admin_client.post("/api/admin/products", json={"name": "B", "slug": "dup"})
    assert first.status_code == 201
    assert second.status_code == 409
    assert "error" in second.json()
    assert _product_count("dup") == 1


def test_concurrent_creates_of_one_slug_yield_one_success():
    outcomes = []
    lock = threading.Lock()

    def worker(i):
        db = SessionLocal()
        try:
            CatalogService(db).create_product({"name": f"Racer {i}", "slug": "race"})
            result = "created"
        except Conflict:
            result = "conflict"
        finally:
            db.close()
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(6)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(outcomes) == ["conflict"] * 5 + ["created"]
    assert _product_count("race") == 1


def test_update_is_partial(admin_client):
    admin_client.post("/api/admin/products", json={
        "name": "Hojicha", "slug": "hojicha", "price": 9.5, "grams": 100,
        "category": "roasted", "shortDesc": "Roasted green tea",
    })
    created_at = admin_client.get("/api/products/hojicha").json()["createdAt"]

    res = admin_client.put("/api/admin/products/hojicha", json={"price": 11})
    assert res.status_code == 200
    body = res.json()
    assert body["price"] == 11
    # everything not sent keeps its stored value
    assert body["grams"] == 100
    assert body["shortDesc"] == "Roasted green tea"
    assert body["category"] == "roasted"
    assert body["name"] == "Hojicha"
    assert body["createdAt"] == created_at


def test_update_null_means_unchanged(admin_client):
    admin_client.post("/api/admin/products", json={"name": "Bancha", "slug": "bancha", "grams": 80})
    res = admin_client.put("/api/admin/products/bancha", json={"grams": None, "shortDesc": "Everyday"})
    assert res.status_code == 200
    assert res.json()["grams"] == 80
    assert res.json()["shortDesc"] == "Everyday"


def test_update_unknown_slug_is_404(admin_client):
    res = admin_client.put("/api/admin/products/ghost", json={"price": 1})
    assert res.status_code == 404
    assert res.json() == {"error": "Not found"}


def test_rename_slug(admin_client, client):
    admin_client.post("/api/admin/products", json={"name": "Old", "slug": "old-slug"})
    res = admin_client.put("/api/admin/products/old-slug", json={"slug": "new-slug"})
    assert res.status_code == 200
    assert client.get("/api/products/new-slug").status_code == 200
    assert client.get("/api/products/old-slug").status_code == 404


def test_rename_onto_existing_slug_is_conflict(admin_client):
    admin_client.post("/api/admin/products", json={"name": "A", "slug": "a"})
    admin_client.post("/api/admin/products", json={"name": "B", "slug": "b"})
    res = admin_client.put("/api/admin/products/b", json={"slug": "a"})
    assert res.status_code == 409
    assert _product_count("a") == 1
    assert _product_count("b") == 1


def test_delete_then_delete_again_is_404(admin_client, client):
    admin_client.post("/api/admin/products", json={"name": "Gone", "slug": "gone"})
    res = admin_client.delete("/api/admin/products/gone")
    assert res.status_code == 200
    assert res.json() == {"ok": True}
    assert client.get("/api/products/gone").status_code == 404

    again = admin_client.delete("/api/admin/products/gone")
    assert again.status_code == 404


def test_ids_are_not_reused_after_delete(admin_client):
    first = admin_client.post("/api/admin/products", json={"name": "One", "slug": "one"}).json()
    admin_client.delete("/api/admin/products/one")
    second = admin_client.post("/api/admin/products", json={"name": "Two", "slug": "two"}).json()
    assert second["id"] > first["id"]


def test_admin_list_includes_everything_newest_id_first(admin_client):
    for slug in ("p1", "p2", "p3"):
        admin_client.post("/api/admin/products", json={"name": slug, "slug": slug})
    res = admin_client.get("/api/admin/products")
    assert res.status_code == 200
    assert [p["slug"] for p in res.json()] == ["p3", "p2", "p1"]
