import time

from storefront.db import SessionLocal
from storefront.models.review import Review


def _submit(client, name="Ana", title="Lovely", text="Will buy again"):
    res = client.post("/api/reviews", json={"name": name, "title": title, "text": text})
    assert res.status_code == 201, res.text
    return res.json()


def test_submitted_review_is_hidden_until_approved(client, admin_client):
    review = _submit(client)
    assert review["approved"] is False
    assert client.get("/api/reviews").json() == []

    res = admin_client.put(f"/api/admin/reviews/{review['id']}/approve")
    assert res.status_code == 200
    assert res.json() == {"ok": True}

    for _ in range(3):
        public = client.get("/api/reviews").json()
        assert [r["id"] for r in public] == [review["id"]]
        assert public[0]["approved"] is True


def test_approve_is_idempotent(client, admin_client):
    review = _submit(client)
    first = admin_client.put(f"/api/admin/reviews/{review['id']}/approve")
    second = admin_client.put(f"/api/admin/reviews/{review['id']}/approve")
    assert first.status_code == 200
    assert second.status_code == 200
    assert len(client.get("/api/reviews").json()) == 1


def test_approve_unknown_review_is_404(admin_client):
    res = admin_client.put("/api/admin/reviews/9999/approve")
    assert res.status_code == 404
    assert res.json() == {"error": "Not found"}


def test_out_of_range_review_id_is_404(admin_client):
    huge = "99999999999999999999"
    for res in (
        admin_client.put(f"/api/admin/reviews/{huge}/approve"),
        admin_client.delete(f"/api/admin/reviews/{huge}"),
        admin_client.put("/api/admin/reviews/-1/approve"),
    ):
        assert res.status_code == 404
        assert res.json() == {"error": "Not found"}


def test_submission_requires_all_fields(client):
    for payload in (
        {"title": "t", "text": "x"},
        {"name": "n", "text": "x"},
        {"name": "n", "title": "t"},
        {"name": "n", "title": "t", "text": "   "},
    ):
        res = client.post("/api/reviews", json=payload)
        assert res.status_code == 400, payload
        assert res.json() == {"error": "All fields required"}

    db = SessionLocal()
    try:
        assert db.query(Review).count() == 0
    finally:
        db.close()


def test_submission_cannot_self_approve(client):
    res = client.post("/api/reviews", json={"name": "n", "title": "t", "text": "x", "approved": True})
    assert res.status_code == 201
    assert res.json()["approved"] is False
    assert client.get("/api/reviews").json() == []


def test_public_list_is_newest_first(client, admin_client):
    older = _submit(client, title="first")
    time.sleep(0.01)
    newer = _submit(client, title="second")
    for r in (older, newer):
        admin_client.put(f"/api/admin/reviews/{r['id']}/approve")
    titles = [r["title"] for r in client.get("/api/reviews").json()]
    assert titles == ["second", "first"]


def test_admin_list_shows_pending_and_approved(client, admin_client):
    a = _submit(client, title="a")
    b = _submit(client, title="b")
    admin_client.put(f"/api/admin/reviews/{a['id']}/approve")

    res = admin_client.get("/api/admin/reviews")
    assert res.status_code == 200
    listed = res.json()
    assert [r["id"] for r in listed] == [b["id"], a["id"]]
    assert [r["approved"] for r in listed] == [False, True]


def test_delete_review(client, admin_client):
    review = _submit(client)
    admin_client.put(f"/api/admin/reviews/{review['id']}/approve")

    res = admin_client.delete(f"/api/admin/reviews/{review['id']}")
    assert res.status_code == 200
    assert client.get("/api/reviews").json() == []
    assert admin_client.delete(f"/api/admin/reviews/{review['id']}").status_code == 404


def test_non_numeric_review_id_is_400(admin_client):
    res = admin_client.put("/api/admin/reviews/abc/approve")
    assert res.status_code == 400
    assert "error" in res.json()
