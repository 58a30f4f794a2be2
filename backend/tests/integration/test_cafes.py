"""
tests/integration/test_cafes.py — Cafe CRUD, validation and ownership.

Endpoints covered:
  GET    /api/cafes        → 200 {"cafe": [...]}
  POST   /api/cafes/new    → 200 cafe
  GET    /api/cafes/:id    → 200 {"cafe": {...}}
  PUT    /api/cafes/:id    → 200 {"cafe": {...}}
  DELETE /api/cafes/:id    → 204

Error cases:
  UNAUTHORIZED      401 — no session
  FORBIDDEN         403 — not the owner / ownerId names someone else
  CAFE_NOT_FOUND    404
  VALIDATION_ERROR  422
"""

from __future__ import annotations

from .conftest import (
    cafe_payload,
    csrf_headers,
    make_cafe,
    make_review,
    signup,
)


# ═══════════════════════════════════════════════════════════════════════════
# Reads
# ═══════════════════════════════════════════════════════════════════════════

class TestListAndGet:

    def test_empty_directory(self, client):
        resp = client.get("/api/cafes")
        assert resp.status_code == 200
        assert resp.get_json() == {"cafe": []}

    def test_list_is_newest_first(self, client):
        signup(client, "alice")
        first = make_cafe(client, title="First Cafe").get_json()
        second = make_cafe(client, title="Second Cafe").get_json()

        cafes = client.get("/api/cafes").get_json()["cafe"]
        assert [c["id"] for c in cafes] == [second["id"], first["id"]]

    def test_list_is_public(self, client, other_client):
        signup(client, "alice")
        make_cafe(client)
        resp = other_client.get("/api/cafes")
        assert resp.status_code == 200
        assert len(resp.get_json()["cafe"]) == 1

    def test_get_one(self, client):
        signup(client, "alice")
        cafe = make_cafe(client).get_json()

        resp = client.get(f"/api/cafes/{cafe['id']}")
        assert resp.status_code == 200
        assert resp.get_json()["cafe"] == cafe

    def test_get_unknown_returns_404(self, client):
        resp = client.get("/api/cafes/9999")
        assert resp.status_code == 404
        body = resp.get_json()
        assert body["code"] == "CAFE_NOT_FOUND"
        assert body["title"] == "Cafe not found."
        assert body["errors"] == ["Cafe with id of 9999 could not be found."]


# ═══════════════════════════════════════════════════════════════════════════
# POST /api/cafes/new
# ═══════════════════════════════════════════════════════════════════════════

class TestCreateCafe:

    def test_create_assigns_session_user_as_owner(self, client):
        user = signup(client, "alice")
        resp = make_cafe(client)
        assert resp.status_code == 200

        cafe = resp.get_json()
        assert cafe["ownerId"] == user["id"]
        assert cafe["owner"] == {"id": user["id"], "username": "alice"}
        assert cafe["title"] == "Blue Bottle"
        assert cafe["zipCode"] == "10011"
        assert cafe["createdAt"]
        assert cafe["updatedAt"]

    def test_create_with_matching_owner_id(self, client):
        user = signup(client, "alice")
        resp = make_cafe(client, ownerId=user["id"])
        assert resp.status_code == 200

    def test_create_for_someone_else_returns_403(self, client, other_client):
        bob = signup(other_client, "bobby")
        signup(client, "alice")

        resp = make_cafe(client, ownerId=bob["id"])
        assert resp.status_code == 403
        assert resp.get_json()["code"] == "FORBIDDEN"
        assert client.get("/api/cafes").get_json() == {"cafe": []}

    def test_create_without_session_returns_401(self, client):
        resp = make_cafe(client)
        assert resp.status_code == 401
        assert resp.get_json() == {
            "title": "Unauthorized",
            "message": "Unauthorized",
            "errors": ["Unauthorized"],
            "code": "UNAUTHORIZED",
        }

    def test_create_with_empty_body_lists_every_field(self, client):
        signup(client, "alice")
        resp = client.post("/api/cafes/new", json={}, headers=csrf_headers(client))
        assert resp.status_code == 422

        body = resp.get_json()
        assert body["code"] == "VALIDATION_ERROR"
        assert set(body["fields"]) == {
            "title", "description", "img", "address", "city", "zipCode",
        }

    def test_short_title_and_bad_zip(self, client):
        signup(client, "alice")
        resp = make_cafe(client, title="abc", zipCode="1234")
        assert resp.status_code == 422

        body = resp.get_json()
        assert "Please provide a title with at least 4 characters." in body["errors"]
        assert "Please provide a 5-digit zip code." in body["errors"]

    def test_zip_plus_four_is_accepted(self, client):
        signup(client, "alice")
        resp = make_cafe(client, zipCode="10011-1234")
        assert resp.status_code == 200
        assert resp.get_json()["zipCode"] == "10011-1234"

    def test_invalid_image_url(self, client):
        signup(client, "alice")
        resp = make_cafe(client, img="not a url")
        assert resp.status_code == 422
        assert "Please provide a valid image URL." in resp.get_json()["errors"]


# ═══════════════════════════════════════════════════════════════════════════
# PUT /api/cafes/:id
# ═══════════════════════════════════════════════════════════════════════════

class TestUpdateCafe:

    def test_partial_update_keeps_other_fields(self, client):
        signup(client, "alice")
        cafe = make_cafe(client).get_json()

        resp = client.put(
            f"/api/cafes/{cafe['id']}",
            json={"title": "Red Bottle"},
            headers=csrf_headers(client),
        )
        assert resp.status_code == 200
        updated = resp.get_json()["cafe"]
        assert updated["title"] == "Red Bottle"
        assert updated["description"] == cafe["description"]
        assert updated["zipCode"] == cafe["zipCode"]

    def test_full_record_round_trip_is_accepted(self, client):
        signup(client, "alice")
        cafe = make_cafe(client).get_json()
        cafe["city"] = "Brooklyn"

        resp = client.put(
            f"/api/cafes/{cafe['id']}",
            json=cafe,
            headers=csrf_headers(client),
        )
        assert resp.status_code == 200
        assert resp.get_json()["cafe"]["city"] == "Brooklyn"

    def test_update_validates_present_fields(self, client):
        signup(client, "alice")
        cafe = make_cafe(client).get_json()

        resp = client.put(
            f"/api/cafes/{cafe['id']}",
            json={"zipCode": "abcde"},
            headers=csrf_headers(client),
        )
        assert resp.status_code == 422
        assert list(resp.get_json()["fields"]) == ["zipCode"]

    def test_non_owner_gets_403_and_cafe_is_unchanged(self, client, other_client):
        signup(client, "alice")
        cafe = make_cafe(client).get_json()
        signup(other_client, "bobby")

        resp = other_client.put(
            f"/api/cafes/{cafe['id']}",
            json={"title": "Hijacked"},
            headers=csrf_headers(other_client),
        )
        assert resp.status_code == 403
        assert client.get(f"/api/cafes/{cafe['id']}").get_json()["cafe"]["title"] == "Blue Bottle"

    def test_update_unknown_returns_404(self, client):
        signup(client, "alice")
        resp = client.put(
            "/api/cafes/9999",
            json={"title": "Nowhere Cafe"},
            headers=csrf_headers(client),
        )
        assert resp.status_code == 404

    def test_update_without_session_returns_401(self, client, other_client):
        signup(client, "alice")
        cafe = make_cafe(client).get_json()

        resp = other_client.put(
            f"/api/cafes/{cafe['id']}",
            json={"title": "Anonymous"},
            headers=csrf_headers(other_client),
        )
        assert resp.status_code == 401


# ═══════════════════════════════════════════════════════════════════════════
# DELETE /api/cafes/:id
# ═══════════════════════════════════════════════════════════════════════════

class TestDeleteCafe:

    def test_owner_can_delete(self, client):
        signup(client, "alice")
        cafe = make_cafe(client).get_json()

        resp = client.delete(f"/api/cafes/{cafe['id']}", headers=csrf_headers(client))
        assert resp.status_code == 204
        assert client.get(f"/api/cafes/{cafe['id']}").status_code == 404

    def test_delete_removes_reviews(self, client, other_client):
        signup(client, "alice")
        cafe = make_cafe(client).get_json()
        signup(other_client, "bobby")
        review = make_review(other_client, cafe["id"]).get_json()

        client.delete(f"/api/cafes/{cafe['id']}", headers=csrf_headers(client))

        assert client.get(f"/api/reviews/cafes/{cafe['id']}").get_json() == {"answers": []}
        assert client.get(f"/api/reviews/{review['id']}").status_code == 404

    def test_non_owner_gets_403(self, client, other_client):
        signup(client, "alice")
        cafe = make_cafe(client).get_json()
        signup(other_client, "bobby")

        resp = other_client.delete(
            f"/api/cafes/{cafe['id']}", headers=csrf_headers(other_client)
        )
        assert resp.status_code == 403
        assert client.get(f"/api/cafes/{cafe['id']}").status_code == 200

    def test_delete_unknown_returns_404_before_ownership(self, client):
        signup(client, "alice")
        resp = client.delete("/api/cafes/9999", headers=csrf_headers(client))
        assert resp.status_code == 404
        assert resp.get_json()["code"] == "CAFE_NOT_FOUND"
