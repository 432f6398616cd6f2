"""
Integration tests for admin login and moderation endpoints
"""
import pytest

from tenthouse.core.config import settings
from tenthouse.db.models.testimonial import Testimonial

BASE = "/api/v1/admin/testimonials"


class TestAuth:

    def test_login_wrong_password(self, client, admin_password_hash, monkeypatch):
        monkeypatch.setattr(settings, "ADMIN_PASSWORD_HASH", admin_password_hash)

        resp = client.post("/api/v1/auth/login", json={"username": "admin", "password": "nope"})

        assert resp.status_code == 401
        assert resp.json()["kind"] == "not_authenticated"

    def test_login_not_configured(self, client, monkeypatch):
        monkeypatch.setattr(settings, "ADMIN_PASSWORD_HASH", None)

        resp = client.post("/api/v1/auth/login", json={"username": "admin", "password": "anything"})

        assert resp.status_code == 401

    def test_me(self, client, admin_headers):
        resp = client.get("/api/v1/auth/me", headers=admin_headers)
        assert resp.json() == {"username": "admin"}

    @pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer not-a-jwt"}])
    def test_admin_routes_need_token(self, client, headers):
        resp = client.get(BASE, headers=headers)

        assert resp.status_code == 401
        assert resp.json()["status"] == "error"


class TestModeration:

    def test_list_all_with_filter(self, client, admin_headers, make_testimonial):
        make_testimonial(status="approved")
        pending = make_testimonial(status="pending", ip_address="81.2.69.142")

        resp = client.get(BASE, params={"status": "pending"}, headers=admin_headers)

        assert resp.status_code == 200
        data = resp.json()["data"]
        assert [t["id"] for t in data] == [pending.id]
        assert data[0]["ip_address"] == "81.2.69.142"
        assert data[0]["status"] == "pending"

    def test_list_unknown_status(self, client, admin_headers):
        resp = client.get(BASE, params={"status": "spam"}, headers=admin_headers)

        assert resp.status_code == 400
        assert resp.json()["kind"] == "invalid_status"

    def test_approve_makes_public(self, client, admin_headers, make_testimonial):
        row = make_testimonial()
        assert client.get("/api/v1/testimonials").json()["data"] == []

        resp = client.patch(f"{BASE}/{row.id}/status", json={"status": "approved"}, headers=admin_headers)

        assert resp.status_code == 200
        assert resp.json()["status"] == "approved"
        assert [t["id"] for t in client.get("/api/v1/testimonials").json()["data"]] == [row.id]

    def test_set_status_errors(self, client, admin_headers, make_testimonial):
        row = make_testimonial()

        bad = client.patch(f"{BASE}/{row.id}/status", json={"status": "live"}, headers=admin_headers)
        missing = client.patch(f"{BASE}/{row.id + 100}/status", json={"status": "approved"}, headers=admin_headers)

        assert bad.status_code == 400
        assert bad.json()["kind"] == "invalid_status"
        assert missing.status_code == 404
        assert missing.json()["error"] == "Testimonial not found"

    def test_bulk_approve(self, client, admin_headers, make_testimonial, db_session):
        first, second = make_testimonial(), make_testimonial()

        resp = client.post(f"{BASE}/bulk-approve", json={"ids": [first.id, second.id, 4040]}, headers=admin_headers)

        assert resp.status_code == 200
        assert resp.json() == {"success": True, "count": 2, "message": "Approved 2 testimonials"}
        db_session.expire_all()
        assert {r.status for r in db_session.query(Testimonial).all()} == {"approved"}

    def test_bulk_approve_empty(self, client, admin_headers):
        resp = client.post(f"{BASE}/bulk-approve", json={"ids": []}, headers=admin_headers)

        assert resp.status_code == 400
        assert resp.json()["errors"] == ["No testimonials selected"]

    def test_bulk_approve_malformed(self, client, admin_headers):
        resp = client.post(f"{BASE}/bulk-approve", json={"ids": "all"}, headers=admin_headers)

        assert resp.status_code == 422
        assert resp.json()["kind"] == "request_validation_error"

    def test_delete(self, client, admin_headers, make_testimonial):
        row = make_testimonial()

        assert client.delete(f"{BASE}/{row.id}", headers=admin_headers).status_code == 204
        assert client.get(f"{BASE}/{row.id}", headers=admin_headers).status_code == 404
        assert client.delete(f"{BASE}/{row.id}", headers=admin_headers).status_code == 404

    def test_get_single(self, client, admin_headers, make_testimonial):
        row = make_testimonial(name="Anjali Verma", ip_address="8.8.4.4")

        resp = client.get(f"{BASE}/{row.id}", headers=admin_headers)

        assert resp.status_code == 200
        assert resp.json()["name"] == "Anjali Verma"
        assert resp.json()["ip_address"] == "8.8.4.4"
