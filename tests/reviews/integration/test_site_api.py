"""Integration tests for Sites API endpoints via TestClient."""

OWNER = {"X-User-Id": "owner-1"}
INTRUDER = {"X-User-Id": "intruder"}


class TestRegisterSiteAPI:
    def test_register_returns_201(self, client):
        response = client.post("/sites", json={"name": "Corner Coffee", "domain": "coffee.example.com"}, headers=OWNER)
        assert response.status_code == 201
        assert "site_id" in response.json()

    def test_requires_user_header(self, client):
        response = client.post("/sites", json={"name": "Corner Coffee", "domain": "coffee.example.com"})
        assert response.status_code == 401

    def test_free_limit_returns_403(self, client, site_id):
        response = client.post("/sites", json={"name": "Book Nook", "domain": "books.example.com"}, headers=OWNER)
        assert response.status_code == 403

    def test_invalid_name_returns_422(self, client):
        response = client.post("/sites", json={"name": "C", "domain": "coffee.example.com"}, headers=OWNER)
        assert response.status_code == 422


class TestReadSitesAPI:
    def test_list(self, client, site_id):
        response = client.get("/sites", headers=OWNER)
        assert response.status_code == 200
        sites = response.json()
        assert [s["id"] for s in sites] == [site_id]
        assert sites[0]["tier"] == "FREE"
        assert sites[0]["review_count"] == 0

    def test_get_foreign_site_returns_403(self, client, site_id):
        assert client.get(f"/sites/{site_id}", headers=INTRUDER).status_code == 403

    def test_get_unknown_site_returns_404(self, client):
        assert client.get("/sites/missing", headers=OWNER).status_code == 404


class TestUpdateSiteAPI:
    def test_update_details(self, client, site_id):
        response = client.put(f"/sites/{site_id}", json={"name": "Corner Café"}, headers=OWNER)
        assert response.status_code == 200
        assert response.json()["name"] == "Corner Café"
        assert response.json()["domain"] == "coffee.example.com"

    def test_update_settings(self, client, site_id):
        response = client.put(f"/sites/{site_id}/settings", json={"settings": {"theme": "dark"}}, headers=OWNER)
        assert response.status_code == 200
        assert response.json()["settings"]["theme"] == "dark"

    def test_change_plan(self, client, site_id):
        response = client.put(f"/sites/{site_id}/plan", json={"tier": "PREMIUM"}, headers=OWNER)
        assert response.status_code == 200
        assert response.json()["tier"] == "PREMIUM"

    def test_unknown_plan_returns_400(self, client, site_id):
        response = client.put(f"/sites/{site_id}/plan", json={"tier": "GOLD"}, headers=OWNER)
        assert response.status_code == 400


class TestDeleteSiteAPI:
    def test_delete(self, client, site_id):
        response = client.delete(f"/sites/{site_id}", headers=OWNER)
        assert response.status_code == 200
        assert client.get(f"/reviews/site/{site_id}").status_code == 404

    def test_non_owner_returns_403(self, client, site_id):
        assert client.delete(f"/sites/{site_id}", headers=INTRUDER).status_code == 403
