"""Companies, categories, employees and server accounts."""

from .conftest import create_asset


class TestCompanies:

    def test_staff_can_read_but_not_write(self, asset_client, staff_headers, company):
        assert asset_client.get("/api/companies", headers=staff_headers).status_code == 200
        resp = asset_client.post(
            "/api/companies", json={"name": "Other", "code": "OTH"}, headers=staff_headers)
        assert resp.status_code == 403

    def test_list_is_ordered_by_name(self, asset_client, admin_headers):
        for name, code in (("Zeta", "ZET"), ("Alpha", "ALP"), ("Mid", "MID")):
            asset_client.post("/api/companies", json={"name": name, "code": code},
                              headers=admin_headers)
        resp = asset_client.get("/api/companies", headers=admin_headers)
        assert [c["name"] for c in resp.json()["data"]] == ["Alpha", "Mid", "Zeta"]

    def test_duplicate_name_is_conflict(self, asset_client, admin_headers, company):
        resp = asset_client.post(
            "/api/companies", json={"name": "Acme", "code": "NEW"}, headers=admin_headers)
        assert resp.status_code == 409

    def test_update_company(self, asset_client, admin_headers, company):
        resp = asset_client.put(f"/api/companies/{company['id']}",
                                json={"logo": "logos/acme.png"}, headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["logo"] == "logos/acme.png"
        assert resp.json()["data"]["name"] == "Acme"

    def test_delete_cascades_to_assets(self, asset_client, admin_headers, staff_headers,
                                       company, category, asset):
        resp = asset_client.delete(f"/api/companies/{company['id']}", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["deleted_at"] is not None

        assert asset_client.get("/api/companies", headers=staff_headers).json()["data"] == []
        assets = asset_client.get("/api/assets", headers=staff_headers).json()["data"]
        assert assets["total"] == 0

        # still readable by id for audit
        resp = asset_client.get(f"/api/assets/{asset['id']}", headers=staff_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["deleted_at"] is not None

    def test_update_deleted_company_is_not_found(self, asset_client, admin_headers, company):
        asset_client.delete(f"/api/companies/{company['id']}", headers=admin_headers)
        resp = asset_client.put(f"/api/companies/{company['id']}",
                                json={"name": "Back"}, headers=admin_headers)
        assert resp.status_code == 404


class TestCategories:

    def test_slug_derived_from_name(self, asset_client, staff_headers):
        resp = asset_client.post(
            "/api/categories", json={"name": "Network Switch & Router"}, headers=staff_headers)
        assert resp.status_code == 201
        assert resp.json()["data"]["slug"] == "network-switch-router"

    def test_explicit_slug_is_normalised(self, asset_client, staff_headers):
        resp = asset_client.post(
            "/api/categories", json={"name": "Phones", "slug": "Mobile Phones"},
            headers=staff_headers)
        assert resp.json()["data"]["slug"] == "mobile-phones"

    def test_empty_name_rejected(self, asset_client, staff_headers):
        resp = asset_client.post("/api/categories", json={"name": ""}, headers=staff_headers)
        assert resp.status_code == 422

    def test_duplicate_slug_is_conflict(self, asset_client, staff_headers, category):
        resp = asset_client.post(
            "/api/categories", json={"name": "Other", "slug": "laptop"}, headers=staff_headers)
        assert resp.status_code == 409

    def test_only_admin_deletes(self, asset_client, staff_headers, admin_headers, category):
        url = f"/api/categories/{category['id']}"
        assert asset_client.delete(url, headers=staff_headers).status_code == 403
        assert asset_client.delete(url, headers=admin_headers).status_code == 200
        resp = asset_client.get(url, headers=staff_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["deleted_at"] is not None

    def test_delete_cascades_to_assets(self, asset_client, admin_headers, staff_headers,
                                       company, category):
        other = asset_client.post(
            "/api/categories", json={"name": "Monitor"}, headers=staff_headers).json()["data"]
        create_asset(asset_client, staff_headers, company, category)
        kept = create_asset(asset_client, staff_headers, company, other)

        asset_client.delete(f"/api/categories/{category['id']}", headers=admin_headers)

        assets = asset_client.get("/api/assets", headers=staff_headers).json()["data"]
        assert [a["id"] for a in assets["assets"]] == [kept["id"]]


class TestEmployees:

    def _create(self, client, headers, name, department="IT"):
        resp = client.post("/api/employees", json={"name": name, "department": department},
                           headers=headers)
        assert resp.status_code == 201
        return resp.json()["data"]

    def test_paginated_search(self, asset_client, staff_headers):
        for name in ("Carla", "Ana", "Bea"):
            self._create(asset_client, staff_headers, name)
        self._create(asset_client, staff_headers, "Dan", department="Finance")

        resp = asset_client.get("/api/employees", params={"per_page": 2}, headers=staff_headers)
        page = resp.json()["data"]
        assert page["total"] == 4
        assert page["last_page"] == 2
        assert [e["name"] for e in page["data"]] == ["Ana", "Bea"]

        resp = asset_client.get("/api/employees", params={"q": "fin"}, headers=staff_headers)
        assert [e["name"] for e in resp.json()["data"]["data"]] == ["Dan"]

    def test_partial_update(self, asset_client, staff_headers):
        employee = self._create(asset_client, staff_headers, "Ana")
        resp = asset_client.put(f"/api/employees/{employee['id']}",
                                json={"is_active": False}, headers=staff_headers)
        assert resp.json()["data"]["is_active"] is False
        assert resp.json()["data"]["name"] == "Ana"

    def test_delete_hides_from_list(self, asset_client, staff_headers, admin_headers):
        employee = self._create(asset_client, staff_headers, "Ana")
        url = f"/api/employees/{employee['id']}"
        assert asset_client.delete(url, headers=staff_headers).status_code == 403
        assert asset_client.delete(url, headers=admin_headers).status_code == 200
        resp = asset_client.get("/api/employees", headers=staff_headers)
        assert resp.json()["data"]["total"] == 0

        resp = asset_client.get(url, headers=staff_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["deleted_at"] is not None


class TestServerAccounts:

    def _payload(self, **overrides):
        payload = {
            "name": "File server",
            "department": "IT",
            "server_user": "root",
            "server_password": " p@ss word ",
            "status": "online",
        }
        payload.update(overrides)
        return payload

    def test_admin_only(self, asset_client, staff_headers):
        assert asset_client.get("/api/servers", headers=staff_headers).status_code == 403

    def test_password_encrypted_at_rest(self, asset_client, asset_db, admin_headers):
        from asset_service.app.models.server_accounts import ServerAccount

        resp = asset_client.post("/api/servers", json=self._payload(), headers=admin_headers)
        assert resp.status_code == 201
        assert resp.json()["data"]["server_password"] == " p@ss word "

        stored = asset_db.query(ServerAccount).one()
        assert stored.server_password != " p@ss word "

    def test_empty_password_keeps_stored_one(self, asset_client, admin_headers, company):
        created = asset_client.post(
            "/api/servers", json=self._payload(company_id=company["id"]),
            headers=admin_headers).json()["data"]
        assert created["company_name"] == "Acme"

        resp = asset_client.put(f"/api/servers/{created['id']}",
                                json={"status": "offline", "server_password": ""},
                                headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["status"] == "offline"
        assert resp.json()["data"]["server_password"] == " p@ss word "

    def test_unknown_company_rejected(self, asset_client, admin_headers):
        resp = asset_client.post(
            "/api/servers",
            json=self._payload(company_id="00000000-0000-0000-0000-000000000000"),
            headers=admin_headers)
        assert resp.status_code == 422
        assert "company_id" in resp.json()["data"]["errors"]
