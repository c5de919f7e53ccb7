"""Tag rendering, archiving, print status and download."""

import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from asset_service.app.models.batch_tags import BatchTag
from asset_service.app.services.tag_renderer import QrTagRenderer
from .conftest import FAKE_PNG, create_asset

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def _coded_asset(client, headers, company, category, code):
    created = create_asset(client, headers, company, category)
    resp = client.post("/api/assets/unique-code", headers=headers,
                       json={"asset_id": created["id"], "unique_code": code})
    assert resp.status_code == 201
    return created


def test_qr_renderer_produces_png():
    image = QrTagRenderer(box_size=2).render("LAP-001")
    assert image.startswith(PNG_SIGNATURE)


class TestArchiveTag:

    def test_archive_writes_file_and_record(self, asset_client, staff_headers, company,
                                            category, tag_renderer, tag_storage):
        created = _coded_asset(asset_client, staff_headers, company, category, "LAP-001")

        resp = asset_client.post("/api/batch-tags", json={"unique_code": "LAP-001"},
                                 headers=staff_headers)
        assert resp.status_code == 201
        tag = resp.json()["data"]
        assert tag["asset_id"] == created["id"]
        assert tag["file_path"] == "batch-tags/LAP-001.png"
        assert tag["url"] == "/storage/batch-tags/LAP-001.png"
        assert tag["print_status"] == "not_printed"

        stored = tag_storage / "batch-tags" / "LAP-001.png"
        assert stored.read_bytes() == FAKE_PNG + b"LAP-001"
        assert tag_renderer.rendered == ["LAP-001"]

    def test_rearchive_resets_existing_record(self, asset_client, staff_headers,
                                              company, category):
        _coded_asset(asset_client, staff_headers, company, category, "LAP-001")
        first = asset_client.post("/api/batch-tags", json={"unique_code": "LAP-001"},
                                  headers=staff_headers).json()["data"]
        asset_client.post("/api/batch-tags/mark-printed", headers=staff_headers)

        resp = asset_client.post("/api/batch-tags", json={"unique_code": "LAP-001"},
                                 headers=staff_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["id"] == first["id"]
        assert resp.json()["data"]["print_status"] == "not_printed"

        tags = asset_client.get("/api/batch-tags", headers=staff_headers).json()["data"]
        assert len(tags) == 1

    def test_unknown_code(self, asset_client, staff_headers):
        resp = asset_client.post("/api/batch-tags", json={"unique_code": "NOPE"},
                                 headers=staff_headers)
        assert resp.status_code == 404

    def test_one_live_tag_per_code_in_storage(self, asset_client, asset_db, staff_headers,
                                              company, category):
        created = _coded_asset(asset_client, staff_headers, company, category, "LAP-001")
        asset_client.post("/api/batch-tags", json={"unique_code": "LAP-001"},
                          headers=staff_headers)

        asset_db.add(BatchTag(asset_id=uuid.UUID(created["id"]), unique_code="LAP-001",
                              file_path="batch-tags/LAP-001.png"))
        with pytest.raises(IntegrityError):
            asset_db.commit()
        asset_db.rollback()

        asset_db.add(BatchTag(asset_id=uuid.UUID(created["id"]), unique_code="LAP-001",
                              file_path="batch-tags/LAP-001.png", is_deleted=True))
        asset_db.commit()

    def test_archive_after_delete_creates_new_record(self, asset_client, staff_headers,
                                                     admin_headers, company, category):
        _coded_asset(asset_client, staff_headers, company, category, "LAP-001")
        first = asset_client.post("/api/batch-tags", json={"unique_code": "LAP-001"},
                                  headers=staff_headers).json()["data"]
        asset_client.delete(f"/api/batch-tags/{first['id']}", headers=admin_headers)

        resp = asset_client.post("/api/batch-tags", json={"unique_code": "LAP-001"},
                                 headers=staff_headers)
        assert resp.status_code == 201
        assert resp.json()["data"]["id"] != first["id"]

    def test_control_characters_rejected(self, asset_client, staff_headers):
        resp = asset_client.post("/api/batch-tags", json={"unique_code": "LAP\n001"},
                                 headers=staff_headers)
        assert resp.status_code == 422


class TestPrintStatus:

    def test_mark_printed_counts_only_pending(self, asset_client, staff_headers,
                                              company, category):
        for code in ("LAP-001", "LAP-002"):
            _coded_asset(asset_client, staff_headers, company, category, code)
            asset_client.post("/api/batch-tags", json={"unique_code": code},
                              headers=staff_headers)

        resp = asset_client.post("/api/batch-tags/mark-printed", headers=staff_headers)
        assert resp.status_code == 200
        assert resp.json()["data"] == {"updated": 2}
        assert resp.json()["message"] == "2 tag(s) marked as printed"

        resp = asset_client.post("/api/batch-tags/mark-printed", headers=staff_headers)
        assert resp.json()["data"] == {"updated": 0}

        tags = asset_client.get("/api/batch-tags", headers=staff_headers).json()["data"]
        assert {t["print_status"] for t in tags} == {"printed"}

    def test_delete_tag_is_admin_only(self, asset_client, staff_headers, admin_headers,
                                      company, category):
        _coded_asset(asset_client, staff_headers, company, category, "LAP-001")
        tag = asset_client.post("/api/batch-tags", json={"unique_code": "LAP-001"},
                                headers=staff_headers).json()["data"]

        url = f"/api/batch-tags/{tag['id']}"
        assert asset_client.delete(url, headers=staff_headers).status_code == 403
        assert asset_client.delete(url, headers=admin_headers).status_code == 200
        assert asset_client.get("/api/batch-tags", headers=staff_headers).json()["data"] == []

    def test_asset_delete_hides_its_tags(self, asset_client, staff_headers, admin_headers,
                                         company, category):
        created = _coded_asset(asset_client, staff_headers, company, category, "LAP-001")
        asset_client.post("/api/batch-tags", json={"unique_code": "LAP-001"},
                          headers=staff_headers)
        asset_client.delete(f"/api/assets/{created['id']}", headers=admin_headers)
        assert asset_client.get("/api/batch-tags", headers=staff_headers).json()["data"] == []


class TestDownloadTag:

    def test_download_serves_archived_file(self, asset_client, staff_headers, company,
                                           category, tag_renderer):
        _coded_asset(asset_client, staff_headers, company, category, "LAP-001")
        asset_client.post("/api/batch-tags", json={"unique_code": "LAP-001"},
                          headers=staff_headers)

        resp = asset_client.get("/api/assets/LAP-001/download-tag", headers=staff_headers)
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "image/png"
        assert resp.headers["content-disposition"] == 'attachment; filename="LAP-001.png"'
        assert resp.content == FAKE_PNG + b"LAP-001"
        assert tag_renderer.rendered == ["LAP-001"]

    def test_download_renders_when_not_archived(self, asset_client, staff_headers, company,
                                                category, tag_renderer):
        _coded_asset(asset_client, staff_headers, company, category, "LAP-002")
        resp = asset_client.get("/api/assets/LAP-002/download-tag", headers=staff_headers)
        assert resp.status_code == 200
        assert resp.content.startswith(PNG_SIGNATURE)
        assert tag_renderer.rendered == ["LAP-002"]

    def test_download_renders_after_tag_deleted(self, asset_client, staff_headers,
                                                admin_headers, company, category,
                                                tag_renderer):
        _coded_asset(asset_client, staff_headers, company, category, "LAP-001")
        tag = asset_client.post("/api/batch-tags", json={"unique_code": "LAP-001"},
                                headers=staff_headers).json()["data"]
        asset_client.delete(f"/api/batch-tags/{tag['id']}", headers=admin_headers)

        resp = asset_client.get("/api/assets/LAP-001/download-tag", headers=staff_headers)
        assert resp.status_code == 200
        assert tag_renderer.rendered == ["LAP-001", "LAP-001"]

    def test_download_unknown_code(self, asset_client, staff_headers):
        resp = asset_client.get("/api/assets/NOPE/download-tag", headers=staff_headers)
        assert resp.status_code == 404
        assert resp.json()["status"] == "Failure"
