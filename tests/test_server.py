"""Tests for the FastAPI export endpoint."""

import json

import pytest
from httpx import ASGITransport, AsyncClient

from marker_export import formats, read_kmz
from marker_export.server import app


@pytest.fixture
def client():
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest.mark.asyncio
class TestFormats:
    async def test_lists_all_formats(self, client):
        resp = await client.get("/formats")
        assert resp.status_code == 200
        data = resp.json()
        assert [f["format"] for f in data] == ["csv", "json", "gpx", "kml", "kmz"]
        assert data[4] == {
            "format": "kmz",
            "filename": "markers.kmz",
            "content_type": "application/vnd.google-earth.kmz",
        }


@pytest.mark.asyncio
class TestExport:
    async def test_csv_download(self, client, two_markers):
        resp = await client.post("/export", json=two_markers)
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "text/csv; charset=utf-8"
        assert resp.headers["content-disposition"] == "attachment; filename=markers.csv"
        lines = resp.text.split("\n")
        assert lines[0] == "id,latitude,longitude,name"
        assert len(lines) == 3

    async def test_geojson_download(self, client, two_markers):
        resp = await client.post("/export?format=json", json=two_markers)
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/json"
        data = json.loads(resp.text)
        assert data["features"][0]["geometry"]["coordinates"] == [-74, 40]

    @pytest.mark.parametrize(
        "tag,content_type",
        [("gpx", "application/gpx+xml"), ("kml", "application/vnd.google-earth.kml+xml")],
    )
    async def test_xml_downloads(self, client, rich_markers, tag, content_type):
        resp = await client.post(f"/export?format={tag}", json=rich_markers)
        assert resp.status_code == 200
        assert resp.headers["content-type"] == content_type
        assert resp.headers["content-disposition"] == f"attachment; filename=markers.{tag}"
        assert resp.text.startswith('<?xml version="1.0" encoding="UTF-8"?>')

    async def test_kmz_download(self, client, two_markers):
        resp = await client.post("/export?format=kmz", json=two_markers)
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/vnd.google-earth.kmz"
        kml = read_kmz(resp.content)
        assert kml.count("<Placemark>") == 2

    async def test_empty_list_returns_204(self, client):
        resp = await client.post("/export", json=[])
        assert resp.status_code == 204

    async def test_invalid_marker_returns_400(self, client, two_markers):
        del two_markers[1]["latitude"]
        resp = await client.post("/export?format=kml", json=two_markers)
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Invalid marker data"

    async def test_nan_latitude_returns_400(self, client):
        body = '[{"id": "1", "latitude": NaN, "longitude": -74.0}]'
        resp = await client.post(
            "/export", content=body, headers={"content-type": "application/json"}
        )
        assert resp.status_code == 400

    async def test_huge_int_latitude_returns_400(self, client, two_markers):
        two_markers[0]["latitude"] = 10**400
        resp = await client.post("/export?format=gpx", json=two_markers)
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Invalid marker data"

    async def test_unexpected_error_detail_is_generic(self, client, two_markers, monkeypatch):
        def broken(markers):
            raise RuntimeError("internal details")

        monkeypatch.setitem(
            formats._SERIALIZERS,
            formats.ExportFormat.CSV,
            (broken, "markers.csv", "text/csv"),
        )
        resp = await client.post("/export", json=two_markers)
        assert resp.status_code == 500
        assert resp.json()["detail"] == "Failed to export file"

    async def test_unknown_format_rejected(self, client, two_markers):
        resp = await client.post("/export?format=shp", json=two_markers)
        assert resp.status_code == 422
