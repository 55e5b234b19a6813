"""Tests for file and HTTP response delivery."""

import pytest

from marker_export import DeliveryFailed, FileDelivery, InvalidInput, ResponseDelivery
from marker_export import delivery as delivery_module


class TestFileDelivery:
    def test_writes_text(self, tmp_path):
        path = FileDelivery(tmp_path).deliver("a,b\n1,2", "markers.csv", "text/csv")
        assert path == tmp_path / "markers.csv"
        assert path.read_text(encoding="utf-8") == "a,b\n1,2"

    def test_writes_bytes(self, tmp_path):
        path = FileDelivery(tmp_path / "nested").deliver(b"PK\x03\x04", "markers.kmz", "x")
        assert path.read_bytes() == b"PK\x03\x04"

    def test_overwrites_existing(self, tmp_path):
        delivery = FileDelivery(tmp_path)
        delivery.deliver("old", "markers.kml", "x")
        delivery.deliver("new", "markers.kml", "x")
        assert (tmp_path / "markers.kml").read_text() == "new"

    @pytest.mark.parametrize("content", ["", b"", None])
    def test_rejects_empty_content(self, tmp_path, content):
        with pytest.raises(InvalidInput, match="No content to download"):
            FileDelivery(tmp_path).deliver(content, "markers.csv", "text/csv")

    def test_output_dir_is_a_file(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        with pytest.raises(DeliveryFailed, match="Failed to download file"):
            FileDelivery(blocker).deliver("data", "markers.csv", "text/csv")

    def test_failed_rename_leaves_no_temp_file(self, tmp_path, monkeypatch):
        def fail(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(delivery_module.os, "replace", fail)
        with pytest.raises(DeliveryFailed):
            FileDelivery(tmp_path).deliver("data", "markers.csv", "text/csv")
        assert list(tmp_path.iterdir()) == []


class TestResponseDelivery:
    def test_builds_attachment(self):
        delivery = ResponseDelivery()
        response = delivery.deliver("<kml/>", "markers.kml", "application/vnd.google-earth.kml+xml")
        assert delivery.response is response
        assert response.headers["content-disposition"] == "attachment; filename=markers.kml"
        assert response.media_type == "application/vnd.google-earth.kml+xml"

    def test_rejects_empty_content(self):
        with pytest.raises(InvalidInput):
            ResponseDelivery().deliver(b"", "markers.kmz", "application/vnd.google-earth.kmz")
