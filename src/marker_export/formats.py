"""Closed set of export formats, each bound to its serializer."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any

from . import serializers
from .exceptions import InvalidInput


class ExportFormat(str, Enum):
    CSV = "csv"
    GEOJSON = "json"
    GPX = "gpx"
    KML = "kml"
    KMZ = "kmz"

    @classmethod
    def parse(cls, tag: str | ExportFormat) -> ExportFormat:
        try:
            return cls(tag)
        except ValueError:
            raise InvalidInput("Unsupported format") from None

    @property
    def serializer(self) -> Callable[..., Any]:
        return _SERIALIZERS[self][0]

    @property
    def filename(self) -> str:
        return _SERIALIZERS[self][1]

    @property
    def content_type(self) -> str:
        return _SERIALIZERS[self][2]

    @property
    def is_async(self) -> bool:
        """Only KMZ suspends, for archive compression."""
        return self is ExportFormat.KMZ


_SERIALIZERS = {
    ExportFormat.CSV: (
        serializers.export_to_csv, serializers.CSV_FILENAME, serializers.CSV_CONTENT_TYPE
    ),
    ExportFormat.GEOJSON: (
        serializers.export_to_geojson, serializers.GEOJSON_FILENAME, serializers.GEOJSON_CONTENT_TYPE
    ),
    ExportFormat.GPX: (
        serializers.export_to_gpx, serializers.GPX_FILENAME, serializers.GPX_CONTENT_TYPE
    ),
    ExportFormat.KML: (
        serializers.export_to_kml, serializers.KML_FILENAME, serializers.KML_CONTENT_TYPE
    ),
    ExportFormat.KMZ: (
        serializers.export_to_kmz, serializers.KMZ_FILENAME, serializers.KMZ_CONTENT_TYPE
    ),
}
