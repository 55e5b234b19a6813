"""Marker export library: CSV, GeoJSON, GPX, KML and KMZ."""

from .delivery import Delivery, FileDelivery, ResponseDelivery
from .exceptions import (
    ConversionFailed,
    DeliveryFailed,
    ExportFailed,
    InvalidInput,
    MarkerExportError,
)
from .formats import ExportFormat
from .geojson import build_point_collection
from .models import ExportResult, Marker, PointCollection, PointFeature
from .orchestrator import ExportOrchestrator, ExportState
from .packaging import package_kml, read_kmz
from .serializers import (
    export_to_csv,
    export_to_geojson,
    export_to_gpx,
    export_to_kml,
    export_to_kmz,
)
from .validation import validate_markers

__all__ = [
    "ConversionFailed",
    "Delivery",
    "DeliveryFailed",
    "ExportFailed",
    "ExportFormat",
    "ExportOrchestrator",
    "ExportResult",
    "ExportState",
    "FileDelivery",
    "InvalidInput",
    "Marker",
    "MarkerExportError",
    "PointCollection",
    "PointFeature",
    "ResponseDelivery",
    "build_point_collection",
    "export_to_csv",
    "export_to_geojson",
    "export_to_gpx",
    "export_to_kml",
    "export_to_kmz",
    "package_kml",
    "read_kmz",
    "validate_markers",
]
