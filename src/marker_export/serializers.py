"""Format serializers: CSV, GeoJSON, GPX, KML and KMZ.

Each serializer validates the marker list first, then produces an
:class:`ExportResult`. Validation errors propagate as ``InvalidInput``; any
other failure is logged and re-raised as ``ExportFailed`` for that format.
"""

from __future__ import annotations

import json
import logging
import re
import xml.etree.ElementTree as ET
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any

from pydantic import BaseModel

from .exceptions import ConversionFailed, ExportFailed
from .geojson import build_point_collection
from .models import ExportResult, PointCollection
from .packaging import package_kml_async
from .validation import marker_record, validate_markers

logger = logging.getLogger(__name__)

Markers = Sequence[Mapping[str, Any] | BaseModel]

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'
GPX_NS = "http://www.topografix.com/GPX/1/1"
GPX_CREATOR = "marker-export"
KML_NS = "http://www.opengis.net/kml/2.2"
XML_ILLEGAL_CHARS = re.compile(r"[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")

CSV_FILENAME, CSV_CONTENT_TYPE = "markers.csv", "text/csv"
GEOJSON_FILENAME, GEOJSON_CONTENT_TYPE = "markers.geojson", "application/json"
GPX_FILENAME, GPX_CONTENT_TYPE = "markers.gpx", "application/gpx+xml"
KML_FILENAME, KML_CONTENT_TYPE = "markers.kml", "application/vnd.google-earth.kml+xml"
KMZ_FILENAME, KMZ_CONTENT_TYPE = "markers.kmz", "application/vnd.google-earth.kmz"


@contextmanager
def _export_step(format: str) -> Iterator[None]:
    try:
        yield
    except ExportFailed:
        raise
    except Exception as e:
        logger.error("%s export failed: %s", format.upper(), e, exc_info=True)
        raise ExportFailed(format) from e


def stringify(value: Any) -> str:
    """Render a scalar the way it reads in a text file.

    Integral floats lose their ``.0``, booleans are lowercase, containers
    become compact JSON, ``None`` is empty.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def _xml_text(value: Any) -> str:
    """:func:`stringify` with code points that XML 1.0 forbids removed."""
    return XML_ILLEGAL_CHARS.sub("", stringify(value))


# --- CSV -------------------------------------------------------------------


def _csv_field(value: Any) -> str:
    # Only strings are quoted
    if isinstance(value, str):
        return '"' + value.replace('"', '""') + '"'
    return stringify(value)


def export_to_csv(markers: Markers) -> ExportResult:
    """Serialize markers to CSV.

    The header is taken from the keys of the first marker only; every row
    lists that marker's own values in its own key order.
    """
    validate_markers(markers)

    with _export_step("csv"):
        records = [marker_record(m) for m in markers]
        headers = list(records[0].keys())
        rows = [",".join(_csv_field(v) for v in record.values()) for record in records]
        content = "\n".join([",".join(headers), *rows])

    return ExportResult(content=content, filename=CSV_FILENAME, content_type=CSV_CONTENT_TYPE)


# --- GeoJSON ---------------------------------------------------------------


def export_to_geojson(markers: Markers) -> ExportResult:
    """Serialize markers as a pretty-printed GeoJSON FeatureCollection."""
    collection = build_point_collection(markers)

    with _export_step("json"):
        content = json.dumps(collection.to_geojson(), indent=2, ensure_ascii=False)

    return ExportResult(
        content=content, filename=GEOJSON_FILENAME, content_type=GEOJSON_CONTENT_TYPE
    )


# --- GPX -------------------------------------------------------------------


def collection_to_gpx(collection: PointCollection) -> str:
    """Convert a point collection to a GPX 1.1 document of waypoints."""
    root = ET.Element("gpx", {"version": "1.1", "creator": GPX_CREATOR, "xmlns": GPX_NS})

    for feature in collection.features:
        props = feature.properties
        wpt = ET.SubElement(
            root, "wpt", {"lat": stringify(feature.latitude), "lon": stringify(feature.longitude)}
        )
        if props.get("name"):
            ET.SubElement(wpt, "name").text = _xml_text(props["name"])

        desc = "\n".join(
            f"{_xml_text(key)}={_xml_text(value)}"
            for key, value in props.items()
            if key not in ("name", "icon")
        )
        if desc:
            ET.SubElement(wpt, "desc").text = desc
        if props.get("icon"):
            ET.SubElement(wpt, "sym").text = _xml_text(props["icon"])

    return _to_xml(root)


def export_to_gpx(markers: Markers) -> ExportResult:
    """Serialize markers to GPX waypoints."""
    collection = build_point_collection(markers)

    with _export_step("gpx"):
        content = collection_to_gpx(collection)
        if not content:
            raise ConversionFailed("GPX conversion failed")

    return ExportResult(content=content, filename=GPX_FILENAME, content_type=GPX_CONTENT_TYPE)


# --- KML / KMZ -------------------------------------------------------------


def collection_to_kml(collection: PointCollection) -> str:
    """Convert a point collection to a KML 2.2 document of placemarks."""
    root = ET.Element("kml", {"xmlns": KML_NS})
    document = ET.SubElement(root, "Document")

    for feature in collection.features:
        props = feature.properties
        placemark = ET.SubElement(document, "Placemark")
        if props.get("name"):
            ET.SubElement(placemark, "name").text = _xml_text(props["name"])
        if props.get("description"):
            ET.SubElement(placemark, "description").text = _xml_text(props["description"])

        extended = ET.SubElement(placemark, "ExtendedData")
        for key, value in props.items():
            data = ET.SubElement(extended, "Data", {"name": _xml_text(key)})
            ET.SubElement(data, "value").text = _xml_text(value)

        point = ET.SubElement(placemark, "Point")
        ET.SubElement(point, "coordinates").text = (
            f"{stringify(feature.longitude)},{stringify(feature.latitude)}"
        )

    return _to_xml(root)


def _render_kml(markers: Markers) -> str:
    kml = collection_to_kml(build_point_collection(markers))
    if not kml:
        raise ConversionFailed("KML conversion failed")
    return kml


def export_to_kml(markers: Markers) -> ExportResult:
    """Serialize markers to KML placemarks."""
    validate_markers(markers)

    with _export_step("kml"):
        content = _render_kml(markers)

    return ExportResult(content=content, filename=KML_FILENAME, content_type=KML_CONTENT_TYPE)


def render_kmz_document(markers: Markers) -> str:
    """Render the KML that goes into a KMZ; failures are reported as KMZ failures."""
    validate_markers(markers)

    with _export_step("kmz"):
        return _render_kml(markers)


async def package_kmz(kml: str) -> ExportResult:
    with _export_step("kmz"):
        content = await package_kml_async(kml)

    return ExportResult(content=content, filename=KMZ_FILENAME, content_type=KMZ_CONTENT_TYPE)


async def export_to_kmz(markers: Markers) -> ExportResult:
    """Serialize markers to KML and package it as ``doc.kml`` inside a KMZ archive."""
    return await package_kmz(render_kmz_document(markers))


def _to_xml(root: ET.Element) -> str:
    ET.indent(root, space="  ")
    return XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"
