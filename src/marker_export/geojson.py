"""Build the canonical point collection from validated markers."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from .models import PointCollection, PointFeature, PointGeometry
from .validation import marker_record, validate_markers

EXCLUDED_PROPERTIES = {"id", "latitude", "longitude"}


def build_point_collection(markers: Sequence[Mapping[str, Any] | BaseModel]) -> PointCollection:
    """Convert markers into point features, one per marker, in input order.

    Coordinates are ``(longitude, latitude)``. Properties start with ``name``
    and ``icon`` (empty string when absent) followed by every other marker
    field except the id and the coordinates.
    """
    validate_markers(markers)

    features: list[PointFeature] = []
    for marker in markers:
        record = marker_record(marker)
        properties: dict[str, Any] = {"name": "", "icon": ""}
        for key, value in record.items():
            if key in EXCLUDED_PROPERTIES:
                continue
            if key in ("name", "icon") and value is None:
                continue
            properties[key] = value

        features.append(
            PointFeature(
                geometry=PointGeometry(coordinates=(record["longitude"], record["latitude"])),
                properties=properties,
            )
        )

    return PointCollection(features=features)
