"""Pydantic data models for the marker export pipeline."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class Marker(BaseModel):
    """A single geographic point of interest.

    Extra keys are kept and carried through to the exported properties.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    latitude: float
    longitude: float
    name: str | None = None
    icon: str | None = None


class PointGeometry(BaseModel):
    type: Literal["Point"] = "Point"
    coordinates: tuple[float, float]


class PointFeature(BaseModel):
    """One point of the canonical collection, coordinates ``(lon, lat)``."""

    type: Literal["Feature"] = "Feature"
    geometry: PointGeometry
    properties: dict[str, Any] = Field(default_factory=dict)

    @property
    def longitude(self) -> float:
        return self.geometry.coordinates[0]

    @property
    def latitude(self) -> float:
        return self.geometry.coordinates[1]


class PointCollection(BaseModel):
    """Canonical intermediate representation, a GeoJSON FeatureCollection of points."""

    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: list[PointFeature] = Field(default_factory=list)

    def to_geojson(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "features": [
                {
                    "type": f.type,
                    "geometry": {
                        "type": f.geometry.type,
                        "coordinates": list(f.geometry.coordinates),
                    },
                    "properties": dict(f.properties),
                }
                for f in self.features
            ],
        }


class ExportResult(BaseModel):
    """Serialized export ready for delivery."""

    content: str | bytes
    filename: str
    content_type: str
