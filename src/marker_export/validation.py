"""Marker validation, run before any serialization path proceeds."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from numbers import Real
from typing import Any

from pydantic import BaseModel

from .exceptions import InvalidInput

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("id", "latitude", "longitude")


def marker_record(marker: Mapping[str, Any] | BaseModel) -> dict[str, Any]:
    """Return a marker as a plain dict, preserving key order."""
    if isinstance(marker, BaseModel):
        return marker.model_dump()
    return dict(marker)


def validate_markers(markers: Sequence[Mapping[str, Any] | BaseModel]) -> bool:
    """Check that ``markers`` is a non-empty sequence of valid markers.

    Raises:
        InvalidInput: the list is empty or not a sequence, or any marker lacks
            ``id``/``latitude``/``longitude`` or has a non-finite coordinate.
    """
    if (
        not isinstance(markers, Sequence)
        or isinstance(markers, (str, bytes))
        or len(markers) == 0
    ):
        raise InvalidInput("No markers to export")

    for position, marker in enumerate(markers):
        if not _is_valid(marker):
            logger.debug("Marker at position %d failed validation: %r", position, marker)
            raise InvalidInput("Invalid marker data")

    return True


def _is_valid(marker: Any) -> bool:
    if not isinstance(marker, (Mapping, BaseModel)):
        return False
    record = marker_record(marker)
    if any(field not in record for field in REQUIRED_FIELDS):
        return False
    if record["id"] is None:
        return False
    return _is_coordinate(record["latitude"]) and _is_coordinate(record["longitude"])


def _is_coordinate(value: Any) -> bool:
    # bool is a Real subclass but never a coordinate
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints beyond float range
        return False
