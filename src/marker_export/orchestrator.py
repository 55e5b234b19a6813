"""Export orchestrator: validation → serialization → (packaging) → delivery.

Progress is reported on a 0-100 channel at coarse milestones and failures are
surfaced as a message, never raised to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping, Sequence
from enum import Enum
from typing import Any

from pydantic import BaseModel

from . import serializers
from .delivery import Delivery
from .exceptions import MarkerExportError
from .formats import ExportFormat
from .models import ExportResult
from .validation import validate_markers

logger = logging.getLogger(__name__)

PROGRESS_VALIDATED = 25
PROGRESS_SERIALIZED = 75
PROGRESS_DONE = 100

DEFAULT_ERROR_MESSAGE = "Failed to export file"


class ExportState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SERIALIZING = "serializing"
    PACKAGING = "packaging"
    DELIVERING = "delivering"
    DONE = "done"
    FAILED = "failed"


class ExportOrchestrator:
    """Run one export at a time and track its progress and error.

    Args:
        delivery: Where finished exports go.
        on_progress: Optional callback receiving every progress update.
        reset_delay: Seconds after completion before progress and error reset,
            or ``None`` to leave them as they are.
    """

    def __init__(
        self,
        delivery: Delivery,
        on_progress: Callable[[int], None] | None = None,
        reset_delay: float | None = 1.0,
    ):
        self.delivery = delivery
        self.on_progress = on_progress
        self.reset_delay = reset_delay
        self.state = ExportState.IDLE
        self.progress = 0
        self.error: str | None = None
        self.failure: BaseException | None = None
        self.delivered: Any = None

    def _set_progress(self, value: int) -> None:
        self.progress = value
        if self.on_progress is not None:
            self.on_progress(value)

    def _reset(self) -> None:
        self._set_progress(0)
        self.error = None

    async def _serialize(
        self, fmt: ExportFormat, markers: Sequence[Mapping[str, Any] | BaseModel]
    ) -> ExportResult:
        self.state = ExportState.SERIALIZING
        if not fmt.is_async:
            return fmt.serializer(markers)

        kml = serializers.render_kmz_document(markers)
        self.state = ExportState.PACKAGING
        return await serializers.package_kmz(kml)

    async def export_data(
        self,
        markers: Sequence[Mapping[str, Any] | BaseModel],
        export_format: str | ExportFormat,
    ) -> ExportResult | None:
        """Export ``markers`` in ``export_format`` and hand the result to delivery.

        An empty selection is a no-op. Returns the delivered result, or ``None``
        when nothing was exported or the export failed (see :attr:`error`).
        Errors outside the export taxonomy are reported with a generic message.
        """
        if not markers:
            return None

        self._set_progress(0)
        self.error = None
        self.failure = None
        self.delivered = None

        try:
            self.state = ExportState.VALIDATING
            fmt = ExportFormat.parse(export_format)
            validate_markers(markers)
            self._set_progress(PROGRESS_VALIDATED)

            result = await self._serialize(fmt, markers)
            self._set_progress(PROGRESS_SERIALIZED)

            self.state = ExportState.DELIVERING
            self.delivered = self.delivery.deliver(
                result.content, result.filename, result.content_type
            )
            self._set_progress(PROGRESS_DONE)
        except Exception as e:
            logger.error("Export failed: %s", e, exc_info=True)
            self.state = ExportState.FAILED
            self.failure = e
            if isinstance(e, MarkerExportError):
                self.error = str(e) or DEFAULT_ERROR_MESSAGE
            else:
                self.error = DEFAULT_ERROR_MESSAGE
            self._set_progress(0)
            return None

        self.state = ExportState.DONE
        logger.info("Exported %d markers as %s", len(markers), result.filename)
        if self.reset_delay is not None:
            asyncio.get_running_loop().call_later(self.reset_delay, self._reset)
        return result
