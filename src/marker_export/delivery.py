"""Delivery — offers produced content to the user as a named, typed file.

Two implementations share the :class:`Delivery` interface:

- :class:`FileDelivery` writes the file into a directory (command line use).
- :class:`ResponseDelivery` builds an HTTP attachment response (server use).
"""

from __future__ import annotations

import io
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol

from fastapi.responses import StreamingResponse

from .exceptions import DeliveryFailed, InvalidInput

logger = logging.getLogger(__name__)


class Delivery(Protocol):
    def deliver(self, content: str | bytes, filename: str, content_type: str) -> Any: ...


def _require_content(content: str | bytes | None) -> bytes:
    if not content:
        raise InvalidInput("No content to download")
    return content.encode("utf-8") if isinstance(content, str) else content


class FileDelivery:
    """Write exports into ``output_dir``.

    Content goes to a temporary file in the same directory and is renamed into
    place, so a failed write never leaves a partial file behind.
    """

    def __init__(self, output_dir: str | Path = "."):
        self.output_dir = Path(output_dir)

    def deliver(self, content: str | bytes, filename: str, content_type: str) -> Path:
        data = _require_content(content)
        target = self.output_dir / filename
        tmp_path: Path | None = None

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                dir=self.output_dir, prefix=f".{filename}.", delete=False
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(data)
            os.replace(tmp_path, target)
            tmp_path = None
        except Exception as e:
            logger.error("Download failed: %s", e, exc_info=True)
            raise DeliveryFailed("Failed to download file") from e
        finally:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)

        logger.info("Wrote %s (%s, %d bytes)", target, content_type, len(data))
        return target


class ResponseDelivery:
    """Build a streaming attachment response for the HTTP front end."""

    def __init__(self) -> None:
        self.response: StreamingResponse | None = None

    def deliver(self, content: str | bytes, filename: str, content_type: str) -> StreamingResponse:
        data = _require_content(content)

        try:
            response = StreamingResponse(
                io.BytesIO(data),
                media_type=content_type,
                headers={"Content-Disposition": f"attachment; filename={filename}"},
            )
        except Exception as e:
            logger.error("Download failed: %s", e, exc_info=True)
            raise DeliveryFailed("Failed to download file") from e

        self.response = response
        return response
