"""KMZ packaging — wraps KML text into a ZIP archive with a single ``doc.kml`` entry.

KMZ is a ZIP archive containing KML. Entries are written with a fixed
timestamp so the same KML always yields the same archive bytes.
"""

from __future__ import annotations

import asyncio
import io
import logging
import zipfile

from .exceptions import ExportFailed, InvalidInput

logger = logging.getLogger(__name__)

KMZ_ENTRY_NAME = "doc.kml"
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)


def package_kml(kml_text: str) -> bytes:
    """Compress ``kml_text`` into a KMZ archive and return its bytes."""
    try:
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            info = zipfile.ZipInfo(KMZ_ENTRY_NAME, date_time=ZIP_EPOCH)
            info.compress_type = zipfile.ZIP_DEFLATED
            zf.writestr(info, kml_text.encode("utf-8"))
        return buf.getvalue()
    except Exception as e:
        logger.error("KMZ packaging failed: %s", e, exc_info=True)
        raise ExportFailed("kmz") from e


async def package_kml_async(kml_text: str) -> bytes:
    """Run :func:`package_kml` off the event loop."""
    return await asyncio.to_thread(package_kml, kml_text)


def read_kmz(data: bytes) -> str:
    """Return the ``doc.kml`` text of an archive built by :func:`package_kml`."""
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            return zf.read(KMZ_ENTRY_NAME).decode("utf-8")
    except (zipfile.BadZipFile, KeyError) as e:
        raise InvalidInput(f"No {KMZ_ENTRY_NAME} in KMZ archive") from e
