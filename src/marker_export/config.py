"""Settings for the HTTP server and command line front ends."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel

ENV_PREFIX = "MARKER_EXPORT_"


class ExportSettings(BaseModel):
    """Runtime settings; the export core itself takes plain arguments."""

    output_dir: Path = Path(".")
    host: str = "0.0.0.0"
    port: int = 8000


def load_settings(environ: dict[str, str] | None = None) -> ExportSettings:
    """Build settings from ``MARKER_EXPORT_*`` environment variables.

    Unset variables keep their defaults; values are validated by pydantic.
    """
    environ = os.environ if environ is None else environ
    values = {}
    for field in ExportSettings.model_fields:
        key = ENV_PREFIX + field.upper()
        if key in environ:
            values[field] = environ[key]
    return ExportSettings(**values)
