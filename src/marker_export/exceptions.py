"""Error taxonomy for the marker export pipeline."""

FORMAT_LABELS = {"csv": "CSV", "json": "GeoJSON", "gpx": "GPX", "kml": "KML", "kmz": "KMZ"}


class MarkerExportError(Exception):
    """Base class for every error raised by the export pipeline."""


class InvalidInput(MarkerExportError, ValueError):
    """Empty or malformed marker list, bad coordinates, or empty delivery content."""


class ConversionFailed(MarkerExportError):
    """A GPX/KML transform produced empty output."""


class ExportFailed(MarkerExportError):
    """Serialization or packaging of one format failed.

    The message is user-facing and generic; the underlying error is chained as
    ``__cause__`` and logged where it was caught.
    """

    def __init__(self, format: str, message: str | None = None):
        self.format = format
        label = FORMAT_LABELS.get(format, format.upper())
        super().__init__(message or f"Failed to create {label} file")


class DeliveryFailed(MarkerExportError):
    """The save-as-file mechanism itself raised."""
