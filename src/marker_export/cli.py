"""Command line entry point: export markers from a JSON file, or run the server."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from .config import load_settings
from .delivery import FileDelivery
from .formats import ExportFormat
from .orchestrator import ExportOrchestrator

logger = logging.getLogger(__name__)


def load_markers(path: Path) -> list:
    """Read a JSON array of markers, or an object with a ``markers`` array."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("markers", [])
    return data


def build_parser() -> argparse.ArgumentParser:
    settings = load_settings()
    parser = argparse.ArgumentParser(prog="marker-export", description=__doc__)
    parser.add_argument("--log-level", default="WARNING", help="logging level (default: WARNING)")
    sub = parser.add_subparsers(dest="command", required=True)

    export = sub.add_parser("export", help="export markers from a JSON file")
    export.add_argument("input", type=Path, help="JSON file with the markers")
    export.add_argument(
        "--format", "-f",
        choices=[f.value for f in ExportFormat],
        default=ExportFormat.CSV.value,
    )
    export.add_argument("--output-dir", "-o", type=Path, default=settings.output_dir)

    serve = sub.add_parser("serve", help="run the HTTP export server")
    serve.add_argument("--host", default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)
    return parser


def run_export(input_path: Path, export_format: str, output_dir: Path) -> int:
    try:
        markers = load_markers(input_path)
    except (OSError, json.JSONDecodeError) as e:
        logger.debug("Could not read %s", input_path, exc_info=True)
        print(f"Export failed: {e}", file=sys.stderr)
        return 1

    if not markers:
        print("No markers to export", file=sys.stderr)
        return 0

    orchestrator = ExportOrchestrator(FileDelivery(output_dir), reset_delay=None)
    asyncio.run(orchestrator.export_data(markers, export_format))

    if orchestrator.error is not None:
        print(f"Export failed: {orchestrator.error}", file=sys.stderr)
        return 1

    print(orchestrator.delivered)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        import uvicorn

        uvicorn.run("marker_export.server:app", host=args.host, port=args.port)
        return 0

    return run_export(args.input, args.format, args.output_dir)


if __name__ == "__main__":
    sys.exit(main())
