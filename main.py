"""Launch the marker export FastAPI server."""

import uvicorn

from marker_export.config import load_settings


def main():
    settings = load_settings()
    uvicorn.run("marker_export.server:app", host=settings.host, port=settings.port, reload=True)


if __name__ == "__main__":
    main()
