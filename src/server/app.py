from __future__ import annotations
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles


def create_app(images_dir: Path) -> FastAPI:
    """Read-only static server for ``images_dir``; files live at ``/{sku}/{filename}``."""
    if not images_dir.exists() or not images_dir.is_dir():
        raise FileNotFoundError(f"Images directory not found: {images_dir}")
    app = FastAPI(title="Product images", docs_url=None, redoc_url=None, openapi_url=None)
    app.mount("/", StaticFiles(directory=str(images_dir)), name="images")
    return app
