from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List
from urllib.parse import quote

from .errors import ValidationError


IMAGE_EXTS = {".jpg", ".jpeg", ".png"}
ALT_TEXT_EXT = ".txt"

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageRecord:
    src: str = ""
    alt: str = ""


def check_path_segment(sku: str) -> str:
    if not sku or sku in (".", "..") or "/" in sku or "\\" in sku:
        raise ValidationError(f"sku is not usable as a folder name: {sku!r}")
    return sku


def list_sku_images(images_root: Path, sku: str) -> List[Path]:
    """Image files directly under ``images_root/<sku>``, sorted by filename.

    Returns an empty list (with a warning) when the folder does not exist.
    """
    images_dir = images_root / check_path_segment(sku)
    if not images_dir.exists() or not images_dir.is_dir():
        log.warning(f"No images found for {sku}")
        return []
    files: List[Path] = []
    for p in images_dir.iterdir():
        if p.is_file() and p.suffix.lower() in IMAGE_EXTS:
            files.append(p)
    files.sort(key=lambda p: p.name)
    log.debug(f"list_sku_images: sku={sku} count={len(files)}")
    return files


def read_alt_text(image_path: Path) -> str:
    # Alt text lives in a .txt file next to the image with the same base name
    alt_file = image_path.with_suffix(ALT_TEXT_EXT)
    if not alt_file.is_file():
        return ""
    # Editors may save with a BOM or a legacy codepage; bad bytes become U+FFFD
    return alt_file.read_text(encoding="utf-8-sig", errors="replace").strip()


def image_url(base_url: str, sku: str, filename: str) -> str:
    return f"{base_url.rstrip('/')}/{quote(sku)}/{quote(filename)}"


def resolve_images(images_root: Path, sku: str, base_url: str) -> List[ImageRecord]:
    return [
        ImageRecord(src=image_url(base_url, sku, p.name), alt=read_alt_text(p))
        for p in list_sku_images(images_root, sku)
    ]
