from pathlib import Path

import pytest
from openpyxl import Workbook


BASE_URL = "https://example.ngrok.io"

HEADER = [
    "SKU",
    "Shopify Handle & URL format",
    "Title",
    "Materials",
    "Dimensions",
    "Description",
    "Similar Styles",
    "SEO Title",
    "SEO Description",
    "Price",
    "Tags",
    "Collection",
    "tag:New In",
    "tag:Gift",
]


def product(sku, handle=None, title="", price="", **extra) -> dict:
    row = {name: "" for name in HEADER}
    row.update(
        {
            "SKU": sku,
            "Shopify Handle & URL format": handle or sku.lower(),
            "Title": title,
            "Price": price,
        }
    )
    row.update(extra)
    return row


@pytest.fixture
def images_root(tmp_path) -> Path:
    root = tmp_path / "images"
    root.mkdir()
    return root


@pytest.fixture
def add_images(images_root):
    """Create ``images_root/<sku>/<name>`` files; a str value is written as alt text."""

    def _add(sku: str, files: dict) -> Path:
        folder = images_root / sku
        folder.mkdir(parents=True, exist_ok=True)
        for name, alt in files.items():
            (folder / name).write_bytes(b"\x89PNG fake")
            if alt is not None:
                (folder / name).with_suffix(".txt").write_text(alt, encoding="utf-8")
        return folder

    return _add


@pytest.fixture
def write_workbook(tmp_path):
    def _write(rows, header=None, name="products.xlsx", extra_sheet=None) -> Path:
        header = header or list(rows[0].keys())
        wb = Workbook()
        ws = wb.active
        ws.title = "Products"
        ws.append(header)
        for r in rows:
            ws.append([r.get(h) for h in header])
        if extra_sheet:
            other = wb.create_sheet("Other")
            for r in extra_sheet:
                other.append(r)
        path = tmp_path / name
        wb.save(path)
        return path

    return _write
