import logging

import pytest

from product_upload.errors import ValidationError
from product_upload.images import ImageRecord, list_sku_images, resolve_images

from conftest import BASE_URL


def test_missing_folder_warns_and_returns_empty(images_root, caplog):
    with caplog.at_level(logging.WARNING):
        assert resolve_images(images_root, "E001", BASE_URL) == []
    assert "No images found for E001" in caplog.text


def test_images_sorted_and_filtered(images_root, add_images):
    folder = add_images("B100", {"b.JPG": None, "a.png": None, "c.jpeg": None})
    (folder / "notes.pdf").write_text("x")
    (folder / "sub").mkdir()
    names = [p.name for p in list_sku_images(images_root, "B100")]
    assert names == ["a.png", "b.JPG", "c.jpeg"]


def test_records_carry_url_and_alt(images_root, add_images):
    add_images("B100", {"main.jpg": "Front view\n", "second.jpg": None})
    assert resolve_images(images_root, "B100", BASE_URL + "/") == [
        ImageRecord(src=f"{BASE_URL}/B100/main.jpg", alt="Front view"),
        ImageRecord(src=f"{BASE_URL}/B100/second.jpg", alt=""),
    ]


def test_url_quotes_spaces(images_root, add_images):
    add_images("R1", {"side view.png": None})
    [record] = resolve_images(images_root, "R1", BASE_URL)
    assert record.src == f"{BASE_URL}/R1/side%20view.png"


@pytest.mark.parametrize("sku", ["", "..", "a/b", "a\\b"])
def test_unsafe_sku_rejected(images_root, sku):
    with pytest.raises(ValidationError):
        resolve_images(images_root, sku, BASE_URL)


def test_alt_text_in_legacy_codepage_does_not_abort(images_root, add_images):
    folder = add_images("E001", {"a.jpg": None})
    (folder / "a.txt").write_bytes("Café hoop".encode("cp1252"))
    [record] = resolve_images(images_root, "E001", BASE_URL)
    assert record.alt == "Caf\ufffd hoop"


def test_alt_text_bom_is_dropped(images_root, add_images):
    folder = add_images("E001", {"a.jpg": None})
    (folder / "a.txt").write_bytes("Front view\n".encode("utf-8-sig"))
    [record] = resolve_images(images_root, "E001", BASE_URL)
    assert record.alt == "Front view"
