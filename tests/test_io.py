import pytest

from product_upload.io import read_any_rows, write_document


def test_reads_first_sheet_only(write_workbook):
    path = write_workbook(
        [{"SKU": "E001", "Price": 75.0, "tag:Gift": True, "Title": None}],
        extra_sheet=[["SKU"], ["B999"]],
    )
    assert read_any_rows(path) == [{"SKU": "E001", "Price": "75", "tag:Gift": "True", "Title": ""}]


def test_blank_rows_skipped(write_workbook):
    path = write_workbook([{"SKU": "E001"}, {"SKU": None}, {"SKU": "B100"}])
    assert [r["SKU"] for r in read_any_rows(path)] == ["E001", "B100"]


def test_fractional_price_kept(write_workbook):
    path = write_workbook([{"SKU": "E001", "Price": 99.5}])
    assert read_any_rows(path)[0]["Price"] == "99.5"


def test_reads_csv(tmp_path):
    path = tmp_path / "products.csv"
    path.write_text("SKU,Title\nE001,Hoop\n,\n", encoding="utf-8")
    assert read_any_rows(path) == [{"SKU": "E001", "Title": "Hoop"}]


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_any_rows(tmp_path / "products.xlsx")


def test_write_document_overwrites(tmp_path):
    out = tmp_path / "output" / "import.csv"
    write_document(out, "old")
    write_document(out, "new")
    assert out.read_text(encoding="utf-8") == "new"
