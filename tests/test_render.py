import csv
import io

from product_upload.render import escape_field, render_document, render_row, strip_image_columns
from product_upload.schema import SHOPIFY_IMPORT_SCHEMA, OutputSchema


def test_escape_doubles_quotes_and_wraps():
    assert escape_field('18" chain') == '"18"" chain"'
    assert escape_field(None) == '""'


def test_escape_keeps_falsy_values():
    assert escape_field(0) == '"0"'
    assert escape_field(False) == '"false"'
    assert escape_field(True) == '"true"'
    assert escape_field("") == '""'


def test_escaped_value_round_trips_through_csv_reader():
    value = 'She said "wow", twice\nthen "left"'
    schema = OutputSchema.from_keys(["Title"])
    text = render_document(schema, [render_row({"Title": value}, schema)])
    rows = list(csv.reader(io.StringIO(text)))
    assert rows == [["Title"], [value]]


def test_schema_keeps_canonical_order():
    schema = OutputSchema.from_keys(["Tags", "Handle", "Image Src", "Not A Column"])
    assert schema.columns == ("Handle", "Tags", "Image Src")
    assert all(c in SHOPIFY_IMPORT_SCHEMA for c in schema)


def test_fixed_schema_renders_missing_keys_as_empty():
    schema = OutputSchema.from_record({"Handle": "h", "Title": "t", "Tags": "x"})
    assert render_row({"Handle": "h2", "Image Src": "ignored"}, schema) == '"h2","",""'


def test_document_layout():
    schema = OutputSchema.from_keys(["Handle", "Title"])
    text = render_document(schema, ['"a","b"', '"c",""'])
    assert text == 'Handle,Title\n"a","b"\n"c",""'


def test_strip_image_columns():
    record = {"Handle": "h", "Image Src": "u", "Image Position": 1, "Image Alt Text": ""}
    assert strip_image_columns(record) == {"Handle": "h"}
    assert "Image Src" in record
