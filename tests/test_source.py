import logging

import pytest

from product_upload.source import SourceRow, is_truthy, validate_columns


def test_source_row_split():
    row = SourceRow.from_mapping(
        {
            "SKU": " E001 ",
            "Shopify Handle & URL format": "hoop",
            "Title": "Hoop",
            "Description": "Round",
            "Price": "75",
            "tag:New In": "True",
            "tag:Gift": "",
            "Supplier": "ACME",
        }
    )
    assert row.sku == "E001"
    assert row.handle == "hoop"
    assert row.seo_title == "Hoop"
    assert row.seo_description == "Round"
    assert row.tag_flags == {"New In": True, "Gift": False}
    assert row.extras == {"Supplier": "ACME"}


def test_seo_columns_override_defaults():
    row = SourceRow.from_mapping({"SKU": "E1", "Title": "T", "SEO Title": "Buy T", "SEO Description": "Cheap"})
    assert (row.seo_title, row.seo_description) == ("Buy T", "Cheap")


def test_handle_alias():
    assert SourceRow.from_mapping({"SKU": "E1", "Handle": "h"}).handle == "h"


@pytest.mark.parametrize("value", ["True", "true", "1", "x", "yes", True, 1])
def test_truthy_flags(value):
    assert is_truthy(value)


@pytest.mark.parametrize("value", ["", "False", "0", "no", " N ", None, False])
def test_falsy_flags(value):
    assert not is_truthy(value)


def test_validate_columns_warns_once_per_extra_column(caplog):
    rows = [
        {"SKU": "E1", "tag:Gift": "1", "Title": "a"},
        {"SKU": "B2", "Supplier": "x", "Notes": "y"},
        {"SKU": "N3", "Supplier": "z"},
    ]
    with caplog.at_level(logging.WARNING):
        assert validate_columns(rows) == ["Supplier", "Notes"]
    assert caplog.text.count("Found extraneous column name: Supplier") == 1
    assert caplog.text.count("Found extraneous column name") == 2


def test_validate_columns_matches_row_extras():
    row = {"SKU": "E1", "Handle": "h", "tag:New": "1", "Supplier": "x"}
    assert validate_columns([row]) == list(SourceRow.from_mapping(row).extras)
