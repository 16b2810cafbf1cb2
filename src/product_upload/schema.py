from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Tuple


HANDLE = "Handle"
TITLE = "Title"
BODY_HTML = "Body (HTML)"
COLLECTION = "Collection"
TAGS = "Tags"
VARIANT_SKU = "Variant SKU"
VARIANT_PRICE = "Variant Price"
IMAGE_SRC = "Image Src"
IMAGE_POSITION = "Image Position"
IMAGE_ALT_TEXT = "Image Alt Text"
SEO_TITLE = "SEO Title"
SEO_DESCRIPTION = "SEO Description"

IMAGE_COLUMNS = (IMAGE_SRC, IMAGE_POSITION, IMAGE_ALT_TEXT)

# Column order of Shopify's product import CSV
SHOPIFY_IMPORT_SCHEMA = (
    HANDLE,
    TITLE,
    BODY_HTML,
    "Vendor",
    "Type",
    COLLECTION,
    TAGS,
    "Published",
    "Option1 Name",
    "Option1 Value",
    "Option2 Name",
    "Option2 Value",
    "Option3 Name",
    "Option3 Value",
    VARIANT_SKU,
    "Variant Grams",
    "Variant Inventory Tracker",
    "Variant Inventory Qty",
    "Variant Inventory Policy",
    "Variant Fulfillment Service",
    VARIANT_PRICE,
    "Variant Compare At Price",
    "Variant Requires Shipping",
    "Variant Taxable",
    "Variant Barcode",
    IMAGE_SRC,
    IMAGE_POSITION,
    IMAGE_ALT_TEXT,
    "Gift Card",
    SEO_TITLE,
    SEO_DESCRIPTION,
    "Google Shopping / Google Product Category",
    "Google Shopping / Gender",
    "Google Shopping / Age Group",
    "Google Shopping / MPN",
    "Google Shopping / AdWords Grouping",
    "Google Shopping / AdWords Labels",
    "Google Shopping / Condition",
    "Google Shopping / Custom Product",
    "Google Shopping / Custom Label 0",
    "Google Shopping / Custom Label 1",
    "Google Shopping / Custom Label 2",
    "Google Shopping / Custom Label 3",
    "Google Shopping / Custom Label 4",
    "Variant Image",
    "Variant Weight Unit",
    "Variant Tax Code",
    "Cost per item",
    "Status",
)


@dataclass(frozen=True)
class OutputSchema:
    """The columns actually emitted, fixed once per run."""

    columns: Tuple[str, ...]

    @classmethod
    def from_keys(cls, keys: Iterable[str]) -> "OutputSchema":
        selection = set(keys)
        return cls(tuple(c for c in SHOPIFY_IMPORT_SCHEMA if c in selection))

    @classmethod
    def from_record(cls, record: dict) -> "OutputSchema":
        return cls.from_keys(record.keys())

    def __iter__(self):
        return iter(self.columns)

    def __len__(self) -> int:
        return len(self.columns)
