"""Merchant spreadsheet columns and the per-row split into known fields,
``tag:<name>`` flags and unrecognised extras."""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List


log = logging.getLogger(__name__)

TAG_PREFIX = "tag:"

SKU = "SKU"
HANDLE = "Shopify Handle & URL format"
HANDLE_ALIAS = "Handle"
TITLE = "Title"
MATERIALS = "Materials"
DIMENSIONS = "Dimensions"
DESCRIPTION = "Description"
SIMILAR_STYLES = "Similar Styles"
SEO_TITLE = "SEO Title"
SEO_DESCRIPTION = "SEO Description"
PRICE = "Price"
TAGS = "Tags"
COLLECTION = "Collection"

KNOWN_COLUMNS = (
    SKU,
    HANDLE,
    HANDLE_ALIAS,
    TITLE,
    MATERIALS,
    DIMENSIONS,
    DESCRIPTION,
    SIMILAR_STYLES,
    SEO_TITLE,
    SEO_DESCRIPTION,
    PRICE,
    TAGS,
    COLLECTION,
)

FALSY_FLAG_VALUES = {"", "0", "false", "no", "n", "off", "none"}


def is_truthy(value) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() not in FALSY_FLAG_VALUES


def _text(row: dict, key: str) -> str:
    v = row.get(key)
    return "" if v is None else str(v).strip()


@dataclass
class SourceRow:
    sku: str
    handle: str = ""
    title: str = ""
    materials: str = ""
    dimensions: str = ""
    description: str = ""
    similar_styles: str = ""
    seo_title: str = ""
    seo_description: str = ""
    price: str = ""
    tags: str = ""
    collection: str = ""
    tag_flags: Dict[str, bool] = field(default_factory=dict)
    extras: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, row: dict) -> "SourceRow":
        title = _text(row, TITLE)
        description = _text(row, DESCRIPTION)
        tag_flags: Dict[str, bool] = {}
        extras: Dict[str, str] = {}
        for name, value in row.items():
            if name in KNOWN_COLUMNS:
                continue
            if name.startswith(TAG_PREFIX):
                tag_flags[name[len(TAG_PREFIX):]] = is_truthy(value)
            else:
                extras[name] = "" if value is None else str(value)
        return cls(
            sku=_text(row, SKU),
            handle=_text(row, HANDLE) or _text(row, HANDLE_ALIAS),
            title=title,
            materials=_text(row, MATERIALS),
            dimensions=_text(row, DIMENSIONS),
            description=description,
            similar_styles=_text(row, SIMILAR_STYLES),
            seo_title=_text(row, SEO_TITLE) or title,
            seo_description=_text(row, SEO_DESCRIPTION) or description,
            price=_text(row, PRICE),
            tags=_text(row, TAGS),
            collection=_text(row, COLLECTION),
            tag_flags=tag_flags,
            extras=extras,
        )


def validate_columns(rows: Iterable[dict]) -> List[str]:
    """Warn once about every column that is neither known nor a ``tag:`` flag.

    Uses the extras of each parsed row, so a column only present on later rows
    is still reported. Returns the offending names in first-seen order. Never raises.
    """
    extraneous: Dict[str, None] = {}
    for raw in rows:
        for name in SourceRow.from_mapping(raw).extras:
            if name in extraneous:
                continue
            log.warning(f"!!!! Warning !!!! Found extraneous column name: {name}")
            extraneous[name] = None
    return list(extraneous)
