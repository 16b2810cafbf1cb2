from __future__ import annotations
import re
from typing import Dict, Iterable, List, Optional

from .errors import ValidationError


# First letter of the SKU decides the collection
COLLECTION_MAP = {
    "E": "Earrings",
    "B": "Bracelets",
    "N": "Necklaces",
    "R": "Rings",
}

# Evaluated in order; the first bracket containing the price wins.
PRICE_BRACKETS = [
    (50, 200, "f50t200"),
    (200, 400, "f200t400"),
    (400, 1000, "f400t1000"),
]

_WHITESPACE = re.compile(r"\s")


def get_collection(sku: str) -> str:
    key = (sku or "")[:1].upper()
    if key not in COLLECTION_MAP:
        raise ValidationError(f"sku with unknown category: {sku!r}")
    return COLLECTION_MAP[key]


def to_price(value) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(str(value).strip())
    except ValueError:
        return None


def get_price_tag(price) -> str:
    p = to_price(price)
    if p is None:
        return ""
    for low, high, tag in PRICE_BRACKETS:
        if low <= p <= high:
            return tag
    return ""


def normalize_tag(tag: str) -> str:
    return _WHITESPACE.sub("", (tag or "").lower())


def get_tags(tags_column: str = "", tag_flags: Optional[Dict[str, bool]] = None, price=None) -> str:
    """Comma separated, sanitized tags for one product.

    Combines the free-form Tags column, every truthy ``tag:<name>`` column
    and the price bracket tag.
    """
    candidates: List[str] = list((tags_column or "").split(","))
    candidates += [name for name, on in (tag_flags or {}).items() if on]
    candidates.append(get_price_tag(price))
    return ",".join(_unique(normalize_tag(t) for t in candidates))


def _unique(tags: Iterable[str]) -> List[str]:
    out: List[str] = []
    for t in tags:
        if t and t not in out:
            out.append(t)
    return out
