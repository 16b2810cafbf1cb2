from __future__ import annotations
import re
from typing import Dict, List


META_DIVIDER = "!!!"

_SKU_LIST_SPLIT = re.compile(r"\s*,\s*")


def split_similar_styles(similar_styles: str) -> List[str]:
    """Split a 'Similar Styles' cell (SKUs separated by comma + newline)."""
    return [s for s in _SKU_LIST_SPLIT.split((similar_styles or "").strip()) if s]


def build_description_metadata(similar_styles: str, skus_to_handles: Dict[str, str]) -> str:
    """HTML comment carrying data for the storefront theme.

    Used instead of metafields. The theme can read it back with::

        {% assign meta = product.description | split: '<!-- meta:' | last | remove: ' -->' | split: '!!!' %}
        {% assign similar_handles = meta[0] | split: ',' %}

    SKUs without a known handle become empty entries.
    """
    handles = ",".join(skus_to_handles.get(sku) or "" for sku in split_similar_styles(similar_styles))
    return f"<!-- meta:{handles}{META_DIVIDER} -->"


def build_body_html(
    materials: str,
    dimensions: str,
    description: str,
    similar_styles: str,
    skus_to_handles: Dict[str, str],
) -> str:
    # Cell text goes in verbatim; merchants may use inline HTML.
    return "".join(
        [
            f"<p><span>MATERIALS <br></span><span>{materials}</span></p>",
            f"<p><span>DIMENSIONS <br></span><span>{dimensions}</span></p>",
            f"<p><span>DESCRIPTION <br></span><span>{description}</span>&nbsp;</p>",
            build_description_metadata(similar_styles, skus_to_handles),
        ]
    )
