"""
Products workbook → Shopify import CSV.

This package provides modular building blocks for:
- Reading the merchant products workbook
- Resolving per-SKU images and alt text
- Collection, tag and Body (HTML) business rules
- Rendering Shopify-compatible CSV rows

Public API:
- io.read_any_rows, io.write_document
- images.resolve_images, images.list_sku_images
- mapping.get_collection, mapping.get_tags, mapping.get_price_tag
- describe.build_body_html
- schema.SHOPIFY_IMPORT_SCHEMA, schema.OutputSchema
- render.escape_field, render.render_row, render.render_document
- transform.map_row, transform.transform_rows, transform.generate_csv
"""

from . import io, images, mapping, describe, schema, render, source, transform  # re-export modules
from .errors import TunnelError, ValidationError

__version__ = "1.0.0"

__all__ = [
    "io",
    "images",
    "mapping",
    "describe",
    "schema",
    "render",
    "source",
    "transform",
    "TunnelError",
    "ValidationError",
]
