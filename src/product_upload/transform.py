from __future__ import annotations
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional

from . import schema as cols
from .describe import build_body_html
from .images import ImageRecord, resolve_images
from .io import read_any_rows, write_document
from .mapping import get_collection, get_tags
from .render import render_document, render_row, strip_image_columns
from .schema import OutputSchema
from .source import HANDLE, HANDLE_ALIAS, SKU, SourceRow, validate_columns


log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransformOptions:
    skip_image_upload: bool = False
    # None means every SKU is exported
    include_skus: Optional[FrozenSet[str]] = None

    @property
    def is_partial(self) -> bool:
        return self.include_skus is not None

    def includes(self, sku: str) -> bool:
        return self.include_skus is None or sku in self.include_skus


@dataclass
class GenerateResult:
    output_path: Path
    records: int
    products: int
    schema: OutputSchema
    extraneous_columns: List[str] = field(default_factory=list)


def make_skus_to_handles(rows: List[dict]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for row in rows:
        sku = str(row.get(SKU) or "").strip()
        handle = str(row.get(HANDLE) or row.get(HANDLE_ALIAS) or "").strip()
        out[sku] = handle
    return out


def build_product_record(row: SourceRow, main_image: ImageRecord, skus_to_handles: Dict[str, str]) -> dict:
    return {
        cols.HANDLE: row.handle,
        cols.TITLE: row.title,
        cols.COLLECTION: get_collection(row.sku),
        cols.BODY_HTML: build_body_html(
            row.materials,
            row.dimensions,
            row.description,
            row.similar_styles,
            skus_to_handles,
        ),
        cols.SEO_TITLE: row.seo_title,
        cols.SEO_DESCRIPTION: row.seo_description,
        cols.VARIANT_PRICE: row.price,
        cols.IMAGE_SRC: main_image.src,
        cols.IMAGE_POSITION: 1 if main_image.src else "",
        cols.IMAGE_ALT_TEXT: main_image.alt,
        cols.VARIANT_SKU: row.sku,
        cols.TAGS: get_tags(row.tags, row.tag_flags, row.price),
    }


def build_image_record(handle: str, image: ImageRecord, position: int) -> dict:
    # Image rows only carry these four columns
    return {
        cols.HANDLE: handle,
        cols.IMAGE_SRC: image.src or "",
        cols.IMAGE_POSITION: position if image.src else "",
        cols.IMAGE_ALT_TEXT: (image.alt or "") if image.src else "",
    }


def map_row(
    raw: dict,
    skus_to_handles: Dict[str, str],
    images_root: Path,
    base_url: str,
    options: TransformOptions,
) -> List[dict]:
    """One product record followed by its additional image records."""
    row = SourceRow.from_mapping(raw)
    if not options.includes(row.sku):
        return []

    images = resolve_images(images_root, row.sku, base_url)
    main_image = images[0] if images else ImageRecord()
    additional_images = images[1:]

    out = [build_product_record(row, main_image, skus_to_handles)]
    if not options.skip_image_upload:
        for idx, img in enumerate(additional_images):
            out.append(build_image_record(row.handle, img, idx + 2))
    return out


def transform_rows(
    rows: List[dict],
    images_root: Path,
    base_url: str,
    options: Optional[TransformOptions] = None,
) -> List[dict]:
    options = options or TransformOptions()
    skus_to_handles = make_skus_to_handles(rows)
    out: List[dict] = []
    for raw in rows:
        out.extend(map_row(raw, skus_to_handles, images_root, base_url, options))
    return out


def render_records(records: List[dict], options: TransformOptions) -> tuple:
    """Resolve the output schema from the first record and render every record."""
    if options.skip_image_upload:
        records = [strip_image_columns(r) for r in records]
    output_schema = OutputSchema.from_record(records[0]) if records else OutputSchema(())
    text = render_document(output_schema, (render_row(r, output_schema) for r in records))
    return output_schema, text


def output_filename(partial: bool = False, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    if partial:
        return f"partial-import-{now.strftime('%Y-%m-%dT%H-%M-%S')}.csv"
    return f"import-{now.strftime('%Y-%m-%d')}.csv"


def generate_csv(
    products_file: Path,
    images_root: Path,
    output_path: Path,
    base_url: str,
    options: Optional[TransformOptions] = None,
) -> GenerateResult:
    """Convert the products workbook plus the images folder to a Shopify import CSV.

    The image urls in the CSV point at ``base_url``, which must serve
    ``images_root`` while Shopify runs the import. Nothing is written when a
    row fails validation.
    """
    options = options or TransformOptions()
    if options.is_partial:
        log.info(f"including only the following SKUS {','.join(sorted(options.include_skus))}")

    rows = read_any_rows(products_file)
    log.info(f"Read {len(rows)} product rows from {products_file}")
    extraneous = validate_columns(rows)

    records = transform_rows(rows, images_root, base_url, options)
    products = sum(1 for r in records if cols.VARIANT_SKU in r)
    if not records:
        log.warning("No products matched; the import file will only contain a header")

    output_schema, text = render_records(records, options)
    write_document(output_path, text)
    log.info(f"Wrote {len(records)} rows ({products} products) to {output_path}")
    return GenerateResult(
        output_path=output_path,
        records=len(records),
        products=products,
        schema=output_schema,
        extraneous_columns=extraneous,
    )
