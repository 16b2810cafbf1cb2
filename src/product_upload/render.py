from __future__ import annotations
from typing import Iterable, List

from .schema import IMAGE_COLUMNS, OutputSchema


CSV_SEPARATOR = ","
QUOTE = '"'
LINE_SEPARATOR = "\n"


def strip_image_columns(record: dict) -> dict:
    return {k: v for k, v in record.items() if k not in IMAGE_COLUMNS}


def escape_field(value) -> str:
    # Only a missing value becomes empty; 0 / false / "" are kept as written
    if value is None:
        text = ""
    elif isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = str(value)
    return QUOTE + text.replace(QUOTE, QUOTE + QUOTE) + QUOTE


def render_row(record: dict, schema: OutputSchema) -> str:
    return CSV_SEPARATOR.join(escape_field(record.get(column)) for column in schema)


def render_header(schema: OutputSchema) -> str:
    return CSV_SEPARATOR.join(schema)


def render_document(schema: OutputSchema, rows: Iterable[str]) -> str:
    lines: List[str] = [render_header(schema)]
    lines.extend(rows)
    return LINE_SEPARATOR.join(lines)
