from __future__ import annotations
import csv
import numbers
from pathlib import Path


def _val_to_str(v) -> str:
    # Normalize Excel cells: 75.0 -> '75', None -> ''
    if v is None:
        return ""
    if isinstance(v, bool):
        return str(v)
    if isinstance(v, numbers.Number):
        if float(v).is_integer():
            return str(int(v))
        return str(v)
    return str(v)


def _rows_from_table(table: list) -> list:
    """Turn raw sheet rows into dicts keyed by the first non-blank row."""
    header_idx = -1
    header: list[str] = []
    for i, row in enumerate(table):
        if any(c.strip() for c in row):
            header_idx = i
            header = [c.strip() for c in row]
            break
    if header_idx == -1:
        return []

    rows: list[dict] = []
    for raw in table[header_idx + 1 :]:
        if not raw or not any(c.strip() for c in raw):
            continue
        d: dict = {}
        for i, name in enumerate(header):
            if not name:
                continue
            d[name] = raw[i].strip() if i < len(raw) else ""
        rows.append(d)
    return rows


def read_rows(input_path: Path) -> list:
    """Read a products CSV and return a list of dict rows."""
    with input_path.open("r", newline="", encoding="utf-8-sig") as f:
        table = list(csv.reader(f))
    return _rows_from_table(table)


def _read_rows_xlsx(input_path: Path) -> list:
    from openpyxl import load_workbook

    wb = load_workbook(filename=str(input_path), read_only=True, data_only=True)
    try:
        if not wb.worksheets:
            return []
        ws = wb.worksheets[0]
        table = [[_val_to_str(v) for v in row] for row in ws.iter_rows(values_only=True)]
    finally:
        wb.close()
    return _rows_from_table(table)


def _read_rows_xls(input_path: Path) -> list:
    import xlrd

    book = xlrd.open_workbook(str(input_path))
    if book.nsheets == 0:
        return []
    sheet = book.sheet_by_index(0)
    table = []
    for r in range(sheet.nrows):
        row = []
        for c in range(sheet.ncols):
            cell = sheet.cell(r, c)
            if cell.ctype == xlrd.XL_CELL_BOOLEAN:
                row.append(str(bool(cell.value)))
            else:
                row.append(_val_to_str(cell.value))
        table.append(row)
    return _rows_from_table(table)


def read_any_rows(input_path: Path) -> list:
    """Read the first sheet of a products workbook (or a CSV) as dict rows."""
    if not input_path.exists():
        raise FileNotFoundError(f"Products file not found: {input_path}")
    ext = input_path.suffix.lower()
    if ext in (".xlsx", ".xlsm", ".xltx", ".xltm"):
        return _read_rows_xlsx(input_path)
    if ext == ".xls":
        return _read_rows_xls(input_path)
    return read_rows(input_path)


def write_document(output_path: Path, text: str) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")
