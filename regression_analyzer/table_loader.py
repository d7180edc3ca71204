"""
Table loader for the Excel Regression Analyzer.

Reads one CSV file or the first sheet of one Excel workbook into a
``Dataset``.  Handles:

- File-type gate by extension / mime type, before any I/O
- Auto-detected CSV delimiters (tab → semicolon → comma)
- UTF-8 BOM markers
- Blank and duplicated header cells (``__EMPTY``, ``name_1``, …)
- Short rows (padded with ``""``) and blank rows (skipped)
- Workbook dates converted to Excel serial numbers

Cell values are kept raw: numeric conversion happens later in
``pipeline`` so that one non-numeric cell only affects its own
column.
"""

import csv
import datetime
import io
import mimetypes
import os
import warnings
from typing import List, Sequence

import openpyxl
from openpyxl.utils.datetime import to_excel

from .constants import (
    CSV_EXTENSIONS, CSV_MIME_TYPES, EMPTY_HEADER_NAME, LARGE_FILE_BYTES,
    MSG_EMPTY_FILE, MSG_PARSE_FAILED, MSG_UNSUPPORTED_FILE,
    SUPPORTED_EXTENSIONS, WORKBOOK_EXTENSIONS, XLSX_MIME_TYPE,
)
from .data_model import CellValue, Dataset


class UnsupportedFileError(ValueError):
    """The file is neither a recognised workbook nor a CSV file."""

    def __init__(self, message: str = MSG_UNSUPPORTED_FILE):
        super().__init__(message)


class ParseError(ValueError):
    """A recognised file could not be parsed, or held no data rows."""


# ── File-type gate ───────────────────────────────────────────────────────

def _extension(path: str) -> str:
    return os.path.splitext(path)[1].lower()


def is_supported_file(path: str) -> bool:
    """``True`` for ``.xlsx``/``.xlsm``/``.csv`` files (by name or mime type)."""
    if _extension(path) in SUPPORTED_EXTENSIONS:
        return True
    mime, _ = mimetypes.guess_type(path)
    return mime == XLSX_MIME_TYPE or mime in CSV_MIME_TYPES


def check_supported(path: str) -> None:
    """Raise ``UnsupportedFileError`` unless *path* names a supported file."""
    if not is_supported_file(path):
        raise UnsupportedFileError()


def _is_workbook(path: str) -> bool:
    if _extension(path) in WORKBOOK_EXTENSIONS:
        return True
    if _extension(path) in CSV_EXTENSIONS:
        return False
    mime, _ = mimetypes.guess_type(path)
    return mime == XLSX_MIME_TYPE


# ── CSV reading ──────────────────────────────────────────────────────────

def _detect_delimiter(sample_line: str) -> str:
    """Detect CSV delimiter from a sample line.

    Priority: tab → semicolon → comma.
    """
    if '\t' in sample_line:
        return '\t'
    if ';' in sample_line:
        return ';'
    return ','


def _read_csv_rows(path: str) -> List[List[CellValue]]:
    """Read a CSV file into lists of stripped cell strings."""
    with open(path, 'r', encoding='utf-8-sig', newline='') as fh:
        text = fh.read()

    # Only record separators split lines; str.splitlines would also
    # break on U+2028, form feeds and similar characters inside cells
    first = next((ln for ln in text.split("\n") if ln.strip()), "")
    delimiter = _detect_delimiter(first)

    rows: List[List[CellValue]] = []
    for tokens in csv.reader(io.StringIO(text, newline=""), delimiter=delimiter):
        rows.append([t.strip() for t in tokens])
    return rows


# ── Workbook reading ─────────────────────────────────────────────────────

def _workbook_cell(value) -> CellValue:
    """Normalise one openpyxl cell value to a raw ``CellValue``."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, (datetime.datetime, datetime.date,
                          datetime.time, datetime.timedelta)):
        return to_excel(value)
    return str(value).strip()


def _read_workbook_rows(path: str) -> List[List[CellValue]]:
    """Read the first sheet of a workbook into lists of raw cells."""
    wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    try:
        ws = wb[wb.sheetnames[0]]
        rows = []
        for row in ws.iter_rows(values_only=True):
            rows.append([_workbook_cell(c) for c in row])
    finally:
        wb.close()
    return rows


# ── Row normalisation ────────────────────────────────────────────────────

def _is_blank_row(cells: Sequence[CellValue]) -> bool:
    return all(c == "" for c in cells)


def _unique_headers(raw_headers: Sequence[CellValue]) -> List[str]:
    """Turn header cells into unique, ordered column names.

    Blank cells become ``__EMPTY``, ``__EMPTY_1``, …; repeated names
    get ``_1``, ``_2``, … suffixes in order of appearance.
    """
    # Trailing blank header cells are padding, not columns
    cells = list(raw_headers)
    while cells and cells[-1] == "":
        cells.pop()

    names: List[str] = []
    seen = set()
    for cell in cells:
        base = str(cell).strip() if cell != "" else EMPTY_HEADER_NAME
        name = base
        suffix = 0
        while name in seen:
            suffix += 1
            name = f"{base}_{suffix}"
        seen.add(name)
        names.append(name)
    return names


def rows_to_dataset(raw_rows: List[List[CellValue]], file_name: str = "") -> Dataset:
    """Build a ``Dataset`` from raw cell rows; the first non-blank row is the header.

    Raises
    ------
    ParseError
        If there is no header or no data row.
    """
    content = [r for r in raw_rows if not _is_blank_row(r)]
    if not content:
        raise ParseError(MSG_EMPTY_FILE)

    columns = _unique_headers(content[0])
    if not columns:
        raise ParseError(MSG_EMPTY_FILE)
    width = len(columns)

    rows = []
    n_short = 0
    n_long = 0
    for cells in content[1:]:
        cells = list(cells)
        if len(cells) < width:
            n_short += 1
            cells.extend([""] * (width - len(cells)))
        elif len(cells) > width:
            if not _is_blank_row(cells[width:]):
                n_long += 1
            cells = cells[:width]
        if _is_blank_row(cells):
            continue
        rows.append(dict(zip(columns, cells)))

    if n_short:
        warnings.warn(
            f"{n_short} row(s) in '{file_name}' have fewer cells than the "
            f"header; missing cells were treated as empty.",
            stacklevel=2,
        )
    if n_long:
        warnings.warn(
            f"{n_long} row(s) in '{file_name}' have cells beyond the last "
            f"header column; those cells were ignored.",
            stacklevel=2,
        )

    if not rows:
        raise ParseError(MSG_EMPTY_FILE)

    return Dataset(rows=tuple(rows), columns=tuple(columns), file_name=file_name)


# ── Public entry point ───────────────────────────────────────────────────

def load_table(path: str) -> Dataset:
    """Load a CSV file or the first sheet of a workbook into a ``Dataset``.

    Parameters
    ----------
    path : str
        Path to a ``.csv``, ``.xlsx`` or ``.xlsm`` file.

    Returns
    -------
    Dataset

    Raises
    ------
    UnsupportedFileError
        If the file type is not recognised (checked before reading).
    FileNotFoundError
        If *path* does not exist.
    ParseError
        If the file cannot be parsed or holds no data rows.
    """
    check_supported(path)
    if not os.path.isfile(path):
        raise FileNotFoundError(f"File not found: {path}")

    file_name = os.path.basename(path)

    file_size = os.path.getsize(path)
    if file_size > LARGE_FILE_BYTES:
        warnings.warn(
            f"File is very large ({file_size / (1024 * 1024):.0f} MB). "
            f"Loading may be slow.",
            stacklevel=2,
        )

    if _is_workbook(path):
        try:
            raw_rows = _read_workbook_rows(path)
        except OSError:
            raise
        except Exception as exc:
            # openpyxl surfaces damaged archives as zip, XML (SyntaxError
            # subclasses), KeyError and ValueError failures alike
            raise ParseError(MSG_PARSE_FAILED) from exc
    else:
        try:
            raw_rows = _read_csv_rows(path)
        except (UnicodeDecodeError, csv.Error) as exc:
            raise ParseError(MSG_PARSE_FAILED) from exc

    return rows_to_dataset(raw_rows, file_name)
