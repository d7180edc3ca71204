import datetime

import openpyxl
import pytest

from regression_analyzer.constants import MSG_EMPTY_FILE, MSG_PARSE_FAILED
from regression_analyzer.table_loader import (
    ParseError, UnsupportedFileError, check_supported, is_supported_file,
    load_table, rows_to_dataset,
)

from .helpers import write_truncated_workbook


# ── File-type gate ───────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "name", ["data.csv", "DATA.CSV", "book.xlsx", "Book.XLSX", "macro.xlsm"],
)
def test_supported_files(name):
    assert is_supported_file(name)


@pytest.mark.parametrize(
    "name", ["notes.txt", "image.png", "legacy.xls", "archive.zip", "noext"],
)
def test_unsupported_files(name):
    assert not is_supported_file(name)
    with pytest.raises(UnsupportedFileError):
        check_supported(name)


def test_unsupported_file_rejected_before_reading(tmp_path):
    # Type check comes before any existence check
    with pytest.raises(UnsupportedFileError) as exc_info:
        load_table(str(tmp_path / "missing.txt"))
    assert "valid Excel" in str(exc_info.value)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_table(str(tmp_path / "missing.csv"))


# ── CSV ──────────────────────────────────────────────────────────────────

def test_csv_basic(write_csv):
    ds = load_table(write_csv("x,y\n1,2\n3,4\n", name="pairs.csv"))
    assert ds.columns == ("x", "y")
    assert ds.rows == ({"x": "1", "y": "2"}, {"x": "3", "y": "4"})
    assert ds.file_name == "pairs.csv"
    assert ds.n_rows == 2


@pytest.mark.parametrize(
    "text",
    [
        "x;y\n1;2\n3;4\n",
        "x\ty\n1\t2\n3\t4\n",
        "x,y\r\n1,2\r\n3,4\r\n",
        "\n\nx,y\n\n1,2\n\n3,4\n\n",
        " x , y \n 1 , 2 \n3,4\n",
    ],
)
def test_csv_variants(write_csv, text):
    ds = load_table(write_csv(text))
    assert ds.columns == ("x", "y")
    assert [r["y"] for r in ds.rows] == ["2", "4"]


def test_csv_bom_is_stripped(write_csv):
    ds = load_table(write_csv("x,y\n1,2\n", encoding="utf-8-sig"))
    assert ds.columns == ("x", "y")


def test_csv_quoted_delimiter(write_csv):
    ds = load_table(write_csv('name,score\n"Smith, J",3\n'))
    assert ds.rows[0] == {"name": "Smith, J", "score": "3"}


def test_blank_and_duplicate_headers(write_csv):
    ds = load_table(write_csv(",x,,x,x\n1,2,3,4,5\n"))
    assert ds.columns == ("__EMPTY", "x", "__EMPTY_1", "x_1", "x_2")
    assert ds.rows[0]["x_2"] == "5"


def test_trailing_blank_headers_are_dropped(write_csv):
    ds = load_table(write_csv("a,b,,\n1,2,,\n"))
    assert ds.columns == ("a", "b")


def test_short_rows_are_padded_with_warning(write_csv):
    path = write_csv("a,b,c\n1,2,3\n4,5\n")
    with pytest.warns(UserWarning, match="fewer cells"):
        ds = load_table(path)
    assert ds.rows[1] == {"a": "4", "b": "5", "c": ""}


def test_extra_cells_are_ignored_with_warning(write_csv):
    path = write_csv("a,b\n1,2,99\n")
    with pytest.warns(UserWarning, match="ignored"):
        ds = load_table(path)
    assert ds.rows[0] == {"a": "1", "b": "2"}


@pytest.mark.parametrize("text", ["", "\n\n", "a,b\n", "a,b\n,\n\n"])
def test_no_data_rows(write_csv, text):
    with pytest.raises(ParseError) as exc_info:
        load_table(write_csv(text))
    assert str(exc_info.value) == MSG_EMPTY_FILE


def test_undecodable_csv(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_bytes(b"a,b\n\xff\xfe\xfa,1\n")
    with pytest.raises(ParseError) as exc_info:
        load_table(str(path))
    assert str(exc_info.value) == MSG_PARSE_FAILED


@pytest.mark.parametrize("separator", ["\u2028", "\u2029", "\x0b", "\x0c", "\x85"])
def test_line_separator_characters_stay_inside_cells(write_csv, recwarn, separator):
    ds = load_table(write_csv(f"note,x,y\na{separator}b,1,2\nplain,2,4\n"))
    assert ds.n_rows == 2
    assert ds.rows[0] == {"note": f"a{separator}b", "x": "1", "y": "2"}
    assert not [w for w in recwarn if "fewer cells" in str(w.message)]


def test_rows_to_dataset_keeps_raw_values():
    ds = rows_to_dataset([["n", "v"], [1, 2.5], ["x", ""]], "mem")
    assert ds.rows == ({"n": 1, "v": 2.5}, {"n": "x", "v": ""})
    assert ds.file_name == "mem"


# ── Workbooks ────────────────────────────────────────────────────────────

def test_corrupt_workbook(tmp_path):
    path = tmp_path / "broken.xlsx"
    path.write_text("this is not a zip archive")
    with pytest.raises(ParseError) as exc_info:
        load_table(str(path))
    assert str(exc_info.value) == MSG_PARSE_FAILED


def test_workbook_first_sheet_only(tmp_path):
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Data"
    ws.append(["id", "value", "note", "when", "flag"])
    ws.append([1, 2.5, None, datetime.date(2024, 1, 1), True])
    ws.append([2, 3.5, " text ", datetime.date(2024, 1, 2), False])
    other = wb.create_sheet("Other")
    other.append(["ignored"])
    other.append([99])
    path = tmp_path / "book.xlsx"
    wb.save(path)

    ds = load_table(str(path))
    assert ds.columns == ("id", "value", "note", "when", "flag")
    first, second = ds.rows
    assert first["id"] == 1
    assert first["value"] == 2.5
    assert first["note"] == ""
    # Excel serial number for 2024-01-01
    assert first["when"] == 45292
    assert first["flag"] == "TRUE"
    assert second["note"] == "text"
    assert second["when"] == 45293
    assert second["flag"] == "FALSE"


def test_truncated_sheet_xml(tmp_path):
    path = write_truncated_workbook(tmp_path / "cut.xlsx")
    with pytest.raises(ParseError) as exc_info:
        load_table(path)
    assert str(exc_info.value) == MSG_PARSE_FAILED
