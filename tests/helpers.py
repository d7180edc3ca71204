import zipfile

import openpyxl

from regression_analyzer.data_model import Dataset, Point


def make_dataset(columns, rows, file_name="test.csv"):
    """Dataset from a column list and row value lists."""
    return Dataset(
        rows=tuple(dict(zip(columns, values)) for values in rows),
        columns=tuple(columns),
        file_name=file_name,
    )


def points(*pairs):
    return [Point(float(x), float(y)) for x, y in pairs]


def write_truncated_workbook(path):
    """Save a valid workbook at *path* with its first sheet's XML cut in half."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.append(["x", "y"])
    for i in range(20):
        ws.append([i, 2 * i])
    intact = path.with_name(f"intact_{path.name}")
    wb.save(intact)

    with zipfile.ZipFile(intact) as src, \
            zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as dst:
        for item in src.infolist():
            data = src.read(item.filename)
            if item.filename == "xl/worksheets/sheet1.xml":
                data = data[: len(data) // 2]
            dst.writestr(item, data)
    return str(path)
