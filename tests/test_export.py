import io

import matplotlib
matplotlib.use("Agg")

from regression_analyzer.export import export_png, png_bytes
from regression_analyzer.pipeline import derive_analysis

from .helpers import make_dataset

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def _snapshot():
    ds = make_dataset(["x", "y"], [[1, 2.2], [2, 3.9], [3, 6.1]])
    return derive_analysis(ds)


def test_export_png_to_file(tmp_path):
    path = tmp_path / "chart.png"
    export_png(_snapshot(), str(path), dpi=50, width_inches=3.0)
    assert path.read_bytes().startswith(PNG_MAGIC)


def test_export_png_to_buffer():
    buf = io.BytesIO()
    export_png(_snapshot(), buf, dpi=40)
    assert buf.getvalue().startswith(PNG_MAGIC)


def test_png_bytes_leaves_global_style_alone():
    facecolor = matplotlib.rcParams['figure.facecolor']
    data = png_bytes(_snapshot(), dpi=40)
    assert data.startswith(PNG_MAGIC)
    assert matplotlib.rcParams['figure.facecolor'] == facecolor
