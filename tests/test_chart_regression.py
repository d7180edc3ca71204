import matplotlib
matplotlib.use("Agg")

import pytest
from matplotlib.figure import Figure

from regression_analyzer.chart_regression import render_regression
from regression_analyzer.constants import (
    MSG_INSUFFICIENT_DATA, MSG_NO_POINTS, MSG_SELECT_COLUMNS,
)
from regression_analyzer.data_model import AnalysisSnapshot, AxisSelection
from regression_analyzer.pipeline import derive_analysis

from .helpers import make_dataset


def _texts(ax):
    return [t.get_text() for t in ax.texts]


@pytest.fixture
def fig():
    return Figure()


def test_complete_fit_draws_points_and_line(fig):
    ds = make_dataset(["x", "y"], [[1, 2], [3, 6], [2, 4]], file_name="f.csv")
    render_regression(fig, derive_analysis(ds))
    ax = fig.axes[0]

    assert len(ax.collections) == 1
    assert len(ax.collections[0].get_offsets()) == 3
    assert len(ax.lines) == 1
    assert list(ax.lines[0].get_xdata()) == [1.0, 3.0]
    assert list(ax.lines[0].get_ydata()) == [2.0, 6.0]
    labels = [t.get_text() for t in ax.get_legend().get_texts()]
    assert "Data Points" in labels
    assert any("y = 2.00x + 0.00" in label for label in labels)
    assert "f.csv" in ax.get_title()
    assert ax.get_xlabel().startswith("x")


def test_incomplete_selection_shows_prompt(fig):
    ds = make_dataset(["x", "y"], [[1, 2], [2, 4]])
    render_regression(fig, derive_analysis(ds, AxisSelection("x", None)))
    ax = fig.axes[0]
    assert _texts(ax) == [MSG_SELECT_COLUMNS]
    assert not ax.collections


def test_no_valid_points(fig):
    snap = AnalysisSnapshot(selection=AxisSelection("x", "y"))
    render_regression(fig, snap)
    assert _texts(fig.axes[0]) == [MSG_NO_POINTS]


def test_single_point_has_no_line(fig):
    ds = make_dataset(["x", "y"], [[1, 2]])
    render_regression(fig, derive_analysis(ds))
    ax = fig.axes[0]
    assert len(ax.collections) == 1
    assert not ax.lines
    assert MSG_INSUFFICIENT_DATA in _texts(ax)


def test_vertical_data_has_no_line(fig):
    ds = make_dataset(["x", "y"], [[5, 1], [5, 2], [5, 3]])
    render_regression(fig, derive_analysis(ds))
    ax = fig.axes[0]
    assert len(ax.collections[0].get_offsets()) == 3
    assert not ax.lines


def test_render_replaces_previous_drawing(fig):
    ds = make_dataset(["x", "y"], [[1, 2], [2, 4]])
    snap = derive_analysis(ds)
    render_regression(fig, snap)
    render_regression(fig, snap)
    assert len(fig.axes) == 1
