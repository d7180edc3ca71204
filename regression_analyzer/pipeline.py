"""
Derived analysis pipeline for the Excel Regression Analyzer.

Pure functions from an immutable ``(Dataset, AxisSelection)`` pair to
the values the GUI renders.  Nothing here caches or mutates: every
change of dataset or selection recomputes all derived values from
scratch via :func:`derive_analysis`.
"""

from typing import Optional, Sequence, Tuple

from .data_model import (
    AnalysisSnapshot, AxisSelection, Dataset, Point, STATUS_READY,
)
from .numeric_parse import is_numeric_value, to_finite_float
from .regression import compute_regression, fit_summary


def numeric_columns(dataset: Optional[Dataset]) -> Tuple[str, ...]:
    """Columns whose value in *every* row converts to a finite number.

    Order follows ``dataset.columns``.  An empty or missing dataset
    has no numeric columns.
    """
    if dataset is None or not dataset.rows:
        return ()
    return tuple(
        col for col in dataset.columns
        if all(is_numeric_value(row[col]) for row in dataset.rows)
    )


def auto_select_axes(columns: Sequence[str]) -> AxisSelection:
    """Default selection after a load: the first two numeric columns.

    With fewer than two numeric columns the selection is empty.
    """
    if len(columns) >= 2:
        return AxisSelection(x_column=columns[0], y_column=columns[1])
    return AxisSelection()


def extract_points(
    dataset: Optional[Dataset],
    selection: AxisSelection,
) -> Tuple[Point, ...]:
    """Valid (x, y) pairs for the selected columns, in row order.

    A row contributes a point only when both of its cells convert to
    finite numbers; other rows are dropped without error.
    """
    if dataset is None or not selection.is_complete:
        return ()

    x_col = selection.x_column
    y_col = selection.y_column
    points = []
    for row in dataset.rows:
        x = to_finite_float(row.get(x_col, ""))
        y = to_finite_float(row.get(y_col, ""))
        if x is None or y is None:
            continue
        points.append(Point(x, y))
    return tuple(points)


def derive_analysis(
    dataset: Optional[Dataset],
    selection: Optional[AxisSelection] = None,
    *,
    status: str = STATUS_READY,
    error: str = "",
) -> AnalysisSnapshot:
    """Recompute every derived value for *dataset* and *selection*.

    Parameters
    ----------
    dataset : Dataset or None
    selection : AxisSelection or None
        ``None`` applies :func:`auto_select_axes`, as after loading a
        new dataset.  A given selection must only name numeric
        columns of *dataset*.
    status, error : str
        Passed through to the snapshot.

    Returns
    -------
    AnalysisSnapshot

    Raises
    ------
    ValueError
        If *selection* names a column outside the numeric columns.
    """
    columns = numeric_columns(dataset)
    if selection is None:
        selection = auto_select_axes(columns)
    for name in (selection.x_column, selection.y_column):
        if name is not None and name not in columns:
            raise ValueError(f"Column {name!r} is not a numeric column.")

    points = extract_points(dataset, selection)
    regression = compute_regression(points)
    return AnalysisSnapshot(
        dataset=dataset,
        numeric_columns=columns,
        selection=selection,
        points=points,
        regression=regression,
        fit=fit_summary(points, regression),
        status=status,
        error=error,
    )
