"""
Data model for the Excel Regression Analyzer.

Immutable dataclasses for the loaded table and everything derived
from it.  A ``Dataset`` is built once by ``table_loader`` and never
mutated; a new upload replaces it wholesale.  Derived values
(numeric columns, points, regression) are recomputed from scratch by
``pipeline`` and bundled into an ``AnalysisSnapshot``.

An absent regression is modelled as ``None``, not as an error.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

# A raw cell as delivered by the loader: text, or a number taken
# directly from a workbook cell.  Missing cells are ``""``.
CellValue = Union[str, int, float]
Row = Dict[str, CellValue]


@dataclass(frozen=True)
class Dataset:
    """A table loaded from one file.

    Parameters
    ----------
    rows : tuple of dict
        One mapping per data row, ``{column_name: raw_value}``.  Every
        row carries exactly the names in ``columns``.
    columns : tuple of str
        Column names in file order, taken from the header row.
    file_name : str
        Base name of the source file, e.g. ``"sales.xlsx"``.
    """
    rows: Tuple[Row, ...]
    columns: Tuple[str, ...]
    file_name: str = ""

    @property
    def n_rows(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class AxisSelection:
    """Chosen independent (x) and dependent (y) columns.

    ``None`` means unset.  When both are set they differ.
    """
    x_column: Optional[str] = None
    y_column: Optional[str] = None

    def __post_init__(self):
        if (self.x_column is not None
                and self.x_column == self.y_column):
            raise ValueError(
                f"X and Y must be different columns, got "
                f"{self.x_column!r} for both."
            )

    @property
    def is_complete(self) -> bool:
        return self.x_column is not None and self.y_column is not None


@dataclass(frozen=True)
class Point:
    """One valid (x, y) observation; both values finite."""
    x: float
    y: float


@dataclass(frozen=True)
class RegressionResult:
    """Ordinary least squares fit of y on x.

    Parameters
    ----------
    slope, intercept : float
        Line ``y = slope * x + intercept``.
    r_squared : float
        Square of Pearson r (``0.0`` when y has no variance).
    line_data : tuple of Point
        Two samples of the fitted line at the minimum and maximum
        observed x, enough to draw the segment.
    """
    slope: float
    intercept: float
    r_squared: float
    line_data: Tuple[Point, ...]


@dataclass(frozen=True)
class FitSummary:
    """Supplementary fit statistics shown next to the regression.

    Values that need ``n - 2`` degrees of freedom are ``None`` when
    fewer than three points contribute.
    """
    n: int
    r: float
    residual_std_error: Optional[float]
    slope_std_error: Optional[float]
    p_value: Optional[float]


# Session status values
STATUS_IDLE = "idle"
STATUS_LOADING = "loading"
STATUS_READY = "ready"
STATUS_ERROR = "error"


@dataclass(frozen=True)
class AnalysisSnapshot:
    """Everything the GUI renders, derived from (dataset, selection).

    Built fresh on every change by ``AnalysisSession``.
    """
    dataset: Optional[Dataset] = None
    numeric_columns: Tuple[str, ...] = ()
    selection: AxisSelection = field(default_factory=AxisSelection)
    points: Tuple[Point, ...] = ()
    regression: Optional[RegressionResult] = None
    fit: Optional[FitSummary] = None
    status: str = STATUS_IDLE
    error: str = ""

    @property
    def file_name(self) -> str:
        return self.dataset.file_name if self.dataset is not None else ""

    @property
    def is_loading(self) -> bool:
        return self.status == STATUS_LOADING

    @property
    def has_data(self) -> bool:
        return self.dataset is not None and self.dataset.n_rows > 0


def points_as_arrays(points: List[Point]):
    """Return ``(xs, ys)`` lists for plotting."""
    return [p.x for p in points], [p.y for p in points]
