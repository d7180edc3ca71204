"""
Simple linear regression for the Excel Regression Analyzer.

Ordinary least squares of y on x from running sums, plus the two line
samples needed to draw the fitted segment and the strings shown in
the statistics panel.

Absent results are ``None``:

- fewer than two points, or
- all x values identical (zero slope denominator); a vertical fit is
  never attempted.

When y has no variance the correlation is defined as ``r = 0``.
Overflow is not trapped: infinities and NaNs propagate into the
result, and the renderer treats a non-finite slope or intercept as
"no usable line".
"""

import math
from typing import Optional, Sequence, Tuple

import numpy as np
from scipy import stats

from .constants import EQUATION_DECIMALS, NOT_AVAILABLE, STAT_DECIMALS
from .data_model import FitSummary, Point, RegressionResult


# ── Core computation ─────────────────────────────────────────────────────

def _running_sums(points: Sequence[Point]) -> Tuple[float, float, float, float, float]:
    """Return ``(sum_x, sum_y, sum_xy, sum_x2, sum_y2)`` in one pass."""
    sum_x = sum_y = sum_xy = sum_x2 = sum_y2 = 0.0
    for p in points:
        sum_x += p.x
        sum_y += p.y
        sum_xy += p.x * p.y
        sum_x2 += p.x * p.x
        sum_y2 += p.y * p.y
    return sum_x, sum_y, sum_xy, sum_x2, sum_y2


def _pearson_r(n: int, sums) -> float:
    sum_x, sum_y, sum_xy, sum_x2, sum_y2 = sums
    numerator = n * sum_xy - sum_x * sum_y
    product = (n * sum_x2 - sum_x * sum_x) * (n * sum_y2 - sum_y * sum_y)
    # sqrt of a negative (rounding) or NaN product yields NaN
    denominator = math.sqrt(product) if product >= 0 else math.nan
    if denominator == 0:
        return 0.0
    return numerator / denominator


def line_samples(slope: float, intercept: float,
                 min_x: float, max_x: float) -> Tuple[Point, Point]:
    """Fitted line evaluated at both ends of the observed x-range."""
    return (
        Point(min_x, slope * min_x + intercept),
        Point(max_x, slope * max_x + intercept),
    )


def compute_regression(points: Sequence[Point]) -> Optional[RegressionResult]:
    """Least-squares fit of y on x, or ``None`` when undefined.

    Parameters
    ----------
    points : sequence of Point
        Valid observations in row order.

    Returns
    -------
    RegressionResult or None
        ``None`` for fewer than two points or zero variance in x.

    Examples
    --------
    >>> r = compute_regression([Point(1, 2), Point(2, 4), Point(3, 6)])
    >>> (r.slope, r.intercept, r.r_squared)
    (2.0, 0.0, 1.0)
    """
    n = len(points)
    if n < 2:
        return None

    sums = _running_sums(points)
    sum_x, sum_y, sum_xy, sum_x2, _ = sums

    slope_denominator = n * sum_x2 - sum_x * sum_x
    if slope_denominator == 0:
        return None

    slope = (n * sum_xy - sum_x * sum_y) / slope_denominator
    intercept = (sum_y - slope * sum_x) / n
    r = _pearson_r(n, sums)

    xs = [p.x for p in points]
    return RegressionResult(
        slope=slope,
        intercept=intercept,
        r_squared=r * r,
        line_data=line_samples(slope, intercept, min(xs), max(xs)),
    )


def has_usable_line(result: Optional[RegressionResult]) -> bool:
    """``True`` when *result* exists and its slope and intercept are finite."""
    return (
        result is not None
        and math.isfinite(result.slope)
        and math.isfinite(result.intercept)
    )


# ── Supplementary statistics ─────────────────────────────────────────────

def fit_summary(points: Sequence[Point],
                result: Optional[RegressionResult]) -> Optional[FitSummary]:
    """Pearson r, standard errors and slope p-value for a fit.

    Standard errors and the p-value use ``n - 2`` degrees of freedom
    and are ``None`` below three points.  Returns ``None`` when
    *result* is ``None``.
    """
    if result is None:
        return None

    n = len(points)
    r = _pearson_r(n, _running_sums(points))
    if n < 3:
        return FitSummary(n=n, r=r, residual_std_error=None,
                          slope_std_error=None, p_value=None)

    x = np.array([p.x for p in points], dtype=float)
    y = np.array([p.y for p in points], dtype=float)
    dof = n - 2

    with np.errstate(all='ignore'):
        residuals = y - (result.slope * x + result.intercept)
        sse = float(np.sum(residuals ** 2))
        sxx = float(np.sum((x - x.mean()) ** 2))
        residual_se = math.sqrt(sse / dof) if sse >= 0 else math.nan
        slope_se = residual_se / math.sqrt(sxx) if sxx > 0 else math.nan

    if slope_se == 0:
        # Exact fit: t is infinite unless the slope itself is zero
        p_value = 0.0 if result.slope != 0 else None
    else:
        t_stat = result.slope / slope_se
        p_value = float(2.0 * stats.t.sf(abs(t_stat), dof))

    return FitSummary(
        n=n,
        r=r,
        residual_std_error=residual_se,
        slope_std_error=slope_se,
        p_value=p_value,
    )


# ── Display formatting ───────────────────────────────────────────────────

def _fixed(value: Optional[float], decimals: int) -> str:
    """Fixed-point text; ``"n/a"`` for missing or non-finite values."""
    if value is None or not math.isfinite(value):
        return NOT_AVAILABLE
    text = f"{value:.{decimals}f}"
    if float(text) == 0:
        # no "-0.00"
        text = f"{0.0:.{decimals}f}"
    return text


def format_equation(slope: float, intercept: float,
                    decimals: int = EQUATION_DECIMALS) -> str:
    """Human-readable line, e.g. ``"y = 2.00x - 1.50"``."""
    m = _fixed(slope, decimals)
    if not math.isfinite(intercept):
        return f"y = {m}x + {NOT_AVAILABLE}"
    b = _fixed(abs(intercept), decimals)
    sign = "-" if intercept < 0 and float(b) != 0 else "+"
    return f"y = {m}x {sign} {b}"


def format_statistics(result: RegressionResult) -> dict:
    """Strings for the statistics cards and equation label."""
    return {
        'r_squared': _fixed(result.r_squared, STAT_DECIMALS),
        'slope': _fixed(result.slope, STAT_DECIMALS),
        'intercept': _fixed(result.intercept, STAT_DECIMALS),
        'equation': format_equation(result.slope, result.intercept),
    }


def format_p_value(p_value: Optional[float]) -> str:
    if p_value is None or not math.isfinite(p_value):
        return NOT_AVAILABLE
    if p_value < 1e-4:
        return "< 0.0001"
    return f"{p_value:.4f}"


def format_fit(fit: FitSummary) -> dict:
    """Strings for the supplementary statistics block."""
    return {
        'n': str(fit.n),
        'r': _fixed(fit.r, STAT_DECIMALS),
        'residual_std_error': _fixed(fit.residual_std_error, STAT_DECIMALS),
        'slope_std_error': _fixed(fit.slope_std_error, STAT_DECIMALS),
        'p_value': format_p_value(fit.p_value),
    }
