import math

import pytest
from scipy import stats

from regression_analyzer.data_model import Point, RegressionResult
from regression_analyzer.regression import (
    compute_regression, fit_summary, format_equation, format_fit,
    format_p_value, format_statistics, has_usable_line, line_samples,
)

from .helpers import points


NOISY = points((1, 2.1), (2, 3.9), (3, 6.2), (4, 7.8), (5, 10.1),
               (6, 11.7), (7, 14.4))


def test_perfect_line():
    result = compute_regression(points((1, 2), (2, 4), (3, 6)))
    assert result.slope == 2.0
    assert result.intercept == 0.0
    assert result.r_squared == 1.0
    assert result.line_data == (Point(1.0, 2.0), Point(3.0, 6.0))


def test_identical_x_is_undefined():
    assert compute_regression(points((5, 1), (5, 2), (5, 3))) is None


@pytest.mark.parametrize("pts", [[], points((1, 2))])
def test_fewer_than_two_points_is_undefined(pts):
    assert compute_regression(pts) is None


def test_line_samples():
    assert line_samples(2.0, 0.0, 1.0, 3.0) == (Point(1.0, 2.0), Point(3.0, 6.0))


def test_line_samples_span_observed_range_regardless_of_order():
    result = compute_regression(points((3, 1), (-2, 4), (7, 0), (0, 3)))
    xs = [p.x for p in result.line_data]
    assert xs == [-2.0, 7.0]
    for p in result.line_data:
        assert p.y == pytest.approx(result.slope * p.x + result.intercept)


def test_zero_y_variance_gives_zero_r_squared():
    result = compute_regression(points((1, 5), (2, 5), (3, 5)))
    assert result.slope == 0.0
    assert result.intercept == 5.0
    assert result.r_squared == 0.0


def test_matches_scipy_linregress():
    ref = stats.linregress([p.x for p in NOISY], [p.y for p in NOISY])
    result = compute_regression(NOISY)
    assert result.slope == pytest.approx(ref.slope)
    assert result.intercept == pytest.approx(ref.intercept)
    assert result.r_squared == pytest.approx(ref.rvalue ** 2)


def test_axis_swap_keeps_r_squared():
    swapped = [Point(p.y, p.x) for p in NOISY]
    forward = compute_regression(NOISY)
    backward = compute_regression(swapped)
    assert backward.r_squared == pytest.approx(forward.r_squared)
    assert backward.slope != pytest.approx(forward.slope)
    assert backward.intercept != pytest.approx(forward.intercept)


def test_axis_swap_with_zero_variance_axis():
    flat = points((1, 5), (2, 5), (3, 5))
    swapped = [Point(p.y, p.x) for p in flat]
    assert compute_regression(flat) is not None
    assert compute_regression(swapped) is None


def test_regression_is_deterministic():
    assert compute_regression(NOISY) == compute_regression(list(NOISY))


def test_overflow_propagates_as_unusable_line():
    result = compute_regression(points((1e200, 1), (2e200, 2)))
    assert result is not None
    assert not math.isfinite(result.slope)
    assert not has_usable_line(result)
    assert format_statistics(result)['slope'] == "n/a"


def test_has_usable_line():
    assert has_usable_line(compute_regression(NOISY))
    assert not has_usable_line(None)


# ── Fit summary ──────────────────────────────────────────────────────────

def test_fit_summary_matches_scipy():
    ref = stats.linregress([p.x for p in NOISY], [p.y for p in NOISY])
    fit = fit_summary(NOISY, compute_regression(NOISY))
    assert fit.n == len(NOISY)
    assert fit.r == pytest.approx(ref.rvalue)
    assert fit.slope_std_error == pytest.approx(ref.stderr)
    assert fit.p_value == pytest.approx(ref.pvalue, rel=1e-6, abs=1e-12)


def test_fit_summary_negative_correlation_sign():
    pts = points((1, 9), (2, 7.5), (3, 6), (4, 3.9))
    assert fit_summary(pts, compute_regression(pts)).r < 0


def test_fit_summary_two_points_has_no_standard_errors():
    pts = points((1, 1), (2, 3))
    fit = fit_summary(pts, compute_regression(pts))
    assert fit.r == pytest.approx(1.0)
    assert fit.residual_std_error is None
    assert fit.slope_std_error is None
    assert fit.p_value is None


def test_fit_summary_exact_fit():
    pts = points((1, 2), (2, 4), (3, 6))
    fit = fit_summary(pts, compute_regression(pts))
    assert fit.residual_std_error == 0.0
    assert fit.p_value == 0.0


def test_fit_summary_exact_flat_fit_has_no_p_value():
    pts = points((1, 5), (2, 5), (3, 5))
    fit = fit_summary(pts, compute_regression(pts))
    assert fit.r == 0.0
    assert fit.p_value is None


def test_fit_summary_without_regression():
    assert fit_summary(points((5, 1), (5, 2)), None) is None


# ── Formatting ───────────────────────────────────────────────────────────

def _result(slope, intercept, r_squared=0.5):
    return RegressionResult(slope, intercept, r_squared,
                            (Point(0, intercept), Point(1, slope + intercept)))


def test_format_statistics_decimals():
    text = format_statistics(_result(2.0, 0.0, 1.0))
    assert text == {
        'r_squared': "1.0000",
        'slope': "2.0000",
        'intercept': "0.0000",
        'equation': "y = 2.00x + 0.00",
    }


def test_format_statistics_rounds():
    text = format_statistics(_result(1.23456789, 9.87654321, 0.123456))
    assert text['slope'] == "1.2346"
    assert text['intercept'] == "9.8765"
    assert text['r_squared'] == "0.1235"
    assert text['equation'] == "y = 1.23x + 9.88"


@pytest.mark.parametrize(
    "slope, intercept, expected",
    [
        (1.5, -2.25, "y = 1.50x - 2.25"),
        (-0.4, 3.0, "y = -0.40x + 3.00"),
        (2.0, -0.001, "y = 2.00x + 0.00"),
        (-0.001, 1.0, "y = 0.00x + 1.00"),
        (math.nan, 1.0, "y = n/ax + 1.00"),
        (1.0, math.inf, "y = 1.00x + n/a"),
    ],
)
def test_format_equation(slope, intercept, expected):
    assert format_equation(slope, intercept) == expected


@pytest.mark.parametrize(
    "p, expected",
    [(0.04321, "0.0432"), (0.00001, "< 0.0001"), (None, "n/a"),
     (math.nan, "n/a")],
)
def test_format_p_value(p, expected):
    assert format_p_value(p) == expected


def test_format_fit():
    pts = points((1, 1), (2, 3))
    text = format_fit(fit_summary(pts, compute_regression(pts)))
    assert text['n'] == "2"
    assert text['r'] == "1.0000"
    assert text['p_value'] == "n/a"
