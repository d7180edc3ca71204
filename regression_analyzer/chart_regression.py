"""
Scatter plot with regression line for the Excel Regression Analyzer.

Plots every valid (x, y) point of the selected columns and, when the
fit is defined and finite, the fitted segment across the observed
x-range.  Missing selections and undefined fits are shown as text on
the axes, never as errors.
"""

from matplotlib.figure import Figure

from .constants import (
    MSG_INSUFFICIENT_DATA, MSG_NO_POINTS, MSG_SELECT_COLUMNS, PLOT_PALETTE,
)
from .data_model import AnalysisSnapshot, points_as_arrays
from .regression import format_statistics, has_usable_line


def _centered_message(ax, text: str) -> None:
    ax.text(0.5, 0.5, text,
            transform=ax.transAxes, ha='center', va='center')
    ax.set_xticks([])
    ax.set_yticks([])


def render_regression(
    fig: Figure,
    snapshot: AnalysisSnapshot,
    *,
    for_export: bool = False,
) -> None:
    """Render the scatter and regression line on *fig*.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
        Figure to draw on (will be cleared).
    snapshot : AnalysisSnapshot
        Current selection, points and regression.
    for_export : bool
        If ``True``, use colours that read on a white background.
    """
    fig.clf()
    pal = PLOT_PALETTE
    ax = fig.add_subplot(111)

    selection = snapshot.selection
    if not selection.is_complete:
        _centered_message(ax, MSG_SELECT_COLUMNS)
        return

    points = snapshot.points
    if not points:
        _centered_message(ax, MSG_NO_POINTS)
        return

    # ── Scatter ──────────────────────────────────────────────────────
    xs, ys = points_as_arrays(points)
    ax.scatter(
        xs, ys,
        c=pal['points_export'] if for_export else pal['points'],
        s=20, alpha=0.8, edgecolors='white',
        linewidths=0.4, zorder=3,
        label='Data Points',
    )

    # ── Regression segment ───────────────────────────────────────────
    result = snapshot.regression
    if has_usable_line(result):
        text = format_statistics(result)
        line = result.line_data
        ax.plot(
            [p.x for p in line], [p.y for p in line],
            color=pal['fit_line_export'] if for_export else pal['fit_line'],
            linewidth=2.0, zorder=4,
            label=f"Regression Line: {text['equation']} "
                  f"(R² = {text['r_squared']})",
        )
    else:
        ax.text(0.5, 0.02, MSG_INSUFFICIENT_DATA,
                transform=ax.transAxes, ha='center', va='bottom',
                fontsize=8)

    # ── Labels ───────────────────────────────────────────────────────
    ax.set_xlabel(f"{selection.x_column} (Independent)", fontsize=8)
    ax.set_ylabel(f"{selection.y_column} (Dependent)", fontsize=8)
    title = f"{selection.y_column} vs {selection.x_column}"
    if snapshot.file_name:
        title += f"\n{snapshot.file_name}"
    ax.set_title(title, fontsize=10, fontweight='bold')
    ax.grid(linewidth=0.4, alpha=0.5, linestyle='--')

    ax.legend(loc='best', fontsize=7, framealpha=0.9)
    fig.tight_layout(pad=1.5)
