"""
Chart export for the Excel Regression Analyzer.

The current snapshot is drawn again on a new figure under
``PLOT_STYLE_LIGHT`` (white background, export colours), so the dark
GUI figure and the global rcParams stay untouched.  Output goes to a
PNG file, a byte string, or the system clipboard.
"""

import io

import matplotlib as mpl
from matplotlib.figure import Figure

from .chart_regression import render_regression
from .constants import (
    CLIPBOARD_DPI, DEFAULT_FIGSIZE, EXPORT_DPI, EXPORT_WIDTH_INCHES,
    PLOT_STYLE_LIGHT,
)
from .data_model import AnalysisSnapshot


def export_png(snapshot: AnalysisSnapshot, target, *,
               dpi: int = EXPORT_DPI,
               width_inches: float = EXPORT_WIDTH_INCHES) -> None:
    """Write the light-theme chart of *snapshot* as PNG.

    Parameters
    ----------
    snapshot : AnalysisSnapshot
    target : str or binary file object
    dpi : int
        Resolution; 600 by default.
    width_inches : float
        Figure width; the height keeps the on-screen aspect ratio.
    """
    height = width_inches * DEFAULT_FIGSIZE[1] / DEFAULT_FIGSIZE[0]
    with mpl.rc_context(PLOT_STYLE_LIGHT):
        fig = Figure(figsize=(width_inches, height))
        render_regression(fig, snapshot, for_export=True)
        fig.savefig(target, format='png', dpi=dpi,
                    bbox_inches='tight', pad_inches=0.1,
                    facecolor=fig.get_facecolor(), edgecolor='none')


def png_bytes(snapshot: AnalysisSnapshot, dpi: int = CLIPBOARD_DPI) -> bytes:
    with io.BytesIO() as buf:
        export_png(snapshot, buf, dpi=dpi)
        return buf.getvalue()


def copy_to_clipboard(snapshot: AnalysisSnapshot,
                      dpi: int = CLIPBOARD_DPI) -> bool:
    """Put the chart on the clipboard; ``False`` without a Qt application."""
    from PySide6.QtGui import QImage
    from PySide6.QtWidgets import QApplication

    if QApplication.instance() is None:
        return False
    image = QImage.fromData(png_bytes(snapshot, dpi=dpi), "PNG")
    if image.isNull():
        return False
    QApplication.clipboard().setImage(image)
    return True
