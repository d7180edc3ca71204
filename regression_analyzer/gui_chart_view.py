"""
Chart view (right side) for the Excel Regression Analyzer.

matplotlib canvas with its navigation toolbar plus "Copy" and
"Export PNG" buttons.  Redrawn from each new ``AnalysisSnapshot``.
"""

import os

from PySide6.QtWidgets import (
    QFileDialog, QHBoxLayout, QMessageBox, QPushButton, QVBoxLayout, QWidget,
)

import matplotlib
matplotlib.use('QtAgg')
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg
from matplotlib.backends.backend_qtagg import NavigationToolbar2QT
from matplotlib.figure import Figure

from .chart_regression import render_regression
from .constants import DARK_COLORS, DEFAULT_FIGSIZE, PLOT_STYLE_DARK
from .data_model import AnalysisSnapshot
from .export import copy_to_clipboard, export_png
from .theme import apply_plot_style


def _chartable(snapshot: AnalysisSnapshot) -> bool:
    return snapshot.selection.is_complete and bool(snapshot.points)


class ChartView(QWidget):
    """Regression chart with toolbar and export actions."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._snapshot = AnalysisSnapshot()

        # rcParams are read when the figure and its axes are created
        apply_plot_style(PLOT_STYLE_DARK)
        self._fig = Figure(figsize=DEFAULT_FIGSIZE,
                           facecolor=DARK_COLORS['bg_alt'])
        self._canvas = FigureCanvasQTAgg(self._fig)

        self._btn_copy = self._small_button("Copy to Clipboard", self._on_copy)
        self._btn_export = self._small_button("Export PNG...", self.export_dialog)

        top = QHBoxLayout()
        top.setSpacing(4)
        top.addWidget(NavigationToolbar2QT(self._canvas, self))
        top.addStretch()
        top.addWidget(self._btn_copy)
        top.addWidget(self._btn_export)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.addLayout(top)
        layout.addWidget(self._canvas, 1)

        self.update_snapshot(self._snapshot)

    def _small_button(self, text: str, slot) -> QPushButton:
        btn = QPushButton(text, self)
        btn.setFixedHeight(28)
        btn.setStyleSheet("padding: 2px 10px; font-size: 11px;")
        btn.clicked.connect(lambda *_: slot())
        return btn

    @property
    def figure(self) -> Figure:
        return self._fig

    def update_snapshot(self, snapshot: AnalysisSnapshot) -> None:
        self._snapshot = snapshot
        apply_plot_style(PLOT_STYLE_DARK)
        render_regression(self._fig, snapshot)
        self._canvas.draw_idle()

        enabled = _chartable(snapshot)
        self._btn_copy.setEnabled(enabled)
        self._btn_export.setEnabled(enabled)

    def _show_status(self, message: str) -> None:
        window = self.window()
        if hasattr(window, 'statusBar'):
            window.statusBar().showMessage(message, 4000)

    def _on_copy(self):
        if copy_to_clipboard(self._snapshot):
            self._show_status("Chart copied to clipboard")
        else:
            QMessageBox.warning(self, "Copy to Clipboard",
                                "The clipboard is not available.")

    def export_dialog(self):
        """Ask for a target file and write the chart as a 600 dpi PNG."""
        if not _chartable(self._snapshot):
            QMessageBox.information(
                self, "Export PNG",
                "Select X and Y columns with valid data first.",
            )
            return

        stem = os.path.splitext(self._snapshot.file_name)[0] or "chart"
        path, _ = QFileDialog.getSaveFileName(
            self, "Export PNG", f"{stem}_regression.png",
            "PNG Images (*.png);;All Files (*)",
        )
        if not path:
            return
        if os.path.splitext(path)[1].lower() != '.png':
            path = f"{path}.png"

        try:
            export_png(self._snapshot, path)
        except (OSError, ValueError) as exc:
            QMessageBox.critical(self, "Export PNG",
                                 f"Could not write {path}:\n\n{exc}")
            return
        self._show_status(f"Chart saved to {os.path.basename(path)}")
