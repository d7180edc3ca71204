"""
Control panel (left side) for the Excel Regression Analyzer.

File controls, X/Y column selectors, regression statistics cards,
and the Reset button.  The panel only reflects ``AnalysisSnapshot``
values and forwards user choices as signals; it holds no analysis
state of its own.
"""

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QFormLayout, QGroupBox, QFrame,
    QLabel, QPushButton, QComboBox,
)
from PySide6.QtCore import Signal

from .constants import (
    DARK_COLORS, MSG_LOADING, MSG_INSUFFICIENT_DATA, MSG_SELECT_COLUMNS,
)
from .data_model import AnalysisSnapshot
from .regression import format_fit, format_statistics

_PLACEHOLDER = "Select column"


class _StatCard(QFrame):
    """Title, large value and one-line description."""

    def __init__(self, title: str, description: str, parent=None):
        super().__init__(parent)
        self.setObjectName("statCard")
        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 8, 10, 8)
        layout.setSpacing(2)

        lbl_title = QLabel(title)
        lbl_title.setObjectName("statTitle")
        self._value = QLabel("—")
        self._value.setObjectName("statValue")
        lbl_desc = QLabel(description)
        lbl_desc.setObjectName("statDescription")

        layout.addWidget(lbl_title)
        layout.addWidget(self._value)
        layout.addWidget(lbl_desc)

    def set_value(self, text: str) -> None:
        self._value.setText(text)


class ControlPanel(QWidget):
    """Left-side panel with file controls, axis selectors and statistics."""

    # Signals
    open_requested = Signal()
    example_requested = Signal()
    reset_requested = Signal()
    x_column_changed = Signal(str)   # "" means unset
    y_column_changed = Signal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._setup_ui()
        self._connect_signals()
        self.update_snapshot(AnalysisSnapshot())

    # ── UI setup ─────────────────────────────────────────────────────

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)
        layout.setSpacing(8)

        # ── Group 1: Data File ───────────────────────────────────────
        grp_file = QGroupBox("Data File")
        file_layout = QVBoxLayout(grp_file)
        file_layout.setSpacing(4)

        self._lbl_drop = QLabel(
            "Drag & Drop your file here\nSupports .xlsx and .csv files"
        )
        self._lbl_drop.setObjectName("dropHint")
        self._lbl_drop.setWordWrap(True)
        file_layout.addWidget(self._lbl_drop)

        self._btn_open = QPushButton("Open File...")
        file_layout.addWidget(self._btn_open)

        self._btn_example = QPushButton("Load Example Data")
        file_layout.addWidget(self._btn_example)

        self._lbl_file_status = QLabel("")
        self._lbl_file_status.setWordWrap(True)
        file_layout.addWidget(self._lbl_file_status)

        layout.addWidget(grp_file)

        # ── Group 2: Analysis Variables ──────────────────────────────
        grp_axes = QGroupBox("Analysis Variables")
        axes_layout = QFormLayout(grp_axes)
        axes_layout.setSpacing(6)

        self._cmb_x = QComboBox()
        self._cmb_y = QComboBox()
        axes_layout.addRow("X-Axis (Independent):", self._cmb_x)
        axes_layout.addRow("Y-Axis (Dependent):", self._cmb_y)

        layout.addWidget(grp_axes)

        # ── Group 3: Regression Statistics ───────────────────────────
        self._grp_stats = QGroupBox("Regression Statistics")
        stats_layout = QVBoxLayout(self._grp_stats)
        stats_layout.setSpacing(6)

        self._card_r2 = _StatCard("R-Squared", "Model fit quality")
        self._card_slope = _StatCard("Slope (m)", "Change in Y per unit of X")
        self._card_intercept = _StatCard("Y-Intercept (b)",
                                         "Value of Y when X is 0")
        stats_layout.addWidget(self._card_r2)
        stats_layout.addWidget(self._card_slope)
        stats_layout.addWidget(self._card_intercept)

        stats_layout.addWidget(QLabel("Regression Equation"))
        self._lbl_equation = QLabel("")
        self._lbl_equation.setObjectName("equationLabel")
        stats_layout.addWidget(self._lbl_equation)

        self._lbl_fit_details = QLabel("")
        self._lbl_fit_details.setWordWrap(True)
        self._lbl_fit_details.setStyleSheet(
            f"color: {DARK_COLORS['fg_dim']}; font-size: 11px;"
        )
        stats_layout.addWidget(self._lbl_fit_details)

        layout.addWidget(self._grp_stats)

        self._lbl_stats_hint = QLabel("")
        self._lbl_stats_hint.setWordWrap(True)
        self._lbl_stats_hint.setStyleSheet(
            f"color: {DARK_COLORS['fg_dim']}; font-size: 11px;"
        )
        layout.addWidget(self._lbl_stats_hint)

        # ── Actions ──────────────────────────────────────────────────
        self._btn_reset = QPushButton("Upload New File")
        self._btn_reset.setObjectName("resetButton")
        self._btn_reset.setToolTip("Clear the current file and selections")
        layout.addWidget(self._btn_reset)

        layout.addStretch()

    # ── Signal connections ───────────────────────────────────────────

    def _connect_signals(self):
        self._btn_open.clicked.connect(lambda *_: self.open_requested.emit())
        self._btn_example.clicked.connect(
            lambda *_: self.example_requested.emit()
        )
        self._btn_reset.clicked.connect(lambda *_: self.reset_requested.emit())
        self._cmb_x.activated.connect(
            lambda *_: self.x_column_changed.emit(self._combo_value(self._cmb_x))
        )
        self._cmb_y.activated.connect(
            lambda *_: self.y_column_changed.emit(self._combo_value(self._cmb_y))
        )

    @staticmethod
    def _combo_value(combo: QComboBox) -> str:
        return combo.currentData() or ""

    @staticmethod
    def _fill_combo(combo: QComboBox, columns, current) -> None:
        combo.blockSignals(True)
        combo.clear()
        combo.addItem(_PLACEHOLDER, "")
        for name in columns:
            combo.addItem(name, name)
        idx = combo.findData(current or "")
        combo.setCurrentIndex(max(idx, 0))
        combo.blockSignals(False)

    # ── Snapshot rendering ───────────────────────────────────────────

    def update_snapshot(self, snapshot: AnalysisSnapshot) -> None:
        """Reflect *snapshot* in every control."""
        c = DARK_COLORS
        loading = snapshot.is_loading
        selection = snapshot.selection

        # File status
        if loading:
            status, color = MSG_LOADING, c['yellow']
        elif snapshot.error:
            status, color = snapshot.error, c['red']
        elif snapshot.has_data:
            dataset = snapshot.dataset
            status = (
                f"Loaded: {snapshot.file_name} — {dataset.n_rows} rows, "
                f"{len(snapshot.numeric_columns)} of {len(dataset.columns)} "
                f"columns numeric"
            )
            color = c['green']
        else:
            status, color = "No file loaded", c['fg_dim']
        self._lbl_file_status.setText(status)
        self._lbl_file_status.setStyleSheet(f"color: {color}; font-size: 11px;")

        # Axis selectors; Y never offers the current X
        self._fill_combo(self._cmb_x, snapshot.numeric_columns,
                         selection.x_column)
        self._fill_combo(
            self._cmb_y,
            [n for n in snapshot.numeric_columns if n != selection.x_column],
            selection.y_column,
        )
        has_columns = bool(snapshot.numeric_columns) and not loading
        self._cmb_x.setEnabled(has_columns)
        self._cmb_y.setEnabled(has_columns)

        for btn in (self._btn_open, self._btn_example):
            btn.setEnabled(not loading)
        self._btn_reset.setEnabled(
            not loading and (snapshot.has_data or bool(snapshot.error))
        )

        # Statistics
        result = snapshot.regression
        self._grp_stats.setVisible(result is not None)
        if result is not None:
            text = format_statistics(result)
            self._card_r2.set_value(text['r_squared'])
            self._card_slope.set_value(text['slope'])
            self._card_intercept.set_value(text['intercept'])
            self._lbl_equation.setText(text['equation'])
            if snapshot.fit is not None:
                fit = format_fit(snapshot.fit)
                self._lbl_fit_details.setText(
                    f"n = {fit['n']}   r = {fit['r']}\n"
                    f"SE(slope) = {fit['slope_std_error']}   "
                    f"p = {fit['p_value']}\n"
                    f"Residual SE = {fit['residual_std_error']}"
                )
            self._lbl_stats_hint.setText("")
        elif snapshot.has_data and not selection.is_complete:
            self._lbl_stats_hint.setText(MSG_SELECT_COLUMNS)
        elif snapshot.has_data:
            self._lbl_stats_hint.setText(MSG_INSUFFICIENT_DATA)
        else:
            self._lbl_stats_hint.setText("")
