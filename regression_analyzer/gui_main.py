"""
Main window for the Excel Regression Analyzer.

Hosts the ControlPanel (left) and ChartView (right) in a horizontal
splitter, with a menu bar, status bar and drag-and-drop file input.
All analysis state lives in an ``AnalysisSession``; the widgets are
redrawn from each snapshot it publishes.
"""

import os
import sys
import tempfile

from PySide6.QtWidgets import (
    QMainWindow, QVBoxLayout, QSplitter, QScrollArea,
    QFileDialog, QMessageBox, QDialog, QPlainTextEdit, QDialogButtonBox,
)
from PySide6.QtGui import QAction
from PySide6.QtCore import Qt

from . import APP_NAME, APP_VERSION
from .analysis_session import AnalysisSession
from .constants import FILE_DIALOG_FILTER, MSG_UNSUPPORTED_FILE
from .data_model import AnalysisSnapshot
from .example_data import generate_example_csv
from .gui_chart_view import ChartView
from .gui_control_panel import ControlPanel
from .load_worker import LoadWorkerThread


class RegressionMainWindow(QMainWindow):
    """Main window for the Excel Regression Analyzer."""

    def __init__(self, session: AnalysisSession = None):
        super().__init__()
        self._session = session if session is not None else AnalysisSession()
        self._worker = None

        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        self.setMinimumSize(1100, 720)
        self.setAcceptDrops(True)

        self._setup_ui()
        self._setup_menu()
        self._connect_signals()

        self._session.subscribe(self._on_snapshot)
        self._on_snapshot(self._session.snapshot)
        self.statusBar().showMessage("Ready. Open an Excel or CSV file to begin")

    @property
    def session(self) -> AnalysisSession:
        return self._session

    # ── UI setup ─────────────────────────────────────────────────────

    def _setup_ui(self):
        self._control_panel = ControlPanel()
        self._chart_view = ChartView()

        # Controls scroll on small screens; the chart takes the rest
        side = QScrollArea()
        side.setWidgetResizable(True)
        side.setWidget(self._control_panel)
        side.setMinimumWidth(300)
        side.setMaximumWidth(460)

        splitter = QSplitter(Qt.Orientation.Horizontal, self)
        splitter.addWidget(side)
        splitter.addWidget(self._chart_view)
        splitter.setCollapsible(1, False)
        splitter.setStretchFactor(1, 1)
        splitter.setSizes([340, 760])
        splitter.setContentsMargins(4, 4, 4, 4)
        self.setCentralWidget(splitter)

    def _add_action(self, menu, text, slot, shortcut=None):
        action = QAction(text, self)
        if shortcut:
            action.setShortcut(shortcut)
        action.triggered.connect(lambda *_: slot())
        menu.addAction(action)
        return action

    def _setup_menu(self):
        bar = self.menuBar()

        menu = bar.addMenu("&File")
        self._add_action(menu, "&Open File...", self._open_file_dialog, "Ctrl+O")
        self._add_action(menu, "&Export Chart...",
                         self._chart_view.export_dialog, "Ctrl+E")
        menu.addSeparator()
        self._add_action(menu, "&Reset", self._on_reset, "Ctrl+R")
        self._add_action(menu, "E&xit", self.close, "Ctrl+Q")

        menu = bar.addMenu("&Examples")
        self._add_action(menu, "Load Example Sales Data", self._load_example)

        menu = bar.addMenu("&Help")
        self._add_action(menu, "View Audit Log", self._show_audit_log)
        self._add_action(menu, "Save Audit Log...", self._save_audit_log)
        menu.addSeparator()
        self._add_action(menu, "About", self._show_about)

    def _connect_signals(self):
        panel = self._control_panel
        panel.open_requested.connect(self._open_file_dialog)
        panel.example_requested.connect(self._load_example)
        panel.reset_requested.connect(self._on_reset)
        panel.x_column_changed.connect(self._on_x_changed)
        panel.y_column_changed.connect(self._on_y_changed)

    # ── Snapshot ─────────────────────────────────────────────────────

    def _on_snapshot(self, snapshot: AnalysisSnapshot):
        """Slot: session published a new snapshot."""
        self._control_panel.update_snapshot(snapshot)
        try:
            self._chart_view.update_snapshot(snapshot)
        except (ValueError, OverflowError) as exc:
            # Extreme values can defeat matplotlib's layout; keep the
            # controls usable and report on stderr.
            print(f"[Regression] Chart render warning: {exc}",
                  file=sys.stderr)
        title = f"{APP_NAME} v{APP_VERSION}"
        if snapshot.file_name:
            title = f"{snapshot.file_name} — {title}"
        self.setWindowTitle(title)

    # ── Loading ──────────────────────────────────────────────────────

    def _open_file_dialog(self):
        if self._session.snapshot.is_loading:
            return
        path, _ = QFileDialog.getOpenFileName(
            self, "Open Excel or CSV File", "", FILE_DIALOG_FILTER,
        )
        if path:
            self.start_load(path)

    def _load_example(self):
        """Generate and load the example CSV."""
        if self._session.snapshot.is_loading:
            return
        example_dir = os.path.join(
            tempfile.gettempdir(), 'regression_analyzer_example'
        )
        try:
            path = generate_example_csv(example_dir)
        except OSError as exc:
            QMessageBox.critical(self, "Example Data Error", str(exc))
            return
        self.start_load(path)

    def start_load(self, path: str) -> bool:
        """Parse *path* on a worker thread; returns ``False`` if rejected."""
        if not self._session.request_load(path):
            QMessageBox.warning(self, "Unsupported File", MSG_UNSUPPORTED_FILE)
            self.statusBar().showMessage("Unsupported file", 5000)
            return False

        self.statusBar().showMessage(f"Loading {os.path.basename(path)}...")
        worker = LoadWorkerThread(path, parent=self)
        worker.finished_result.connect(
            lambda dataset, notices, w=worker:
                self._on_load_finished(w, dataset, notices)
        )
        worker.error_occurred.connect(
            lambda message, w=worker: self._on_load_error(w, message)
        )
        worker.finished.connect(worker.deleteLater)
        self._worker = worker
        worker.start()
        return True

    def _on_load_finished(self, worker, dataset, notices):
        if worker is not self._worker:
            return
        self._worker = None
        if not self._session.load_succeeded(dataset, notices):
            return
        snapshot = self._session.snapshot
        msg = (f"Loaded {snapshot.file_name}: {dataset.n_rows} rows, "
               f"{len(snapshot.numeric_columns)} numeric columns")
        if notices:
            msg += f" ({len(notices)} warning(s), see Help > View Audit Log)"
        self.statusBar().showMessage(msg, 8000)

    def _on_load_error(self, worker, message: str):
        if worker is not self._worker:
            return
        self._worker = None
        if not self._session.load_failed(message):
            return
        self.statusBar().showMessage("Data load failed")
        QMessageBox.critical(self, "Data Load Error", message)

    # ── Drag and drop ────────────────────────────────────────────────

    def dragEnterEvent(self, event):
        urls = event.mimeData().urls()
        if (len(urls) == 1 and urls[0].isLocalFile()
                and not self._session.snapshot.is_loading):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event):
        urls = event.mimeData().urls()
        if not urls:
            return
        event.acceptProposedAction()
        self.start_load(urls[0].toLocalFile())

    # ── Selection / reset ────────────────────────────────────────────

    def _on_x_changed(self, column: str):
        try:
            self._session.select_x(column)
        except (ValueError, RuntimeError) as exc:
            self.statusBar().showMessage(str(exc), 5000)

    def _on_y_changed(self, column: str):
        try:
            self._session.select_y(column)
        except (ValueError, RuntimeError) as exc:
            self.statusBar().showMessage(str(exc), 5000)

    def _on_reset(self):
        # Results of a worker still running are dropped
        self._worker = None
        self._session.reset()
        self.statusBar().showMessage("Ready. Open an Excel or CSV file to begin")

    # ── Audit log / about ────────────────────────────────────────────

    def _show_audit_log(self):
        dlg = QDialog(self)
        dlg.setWindowTitle("Audit Log")
        dlg.resize(720, 480)
        layout = QVBoxLayout(dlg)
        text = QPlainTextEdit()
        text.setReadOnly(True)
        text.setPlainText(self._session.audit_log.export_text())
        layout.addWidget(text)
        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Close)
        buttons.rejected.connect(dlg.reject)
        layout.addWidget(buttons)
        dlg.exec()

    def _save_audit_log(self):
        path, _ = QFileDialog.getSaveFileName(
            self, "Save Audit Log", "audit_log.txt",
            "Text Files (*.txt);;All Files (*)",
        )
        if not path:
            return
        try:
            with open(path, 'w', encoding='utf-8') as fh:
                fh.write(self._session.audit_log.export_text())
            self.statusBar().showMessage(
                f"Audit log saved to {os.path.basename(path)}", 5000
            )
        except OSError as exc:
            QMessageBox.critical(
                self, "Save Error", f"Failed to save audit log:\n\n{exc}"
            )

    def _show_about(self):
        QMessageBox.about(
            self,
            f"About {APP_NAME}",
            f"<h3>{APP_NAME} v{APP_VERSION}</h3>"
            f"<p>Upload an Excel workbook or CSV file to visualise the "
            f"relationship between two numeric columns.</p>"
            f"<p>Fits an ordinary-least-squares line and reports R², "
            f"slope, intercept and the slope's p-value.</p>",
        )

    def closeEvent(self, event):
        # Loaders cannot be interrupted; a QThread must not be destroyed
        # while running
        for worker in self.findChildren(LoadWorkerThread):
            worker.wait()
        super().closeEvent(event)
