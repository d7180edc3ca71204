"""
Analysis session for the Excel Regression Analyzer.

Holds the current ``AnalysisSnapshot`` and replaces it wholesale on
every input change:

- a new dataset recomputes the numeric columns and always re-applies
  the auto-selection (first two numeric columns)
- a new X or Y choice recomputes points and regression
- reset returns to the initial empty snapshot

Loading is split into ``request_load`` (file-type gate, enter the
loading state) and ``load_succeeded`` / ``load_failed`` (the single
completion callback), so the GUI can parse on a worker thread.  While
loading, selection changes are refused.

Listeners registered with :meth:`AnalysisSession.subscribe` receive
each new snapshot.  This module has no Qt dependency.
"""

import os
import warnings
from dataclasses import replace
from typing import Callable, Iterable, List, Optional

from .audit_log import AuditLog
from .constants import MSG_UNSUPPORTED_FILE
from .data_model import (
    AnalysisSnapshot, AxisSelection, Dataset,
    STATUS_ERROR, STATUS_LOADING, STATUS_READY,
)
from .pipeline import derive_analysis
from .regression import format_statistics
from .table_loader import is_supported_file, load_table

Listener = Callable[[AnalysisSnapshot], None]


class AnalysisSession:
    """Owner of the dataset, axis selection and everything derived from them."""

    def __init__(self, audit_log: Optional[AuditLog] = None):
        self._audit = audit_log if audit_log is not None else AuditLog()
        self._snapshot = AnalysisSnapshot()
        self._listeners: List[Listener] = []

    # ── Accessors ────────────────────────────────────────────────────

    @property
    def snapshot(self) -> AnalysisSnapshot:
        return self._snapshot

    @property
    def audit_log(self) -> AuditLog:
        return self._audit

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with every new snapshot; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _commit(self, snapshot: AnalysisSnapshot) -> None:
        self._snapshot = snapshot
        for listener in list(self._listeners):
            listener(snapshot)

    # ── Loading lifecycle ────────────────────────────────────────────

    def request_load(self, path: str) -> bool:
        """Start loading *path*.

        Returns ``False`` (and only sets the error message) when the
        file type is not supported.  Otherwise enters the loading
        state and returns ``True``.

        Raises
        ------
        RuntimeError
            If another load is still pending.
        """
        if self._snapshot.is_loading:
            raise RuntimeError("A file is already being loaded.")

        name = os.path.basename(path)
        if not is_supported_file(path):
            self._audit.log_error(MSG_UNSUPPORTED_FILE, name)
            self._commit(replace(self._snapshot, error=MSG_UNSUPPORTED_FILE))
            return False

        self._audit.log("LOAD_START", f"Loading {name}")
        self._commit(replace(self._snapshot, status=STATUS_LOADING, error=""))
        return True

    def load_succeeded(self, dataset: Dataset,
                       notices: Iterable[str] = ()) -> bool:
        """Commit a freshly parsed dataset and auto-select the axes.

        Returns ``False`` when no load is pending (e.g. the session was
        reset meanwhile); the dataset is then discarded.
        """
        if not self._snapshot.is_loading:
            self._audit.log_warning(
                f"Discarded late load result for '{dataset.file_name}'"
            )
            return False

        for message in notices:
            self._audit.log_warning(str(message))

        snapshot = derive_analysis(dataset, None, status=STATUS_READY)
        self._audit.log_data_load(
            dataset.file_name,
            f"{dataset.n_rows} rows, {len(dataset.columns)} columns\n"
            f"Numeric columns: {', '.join(snapshot.numeric_columns) or '(none)'}",
        )
        self._audit.log_selection(snapshot.selection.x_column,
                                  snapshot.selection.y_column)
        self._log_fit(snapshot)
        self._commit(snapshot)
        return True

    def load_failed(self, message: str) -> bool:
        """Record a parse failure: dataset and selection are cleared."""
        if not self._snapshot.is_loading:
            self._audit.log_warning(f"Discarded late load failure: {message}")
            return False
        self._audit.log_error("Load failed", message)
        self._commit(AnalysisSnapshot(status=STATUS_ERROR, error=message))
        return True

    def load_file(self, path: str, loader=load_table) -> bool:
        """Load *path* synchronously; returns ``True`` on success."""
        if not self.request_load(path):
            return False
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            try:
                dataset = loader(path)
            except (ValueError, OSError) as exc:
                self.load_failed(str(exc))
                return False
            except Exception as exc:
                # Any failure must leave the loading state
                self.load_failed(f"{type(exc).__name__}: {exc}")
                return False
        return self.load_succeeded(dataset, [str(w.message) for w in caught])

    def reset(self) -> None:
        """Clear dataset, selection, regression, error and loading state."""
        self._audit.log("RESET", "Session reset")
        self._commit(AnalysisSnapshot())

    # ── Axis selection ───────────────────────────────────────────────

    def select_x(self, column: Optional[str]) -> None:
        """Choose the independent column; ``None`` or ``""`` unsets it.

        Choosing the column currently used for Y unsets Y.
        """
        column = column or None
        y = self._snapshot.selection.y_column
        if column is not None and column == y:
            y = None
        self._apply_selection(AxisSelection(column, y))

    def select_y(self, column: Optional[str]) -> None:
        """Choose the dependent column; ``None`` or ``""`` unsets it.

        Choosing the column currently used for X unsets X.
        """
        column = column or None
        x = self._snapshot.selection.x_column
        if column is not None and column == x:
            x = None
        self._apply_selection(AxisSelection(x, column))

    def _apply_selection(self, selection: AxisSelection) -> None:
        current = self._snapshot
        if current.is_loading:
            raise RuntimeError("Cannot change columns while a file is loading.")
        for name in (selection.x_column, selection.y_column):
            if name is not None and name not in current.numeric_columns:
                raise ValueError(f"Column {name!r} is not a numeric column.")
        if selection == current.selection:
            return

        # A new choice supersedes a stale "unsupported file" message
        snapshot = derive_analysis(current.dataset, selection,
                                   status=current.status)
        self._audit.log_selection(selection.x_column, selection.y_column)
        self._log_fit(snapshot)
        self._commit(snapshot)

    # ── Helpers ──────────────────────────────────────────────────────

    def _log_fit(self, snapshot: AnalysisSnapshot) -> None:
        if not snapshot.selection.is_complete:
            return
        if snapshot.regression is None:
            self._audit.log_computation(
                "Linear regression undefined",
                f"{len(snapshot.points)} valid point(s); need at least two "
                f"with distinct x values",
            )
            return
        text = format_statistics(snapshot.regression)
        self._audit.log_computation(
            "Linear regression",
            f"n = {len(snapshot.points)}, {text['equation']}, "
            f"R² = {text['r_squared']}",
        )
