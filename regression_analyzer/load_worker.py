"""
Background file loading for the Excel Regression Analyzer.

Parses one file off the GUI thread.  Exactly one of the two result
signals fires per run.
"""

import warnings

from PySide6.QtCore import QThread, Signal

from .table_loader import load_table


class LoadWorkerThread(QThread):
    """
    Worker that runs ``load_table`` on a single file.

    Loader warnings (ragged rows, very large files) are captured and
    delivered alongside the dataset so the session can log them.

    Signals
    -------
    finished_result : Signal(object, list)
        Emits the parsed :class:`Dataset` and a list of warning strings.
    error_occurred : Signal(str)
        Emits a user-facing error message if loading fails.
    """

    finished_result = Signal(object, list)
    error_occurred = Signal(str)

    def __init__(self, path: str, loader=load_table, parent=None):
        super().__init__(parent)
        self._path = path
        self._loader = loader

    @property
    def path(self) -> str:
        return self._path

    def run(self):  # noqa: D401 – Qt override
        try:
            with warnings.catch_warnings(record=True) as caught:
                warnings.simplefilter("always")
                dataset = self._loader(self._path)
        except (ValueError, OSError) as exc:
            self.error_occurred.emit(str(exc))
            return
        except Exception as exc:
            self.error_occurred.emit(f"{type(exc).__name__}: {exc}")
            return
        self.finished_result.emit(dataset, [str(w.message) for w in caught])
