"""
Audit trail for the Excel Regression Analyzer.

One ``AuditEntry`` per file load, selection change, fit, warning,
error and reset during a run of the application.  Kept in memory; the
GUI shows it in a dialog or saves it as plain text.
"""

import datetime
from dataclasses import asdict, dataclass
from typing import Callable, Dict, Iterator, List, Optional

from . import APP_NAME, APP_VERSION


@dataclass(frozen=True)
class AuditEntry:
    timestamp: datetime.datetime
    action: str
    description: str
    details: str = ""

    def text_lines(self) -> Iterator[str]:
        yield (f"[{self.timestamp:%Y-%m-%d %H:%M:%S}] [{self.action}] "
               f"{self.description}")
        for line in self.details.splitlines():
            yield f"    {line}"


class AuditLog:
    """Ordered record of what happened in one session.

    Parameters
    ----------
    clock : callable, optional
        Returns the timestamp for new entries; ``datetime.now`` by default.
    """

    def __init__(self, clock: Callable[[], datetime.datetime] = datetime.datetime.now):
        self._clock = clock
        self.entries: List[AuditEntry] = []
        self.log("SESSION_START", f"{APP_NAME} v{APP_VERSION} started")

    def log(self, action: str, description: str, details: str = "") -> AuditEntry:
        entry = AuditEntry(self._clock(), action, description, details)
        self.entries.append(entry)
        return entry

    def log_data_load(self, file_name: str, details: str) -> AuditEntry:
        return self.log("DATA_LOAD", f"Loaded {file_name}", details)

    def log_selection(self, x_column: Optional[str],
                      y_column: Optional[str]) -> AuditEntry:
        return self.log("SELECTION",
                        f"X = {x_column or '(none)'}, Y = {y_column or '(none)'}")

    def log_computation(self, what: str, details: str = "") -> AuditEntry:
        return self.log("COMPUTATION", what, details)

    def log_warning(self, message: str) -> AuditEntry:
        return self.log("WARNING", message)

    def log_error(self, message: str, details: str = "") -> AuditEntry:
        return self.log("ERROR", message, details)

    def actions(self) -> List[str]:
        """Action names in logging order."""
        return [e.action for e in self.entries]

    def export_text(self) -> str:
        rule = "-" * 72
        lines = [
            rule,
            f"{APP_NAME} v{APP_VERSION} audit log",
            f"Saved {self._clock():%Y-%m-%d %H:%M:%S}, "
            f"{len(self.entries)} entries",
            rule,
        ]
        for entry in self.entries:
            lines.extend(entry.text_lines())
        return "\n".join(lines) + "\n"

    def to_dict(self) -> List[Dict[str, str]]:
        """Entries as plain dicts with ISO timestamps."""
        rows = []
        for entry in self.entries:
            row = asdict(entry)
            row['timestamp'] = entry.timestamp.isoformat()
            rows.append(row)
        return rows
