"""
Diagnostics sink for recoverable configuration problems.

Prize pools, win evaluation and odds estimation report skipped configuration
entries and missing parameters here instead of printing. Callers pass their
own DiagnosticLog to surface, aggregate or silence them; the default one
forwards every entry to the application logger.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from scratchcore.core.logger import get_logger


@dataclass(frozen=True)
class Diagnostic:
    level: str
    code: str
    message: str
    context: Dict[str, Any] = field(default_factory=dict)


class DiagnosticLog:
    """Collects diagnostics and optionally forwards them to a logger."""

    def __init__(self, forward_to_logger: bool = True, logger_name: str = "diagnostics"):
        self.entries: List[Diagnostic] = []
        self.forward_to_logger = forward_to_logger
        self._logger = get_logger(logger_name) if forward_to_logger else None

    def warn(self, code: str, message: str, **context) -> Diagnostic:
        return self._record("WARNING", code, message, context)

    def error(self, code: str, message: str, **context) -> Diagnostic:
        return self._record("ERROR", code, message, context)

    def _record(self, level: str, code: str, message: str, context: Dict[str, Any]) -> Diagnostic:
        entry = Diagnostic(level=level, code=code, message=message, context=context)
        self.entries.append(entry)
        if self._logger is not None:
            log = self._logger.error if level == "ERROR" else self._logger.warning
            log(message, extra={"code": code, "context": context})
        return entry

    def codes(self) -> List[str]:
        return [entry.code for entry in self.entries]

    def messages(self) -> List[str]:
        return [entry.message for entry in self.entries]

    def clear(self):
        self.entries.clear()

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        # An empty log is still a usable sink
        return True


def ensure_diagnostics(diagnostics: Optional[DiagnosticLog], logger_name: str) -> DiagnosticLog:
    if diagnostics is None:
        return DiagnosticLog(logger_name=logger_name)
    return diagnostics
