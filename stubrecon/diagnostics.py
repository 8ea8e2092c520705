"""
Diagnostics emitted while reconciling members.

Every recoverable problem (missing documentation, mismatched types, skipped
classes) is reported as a Diagnostic to an injectable observer. The default
observer forwards to the standard logging module; DiagnosticCollector keeps
the entries around so callers and tests can inspect them.
"""

import logging
import threading
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class DiagnosticKind(str, Enum):
    CLASS_EXCLUDED = "class_excluded"
    NO_CLASS_PATH = "no_class_path"
    NO_DOCUMENTATION = "no_documentation"
    LOOKUP_FAILED = "lookup_failed"
    FIELD_MISMATCH = "field_mismatch"
    FIELD_UNDOCUMENTED = "field_undocumented"
    METHOD_UNDOCUMENTED = "method_undocumented"
    CLASS_SKIPPED = "class_skipped"
    DUPLICATE_CLASS = "duplicate_class"
    CLASS_COMPILED = "class_compiled"


DEFAULT_LEVELS: Dict[DiagnosticKind, int] = {
    DiagnosticKind.CLASS_EXCLUDED: logging.INFO,
    DiagnosticKind.NO_CLASS_PATH: logging.ERROR,
    DiagnosticKind.NO_DOCUMENTATION: logging.INFO,
    DiagnosticKind.LOOKUP_FAILED: logging.ERROR,
    DiagnosticKind.FIELD_MISMATCH: logging.WARNING,
    DiagnosticKind.FIELD_UNDOCUMENTED: logging.INFO,
    DiagnosticKind.METHOD_UNDOCUMENTED: logging.INFO,
    DiagnosticKind.CLASS_SKIPPED: logging.ERROR,
    DiagnosticKind.DUPLICATE_CLASS: logging.WARNING,
    DiagnosticKind.CLASS_COMPILED: logging.INFO,
}


@dataclass
class Diagnostic:
    """One reconciliation event."""
    kind: DiagnosticKind
    class_name: str
    message: str
    member: Optional[str] = None
    level: int = field(default=-1)

    def __post_init__(self):
        if self.level < 0:
            self.level = DEFAULT_LEVELS[self.kind]


DiagnosticObserver = Callable[[Diagnostic], None]


def log_diagnostic(diagnostic: Diagnostic) -> None:
    """Default observer: write the diagnostic to the module logger."""
    logger.log(diagnostic.level, f"[{diagnostic.kind.value}] {diagnostic.message}")


class DiagnosticCollector:
    """
    Observer that records diagnostics and optionally forwards them.

    Safe to share between worker threads.
    """

    def __init__(self, forward: Optional[DiagnosticObserver] = log_diagnostic):
        """
        Initialize the collector.

        Args:
            forward: Observer every diagnostic is passed on to (None to only record)
        """
        self.forward = forward
        self._entries: List[Diagnostic] = []
        self._lock = threading.Lock()

    def __call__(self, diagnostic: Diagnostic) -> None:
        with self._lock:
            self._entries.append(diagnostic)
        if self.forward is not None:
            self.forward(diagnostic)

    @property
    def entries(self) -> List[Diagnostic]:
        with self._lock:
            return list(self._entries)

    def of_kind(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return [d for d in self.entries if d.kind == kind]

    def get_stats(self) -> Dict[str, int]:
        """Count diagnostics per kind."""
        counts = Counter(d.kind.value for d in self.entries)
        return dict(counts)
