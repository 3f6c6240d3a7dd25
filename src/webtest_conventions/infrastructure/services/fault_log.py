"""Thread-safe in-memory log of rule faults contained by the dispatcher."""

import threading

from webtest_conventions.domain.diagnostics import RuleFault
from webtest_conventions.domain.protocols import FaultLogPort


class FaultLog(FaultLogPort):
    """Append-only; safe to share between threads analyzing different files."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._faults: list[RuleFault] = []

    def record(self, fault: RuleFault) -> None:
        with self._lock:
            self._faults.append(fault)

    def faults(self) -> list[RuleFault]:
        with self._lock:
            return list(self._faults)

    def clear(self) -> None:
        with self._lock:
            self._faults.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._faults)
