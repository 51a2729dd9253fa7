"""
Audit Store - In-memory history of completed audits.

Owned by the application (``app.state``) and handed to endpoints as a
dependency; the engine never touches it.
"""

from collections import OrderedDict
from threading import Lock
from typing import Optional

from agent_auditor.logger import logger
from agent_auditor.schemas.audit_result import AuditResult


class AuditStore:
    """Bounded, thread-safe audit history."""

    def __init__(self, max_entries: int = 1000):
        self.max_entries = max_entries
        self._audits: "OrderedDict[str, AuditResult]" = OrderedDict()
        self._lock = Lock()

    def save(self, result: AuditResult) -> None:
        with self._lock:
            self._audits[result.id] = result
            self._audits.move_to_end(result.id)
            while len(self._audits) > self.max_entries:
                evicted, _ = self._audits.popitem(last=False)
                logger.info(f"Audit store full: evicted {evicted}")

    def get(self, audit_id: str) -> Optional[AuditResult]:
        with self._lock:
            return self._audits.get(audit_id)

    def history(self, limit: int = 10, offset: int = 0) -> tuple[list[AuditResult], int]:
        """Newest first, paged."""
        with self._lock:
            newest_first = list(reversed(self._audits.values()))
        return newest_first[offset:offset + limit], len(newest_first)

    def clear(self) -> None:
        with self._lock:
            self._audits.clear()
