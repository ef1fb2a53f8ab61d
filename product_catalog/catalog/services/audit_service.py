from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from catalog.utils import now

log = logging.getLogger("catalog.audit")


@dataclass
class AuditEntry:
    timestamp: datetime
    username: str
    action: str
    details: str


class AuditService:
    def __init__(self):
        self._entries: list[AuditEntry] = []

    def log_action(self, username: str, action: str, details: str = "") -> AuditEntry:
        entry = AuditEntry(now(), username, action, details)
        self._entries.append(entry)
        log.info(self.format_entry(entry))
        return entry

    def entries(self) -> list[AuditEntry]:
        return list(self._entries)

    @staticmethod
    def format_entry(entry: AuditEntry) -> str:
        return (
            f"[{entry.timestamp.isoformat(timespec='seconds')}] "
            f"User: {entry.username} | Action: {entry.action} | Details: {entry.details}"
        )
