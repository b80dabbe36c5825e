"""
In-Memory Audit Storage

Keeps the audit trail in a bounded, append-only deque.
When the limit is reached the oldest events fall off.
"""

from collections import deque
from typing import Optional
from uuid import UUID

from accountaries.config import get_settings
from accountaries.models.audit import LedgerEvent
from accountaries.storage.interface import AuditStorageInterface


class InMemoryAuditStorage(AuditStorageInterface):
    """Audit storage backed by process memory."""

    def __init__(self, max_events: Optional[int] = None):
        if max_events is None:
            max_events = get_settings().ledger.audit_history_limit
        self._events: deque[LedgerEvent] = deque(maxlen=max_events)

    def __len__(self) -> int:
        return len(self._events)

    def append_event(self, event: LedgerEvent) -> bool:
        self._events.append(event)
        return True

    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[LedgerEvent]:
        return [e for e in self._events if e.correlation_id == correlation_id]

    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: UUID,
    ) -> list[LedgerEvent]:
        return [
            e for e in self._events
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]

    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[LedgerEvent]:
        return list(reversed(self._events))[:limit]
