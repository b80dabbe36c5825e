"""
Abstract Audit Storage Interface

DESIGN DECISION: The audit logger writes through an abstract interface.
This allows us to:
1. Keep audit events in memory for the desktop app and for tests
2. Swap in a durable backend later without touching the ledger
3. Keep the ledger decoupled from where its audit trail lives

Ledger data itself is never persisted by the core.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from accountaries.models.audit import LedgerEvent


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: LedgerEvent) -> bool:
        """
        Append an audit event to the log.

        Args:
            event: The audit event to log

        Returns:
            True if logged successfully

        Raises:
            StorageError: If the event could not be stored
        """
        pass

    @abstractmethod
    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[LedgerEvent]:
        """
        Get all events for a correlation ID (e.g., one add_movement call).

        Returns:
            List of related events in chronological order
        """
        pass

    @abstractmethod
    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: UUID,
    ) -> list[LedgerEvent]:
        """
        Get all events for a specific entity.

        Args:
            entity_type: Type of entity (e.g., 'movement', 'goal')
            entity_id: The entity's ID

        Returns:
            List of events in chronological order
        """
        pass

    @abstractmethod
    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[LedgerEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass
