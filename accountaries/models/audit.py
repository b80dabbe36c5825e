"""
Audit Models for the Ledger Core

Every ledger mutation is logged for audit purposes.
This provides:
1. Traceability of every movement added or removed
2. Visibility on absorbed inconsistencies (clamped balances, missing targets)
3. A way to follow one user action through all its effects

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class LedgerEventType(str, Enum):
    """Types of events we audit."""
    # Lifecycle
    LEDGER_INITIALIZED = "ledger_initialized"
    GOAL_ADDED = "goal_added"
    SAVINGS_ACCOUNT_ADDED = "savings_account_added"

    # Movements
    MOVEMENT_ADDED = "movement_added"
    MOVEMENT_REMOVED = "movement_removed"
    DUPLICATE_SKIPPED = "duplicate_skipped"
    REMOVAL_SKIPPED = "removal_skipped"

    # Balance propagation
    BALANCE_APPLIED = "balance_applied"
    BALANCE_CLAMPED = "balance_clamped"
    DESTINATION_NOT_FOUND = "destination_not_found"

    # Aggregation
    SNAPSHOT_RECOMPUTED = "snapshot_recomputed"


class LedgerEventSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LedgerEvent(BaseModel):
    """
    A single audit event.

    Every significant ledger action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: LedgerEventType = Field(
        ...,
        description="Type of event"
    )
    severity: LedgerEventSeverity = Field(
        default=LedgerEventSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'movement', 'goal', 'savings_account')"
    )
    entity_id: Optional[UUID] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - all events caused by one add/remove call share it
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
        }


class LedgerEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = LedgerEventBuilder.movement_added(movement_id, "income", amount, cid)
        event = LedgerEventBuilder.balance_clamped("goal", goal_id, ...)
    """

    @staticmethod
    def ledger_initialized(
        movement_count: int,
        goal_count: int,
        account_count: int,
        fixed_charges: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.LEDGER_INITIALIZED,
            entity_type="ledger",
            correlation_id=correlation_id,
            description=(
                f"Ledger initialized with {movement_count} movements, "
                f"{goal_count} goals and {account_count} savings accounts"
            ),
            details={
                "movement_count": movement_count,
                "goal_count": goal_count,
                "account_count": account_count,
                "fixed_charges": str(fixed_charges),
            },
        )

    @staticmethod
    def pool_added(
        entity_type: str,
        entity_id: UUID,
        name: str,
        correlation_id: Optional[UUID] = None,
    ) -> LedgerEvent:
        event_type = (
            LedgerEventType.GOAL_ADDED
            if entity_type == "goal"
            else LedgerEventType.SAVINGS_ACCOUNT_ADDED
        )
        return LedgerEvent(
            event_type=event_type,
            entity_type=entity_type,
            entity_id=entity_id,
            correlation_id=correlation_id,
            description=f"{entity_type.replace('_', ' ').capitalize()} added: {name}",
            details={"name": name},
        )

    @staticmethod
    def movement_added(
        movement_id: UUID,
        effective_type: str,
        amount: Decimal,
        correlation_id: UUID,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.MOVEMENT_ADDED,
            entity_type="movement",
            entity_id=movement_id,
            correlation_id=correlation_id,
            description=f"Movement added: {effective_type} of {amount}",
            details={
                "effective_type": effective_type,
                "amount": str(amount),
            },
        )

    @staticmethod
    def movement_removed(
        movement_id: UUID,
        effective_type: str,
        amount: Decimal,
        correlation_id: UUID,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.MOVEMENT_REMOVED,
            entity_type="movement",
            entity_id=movement_id,
            correlation_id=correlation_id,
            description=f"Movement removed: {effective_type} of {amount}",
            details={
                "effective_type": effective_type,
                "amount": str(amount),
            },
        )

    @staticmethod
    def removal_skipped(
        selector: str,
        correlation_id: UUID,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.REMOVAL_SKIPPED,
            severity=LedgerEventSeverity.DEBUG,
            entity_type="movement",
            correlation_id=correlation_id,
            description=f"Nothing to remove for {selector}",
            details={"selector": selector},
        )

    @staticmethod
    def duplicate_skipped(
        movement_id: UUID,
        correlation_id: UUID,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.DUPLICATE_SKIPPED,
            severity=LedgerEventSeverity.WARNING,
            entity_type="movement",
            entity_id=movement_id,
            correlation_id=correlation_id,
            description=f"Movement {movement_id} is already in the ledger, not added again",
        )

    @staticmethod
    def balance_applied(
        entity_type: str,
        entity_id: UUID,
        before: Decimal,
        after: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.BALANCE_APPLIED,
            entity_type=entity_type,
            entity_id=entity_id,
            correlation_id=correlation_id,
            description=f"{entity_type} balance moved from {before} to {after}",
            details={
                "before": str(before),
                "after": str(after),
            },
        )

    @staticmethod
    def balance_clamped(
        entity_type: str,
        entity_id: UUID,
        before: Decimal,
        unclamped: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.BALANCE_CLAMPED,
            severity=LedgerEventSeverity.WARNING,
            entity_type=entity_type,
            entity_id=entity_id,
            correlation_id=correlation_id,
            description=f"{entity_type} balance would be {unclamped}, floored to 0",
            details={
                "before": str(before),
                "unclamped": str(unclamped),
                "after": "0",
            },
        )

    @staticmethod
    def destination_not_found(
        entity_type: str,
        entity_id: UUID,
        movement_id: UUID,
        correlation_id: Optional[UUID] = None,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.DESTINATION_NOT_FOUND,
            severity=LedgerEventSeverity.WARNING,
            entity_type=entity_type,
            entity_id=entity_id,
            correlation_id=correlation_id,
            description=f"Movement destination not found: {entity_type} {entity_id}",
            details={"movement_id": str(movement_id)},
        )

    @staticmethod
    def snapshot_recomputed(
        snapshot_fields: dict,
        movement_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.SNAPSHOT_RECOMPUTED,
            severity=LedgerEventSeverity.DEBUG,
            entity_type="snapshot",
            correlation_id=correlation_id,
            description=f"Budget snapshot recomputed from {movement_count} movements",
            details=snapshot_fields,
        )
