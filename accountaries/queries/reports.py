"""
Ledger Queries

Read-only reports over a ledger store, feeding the dashboard,
movement list, charts and envelope views.

DESIGN DECISION: Queries are DETERMINISTIC and work on the store's
current state only. They never change the ledger and never estimate:
every number comes from the movements, pools or envelopes as stored.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from accountaries.ledger.store import LedgerStore
from accountaries.models.ledger import (
    AutomationRule,
    BudgetEnvelope,
    DestinationKind,
    EnvelopeStatus,
    Movement,
    MovementType,
)


class MovementFilter(BaseModel):
    """Filters for listing movements. Unset fields match everything."""

    effective_type: Optional[MovementType] = None
    category: Optional[str] = Field(
        default=None,
        description="Category, matched case-insensitively"
    )
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    destination_kind: Optional[DestinationKind] = None
    limit: Optional[int] = Field(default=None, ge=1)

    @model_validator(mode='after')
    def validate_dates(self) -> 'MovementFilter':
        if self.date_from and self.date_to and self.date_to < self.date_from:
            raise ValueError("date_to cannot be before date_from")
        return self

    def matches(self, movement: Movement) -> bool:
        if self.effective_type and movement.effective_type != self.effective_type:
            return False
        if self.category and movement.category.casefold() != self.category.casefold():
            return False
        if self.date_from and movement.date < self.date_from:
            return False
        if self.date_to and movement.date > self.date_to:
            return False
        if self.destination_kind:
            if movement.destination is None:
                return False
            if movement.destination.kind != self.destination_kind:
                return False
        return True


class DashboardSummary(BaseModel):
    """Monthly summary cards and end-of-month forecast."""

    revenues: Decimal
    total_spending: Decimal
    total_savings: Decimal
    estimated_reste_a_vivre: Decimal
    max_spending_after_savings: Decimal


class LedgerQueries:
    """
    Executes read-only queries against a ledger store.

    GUARANTEES:
    - Only returns real data from the store
    - Never mutates the store
    - Exact Decimal totals (rounding is a display concern)
    """

    def __init__(self, store: LedgerStore):
        self._store = store

    def list_movements(
        self,
        movement_filter: Optional[MovementFilter] = None,
    ) -> list[Movement]:
        """Movements matching the filter, in ledger order."""
        movement_filter = movement_filter or MovementFilter()
        results = [
            m for m in self._store.current_movements()
            if movement_filter.matches(m)
        ]
        if movement_filter.limit is not None:
            results = results[:movement_filter.limit]
        return results

    def totals_by_category(
        self,
        effective_type: MovementType = MovementType.EXPENSE,
    ) -> list[tuple[str, Decimal]]:
        """
        Sum of amounts per category for one effective type.

        Returns (category, total) pairs, largest first. Ties keep the
        order in which categories first appear in the ledger.
        """
        totals: dict[str, Decimal] = {}
        for movement in self._store.current_movements():
            if movement.effective_type != effective_type:
                continue
            totals[movement.category] = (
                totals.get(movement.category, Decimal("0")) + movement.amount
            )
        return sorted(totals.items(), key=lambda item: item[1], reverse=True)

    def envelopes_to_watch(self, limit: int = 3) -> list[BudgetEnvelope]:
        """The first `limit` envelopes, as shown on the dashboard."""
        return list(self._store.current_envelopes()[:max(0, limit)])

    def envelope_alerts(self) -> list[BudgetEnvelope]:
        """Envelopes close to or over their cap."""
        return [
            e for e in self._store.current_envelopes()
            if e.status != EnvelopeStatus.OK
        ]

    def matching_rules(self, title: str) -> list[AutomationRule]:
        """Rules that would catch this title. Nothing is applied."""
        return [r for r in self._store.current_rules() if r.matches(title)]

    def dashboard_summary(self) -> DashboardSummary:
        snapshot = self._store.current_snapshot()
        return DashboardSummary(
            revenues=snapshot.revenues,
            total_spending=snapshot.total_spending,
            total_savings=snapshot.total_savings,
            estimated_reste_a_vivre=snapshot.estimated_reste_a_vivre,
            max_spending_after_savings=snapshot.max_spending_after_savings,
        )
