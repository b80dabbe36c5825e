"""
Balance Propagation

Keeps Goal.saved and SavingsAccount.balance consistent with the
transfer movements that target them.

RULES:
- Adding a movement credits its destination, removing it debits it.
- The result is floored at zero. A reversal that would underflow is
  absorbed, not raised.
- A destination that no longer resolves is a no-op. The core has no
  way to delete goals or accounts, so this only happens if a caller
  builds a dangling reference by hand.
"""

from decimal import Decimal
from typing import Optional, Union
from uuid import UUID

from pydantic import BaseModel

from accountaries.audit import AuditLogger
from accountaries.models.audit import LedgerEventBuilder
from accountaries.models.ledger import (
    DestinationKind,
    Goal,
    Movement,
    SavingsAccount,
)


class PropagationResult(BaseModel):
    """What a single propagation did."""

    movement_id: UUID
    kind: DestinationKind
    target_id: UUID
    found: bool
    before: Optional[Decimal] = None
    after: Optional[Decimal] = None
    clamped: bool = False


class BalancePropagator:
    """
    Applies the effect of a movement to its destination pool.

    The propagator does not own the pools. It works on the dicts the
    ledger store hands it, looking targets up by id.
    """

    def __init__(
        self,
        goals: dict[UUID, Goal],
        savings_accounts: dict[UUID, SavingsAccount],
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._goals = goals
        self._savings_accounts = savings_accounts
        self._audit_logger = audit_logger

    def apply(
        self,
        movement: Movement,
        adding: bool,
        correlation_id: Optional[UUID] = None,
    ) -> Optional[PropagationResult]:
        """
        Credit (adding=True) or debit (adding=False) the movement's destination.

        Returns None when the movement has no destination. The ledger store
        reads the result to log clamps and missing targets when it has no
        audit logger.
        """
        destination = movement.destination
        if destination is None:
            return None

        kind = DestinationKind(destination.kind)
        entity_type = "goal" if kind == DestinationKind.GOAL else "savings_account"
        target = self._lookup(kind, destination.target_id)

        if target is None:
            if self._audit_logger:
                self._audit_logger.log(LedgerEventBuilder.destination_not_found(
                    entity_type=entity_type,
                    entity_id=destination.target_id,
                    movement_id=movement.id,
                    correlation_id=correlation_id,
                ))
            return PropagationResult(
                movement_id=movement.id,
                kind=kind,
                target_id=destination.target_id,
                found=False,
            )

        delta = movement.amount if adding else -movement.amount
        before = self._read(target)
        unclamped = before + delta
        after = max(Decimal("0"), unclamped)
        self._write(target, after)

        if self._audit_logger:
            if unclamped < 0:
                event = LedgerEventBuilder.balance_clamped(
                    entity_type=entity_type,
                    entity_id=target.id,
                    before=before,
                    unclamped=unclamped,
                    correlation_id=correlation_id,
                )
            else:
                event = LedgerEventBuilder.balance_applied(
                    entity_type=entity_type,
                    entity_id=target.id,
                    before=before,
                    after=after,
                    correlation_id=correlation_id,
                )
            self._audit_logger.log(event)

        return PropagationResult(
            movement_id=movement.id,
            kind=kind,
            target_id=target.id,
            found=True,
            before=before,
            after=after,
            clamped=unclamped < 0,
        )

    def _lookup(
        self,
        kind: DestinationKind,
        target_id: UUID,
    ) -> Optional[Union[Goal, SavingsAccount]]:
        if kind == DestinationKind.GOAL:
            return self._goals.get(target_id)
        return self._savings_accounts.get(target_id)

    @staticmethod
    def _read(target: Union[Goal, SavingsAccount]) -> Decimal:
        if isinstance(target, Goal):
            return target.saved
        return target.balance

    @staticmethod
    def _write(target: Union[Goal, SavingsAccount], value: Decimal) -> None:
        if isinstance(target, Goal):
            target.saved = value
        else:
            target.balance = value
