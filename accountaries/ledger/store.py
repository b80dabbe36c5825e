"""
Ledger Store

The single owner of ledger state and the only place it changes.

Flow for every mutation:
1. Change the movement sequence
2. Propagate the movement(s) to their destination pools
3. Recompute the budget snapshot from scratch
4. Audit every step under one correlation ID

DESIGN DECISION: Readers get copies. Nothing returned by the store
aliases the goals, accounts or movements it owns, so the only way to
change a balance is through add_movement / remove_movements.

DESIGN DECISION: The store is single-threaded. Each call runs to
completion before returning and there is no partially-updated state
to observe. A service wrapping the store must serialize calls.
"""

from decimal import Decimal
from typing import Iterable, Optional
from uuid import UUID

import structlog

from accountaries.audit import AuditLogger, create_correlation_id
from accountaries.config import get_settings
from accountaries.ledger.aggregation import compute_snapshot
from accountaries.ledger.propagation import BalancePropagator, PropagationResult
from accountaries.models.audit import LedgerEventBuilder
from accountaries.models.budget import BudgetSnapshot
from accountaries.models.ledger import (
    AutomationRule,
    BudgetEnvelope,
    Goal,
    Movement,
    RecurringTemplate,
    SavingsAccount,
)


logger = structlog.get_logger(__name__)


class LedgerStore:
    """
    In-memory ledger of movements, savings goals and savings accounts.

    Seed movements passed at construction are taken as already
    reflected in the seed goals and accounts: they are NOT propagated.
    Only movements added afterwards move balances.
    """

    def __init__(
        self,
        movements: Iterable[Movement] = (),
        goals: Iterable[Goal] = (),
        savings_accounts: Iterable[SavingsAccount] = (),
        fixed_charges: Optional[Decimal] = None,
        envelopes: Iterable[BudgetEnvelope] = (),
        rules: Iterable[AutomationRule] = (),
        recurring_templates: Iterable[RecurringTemplate] = (),
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Build the store and compute the initial snapshot.

        Args:
            movements: Seed movements, in display order
            goals: Seed savings goals
            savings_accounts: Seed savings accounts
            fixed_charges: Monthly fixed charges.
                    Defaults to LedgerSettings.fixed_charges.
            envelopes: Informational spending caps
            rules: Static keyword -> category rules
            recurring_templates: Static monthly recipes
            audit_logger: Where to report ledger events.
                    If None, only module logging happens.
        """
        if fixed_charges is None:
            fixed_charges = get_settings().ledger.fixed_charges

        self._fixed_charges = Decimal(fixed_charges)
        # Ids are unique: a repeated seed id keeps its first occurrence.
        self._movements: list[Movement] = []
        seen: set[UUID] = set()
        for movement in movements:
            if movement.id not in seen:
                seen.add(movement.id)
                self._movements.append(movement)
        self._goals: dict[UUID, Goal] = {g.id: g.model_copy() for g in goals}
        self._savings_accounts: dict[UUID, SavingsAccount] = {
            a.id: a.model_copy() for a in savings_accounts
        }
        self._envelopes: tuple[BudgetEnvelope, ...] = tuple(envelopes)
        self._rules: tuple[AutomationRule, ...] = tuple(rules)
        self._recurring_templates: tuple[RecurringTemplate, ...] = tuple(recurring_templates)
        self._audit_logger = audit_logger
        self._propagator = BalancePropagator(
            self._goals,
            self._savings_accounts,
            audit_logger=audit_logger,
        )

        correlation_id = create_correlation_id()
        if self._audit_logger:
            self._audit_logger.log(LedgerEventBuilder.ledger_initialized(
                movement_count=len(self._movements),
                goal_count=len(self._goals),
                account_count=len(self._savings_accounts),
                fixed_charges=self._fixed_charges,
                correlation_id=correlation_id,
            ))
        self._snapshot = self._recompute(correlation_id)

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def add_movement(self, movement: Movement) -> bool:
        """
        Append a movement, credit its destination, recompute the snapshot.

        The store does not validate titles or amounts; callers should
        run MovementValidator first.

        Returns:
            False if a movement with the same id is already in the
            ledger. Nothing changes in that case.
        """
        correlation_id = create_correlation_id()

        if self.get_movement(movement.id) is not None:
            if self._audit_logger:
                self._audit_logger.log(LedgerEventBuilder.duplicate_skipped(
                    movement_id=movement.id,
                    correlation_id=correlation_id,
                ))
            else:
                logger.warning("duplicate_skipped", movement_id=str(movement.id))
            return False

        self._movements.append(movement)
        if self._audit_logger:
            self._audit_logger.log(LedgerEventBuilder.movement_added(
                movement_id=movement.id,
                effective_type=movement.effective_type.value,
                amount=movement.amount,
                correlation_id=correlation_id,
            ))

        self._propagate(movement, adding=True, correlation_id=correlation_id)
        self._snapshot = self._recompute(correlation_id)
        return True

    def remove_movements(self, ids: Iterable[UUID]) -> list[Movement]:
        """
        Remove the movements with the given ids.

        Removed movements are reversed in ledger order, then the
        snapshot is recomputed once for the whole batch. Unknown ids
        are ignored and repeated ids only remove once.

        Returns:
            The removed movements, in ledger order
        """
        wanted = set(ids)
        positions = [
            index for index, movement in enumerate(self._movements)
            if movement.id in wanted
        ]
        return self._remove(positions, selector=f"ids={sorted(str(i) for i in wanted)}")

    def remove_movements_at(self, positions: Iterable[int]) -> list[Movement]:
        """
        Remove the movements at the given positions in the current sequence.

        Same contract as remove_movements. Out-of-range positions are ignored.
        """
        count = len(self._movements)
        valid = sorted({p for p in positions if 0 <= p < count})
        return self._remove(valid, selector=f"positions={valid}")

    def add_goal(self, goal: Goal) -> None:
        """Register a new savings goal. Its saved amount is kept as given."""
        self._goals[goal.id] = goal.model_copy()
        if self._audit_logger:
            self._audit_logger.log(LedgerEventBuilder.pool_added(
                entity_type="goal",
                entity_id=goal.id,
                name=goal.name,
            ))

    def add_savings_account(self, account: SavingsAccount) -> None:
        """Register a new savings account. Its balance is kept as given."""
        self._savings_accounts[account.id] = account.model_copy()
        if self._audit_logger:
            self._audit_logger.log(LedgerEventBuilder.pool_added(
                entity_type="savings_account",
                entity_id=account.id,
                name=account.name,
            ))

    # =========================================================================
    # READ ACCESSORS
    # =========================================================================

    @property
    def fixed_charges(self) -> Decimal:
        return self._fixed_charges

    def current_snapshot(self) -> BudgetSnapshot:
        return self._snapshot

    def current_movements(self) -> tuple[Movement, ...]:
        """Movements in insertion order. Movements are frozen, so no copy is needed."""
        return tuple(self._movements)

    def current_goals(self) -> tuple[Goal, ...]:
        return tuple(g.model_copy() for g in self._goals.values())

    def current_savings_accounts(self) -> tuple[SavingsAccount, ...]:
        return tuple(a.model_copy() for a in self._savings_accounts.values())

    def current_envelopes(self) -> tuple[BudgetEnvelope, ...]:
        return tuple(e.model_copy() for e in self._envelopes)

    def current_rules(self) -> tuple[AutomationRule, ...]:
        return tuple(r.model_copy() for r in self._rules)

    def current_recurring_templates(self) -> tuple[RecurringTemplate, ...]:
        return tuple(t.model_copy() for t in self._recurring_templates)

    def get_goal(self, goal_id: UUID) -> Optional[Goal]:
        goal = self._goals.get(goal_id)
        return goal.model_copy() if goal is not None else None

    def get_savings_account(self, account_id: UUID) -> Optional[SavingsAccount]:
        account = self._savings_accounts.get(account_id)
        return account.model_copy() if account is not None else None

    def get_movement(self, movement_id: UUID) -> Optional[Movement]:
        for movement in self._movements:
            if movement.id == movement_id:
                return movement
        return None

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _remove(self, positions: list[int], selector: str) -> list[Movement]:
        correlation_id = create_correlation_id()

        if not positions:
            if self._audit_logger:
                self._audit_logger.log(LedgerEventBuilder.removal_skipped(
                    selector=selector,
                    correlation_id=correlation_id,
                ))
            return []

        doomed = set(positions)
        removed = [self._movements[p] for p in positions]
        self._movements = [
            m for index, m in enumerate(self._movements) if index not in doomed
        ]

        for movement in removed:
            if self._audit_logger:
                self._audit_logger.log(LedgerEventBuilder.movement_removed(
                    movement_id=movement.id,
                    effective_type=movement.effective_type.value,
                    amount=movement.amount,
                    correlation_id=correlation_id,
                ))
            self._propagate(movement, adding=False, correlation_id=correlation_id)

        self._snapshot = self._recompute(correlation_id)
        return removed

    def _propagate(
        self,
        movement: Movement,
        adding: bool,
        correlation_id: UUID,
    ) -> Optional[PropagationResult]:
        result = self._propagator.apply(movement, adding=adding, correlation_id=correlation_id)
        # Without an audit logger the propagator reports nothing itself
        if result is not None and self._audit_logger is None:
            if not result.found:
                logger.warning(
                    "destination_not_found",
                    movement_id=str(result.movement_id),
                    target_id=str(result.target_id),
                    kind=result.kind.value,
                )
            elif result.clamped:
                logger.warning(
                    "balance_clamped",
                    movement_id=str(result.movement_id),
                    target_id=str(result.target_id),
                    before=str(result.before),
                )
        return result

    def _recompute(self, correlation_id: UUID) -> BudgetSnapshot:
        snapshot = compute_snapshot(self._movements, self._fixed_charges)
        if self._audit_logger:
            self._audit_logger.log(LedgerEventBuilder.snapshot_recomputed(
                snapshot_fields=snapshot.to_log_dict(),
                movement_count=len(self._movements),
                correlation_id=correlation_id,
            ))
        else:
            logger.debug(
                "snapshot_recomputed",
                movement_count=len(self._movements),
                **snapshot.to_log_dict(),
            )
        return snapshot
