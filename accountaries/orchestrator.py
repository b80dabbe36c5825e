"""
Ledger Wiring

Entry point for the presentation layer. It builds a ledger store with
its audit trail, plus the validator and query helpers bound to it.

DESIGN DECISION: The presentation layer only talks to the objects
returned here. It validates with MovementValidator, mutates through
LedgerStore, and reads through LedgerStore or LedgerQueries.
"""

from decimal import Decimal
from typing import Iterable, NamedTuple, Optional

from accountaries.audit import AuditLogger
from accountaries.config import get_settings
from accountaries.ledger.store import LedgerStore
from accountaries.models.ledger import (
    AutomationRule,
    BudgetEnvelope,
    Goal,
    Movement,
    RecurringTemplate,
    SavingsAccount,
)
from accountaries.queries import LedgerQueries
from accountaries.storage import InMemoryAuditStorage
from accountaries.validation import MovementValidator


class LedgerComponents(NamedTuple):
    store: LedgerStore
    validator: MovementValidator
    queries: LedgerQueries
    audit_logger: AuditLogger


def initialize(
    seed_movements: Iterable[Movement] = (),
    seed_goals: Iterable[Goal] = (),
    seed_savings_accounts: Iterable[SavingsAccount] = (),
    fixed_charges: Optional[Decimal] = None,
    envelopes: Iterable[BudgetEnvelope] = (),
    rules: Iterable[AutomationRule] = (),
    recurring_templates: Iterable[RecurringTemplate] = (),
    keep_audit_trail: bool = True,
) -> LedgerStore:
    """
    Build a ledger store and compute its initial snapshot.

    Args:
        seed_movements: Movements already on the books
        seed_goals: Savings goals, with their current saved amounts
        seed_savings_accounts: Savings accounts, with their current balances
        fixed_charges: Monthly fixed charges (defaults to settings)
        keep_audit_trail: Keep audit events in memory.
                    Set to False for local-only logging.
    """
    return create_ledger_components(
        seed_movements=seed_movements,
        seed_goals=seed_goals,
        seed_savings_accounts=seed_savings_accounts,
        fixed_charges=fixed_charges,
        envelopes=envelopes,
        rules=rules,
        recurring_templates=recurring_templates,
        keep_audit_trail=keep_audit_trail,
    ).store


def create_ledger_components(
    seed_movements: Iterable[Movement] = (),
    seed_goals: Iterable[Goal] = (),
    seed_savings_accounts: Iterable[SavingsAccount] = (),
    fixed_charges: Optional[Decimal] = None,
    envelopes: Iterable[BudgetEnvelope] = (),
    rules: Iterable[AutomationRule] = (),
    recurring_templates: Iterable[RecurringTemplate] = (),
    keep_audit_trail: bool = True,
) -> LedgerComponents:
    """
    Factory function to create all ledger components.

    Returns:
        LedgerComponents(store, validator, queries, audit_logger)
    """
    settings = get_settings()

    audit_storage = InMemoryAuditStorage() if keep_audit_trail else None
    audit_logger = AuditLogger(
        audit_storage,
        persist_debug=settings.app.debug_mode,
    )

    store = LedgerStore(
        movements=seed_movements,
        goals=seed_goals,
        savings_accounts=seed_savings_accounts,
        fixed_charges=fixed_charges,
        envelopes=envelopes,
        rules=rules,
        recurring_templates=recurring_templates,
        audit_logger=audit_logger,
    )

    return LedgerComponents(
        store=store,
        validator=MovementValidator(store),
        queries=LedgerQueries(store),
        audit_logger=audit_logger,
    )
