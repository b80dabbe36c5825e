"""
Shared fixtures.

The seed mirrors the demo ledger of the desktop app: a salary, rent,
groceries, and two monthly transfers into a goal and a savings account.
"""

from datetime import date
from decimal import Decimal

import pytest

from accountaries.config import get_settings
from accountaries.ledger.store import LedgerStore
from accountaries.models.ledger import (
    AutomationRule,
    BudgetEnvelope,
    Goal,
    Movement,
    MovementType,
    RecurringTemplate,
    SavingsAccount,
    to_goal,
    to_savings,
)


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Settings come from defaults unless a test overrides the environment."""
    for name in ("LEDGER_FIXED_CHARGES", "LEDGER_MAX_MOVEMENT_AMOUNT",
                 "LEDGER_AUDIT_HISTORY_LIMIT", "DEBUG_MODE"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def vacances():
    return Goal(
        name="Vacances",
        target=Decimal("1500"),
        deadline=date(2026, 6, 30),
        saved=Decimal("400"),
    )


@pytest.fixture
def coussin():
    return Goal(name="Coussin de sécurité", target=Decimal("3000"), saved=Decimal("1200"))


@pytest.fixture
def livret_a():
    return SavingsAccount(name="Livret A", balance=Decimal("2500"), annual_yield=Decimal("0.03"))


@pytest.fixture
def pep():
    return SavingsAccount(name="PEP", balance=Decimal("6800"), annual_yield=Decimal("0.025"))


@pytest.fixture
def salary():
    return Movement(
        type=MovementType.INCOME,
        title="Salaire",
        amount=Decimal("2800"),
        category="Revenus",
        periodicity="Mensuel",
    )


@pytest.fixture
def rent():
    return Movement(
        type=MovementType.EXPENSE,
        title="Loyer",
        amount=Decimal("900"),
        category="Charges fixes",
        periodicity="Mensuel",
    )


@pytest.fixture
def groceries():
    return Movement(
        type=MovementType.EXPENSE,
        title="Carrefour",
        amount=Decimal("80"),
        category="Courses",
    )


@pytest.fixture
def envelopes():
    return [
        BudgetEnvelope(category="Courses", cap=Decimal("250"), spent=Decimal("180")),
        BudgetEnvelope(category="Sorties", cap=Decimal("120"), spent=Decimal("110")),
        BudgetEnvelope(category="Transports", cap=Decimal("80"), spent=Decimal("40")),
        BudgetEnvelope(category="Loisirs", cap=Decimal("100"), spent=Decimal("130")),
    ]


@pytest.fixture
def rules():
    return [
        AutomationRule(keyword="Amazon", category="Achats"),
        AutomationRule(keyword="Carrefour", category="Courses"),
        AutomationRule(keyword="SNCF", category="Transports"),
    ]


@pytest.fixture
def recurring_templates():
    return [
        RecurringTemplate(title="Salaire", amount=Decimal("2800"), category="Revenus", day_of_month=1),
        RecurringTemplate(title="Loyer", amount=Decimal("900"), category="Charges fixes", day_of_month=5),
    ]


@pytest.fixture
def demo_store(vacances, coussin, livret_a, pep, salary, rent, groceries,
               envelopes, rules, recurring_templates):
    """The full demo ledger with transfers seeded (not propagated)."""
    movements = [
        salary,
        rent,
        groceries,
        Movement(
            type=MovementType.TRANSFER,
            title="Épargne vacances",
            amount=Decimal("200"),
            category="Épargne",
            periodicity="Mensuel",
            destination=to_goal(vacances),
        ),
        Movement(
            type=MovementType.TRANSFER,
            title="Transfert livret",
            amount=Decimal("150"),
            category="Épargne",
            periodicity="Mensuel",
            destination=to_savings(livret_a),
        ),
    ]
    return LedgerStore(
        movements=movements,
        goals=[vacances, coussin],
        savings_accounts=[livret_a, pep],
        fixed_charges=Decimal("1400"),
        envelopes=envelopes,
        rules=rules,
        recurring_templates=recurring_templates,
    )
