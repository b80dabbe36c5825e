"""
Property-based tests for the ledger invariants.

Properties checked:
- Each snapshot total equals the sum of the matching movements
- The snapshot depends only on the final movement set
- add then remove restores balances and the snapshot
- Goal and account balances never go below zero
"""

from decimal import Decimal

from hypothesis import given, settings
from hypothesis import strategies as st

from accountaries.ledger.store import LedgerStore
from accountaries.models.ledger import (
    DestinationKind,
    Goal,
    GoalDestination,
    Movement,
    MovementType,
    SavingsAccount,
    SavingsDestination,
)


GOALS = (
    Goal(name="Vacances", target=Decimal("1500"), saved=Decimal("400")),
    Goal(name="Coussin", target=Decimal("3000"), saved=Decimal("0")),
)
ACCOUNTS = (
    SavingsAccount(name="Livret A", balance=Decimal("100"), annual_yield=Decimal("0.03")),
    SavingsAccount(name="PEP", balance=Decimal("0"), annual_yield=Decimal("0.025")),
)

amounts = st.decimals(
    min_value=Decimal("0"),
    max_value=Decimal("100000"),
    places=2,
    allow_nan=False,
    allow_infinity=False,
)

destinations = st.one_of(
    st.none(),
    st.sampled_from(GOALS).map(lambda g: GoalDestination(goal_id=g.id)),
    st.sampled_from(ACCOUNTS).map(lambda a: SavingsDestination(account_id=a.id)),
)


@st.composite
def movements(draw):
    """Generate a movement, possibly mislabelled or pointing at a pool."""
    return Movement(
        type=draw(st.sampled_from(list(MovementType))),
        title=draw(st.sampled_from(["Salaire", "Loyer", "Carrefour", "Épargne"])),
        amount=draw(amounts),
        category=draw(st.sampled_from(["Revenus", "Courses", "Épargne"])),
        destination=draw(destinations),
    )


def fresh_store(seed=()):
    return LedgerStore(
        movements=seed,
        goals=GOALS,
        savings_accounts=ACCOUNTS,
        fixed_charges=Decimal("1400"),
    )


def expected_totals(ledger):
    totals = {
        "revenues": Decimal("0"),
        "variable_expenses": Decimal("0"),
        "goal_savings": Decimal("0"),
        "account_savings": Decimal("0"),
    }
    for m in ledger:
        if m.effective_type == MovementType.INCOME:
            totals["revenues"] += m.amount
        elif m.effective_type == MovementType.EXPENSE:
            totals["variable_expenses"] += m.amount
        elif m.destination is not None and m.destination.kind == DestinationKind.GOAL:
            totals["goal_savings"] += m.amount
        elif m.destination is not None:
            totals["account_savings"] += m.amount
    return totals


@settings(
    max_examples=75,
    deadline=None,
)
@given(
    added=st.lists(movements(), max_size=15),
    removal_mask=st.lists(st.booleans(), max_size=15),
)
def test_snapshot_matches_movement_sums(added, removal_mask):
    """Every total is the sum of the movements of its effective type."""
    store = fresh_store()
    for m in added:
        store.add_movement(m)
    to_remove = [m.id for m, drop in zip(added, removal_mask) if drop]
    store.remove_movements(to_remove)

    snapshot = store.current_snapshot()
    totals = expected_totals(store.current_movements())
    assert snapshot.revenues == totals["revenues"]
    assert snapshot.variable_expenses == totals["variable_expenses"]
    assert snapshot.goal_savings == totals["goal_savings"]
    assert snapshot.account_savings == totals["account_savings"]
    assert snapshot.fixed_charges == Decimal("1400")


@settings(
    max_examples=75,
    deadline=None,
)
@given(
    kept=st.lists(movements(), max_size=10),
    churn=st.lists(movements(), max_size=10),
    data=st.data(),
)
def test_snapshot_independent_of_history(kept, churn, data):
    """Adding and removing extra movements leaves the same snapshot as never adding them."""
    direct = fresh_store()
    for m in kept:
        direct.add_movement(m)

    shuffled = data.draw(st.permutations(kept + churn))
    noisy = fresh_store()
    for m in shuffled:
        noisy.add_movement(m)
    noisy.remove_movements([m.id for m in churn])

    assert noisy.current_snapshot() == direct.current_snapshot()


@settings(
    max_examples=75,
    deadline=None,
)
@given(seed=st.lists(movements(), max_size=8), movement=movements())
def test_add_then_remove_round_trip(seed, movement):
    """add_movement followed by remove_movements restores pools and snapshot."""
    store = fresh_store(seed)
    snapshot_before = store.current_snapshot()
    goals_before = store.current_goals()
    accounts_before = store.current_savings_accounts()

    store.add_movement(movement)
    store.remove_movements([movement.id])

    assert store.current_snapshot() == snapshot_before
    assert [g.saved for g in store.current_goals()] == [g.saved for g in goals_before]
    assert [a.balance for a in store.current_savings_accounts()] == [
        a.balance for a in accounts_before
    ]


@settings(
    max_examples=75,
    deadline=None,
)
@given(
    seed=st.lists(movements(), max_size=10),
    added=st.lists(movements(), max_size=10),
    data=st.data(),
)
def test_balances_never_negative(seed, added, data):
    """Any mix of adds and removals keeps every pool at or above zero."""
    store = fresh_store(seed)
    for m in added:
        store.add_movement(m)
        assert all(g.saved >= 0 for g in store.current_goals())
        assert all(a.balance >= 0 for a in store.current_savings_accounts())

    ids = [m.id for m in store.current_movements()]
    if ids:
        to_remove = data.draw(st.lists(st.sampled_from(ids), max_size=len(ids)))
        store.remove_movements(to_remove)

    assert all(g.saved >= 0 for g in store.current_goals())
    assert all(a.balance >= 0 for a in store.current_savings_accounts())
