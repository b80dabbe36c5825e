"""
Derived Budget Formulas

Pure functions over a BudgetSnapshot. No state, no side effects.

IMPORTANT: Plain Decimal arithmetic only. Nothing here rounds;
rounding to whole currency units is a display concern.
"""

from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from accountaries.models.budget import BudgetSnapshot


def total_savings(snapshot: "BudgetSnapshot") -> Decimal:
    """ET = EV + EL"""
    return snapshot.goal_savings + snapshot.account_savings


def max_spending_after_savings(snapshot: "BudgetSnapshot") -> Decimal:
    """DMAX = R - CF - ET: what can still be spent once savings are set aside."""
    return snapshot.revenues - snapshot.fixed_charges - total_savings(snapshot)


def max_to_savings_account(snapshot: "BudgetSnapshot") -> Decimal:
    """LMAX = R - CF - DV - EV: what could still go to savings accounts."""
    return (
        snapshot.revenues
        - snapshot.fixed_charges
        - snapshot.variable_expenses
        - snapshot.goal_savings
    )


def estimated_reste_a_vivre(snapshot: "BudgetSnapshot") -> Decimal:
    """RV = R - CF - DV - ET: estimated disposable income left for the month."""
    return (
        snapshot.revenues
        - snapshot.fixed_charges
        - snapshot.variable_expenses
        - total_savings(snapshot)
    )


def total_spending(snapshot: "BudgetSnapshot") -> Decimal:
    """CF + DV"""
    return snapshot.fixed_charges + snapshot.variable_expenses
