"""
Budget Aggregation

Builds a BudgetSnapshot from the full movement set in one linear scan.

GUARANTEES:
- Total: every movement set produces a snapshot
- Deterministic: only the set of movements matters, not the order
  in which they were added or removed
- Fixed charges are passed through, never derived from movements
"""

from decimal import Decimal
from typing import Iterable

from accountaries.models.budget import BudgetSnapshot
from accountaries.models.ledger import DestinationKind, Movement, MovementType


def compute_snapshot(
    movements: Iterable[Movement],
    fixed_charges: Decimal,
) -> BudgetSnapshot:
    """
    Classify each movement by its effective type and sum the amounts.

    income   -> revenues
    expense  -> variable expenses
    transfer -> goal savings or account savings, by destination kind

    A transfer without destination adds to nothing.
    """
    revenues = Decimal("0")
    variable_expenses = Decimal("0")
    goal_savings = Decimal("0")
    account_savings = Decimal("0")

    for movement in movements:
        effective_type = movement.effective_type
        if effective_type == MovementType.INCOME:
            revenues += movement.amount
        elif effective_type == MovementType.EXPENSE:
            variable_expenses += movement.amount
        elif movement.destination is not None:
            if movement.destination.kind == DestinationKind.GOAL:
                goal_savings += movement.amount
            else:
                account_savings += movement.amount

    return BudgetSnapshot(
        revenues=revenues,
        fixed_charges=fixed_charges,
        variable_expenses=variable_expenses,
        goal_savings=goal_savings,
        account_savings=account_savings,
    )
