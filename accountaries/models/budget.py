"""
Budget Snapshot Model

The snapshot is the aggregate budget state for the month.

CRITICAL: A snapshot is never patched. The ledger store builds a new
one from the full movement set after every mutation, so the same set
of movements always yields the same snapshot.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from accountaries.ledger import formulas


class BudgetSnapshot(BaseModel):
    """
    Monthly budget totals.

    R  = revenues
    CF = fixed charges (configuration, not derived from movements)
    DV = variable expenses
    EV = savings towards goals
    EL = savings into savings accounts
    """
    model_config = ConfigDict(frozen=True)

    revenues: Decimal = Field(default=Decimal("0"))
    fixed_charges: Decimal = Field(default=Decimal("0"))
    variable_expenses: Decimal = Field(default=Decimal("0"))
    goal_savings: Decimal = Field(default=Decimal("0"))
    account_savings: Decimal = Field(default=Decimal("0"))

    @property
    def total_savings(self) -> Decimal:
        """ET = EV + EL"""
        return formulas.total_savings(self)

    @property
    def max_spending_after_savings(self) -> Decimal:
        """DMAX = R - CF - ET"""
        return formulas.max_spending_after_savings(self)

    @property
    def max_to_savings_account(self) -> Decimal:
        """LMAX = R - CF - DV - EV"""
        return formulas.max_to_savings_account(self)

    @property
    def estimated_reste_a_vivre(self) -> Decimal:
        """RV = R - CF - DV - ET"""
        return formulas.estimated_reste_a_vivre(self)

    @property
    def total_spending(self) -> Decimal:
        """CF + DV"""
        return formulas.total_spending(self)

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.

        Decimals are rendered as strings so no precision is lost.
        """
        return {
            "revenues": str(self.revenues),
            "fixed_charges": str(self.fixed_charges),
            "variable_expenses": str(self.variable_expenses),
            "goal_savings": str(self.goal_savings),
            "account_savings": str(self.account_savings),
            "total_savings": str(self.total_savings),
            "max_spending_after_savings": str(self.max_spending_after_savings),
            "max_to_savings_account": str(self.max_to_savings_account),
            "estimated_reste_a_vivre": str(self.estimated_reste_a_vivre),
        }
