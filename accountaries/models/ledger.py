"""
Ledger Entity Models

These models define the records the ledger core works with:
movements, savings goals, savings accounts, budget envelopes,
automation rules and recurring templates.

DESIGN DECISION: All money is Decimal. Floats never enter the ledger,
so sums are exact and no rounding happens between steps.

DESIGN DECISION: A movement's destination is a tagged union
(goal OR savings account). A movement can never target both,
and it only holds the target's id, never the target itself.
"""

import datetime
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Annotated, Literal, Optional, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS
# =============================================================================

class MovementType(str, Enum):
    """Nominal type of a movement."""
    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class DestinationKind(str, Enum):
    """What a transfer movement feeds."""
    GOAL = "goal"
    SAVINGS = "savings"


class EnvelopeStatus(str, Enum):
    """
    Spending status of a budget envelope.

    ok      - less than 80% of the cap spent
    warning - between 80% and 100% of the cap spent
    over    - the cap is reached or exceeded
    """
    OK = "ok"
    WARNING = "warning"
    OVER = "over"


ENVELOPE_WARNING_RATIO = Decimal("0.8")
ENVELOPE_OVER_RATIO = Decimal("1.0")


# =============================================================================
# DESTINATIONS
# =============================================================================

class GoalDestination(BaseModel):
    """Transfer into a savings goal, referenced by id."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["goal"] = "goal"
    goal_id: UUID

    @property
    def target_id(self) -> UUID:
        return self.goal_id


class SavingsDestination(BaseModel):
    """Transfer into a savings account, referenced by id."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["savings"] = "savings"
    account_id: UUID

    @property
    def target_id(self) -> UUID:
        return self.account_id


Destination = Annotated[
    Union[GoalDestination, SavingsDestination],
    Field(discriminator="kind"),
]


def to_goal(goal: "Goal") -> GoalDestination:
    """Destination pointing at a savings goal."""
    return GoalDestination(goal_id=goal.id)


def to_savings(account: "SavingsAccount") -> SavingsDestination:
    """Destination pointing at a savings account."""
    return SavingsDestination(account_id=account.id)


# =============================================================================
# MOVEMENTS
# =============================================================================

class Movement(BaseModel):
    """
    A single recorded income, expense or transfer.

    Movements are immutable once created. To change one, remove it
    and add a new one.

    The nominal `type` is stored as given. For aggregation, use
    `effective_type`: any movement with a destination is a transfer.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique movement ID"
    )
    type: MovementType = Field(
        ...,
        description="Nominal movement type"
    )
    title: str = Field(
        ...,
        max_length=200,
        description="Free-text title (e.g. 'Salaire', 'Carrefour')"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Amount of the movement, never negative"
    )
    category: str = Field(
        default="",
        max_length=100,
        description="Free-text category"
    )
    date: datetime.date = Field(
        default_factory=datetime.date.today,
        description="Date of the movement"
    )
    periodicity: Optional[str] = Field(
        default=None,
        max_length=50,
        description="Advisory periodicity label (e.g. 'Mensuel'), not scheduled"
    )
    destination: Optional[Destination] = Field(
        default=None,
        description="Goal or savings account this movement feeds"
    )

    @property
    def effective_type(self) -> MovementType:
        """Type used for aggregation: a destination always means transfer."""
        if self.destination is not None:
            return MovementType.TRANSFER
        return self.type


# =============================================================================
# SAVINGS POOLS
# =============================================================================

class Goal(BaseModel):
    """
    A savings goal.

    `saved` is kept in sync with transfer movements by the ledger store
    and never goes below zero.
    """
    model_config = ConfigDict(str_strip_whitespace=True, validate_assignment=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1, max_length=100)
    target: Decimal = Field(
        ...,
        ge=0,
        description="Amount to reach"
    )
    deadline: Optional[date] = None
    saved: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Amount saved so far"
    )

    @property
    def progress(self) -> Decimal:
        """Fraction of the target reached, in [0, 1]. Zero target gives 0."""
        if self.target == 0:
            return Decimal("0")
        return max(Decimal("0"), min(self.saved / self.target, Decimal("1")))


class SavingsAccount(BaseModel):
    """A savings account (e.g. 'Livret A') with a simple annual yield."""
    model_config = ConfigDict(str_strip_whitespace=True, validate_assignment=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1, max_length=100)
    balance: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Current balance"
    )
    annual_yield: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Annual yield as a fraction (0.03 = 3%)"
    )

    @property
    def estimated_interests_per_year(self) -> Decimal:
        return self.balance * self.annual_yield


# =============================================================================
# INFORMATIONAL RECORDS
# =============================================================================

class BudgetEnvelope(BaseModel):
    """
    A spending cap for one category.

    Envelopes are informational only: expense movements do NOT
    update `spent`.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: UUID = Field(default_factory=uuid4)
    category: str = Field(..., min_length=1, max_length=100)
    cap: Decimal = Field(..., ge=0)
    spent: Decimal = Field(default=Decimal("0"), ge=0)

    @property
    def ratio(self) -> Decimal:
        """spent / cap, or 0 when there is no cap."""
        if self.cap == 0:
            return Decimal("0")
        return self.spent / self.cap

    @property
    def status(self) -> EnvelopeStatus:
        ratio = self.ratio
        if ratio < ENVELOPE_WARNING_RATIO:
            return EnvelopeStatus.OK
        if ratio < ENVELOPE_OVER_RATIO:
            return EnvelopeStatus.WARNING
        return EnvelopeStatus.OVER


class AutomationRule(BaseModel):
    """
    Keyword to category mapping.

    Rules are a static table. The core never applies them to movements;
    `matches` only answers whether a title would be caught.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: UUID = Field(default_factory=uuid4)
    keyword: str = Field(..., min_length=1, max_length=100)
    category: str = Field(..., min_length=1, max_length=100)

    def matches(self, title: str) -> bool:
        return self.keyword.casefold() in title.casefold()


class RecurringTemplate(BaseModel):
    """A recipe for a monthly movement. Never materialized by the core."""
    model_config = ConfigDict(str_strip_whitespace=True)

    id: UUID = Field(default_factory=uuid4)
    title: str = Field(..., min_length=1, max_length=200)
    amount: Decimal = Field(..., ge=0)
    category: str = Field(default="", max_length=100)
    day_of_month: int = Field(..., ge=1, le=31)
