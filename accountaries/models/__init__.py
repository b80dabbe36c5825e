"""
Data Models Package

This package contains all Pydantic models used by the ledger core.
All data flowing through the core must conform to these schemas.
"""

from accountaries.models.ledger import (
    AutomationRule,
    BudgetEnvelope,
    Destination,
    DestinationKind,
    EnvelopeStatus,
    Goal,
    GoalDestination,
    Movement,
    MovementType,
    RecurringTemplate,
    SavingsAccount,
    SavingsDestination,
    to_goal,
    to_savings,
)
from accountaries.models.budget import BudgetSnapshot
from accountaries.models.audit import (
    LedgerEvent,
    LedgerEventBuilder,
    LedgerEventSeverity,
    LedgerEventType,
)
from accountaries.models.validation import ValidationIssue, ValidationResult

__all__ = [
    # Ledger models
    "AutomationRule",
    "BudgetEnvelope",
    "Destination",
    "DestinationKind",
    "EnvelopeStatus",
    "Goal",
    "GoalDestination",
    "Movement",
    "MovementType",
    "RecurringTemplate",
    "SavingsAccount",
    "SavingsDestination",
    "to_goal",
    "to_savings",
    # Budget models
    "BudgetSnapshot",
    # Audit models
    "LedgerEvent",
    "LedgerEventBuilder",
    "LedgerEventSeverity",
    "LedgerEventType",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
]
