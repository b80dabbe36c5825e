"""
Two-Stage Movement Validation

The ledger store accepts any well-formed Movement. Checking that a
movement makes sense is the caller's job, and this module does it.

STAGE 1 - SCHEMA VALIDATION:
- Title present
- Amount strictly positive

STAGE 2 - SEMANTIC VALIDATION:
- Destination points at an existing goal / savings account
- Nominal type agrees with the destination
- Absurd amount detection

IMPORTANT: Validation NEVER silently fixes issues.
It reports them so the user can correct the form.
"""

from decimal import Decimal
from typing import Optional

from accountaries.config import get_settings
from accountaries.ledger.store import LedgerStore
from accountaries.models.ledger import DestinationKind, Movement, MovementType
from accountaries.models.validation import ValidationIssue, ValidationResult


class MovementValidator:
    """
    Validates a movement through a two-stage pipeline.

    Stage 1: Schema validation (no store needed)
    Stage 2: Semantic validation (needs the store to resolve destinations)
    """

    def __init__(
        self,
        store: Optional[LedgerStore] = None,
        max_amount: Optional[Decimal] = None,
    ):
        """
        Initialize validator.

        Args:
            store: Ledger store used to resolve destinations.
                    If None, destination checks are skipped.
            max_amount: Sanity threshold for amounts.
                    Defaults to LedgerSettings.max_movement_amount.
        """
        self._store = store
        if max_amount is None:
            max_amount = get_settings().ledger.max_movement_amount
        self._max_amount = max_amount

    def _validate_schema(
        self,
        movement: Movement,
    ) -> tuple[bool, list[ValidationIssue]]:
        """Stage 1. Returns: (is_valid, list_of_issues)"""
        issues = []

        if not movement.title:
            issues.append(ValidationIssue(
                field="title",
                issue_type="missing",
                message="A title is required",
                severity="error",
                suggested_fix="Describe the movement (e.g. 'Loyer', 'Salaire')",
            ))

        if movement.amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
                severity="error",
                suggested_fix="Enter the amount of the movement",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)
        return is_valid, issues

    def _validate_semantic(
        self,
        movement: Movement,
    ) -> tuple[bool, list[ValidationIssue]]:
        """Stage 2. Returns: (is_valid, list_of_issues)"""
        issues = []
        destination = movement.destination

        if destination is not None and self._store is not None:
            if destination.kind == DestinationKind.GOAL:
                found = self._store.get_goal(destination.target_id) is not None
                label = "goal"
            else:
                found = self._store.get_savings_account(destination.target_id) is not None
                label = "savings account"
            if not found:
                issues.append(ValidationIssue(
                    field="destination",
                    issue_type="unknown_reference",
                    message=f"The selected {label} does not exist",
                    severity="error",
                    suggested_fix=f"Pick an existing {label}",
                ))

        if destination is not None and movement.type != MovementType.TRANSFER:
            issues.append(ValidationIssue(
                field="type",
                issue_type="inconsistent",
                message=(
                    f"Movement is marked as {movement.type.value} but has a "
                    "destination; it will be counted as a transfer"
                ),
                severity="warning",
                suggested_fix="Set the type to transfer",
            ))

        if destination is None and movement.type == MovementType.TRANSFER:
            issues.append(ValidationIssue(
                field="destination",
                issue_type="missing",
                message="Transfer has no destination; it will not count as savings",
                severity="warning",
                suggested_fix="Pick a goal or a savings account",
            ))

        if movement.amount > self._max_amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount ({movement.amount:,.2f}) seems unusually high",
                severity="warning",
                suggested_fix="Please verify this amount is correct",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)
        return is_valid, issues

    def validate(self, movement: Movement) -> ValidationResult:
        """
        Run full two-stage validation pipeline.

        Stage 2 only runs when stage 1 passes.
        """
        all_issues = []

        schema_valid, schema_issues = self._validate_schema(movement)
        all_issues.extend(schema_issues)

        semantic_valid = False
        if schema_valid:
            semantic_valid, semantic_issues = self._validate_semantic(movement)
            all_issues.extend(semantic_issues)

        warnings = [
            issue.message for issue in all_issues if issue.severity == "warning"
        ]

        return ValidationResult(
            movement_id=movement.id,
            schema_valid=schema_valid,
            semantic_valid=semantic_valid,
            is_valid=schema_valid and semantic_valid,
            issues=all_issues,
            warnings=warnings,
        )

    def get_user_friendly_summary(
        self,
        result: ValidationResult,
    ) -> str:
        """Generate a short text summary of validation results."""
        if result.is_valid and not result.warnings:
            return "✅ All checks passed."

        lines = []

        if result.has_errors:
            lines.append("❌ This movement cannot be saved yet:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"     💡 {issue.suggested_fix}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Please verify the following:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
