"""
Tests for the two-stage movement validator.
"""

import pytest
from decimal import Decimal
from uuid import uuid4

from accountaries.models.ledger import (
    GoalDestination,
    Movement,
    MovementType,
    SavingsDestination,
)
from accountaries.validation import MovementValidator


class TestSchemaStage:
    """Stage 1: title and amount."""

    def test_valid_movement(self, demo_store, groceries):
        """Test a well-formed expense passes both stages."""
        result = MovementValidator(demo_store).validate(groceries)
        assert result.is_valid is True
        assert result.issues == []

    def test_empty_title(self):
        """Test an empty title is an error."""
        movement = Movement(type=MovementType.EXPENSE, title="   ", amount=Decimal("10"))
        result = MovementValidator().validate(movement)
        assert result.schema_valid is False
        assert result.is_valid is False
        assert result.issues[0].field == "title"

    def test_zero_amount(self):
        """Test a zero amount is an error."""
        movement = Movement(type=MovementType.EXPENSE, title="Café", amount=Decimal("0"))
        result = MovementValidator().validate(movement)
        assert result.has_errors is True
        assert result.issues[0].field == "amount"

    def test_semantic_stage_skipped_on_schema_failure(self):
        """Test stage 2 does not run when stage 1 fails."""
        movement = Movement(
            type=MovementType.EXPENSE,
            title="",
            amount=Decimal("10"),
            destination=GoalDestination(goal_id=uuid4()),
        )
        result = MovementValidator().validate(movement)
        assert result.semantic_valid is False
        assert [i.field for i in result.issues] == ["title"]


class TestSemanticStage:
    """Stage 2: destination and consistency checks."""

    def test_unknown_goal(self, demo_store):
        """Test a destination that does not resolve is an error."""
        movement = Movement(
            type=MovementType.TRANSFER,
            title="Épargne",
            amount=Decimal("50"),
            destination=GoalDestination(goal_id=uuid4()),
        )
        result = MovementValidator(demo_store).validate(movement)
        assert result.is_valid is False
        assert result.issues[0].issue_type == "unknown_reference"

    def test_known_account(self, demo_store, livret_a):
        """Test a transfer to an existing account is valid."""
        movement = Movement(
            type=MovementType.TRANSFER,
            title="Transfert livret",
            amount=Decimal("150"),
            destination=SavingsDestination(account_id=livret_a.id),
        )
        assert MovementValidator(demo_store).validate(movement).is_valid is True

    def test_destination_without_store_is_not_checked(self):
        """Test destination lookups are skipped when no store is given."""
        movement = Movement(
            type=MovementType.TRANSFER,
            title="Épargne",
            amount=Decimal("50"),
            destination=GoalDestination(goal_id=uuid4()),
        )
        assert MovementValidator().validate(movement).is_valid is True

    def test_mislabelled_transfer_warns(self, demo_store, vacances):
        """Test an income with a destination warns but stays valid."""
        movement = Movement(
            type=MovementType.INCOME,
            title="Épargne",
            amount=Decimal("50"),
            destination=GoalDestination(goal_id=vacances.id),
        )
        result = MovementValidator(demo_store).validate(movement)
        assert result.is_valid is True
        assert len(result.warnings) == 1
        assert "transfer" in result.warnings[0]

    def test_transfer_without_destination_warns(self):
        """Test a bare transfer warns that it counts nowhere."""
        movement = Movement(type=MovementType.TRANSFER, title="Virement", amount=Decimal("50"))
        result = MovementValidator().validate(movement)
        assert result.is_valid is True
        assert result.issues[0].issue_type == "missing"

    def test_absurd_amount_warns(self):
        """Test amounts above the threshold warn."""
        movement = Movement(type=MovementType.EXPENSE, title="Yacht", amount=Decimal("5000"))
        result = MovementValidator(max_amount=Decimal("1000")).validate(movement)
        assert result.is_valid is True
        assert result.issues[0].issue_type == "suspicious_value"

    def test_threshold_from_settings(self, monkeypatch):
        """Test the default threshold comes from settings."""
        monkeypatch.setenv("LEDGER_MAX_MOVEMENT_AMOUNT", "100")
        movement = Movement(type=MovementType.EXPENSE, title="Vélo", amount=Decimal("250"))
        result = MovementValidator().validate(movement)
        assert [i.issue_type for i in result.issues] == ["suspicious_value"]


class TestSummary:
    """Tests for the text summary."""

    def test_all_good(self, groceries):
        """Test the summary for a clean result."""
        validator = MovementValidator()
        summary = validator.get_user_friendly_summary(validator.validate(groceries))
        assert "All checks passed" in summary

    def test_errors_listed_with_fixes(self):
        """Test errors and their fixes are listed."""
        validator = MovementValidator()
        movement = Movement(type=MovementType.EXPENSE, title="", amount=Decimal("0"))
        summary = validator.get_user_friendly_summary(validator.validate(movement))
        assert "cannot be saved" in summary
        assert "A title is required" in summary
        assert "Amount must be greater than zero" in summary


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
