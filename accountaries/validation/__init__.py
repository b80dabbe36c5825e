"""Movement validation package."""

from accountaries.validation.validator import MovementValidator

__all__ = ["MovementValidator"]
