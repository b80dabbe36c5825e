"""Ledger query package."""

from accountaries.queries.reports import DashboardSummary, LedgerQueries, MovementFilter

__all__ = ["DashboardSummary", "LedgerQueries", "MovementFilter"]
