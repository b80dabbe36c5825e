"""
Accountaries - Ledger Core

The in-memory logic core of a personal-finance tracker. It records
movements (income, expense, transfer), keeps savings goals and savings
accounts in sync with transfers, and derives the monthly budget snapshot.

DESIGN PRINCIPLES:
1. The store is the only place where ledger state changes
2. The budget snapshot is always fully recomputed, never patched
3. Every operation is total (no input makes the core fail)
4. Every mutation is auditable
5. The presentation layer is a caller, never a dependency
"""

__version__ = "1.0.0"
__author__ = "Accountaries Team"
