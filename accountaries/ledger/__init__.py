"""
Ledger package.

Import from the submodules directly:
    accountaries.ledger.store        - LedgerStore
    accountaries.ledger.propagation  - BalancePropagator
    accountaries.ledger.aggregation  - compute_snapshot
    accountaries.ledger.formulas     - derived budget formulas

Nothing is re-exported here because the models import the formulas
module, and the store imports the models.
"""
