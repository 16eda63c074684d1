"""Plan reconciliation module.

Restores the plan grid invariants on untrusted producer output. Pure and
idempotent; degradations are reported as warnings, never raised.
"""

from marathon_coach.plans.reconciliation.reconcile import reconcile_chunk, reconcile_days, reconcile_plan
from marathon_coach.plans.reconciliation.types import DraftDay, ReconciliationOutcome

__all__ = [
    "DraftDay",
    "ReconciliationOutcome",
    "reconcile_chunk",
    "reconcile_days",
    "reconcile_plan",
]
