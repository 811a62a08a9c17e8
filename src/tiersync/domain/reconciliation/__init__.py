"""Reconciliation of pricing tiers with the billing provider.

Flow for one tier:
1) re-read the tier's persisted state
2) classify it into create / update / disable / skip
3) call the billing provider for that action
4) persist any ids the provider returned
"""

from __future__ import annotations

from .engine import TierReconciler, UnitOfWorkFactory
from .plan import PlannedAction, plan_action, plan_tiers
from .results import BatchSyncResult, SyncResult, SyncSummary

__all__ = [
    "BatchSyncResult",
    "PlannedAction",
    "SyncResult",
    "SyncSummary",
    "TierReconciler",
    "UnitOfWorkFactory",
    "plan_action",
    "plan_tiers",
]
