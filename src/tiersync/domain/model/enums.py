"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class SyncAction(StrEnum):
    """Outcome recorded for one tier in one sync pass."""

    CREATED = "created"
    UPDATED = "updated"
    DISABLED = "disabled"
    SKIPPED = "skipped"
    ERROR = "error"


class TierAction(StrEnum):
    """Action the reconciler decides on for a tier."""

    CREATE = "create"
    UPDATE = "update"
    DISABLE = "disable"
    SKIP = "skip"
