"""Synchronization defaults for the catalog sync."""

from __future__ import annotations

from dataclasses import dataclass

from .env import float_env_var

DEFAULT_TIER_PAUSE_SECONDS = 0.2


@dataclass(frozen=True, slots=True)
class SyncConfig:
    # pause between two tiers when talking to the live provider
    tier_pause_seconds: float = DEFAULT_TIER_PAUSE_SECONDS


def get_sync_config() -> SyncConfig:
    return SyncConfig(
        tier_pause_seconds=float_env_var("TIER_SYNC_PAUSE_SECONDS", DEFAULT_TIER_PAUSE_SECONDS),
    )
