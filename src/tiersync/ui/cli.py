from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from tiersync.app import (
    get_pricing_catalog_status,
    plan_pricing_catalog,
    sync_pricing_catalog,
    sync_pricing_tier,
)
from tiersync.config import configure_logging
from tiersync.domain.model import format_price

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from tiersync.domain.reconciliation import BatchSyncResult, SyncResult

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Synchronise pricing tiers with Stripe")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser("sync", help="Sync every pricing tier")
    sync.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the planned action per tier without calling the billing provider",
    )
    sync.add_argument(
        "--verbose",
        action="store_true",
        help="Log the outcome of every tier",
    )
    sync.add_argument(
        "--force",
        action="store_true",
        help="Exit successfully even when some tiers failed",
    )

    sync_tier = subparsers.add_parser("sync-tier", help="Sync a single pricing tier")
    sync_tier.add_argument("tier_id", type=str, help="Id of the pricing tier")

    subparsers.add_parser("status", help="Report the billing status of every tier")

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _log_result(result: SyncResult) -> None:
    if result.success:
        log.info("[%s] %s (%s)", result.action, result.message, result.tier_id)
    else:
        log.error("[%s] %s (%s): %s", result.action, result.message, result.tier_id, result.error)


def _log_batch(batch: BatchSyncResult, *, verbose: bool) -> None:
    if verbose:
        for result in batch.results:
            _log_result(result)
    else:
        for result in batch.results:
            if not result.success:
                _log_result(result)

    summary = batch.summary
    log.info(
        "Sync summary: total=%s, created=%s, updated=%s, disabled=%s, skipped=%s, errors=%s",
        summary.total,
        summary.created,
        summary.updated,
        summary.disabled,
        summary.skipped,
        summary.errors,
    )


def _run_sync(args: argparse.Namespace) -> int:
    if args.dry_run:
        planned = plan_pricing_catalog()
        for item in planned:
            log.info("[%s] %s", item.action, item.describe())
        log.info("Dry run: %s tier(s) planned, nothing was changed", len(planned))
        return 0

    batch = sync_pricing_catalog()
    _log_batch(batch, verbose=args.verbose)
    if batch.success:
        return 0
    if args.force:
        log.warning("Ignoring %s failed tier(s) because of --force", batch.summary.errors)
        return 0
    return 1


def _run_sync_tier(tier_id: UUID) -> int:
    result = sync_pricing_tier(tier_id)
    _log_result(result)
    return 0 if result.success else 1


def _run_status() -> int:
    status = get_pricing_catalog_status()
    for entry in status.tiers:
        tier = entry.tier
        log.info(
            "%s %s (%s, %s): product=%s [%s], price=%s [%s]",
            "*" if tier.active else "-",
            tier.name,
            tier.service_category,
            format_price(tier.price_minor_units),
            tier.external_product_id or "none",
            _describe_flag(entry.external_product_active),
            tier.external_price_id or "none",
            _describe_flag(entry.external_price_active),
        )
    summary = status.summary
    log.info(
        "Status summary: total=%s, active=%s, with_product=%s, with_price=%s",
        summary.total,
        summary.active_only,
        summary.with_external_product,
        summary.with_external_price,
    )
    return 0


def _describe_flag(value: bool | None) -> str:
    if value is None:
        return "n/a"
    return "active" if value else "inactive"


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    tier_id: UUID | None = None
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.command == "sync-tier":
            tier_id = _parse_uuid(parsed_args.tier_id)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "sync":
            exit_code = _run_sync(parsed_args)
        elif parsed_args.command == "sync-tier" and tier_id is not None:
            exit_code = _run_sync_tier(tier_id)
        elif parsed_args.command == "status":
            exit_code = _run_status()
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)

    if exit_code:
        sys.exit(exit_code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
