"""Runtime configuration building for startup."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from onchain_markets.settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeConfig:
    """Resolved startup configuration after CLI/ENV merge."""

    exchanges: list[str]
    debug_exchanges: str | None
    registry_path: str | None
    adapter_timeout: float
    http_max_attempts: int
    sync_interval_minutes: int
    output_path: str | None
    run_once: bool
    as_json: bool


def build_runtime_config(
    args: argparse.Namespace, settings: Settings, all_exchanges: Sequence[str]
) -> RuntimeConfig:
    """Resolve final runtime configuration used by main().

    Exchanges keep the order of `all_exchanges` (adapter registration order).
    """
    exchanges_arg = args.exchanges if args.exchanges is not None else settings.exchanges
    debug_exchanges_arg = (
        args.debug_exchanges if args.debug_exchanges is not None else settings.debug_exchanges
    )
    adapter_timeout = args.timeout if args.timeout is not None else settings.adapter_timeout
    interval = (
        args.interval_minutes
        if args.interval_minutes is not None
        else settings.sync_interval_minutes
    )

    if adapter_timeout <= 0:
        raise ValueError("ADAPTER_TIMEOUT must be greater than 0")
    if interval <= 0:
        raise ValueError("SYNC_INTERVAL_MINUTES must be greater than 0")
    if settings.http_max_attempts < 1:
        raise ValueError("HTTP_MAX_ATTEMPTS must be >= 1")
    if args.json and not args.once:
        raise ValueError("--json requires --once")

    exchanges = _parse_exchanges_spec(exchanges_arg, all_exchanges)

    return RuntimeConfig(
        exchanges=exchanges if exchanges is not None else list(all_exchanges),
        debug_exchanges=debug_exchanges_arg,
        registry_path=args.registry if args.registry is not None else settings.registry_path,
        adapter_timeout=adapter_timeout,
        http_max_attempts=settings.http_max_attempts,
        sync_interval_minutes=interval,
        output_path=args.output if args.output is not None else settings.output_path,
        run_once=args.once,
        as_json=args.json,
    )


def _parse_exchanges_spec(
    exchanges_spec: str | None, all_exchanges: Sequence[str]
) -> list[str] | None:
    """Parse and validate comma-separated exchanges string."""
    if not exchanges_spec:
        return None

    requested = {item.strip() for item in exchanges_spec.split(",") if item.strip()}
    if not requested:
        return None

    unknown = requested - set(all_exchanges)
    if unknown:
        logger.warning(
            "Unknown exchange IDs requested: %s. Available exchanges: %s",
            sorted(unknown),
            list(all_exchanges),
        )

    valid = [exchange for exchange in all_exchanges if exchange in requested]
    if valid:
        logger.info("Filtered to %s exchange(s): %s", len(valid), valid)
        return valid

    return None
