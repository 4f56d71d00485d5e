"""Logging setup helpers for startup."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    """Configure base logging; third-party HTTP and scheduler chatter stays at WARNING."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("apscheduler").setLevel(logging.WARNING)


def configure_exchange_debug_logging(exchanges_spec: str | None) -> None:
    """Enable DEBUG logs for exchange-level loggers."""
    exchange_names = _parse_csv(exchanges_spec)
    for exchange_name in exchange_names:
        logging.getLogger(f"onchain_markets.exchanges.{exchange_name}").setLevel(logging.DEBUG)
    if exchange_names:
        logger.info("Enabling DEBUG logging for exchanges: %s", exchange_names)


def _parse_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]
