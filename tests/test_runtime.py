"""
Tests for CLI/ENV merge into the runtime configuration
"""

import logging

import pytest

from onchain_markets.cli import build_parser
from onchain_markets.logging_setup import configure_exchange_debug_logging
from onchain_markets.runtime import build_runtime_config
from onchain_markets.settings import Settings

ALL_EXCHANGES = ["hyperliquid", "lighter", "ostium", "qfex", "vest"]


def settings(**values) -> Settings:
    return Settings(_env_file=None, **values)


def runtime(argv, **values):
    args = build_parser().parse_args(argv)
    return build_runtime_config(args, settings(**values), ALL_EXCHANGES)


class TestBuildRuntimeConfig:
    def test_defaults(self, monkeypatch):
        for name in ("EXCHANGES", "ADAPTER_TIMEOUT", "SYNC_INTERVAL_MINUTES", "OUTPUT_PATH"):
            monkeypatch.delenv(name, raising=False)

        config = runtime([])

        assert config.exchanges == ALL_EXCHANGES
        assert config.adapter_timeout == 20.0
        assert config.http_max_attempts == 1
        assert config.sync_interval_minutes == 30
        assert config.registry_path is None
        assert config.run_once is False

    def test_cli_overrides_env(self):
        config = runtime(
            ["--exchanges", "vest,lighter", "--timeout", "5", "--interval-minutes", "10"],
            EXCHANGES="ostium",
            ADAPTER_TIMEOUT=30,
        )

        # Registration order, not request order
        assert config.exchanges == ["lighter", "vest"]
        assert config.adapter_timeout == 5.0
        assert config.sync_interval_minutes == 10

    def test_env_used_without_cli(self):
        config = runtime([], EXCHANGES="qfex", OUTPUT_PATH="/tmp/out.json", HTTP_MAX_ATTEMPTS=3)

        assert config.exchanges == ["qfex"]
        assert config.output_path == "/tmp/out.json"
        assert config.http_max_attempts == 3

    def test_unknown_exchanges_are_dropped(self, caplog):
        with caplog.at_level(logging.WARNING):
            config = runtime(["--exchanges", "lighter,nowhere"])

        assert config.exchanges == ["lighter"]
        assert "nowhere" in caplog.text

    def test_only_unknown_exchanges_falls_back_to_all(self):
        assert runtime(["--exchanges", "nowhere"]).exchanges == ALL_EXCHANGES

    @pytest.mark.parametrize(
        "argv, values, message",
        [
            (["--timeout", "0"], {}, "ADAPTER_TIMEOUT"),
            (["--interval-minutes", "0"], {}, "SYNC_INTERVAL_MINUTES"),
            ([], {"HTTP_MAX_ATTEMPTS": 0}, "HTTP_MAX_ATTEMPTS"),
            (["--json"], {}, "--json requires --once"),
        ],
    )
    def test_invalid_values(self, argv, values, message):
        with pytest.raises(ValueError, match=message):
            runtime(argv, **values)

    def test_once_json(self):
        config = runtime(["--once", "--json", "--registry", "reg.json"])
        assert config.run_once and config.as_json
        assert config.registry_path == "reg.json"


class TestExchangeDebugLogging:
    def test_sets_exchange_logger_levels(self):
        logger = logging.getLogger("onchain_markets.exchanges.lighter")
        previous = logger.level
        try:
            configure_exchange_debug_logging(" lighter , ")
            assert logger.level == logging.DEBUG
        finally:
            logger.setLevel(previous)
