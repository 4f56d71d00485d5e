"""
Tests for scheduled cycles and snapshot output
"""

import json
from unittest.mock import AsyncMock

import pytest

from onchain_markets.bootstrap import bootstrap, run_cycle
from onchain_markets.orchestration import MarketSync
from onchain_markets.snapshot import write_snapshot
from tests.factories import StubAdapter, make_raw


@pytest.fixture
def market_sync(registry):
    adapter = StubAdapter("lighter", [make_raw("XAU", "lighter", price=2400.0)])
    return MarketSync(registry, [adapter])


class TestRunCycle:
    @pytest.mark.asyncio
    async def test_writes_snapshot(self, market_sync, tmp_path):
        output = tmp_path / "nested" / "latest.json"

        result = await run_cycle(market_sync, output)

        assert result is not None
        payload = json.loads(output.read_text())
        assert payload["assets"][0]["ticker"] == "XAU"

    @pytest.mark.asyncio
    async def test_failed_cycle_keeps_previous_snapshot(self, market_sync, tmp_path):
        output = tmp_path / "latest.json"
        output.write_text('{"previous": true}')
        market_sync.run = AsyncMock(side_effect=RuntimeError("registry bug"))

        assert await run_cycle(market_sync, output) is None
        assert json.loads(output.read_text()) == {"previous": True}

    @pytest.mark.asyncio
    async def test_without_output(self, market_sync):
        result = await run_cycle(market_sync)
        assert result.summary.total_assets == 1


class TestSnapshot:
    @pytest.mark.asyncio
    async def test_replaces_existing_file(self, market_sync, tmp_path):
        output = tmp_path / "latest.json"
        output.write_text("stale")

        result = await market_sync.run()
        written = write_snapshot(result, output)

        assert written == output
        assert json.loads(output.read_text())["success"] is True
        assert [p.name for p in tmp_path.iterdir()] == ["latest.json"]


class TestBootstrap:
    def test_registers_single_job(self, market_sync):
        scheduler = bootstrap(market_sync, interval_minutes=15, output_path="out.json")

        (job,) = scheduler.get_jobs()
        assert job.name == "market_sync"
        assert job.args == (market_sync, "out.json")
