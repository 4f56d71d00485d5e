from onchain_markets.orchestration.fetch_orchestrator import (
    AdapterOutcome,
    FetchReport,
    fetch_all,
)
from onchain_markets.orchestration.market_sync import MarketSync, SyncResult

__all__ = ["AdapterOutcome", "FetchReport", "MarketSync", "SyncResult", "fetch_all"]
