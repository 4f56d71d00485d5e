"""Source adapter protocol.

Adapters implement required members without explicit inheritance.
"""

from typing import Protocol, runtime_checkable

from onchain_markets.exchanges.dto import RawMarket


@runtime_checkable
class SourceAdapter(Protocol):
    """Contract for exchange market-listing adapters.

    fetch_markets() returns every perpetual market the venue reports, without
    registry filtering. Raising is allowed: the fetch orchestrator isolates
    failures per adapter.
    """

    EXCHANGE_ID: str

    async def fetch_markets(self) -> list[RawMarket]: ...
