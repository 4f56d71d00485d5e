"""Base exchange adapter using ABC."""

import logging
from abc import ABC, abstractmethod

from onchain_markets.exchanges.dto import RawMarket


class BaseExchange(ABC):
    """Base class for exchange adapters.

    Subclasses set EXCHANGE_ID and implement fetch_markets().
    """

    EXCHANGE_ID: str

    @property
    def logger(self) -> logging.Logger:
        """Exchange logger.

        Enables per-exchange log control via DEBUG_EXCHANGES or
        logging.getLogger("onchain_markets.exchanges.{EXCHANGE_ID}").
        """
        return logging.getLogger(f"onchain_markets.exchanges.{self.EXCHANGE_ID}")

    def __init_subclass__(cls) -> None:
        """Validate subclass declares its exchange id."""
        super().__init_subclass__()

        if not hasattr(cls, "EXCHANGE_ID"):
            raise NotImplementedError(f"{cls.__name__}: missing EXCHANGE_ID class attribute")

    @abstractmethod
    async def fetch_markets(self) -> list[RawMarket]:
        """Fetch all perpetual markets with live data from the exchange."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(EXCHANGE_ID={self.EXCHANGE_ID!r})"
