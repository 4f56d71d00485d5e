"""Infrastructure layer providing reusable components.

- HTTP client with configurable retry
"""

from onchain_markets.infrastructure.http_client import configure_retries, get, post

__all__ = ["configure_retries", "get", "post"]
