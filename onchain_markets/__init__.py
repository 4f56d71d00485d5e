"""Traditional-asset perpetual listings aggregated across on-chain exchanges."""

__version__ = "0.1.0"
