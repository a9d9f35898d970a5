"""Output sinks for routing results."""

from parcel_router.sinks.console import ConsoleSink

__all__ = ["ConsoleSink"]
