"""Console sink for inspecting routing results."""

import json
from typing import TYPE_CHECKING, Any

from parcel_router.sinks.serialization import to_dict

if TYPE_CHECKING:
    from parcel_router.store import LogisticsDataStore


class ConsoleSink:
    """Print the contents of a routed store to stdout as JSON."""

    def __init__(self, pretty: bool = True, max_records: int | None = None) -> None:
        """Initialize console sink.

        Parameters
        ----------
        pretty : bool
            Indent each record; otherwise one record per line.
        max_records : int | None
            Maximum records to print per section (None for all).
        """
        self.pretty = pretty
        self.max_records = max_records

    def write_section(self, title: str, records: list[Any]) -> None:
        print(f"\n== {title} ({len(records)}) ==")

        shown = records[: self.max_records] if self.max_records else records
        indent = 2 if self.pretty else None
        for record in shown:
            print(json.dumps(to_dict(record), indent=indent, ensure_ascii=False, default=str))

        hidden = len(records) - len(shown)
        if hidden:
            print(f"... {hidden} more {title} not shown")

    def write_summary(self, summary: dict[str, int]) -> None:
        """Print entity counts, one ``name: count`` line each."""
        print("\n== summary ==")
        width = max((len(name) for name in summary), default=0)
        for name, count in summary.items():
            print(f"  {name.ljust(width)}: {count}")

    def write_store(self, store: "LogisticsDataStore") -> None:
        """Print departments, rules, containers and parcels, then the counts."""
        self.write_section("departments", store.departments.get_all())
        self.write_section("business_rules", store.rules.get_all_rules())
        self.write_section("containers", store.containers.get_all())
        self.write_section("parcels", store.parcels.get_all())
        self.write_summary(store.summary())
