"""
Aggregation: registrations -> per-country counts, rankings, recent list.

Pure functions over any sequence of registrations, including an empty one.
Nothing here is persisted; every dashboard read recomputes from the store.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from origins_api.models.schemas import Registration


def count_by_country(registrations: Iterable[Registration]) -> dict[str, int]:
    """Count registrations per country.

    Keys come out in first-encounter order, which is what top_n() uses to
    break ties. sum(counts.values()) == number of registrations.
    """
    counts: dict[str, int] = {}
    for reg in registrations:
        counts[reg.country] = counts.get(reg.country, 0) + 1
    return counts


def top_n(counts: Mapping[str, int], n: int = 10) -> list[tuple[str, int]]:
    """Highest-count countries first. Ties keep insertion order (sorted() is stable)."""
    if n <= 0:
        return []
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return ranked[:n]


def parse_timestamp(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp, accepting a trailing 'Z'. None if unparseable."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        # No offset: read it as server local time.
        parsed = parsed.astimezone()
    return parsed


def most_recent(registrations: Sequence[Registration], n: int = 5) -> list[Registration]:
    """The n newest registrations, newest first.

    Never reorders the input. Equal timestamps keep their stored order;
    registrations whose timestamp can't be parsed go to the end.
    """
    if n <= 0:
        return []

    def newest_first(reg: Registration) -> tuple[int, float]:
        parsed = parse_timestamp(reg.timestamp)
        if parsed is None:
            return (1, 0.0)
        return (0, -parsed.timestamp())

    return sorted(registrations, key=newest_first)[:n]


@dataclass
class Summary:
    total: int
    counts: dict[str, int]
    top: list[tuple[str, int]] = field(default_factory=list)
    recent: list[Registration] = field(default_factory=list)

    @property
    def unique_countries(self) -> int:
        return len(self.counts)

    @property
    def max_count(self) -> int:
        return max(self.counts.values(), default=0)


def summarize(registrations: Sequence[Registration], top: int = 10, recent: int = 5) -> Summary:
    """Everything the dashboard derives from the store, in one pass."""
    counts = count_by_country(registrations)
    return Summary(
        total=len(registrations),
        counts=counts,
        top=top_n(counts, top),
        recent=most_recent(registrations, recent),
    )
