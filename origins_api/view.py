"""
Dashboard view-model.

build_dashboard() is a pure function from aggregates to a DashboardView:
no storage reads, no page building. The JSON endpoint returns its output
as-is and the kiosk page renders it, so both always agree.
"""

from datetime import datetime, tzinfo

from origins_api.aggregation import Summary, parse_timestamp
from origins_api.colors import color_for_intensity, intensity
from origins_api.models.schemas import (
    CountryDetail,
    DashboardStats,
    DashboardView,
    MapCell,
    MapPath,
    RecentEntry,
    TopCountryEntry,
)

MEDALS = ["🥇", "🥈", "🥉"]

NO_REGISTRATIONS_TEXT = "No registrations yet"
NO_RECENT_TEXT = "No recent registrations"
NO_GRID_TEXT = "No country data yet. Scan QR code to register!"

# Placeholder outlines. These are illustrative strokes, not a projection.
KNOWN_COUNTRIES: dict[str, str] = {
    "Nigeria": "M400,350 L420,360 L430,350 L440,340 L450,330 L460,320 L470,310 L480,300",
    "Ghana": "M380,340 L390,335 L400,330 L410,325 L420,320",
    "South Africa": "M420,500 L430,490 L440,480 L450,470 L460,460",
    "Kenya": "M450,380 L460,370 L470,360 L480,350",
    "Ethiopia": "M440,360 L450,350 L460,340 L470,330",
    "Egypt": "M420,300 L430,290 L440,280 L450,270",
}


def participants_label(country: str, count: int) -> str:
    """'Ghana: 1 participant' / 'Nigeria: 3 participants'."""
    noun = "participant" if count == 1 else "participants"
    return f"{country}: {count} {noun}"


def _clock_time(moment: datetime, tz: tzinfo | None, seconds: bool) -> str:
    local = moment.astimezone(tz)
    return local.strftime("%H:%M:%S" if seconds else "%H:%M")


def build_dashboard(
    summary: Summary,
    now: datetime,
    countries: dict[str, str] = KNOWN_COUNTRIES,
    tz: tzinfo | None = None,
) -> DashboardView:
    """Turn aggregates into everything the kiosk displays.

    tz controls how times are shown; None means the server's local zone.
    """
    max_count = summary.max_count

    top_countries = [
        TopCountryEntry(
            rank=rank,
            country=country,
            count=count,
            medal=MEDALS[rank - 1] if rank <= len(MEDALS) else "",
        )
        for rank, (country, count) in enumerate(summary.top, start=1)
    ]

    recent = []
    for reg in summary.recent:
        parsed = parse_timestamp(reg.timestamp)
        recent.append(
            RecentEntry(
                id=reg.id,
                name=reg.name,
                country=reg.country,
                message=reg.message,
                time=_clock_time(parsed, tz, seconds=False) if parsed else "",
            )
        )

    # Grid shows every registered country, busiest first (stable on ties).
    ranked = sorted(summary.counts.items(), key=lambda item: item[1], reverse=True)
    grid = []
    for country, count in ranked:
        level = intensity(count, max_count)
        grid.append(
            MapCell(
                country=country,
                count=count,
                intensity=round(level, 3),
                color=color_for_intensity(level),
                label=participants_label(country, count),
            )
        )

    paths = [
        MapPath(
            country=country,
            path=path,
            count=summary.counts.get(country, 0),
            fill=color_for_intensity(intensity(summary.counts.get(country, 0), max_count)),
        )
        for country, path in countries.items()
    ]

    return DashboardView(
        stats=DashboardStats(
            total_count=summary.total,
            unique_country_count=summary.unique_countries,
            last_update_time=_clock_time(now, tz, seconds=True),
        ),
        top_countries=top_countries,
        recent=recent,
        grid=grid,
        paths=paths,
        top_empty_text=None if top_countries else NO_REGISTRATIONS_TEXT,
        recent_empty_text=None if recent else NO_RECENT_TEXT,
        grid_empty_text=None if grid else NO_GRID_TEXT,
    )


def country_detail(country: str, counts: dict[str, int]) -> CountryDetail:
    """What tapping a country shows. Countries nobody registered from report zero."""
    count = counts.get(country, 0)
    level = intensity(count, max(counts.values(), default=0))
    return CountryDetail(
        country=country,
        count=count,
        intensity=round(level, 3),
        color=color_for_intensity(level),
        label=participants_label(country, count),
    )
