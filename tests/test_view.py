"""
Tests for the dashboard view-model builder.
"""

from datetime import datetime, timezone

from origins_api.aggregation import summarize
from origins_api.view import (
    KNOWN_COUNTRIES,
    NO_GRID_TEXT,
    NO_RECENT_TEXT,
    NO_REGISTRATIONS_TEXT,
    build_dashboard,
    country_detail,
    participants_label,
)

from conftest import make_registration

NOW = datetime(2024, 1, 15, 11, 2, 3, tzinfo=timezone.utc)

SAMPLE = [
    make_registration("Nigeria", "John", minute=0),
    make_registration("Ghana", "Sarah", minute=5),
    make_registration("Nigeria", "Mike", minute=10),
    make_registration("Kenya", "Lisa", minute=20),
    make_registration("Nigeria", "Emma", minute=25),
    make_registration("Ghana", "James", minute=30),
    make_registration("Atlantis", "Nemo", minute=31),
]


def build(registrations, top=10, recent=5):
    return build_dashboard(summarize(registrations, top=top, recent=recent), now=NOW, tz=timezone.utc)


class TestStats:

    def test_totals(self):
        view = build(SAMPLE)
        assert view.stats.total_count == 7
        assert view.stats.unique_country_count == 4
        assert view.stats.last_update_time == "11:02:03"


class TestTopCountries:

    def test_medals_for_first_three(self):
        view = build(SAMPLE)
        assert [e.medal for e in view.top_countries] == ["🥇", "🥈", "🥉", ""]
        assert [e.rank for e in view.top_countries] == [1, 2, 3, 4]
        assert view.top_countries[0].country == "Nigeria"
        assert view.top_countries[0].count == 3
        assert view.top_empty_text is None

    def test_ties_keep_registration_order(self):
        view = build(SAMPLE)
        assert [e.country for e in view.top_countries[2:]] == ["Kenya", "Atlantis"]

    def test_empty(self):
        view = build([])
        assert view.top_countries == []
        assert view.top_empty_text == NO_REGISTRATIONS_TEXT


class TestRecent:

    def test_newest_first_with_clock_time(self):
        view = build(SAMPLE, recent=2)
        assert [(e.name, e.country, e.time) for e in view.recent] == [
            ("Nemo", "Atlantis", "11:01"),
            ("James", "Ghana", "11:00"),
        ]

    def test_unparseable_time_is_blank(self):
        broken = make_registration("Egypt", "Broken").model_copy(update={"timestamp": "later"})
        view = build([broken])
        assert view.recent[0].time == ""

    def test_empty(self):
        assert build([]).recent_empty_text == NO_RECENT_TEXT


class TestGrid:

    def test_only_registered_countries_busiest_first(self):
        view = build(SAMPLE)
        assert [c.country for c in view.grid] == ["Nigeria", "Ghana", "Kenya", "Atlantis"]

    def test_colors_and_labels(self):
        view = build(SAMPLE)
        top, _, kenya, _ = view.grid
        assert top.intensity == 1.0
        assert top.color == "rgb(27, 94, 32)"
        assert top.label == "Nigeria: 3 participants"
        assert kenya.intensity == 0.333
        assert kenya.label == "Kenya: 1 participant"

    def test_empty(self):
        view = build([])
        assert view.grid == []
        assert view.grid_empty_text == NO_GRID_TEXT


class TestPaths:

    def test_every_known_country_drawn(self):
        view = build(SAMPLE)
        assert [p.country for p in view.paths] == list(KNOWN_COUNTRIES)

    def test_unregistered_country_is_lightest(self):
        view = build(SAMPLE)
        egypt = next(p for p in view.paths if p.country == "Egypt")
        assert egypt.count == 0
        assert egypt.fill == "rgb(232, 245, 233)"
        assert egypt.stroke == "#ffffff"

    def test_custom_country_set(self):
        summary = summarize(SAMPLE)
        view = build_dashboard(summary, now=NOW, countries={"Ghana": "M0,0 L1,1"}, tz=timezone.utc)
        assert [(p.country, p.count) for p in view.paths] == [("Ghana", 2)]


class TestCountryDetail:

    def test_known_country(self):
        detail = country_detail("Ghana", {"Nigeria": 3, "Ghana": 2})
        assert detail.count == 2
        assert detail.intensity == 0.667
        assert detail.label == "Ghana: 2 participants"

    def test_unknown_country_is_zero(self):
        detail = country_detail("Chad", {"Nigeria": 3})
        assert detail.count == 0
        assert detail.color == "rgb(232, 245, 233)"

    def test_no_data_at_all(self):
        assert country_detail("Chad", {}).intensity == 0.0

    def test_label_plural(self):
        assert participants_label("Togo", 0) == "Togo: 0 participants"
        assert participants_label("Togo", 1) == "Togo: 1 participant"
