"""
Tests for the kiosk HTML page.
"""

from datetime import datetime, timezone

import pytest

from origins_api.aggregation import summarize
from origins_api.render import render_page
from origins_api.view import build_dashboard

from conftest import make_registration

ELEMENT_IDS = [
    "total-count",
    "unique-country-count",
    "top-list",
    "recent-list",
    "last-update-time",
    "map-container",
    "refresh-button",
]


def page_for(registrations, refresh=10):
    view = build_dashboard(
        summarize(registrations),
        now=datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc),
        tz=timezone.utc,
    )
    return render_page(view, refresh_seconds=refresh)


class TestRenderPage:

    @pytest.mark.parametrize("element_id", ELEMENT_IDS)
    def test_has_element_id(self, element_id):
        assert f'id="{element_id}"' in page_for([])

    def test_counts_shown(self):
        html = page_for([make_registration("Ghana"), make_registration("Ghana", minute=1)])
        assert '<strong id="total-count">2</strong>' in html
        assert '<strong id="unique-country-count">1</strong>' in html

    def test_refresh_interval(self):
        assert '<meta http-equiv="refresh" content="30">' in page_for([], refresh=30)
        assert 'http-equiv="refresh"' not in page_for([], refresh=0)

    def test_empty_state_text(self):
        html = page_for([])
        assert "No registrations yet" in html
        assert "No recent registrations" in html
        assert "Scan QR code to register!" in html

    def test_user_text_is_escaped(self):
        html = page_for([make_registration("<script>alert(1)</script>", name="<b>x</b>")])
        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;" in html
        assert "<b>x</b>" not in html

    def test_medal_in_top_list(self):
        assert "🥇 Nigeria" in page_for([make_registration("Nigeria")])

    def test_refresh_button_keeps_interval(self):
        assert '<a id="refresh-button" href="/?refresh=45">' in page_for([], refresh=45)
