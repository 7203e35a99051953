"""
Kiosk page rendering.

Turns a DashboardView into a self-contained HTML page. The page reloads
itself every refresh interval, which re-runs the whole aggregation-and-render
pass on the server; the refresh button just reloads immediately.

Element IDs are part of the contract with anything embedding or scraping the
kiosk: total-count, unique-country-count, top-list, recent-list,
last-update-time, map-container, refresh-button.
"""

from html import escape

from origins_api.models.schemas import DashboardView

PAGE_TITLE = "African Origins Map"

_STYLE = """
body { font-family: system-ui, sans-serif; margin: 0; padding: 24px; background: #f4f7f4; color: #1b1b1b; }
h1 { margin: 0 0 16px; }
.stats { display: flex; gap: 24px; margin-bottom: 16px; }
.stat { background: #fff; border-radius: 8px; padding: 12px 20px; }
.stat strong { display: block; font-size: 2em; }
.panels { display: grid; grid-template-columns: 2fr 1fr 1fr; gap: 16px; }
.panel { background: #fff; border-radius: 8px; padding: 16px; }
.map-grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(120px, 1fr)); gap: 8px; }
.country-item { border-radius: 6px; padding: 10px; text-align: center; }
.country-item-list, .recent-item { display: flex; justify-content: space-between; padding: 6px 0; border-bottom: 1px solid #eee; }
.country-count { font-weight: bold; }
.loading { color: #777; font-style: italic; }
"""


def _svg(view: DashboardView) -> str:
    if not view.paths:
        return ""
    shapes = "".join(
        f'<path d="{escape(p.path)}" fill="{p.fill}" stroke="{p.stroke}" stroke-width="1" '
        f'class="country-path" data-country="{escape(p.country)}" data-count="{p.count}">'
        f"<title>{escape(p.country)}: {p.count}</title></path>"
        for p in view.paths
    )
    return f'<svg id="africa-map" viewBox="300 250 250 280" width="100%" height="240">{shapes}</svg>'


def _grid(view: DashboardView) -> str:
    if view.grid_empty_text:
        return f'<div class="map-grid"><div class="loading">{escape(view.grid_empty_text)}</div></div>'
    cells = "".join(
        f'<div class="country-item" style="background: {cell.color}" title="{escape(cell.label)}">'
        f'<div>{escape(cell.country)}</div><div class="country-count">{cell.count}</div></div>'
        for cell in view.grid
    )
    return f'<div class="map-grid">{cells}</div>'


def _top_list(view: DashboardView) -> str:
    if view.top_empty_text:
        return f'<div class="loading">{escape(view.top_empty_text)}</div>'
    return "".join(
        f'<div class="country-item-list"><span class="country-name">'
        f'{entry.medal + " " if entry.medal else ""}{escape(entry.country)}</span>'
        f'<span class="country-count">{entry.count}</span></div>'
        for entry in view.top_countries
    )


def _recent_list(view: DashboardView) -> str:
    if view.recent_empty_text:
        return f'<div class="loading">{escape(view.recent_empty_text)}</div>'
    return "".join(
        f'<div class="recent-item"><div><strong>{escape(entry.name)}</strong><br>'
        f"<small>{escape(entry.time)}</small></div>"
        f'<span class="country-count">{escape(entry.country)}</span></div>'
        for entry in view.recent
    )


def render_page(view: DashboardView, refresh_seconds: int = 10) -> str:
    """Full kiosk HTML for a view-model."""
    refresh = f'<meta http-equiv="refresh" content="{refresh_seconds}">' if refresh_seconds > 0 else ""
    stats = view.stats
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
{refresh}
<title>{PAGE_TITLE}</title>
<style>{_STYLE}</style>
</head>
<body>
<h1>{PAGE_TITLE}</h1>
<div class="stats">
  <div class="stat"><strong id="total-count">{stats.total_count}</strong>Participants</div>
  <div class="stat"><strong id="unique-country-count">{stats.unique_country_count}</strong>Countries</div>
  <div class="stat">Last update <span id="last-update-time">{escape(stats.last_update_time)}</span>
    <a id="refresh-button" href="/?refresh={refresh_seconds}">Refresh</a></div>
</div>
<div class="panels">
  <div class="panel" id="map-container">{_svg(view)}{_grid(view)}</div>
  <div class="panel"><h2>Top Countries</h2><div id="top-list">{_top_list(view)}</div></div>
  <div class="panel"><h2>Recent</h2><div id="recent-list">{_recent_list(view)}</div></div>
</div>
</body>
</html>
"""
