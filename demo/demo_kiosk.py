"""
ORIGINS MAP API -- Kiosk Demo

Walks through what a kiosk session looks like from the API's side:

  1. Check the API is up
  2. Register a handful of participants (as the QR-code page would)
  3. Show the dashboard: totals, top countries, recent registrations
  4. Look up a single country tile
  5. Point at the kiosk page

Run with:
    python demo/demo_kiosk.py

Requires the API to be running at http://localhost:8000.
"""

import os
import sys
import time

import requests

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

BASE_URL = os.getenv("ORIGINS_API_URL", "http://localhost:8000")

# ---------------------------------------------------------------------------
# ANSI color codes
# ---------------------------------------------------------------------------

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"

CYAN = "\033[36m"
GREEN = "\033[32m"
RED = "\033[31m"
YELLOW = "\033[33m"
WHITE = "\033[97m"


def header(text: str) -> None:
    width = 64
    print()
    print(f"{CYAN}{BOLD}{'=' * width}{RESET}")
    print(f"{CYAN}{BOLD}  {text}{RESET}")
    print(f"{CYAN}{BOLD}{'=' * width}{RESET}")
    print()


def step(number: int, title: str) -> None:
    print(f"{WHITE}{BOLD}[Step {number}]{RESET} {YELLOW}{title}{RESET}")
    print(f"{DIM}{'-' * 56}{RESET}")


def bar(count: int, max_count: int, width: int = 20) -> str:
    filled = int(width * count / max(max_count, 1))
    return f"{GREEN}{'#' * filled}{RESET}{DIM}{'.' * (width - filled)}{RESET}"


def pause(seconds: float = 0.5) -> None:
    time.sleep(seconds)


# Who signs up during the demo.
PARTICIPANTS = [
    ("Nigeria", "John", ""),
    ("Ghana", "Sarah", "Greetings from Accra"),
    ("Nigeria", "Mike", ""),
    ("South Africa", "David", ""),
    ("Kenya", "Lisa", "Hello from Nairobi"),
    ("Nigeria", "Emma", ""),
    ("Ghana", "James", ""),
]


def main() -> None:
    header("ORIGINS MAP -- Kiosk Demo")
    print(f"  {DIM}API: {BASE_URL}{RESET}")

    # ── STEP 1: Health ───────────────────────────────────────

    step(1, "Health check")
    try:
        r = requests.get(f"{BASE_URL}/v1/health", timeout=5)
        r.raise_for_status()
        health = r.json()
        print(f"  {GREEN}API is running (v{health['version']}, {health['registrations_stored']} stored){RESET}")
    except requests.ConnectionError:
        print(f"  {RED}ERROR: Cannot connect to {BASE_URL}{RESET}")
        print(f"  {DIM}Start the API first: uvicorn origins_api.main:app --reload{RESET}")
        sys.exit(1)

    pause()

    # ── STEP 2: Registrations ────────────────────────────────

    step(2, "Register participants")
    for country, name, message in PARTICIPANTS:
        r = requests.post(
            f"{BASE_URL}/v1/register",
            json={"country": country, "name": name, "message": message or None},
            timeout=5,
        )
        r.raise_for_status()
        reg = r.json()
        print(f"  {GREEN}+{RESET} {name:8s} {DIM}from{RESET} {country:14s} {DIM}id={reg['id']}{RESET}")
    print()

    pause()

    # ── STEP 3: Dashboard ────────────────────────────────────

    step(3, "Dashboard")
    view = requests.get(f"{BASE_URL}/v1/dashboard", timeout=5).json()
    stats = view["stats"]
    print(f"  Participants: {BOLD}{stats['total_count']}{RESET}")
    print(f"  Countries:    {BOLD}{stats['unique_country_count']}{RESET}")
    print(f"  Updated:      {DIM}{stats['last_update_time']}{RESET}")
    print()

    print(f"  {WHITE}Top countries:{RESET}")
    top = view["top_countries"]
    max_count = top[0]["count"] if top else 0
    for entry in top:
        medal = entry["medal"] or "  "
        print(f"    {medal} {entry['country']:14s} {entry['count']:3d}  [{bar(entry['count'], max_count)}]")
    if not top:
        print(f"    {DIM}{view['top_empty_text']}{RESET}")
    print()

    print(f"  {WHITE}Recent:{RESET}")
    for entry in view["recent"]:
        print(f"    {entry['time']}  {entry['name']:10s} {DIM}{entry['country']}{RESET}")
    print()

    pause()

    # ── STEP 4: Country tile ─────────────────────────────────

    step(4, "Tap a country tile")
    detail = requests.get(f"{BASE_URL}/v1/countries/Ghana", timeout=5).json()
    print(f"  {detail['label']}  {DIM}(fill {detail['color']}){RESET}")
    print()

    # ── STEP 5: Kiosk page ───────────────────────────────────

    step(5, "Kiosk page")
    print(f"  Open {BOLD}{BASE_URL}/{RESET} -- it refreshes itself every few seconds.")
    print()


if __name__ == "__main__":
    main()
