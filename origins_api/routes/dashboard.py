"""
GET /v1/dashboard -- Kiosk view-model.

Recomputes everything from the store on every call: per-country counts,
color intensities, the ranked top list, and the most recent registrations.
Nothing derived is cached or persisted, so the numbers can never drift
from the stored registrations.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query

from origins_api import config
from origins_api.aggregation import summarize
from origins_api.models.schemas import DashboardView
from origins_api.store import RegistrationStore, get_store
from origins_api.view import build_dashboard

router = APIRouter()


def load_dashboard(store: RegistrationStore, top: int, recent: int) -> DashboardView:
    """One full aggregation pass. Shared by the JSON endpoint and the kiosk page."""
    summary = summarize(store.list(), top=top, recent=recent)
    return build_dashboard(summary, now=datetime.now())


@router.get(
    "/v1/dashboard",
    response_model=DashboardView,
    summary="Get the kiosk view-model",
    description=(
        "Totals, top countries (ties keep first-registered order), recent "
        "registrations, the colored country grid and the placeholder map shapes."
    ),
    tags=["Dashboard"],
)
async def dashboard(
    top: int = Query(default=config.TOP_N, ge=0, le=100, description="Length of the top countries list."),
    recent: int = Query(default=config.RECENT_N, ge=0, le=100, description="Length of the recent list."),
    store: RegistrationStore = Depends(get_store),
) -> DashboardView:
    return load_dashboard(store, top=top, recent=recent)
