"""
GET /v1/registrations -- Raw registration list.

Returns stored registrations in the order they were made. Pass limit to
get only the newest N instead (newest first, same ordering as the
dashboard's recent list).
"""

from fastapi import APIRouter, Depends, Query

from origins_api.aggregation import most_recent
from origins_api.models.schemas import Registration
from origins_api.store import RegistrationStore, get_store

router = APIRouter()


@router.get(
    "/v1/registrations",
    response_model=list[Registration],
    summary="List registrations",
    tags=["Registrations"],
)
async def list_registrations(
    limit: int | None = Query(
        default=None,
        ge=1,
        description="Only return the newest N registrations, newest first.",
    ),
    store: RegistrationStore = Depends(get_store),
) -> list[Registration]:
    registrations = store.list()
    if limit is None:
        return registrations
    return most_recent(registrations, limit)
