"""
POST /v1/register -- Record a new registration.

This is what the kiosk's QR-code landing page submits. The registration is
appended to the store and returned exactly as stored, including its
generated id and timestamp.

The country is accepted as typed (after trimming). It is NOT checked
against a list of known countries, so "Nigeria" and "nigeria" count as two
different countries.
"""

from fastapi import APIRouter, Depends, status

from origins_api.models.schemas import RegisterRequest, Registration
from origins_api.store import RegistrationStore, get_store

router = APIRouter()


@router.post(
    "/v1/register",
    response_model=Registration,
    status_code=status.HTTP_201_CREATED,
    summary="Register a participant's country",
    description=(
        "Appends one registration to the store. Name defaults to 'Anonymous' "
        "and message to an empty string. The dashboard reflects it on its next refresh."
    ),
    tags=["Registrations"],
)
async def register(
    req: RegisterRequest,
    store: RegistrationStore = Depends(get_store),
) -> Registration:
    # Storage quota failures are not caught here; they surface as a 500.
    # FileStorage does blocking file I/O on the event loop; fine for one kiosk.
    return store.register(req.country, name=req.name, message=req.message)
