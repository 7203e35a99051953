"""
GET /v1/countries/{country} -- One country's tile.

Same numbers the grid shows for that country, plus the human-readable
label the kiosk pops up when a tile is tapped. A country nobody has
registered from is not an error: it reports a count of zero.
"""

from fastapi import APIRouter, Depends

from origins_api.aggregation import count_by_country
from origins_api.models.schemas import CountryDetail
from origins_api.store import RegistrationStore, get_store
from origins_api.view import country_detail

router = APIRouter()


@router.get(
    "/v1/countries/{country}",
    response_model=CountryDetail,
    summary="Get one country's count and color",
    tags=["Dashboard"],
)
async def get_country(
    country: str,
    store: RegistrationStore = Depends(get_store),
) -> CountryDetail:
    counts = count_by_country(store.list())
    return country_detail(country, counts)
