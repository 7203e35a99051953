"""
Origins Map API — Pydantic Data Models

Every record, request, and response the service handles is defined here.
The stored blob uses the same Registration shape as the wire format, so a
registration read back from storage is exactly what the client was given
when it registered.

The Field() calls add descriptions and examples that show up directly
in the interactive docs at /docs.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Stored records
# ---------------------------------------------------------------------------

class Registration(BaseModel):
    """One submitted (country, name, message, timestamp) record.

    Registrations are immutable once created -- the collection is
    append-only, so nothing ever edits one in place."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(
        default=0,
        description=(
            "Creation time in wall-clock milliseconds. Monotonic-ish, not guaranteed unique. "
            "0 for older entries stored without one."
        ),
        examples=[1705314600000],
    )
    country: str = Field(
        description="Country the participant registered from. Not checked against a known list.",
        examples=["Nigeria"],
    )
    name: str = Field(
        default="Anonymous",
        description="Display name shown in the recent registrations list.",
        examples=["John"],
    )
    message: str = Field(
        default="",
        description="Optional free-text message.",
        examples=["Welcome to the African Origins Map!"],
    )
    timestamp: str = Field(
        description="When the registration was made (ISO-8601, UTC).",
        examples=["2024-01-15T10:30:00.000Z"],
    )


class StoreData(BaseModel):
    """The whole stored blob: one key holding every registration."""

    registrations: list[Registration] = Field(default=[])


# ---------------------------------------------------------------------------
# POST /v1/register
# ---------------------------------------------------------------------------

class RegisterRequest(BaseModel):
    """What the kiosk form (or a QR-code landing page) submits."""

    country: str = Field(
        min_length=1,
        description="Country name. Any non-blank string is accepted.",
        examples=["Ghana"],
    )
    name: str | None = Field(
        default=None,
        description="Participant name. Blank or missing becomes 'Anonymous'.",
        examples=["Sarah"],
    )
    message: str | None = Field(
        default=None,
        description="Optional message to attach to the registration.",
        examples=["Greetings from Accra"],
    )

    @field_validator("country")
    @classmethod
    def _country_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("country must not be blank")
        return value


# ---------------------------------------------------------------------------
# GET /v1/dashboard — the kiosk view-model
# ---------------------------------------------------------------------------

class DashboardStats(BaseModel):
    total_count: int = Field(description="Number of registrations stored.", examples=[7])
    unique_country_count: int = Field(description="Number of distinct countries.", examples=[4])
    last_update_time: str = Field(
        description="Local time the view was built (HH:MM:SS).",
        examples=["10:55:02"],
    )


class TopCountryEntry(BaseModel):
    rank: int = Field(ge=1, examples=[1])
    country: str = Field(examples=["Nigeria"])
    count: int = Field(ge=0, examples=[3])
    medal: str = Field(
        default="",
        description="Medal emoji for the first three ranks, empty otherwise.",
        examples=["🥇"],
    )


class RecentEntry(BaseModel):
    id: int
    name: str = Field(examples=["Emma"])
    country: str = Field(examples=["Nigeria"])
    message: str = Field(default="")
    time: str = Field(description="Registration time (HH:MM), or '' if unparseable.", examples=["10:55"])


class MapCell(BaseModel):
    """One tile of the country grid. Only countries with registrations appear."""

    country: str = Field(examples=["Nigeria"])
    count: int = Field(ge=0, examples=[3])
    intensity: float = Field(ge=0.0, le=1.0, examples=[1.0])
    color: str = Field(examples=["rgb(27, 94, 32)"])
    label: str = Field(examples=["Nigeria: 3 participants"])


class MapPath(BaseModel):
    """One placeholder choropleth shape. Every known country appears, even at zero."""

    country: str = Field(examples=["Kenya"])
    path: str = Field(description="Illustrative SVG path data, not a real projection.")
    count: int = Field(ge=0, examples=[1])
    fill: str = Field(examples=["rgb(163, 196, 163)"])
    stroke: str = Field(default="#ffffff")


class DashboardView(BaseModel):
    """Everything the kiosk page needs, computed without touching any page."""

    stats: DashboardStats
    top_countries: list[TopCountryEntry] = Field(default=[])
    recent: list[RecentEntry] = Field(default=[])
    grid: list[MapCell] = Field(default=[])
    paths: list[MapPath] = Field(default=[])
    top_empty_text: str | None = Field(
        default=None,
        description="Placeholder text when there is nothing to rank.",
        examples=["No registrations yet"],
    )
    recent_empty_text: str | None = Field(default=None, examples=["No recent registrations"])
    grid_empty_text: str | None = Field(
        default=None,
        examples=["No country data yet. Scan QR code to register!"],
    )


# ---------------------------------------------------------------------------
# GET /v1/countries/{country}
# ---------------------------------------------------------------------------

class CountryDetail(BaseModel):
    """What the kiosk shows when a country tile is tapped."""

    country: str = Field(examples=["Ghana"])
    count: int = Field(ge=0, examples=[2])
    intensity: float = Field(ge=0.0, le=1.0, examples=[0.667])
    color: str = Field(examples=["rgb(95, 144, 99)"])
    label: str = Field(examples=["Ghana: 2 participants"])
