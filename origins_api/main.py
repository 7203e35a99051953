"""
Origins Map API -- Application entry point.

Run with:
    uvicorn origins_api.main:app --reload

Then open http://localhost:8000 for the kiosk page,
or http://localhost:8000/docs for the interactive Swagger UI.

This file:
  1. Configures logging
  2. Creates the FastAPI application and seeds the store on startup
  3. Adds CORS middleware (a QR-code landing page may live on another origin)
  4. Mounts all route modules (register, registrations, dashboard, countries)
  5. Serves the self-refreshing kiosk page
  6. Defines the health check endpoint
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from origins_api import config
from origins_api.render import render_page
from origins_api.routes import countries, dashboard, register, registrations
from origins_api.store import RegistrationStore, get_store

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Startup
#
# Seed the storage key the first time the kiosk runs. Later starts find the
# key already present and leave it alone.
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    if config.SEED_ON_STARTUP:
        store_factory = app.dependency_overrides.get(get_store, get_store)
        store = store_factory()
        if store.ensure_default():
            logger.info("Initialized empty storage with seed data")
        else:
            logger.info("Reusing existing storage key '%s'", store.key)
    yield


app = FastAPI(
    title="Origins Map API",
    version="0.1.0",
    description=(
        "Country-of-origin registrations for a kiosk display.\n\n"
        "| Endpoint | Purpose |\n"
        "|----------|--------|\n"
        "| `POST /v1/register` | Add a registration |\n"
        "| `GET /v1/registrations` | List registrations |\n"
        "| `GET /v1/dashboard` | Counts, top countries, recent list, map colors |\n"
        "| `GET /v1/countries/{country}` | One country's count and color |\n"
    ),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Handlers are async but call the store synchronously: FileStorage reads and
# writes block the event loop. Acceptable for a single kiosk.
app.include_router(register.router)
app.include_router(registrations.router)
app.include_router(dashboard.router)
app.include_router(countries.router)


# ---------------------------------------------------------------------------
# Kiosk page
# ---------------------------------------------------------------------------

@app.get("/", response_class=HTMLResponse, include_in_schema=False)
async def kiosk_page(
    refresh: int = Query(default=config.REFRESH_SECONDS, ge=0),
    store: RegistrationStore = Depends(get_store),
):
    """The map and leaderboards, rebuilt from the store on every load."""
    view = dashboard.load_dashboard(store, top=config.TOP_N, recent=config.RECENT_N)
    return HTMLResponse(render_page(view, refresh_seconds=refresh))


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

@app.get(
    "/v1/health",
    summary="Health check",
    description="Returns the current status of the API and how many registrations are stored.",
    tags=["System"],
)
async def health(store: RegistrationStore = Depends(get_store)):
    return {
        "status": "healthy",
        "version": "0.1.0",
        "storage": repr(store.storage),
        "storage_key": store.key,
        "registrations_stored": len(store.list()),
    }
