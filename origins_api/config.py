"""
Runtime configuration, read once from the environment at import time.

Every value has a demo-friendly default so the API starts with no setup:
    uvicorn origins_api.main:app --reload
"""

import logging
import os

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %d", name, raw, default)
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


# Where the registration blob lives. ":memory:" keeps it in-process only
# (lost on restart).
STORAGE_PATH = os.getenv("ORIGINS_STORAGE_PATH", ".local/origins/storage.json")
MEMORY_STORAGE = ":memory:"

# The single key that holds the JSON-encoded {"registrations": [...]} blob.
STORAGE_KEY = os.getenv("ORIGINS_STORAGE_KEY", "africaMapData")

# Browsers cap localStorage at roughly 5 MiB per origin. 0 disables the cap.
STORAGE_QUOTA_BYTES = _env_int("ORIGINS_STORAGE_QUOTA_BYTES", 5 * 1024 * 1024)

# How often the kiosk page re-runs the aggregation-and-render pass.
REFRESH_SECONDS = _env_int("ORIGINS_REFRESH_SECONDS", 10)

TOP_N = _env_int("ORIGINS_TOP_N", 10)
RECENT_N = _env_int("ORIGINS_RECENT_N", 5)

SEED_ON_STARTUP = _env_bool("ORIGINS_SEED_ON_STARTUP", True)

LOG_LEVEL = os.getenv("ORIGINS_LOG_LEVEL", "INFO").upper()
