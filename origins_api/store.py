"""
Registration store.

One storage key holds a JSON-encoded {"registrations": [...]} blob. This
module is the only code that reads or writes it. Everything else gets a
RegistrationStore handed to it (FastAPI injects it through get_store), so
tests swap in a MemoryStorage-backed store without touching the routes.

The blob is read-modify-written whole on every append. A blob that can't be
parsed is treated as an empty store rather than an error.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Callable

from pydantic import ValidationError

from origins_api import config
from origins_api.models.schemas import Registration, StoreData
from origins_api.storage import FileStorage, KeyValueStorage, MemoryStorage

logger = logging.getLogger(__name__)

DEFAULT_NAME = "Anonymous"

# Written once, the first time the kiosk starts against an empty storage key.
SEED_REGISTRATIONS = [
    {
        "id": 1,
        "country": "Nigeria",
        "name": "Demo User",
        "message": "Welcome to the African Origins Map!",
    },
]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a trailing Z."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class RegistrationStore:
    """Explicit handle over the shared registration blob.

    load() / list() / append() are the whole storage interface; register()
    and ensure_default() are built on top of them.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = config.STORAGE_KEY,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.storage = storage
        self.key = key
        self.clock = clock
        self._listeners: list[Callable[[Registration], None]] = []

    # -------- Reading --------

    def _load_blob(self) -> dict | None:
        """The decoded blob, untouched. None if the key is absent or unreadable."""
        raw = self.storage.get_item(self.key)
        if raw is None:
            return None

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Stored blob under '%s' is not valid JSON (%s), using empty store", self.key, e)
            return None

        if not isinstance(data, dict) or not isinstance(data.get("registrations"), list):
            logger.warning("Stored blob under '%s' has no registrations list, using empty store", self.key)
            return None
        return data

    def load(self) -> StoreData:
        data = self._load_blob()
        if data is None:
            return StoreData()

        registrations = []
        for item in data["registrations"]:
            try:
                registrations.append(Registration.model_validate(item))
            except ValidationError:
                logger.debug("Skipping malformed registration entry: %r", item)
        return StoreData(registrations=registrations)

    def list(self) -> list[Registration]:
        return self.load().registrations

    # -------- Writing --------

    def _save(self, data: StoreData) -> None:
        # StorageQuotaExceeded and filesystem errors propagate from here.
        self.storage.set_item(self.key, data.model_dump_json())

    def append(self, registration: Registration) -> None:
        """Add one registration to the stored list.

        Works on the raw decoded list, so entries load() can't parse are
        written back exactly as they were.
        """
        data = self._load_blob()
        if data is None:
            if self.storage.get_item(self.key) is not None:
                logger.warning("Replacing unreadable blob under '%s' with a new registrations list", self.key)
            data = {"registrations": []}

        data["registrations"].append(registration.model_dump(mode="json"))
        # StorageQuotaExceeded and filesystem errors propagate from here.
        self.storage.set_item(self.key, json.dumps(data, ensure_ascii=False))

    def ensure_default(self, seed: list[dict] | None = None) -> bool:
        """Write the seed dataset if the storage key is absent.

        Idempotent: once the key exists -- even holding a blob that fails to
        parse -- nothing is written. Returns True if the seed was written.
        """
        if self.storage.get_item(self.key) is not None:
            return False

        now = format_timestamp(self.clock())
        rows = SEED_REGISTRATIONS if seed is None else seed
        registrations = [
            Registration.model_validate({"timestamp": now, **row}) for row in rows
        ]
        self._save(StoreData(registrations=registrations))
        logger.info("Seeded storage key '%s' with %d registration(s)", self.key, len(registrations))
        return True

    def register(
        self,
        country: str,
        name: str | None = None,
        message: str | None = None,
    ) -> Registration:
        """Append a new registration and tell listeners about it.

        The country is stripped but not checked against any list of known
        countries.
        """
        self.ensure_default()

        moment = self.clock()
        registration = Registration(
            id=int(moment.timestamp() * 1000),
            country=country.strip(),
            name=(name or "").strip() or DEFAULT_NAME,
            message=message or "",
            timestamp=format_timestamp(moment),
        )
        self.append(registration)
        logger.info("Registered id=%d country=%s", registration.id, registration.country)

        for listener in list(self._listeners):
            listener(registration)
        return registration

    # -------- Change notification --------

    def subscribe(self, listener: Callable[[Registration], None]) -> None:
        """Call listener(registration) after every successful register()."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Callable[[Registration], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)


def build_storage(
    path: str = config.STORAGE_PATH,
    quota_bytes: int = config.STORAGE_QUOTA_BYTES,
) -> KeyValueStorage:
    if path == config.MEMORY_STORAGE:
        return MemoryStorage(quota_bytes=quota_bytes)
    return FileStorage(path, quota_bytes=quota_bytes)


_store: RegistrationStore | None = None


def get_store() -> RegistrationStore:
    """FastAPI dependency returning the process-wide store.

    Built lazily from config so importing this module never touches disk.
    Tests replace it with app.dependency_overrides[get_store].
    """
    global _store
    if _store is None:
        _store = RegistrationStore(build_storage(), key=config.STORAGE_KEY)
    return _store
