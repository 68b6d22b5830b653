"""Build the configured key/value store."""

import logging
from typing import Optional

from proxyhash.config import Settings, get_settings
from proxyhash.store.base import KeyValueStore
from proxyhash.store.memory import MemoryKeyValueStore
from proxyhash.store.readonly import ReadOnlyKeyValueStore
from proxyhash.store.sqlite import SqliteKeyValueStore

log = logging.getLogger(__name__)


def open_store(settings: Optional[Settings] = None) -> KeyValueStore:
    """Open the backend named by settings.store_backend, wrapped read-only if configured."""
    settings = settings or get_settings()
    if_absent = settings.put_behaviour == "if_absent"
    store: KeyValueStore
    if settings.store_backend == "memory":
        store = MemoryKeyValueStore(if_absent=if_absent)
    else:
        store = SqliteKeyValueStore(
            settings.db_path,
            journal_mode=settings.journal_mode,
            if_absent=if_absent,
        )
    log.info(
        "Store backend=%s put_behaviour=%s read_only=%s",
        settings.store_backend,
        settings.put_behaviour,
        settings.read_only,
    )
    if settings.read_only:
        store = ReadOnlyKeyValueStore(store)
    return store
