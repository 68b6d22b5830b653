"""In-process key/value store (tests and ephemeral mounts). Nothing survives the process."""

import logging
import threading
from typing import Dict, Iterable, List, Optional, Tuple

from proxyhash.store.base import KeySpace, KeyValueStore, WriteBatch, check_bytes

log = logging.getLogger(__name__)


class MemoryWriteBatch(WriteBatch):
    def __init__(self, store: "MemoryKeyValueStore") -> None:
        super().__init__()
        self._store = store

    def _commit(self, entries: dict) -> None:
        self._store._apply(entries)


class MemoryKeyValueStore(KeyValueStore):
    """Dict guarded by one lock; a flush applies its whole batch under the lock."""

    def __init__(self, if_absent: bool = False) -> None:
        self._data: Dict[Tuple[KeySpace, bytes], bytes] = {}
        self._lock = threading.Lock()
        self._if_absent = if_absent

    def get(self, key_space: KeySpace, key: bytes) -> Optional[bytes]:
        k = (KeySpace(key_space), check_bytes("key", key))
        with self._lock:
            return self._data.get(k)

    def get_batch(self, key_space: KeySpace, keys: Iterable[bytes]) -> List[Optional[bytes]]:
        space = KeySpace(key_space)
        wanted = [(space, check_bytes("key", key)) for key in keys]
        with self._lock:
            return [self._data.get(k) for k in wanted]

    def begin_write(self) -> MemoryWriteBatch:
        return MemoryWriteBatch(self)

    def _apply(self, entries: dict) -> None:
        with self._lock:
            if self._if_absent:
                for k, v in entries.items():
                    self._data.setdefault(k, v)
            else:
                self._data.update(entries)
        log.debug("memory store committed %d entries", len(entries))
