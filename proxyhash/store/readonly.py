"""Wrapper that serves reads from another store and refuses to commit writes."""

import logging
from typing import Iterable, List, Optional

from proxyhash.errors import StoreWriteError
from proxyhash.store.base import KeySpace, KeyValueStore, WriteBatch

log = logging.getLogger(__name__)


class ReadOnlyWriteBatch(WriteBatch):
    def _commit(self, entries: dict) -> None:
        log.warning("Rejected flush of %d entries: store is read-only", len(entries))
        raise StoreWriteError("store is read-only")


class ReadOnlyKeyValueStore(KeyValueStore):
    def __init__(self, inner: KeyValueStore) -> None:
        self.inner = inner

    def get(self, key_space: KeySpace, key: bytes) -> Optional[bytes]:
        return self.inner.get(key_space, key)

    def get_batch(self, key_space: KeySpace, keys: Iterable[bytes]) -> List[Optional[bytes]]:
        return self.inner.get_batch(key_space, keys)

    def begin_write(self) -> ReadOnlyWriteBatch:
        return ReadOnlyWriteBatch()

    def close(self) -> None:
        self.inner.close()
