"""Key/value store contract: point reads plus buffered, explicitly flushed write batches.

Writes staged in a WriteBatch stay invisible until flush(), which commits all of
them or none. Keys live in a KeySpace so unrelated tables can share one store.
"""

import enum
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional


class KeySpace(str, enum.Enum):
    """Namespaces within a shared store. Values are persisted; do not rename."""

    HG_PROXY_HASH = "hgproxyhash"


def check_bytes(name: str, value: object) -> bytes:
    """Return value as bytes or raise TypeError (str is rejected, encode it first)."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"{name} must be bytes, not {type(value).__name__}")


class WriteBatch(ABC):
    """Caller-owned buffer of staged writes. Not thread-safe; one batch per writer."""

    def __init__(self) -> None:
        self._pending: dict = {}

    def put(self, key_space: KeySpace, key: bytes, value: bytes) -> None:
        """Stage key -> value. A later put for the same key in this batch wins."""
        self._pending[(KeySpace(key_space), check_bytes("key", key))] = check_bytes("value", value)

    def __len__(self) -> int:
        return len(self._pending)

    def flush(self) -> None:
        """Commit all staged writes atomically, then clear the batch. Raises StoreWriteError."""
        if not self._pending:
            return
        self._commit(dict(self._pending))
        self._pending.clear()

    @abstractmethod
    def _commit(self, entries: dict) -> None:
        """Durably apply {(key_space, key): value}; all or nothing."""


class KeyValueStore(ABC):
    """Shared, long-lived store. get() never sees partially committed batches."""

    @abstractmethod
    def get(self, key_space: KeySpace, key: bytes) -> Optional[bytes]:
        """Return the committed value, or None when the key is absent."""

    def get_batch(self, key_space: KeySpace, keys: Iterable[bytes]) -> List[Optional[bytes]]:
        """Return values in the order of keys (None for absent keys)."""
        return [self.get(key_space, key) for key in keys]

    @abstractmethod
    def begin_write(self) -> WriteBatch:
        """Open a new, empty write batch."""

    def close(self) -> None:
        """Release resources held by the store."""
