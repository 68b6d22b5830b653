"""Fixed-size proxy hashes for (path, revision hash) pairs, backed by a key/value store."""

from proxyhash.errors import (
    CorruptProxyRecordError,
    InvalidPathError,
    MalformedHashError,
    MalformedRecordError,
    ProxyHashError,
    ProxyHashNotFoundError,
    StoreReadError,
    StoreWriteError,
)
from proxyhash.hg.proxy_record import ProxyRecord, derive_key, deserialize, serialize
from proxyhash.hg.proxy_table import load_proxy_hash, load_proxy_hashes, store_proxy_hash
from proxyhash.model.hash import ZERO_HASH, Hash
from proxyhash.store.base import KeySpace, KeyValueStore, WriteBatch
from proxyhash.store.factory import open_store

__version__ = "0.1.0"

__all__ = [
    "CorruptProxyRecordError",
    "Hash",
    "InvalidPathError",
    "KeySpace",
    "KeyValueStore",
    "MalformedHashError",
    "MalformedRecordError",
    "ProxyHashError",
    "ProxyHashNotFoundError",
    "ProxyRecord",
    "StoreReadError",
    "StoreWriteError",
    "WriteBatch",
    "ZERO_HASH",
    "derive_key",
    "deserialize",
    "load_proxy_hash",
    "load_proxy_hashes",
    "open_store",
    "serialize",
    "store_proxy_hash",
]
