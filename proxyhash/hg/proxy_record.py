"""(path, revision hash) pair addressed through a fixed-size proxy hash.

Serialized layout, a durable on-disk format:

    uint32 big-endian path length | path bytes | 20-byte revision hash

The proxy hash is the SHA-1 of that serialization, so it needs no truncation and
no central counter: equal pairs always map to the same key.
"""

import struct
from typing import Optional, Tuple

from proxyhash.errors import InvalidPathError, MalformedRecordError
from proxyhash.model.hash import RAW_SIZE, ZERO_HASH, Hash
from proxyhash.model.paths import PathLike, path_to_str, to_relative_path

_LENGTH = struct.Struct(">I")
MIN_SERIALIZED_SIZE = _LENGTH.size + RAW_SIZE


def serialize(path: PathLike, rev_hash: Hash) -> bytes:
    """Canonical, injective encoding of (path, rev_hash)."""
    raw_path = to_relative_path(path)
    if not isinstance(rev_hash, Hash):
        raise TypeError(f"rev_hash must be Hash, not {type(rev_hash).__name__}")
    if len(raw_path) > 0xFFFFFFFF:
        raise ValueError(f"path too long to serialize: {len(raw_path)} bytes")
    return _LENGTH.pack(len(raw_path)) + raw_path + rev_hash.raw


def deserialize(data: bytes) -> Tuple[bytes, Hash]:
    """Inverse of serialize. Raises MalformedRecordError on any size mismatch."""
    data = bytes(data)
    if len(data) < MIN_SERIALIZED_SIZE:
        raise MalformedRecordError(
            f"record is {len(data)} bytes, need at least {MIN_SERIALIZED_SIZE}"
        )
    (path_len,) = _LENGTH.unpack_from(data)
    expected = MIN_SERIALIZED_SIZE + path_len
    if len(data) != expected:
        raise MalformedRecordError(
            f"record is {len(data)} bytes but path length {path_len} implies {expected}"
        )
    start = _LENGTH.size
    try:
        path = to_relative_path(data[start : start + path_len])
    except InvalidPathError as e:
        raise MalformedRecordError(f"record holds an invalid path: {e}") from e
    rev_hash = Hash(data[start + path_len :])
    return path, rev_hash


def derive_key(path: PathLike, rev_hash: Hash) -> Hash:
    """Proxy hash for (path, rev_hash): SHA-1 of the serialized pair."""
    return Hash.sha1(serialize(path, rev_hash))


class ProxyRecord:
    """
    Value type holding a repository-relative path and a revision hash.

    ProxyRecord() is the empty record: path b"" and the all-zero hash. It is
    valid to read but names nothing useful. Copies never share state; take()
    moves the contents out and resets this record to empty.
    """

    __slots__ = ("_path", "_rev_hash")

    def __init__(self, path: PathLike = b"", rev_hash: Optional[Hash] = None) -> None:
        self._path = to_relative_path(path)
        self._rev_hash = ZERO_HASH if rev_hash is None else rev_hash
        if not isinstance(self._rev_hash, Hash):
            raise TypeError(f"rev_hash must be Hash, not {type(rev_hash).__name__}")

    @classmethod
    def from_bytes(cls, data: bytes) -> "ProxyRecord":
        path, rev_hash = deserialize(data)
        record = cls()
        record._path = path
        record._rev_hash = rev_hash
        return record

    @classmethod
    def store(cls, path: PathLike, rev_hash: Hash, batch) -> Hash:
        """Stage the record in batch and return its proxy hash."""
        from proxyhash.hg.proxy_table import store_proxy_hash

        return store_proxy_hash(path, rev_hash, batch)

    @classmethod
    def load(cls, store, key: Hash, context: str) -> "ProxyRecord":
        """Resolve key through store; see load_proxy_hash."""
        from proxyhash.hg.proxy_table import load_proxy_hash

        return load_proxy_hash(store, key, context)

    @property
    def path(self) -> bytes:
        return self._path

    @property
    def path_str(self) -> str:
        return path_to_str(self._path)

    @property
    def rev_hash(self) -> Hash:
        return self._rev_hash

    def is_empty(self) -> bool:
        return not self._path and self._rev_hash.is_zero()

    def serialize(self) -> bytes:
        return serialize(self._path, self._rev_hash)

    def proxy_hash(self) -> Hash:
        return derive_key(self._path, self._rev_hash)

    def copy(self) -> "ProxyRecord":
        other = ProxyRecord()
        other._path = self._path
        other._rev_hash = self._rev_hash
        return other

    __copy__ = copy

    def __deepcopy__(self, memo) -> "ProxyRecord":
        return self.copy()

    def take(self) -> "ProxyRecord":
        """Move: return a record with this one's contents and reset this one to empty."""
        moved = self.copy()
        self._path = b""
        self._rev_hash = ZERO_HASH
        return moved

    def __eq__(self, other):
        if not isinstance(other, ProxyRecord):
            return NotImplemented
        return self._path == other._path and self._rev_hash == other._rev_hash

    def __repr__(self) -> str:
        return f"ProxyRecord(path={self._path!r}, rev_hash={self._rev_hash})"
