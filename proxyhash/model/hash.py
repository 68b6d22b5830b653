"""Fixed-width 160-bit hash value used as a proxy identifier and as a revision hash."""

import binascii
import hashlib
from functools import total_ordering
from typing import Optional, Union

from proxyhash.errors import MalformedHashError

RAW_SIZE = 20
HEX_SIZE = RAW_SIZE * 2
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


@total_ordering
class Hash:
    """
    Immutable 20-byte identifier. Hash() is the all-zero value.
    Accepts 20 raw bytes or 40 hex characters (either case); renders lowercase hex.
    """

    __slots__ = ("_raw",)

    def __init__(self, value: Optional[Union[bytes, bytearray, memoryview, str]] = None) -> None:
        if value is None:
            raw = bytes(RAW_SIZE)
        elif isinstance(value, str):
            raw = _parse_hex(value)
        elif isinstance(value, (bytes, bytearray, memoryview)):
            raw = bytes(value)
            if len(raw) != RAW_SIZE:
                raise MalformedHashError(
                    f"hash must be {RAW_SIZE} raw bytes, got {len(raw)}"
                )
        else:
            raise TypeError(f"cannot build Hash from {type(value).__name__}")
        object.__setattr__(self, "_raw", raw)

    def __setattr__(self, name, value):
        raise AttributeError("Hash is immutable")

    @classmethod
    def from_hex(cls, text: str) -> "Hash":
        """Parse 40 hex characters."""
        return cls(_parse_hex(text))

    @classmethod
    def sha1(cls, data: bytes) -> "Hash":
        """SHA-1 digest of data."""
        return cls(hashlib.sha1(data).digest())

    @property
    def raw(self) -> bytes:
        return self._raw

    def hex(self) -> str:
        return self._raw.hex()

    def is_zero(self) -> bool:
        return self._raw == ZERO_RAW

    def __bytes__(self) -> bytes:
        return self._raw

    def __str__(self) -> str:
        return self._raw.hex()

    def __repr__(self) -> str:
        return f"Hash({self._raw.hex()!r})"

    def __eq__(self, other):
        if not isinstance(other, Hash):
            return NotImplemented
        return self._raw == other._raw

    def __lt__(self, other):
        if not isinstance(other, Hash):
            return NotImplemented
        return self._raw < other._raw

    def __hash__(self) -> int:
        return hash(self._raw)

    def __copy__(self) -> "Hash":
        return self

    def __deepcopy__(self, memo) -> "Hash":
        return self

    def __reduce__(self):
        return (Hash, (self._raw,))


def _parse_hex(text: str) -> bytes:
    if len(text) != HEX_SIZE:
        raise MalformedHashError(
            f"hash must be {HEX_SIZE} hex characters, got {len(text)}: {text!r}"
        )
    # bytes.fromhex skips whitespace, so check the digits ourselves
    if not all(c in _HEX_DIGITS for c in text):
        raise MalformedHashError(f"hash contains non-hex characters: {text!r}")
    try:
        return binascii.unhexlify(text)
    except binascii.Error as e:
        raise MalformedHashError(f"invalid hex hash {text!r}: {e}") from e


ZERO_RAW = bytes(RAW_SIZE)
ZERO_HASH = Hash()
