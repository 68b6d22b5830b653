"""Exception types raised by the proxy hash layer and its stores."""

from typing import Any


class ProxyHashError(Exception):
    """Base class for every error raised by this package."""


class MalformedHashError(ProxyHashError, ValueError):
    """Text or raw bytes do not describe a 20-byte hash."""


class InvalidPathError(ProxyHashError, ValueError):
    """Path is not a valid repository-relative path."""


class MalformedRecordError(ProxyHashError, ValueError):
    """Bytes are not a valid serialized (path, revision hash) pair."""


class StoreWriteError(ProxyHashError):
    """The key/value store failed to stage or commit a write."""


class StoreReadError(ProxyHashError):
    """The key/value store failed while reading (not the same as a missing key)."""


class ProxyHashNotFoundError(ProxyHashError, LookupError):
    """No proxy record is stored under the key."""

    def __init__(self, key: Any, context: str) -> None:
        self.key = key
        self.context = context
        super().__init__(f"proxy hash {key} not found in store (context: {context})")


class CorruptProxyRecordError(ProxyHashError):
    """A proxy record exists under the key but its bytes do not decode."""

    def __init__(self, key: Any, context: str, reason: str = "") -> None:
        self.key = key
        self.context = context
        self.reason = reason
        msg = f"corrupt proxy record for {key} (context: {context})"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
