"""Repository-relative path validation (no absolute paths, no traversal)."""

from typing import Union

from proxyhash.errors import InvalidPathError

PathLike = Union[str, bytes, bytearray, memoryview]


def _check_component(component: bytes, path: bytes) -> None:
    """Reject empty, '.', '..' and components carrying a NUL byte."""
    if not component:
        raise InvalidPathError(f"Empty path component in {path!r}")
    if component in (b".", b".."):
        raise InvalidPathError(f"Unsafe path component {component!r} in {path!r}")
    if b"\x00" in component:
        raise InvalidPathError(f"NUL byte in path {path!r}")


def to_relative_path(path: PathLike) -> bytes:
    """
    Return path as validated UTF-8 bytes. str is encoded; bytes are taken as-is.
    The empty path (repository root) is valid. Components are separated by '/'.
    """
    if isinstance(path, str):
        try:
            raw = path.encode("utf-8")
        except UnicodeEncodeError as e:
            raise InvalidPathError(f"Path is not encodable as UTF-8: {path!r}") from e
    elif isinstance(path, (bytes, bytearray, memoryview)):
        raw = bytes(path)
    else:
        raise TypeError(f"path must be str or bytes, not {type(path).__name__}")
    if not raw:
        return raw
    if raw.startswith(b"/"):
        raise InvalidPathError(f"Path must be relative: {raw!r}")
    if raw.endswith(b"/"):
        raise InvalidPathError(f"Path must not end with '/': {raw!r}")
    for component in raw.split(b"/"):
        _check_component(component, raw)
    return raw


def path_to_str(path: bytes) -> str:
    """Decode path bytes for display; undecodable bytes are escaped."""
    return path.decode("utf-8", errors="backslashreplace")
