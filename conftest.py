"""Pytest configuration: set test env before any proxyhash imports so settings use test values."""

import os
import tempfile

import pytest

# Set before proxyhash.config is used so the default store lands in a temp dir
_tmp = tempfile.mkdtemp(prefix="proxyhash_test_")
os.environ.setdefault("PROXYHASH_DB_PATH", os.path.join(_tmp, "test.db"))
os.environ.setdefault("PROXYHASH_LOG_LEVEL", "DEBUG")


@pytest.fixture
def memory_store():
    """Fresh in-memory store."""
    from proxyhash.store.memory import MemoryKeyValueStore

    return MemoryKeyValueStore()


@pytest.fixture
def sqlite_store(tmp_path):
    """SQLite store on a per-test file; engine disposed afterwards."""
    from proxyhash.store.sqlite import SqliteKeyValueStore

    store = SqliteKeyValueStore(tmp_path / "store.db")
    yield store
    store.close()


@pytest.fixture(params=["memory", "sqlite"])
def any_store(request, tmp_path):
    """Each test using this runs against both backends."""
    from proxyhash.store.memory import MemoryKeyValueStore
    from proxyhash.store.sqlite import SqliteKeyValueStore

    if request.param == "memory":
        yield MemoryKeyValueStore()
        return
    store = SqliteKeyValueStore(tmp_path / "store.db")
    yield store
    store.close()
