"""Tests for settings, logging setup and the store factory."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from proxyhash.config import Settings, get_settings
from proxyhash.errors import StoreWriteError
from proxyhash.hg.proxy_table import load_proxy_hash, store_proxy_hash
from proxyhash.logging_setup import setup_logging
from proxyhash.model.hash import Hash
from proxyhash.store.factory import open_store
from proxyhash.store.memory import MemoryKeyValueStore
from proxyhash.store.readonly import ReadOnlyKeyValueStore
from proxyhash.store.sqlite import SqliteKeyValueStore


def test_defaults(monkeypatch) -> None:
    """Without env overrides the store is SQLite with WAL and overwrite puts."""
    monkeypatch.delenv("PROXYHASH_DB_PATH", raising=False)
    monkeypatch.delenv("PROXYHASH_LOG_LEVEL", raising=False)
    settings = Settings()
    assert settings.store_backend == "sqlite"
    assert settings.db_path == Path("proxyhash.db")
    assert settings.journal_mode == "WAL"
    assert settings.put_behaviour == "overwrite"
    assert settings.read_only is False
    assert settings.log_level == "INFO"


def test_env_overrides(monkeypatch, tmp_path: Path) -> None:
    """PROXYHASH_* env vars populate settings; unknown ones are ignored."""
    monkeypatch.setenv("PROXYHASH_STORE_BACKEND", "memory")
    monkeypatch.setenv("PROXYHASH_DB_PATH", str(tmp_path / "x.db"))
    monkeypatch.setenv("PROXYHASH_JOURNAL_MODE", "delete")
    monkeypatch.setenv("PROXYHASH_READ_ONLY", "true")
    monkeypatch.setenv("PROXYHASH_LOG_LEVEL", "debug")
    monkeypatch.setenv("PROXYHASH_SOMETHING_ELSE", "1")
    settings = get_settings()
    assert settings.store_backend == "memory"
    assert settings.db_path == tmp_path / "x.db"
    assert settings.journal_mode == "DELETE"
    assert settings.read_only is True
    assert settings.log_level == "DEBUG"


def test_invalid_values_rejected(monkeypatch) -> None:
    """Unknown backend or journal mode fails validation."""
    monkeypatch.setenv("PROXYHASH_STORE_BACKEND", "rocksdb")
    with pytest.raises(ValidationError):
        get_settings()
    monkeypatch.delenv("PROXYHASH_STORE_BACKEND")
    with pytest.raises(ValidationError):
        Settings(journal_mode="sometimes")


def test_open_store_memory() -> None:
    """Memory backend builds a MemoryKeyValueStore."""
    store = open_store(Settings(store_backend="memory"))
    assert isinstance(store, MemoryKeyValueStore)


def test_open_store_sqlite_from_env(tmp_path: Path, monkeypatch) -> None:
    """Without explicit settings, open_store reads env and opens SQLite at db_path."""
    monkeypatch.setenv("PROXYHASH_DB_PATH", str(tmp_path / "env.db"))
    monkeypatch.delenv("PROXYHASH_STORE_BACKEND", raising=False)
    store = open_store()
    try:
        assert isinstance(store, SqliteKeyValueStore)
        assert store.db_path == tmp_path / "env.db"
        batch = store.begin_write()
        key = store_proxy_hash("foobar", Hash("11" * 20), batch)
        batch.flush()
        assert load_proxy_hash(store, key, "factory").path == b"foobar"
    finally:
        store.close()
    assert (tmp_path / "env.db").exists()


def test_open_store_read_only(tmp_path: Path) -> None:
    """read_only wraps the backend so flushes fail."""
    store = open_store(Settings(store_backend="sqlite", db_path=tmp_path / "ro.db", read_only=True))
    try:
        assert isinstance(store, ReadOnlyKeyValueStore)
        batch = store.begin_write()
        store_proxy_hash("foobar", Hash("11" * 20), batch)
        with pytest.raises(StoreWriteError):
            batch.flush()
    finally:
        store.close()


def test_setup_logging_stderr_only() -> None:
    """One stream handler at the configured level; repeat calls do not stack handlers."""
    settings = Settings(log_level="WARNING", log_file="")
    setup_logging(settings)
    root = setup_logging(settings)
    assert root.name == "proxyhash"
    assert root.level == logging.WARNING
    assert len(root.handlers) == 1


def test_setup_logging_with_file(tmp_path: Path) -> None:
    """log_file adds a file handler that receives records."""
    log_file = tmp_path / "proxyhash.log"
    root = setup_logging(Settings(log_level="INFO", log_file=str(log_file)))
    try:
        logging.getLogger("proxyhash.test").info("hello from test")
        for h in root.handlers:
            h.flush()
        assert len(root.handlers) == 2
        assert "hello from test" in log_file.read_text(encoding="utf-8")
    finally:
        setup_logging(Settings(log_level="INFO", log_file=""))


def test_setup_logging_bad_file_falls_back(tmp_path: Path) -> None:
    """Unopenable log file leaves stderr logging in place."""
    bad = tmp_path / "missing-dir" / "x.log"
    root = setup_logging(Settings(log_file=str(bad)))
    assert len(root.handlers) == 1
