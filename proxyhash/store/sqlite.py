"""Durable key/value store on SQLite (SQLAlchemy). Each flush is one transaction."""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError

from proxyhash.db.session import create_store_engine, get_session, init_db, make_session_factory
from proxyhash.errors import StoreReadError, StoreWriteError
from proxyhash.store.base import KeySpace, KeyValueStore, WriteBatch, check_bytes
from proxyhash.store.models import KeyValueEntry

log = logging.getLogger(__name__)

# stay under SQLite parameter limit
_CHUNK = 500
_ROWS_PER_STATEMENT = 300


class SqliteWriteBatch(WriteBatch):
    def __init__(self, store: "SqliteKeyValueStore") -> None:
        super().__init__()
        self._store = store

    def _commit(self, entries: dict) -> None:
        self._store._apply(entries)


class SqliteKeyValueStore(KeyValueStore):
    """
    Entries live in kv_entries keyed by (key_space, key).
    if_absent=True keeps the first committed value on conflict; otherwise the last flush wins.
    """

    def __init__(self, db_path: Path, journal_mode: str = "WAL", if_absent: bool = False) -> None:
        self.db_path = Path(db_path)
        self._if_absent = if_absent
        self._engine = create_store_engine(self.db_path, journal_mode=journal_mode)
        self._sessions = make_session_factory(self._engine)
        mode = init_db(self._engine)
        log.info("Opened SQLite store %s (journal_mode=%s)", self.db_path, mode)

    def get(self, key_space: KeySpace, key: bytes) -> Optional[bytes]:
        space = KeySpace(key_space)
        key = check_bytes("key", key)
        try:
            with self._sessions() as session:
                return session.execute(
                    select(KeyValueEntry.value).where(
                        KeyValueEntry.key_space == space.value,
                        KeyValueEntry.key == key,
                    )
                ).scalar_one_or_none()
        except SQLAlchemyError as e:
            log.error("get failed key_space=%s key=%s: %s", space.value, key.hex(), e)
            raise StoreReadError(f"read from {self.db_path} failed: {e}") from e

    def get_batch(self, key_space: KeySpace, keys: Iterable[bytes]) -> List[Optional[bytes]]:
        space = KeySpace(key_space)
        wanted = [check_bytes("key", key) for key in keys]
        found: Dict[bytes, bytes] = {}
        unique = list(dict.fromkeys(wanted))
        try:
            with self._sessions() as session:
                for i in range(0, len(unique), _CHUNK):
                    part = unique[i : i + _CHUNK]
                    result = session.execute(
                        select(KeyValueEntry.key, KeyValueEntry.value).where(
                            KeyValueEntry.key_space == space.value,
                            KeyValueEntry.key.in_(part),
                        )
                    )
                    for row in result.all():
                        found[row[0]] = row[1]
        except SQLAlchemyError as e:
            log.error("get_batch failed key_space=%s count=%d: %s", space.value, len(unique), e)
            raise StoreReadError(f"batch read from {self.db_path} failed: {e}") from e
        return [found.get(key) for key in wanted]

    def begin_write(self) -> SqliteWriteBatch:
        return SqliteWriteBatch(self)

    def _apply(self, entries: dict) -> None:
        rows = [
            {"key_space": space.value, "key": key, "value": value}
            for (space, key), value in entries.items()
        ]
        try:
            with get_session(self._sessions) as session:
                # one transaction; statements chunked to stay under the parameter limit
                for i in range(0, len(rows), _ROWS_PER_STATEMENT):
                    session.execute(self._upsert(rows[i : i + _ROWS_PER_STATEMENT]))
        except SQLAlchemyError as e:
            log.error("flush of %d entries to %s failed: %s", len(rows), self.db_path, e)
            raise StoreWriteError(f"commit to {self.db_path} failed: {e}") from e
        log.debug("sqlite store committed %d entries", len(rows))

    def _upsert(self, rows: List[dict]):
        stmt = sqlite_insert(KeyValueEntry).values(rows)
        if self._if_absent:
            return stmt.on_conflict_do_nothing(index_elements=["key_space", "key"])
        return stmt.on_conflict_do_update(
            index_elements=["key_space", "key"],
            set_={"value": stmt.excluded.value},
        )

    def close(self) -> None:
        self._engine.dispose()
