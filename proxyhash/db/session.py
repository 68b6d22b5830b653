"""SQLite engine and session for the durable key/value store."""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base = declarative_base()


def create_store_engine(db_path: Path, journal_mode: str = "WAL") -> Engine:
    """Engine for a SQLite file; every new connection gets the journal mode and busy timeout."""
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        # flushes and reads come from many threads; the pool hands each its own connection
        connect_args={"check_same_thread": False, "timeout": 30},
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragmas(dbapi_conn, _record) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute(f"PRAGMA journal_mode={journal_mode}")
        cursor.execute("PRAGMA synchronous=FULL")
        cursor.close()

    return engine


def _journal_mode(conn) -> str:
    return conn.execute(text("PRAGMA journal_mode")).scalar_one()


def init_db(engine: Engine) -> str:
    """Create tables if they do not exist. Returns the active journal mode."""
    with engine.begin() as conn:
        Base.metadata.create_all(conn)
        return _journal_mode(conn)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(engine, class_=Session, expire_on_commit=False, autoflush=False)


@contextmanager
def get_session(factory: sessionmaker) -> Iterator[Session]:
    """Yield a session; commit on success, roll back and re-raise on error."""
    with factory() as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
