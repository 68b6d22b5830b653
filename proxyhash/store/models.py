"""SQLAlchemy model for key/value entries, namespaced by key space."""

from sqlalchemy import LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from proxyhash.db.session import Base


class KeyValueEntry(Base):
    """One committed value. (key_space, key) is the on-disk key; do not change the layout."""

    __tablename__ = "kv_entries"

    key_space: Mapped[str] = mapped_column(String(64), primary_key=True)
    key: Mapped[bytes] = mapped_column(LargeBinary, primary_key=True)
    value: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
