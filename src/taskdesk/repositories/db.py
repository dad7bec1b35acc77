# Rev 0.1.0

"""SQLite connection & schema bootstrap (Rev 0.1.0)
- One short-lived connection per operation, always closed
- WAL journal, busy timeout
- TASKS table created on first use; DUEDATE / RECURRENCE_DAYS added to older tables
"""
from __future__ import annotations
import contextlib
import sqlite3
from pathlib import Path
from typing import Iterator

from ..errors import StoreError
from ..utils.logging_setup import get_logger

TABLE = "TASKS"

CREATE_TASKS = f"""
CREATE TABLE {TABLE} (
    ID INTEGER PRIMARY KEY,
    TITLE VARCHAR(255) NOT NULL,
    DESCRIPTION VARCHAR(1024),
    STATE VARCHAR(32) NOT NULL,
    DUEDATE DATE,
    RECURRENCE_DAYS INTEGER
)
"""

# Columns added after the first schema revision
UPGRADE_COLUMNS = (
    ("DUEDATE", "DATE"),
    ("RECURRENCE_DAYS", "INTEGER"),
)


def _already_exists(e: sqlite3.Error) -> bool:
    msg = str(e).lower()
    return "already exists" in msg or "duplicate column" in msg


class Database:
    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._log = get_logger("Database")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreError(f"Cannot create database directory {self.path.parent}", e) from e

    @contextlib.contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        """Yield a fresh connection; commit on success, roll back on error, always close."""
        try:
            conn = sqlite3.connect(str(self.path), timeout=30.0)
        except sqlite3.Error as e:
            raise StoreError(f"Cannot open database {self.path}", e) from e
        try:
            conn.row_factory = sqlite3.Row
            with contextlib.suppress(sqlite3.Error):
                conn.execute("PRAGMA journal_mode=WAL")
            yield conn
            conn.commit()
        except BaseException:
            with contextlib.suppress(sqlite3.Error):
                conn.rollback()
            raise
        finally:
            conn.close()

    def columns(self, conn: sqlite3.Connection, table: str = TABLE) -> set[str]:
        return {str(r["name"]).upper() for r in conn.execute(f"PRAGMA table_info({table})").fetchall()}

    def ensure_schema(self) -> list[str]:
        """Create or upgrade TASKS. Returns the names of columns that were added."""
        added: list[str] = []
        try:
            with self.connect() as conn:
                try:
                    conn.execute(CREATE_TASKS)
                    self._log.info("Created table %s in %s", TABLE, self.path)
                except sqlite3.OperationalError as e:
                    if not _already_exists(e):
                        raise

                cols = self.columns(conn)
                for name, decl in UPGRADE_COLUMNS:
                    if name in cols:
                        continue
                    try:
                        conn.execute(f"ALTER TABLE {TABLE} ADD COLUMN {name} {decl}")
                    except sqlite3.OperationalError as e:
                        if not _already_exists(e):
                            raise
                        continue
                    added.append(name)
                    self._log.info("Schema upgrade: added column %s.%s", TABLE, name)
        except sqlite3.Error as e:
            raise StoreError("Failed to initialize schema", e) from e
        return added
