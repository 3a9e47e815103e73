"""
SQLite handle shared by the stores: per-thread connections, schema bootstrap,
transactions and translation of sqlite3 errors into service errors.
"""
import logging
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from digicache.core.errors import ConflictError, StorageError
from digicache.core.schema import ALL_TABLES, INDEXES, MIGRATION_COLUMNS

logger = logging.getLogger(__name__)

# Range of an SQLite INTEGER; larger Python ints make sqlite3 raise OverflowError
SQLITE_MIN_INT = -(2 ** 63)
SQLITE_MAX_INT = 2 ** 63 - 1


def now_iso() -> str:
    """UTC timestamp used for created_at; fixed width so it sorts as text."""
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


@contextmanager
def _translate_errors() -> Iterator[None]:
    try:
        yield
    except sqlite3.IntegrityError as e:
        raise ConflictError(str(e)) from e
    except sqlite3.Error as e:
        raise StorageError(f"Database error: {e}") from e


class Database:
    """Thread-safe SQLite connection manager."""

    def __init__(self, db_path: str | Path):
        self.db_path = str(db_path)
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._local = threading.local()
        self._all_conns: List[sqlite3.Connection] = []
        self._conns_lock = threading.Lock()
        self._init_db()

    # ------------------------------------------------------------------ #
    # Connection helpers                                                   #
    # ------------------------------------------------------------------ #

    def _get_conn(self) -> sqlite3.Connection:
        """Return a per-thread connection, creating one if needed."""
        conn = getattr(self._local, "conn", None)
        if conn is None:
            conn = sqlite3.connect(self.db_path, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA journal_mode=WAL;")
            conn.execute("PRAGMA busy_timeout = 5000;")
            self._local.conn = conn
            with self._conns_lock:
                self._all_conns.append(conn)
        return conn

    @property
    def conn(self) -> sqlite3.Connection:
        return self._get_conn()

    def close(self) -> None:
        """Close every connection opened by any thread."""
        with self._conns_lock:
            conns, self._all_conns = self._all_conns, []
        for conn in conns:
            conn.close()
        self._local = threading.local()

    # ------------------------------------------------------------------ #
    # Schema initialisation                                                #
    # ------------------------------------------------------------------ #

    def _init_db(self) -> None:
        with self.conn:
            for sql in ALL_TABLES:
                self.conn.execute(sql)
            for idx in INDEXES:
                self.conn.execute(idx)
            self._migrate_db()
        logger.info("Database initialised at %s", self.db_path)

    def _migrate_db(self) -> None:
        """Add columns missing from databases created by older versions."""
        for table, column, decl in MIGRATION_COLUMNS:
            cols = {row["name"] for row in self.conn.execute(f"PRAGMA table_info({table})")}
            if column not in cols:
                self.conn.execute(f"ALTER TABLE {table} ADD COLUMN {column} {decl}")
                logger.info("Migrated %s: added column %s", table, column)

    # ------------------------------------------------------------------ #
    # Generic query helpers                                                #
    # ------------------------------------------------------------------ #

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Commit on success, roll back on error."""
        conn = self.conn
        with _translate_errors():
            with conn:
                yield conn

    def execute(self, sql: str, params: Tuple = ()) -> sqlite3.Cursor:
        """Run one statement in its own transaction."""
        with self.transaction() as conn:
            return conn.execute(sql, params)

    def fetchone(self, sql: str, params: Tuple = ()) -> Optional[sqlite3.Row]:
        with _translate_errors():
            return self.conn.execute(sql, params).fetchone()

    def fetchall(self, sql: str, params: Tuple = ()) -> List[sqlite3.Row]:
        with _translate_errors():
            return self.conn.execute(sql, params).fetchall()
