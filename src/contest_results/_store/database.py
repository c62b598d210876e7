# Area: Store
"""
contest_results._store.database — Database Initialization
=========================================================

Handles SQLite database initialization and connection management for
the upstream collections (progress, MCQs, submissions) and the results
table this engine writes.

Repositories open the file read-write without creating it, so a
missing or unreadable database surfaces as StoreUnavailableError
instead of an empty store that silently backfills nothing.
"""

import sqlite3
import logging
from pathlib import Path
from typing import Optional

from ..errors import StoreUnavailableError

logger = logging.getLogger("contest_results.store.database")

# Path to schema file
SCHEMA_PATH = Path(__file__).parent / "schema.sql"

DEFAULT_DB_PATH = "contest_results.db"
BUSY_TIMEOUT_SECONDS = 30.0


def get_connection(db_path: str = DEFAULT_DB_PATH, create: bool = False) -> sqlite3.Connection:
    """
    Get a database connection.

    Args:
        db_path: Path to the SQLite database file
        create: If True, create the file when it does not exist

    Returns:
        SQLite connection with row factory set

    Raises:
        StoreUnavailableError: If the database cannot be opened
    """
    mode = "rwc" if create else "rw"
    uri = f"{Path(db_path).absolute().as_uri()}?mode={mode}"
    try:
        conn = sqlite3.connect(uri, uri=True, timeout=BUSY_TIMEOUT_SECONDS)
    except sqlite3.Error as e:
        raise StoreUnavailableError(db_path, str(e)) from e
    conn.row_factory = sqlite3.Row
    return conn


def init_database(db_path: str = DEFAULT_DB_PATH) -> None:
    """
    Initialize the database with schema.

    Args:
        db_path: Path to the SQLite database file
    """
    conn = get_connection(db_path, create=True)
    try:
        with open(SCHEMA_PATH, "r") as f:
            schema = f.read()
        conn.executescript(schema)
        conn.commit()
        logger.info(f"Database initialized at {db_path}")
    finally:
        conn.close()


class BaseRepository:
    """
    Base class for database repositories.

    Every call opens and closes its own connection, so one repository
    instance can be shared by backfill worker threads.
    """

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        """
        Initialize repository.

        Args:
            db_path: Path to the SQLite database file
        """
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        """Get a database connection."""
        return get_connection(self.db_path)

    def _execute(
        self, query: str, params: tuple = (), fetch: bool = False
    ) -> Optional[list]:
        """
        Execute a query.

        Args:
            query: SQL query string
            params: Query parameters
            fetch: If True, fetch and return results

        Returns:
            Query results if fetch=True, else None

        Raises:
            StoreUnavailableError: On operational failures (missing
                tables, locked or corrupt file)
        """
        conn = self._get_conn()
        try:
            cursor = conn.execute(query, params)
            if fetch:
                return [dict(row) for row in cursor.fetchall()]
            conn.commit()
            return None
        except sqlite3.IntegrityError:
            raise
        except sqlite3.DatabaseError as e:
            raise StoreUnavailableError(self.db_path, str(e)) from e
        finally:
            conn.close()

    def _execute_one(self, query: str, params: tuple = ()) -> Optional[dict]:
        """Execute query and return single result."""
        results = self._execute(query, params, fetch=True)
        return results[0] if results else None

    def _execute_rowcount(self, query: str, params: tuple = ()) -> int:
        """Execute a write and return the number of affected rows."""
        conn = self._get_conn()
        try:
            cursor = conn.execute(query, params)
            conn.commit()
            return cursor.rowcount
        except sqlite3.IntegrityError:
            raise
        except sqlite3.DatabaseError as e:
            raise StoreUnavailableError(self.db_path, str(e)) from e
        finally:
            conn.close()
