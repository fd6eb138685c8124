"""
SQLite-backed document store and simple migration system.

Records are kept as JSON documents addressed by ``(collection, id)``
in a single ``documents`` table.  The ``DocumentStore`` class exposes
the primitives the services need: insert, point lookup, equality
filtered scan with a single sort field, merge update and delete.
Uniqueness rules that must hold across documents (one registration
per user and event, one account per e-mail) are enforced with partial
expression indexes created by the migrations below.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import json
import logging
import os
import re
import sqlite3
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from .config import settings
from .errors import DuplicateDocument, InvalidInput, StoreUnavailable

logger = logging.getLogger(__name__)

_FIELD_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: document table
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS documents (
            collection TEXT NOT NULL,
            id TEXT NOT NULL,
            data TEXT NOT NULL,
            stored_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            PRIMARY KEY (collection, id)
        );
        """,
    ),
    # Migration 2: at most one registration per (userId, eventId)
    (
        2,
        """
        CREATE UNIQUE INDEX IF NOT EXISTS uq_registrations_user_event
            ON documents (json_extract(data, '$.userId'), json_extract(data, '$.eventId'))
            WHERE collection = 'registrations';
        """,
    ),
    # Migration 3: one user profile per e-mail address
    (
        3,
        """
        CREATE UNIQUE INDEX IF NOT EXISTS uq_users_email
            ON documents (lower(json_extract(data, '$.email')))
            WHERE collection = 'users';
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection with dict-like rows."""
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def init_db() -> None:
    """Initialise the database and apply pending migrations."""
    try:
        with get_cursor() as cursor:
            cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
            cursor.execute("SELECT MAX(version) AS version FROM migrations")
            row = cursor.fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in MIGRATIONS:
                if version > current_version:
                    cursor.executescript(sql)
                    cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                    current_version = version
                    logger.info("Applied migration %s", version)
    except sqlite3.Error as e:
        logger.error("Database initialisation failed: %s", e)
        raise StoreUnavailable("Database initialisation failed") from e


@dataclass
class Document:
    """A stored document: its key and its field map."""

    id: str
    data: Dict[str, Any] = field(default_factory=dict)


def _json_path(field_name: str) -> str:
    if not _FIELD_RE.match(field_name):
        raise InvalidInput(f"Invalid field name: {field_name!r}")
    return f"$.{field_name}"


class DocumentStore:
    """Schemaless per-collection document storage on top of SQLite.

    Each operation opens its own connection, so instances are cheap
    and may be shared across requests.  ``sqlite3`` failures surface
    as ``StoreUnavailable``; unique index violations as
    ``DuplicateDocument``.
    """

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path or get_database_path()

    @contextmanager
    def _cursor(self) -> Iterator[sqlite3.Cursor]:
        try:
            conn = sqlite3.connect(self.path)
        except sqlite3.Error as e:
            logger.error("Cannot open document store %s: %s", self.path, e)
            raise StoreUnavailable("Document store unavailable") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn.cursor()
            conn.commit()
        except sqlite3.IntegrityError as e:
            conn.rollback()
            logger.info("Unique constraint violated: %s", e)
            raise DuplicateDocument("Document already exists") from e
        except sqlite3.Error as e:
            conn.rollback()
            logger.error("Document store failure: %s", e)
            raise StoreUnavailable("Document store unavailable") from e
        finally:
            conn.close()

    def add(self, collection: str, data: Dict[str, Any], doc_id: Optional[str] = None) -> str:
        """Insert a new document and return its key.

        A key is generated when ``doc_id`` is omitted.
        """
        doc_id = doc_id or uuid.uuid4().hex
        with self._cursor() as cursor:
            cursor.execute(
                "INSERT INTO documents (collection, id, data) VALUES (?, ?, ?)",
                (collection, doc_id, json.dumps(data)),
            )
        return doc_id

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with self._cursor() as cursor:
            row = cursor.execute(
                "SELECT id, data FROM documents WHERE collection = ? AND id = ?",
                (collection, doc_id),
            ).fetchone()
        if not row:
            return None
        return Document(id=row["id"], data=json.loads(row["data"]))

    def query(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Document]:
        """Return documents whose fields equal every value in ``filters``.

        Results are sorted by ``order_by`` when given, otherwise by
        insertion order.
        """
        query = "SELECT id, data FROM documents WHERE collection = ?"
        params: list = [collection]
        for name, value in (filters or {}).items():
            query += " AND json_extract(data, ?) = ?"
            params.extend([_json_path(name), value])
        if order_by:
            direction = "DESC" if descending else "ASC"
            query += f" ORDER BY json_extract(data, ?) {direction}, rowid ASC"
            params.append(_json_path(order_by))
        else:
            query += " ORDER BY rowid ASC"
        with self._cursor() as cursor:
            rows = cursor.execute(query, tuple(params)).fetchall()
        return [Document(id=row["id"], data=json.loads(row["data"])) for row in rows]

    def update(self, collection: str, doc_id: str, changes: Dict[str, Any]) -> Optional[Document]:
        """Merge ``changes`` into an existing document.

        Fields not named in ``changes`` keep their stored values.
        Returns the merged document, or ``None`` if it does not exist.
        """
        with self._cursor() as cursor:
            row = cursor.execute(
                "SELECT data FROM documents WHERE collection = ? AND id = ?",
                (collection, doc_id),
            ).fetchone()
            if not row:
                return None
            merged = {**json.loads(row["data"]), **changes}
            cursor.execute(
                "UPDATE documents SET data = ? WHERE collection = ? AND id = ?",
                (json.dumps(merged), collection, doc_id),
            )
        return Document(id=doc_id, data=merged)

    def delete(self, collection: str, doc_id: str) -> bool:
        """Delete a document; returns ``False`` if nothing was removed."""
        with self._cursor() as cursor:
            cursor.execute(
                "DELETE FROM documents WHERE collection = ? AND id = ?",
                (collection, doc_id),
            )
            return cursor.rowcount > 0


def get_store() -> DocumentStore:
    """Return a store bound to the currently configured database path."""
    return DocumentStore(get_database_path())
