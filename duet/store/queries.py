"""Database query functions."""

import json
import sqlite3
from pathlib import Path
from typing import Any

from duet.store.schema import get_db_path


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def load_collection(name: str, db_path: Path | None = None) -> Any | None:
    """Load a stored collection.

    Args:
        name: Collection name.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Decoded JSON document, or None if the collection was never saved.

    Raises:
        sqlite3.Error: If database operation fails.
        json.JSONDecodeError: If the stored document is malformed.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT payload FROM collections WHERE name = ?", (name,))
        row = cursor.fetchone()
        if row is None:
            return None
        return json.loads(row["payload"])


def save_collection(name: str, payload: Any, db_path: Path | None = None) -> None:
    """Replace a stored collection.

    Args:
        name: Collection name.
        payload: JSON-serializable document.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                INSERT INTO collections (name, payload, updated_at) VALUES (?, ?, datetime('now'))
                ON CONFLICT(name) DO UPDATE SET payload = excluded.payload, updated_at = excluded.updated_at
                """,
                (name, json.dumps(payload)),
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise


def list_collections(db_path: Path | None = None) -> list[dict[str, Any]]:
    """List stored collections with their last update time.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT name, updated_at FROM collections ORDER BY name")
        return [dict(row) for row in cursor.fetchall()]
