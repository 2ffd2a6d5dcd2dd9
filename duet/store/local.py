"""Local persistence adapter backed by the sqlite collections table."""

from pathlib import Path
from typing import Any

from duet.store.queries import load_collection, save_collection
from duet.store.schema import get_db_path


class LocalStore:
    """Generic load/save of named JSON collections."""

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path or get_db_path()

    def load(self, key: str) -> Any | None:
        """Load a collection, or None if it was never saved."""
        return load_collection(key, self.db_path)

    def save(self, key: str, value: Any) -> None:
        save_collection(key, value, self.db_path)
