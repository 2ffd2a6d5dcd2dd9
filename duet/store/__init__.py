"""Database store layer - provides persistence for the application.

This module re-exports the local store and its schema helpers for easy importing.
"""

from duet.store.local import LocalStore
from duet.store.queries import list_collections, load_collection, save_collection
from duet.store.schema import database_exists, get_db_path, get_xdg_data_home, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "get_xdg_data_home",
    "init_database",
    # Queries
    "list_collections",
    "load_collection",
    "save_collection",
    # Adapter
    "LocalStore",
]
