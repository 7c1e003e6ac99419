"""Database module for Cosmos DB integration."""

from .cosmos import (
    get_client,
    get_database,
    get_container,
    get_phrases_container,
    get_srs_container,
    get_settings,
    initialize_storage,
    verify_connection,
    storage_status,
    close_client,
)

__all__ = [
    "get_client",
    "get_database",
    "get_container",
    "get_phrases_container",
    "get_srs_container",
    "get_settings",
    "initialize_storage",
    "verify_connection",
    "storage_status",
    "close_client",
]
