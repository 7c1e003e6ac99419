"""
Cosmos DB client and connection management.

Authentication modes:
1. Azure Managed Identity (production): Uses DefaultAzureCredential for passwordless auth
2. Azure CLI credential (local dev with Azure): Uses your `az login` session
3. Cosmos DB Emulator (local dev): Uses emulator key for local development

The authentication mode is automatically selected based on environment:
- If COSMOS_EMULATOR=true, uses emulator with default key
- Otherwise, uses DefaultAzureCredential (works with Managed Identity in Azure,
  Azure CLI locally, or other credential providers)
"""

import os
import logging
from functools import lru_cache
from azure.cosmos import CosmosClient, DatabaseProxy, ContainerProxy, PartitionKey
from azure.cosmos.exceptions import CosmosHttpResponseError, CosmosResourceNotFoundError
from azure.identity import DefaultAzureCredential

logger = logging.getLogger(__name__)

# Cosmos DB Emulator well-known key (public, not a secret)
# https://learn.microsoft.com/en-us/azure/cosmos-db/emulator#authentication
EMULATOR_KEY = "C2y6yDjf5/R+ob0N8A7Cgv30VRDJIWEHLM+4QDU5DE2nQ9nDuVTqobD4b8mGGyPMbIZnqyMsEcaGQy67XIw/Jw=="
EMULATOR_ENDPOINT = "https://localhost:8081"


class CosmosDBSettings:
    """Settings for Cosmos DB connection."""

    def __init__(self):
        self.endpoint = os.getenv("COSMOS_ENDPOINT", "")
        self.database_name = os.getenv("COSMOS_DB_NAME", "phrasebook")
        self.phrases_container = os.getenv("COSMOS_PHRASES_CONTAINER", "phrases")
        self.srs_container = os.getenv("COSMOS_SRS_CONTAINER", "srs")
        # Emulator mode for local development
        self.use_emulator = os.getenv("COSMOS_EMULATOR", "false").lower() == "true"

    def is_configured(self) -> bool:
        """Check if Cosmos DB is configured."""
        if self.use_emulator:
            return True  # Emulator always uses well-known endpoint
        return bool(self.endpoint)


@lru_cache()
def get_settings() -> CosmosDBSettings:
    """Get cached Cosmos DB settings."""
    return CosmosDBSettings()


_client: CosmosClient | None = None
_database: DatabaseProxy | None = None


def get_client() -> CosmosClient:
    """
    Get or create the Cosmos DB client.

    For local development with the emulator, set COSMOS_EMULATOR=true.
    """
    global _client
    if _client is None:
        settings = get_settings()
        if not settings.is_configured():
            raise RuntimeError(
                "Cosmos DB is not configured. "
                "Set COSMOS_ENDPOINT environment variable, or COSMOS_EMULATOR=true for local emulator."
            )

        if settings.use_emulator:
            logger.info("Using Cosmos DB Emulator at %s", EMULATOR_ENDPOINT)
            _client = CosmosClient(
                EMULATOR_ENDPOINT,
                credential=EMULATOR_KEY,
                connection_verify=False  # Emulator uses self-signed cert
            )
        else:
            logger.info("Using DefaultAzureCredential for Cosmos DB at %s", settings.endpoint)
            credential = DefaultAzureCredential()
            _client = CosmosClient(settings.endpoint, credential=credential)

    return _client


def get_database() -> DatabaseProxy:
    """Get the database proxy."""
    global _database
    if _database is None:
        settings = get_settings()
        client = get_client()
        _database = client.get_database_client(settings.database_name)
    return _database


def get_container(container_name: str) -> ContainerProxy:
    """Get a container proxy by name."""
    database = get_database()
    return database.get_container_client(container_name)


def get_phrases_container() -> ContainerProxy:
    """Get the phrases container."""
    settings = get_settings()
    return get_container(settings.phrases_container)


def get_srs_container() -> ContainerProxy:
    """Get the SRS state container (one document per phrase, id == phraseId)."""
    settings = get_settings()
    return get_container(settings.srs_container)


def initialize_storage() -> None:
    """Create the database and containers if they do not exist yet.

    Safe to call on every startup.
    """
    global _database
    settings = get_settings()
    client = get_client()
    _database = client.create_database_if_not_exists(id=settings.database_name)
    for name in (settings.phrases_container, settings.srs_container):
        _database.create_container_if_not_exists(
            id=name,
            partition_key=PartitionKey(path="/id"),
        )
        logger.info("Container %s ready in database %s", name, settings.database_name)


def verify_connection() -> bool:
    """Verify the Cosmos DB connection is working."""
    try:
        settings = get_settings()
        if not settings.is_configured():
            return False
        database = get_database()
        database.read()
        return True
    except CosmosResourceNotFoundError:
        return False
    except (CosmosHttpResponseError, RuntimeError, OSError) as exc:
        logger.warning("Cosmos DB connection check failed: %s", exc)
        return False


def storage_status() -> str:
    """Summarize storage health as "connected", "unavailable" or "not_configured"."""
    if not get_settings().is_configured():
        return "not_configured"
    return "connected" if verify_connection() else "unavailable"


def close_client():
    """Drop the cached client and database references."""
    global _client, _database
    # CosmosClient manages its connections internally
    _client = None
    _database = None
