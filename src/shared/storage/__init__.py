"""Storage backend factory.

``build_backend(settings)`` constructs the one backend the process uses:
- SqlBackend for SQLite (default), PostgreSQL or any SQLAlchemy URL
- MongoBackend for MongoDB

The entry point owns the returned backend and closes it on shutdown.
"""

from shared.config import Settings
from shared.storage.port import StorageBackend, UnitOfWork, UnitOfWorkState


def build_backend(settings: Settings) -> StorageBackend:
    """Return a new storage backend for the configured ``store_backend``."""
    if settings.store_backend == "mongodb":
        from shared.storage.mongo_adapter import MongoBackend

        return MongoBackend(
            uri=settings.mongo_uri,
            database=settings.mongo_database,
            transactions=settings.mongo_transactions,
        )

    from shared.storage.sql_adapter import SqlBackend

    return SqlBackend(settings.database_url)


__all__ = ["StorageBackend", "UnitOfWork", "UnitOfWorkState", "build_backend"]
