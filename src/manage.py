"""Flash Tans database management CLI.

Creates, drops and seeds the schema of the configured storage backend
(``STORE_BACKEND``, ``DATABASE_URL``, ``MONGO_URI``...).

Usage:
    python src/manage.py setup-db   # Create tables / collections and indexes
    python src/manage.py drop-db    # Drop them
    python src/manage.py seed       # Insert the sample catalog if it is empty
"""

import argparse
import sys

from catalogue.product.store import CatalogStore
from shared.config import get_settings
from shared.logging import configure_logging
from shared.storage import build_backend


def setup_database(backend):
    print(f"Creating {backend.name} schema...")
    backend.setup()
    print("Done.")


def drop_database(backend):
    print(f"Dropping {backend.name} schema...")
    backend.teardown()
    print("Done.")


def seed_database(backend):
    backend.setup()
    added = CatalogStore(backend).seed_samples()
    if added:
        print(f"Seeded {added} sample products.")
    else:
        print("Catalog already has products; nothing seeded.")


COMMANDS = {
    "setup-db": setup_database,
    "drop-db": drop_database,
    "seed": seed_database,
}


def main(argv=None):
    parser = argparse.ArgumentParser(description="Flash Tans database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all tables / collections")
    subparsers.add_parser("drop-db", help="Drop all tables / collections")
    subparsers.add_parser("seed", help="Insert the sample catalog when it is empty")

    args = parser.parse_args(argv)

    command = COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        sys.exit(1)

    settings = get_settings()
    configure_logging(level=settings.log_level, to_file=False, environment=settings.environment)

    backend = build_backend(settings)
    try:
        command(backend)
    finally:
        backend.close()


if __name__ == "__main__":
    main()
