"""Shop management CLI.

Creates or drops the database schema and seeds the default catalog. Seeding
is idempotent, so ``init`` can run on every deploy.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Insert default products into an empty catalog
    python src/manage.py init       # setup-db followed by seed
"""

import argparse
import sys

_initialized = False


def _shop_domain():
    global _initialized
    from shop.domain import shop

    if not _initialized:
        shop.init()
        _initialized = True
    return shop


def setup_database():
    from shop.utils.db import setup_db

    domain = _shop_domain()
    print("Creating shop database schema...")
    touched = setup_db(domain)
    print(f"  schema ready ({', '.join(touched) or 'no relational providers'}).")


def drop_database():
    from shop.utils.db import drop_db

    domain = _shop_domain()
    print("Dropping shop database schema...")
    touched = drop_db(domain)
    print(f"  schema dropped ({', '.join(touched) or 'no relational providers'}).")


def seed_catalog():
    from shop.product.seed import ensure_seed_data
    from shop.utils.logging import add_context, clear_context

    domain = _shop_domain()
    add_context(command="seed")
    try:
        with domain.domain_context():
            inserted = ensure_seed_data()
    finally:
        clear_context()

    if inserted:
        print(f"Seeded {inserted} products.")
    else:
        print("Catalog already has products; nothing to seed.")


def main():
    parser = argparse.ArgumentParser(description="Shop database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Insert the default products if the catalog is empty")
    subparsers.add_parser("init", help="Create tables, then seed the catalog")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed_catalog()
    elif args.command == "init":
        setup_database()
        seed_catalog()
    else:
        parser.print_help()
        sys.exit(1)

    print("Done.")


if __name__ == "__main__":
    main()
