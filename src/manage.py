"""CraftMarket management CLI.

Usage:
    python src/manage.py setup-db                    # Create all tables
    python src/manage.py drop-db                     # Drop all tables
    python src/manage.py seed-categories             # Load the default categories
    python src/manage.py promote-admin --user-id ID  # Give a user the admin role
"""

import argparse
import sys


def _marketplace():
    from craftmarket.domain import marketplace

    print("Initializing marketplace domain...")
    marketplace.init()
    return marketplace


def setup_database():
    from craftmarket.utils.db import setup_db

    domain = _marketplace()
    print("Creating marketplace database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from craftmarket.utils.db import drop_db

    domain = _marketplace()
    print("Dropping marketplace database schema...")
    drop_db(domain)
    print("Done.")


def seed_categories():
    from craftmarket.catalogue.category import DEFAULT_CATEGORIES
    from craftmarket.store import get_store

    domain = _marketplace()
    with domain.domain_context():
        store = get_store()
        existing = {c.name for c in store.list("categories")}
        missing = [c for c in DEFAULT_CATEGORIES if c["name"] not in existing]
        store.create_many("categories", missing)
    print(f"Seeded {len(missing)} categories.")


def promote_admin(user_id):
    from craftmarket.identity.onboarding import AssignRole
    from craftmarket.identity.user import UserRole

    domain = _marketplace()
    with domain.domain_context():
        domain.process(AssignRole(user_id=user_id, role=UserRole.ADMIN.value), asynchronous=False)
    print(f"User {user_id} is now an admin.")


def main():
    parser = argparse.ArgumentParser(description="CraftMarket management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed-categories", help="Load the default product categories")
    promote_parser = subparsers.add_parser("promote-admin", help="Give a user the admin role")
    promote_parser.add_argument("--user-id", required=True)

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed-categories":
        seed_categories()
    elif args.command == "promote-admin":
        promote_admin(args.user_id)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
