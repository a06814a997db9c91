"""Pasarku management CLI.

Creates and drops the database schema and grants the platform owner role.

Usage:
    python src/manage.py setup-db              # Create all tables
    python src/manage.py drop-db               # Drop all tables
    python src/manage.py grant-owner <user_id> # Promote a user to platform owner
"""

import argparse
import sys


def setup_database():
    """Create the database schema for the marketplace domain."""
    from marketplace.domain import marketplace
    from marketplace.utils.db import setup_db

    print("Initializing marketplace domain...")
    marketplace.init()
    print("Creating marketplace database schema...")
    setup_db(marketplace)
    print("Done.")


def drop_database():
    """Drop the database schema for the marketplace domain."""
    from marketplace.domain import marketplace
    from marketplace.utils.db import drop_db

    print("Initializing marketplace domain...")
    marketplace.init()
    print("Dropping marketplace database schema...")
    drop_db(marketplace)
    print("Done.")


def grant_owner(user_id):
    """Give an existing user the platform owner role."""
    from protean.exceptions import ObjectNotFoundError

    from marketplace.account.user import User
    from marketplace.domain import marketplace

    marketplace.init()
    with marketplace.domain_context():
        repo = marketplace.repository_for(User)
        try:
            user = repo.get(user_id)
        except ObjectNotFoundError:
            print(f"User {user_id} not found.")
            return False
        user.grant_owner_role()
        repo.add(user)
    print(f"User {user_id} is now a platform owner.")
    return True


def main():
    parser = argparse.ArgumentParser(description="Pasarku management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    grant_parser = subparsers.add_parser("grant-owner", help="Grant the platform owner role to a user")
    grant_parser.add_argument("user_id", help="Id of the user to promote")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "grant-owner":
        if not grant_owner(args.user_id):
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
