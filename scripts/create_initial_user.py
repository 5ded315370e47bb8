"""Utility script to create an initial administrator account."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from campushub.application.use_cases.users import register_user
from campushub.domain.entities import ROLE_ADMIN, ROLES
from campushub.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create an initial user for the Campus Hub API.",
    )
    parser.add_argument(
        "--name",
        default="Campus Admin",
        help="Full name of the user (default: Campus Admin)",
    )
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="Email address of the user (default: admin@example.com)",
    )
    parser.add_argument(
        "--role",
        default=ROLE_ADMIN,
        choices=ROLES,
        help="Role assigned to the user (default: admin)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Password for the user. Prompted interactively when omitted.",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Password for the new user: ")
    if not password:
        raise SystemExit("No valid password was provided.")

    initialize_database()

    session = SessionLocal()
    try:
        user = register_user(
            session,
            email=args.email,
            password=password,
            full_name=args.name,
            role=args.role,
            allowed_roles=ROLES,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the user: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not save the user to the database: {exc}") from exc
    else:
        print(
            "User created successfully:\n"
            f"  ID: {user.id}\n"
            f"  Name: {user.full_name}\n"
            f"  Email: {user.email}\n"
            f"  Role: {user.role}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
