"""Utility script to mirror users and equipment into the local database.

The booking notifications only read user and equipment documents, so a
development database needs them seeded before bookings can be created.
"""

from __future__ import annotations

import argparse
from datetime import timedelta

from sqlalchemy.exc import SQLAlchemyError

from app.domain.entities import Equipment, User
from app.infrastructure.database import SessionLocal, initialize_database
from app.infrastructure.repositories import EquipmentRepository, UserRepository
from app.infrastructure.security import create_access_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""

    parser = argparse.ArgumentParser(
        description="Seed user profiles and equipment for local development.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    user_parser = subparsers.add_parser("user", help="Create or replace a user profile")
    user_parser.add_argument("user_id")
    user_parser.add_argument("--name", default=None, help="Display name")
    user_parser.add_argument("--email", default=None)

    equipment_parser = subparsers.add_parser("equipment", help="Create or replace equipment")
    equipment_parser.add_argument("equipment_id")
    equipment_parser.add_argument("--owner", required=True, help="Id of the owning user")
    equipment_parser.add_argument("--name", default=None)
    equipment_parser.add_argument("--type", default=None)

    token_parser = subparsers.add_parser("token", help="Issue a bearer token for a user")
    token_parser.add_argument("user_id")
    token_parser.add_argument(
        "--minutes", type=int, default=None, help="Token lifetime in minutes"
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    if args.command == "token":
        expires = timedelta(minutes=args.minutes) if args.minutes else None
        print(create_access_token({"sub": args.user_id}, expires_delta=expires))
        return

    initialize_database()

    session = SessionLocal()
    try:
        if args.command == "user":
            user = UserRepository(session).save(
                User(id=args.user_id, name=args.name, email=args.email)
            )
            print(f"User saved: {user.id} ({user.display_name or 'no name'})")
        else:
            equipment = EquipmentRepository(session).save(
                Equipment(
                    id=args.equipment_id,
                    owner_id=args.owner,
                    name=args.name,
                    type=args.type,
                )
            )
            print(f"Equipment saved: {equipment.id} owned by {equipment.owner_id}")
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not save the record: {exc}") from exc
    finally:
        session.close()


if __name__ == "__main__":
    main()
