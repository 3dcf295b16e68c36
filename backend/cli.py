"""CLI tool for admin operations.

Usage:
    python -m backend.cli init-db
    python -m backend.cli create-user
"""

import sys
import getpass

from sqlmodel import Session, select

from backend.config import settings
from backend.database import build_engine, create_db_and_tables
from backend.models.user import User
from backend.schemas.auth import RegisterRequest
from backend.services.auth import hash_password


def init_db():
    """Create all tables in the configured database."""
    engine = build_engine(settings.database_url)
    create_db_and_tables(engine)
    print(f"Database ready: {settings.database_url}")


def create_user():
    """Create a journal user from the terminal."""
    engine = build_engine(settings.database_url)
    create_db_and_tables(engine)

    email = input("Email: ").strip().lower()
    if not email:
        print("Email cannot be empty.")
        sys.exit(1)

    with Session(engine) as session:
        existing = session.exec(select(User).where(User.email == email)).first()
        if existing:
            print(f"User '{email}' already exists.")
            sys.exit(1)

    password = getpass.getpass("Password: ")
    password_confirm = getpass.getpass("Confirm password: ")
    if password != password_confirm:
        print("Passwords do not match.")
        sys.exit(1)

    try:
        body = RegisterRequest(email=email, password=password)
    except ValueError as e:
        print(f"Invalid input: {e}")
        sys.exit(1)

    user = User(email=body.email, hashed_password=hash_password(body.password))
    with Session(engine) as session:
        session.add(user)
        session.commit()
        session.refresh(user)

    print(f"\nUser '{user.email}' created with id {user.id}.")


COMMANDS = {
    "init-db": init_db,
    "create-user": create_user,
}


def main():
    if len(sys.argv) < 2:
        print("Usage: python -m backend.cli <command>")
        print(f"Commands: {', '.join(COMMANDS)}")
        sys.exit(1)

    command = COMMANDS.get(sys.argv[1])
    if command is None:
        print(f"Unknown command: {sys.argv[1]}")
        sys.exit(1)
    command()


if __name__ == "__main__":
    main()
