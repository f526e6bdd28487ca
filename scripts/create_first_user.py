import argparse
import sys
import os
from sqlmodel import Session

# Add current directory to path
sys.path.append(os.getcwd())

from project_tracker.core.config import get_settings
from project_tracker.core.exceptions import DuplicateIdentityError
from project_tracker.db.session import create_db_engine, init_db
from project_tracker.models.user import UserRole
from project_tracker.services import identity


def create_initial_developer(name: str, username: str, password: str):
    print("--- Initial Developer Creation ---")

    settings = get_settings()
    engine = create_db_engine(settings)
    init_db(engine)

    with Session(engine) as session:
        try:
            print(f"Creating developer {username}...")
            user = identity.create_user(
                session,
                name=name,
                username=username,
                raw_password=password,
                role=UserRole.DEVELOPER,
                bcrypt_rounds=settings.BCRYPT_ROUNDS,
            )
        except DuplicateIdentityError:
            print(f"User with username {username} already exists.")
            return

        print("Initial developer created successfully!")
        print(f"Id: {user.id}")
        print(f"Username: {user.username}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed a developer account")
    parser.add_argument("--name", default="Admin Developer")
    parser.add_argument("--username", default="admin")
    parser.add_argument("--password", default="adminpassword")
    args = parser.parse_args()

    create_initial_developer(args.name, args.username, args.password)
