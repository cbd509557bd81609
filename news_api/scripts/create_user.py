"""
Create a user (e.g. the first admin). Run from project root:
  python -m news_api.scripts.create_user EMAIL USERNAME PASSWORD [role]
Example:
  python -m news_api.scripts.create_user admin@example.com admin your-secure-password ADMIN

Also promotes/demotes an existing account with --set-role.
"""
import argparse
import sys

from dotenv import load_dotenv
from sqlalchemy.orm import Session

from news_api.core.config import get_settings
from news_api.core.database import build_engine, build_session_factory
from news_api.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    hash_password,
)
from news_api.models import Profile, Role, User


def create_user(
    db: Session,
    email: str,
    username: str,
    password: str,
    role: Role,
    rounds: int,
) -> User | None:
    """Insert the user with an empty profile; None if the email is taken."""
    if db.query(User).filter(User.email == email).first() is not None:
        return None
    user = User(
        email=email,
        name=username,
        password_hash=hash_password(password, rounds=rounds),
        role=role,
        profile=Profile(),
    )
    db.add(user)
    db.commit()
    return user


def set_role(db: Session, email: str, role: Role) -> User | None:
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        return None
    user.role = role
    db.commit()
    return user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create or promote a News API user.")
    parser.add_argument("email", help="Email address (unique)")
    parser.add_argument("username", nargs="?", help="Display name (1-255 chars)")
    parser.add_argument("password", nargs="?", help="Password (8-128 chars)")
    parser.add_argument("role", nargs="?", default="USER", choices=[r.value for r in Role])
    parser.add_argument(
        "--set-role",
        choices=[r.value for r in Role],
        help="Change the role of an existing user instead of creating one",
    )
    args = parser.parse_args(argv)

    load_dotenv()
    settings = get_settings()
    email = args.email.strip().lower()
    db = build_session_factory(build_engine(settings))()
    try:
        if args.set_role:
            user = set_role(db, email, Role(args.set_role))
            if user is None:
                print(f"No user with email '{email}'.", file=sys.stderr)
                return 1
            print(f"User '{email}' now has role '{args.set_role}'.")
            return 0

        if args.username is None or args.password is None:
            parser.error("username and password are required when creating a user")
        username = args.username.strip()
        if not username or len(username) > USERNAME_MAX_LEN:
            print("Invalid username length.", file=sys.stderr)
            return 1
        if not PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN:
            print(
                f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
                file=sys.stderr,
            )
            return 1

        user = create_user(
            db, email, username, args.password, Role(args.role), settings.BCRYPT_ROUNDS
        )
        if user is None:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        print(f"Created user '{email}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
