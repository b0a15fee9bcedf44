"""
Create a user (e.g. first admin). Run from project root:
  python -m storefront.scripts.create_user EMAIL PASSWORD [role] [--name NAME]
Example:
  python -m storefront.scripts.create_user owner@example.com your-secure-password admin
"""
import argparse
import sys

from pydantic import ValidationError

from storefront.core.database import SessionLocal
from storefront.core.exceptions import ConflictError, field_errors
from storefront.schemas.users import UserCreate
from storefront.services import users


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a storefront admin-panel user.")
    parser.add_argument("email", help="Email address (login name)")
    parser.add_argument("password", help="Password (1-128 chars)")
    parser.add_argument("role", nargs="?", default="admin", choices=["admin", "editor"])
    parser.add_argument("--name", default=None, help="Display name")
    args = parser.parse_args(argv)

    try:
        data = UserCreate(
            email=args.email.strip(),
            password=args.password,
            role=args.role,
            name=args.name,
        )
    except ValidationError as e:
        for err in field_errors(e.errors()):
            print(f"{err['field']}: {err['message']}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = users.create(db, data)
    except ConflictError as e:
        print(f"User '{data.email}' not created: {e.message}.", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.email}' with role '{user.role}' (id {user.id}).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
