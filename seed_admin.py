"""
Create (or promote) an ADMIN account.

There is no HTTP route that grants the ADMIN role; run this from the
project root instead:

    (.venv) python seed_admin.py admin@company.io 'S3cret-pass' --first-name Ada --last-name Admin

An existing account with that email keeps its password and is promoted.
"""

import argparse
import sys

from app.core.exceptions import AppError
from app.db.init_db import ensure_admin, init_db
from app.db.session import SessionLocal


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create or promote an admin user.")
    parser.add_argument("email")
    parser.add_argument("password")
    parser.add_argument("--first-name", default="Admin")
    parser.add_argument("--last-name", default="User")
    args = parser.parse_args(argv)

    init_db()
    db = SessionLocal()
    try:
        user = ensure_admin(
            db,
            email=args.email,
            password=args.password,
            first_name=args.first_name,
            last_name=args.last_name,
        )
        print(f"[INFO] {user.email} (id={user.id}) is now {user.role.value}")
        return 0
    except (AppError, ValueError) as exc:
        print(f"[ERROR] {exc}")
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
