"""Operator CLI for Libris.

Usage:
    python -m libris init-db
    python -m libris seed
    python -m libris create-admin USER_NAME EMAIL
    python -m libris issue-token USER_ID
"""

import argparse
import sys
from uuid import UUID

from libris.core.config import get_settings
from libris.core.logger import setup_logger
from libris.core.security import create_access_token
from libris.db.session import SessionLocal, init_db
from libris.db.seed import seed_admin_user, seed_default_roles


def _seed(args) -> int:
    db = SessionLocal()
    try:
        roles = seed_default_roles(db)
        db.commit()
        for role in roles.values():
            print(f"  - {role.name} ({role.id})")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
    return 0


def _create_admin(args) -> int:
    db = SessionLocal()
    try:
        user = seed_admin_user(db, args.user_name, args.email, full_name=args.full_name)
        db.commit()
        print(f"Administrator {user.user_name}: {user.id}")
        if args.token:
            print(create_access_token(user.id))
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
    return 0


def _issue_token(args) -> int:
    print(create_access_token(args.user_id))
    return 0


def _init_db(args) -> int:
    init_db()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="libris", description="Libris administration")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("init-db", help="Create database tables").set_defaults(func=_init_db)
    commands.add_parser("seed", help="Create the default roles").set_defaults(func=_seed)

    admin = commands.add_parser("create-admin", help="Create a user with the Administrator role")
    admin.add_argument("user_name")
    admin.add_argument("email")
    admin.add_argument("--full-name", default=None)
    admin.add_argument("--token", action="store_true", help="Also print an access token")
    admin.set_defaults(func=_create_admin)

    token = commands.add_parser("issue-token", help="Print an access token for a user id")
    token.add_argument("user_id", type=UUID)
    token.set_defaults(func=_issue_token)

    return parser


def main(argv=None) -> int:
    settings = get_settings()
    setup_logger(settings)

    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
