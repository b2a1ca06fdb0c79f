"""
Create a user (e.g. first admin). Run from project root:
  python -m userdesk.scripts.create_user USERNAME PASSWORD [role]
Example:
  python -m userdesk.scripts.create_user admin your-secure-password admin
"""
import argparse
import logging
import sys

from userdesk.core.config import get_settings
from userdesk.core.database import SessionLocal
from userdesk.services.record_store import SqlAlchemyRecordStore
from userdesk.services.users import UserService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a userdesk user account.")
    parser.add_argument("username", help="Username (2-100 chars)")
    parser.add_argument("password", help="Password")
    parser.add_argument("role", nargs="?", default=None, help="Role (server default when omitted)")
    args = parser.parse_args(argv)

    service = UserService.from_settings(get_settings(), SqlAlchemyRecordStore(SessionLocal))
    if service.get({"username": args.username}) is not None:
        print(f"User '{args.username}' already exists.", file=sys.stderr)
        return 1

    result = service.create(args.username, args.password, args.role)
    if result.user is None:
        print(f"Could not create user: {result.error}", file=sys.stderr)
        return 1
    print(f"Created user '{result.user['username']}' with role '{result.user['role']}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
