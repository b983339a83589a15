"""Script to apply or roll back the schema migrations.

Usage:
    python scripts/migrate.py                 # upgrade to head
    python scripts/migrate.py down 001        # downgrade to a revision
    python scripts/migrate.py current
"""

import argparse
import sys

from alembic import command
from alembic.config import Config


def main() -> int:
    """Run the requested alembic command."""
    parser = argparse.ArgumentParser(description="Manage database migrations")
    sub = parser.add_subparsers(dest="action")
    up = sub.add_parser("up", help="Upgrade to a revision (default: head)")
    up.add_argument("revision", nargs="?", default="head")
    down = sub.add_parser("down", help="Downgrade to a revision")
    down.add_argument("revision")
    sub.add_parser("current", help="Show the current revision")
    args = parser.parse_args()

    alembic_cfg = Config("alembic.ini")

    try:
        if args.action == "down":
            command.downgrade(alembic_cfg, args.revision)
        elif args.action == "current":
            command.current(alembic_cfg)
        else:
            command.upgrade(alembic_cfg, getattr(args, "revision", "head"))
    except Exception as e:
        print(f"✗ Migration failed: {e}", file=sys.stderr)
        return 1

    print("✓ Done")
    return 0


if __name__ == "__main__":
    sys.exit(main())
