#!/usr/bin/env python3
"""
BlytzWork database tool.

    python manage_db.py create | drop | reset | check
    python manage_db.py revision [message] | migrate | rollback | current | history

Table commands work straight from the SQLAlchemy models; the rest drive
Alembic for deployed databases.
"""

import os
import sys

from alembic import command
from alembic.config import Config

from app.infrastructure.db.database import get_database


ALEMBIC_INI = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                           "app", "infrastructure", "db", "migrations", "alembic.ini")


def _alembic() -> Config:
    return Config(ALEMBIC_INI)


def _confirm_data_loss() -> bool:
    answer = input("This will drop ALL data. Type 'yes' to continue: ")
    if answer.strip().lower() == "yes":
        return True
    print("Cancelled, nothing was dropped.")
    return False


def create_tables(args):
    get_database().create_tables()
    print("Tables created.")


def drop_tables(args):
    if _confirm_data_loss():
        get_database().drop_tables()
        print("Tables dropped.")


def reset_tables(args):
    if _confirm_data_loss():
        database = get_database()
        database.drop_tables()
        database.create_tables()
        print("Tables dropped and recreated.")


def check_connection(args):
    if not get_database().check_connection():
        print("Database connection FAILED")
        sys.exit(1)
    print("Database connection OK")


def create_migration(args):
    message = " ".join(args) or "Auto-generated migration"
    print(f"New revision: {message}")
    command.revision(_alembic(), message=message, autogenerate=True)


def run_migrations(args):
    command.upgrade(_alembic(), "head")


def rollback_migration(args):
    command.downgrade(_alembic(), "-1")


def show_current_revision(args):
    command.current(_alembic())


def show_history(args):
    command.history(_alembic())


COMMANDS = {
    "create": (create_tables, "create missing tables"),
    "drop": (drop_tables, "drop every table (asks first)"),
    "reset": (reset_tables, "drop and recreate every table (asks first)"),
    "check": (check_connection, "exit 1 when the database is unreachable"),
    "revision": (create_migration, "autogenerate a migration, optional message"),
    "migrate": (run_migrations, "upgrade to head"),
    "rollback": (rollback_migration, "downgrade one revision"),
    "current": (show_current_revision, "show the applied revision"),
    "history": (show_history, "list revisions"),
}


def usage() -> str:
    lines = ["Usage: python manage_db.py <command> [args]", ""]
    lines += [f"  {name:<10} {help_text}" for name, (_, help_text) in COMMANDS.items()]
    return "\n".join(lines)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print(usage())
        return
    name, args = argv[0], argv[1:]
    if name not in COMMANDS:
        print(f"Unknown command: {name}\n\n{usage()}")
        sys.exit(1)
    handler, _ = COMMANDS[name]
    handler(args)


if __name__ == "__main__":
    main()
