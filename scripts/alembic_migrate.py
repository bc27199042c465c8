#!/usr/bin/env python3
"""Run ledger schema migrations through alembic.

Usage:
    python scripts/alembic_migrate.py upgrade [revision]    # default: head
    python scripts/alembic_migrate.py downgrade [revision]  # default: -1
    python scripts/alembic_migrate.py current
    python scripts/alembic_migrate.py history
    python scripts/alembic_migrate.py revision "Add column"
"""

import sys
from pathlib import Path

from alembic import command
from alembic.config import Config

from icmbridge.config import get_settings

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def load_config() -> Config:
    config = Config(str(ALEMBIC_INI))
    config.set_main_option("script_location", str(ALEMBIC_INI.parent / "alembic"))
    return config


def main(argv: list[str]) -> int:
    if not argv:
        print(__doc__)
        return 1

    config = load_config()
    settings = get_settings()
    print(f"Ledger database: {settings._redact_url(settings.database_url)}")

    action, args = argv[0], argv[1:]
    if action == "upgrade":
        command.upgrade(config, args[0] if args else "head")
    elif action == "downgrade":
        command.downgrade(config, args[0] if args else "-1")
    elif action == "current":
        command.current(config, verbose=True)
    elif action == "history":
        command.history(config, verbose=True)
    elif action == "revision":
        if not args:
            print("Usage: alembic_migrate.py revision 'Migration message'")
            return 1
        command.revision(config, message=" ".join(args), autogenerate=True)
    else:
        print(f"Unknown command: {action}")
        print(__doc__)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
