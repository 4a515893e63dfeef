"""
Programmatic Alembic migration runner for the ninja schema.

Runs migrations without an alembic.ini: the script location is the
`migrations` directory beside this file and the URL comes from
ninja_api.db.config.Settings.

Usage examples:
    python -m ninja_api.db.run_migrations upgrade head
    python -m ninja_api.db.run_migrations downgrade -1
    python -m ninja_api.db.run_migrations current
"""

import sys
from pathlib import Path
from typing import Callable, Dict, List

from alembic import command
from alembic.config import Config

from ninja_api.db.config import get_settings

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"

# command name -> (alembic function, default arguments)
_COMMANDS: Dict[str, tuple[Callable[..., None], List[str]]] = {
    "upgrade": (command.upgrade, ["head"]),
    "downgrade": (command.downgrade, ["-1"]),
    "current": (command.current, []),
    "history": (command.history, []),
    "heads": (command.heads, []),
}


# PUBLIC_INTERFACE
def build_config() -> Config:
    """Build an Alembic Config pointing at the bundled migrations."""
    cfg = Config()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    # Offline mode reads this URL; env.py opens its own async engine online.
    cfg.set_main_option("sqlalchemy.url", get_settings().sync_database_url)
    return cfg


# PUBLIC_INTERFACE
def main(argv: List[str] | None = None) -> None:
    """Run an Alembic command, e.g. ["upgrade", "head"]."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("No Alembic arguments provided. Example: upgrade head")
        sys.exit(1)

    name, rest = args[0], args[1:]
    if name not in _COMMANDS:
        print(f"Unsupported Alembic command: {name}. Choose one of: {', '.join(_COMMANDS)}")
        sys.exit(2)

    func, defaults = _COMMANDS[name]
    func(build_config(), *(rest or defaults))


if __name__ == "__main__":
    main()
