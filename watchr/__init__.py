"""watchr: poll files for modification-time changes and run a command on each change.

Exports:
- app, main: Typer CLI entrypoints (from watchr.cli)
- WatchTask, WatchStats: the per-file polling loop (from watchr.watch)
- run_all: one thread per watched file (from watchr.supervisor)
- RunConfig, WatchTarget, resolve_config: configuration (from watchr.config)
- split_command, run_command: command execution (from watchr.command)
"""

__version__ = "1.0.0"

from .cli import app, main  # noqa: E402,F401
from .command import CommandResult, run_command, split_command  # noqa: E402,F401
from .config import RunConfig, WatchTarget, resolve_config  # noqa: E402,F401
from .errors import CommandError, ConfigError, StatError, WatchError  # noqa: E402,F401
from .supervisor import run_all  # noqa: E402,F401
from .watch import WatchStats, WatchTask  # noqa: E402,F401

__all__ = [
    "app",
    "main",
    "WatchTask",
    "WatchStats",
    "run_all",
    "RunConfig",
    "WatchTarget",
    "resolve_config",
    "split_command",
    "run_command",
    "CommandResult",
    "CommandError",
    "ConfigError",
    "StatError",
    "WatchError",
]
