import subprocess
import time
from dataclasses import dataclass
from typing import List

from .errors import CommandError


@dataclass(frozen=True)
class CommandResult:
    argv: List[str]
    output: str
    duration_ns: int


def split_command(command: str) -> List[str]:
    """Return the argv used to launch ``command``.

    - The first whitespace-delimited token is the program.
    - Every remaining token is joined with single spaces into ONE argument,
      so "cp a b" runs ``cp`` with the single argument "a b".
    - A single token runs the program with no argument at all.
    """
    tokens = command.split()
    if not tokens:
        raise CommandError(command, "Empty command")
    if len(tokens) == 1:
        return tokens
    return [tokens[0], " ".join(tokens[1:])]


def run_command(command: str) -> CommandResult:
    """Run ``command`` synchronously and capture its standard output.

    Raises CommandError when the program cannot be launched or exits non-zero.
    """
    argv = split_command(command)
    start = time.monotonic_ns()
    try:
        proc = subprocess.run(argv, capture_output=True, text=True, check=True)
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        detail = f": {stderr}" if stderr else ""
        raise CommandError(
            command,
            f"Command '{command}' exited with status {e.returncode}{detail}",
            returncode=e.returncode,
            stderr=stderr,
        ) from e
    except OSError as e:
        raise CommandError(command, f"Unable to run '{command}': {e}") from e
    duration_ns = time.monotonic_ns() - start
    return CommandResult(argv=argv, output=proc.stdout or "", duration_ns=duration_ns)
