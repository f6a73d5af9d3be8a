import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

from .command import CommandResult, run_command
from .config import DEFAULT_POLL_INTERVAL, WatchTarget
from .utils import format_duration, format_mtime, read_mtime_ns


@dataclass
class WatchStats:
    modifications: int = 0
    last_interval_ns: int = 0
    total_interval_ns: int = 0
    last_execution_ns: Optional[int] = None

    def record(self, diff_ns: int) -> None:
        self.modifications += 1
        self.last_interval_ns = diff_ns
        self.total_interval_ns += diff_ns

    @property
    def average_interval_ns(self) -> Optional[int]:
        if self.modifications == 0:
            return None
        # truncate toward zero; intervals may be negative when a file is reverted
        avg = abs(self.total_interval_ns) // self.modifications
        return avg if self.total_interval_ns >= 0 else -avg

    def summary(self) -> str:
        avg = self.average_interval_ns
        text = (
            f"{self.modifications} modifications, "
            f"last modified {format_duration(self.last_interval_ns)} ago, "
            f"average modification interval {format_duration(avg) if avg is not None else 'n/a'}"
        )
        if self.last_execution_ns is not None:
            text += f", command execution {format_duration(self.last_execution_ns)}"
        return text


class WatchTask:
    """Poll one file's modification time and react when it changes.

    The task keeps its own baseline timestamp and statistics; nothing is shared
    with other tasks. A stat or command failure raises a WatchError subclass.
    """

    def __init__(
        self,
        target: WatchTarget,
        quiet: bool = False,
        verbose: bool = False,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        runner: Callable[[str], CommandResult] = run_command,
    ) -> None:
        self.target = target
        self.quiet = quiet
        self.verbose = verbose
        self.poll_interval = poll_interval
        self.runner = runner
        self.stats = WatchStats()
        self.baseline_ns: Optional[int] = None

    def start(self) -> None:
        if not self.quiet:
            logging.info(f"Starting watch on: {self.target.path}")
        self.baseline_ns = read_mtime_ns(self.target.path)

    def poll(self) -> bool:
        """Sample the file once; return True when a modification was handled."""
        if self.baseline_ns is None:
            self.start()

        current = read_mtime_ns(self.target.path)
        diff = current - self.baseline_ns
        if diff == 0:
            return False

        self.baseline_ns = current
        self.stats.record(diff)
        path = self.target.path
        report = not self.quiet
        detail = report and self.verbose

        if report:
            logging.info(f"File {path} was modified at: {format_mtime(current)}")

        if not self.target.command:
            if detail:
                logging.info("No command configured, nothing to execute")
                logging.info(f"Stats for {path}: {self.stats.summary()}")
            return True

        if report:
            logging.info(f"Executing: {self.target.command}")
        result = self.runner(self.target.command)
        self.stats.last_execution_ns = result.duration_ns
        if detail:
            logging.info(f"Command output:\n{result.output}")
            logging.info(f"Stats for {path}: {self.stats.summary()}")
        return True

    def run(self, stop: Optional[threading.Event] = None) -> None:
        """Poll until ``stop`` is set; without one, only an exception ends the loop."""
        if stop is None:
            stop = threading.Event()
        self.start()
        while not stop.is_set():
            self.poll()
            stop.wait(self.poll_interval)
