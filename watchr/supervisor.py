import logging
import threading
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import Dict, List, Optional, Tuple

from .config import RunConfig
from .errors import WatchError
from .watch import WatchTask


def build_tasks(config: RunConfig) -> List[WatchTask]:
    return [
        WatchTask(
            target,
            quiet=config.quiet,
            verbose=config.verbose,
            poll_interval=config.poll_interval,
        )
        for target in config.targets
    ]


def report_failures(futures: Dict[Future, WatchTask]) -> List[Tuple[WatchTask, BaseException]]:
    """Log every finished task that raised, in target order, and return them."""
    failures = []
    for future, task in futures.items():
        if not future.done() or future.exception() is None:
            continue
        err = future.exception()
        logging.error(f"Watch on {task.target.path} failed: {err}")
        failures.append((task, err))
    return failures


def run_all(
    config: RunConfig,
    stop: Optional[threading.Event] = None,
    tasks: Optional[List[WatchTask]] = None,
) -> List[WatchTask]:
    """Run one WatchTask per target concurrently and block until all finish.

    - Tasks never finish on their own; only ``stop`` or a failure ends them.
    - On the first failure every failed task is logged, ``stop`` is set and
      the first WatchError is raised at once. Workers still running a command
      are not joined; the caller is expected to end the process.
    """
    if stop is None:
        stop = threading.Event()
    if tasks is None:
        tasks = build_tasks(config)

    executor = ThreadPoolExecutor(
        max_workers=max(1, len(tasks)), thread_name_prefix="watchr-task"
    )
    futures = {executor.submit(task.run, stop): task for task in tasks}
    wait(futures, return_when=FIRST_EXCEPTION)
    stop.set()

    failures = report_failures(futures)
    if not failures:
        executor.shutdown(wait=True)
        return tasks

    executor.shutdown(wait=False, cancel_futures=True)
    _, err = failures[0]
    if isinstance(err, WatchError):
        raise err
    raise WatchError(str(err)) from err
