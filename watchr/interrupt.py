import logging
import os
import signal
import sys


def terminate(code: int) -> None:
    """Flush pending output and end the process without joining watch threads."""
    sys.stdout.flush()
    sys.stderr.flush()
    for handler in logging.getLogger().handlers:
        handler.flush()
    os._exit(code)


def _exit_on_interrupt(signum, frame) -> None:
    # overwrite the ^C the terminal echoed
    sys.stdout.write("\r")
    logging.info(f"Received {signal.Signals(signum).name}, exiting watchr")
    terminate(0)


def catch_interrupt() -> None:
    """Exit the whole process with status 0 on Ctrl+C or SIGTERM.

    Watch tasks are not given a chance to finish their current iteration.
    """
    signal.signal(signal.SIGINT, _exit_on_interrupt)
    signal.signal(signal.SIGTERM, _exit_on_interrupt)
