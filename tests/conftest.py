import os
from pathlib import Path

import pytest

BASE_MTIME_NS = 1_700_000_000_000_000_000


@pytest.fixture
def watched(tmp_path: Path) -> Path:
    f = tmp_path / "f.txt"
    f.write_text("hello\n")
    os.utime(f, ns=(BASE_MTIME_NS, BASE_MTIME_NS))
    return f


@pytest.fixture
def touch():
    """Set a file's modification time to an exact nanosecond value."""

    def _touch(path: Path, mtime_ns: int) -> None:
        os.utime(path, ns=(mtime_ns, mtime_ns))

    return _touch
