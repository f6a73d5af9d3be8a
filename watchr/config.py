"""Resolve the run configuration from CLI flags or a config file.

Direct mode builds one target from --file/--cmd. Config-file mode reads a
JSON, YAML or TOML document shaped like::

    quiet: false
    verbose: true
    interval: 0.5        # optional, seconds between polls
    files:
      - path: foo.txt
        cmd: make build
      - path: bar.txt
        cmd: ""
"""

import json
import logging
import math
import threading
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .errors import ConfigError

DEFAULT_POLL_INTERVAL = 0.1

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class WatchTarget:
    path: str
    command: str = ""


@dataclass(frozen=True)
class RunConfig:
    quiet: bool = False
    verbose: bool = False
    targets: Tuple[WatchTarget, ...] = field(default_factory=tuple)
    poll_interval: float = DEFAULT_POLL_INTERVAL

    def validate(self) -> "RunConfig":
        if self.quiet and self.verbose:
            raise ConfigError("The quiet and verbose options are mutually exclusive")
        if not self.targets:
            raise ConfigError("At least one file to watch is required")
        for target in self.targets:
            if not target.path:
                raise ConfigError("Every watched file needs a non-empty path")
        if not math.isfinite(self.poll_interval) or not 0 <= self.poll_interval <= threading.TIMEOUT_MAX:
            raise ConfigError(f"Poll interval must be a finite number of seconds >= 0, got {self.poll_interval}")
        return self


def validate_flags(
    cfg: Optional[str],
    file: Optional[str],
    cmd: Optional[str],
    quiet: bool,
    verbose: bool,
) -> None:
    if cfg and (file or cmd or quiet or verbose):
        raise ConfigError("The --cfg flag cannot be used with any other flags")
    if not cfg and not file:
        raise ConfigError("Either --cfg with a config file or --file with a file path is required")
    if quiet and verbose:
        raise ConfigError("The --quiet and --verbose flags are mutually exclusive")


def load_config_file(path: Path) -> Dict[str, Any]:
    """Parse a config file, picking the format from its extension.

    Keys are lower-cased so "Quiet" and "quiet" mean the same thing.
    """
    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            data = json.loads(path.read_text(encoding="utf-8"))
        elif suffix in (".yaml", ".yml"):
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        elif suffix == ".toml":
            with open(path, "rb") as f:
                data = tomllib.load(f)
        else:
            raise ConfigError(f"Unsupported config file type '{suffix}' for {path}")
    except (json.JSONDecodeError, yaml.YAMLError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Error parsing config file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Error reading config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping at the top level")
    _log.debug("Loaded config file %s", path)
    return _lower_keys(data)


def _lower_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    return {str(k).lower(): v for k, v in data.items()}


def _as_bool(data: Dict[str, Any], key: str) -> bool:
    value = data.get(key, False)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false, got {value!r}")
    return value


def _as_str(entry: Dict[str, Any], key: str, index: int) -> str:
    value = entry.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ConfigError(f"files[{index}].{key} must be a string, got {value!r}")
    return value


def config_from_mapping(data: Dict[str, Any]) -> RunConfig:
    data = _lower_keys(data)
    files = data.get("files") or []
    if not isinstance(files, list):
        raise ConfigError("'files' must be a list of {path, cmd} entries")

    targets = []
    for i, entry in enumerate(files):
        if not isinstance(entry, dict):
            raise ConfigError(f"files[{i}] must be a mapping with 'path' and 'cmd'")
        entry = _lower_keys(entry)
        targets.append(WatchTarget(path=_as_str(entry, "path", i), command=_as_str(entry, "cmd", i)))

    interval = data.get("interval", DEFAULT_POLL_INTERVAL)
    if isinstance(interval, bool) or not isinstance(interval, (int, float)):
        raise ConfigError(f"'interval' must be a number of seconds, got {interval!r}")

    return RunConfig(
        quiet=_as_bool(data, "quiet"),
        verbose=_as_bool(data, "verbose"),
        targets=tuple(targets),
        poll_interval=float(interval),
    )


def resolve_config(
    cfg: Optional[str] = None,
    file: Optional[str] = None,
    cmd: Optional[str] = None,
    quiet: bool = False,
    verbose: bool = False,
    interval: Optional[float] = None,
) -> RunConfig:
    """Build the validated RunConfig for one run.

    Raises ConfigError before any task starts when the flags or file are unusable.
    """
    validate_flags(cfg, file, cmd, quiet, verbose)

    if cfg:
        conf = config_from_mapping(load_config_file(Path(cfg).expanduser()))
        if interval is not None:
            conf = RunConfig(conf.quiet, conf.verbose, conf.targets, interval)
        return conf.validate()

    return RunConfig(
        quiet=quiet,
        verbose=verbose,
        targets=(WatchTarget(path=file or "", command=cmd or ""),),
        poll_interval=DEFAULT_POLL_INTERVAL if interval is None else interval,
    ).validate()
