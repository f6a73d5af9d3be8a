import json
from pathlib import Path

import pytest

from watchr.config import (
    DEFAULT_POLL_INTERVAL,
    RunConfig,
    WatchTarget,
    config_from_mapping,
    load_config_file,
    resolve_config,
    validate_flags,
)
from watchr.errors import ConfigError


def test_direct_mode_builds_single_target():
    conf = resolve_config(file="f.txt", cmd="make build", verbose=True)
    assert conf.targets == (WatchTarget("f.txt", "make build"),)
    assert conf.verbose is True
    assert conf.quiet is False
    assert conf.poll_interval == DEFAULT_POLL_INTERVAL


def test_direct_mode_without_cmd_is_report_only():
    conf = resolve_config(file="f.txt")
    assert conf.targets[0].command == ""


@pytest.mark.parametrize(
    "kwargs, message",
    [
        (dict(cfg="c.yaml", file="f.txt"), "--cfg"),
        (dict(cfg="c.yaml", quiet=True), "--cfg"),
        (dict(cmd="make"), "required"),
        (dict(), "required"),
        (dict(file="f.txt", quiet=True, verbose=True), "mutually exclusive"),
    ],
)
def test_invalid_flag_combinations(kwargs, message):
    args = dict(cfg=None, file=None, cmd=None, quiet=False, verbose=False)
    args.update(kwargs)
    with pytest.raises(ConfigError, match=message):
        validate_flags(**args)


def test_run_config_rejects_quiet_and_verbose():
    with pytest.raises(ConfigError):
        RunConfig(quiet=True, verbose=True, targets=(WatchTarget("f.txt"),)).validate()


def test_run_config_rejects_empty_targets_and_paths():
    with pytest.raises(ConfigError):
        RunConfig(targets=()).validate()
    with pytest.raises(ConfigError):
        RunConfig(targets=(WatchTarget(""),)).validate()


def test_run_config_rejects_negative_interval():
    with pytest.raises(ConfigError):
        RunConfig(targets=(WatchTarget("f.txt"),), poll_interval=-1).validate()


def test_yaml_config_file(tmp_path: Path):
    cfg = tmp_path / "watchr.yaml"
    cfg.write_text(
        "quiet: false\n"
        "verbose: true\n"
        "files:\n"
        "  - path: a.txt\n"
        "    cmd: make a\n"
        "  - path: b.txt\n"
        "    cmd: ''\n"
    )
    conf = resolve_config(cfg=str(cfg))
    assert conf.verbose is True
    assert conf.targets == (WatchTarget("a.txt", "make a"), WatchTarget("b.txt", ""))


def test_json_config_file_keys_are_case_insensitive(tmp_path: Path):
    cfg = tmp_path / "watchr.json"
    cfg.write_text(json.dumps({"Quiet": True, "Files": [{"Path": "a.txt", "Cmd": "true"}]}))
    conf = resolve_config(cfg=str(cfg))
    assert conf.quiet is True
    assert conf.targets == (WatchTarget("a.txt", "true"),)


def test_toml_config_file_with_interval(tmp_path: Path):
    cfg = tmp_path / "watchr.toml"
    cfg.write_text(
        "verbose = false\n"
        "interval = 0.5\n"
        "[[files]]\n"
        'path = "a.txt"\n'
        'cmd = "echo changed"\n'
    )
    conf = resolve_config(cfg=str(cfg))
    assert conf.poll_interval == 0.5
    assert conf.targets[0].command == "echo changed"


def test_cli_interval_overrides_config_file(tmp_path: Path):
    cfg = tmp_path / "watchr.yaml"
    cfg.write_text("interval: 2\nfiles:\n  - path: a.txt\n")
    assert resolve_config(cfg=str(cfg), interval=0.25).poll_interval == 0.25


def test_config_file_quiet_and_verbose_rejected(tmp_path: Path):
    cfg = tmp_path / "watchr.yaml"
    cfg.write_text("quiet: true\nverbose: true\nfiles:\n  - path: a.txt\n")
    with pytest.raises(ConfigError, match="mutually exclusive"):
        resolve_config(cfg=str(cfg))


def test_config_file_without_files_rejected(tmp_path: Path):
    cfg = tmp_path / "watchr.yaml"
    cfg.write_text("verbose: true\n")
    with pytest.raises(ConfigError, match="At least one"):
        resolve_config(cfg=str(cfg))


def test_missing_config_file(tmp_path: Path):
    with pytest.raises(ConfigError, match="Error reading"):
        load_config_file(tmp_path / "nope.yaml")


def test_unsupported_config_extension(tmp_path: Path):
    cfg = tmp_path / "watchr.ini"
    cfg.write_text("[files]\n")
    with pytest.raises(ConfigError, match="Unsupported"):
        load_config_file(cfg)


def test_malformed_yaml(tmp_path: Path):
    cfg = tmp_path / "watchr.yaml"
    cfg.write_text("files: [\n")
    with pytest.raises(ConfigError, match="Error parsing"):
        load_config_file(cfg)


def test_non_mapping_top_level(tmp_path: Path):
    cfg = tmp_path / "watchr.json"
    cfg.write_text("[1, 2]")
    with pytest.raises(ConfigError, match="mapping"):
        load_config_file(cfg)


@pytest.mark.parametrize(
    "data",
    [
        {"quiet": "yes", "files": [{"path": "a"}]},
        {"files": "a.txt"},
        {"files": ["a.txt"]},
        {"files": [{"path": 3}]},
        {"files": [{"path": "a"}], "interval": "fast"},
    ],
)
def test_config_type_errors(data):
    with pytest.raises(ConfigError):
        config_from_mapping(data)


@pytest.mark.parametrize("interval", [float("inf"), float("-inf"), float("nan"), -0.5, 1e300])
def test_run_config_rejects_unusable_intervals(interval):
    with pytest.raises(ConfigError, match="Poll interval"):
        RunConfig(targets=(WatchTarget("f.txt"),), poll_interval=interval).validate()


def test_infinite_interval_in_config_file_rejected(tmp_path: Path):
    cfg = tmp_path / "watchr.yaml"
    cfg.write_text("interval: .inf\nfiles:\n  - path: a.txt\n")
    with pytest.raises(ConfigError, match="Poll interval"):
        resolve_config(cfg=str(cfg))
