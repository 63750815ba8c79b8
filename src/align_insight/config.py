"""Configuration for align-insight runs.

Settings are merged from, lowest priority first:

    1. ``AnalysisConfig`` defaults
    2. ``~/.align-insight.toml``
    3. ``./align-insight.toml``
    4. an explicit ``--config`` file
    5. ``ALIGN_*`` environment variables
    6. command line options

Example:
    >>> config = load_config(arch="386", workers=4)
    >>> config.arch
    '386'
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Dict, List, Literal, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .exceptions import AlignInsightError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

CONFIG_FILENAME = "align-insight.toml"
ENV_PREFIX = "ALIGN_"

_VERBOSITIES = ("quiet", "normal", "verbose")


@dataclass(frozen=True)
class AnalysisConfig:
    """Settings of one analysis run.

    Attributes:
        arch: Go architecture name; None selects the host platform
        workers: Threads used to analyse structs; None analyses sequentially
        ignore_marker: Comment text that excludes a struct from ``check``
        exclude_patterns: Globs, relative to the scanned root, of files and
            directories to skip
        include_tests: Also scan ``_test.go`` files
        detailed: Draw byte maps for every field
        color: Colored terminal output
        verbosity: Logging verbosity
    """

    arch: Optional[str] = None
    workers: Optional[int] = None

    ignore_marker: str = "align:ignore"
    exclude_patterns: List[str] = field(
        default_factory=lambda: ["vendor/*", "testdata/*", ".git/*", "_*"]
    )
    include_tests: bool = False

    detailed: bool = False
    color: bool = True
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        if self.arch is not None and not self.arch.strip():
            raise InvalidConfigError("arch", self.arch, "must not be blank")
        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if not self.ignore_marker.strip():
            raise InvalidConfigError("ignore_marker", self.ignore_marker, "must not be blank")
        if self.verbosity not in _VERBOSITIES:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"expected one of {', '.join(_VERBOSITIES)}"
            )


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"expected true/false, got {value!r}")


def _parse_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


# How each setting is read from its ALIGN_* environment variable
_ENV_PARSERS: Dict[str, Callable[[str], Any]] = {
    "arch": str,
    "workers": int,
    "ignore_marker": str,
    "exclude_patterns": _parse_list,
    "include_tests": _parse_bool,
    "detailed": _parse_bool,
    "color": _parse_bool,
    "verbosity": str,
}


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> AnalysisConfig:
    """Build an ``AnalysisConfig`` from files, environment and overrides.

    Args:
        config_file: Explicit TOML file (must exist)
        **overrides: Command line values; ``None`` means "not given".
            ``verbose``/``quiet`` flags map onto ``verbosity``.

    Raises:
        AlignInsightError: If a config file or environment value is invalid
    """
    merged: Dict[str, Any] = {}

    for path in _config_files(config_file):
        merged.update(_read_toml(path))

    merged.update(_read_env(os.environ))

    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    merged.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(AnalysisConfig)}
    unknown = sorted(set(merged) - known)
    if unknown:
        raise AlignInsightError(f"Unknown configuration keys: {', '.join(unknown)}")

    return AnalysisConfig(**merged)


def _config_files(explicit: Optional[Path]) -> List[Path]:
    candidates = [Path.home() / f".{CONFIG_FILENAME}", Path.cwd() / CONFIG_FILENAME]
    found = [p for p in candidates if p.is_file()]
    if explicit is not None:
        if not explicit.is_file():
            raise AlignInsightError(f"Config file not found: {explicit}")
        found.append(explicit)
    return found


def _read_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise AlignInsightError(f"Invalid config file '{path}': {e}")


def _read_env(environ: Dict[str, str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for name, parse in _ENV_PARSERS.items():
        raw = environ.get(ENV_PREFIX + name.upper())
        if raw is None:
            continue
        try:
            values[name] = parse(raw)
        except ValueError as e:
            raise AlignInsightError(f"Invalid {ENV_PREFIX}{name.upper()}: {e}")
    return values
