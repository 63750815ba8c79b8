"""Configuration exceptions: platforms, paths, settings."""

from pathlib import Path
from typing import Any, List, Sequence

from .base import AlignInsightError


class ConfigurationError(AlignInsightError):
    """Errors in settings, inputs or platform selection."""


class UnknownPlatformError(ConfigurationError):
    """Raised when no sizing rules exist for the requested platform."""

    def __init__(self, platform: str, known_platforms: Sequence[str]):
        super().__init__(
            f"Unknown arch {platform}",
            details={"arch": platform, "supported": ", ".join(sorted(known_platforms))},
        )
        self.platform = platform
        self.known_platforms: List[str] = sorted(known_platforms)


class InvalidPathError(ConfigurationError):
    """Raised when an input path is missing or is not a Go source file."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid path: {path}", details={"path": str(path), "reason": reason})
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """Raised when a setting has an unusable value."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class NoInputPathsError(ConfigurationError):
    """Raised when the given inputs resolve to no packages at all."""

    def __init__(self, paths: Sequence[str]):
        super().__init__(
            "No import paths found",
            details={"paths": ", ".join(paths) if paths else "<none>"},
        )
        self.paths = list(paths)
