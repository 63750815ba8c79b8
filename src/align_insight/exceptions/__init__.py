"""Exception hierarchy for align-insight."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    IndeterminateLayoutError,
    ParsingError,
)
from .base import AlignInsightError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
    NoInputPathsError,
    UnknownPlatformError,
)

__all__ = [
    "AlignInsightError",
    "AnalysisError",
    "FileAccessError",
    "IndeterminateLayoutError",
    "ParsingError",
    "ConfigurationError",
    "InvalidConfigError",
    "InvalidPathError",
    "NoInputPathsError",
    "UnknownPlatformError",
]
