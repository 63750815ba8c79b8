"""Analysis-related exceptions: file access, parsing, layout resolution."""

from pathlib import Path

from .base import AlignInsightError


class AnalysisError(AlignInsightError):
    """Errors raised while reading inputs or computing layouts."""


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """Raised when a descriptor file cannot be parsed."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Failed to parse descriptor file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class IndeterminateLayoutError(AnalysisError):
    """Raised when a type's size or alignment cannot be resolved.

    Typical causes are unresolved type parameters and types declared in
    packages that were not scanned. The record builder catches this per
    record and marks the record as unchecked.
    """

    def __init__(self, type_descriptor: str, reason: str):
        super().__init__(
            f"Cannot determine layout of {type_descriptor}",
            details={"type": type_descriptor, "reason": reason},
        )
        self.type_descriptor = type_descriptor
        self.reason = reason
