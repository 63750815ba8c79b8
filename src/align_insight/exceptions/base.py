"""Root exception for align-insight."""

from typing import Any, Dict, Mapping, Optional


class AlignInsightError(Exception):
    """Root of all align-insight errors.

    ``details`` holds key/value context shown after the message, e.g.
    ``Invalid path: x (path=x, reason=does not exist)``.
    """

    def __init__(self, message: str, details: Optional[Mapping[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, str] = {k: str(v) for k, v in (details or {}).items()}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"
