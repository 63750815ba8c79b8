"""Base formatter interface for align-insight output rendering."""

from abc import ABC, abstractmethod

from ..layout import Report
from ..models import AnalysisContext


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, report: Report, context: AnalysisContext) -> None:
        """Render the report to stdout."""

    @abstractmethod
    def format(self, report: Report, context: AnalysisContext) -> str:
        """Return formatted string representation of the report."""
