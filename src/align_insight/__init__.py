"""
align-insight - Go struct alignment viewer and checker

Simulates how a Go compiler lays out struct fields in memory, shows the
padding it inserts, and proposes a field order with minimal padding.
"""

__version__ = "0.1.0"

from .abi import AbiContext, resolve_platform
from .core import LayoutAnalyzer, analyze
from .layout import Field, Package, Record, Report, compute_layout, optimize

__all__ = [
    "analyze",  # Main entry point
    "LayoutAnalyzer",
    "AbiContext",
    "resolve_platform",
    "Field",
    "Record",
    "Package",
    "Report",
    "compute_layout",
    "optimize",
]
