"""Target platform selection and type sizing."""

from .platforms import (
    DEFAULT_ARCH,
    GC_ARCH_SIZES,
    AbiContext,
    host_arch,
    known_platforms,
    resolve_platform,
)
from .sizing import WELL_KNOWN_TYPES, GoSizes, SizingProvider

__all__ = [
    "AbiContext",
    "DEFAULT_ARCH",
    "GC_ARCH_SIZES",
    "GoSizes",
    "SizingProvider",
    "WELL_KNOWN_TYPES",
    "host_arch",
    "known_platforms",
    "resolve_platform",
]
