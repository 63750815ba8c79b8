"""Target platform selection.

Word size and maximum alignment per architecture follow the Go gc
compiler's tables. An ``AbiContext`` is selected once per run and passed
explicitly to every layout calculation.
"""

from __future__ import annotations

import platform as _platform
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..exceptions import UnknownPlatformError
from ..logging_config import get_logger

logger = get_logger(__name__)

# arch -> (word_size, max_align)
GC_ARCH_SIZES: Dict[str, Tuple[int, int]] = {
    "386": (4, 4),
    "amd64": (8, 8),
    "amd64p32": (4, 8),
    "arm": (4, 4),
    "arm64": (8, 8),
    "loong64": (8, 8),
    "mips": (4, 4),
    "mipsle": (4, 4),
    "mips64": (8, 8),
    "mips64le": (8, 8),
    "ppc64": (8, 8),
    "ppc64le": (8, 8),
    "riscv64": (8, 8),
    "s390x": (8, 8),
    "sparc64": (8, 8),
    "wasm": (8, 8),
}

# platform.machine() spellings -> Go arch names
_MACHINE_ALIASES: Dict[str, str] = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "i386": "386",
    "i486": "386",
    "i586": "386",
    "i686": "386",
    "x86": "386",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv6l": "arm",
    "armv7l": "arm",
    "ppc64": "ppc64",
    "ppc64le": "ppc64le",
    "riscv64": "riscv64",
    "s390x": "s390x",
    "loongarch64": "loong64",
    "mips": "mips",
    "mips64": "mips64",
}

DEFAULT_ARCH = "amd64"


@dataclass(frozen=True)
class AbiContext:
    """Data model of a target platform."""

    name: str
    word_size: int
    max_align: int

    def __post_init__(self) -> None:
        if self.word_size < 1:
            raise ValueError("word_size must be positive")
        if self.max_align < 1:
            raise ValueError("max_align must be positive")


def host_arch() -> str:
    """Go architecture name of the running machine."""
    machine = _platform.machine().lower()
    arch = _MACHINE_ALIASES.get(machine)
    if arch is None:
        logger.debug(f"Unrecognised host machine {machine!r}, assuming {DEFAULT_ARCH}")
        return DEFAULT_ARCH
    return arch


def known_platforms() -> list:
    return sorted(GC_ARCH_SIZES)


def resolve_platform(name: Optional[str] = None) -> AbiContext:
    """Select the ABI context for ``name`` (host platform when None).

    Raises:
        UnknownPlatformError: If ``name`` has no sizing rules
    """
    arch = host_arch() if name is None else name.strip().lower()

    sizes = GC_ARCH_SIZES.get(arch)
    if sizes is None:
        raise UnknownPlatformError(name or arch, known_platforms())

    word_size, max_align = sizes
    return AbiContext(name=arch, word_size=word_size, max_align=max_align)
