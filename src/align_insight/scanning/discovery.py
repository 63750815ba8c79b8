"""Package discovery for Go source trees.

Inputs follow the ``go`` tool's conventions: a directory names one package,
``dir/...`` names every package below ``dir``, and a ``.go`` file names the
package of that file alone.
"""

from __future__ import annotations

import fnmatch
import os
import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple

from ..exceptions import InvalidPathError
from ..logging_config import get_logger

if TYPE_CHECKING:
    from ..config import AnalysisConfig

logger = get_logger(__name__)

_MODULE_RE = re.compile(r"^\s*module\s+(\S+)", re.MULTILINE)

# Directories the go tool never treats as packages
_SKIP_DIR_NAMES = frozenset({"testdata", "vendor"})


@dataclass(frozen=True)
class SourcePackage:
    """A directory of Go files forming one package."""

    path: str
    directory: Path
    files: Tuple[Path, ...]


class PackageDiscovery:
    """Resolve input paths to Go packages."""

    def __init__(
        self,
        exclude_patterns: Sequence[str] = (),
        include_tests: bool = False,
    ):
        self.exclude_patterns = list(exclude_patterns)
        self.include_tests = include_tests
        self._module_cache: Dict[Path, Optional[Tuple[Path, str]]] = {}

    @classmethod
    def from_config(cls, config: "AnalysisConfig") -> "PackageDiscovery":
        return cls(exclude_patterns=config.exclude_patterns, include_tests=config.include_tests)

    def discover(self, inputs: Sequence[str]) -> List[SourcePackage]:
        """Packages named by ``inputs``, deduplicated, in discovery order.

        Raises:
            InvalidPathError: If an input does not exist
        """
        seen: Dict[Path, SourcePackage] = {}

        for raw in inputs:
            recursive = False
            target = raw
            if target == "..." or target.endswith("/..."):
                recursive = True
                target = target[: -len("...")].rstrip("/") or "."

            path = Path(target)
            if not path.exists():
                raise InvalidPathError(path, "does not exist")

            if path.is_file():
                if path.suffix != ".go":
                    raise InvalidPathError(path, "not a Go source file")
                self._add(seen, self._package(path.parent, (path,)))
                continue

            for directory in self._directories(path, recursive):
                self._add(seen, self._package(directory, self._go_files(directory, path)))

        return list(seen.values())

    @staticmethod
    def _add(seen: Dict[Path, SourcePackage], pkg: Optional[SourcePackage]) -> None:
        """Record ``pkg``, merging its files into an already seen directory."""
        if pkg is None:
            return
        existing = seen.get(pkg.directory)
        if existing is None:
            seen[pkg.directory] = pkg
            return
        known = {f.resolve() for f in existing.files}
        extra = tuple(f for f in pkg.files if f.resolve() not in known)
        if extra:
            seen[pkg.directory] = replace(existing, files=existing.files + extra)

    def _directories(self, root: Path, recursive: bool) -> List[Path]:
        if not recursive:
            return [root]

        found: List[Path] = []
        for dirpath, dirnames, _ in os.walk(root):
            current = Path(dirpath)
            dirnames[:] = sorted(
                d for d in dirnames if not self._skip_dir(current / d, root)
            )
            found.append(current)
        return found

    def _skip_dir(self, directory: Path, root: Path) -> bool:
        name = directory.name
        if name.startswith((".", "_")) or name in _SKIP_DIR_NAMES:
            return True
        rel = directory.relative_to(root).as_posix()
        return self._excluded(rel + "/")

    def _excluded(self, rel: str) -> bool:
        return any(
            fnmatch.fnmatch(rel, pattern) or fnmatch.fnmatch(Path(rel).name, pattern)
            for pattern in self.exclude_patterns
        )

    def _go_files(self, directory: Path, root: Path) -> Tuple[Path, ...]:
        files = []
        for entry in sorted(directory.iterdir()):
            if not entry.is_file() or entry.suffix != ".go":
                continue
            if entry.name.endswith("_test.go") and not self.include_tests:
                continue
            rel = entry.relative_to(root).as_posix() if entry.is_relative_to(root) else entry.name
            if self._excluded(rel):
                logger.debug(f"Excluded {entry}")
                continue
            files.append(entry)
        return tuple(files)

    def _package(self, directory: Path, files: Tuple[Path, ...]) -> Optional[SourcePackage]:
        if not files:
            return None
        directory = directory.resolve()
        return SourcePackage(path=self.import_path(directory), directory=directory, files=files)

    def import_path(self, directory: Path) -> str:
        """Import path of ``directory`` from the nearest go.mod, else a relative path."""
        module = self._find_module(directory)
        if module is not None:
            module_root, module_path = module
            rel = directory.relative_to(module_root).as_posix()
            return module_path if rel == "." else f"{module_path}/{rel}"

        try:
            return directory.relative_to(Path.cwd().resolve()).as_posix()
        except ValueError:
            return directory.as_posix()

    def _find_module(self, directory: Path) -> Optional[Tuple[Path, str]]:
        if directory in self._module_cache:
            return self._module_cache[directory]

        result = None
        for candidate in (directory, *directory.parents):
            go_mod = candidate / "go.mod"
            if go_mod.is_file():
                try:
                    match = _MODULE_RE.search(go_mod.read_text(encoding="utf-8", errors="replace"))
                except OSError as e:
                    logger.warning(f"Cannot read {go_mod}: {e}")
                    match = None
                if match:
                    result = (candidate, match.group(1))
                break

        self._module_cache[directory] = result
        return result
