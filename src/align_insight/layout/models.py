"""Data models for struct layout reports.

Reports are assembled bottom-up (Field -> Record -> Package -> Report) and
never mutated afterwards. ``to_dict`` produces the JSON shape consumed by
formatters and external tooling; ``from_dict`` reads it back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Position:
    """Source position of a struct declaration."""

    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


@dataclass(frozen=True)
class Field:
    """A struct field with its ABI-provided size and alignment.

    ``size`` is None when the sizing provider could not resolve the type.
    """

    name: str
    type_descriptor: str
    size: Optional[int]
    align: Optional[int]
    tag: str = ""
    comment: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type_descriptor,
            "tag": self.tag,
            "comment": self.comment,
            "size": self.size,
            "align": self.align,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Field":
        return cls(
            name=d.get("name", ""),
            type_descriptor=d.get("type", ""),
            size=d.get("size"),
            align=d.get("align"),
            tag=d.get("tag") or "",
            comment=d.get("comment") or "",
        )


@dataclass(frozen=True)
class RawRecord:
    """A struct as supplied by a parser, before layout analysis."""

    name: str
    position: Position
    fields: Tuple[Field, ...] = ()
    ignore: bool = False


@dataclass(frozen=True)
class RawPackage:
    """Structs of one package, in declaration order."""

    path: str
    records: Tuple[RawRecord, ...] = ()


@dataclass(frozen=True)
class Record:
    """Layout analysis result for one struct.

    ``optimized_fields`` is set only when a reordering is strictly smaller;
    it always holds the same fields as ``fields``. An unchecked record
    (``size is None``) carries the reason its layout could not be computed.
    """

    name: str
    position: Position
    fields: Tuple[Field, ...]
    size: Optional[int]
    optimal_size: Optional[int]
    optimized_fields: Optional[Tuple[Field, ...]] = None
    ignore: bool = False
    reason: Optional[str] = None

    @property
    def checked(self) -> bool:
        return self.size is not None and self.optimal_size is not None

    @property
    def can_be_optimized(self) -> bool:
        return self.checked and self.size != self.optimal_size

    @property
    def wasted_bytes(self) -> int:
        """Bytes saved by the optimized order (0 when unchecked or optimal)."""
        if not self.checked:
            return 0
        return self.size - self.optimal_size

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "position": {"file": self.position.file, "line": self.position.line},
            "fields": [f.to_dict() for f in self.fields],
            "aligned_fields": (
                [f.to_dict() for f in self.optimized_fields]
                if self.optimized_fields is not None
                else None
            ),
            "size": self.size,
            "optimal_size": self.optimal_size,
            "ignore": self.ignore,
            "checked": self.checked,
            "reason": self.reason,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Record":
        pos = d.get("position") or {}
        aligned = d.get("aligned_fields")
        return cls(
            name=d.get("name", ""),
            position=Position(file=pos.get("file", ""), line=int(pos.get("line", 0))),
            fields=tuple(Field.from_dict(f) for f in d.get("fields") or []),
            size=d.get("size"),
            optimal_size=d.get("optimal_size"),
            optimized_fields=(
                tuple(Field.from_dict(f) for f in aligned) if aligned is not None else None
            ),
            ignore=bool(d.get("ignore", False)),
            reason=d.get("reason"),
        )


@dataclass(frozen=True)
class Package:
    """All analysed structs of one package."""

    path: str
    records: Tuple[Record, ...] = ()

    def is_empty(self) -> bool:
        return len(self.records) == 0

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "structs": [r.to_dict() for r in self.records]}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Package":
        return cls(
            path=d.get("path", ""),
            records=tuple(Record.from_dict(r) for r in d.get("structs") or []),
        )


@dataclass(frozen=True)
class Report:
    """Layout report for a whole run."""

    packages: Tuple[Package, ...] = field(default_factory=tuple)

    def is_empty(self) -> bool:
        return all(pkg.is_empty() for pkg in self.packages)

    def non_empty_packages(self) -> List[Package]:
        return [pkg for pkg in self.packages if not pkg.is_empty()]

    def iter_records(self) -> Iterator[Tuple[Package, Record]]:
        for pkg in self.packages:
            for record in pkg.records:
                yield pkg, record

    def to_dict(self) -> Dict[str, Any]:
        return {"packages": [p.to_dict() for p in self.packages]}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Report":
        return cls(packages=tuple(Package.from_dict(p) for p in d.get("packages") or []))

    @classmethod
    def of(cls, packages: Sequence[Package]) -> "Report":
        return cls(packages=tuple(packages))
