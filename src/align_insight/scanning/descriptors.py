"""Field descriptor files: pre-sized struct definitions in JSON.

Lets any external parser feed the analyzer. The file format mirrors the
report shape::

    {
      "platform": "amd64",
      "packages": [
        {"path": "example.com/pkg",
         "structs": [
           {"name": "Config", "position": {"file": "config.go", "line": 12},
            "ignore": false,
            "fields": [{"name": "Enabled", "type": "bool", "size": 1, "align": 1,
                        "tag": "", "comment": ""}]}
         ]}
      ]
    }

A field whose ``size`` is null is treated as indeterminate.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Tuple

from ..exceptions import FileAccessError, ParsingError
from ..layout.models import Field, Position, RawPackage, RawRecord


@dataclass(frozen=True)
class DescriptorSet:
    """Contents of one descriptor file."""

    platform: Optional[str]
    packages: Tuple[RawPackage, ...]


def load_descriptors(path: Path) -> DescriptorSet:
    """Read a descriptor file.

    Raises:
        FileAccessError: If the file cannot be read
        ParsingError: If the content is not a valid descriptor document
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise FileAccessError(path, f"Cannot read file: {e}")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParsingError(path, f"invalid JSON: {e}")

    return parse_descriptors(data, path)


def parse_descriptors(data: Any, source: Path = Path("<memory>")) -> DescriptorSet:
    """Validate and convert a decoded descriptor document."""
    if not isinstance(data, dict):
        raise ParsingError(source, "top level must be an object")

    platform = data.get("platform")
    if platform is not None and not isinstance(platform, str):
        raise ParsingError(source, "'platform' must be a string")

    packages: List[RawPackage] = []
    for pkg_index, pkg in enumerate(data.get("packages") or []):
        where = f"packages[{pkg_index}]"
        if not isinstance(pkg, dict) or not isinstance(pkg.get("path"), str):
            raise ParsingError(source, f"{where} must be an object with a 'path'")
        records = tuple(
            _record(rec, source, f"{where}.structs[{i}]")
            for i, rec in enumerate(pkg.get("structs") or [])
        )
        packages.append(RawPackage(path=pkg["path"], records=records))

    return DescriptorSet(platform=platform, packages=tuple(packages))


def _record(data: Any, source: Path, where: str) -> RawRecord:
    if not isinstance(data, dict) or not isinstance(data.get("name"), str):
        raise ParsingError(source, f"{where} must be an object with a 'name'")

    pos = data.get("position") or {}
    if not isinstance(pos, dict):
        raise ParsingError(source, f"{where}.position must be an object")
    line = pos.get("line", 0)
    if not isinstance(line, int) or isinstance(line, bool) or line < 0:
        raise ParsingError(source, f"{where}.position.line must be a non-negative integer")

    fields = tuple(
        _field(f, source, f"{where}.fields[{i}]") for i, f in enumerate(data.get("fields") or [])
    )
    return RawRecord(
        name=data["name"],
        position=Position(file=str(pos.get("file", "")), line=line),
        fields=fields,
        ignore=bool(data.get("ignore", False)),
    )


def _field(data: Any, source: Path, where: str) -> Field:
    if not isinstance(data, dict) or not isinstance(data.get("name"), str):
        raise ParsingError(source, f"{where} must be an object with a 'name'")

    size = data.get("size")
    align = data.get("align")
    for key, value in (("size", size), ("align", align)):
        if value is not None and (not isinstance(value, int) or isinstance(value, bool) or value < 0):
            raise ParsingError(source, f"{where}.{key} must be a non-negative integer")

    if size is not None and align is None:
        align = 1

    return Field(
        name=data["name"],
        type_descriptor=str(data.get("type", "")),
        size=size,
        align=align,
        tag=str(data.get("tag") or ""),
        comment=str(data.get("comment") or ""),
    )
