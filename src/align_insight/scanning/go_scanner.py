"""Go struct scanner.

Extracts struct declarations, their fields (names, type expressions, tags,
trailing comments) and ignore markers from Go source text. Non-struct type
declarations are collected too, so that the sizing provider can resolve
names declared in the same package.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Set

from ..exceptions import FileAccessError
from ..layout.models import Position
from ..logging_config import get_logger
from .discovery import SourcePackage
from .gosyntax import (
    FieldDecl,
    bracket_depth_delta,
    compact_type,
    matching_close,
    parse_field_entry,
    parse_field_list,
    split_comment,
    split_top_level,
    strip_block_comments,
    type_param_names,
)

logger = get_logger(__name__)

_TYPE_GROUP_RE = re.compile(r"^type\s*\($")
_TYPE_DECL_RE = re.compile(r"^type\s+(.+)$")
_TYPE_SPEC_RE = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)(\[[^\]]*\])?\s*(?:=\s*)?(.*)$")
_PACKAGE_RE = re.compile(r"^package\s+([A-Za-z_][A-Za-z0-9_]*)")


@dataclass
class StructDecl:
    """A struct type declaration as found in source."""

    name: str
    position: Position
    fields: List[FieldDecl] = field(default_factory=list)
    type_params: List[str] = field(default_factory=list)
    ignore: bool = False


@dataclass
class FileDecls:
    """Declarations found in one file."""

    path: str
    package: str = ""
    structs: List[StructDecl] = field(default_factory=list)
    local_types: Dict[str, str] = field(default_factory=dict)
    generic_types: Set[str] = field(default_factory=set)


@dataclass
class PackageDecls:
    """Declarations of all files of one package."""

    path: str
    structs: List[StructDecl] = field(default_factory=list)
    local_types: Dict[str, str] = field(default_factory=dict)
    generic_types: Set[str] = field(default_factory=set)


class GoStructScanner:
    """Scanner for struct declarations in Go source files"""

    def __init__(self, ignore_marker: str = "align:ignore"):
        self.ignore_marker = ignore_marker

    def scan_package(self, package: SourcePackage) -> PackageDecls:
        """Scan every file of a package, in file name order."""
        result = PackageDecls(path=package.path)

        for filepath in package.files:
            try:
                decls = self.scan_file(filepath)
            except FileAccessError as e:
                logger.warning(f"Skipping {filepath}: {e.reason}")
                continue
            result.structs.extend(decls.structs)
            result.local_types.update(decls.local_types)
            result.generic_types.update(decls.generic_types)

        logger.debug(f"{package.path}: {len(result.structs)} structs")
        return result

    def scan_file(self, filepath: Path) -> FileDecls:
        try:
            with open(filepath, "r", encoding="utf-8", errors="replace") as f:
                content = f.read()
        except OSError as e:
            raise FileAccessError(filepath, f"Cannot read file: {e}")

        return self.scan_source(content, filepath.name)

    def scan_source(self, content: str, filename: str) -> FileDecls:
        """Extract declarations from Go source text."""
        result = FileDecls(path=filename)
        lines = strip_block_comments(content).split("\n")
        pending_doc: List[str] = []
        in_group = False

        i = 0
        while i < len(lines):
            code, comment = split_comment(lines[i])
            stripped = code.strip()

            if not stripped:
                if comment and lines[i].strip().startswith("//"):
                    pending_doc.append(comment)
                else:
                    pending_doc = []
                i += 1
                continue

            package_match = _PACKAGE_RE.match(stripped)
            if package_match and not result.package:
                result.package = package_match.group(1)
                pending_doc = []
                i += 1
                continue

            if _TYPE_GROUP_RE.match(stripped):
                in_group = True
                pending_doc = []
                i += 1
                continue

            if in_group and stripped == ")":
                in_group = False
                pending_doc = []
                i += 1
                continue

            spec: Optional[str] = None
            decl_match = _TYPE_DECL_RE.match(stripped)
            if decl_match:
                spec = decl_match.group(1)
            elif in_group:
                spec = stripped

            if spec is None:
                pending_doc = []
                i += 1
                continue

            i = self._type_spec(lines, i, spec, comment, pending_doc, filename, result)
            pending_doc = []

        return result

    def _type_spec(
        self,
        lines: List[str],
        index: int,
        spec: str,
        comment: str,
        doc: List[str],
        filename: str,
        result: FileDecls,
    ) -> int:
        """Handle one type spec starting on ``lines[index]``; return the next line index."""
        match = _TYPE_SPEC_RE.match(spec)
        if not match:
            return index + 1

        name, params, rest = match.group(1), match.group(2), match.group(3).strip()
        type_params = type_param_names(params[1:-1]) if params else []
        if type_params:
            result.generic_types.add(name)

        if not re.match(r"^struct\s*\{", rest):
            underlying, next_index = self._collect_type(lines, index, rest)
            if not type_params and underlying:
                result.local_types[name] = underlying
            return next_index

        ignore = self._is_ignored(doc, comment)
        decl = StructDecl(
            name=name,
            position=Position(file=filename, line=index + 1),
            type_params=type_params,
            ignore=ignore,
        )

        open_brace = rest.index("{")
        close = matching_close(rest, open_brace)
        if close >= 0:
            # Single-line struct: type Point struct { X, Y int }
            for fd in parse_field_list(rest[open_brace + 1 : close]):
                decl.fields.append(
                    FieldDecl(fd.name, fd.type_expr, fd.tag, comment, index + 1)
                )
            next_index = index + 1
        else:
            head = rest[open_brace + 1 :].strip()
            next_index = self._struct_body(lines, index + 1, head, decl)

        result.structs.append(decl)
        if not type_params:
            result.local_types[name] = _struct_expr(decl.fields)
        return next_index

    def _struct_body(self, lines: List[str], start: int, head: str, decl: StructDecl) -> int:
        """Collect fields until the struct's closing brace."""
        if head:
            self._add_entry(decl, head, "", start)

        depth = 0
        entry: List[str] = []
        entry_comment = ""
        entry_line = start

        i = start
        while i < len(lines):
            code, comment = split_comment(lines[i])
            stripped = code.strip()
            i += 1

            if not stripped:
                continue

            delta = bracket_depth_delta(stripped)
            if depth == 0 and delta < 0 and stripped.endswith("}"):
                before = stripped[: stripped.rfind("}")].strip()
                if before:
                    self._add_entry(decl, before, comment, i)
                return i

            if depth == 0:
                entry = [stripped]
                entry_comment = comment
                entry_line = i
            else:
                entry.append(stripped)

            depth += delta
            if depth <= 0:
                depth = 0
                self._add_entry(decl, "\n".join(entry), entry_comment, entry_line)
                entry = []

        logger.warning(f"Unterminated struct {decl.name} at {decl.position}")
        return i

    @staticmethod
    def _add_entry(decl: StructDecl, text: str, comment: str, line: int) -> None:
        for part in split_top_level(text, separators=";"):
            decl.fields.extend(parse_field_entry(part, comment=comment, line=line))

    @staticmethod
    def _collect_type(lines: List[str], index: int, rest: str):
        """Underlying type of a non-struct declaration, possibly spanning lines."""
        depth = bracket_depth_delta(rest)
        parts = [rest]
        i = index + 1
        while depth > 0 and i < len(lines):
            code, _ = split_comment(lines[i])
            if code.strip():
                parts.append(code.strip())
                depth += bracket_depth_delta(code)
            i += 1

        underlying = compact_type("\n".join(parts))
        if underlying.startswith("interface"):
            underlying = "interface{}"
        return underlying, i

    def _is_ignored(self, doc: List[str], comment: str) -> bool:
        return any(self.ignore_marker in c for c in doc) or self.ignore_marker in comment


def _struct_expr(fields: List[FieldDecl]) -> str:
    return "struct{" + "; ".join(f"{f.name} {f.type_expr}" for f in fields) + "}"
