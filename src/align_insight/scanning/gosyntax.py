"""Small Go syntax helpers shared by the scanner and the sizing provider.

These work on source text, not on a full AST: enough to split struct
bodies into field entries and to take type expressions apart.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {")", "]", "}"}

_IDENT = r"[A-Za-z_][A-Za-z0-9_]*"
_NAMED_FIELD_RE = re.compile(rf"^({_IDENT}(?:\s*,\s*{_IDENT})*)\s+(\S.*)$", re.DOTALL)
_TRAILING_TAG_RE = re.compile(r'\s*(`[^`]*`|"(?:[^"\\]|\\.)*")\s*$')


@dataclass(frozen=True)
class FieldDecl:
    """A field as written in a struct body, before sizing."""

    name: str
    type_expr: str
    tag: str = ""
    comment: str = ""
    line: int = 0


def split_top_level(text: str, separators: str = ";\n") -> List[str]:
    """Split ``text`` on separators that are not nested in brackets or literals.

    Empty parts are dropped and surrounding whitespace is stripped.
    """
    parts: List[str] = []
    depth = 0
    quote: Optional[str] = None
    start = 0
    i = 0
    while i < len(text):
        ch = text[i]
        if quote is not None:
            if ch == "\\" and quote == '"':
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in ('"', "`", "'"):
            quote = ch
        elif ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth = max(0, depth - 1)
        elif depth == 0 and ch in separators:
            parts.append(text[start:i])
            start = i + 1
        i += 1
    parts.append(text[start:])
    return [p.strip() for p in parts if p.strip()]


def split_comment(line: str) -> Tuple[str, str]:
    """Separate code from a trailing ``//`` comment on one line.

    Inline ``/* ... */`` blocks are dropped from the code part.
    """
    quote: Optional[str] = None
    i = 0
    code = line
    comment = ""
    while i < len(line):
        ch = line[i]
        if quote is not None:
            if ch == "\\" and quote == '"':
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in ('"', "`", "'"):
            quote = ch
        elif line.startswith("//", i):
            code = line[:i]
            comment = line[i + 2 :].strip()
            break
        i += 1
    code = re.sub(r"/\*.*?\*/", " ", code)
    return code.rstrip(), comment


def strip_block_comments(source: str) -> str:
    """Blank out ``/* ... */`` comments, keeping line breaks so line numbers hold.

    String and rune literals and ``//`` comments are left untouched. An
    unterminated block runs to the end of the source.
    """
    out: List[str] = []
    quote: Optional[str] = None
    i = 0
    n = len(source)
    while i < n:
        ch = source[i]
        if quote is not None:
            out.append(ch)
            if ch == "\\" and quote != "`" and i + 1 < n:
                out.append(source[i + 1])
                i += 2
                continue
            if ch == quote or (ch == "\n" and quote != "`"):
                quote = None
            i += 1
            continue

        if source.startswith("//", i):
            end = source.find("\n", i)
            end = n if end < 0 else end
            out.append(source[i:end])
            i = end
            continue

        if source.startswith("/*", i):
            end = source.find("*/", i + 2)
            end = n if end < 0 else end + 2
            out.append(re.sub(r"[^\n]", " ", source[i:end]))
            i = end
            continue

        if ch in ('"', "`", "'"):
            quote = ch
        out.append(ch)
        i += 1
    return "".join(out)


def bracket_depth_delta(code: str) -> int:
    """Net change in bracket nesting across ``code`` (literals skipped)."""
    delta = 0
    quote: Optional[str] = None
    i = 0
    while i < len(code):
        ch = code[i]
        if quote is not None:
            if ch == "\\" and quote == '"':
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in ('"', "`", "'"):
            quote = ch
        elif ch in _OPENERS:
            delta += 1
        elif ch in _CLOSERS:
            delta -= 1
        i += 1
    return delta


def matching_close(text: str, open_index: int) -> int:
    """Index of the bracket closing the one at ``open_index``, or -1."""
    opener = text[open_index]
    closer = _OPENERS[opener]
    depth = 0
    quote: Optional[str] = None
    i = open_index
    while i < len(text):
        ch = text[i]
        if quote is not None:
            if ch == "\\" and quote == '"':
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in ('"', "`", "'"):
            quote = ch
        elif ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return -1


def compact_type(expr: str) -> str:
    """Collapse a multi-line type expression onto one line."""
    text = re.sub(r"\s*;\s*", "; ", expr.replace("\n", ";").strip())
    text = re.sub(r"\{\s*;?\s*", "{", text)
    text = re.sub(r";?\s*\}", "}", text)
    return re.sub(r"\s+", " ", text).strip()


def embedded_name(type_expr: str) -> str:
    """Implicit field name of an embedded field (``*pkg.Name[T]`` -> ``Name``)."""
    name = type_expr.strip().lstrip("*").strip()
    bracket = name.find("[")
    if bracket > 0:
        name = name[:bracket]
    return name.rsplit(".", 1)[-1]


def parse_field_entry(entry: str, comment: str = "", line: int = 0) -> List[FieldDecl]:
    """Parse one struct body entry into one or more field declarations.

    ``a, b int`` yields two fields sharing a type; an entry without a name
    list is an embedded field.
    """
    entry = entry.strip()
    if not entry:
        return []

    tag = ""
    tag_match = _TRAILING_TAG_RE.search(entry)
    if tag_match and tag_match.start() > 0:
        tag = tag_match.group(1)[1:-1]
        entry = entry[: tag_match.start()].rstrip()

    named = _NAMED_FIELD_RE.match(entry)
    if named:
        type_expr = compact_type(named.group(2))
        names = [n.strip() for n in named.group(1).split(",")]
        return [FieldDecl(n, type_expr, tag, comment, line) for n in names]

    type_expr = compact_type(entry)
    return [FieldDecl(embedded_name(type_expr), type_expr, tag, comment, line)]


def parse_field_list(body: str) -> List[FieldDecl]:
    """Parse a single-line struct body such as ``a int; b string``."""
    fields: List[FieldDecl] = []
    for entry in split_top_level(body):
        fields.extend(parse_field_entry(entry))
    return fields


def type_param_names(params: str) -> List[str]:
    """Names declared by a type parameter list body (``K comparable, V any``)."""
    names: List[str] = []
    for part in split_top_level(params, separators=","):
        match = re.match(_IDENT, part)
        if match:
            names.append(match.group(0))
    return names
