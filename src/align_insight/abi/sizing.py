"""Sizing providers: per-type size and alignment under a target platform.

The layout core never sizes types itself; it consumes a ``SizingProvider``.
``GoSizes`` implements the Go gc rules over type expressions as they are
written in source, resolving names declared in the scanned package and a
table of common standard library types.
"""

from __future__ import annotations

import re
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Protocol, Tuple

from ..exceptions import IndeterminateLayoutError
from ..layout.calculator import compute_layout
from ..layout.models import Field
from ..scanning.gosyntax import matching_close, parse_field_list
from .platforms import AbiContext

# Fixed-size basic types: name -> size in bytes
_BASIC_SIZES: Dict[str, int] = {
    "bool": 1,
    "int8": 1,
    "uint8": 1,
    "byte": 1,
    "int16": 2,
    "uint16": 2,
    "int32": 4,
    "uint32": 4,
    "rune": 4,
    "float32": 4,
    "int64": 8,
    "uint64": 8,
    "float64": 8,
    "complex64": 8,
    "complex128": 16,
}

_COMPLEX = frozenset({"complex64", "complex128"})

# Types occupying one machine word
_WORD_TYPES = frozenset({"int", "uint", "uintptr", "unsafe.Pointer"})

# Types laid out like an interface value (two words)
_INTERFACE_TYPES = frozenset(
    {
        "any",
        "error",
        "context.Context",
        "fmt.Stringer",
        "io.Reader",
        "io.Writer",
        "io.Closer",
        "io.ReadCloser",
        "io.ReadWriter",
        "io.WriteCloser",
        "io.ReadWriteCloser",
        "net.Conn",
        "net.Addr",
        "reflect.Type",
        "sort.Interface",
    }
)

# Standard library types expressed through their underlying representation
WELL_KNOWN_TYPES: Dict[str, str] = {
    "time.Time": "struct{wall uint64; ext int64; loc *time.Location}",
    "time.Duration": "int64",
    "time.Month": "int",
    "time.Weekday": "int",
    "sync.Mutex": "struct{state int32; sema uint32}",
    "sync.RWMutex": (
        "struct{w sync.Mutex; writerSem uint32; readerSem uint32; "
        "readerCount atomic.Int32; readerWait atomic.Int32}"
    ),
    "sync.WaitGroup": "struct{noCopy struct{}; state atomic.Uint64; sema uint32}",
    "sync.Once": "struct{done atomic.Uint32; m sync.Mutex}",
    "atomic.Bool": "struct{_ struct{}; v uint32}",
    "atomic.Int32": "struct{_ struct{}; v int32}",
    "atomic.Uint32": "struct{_ struct{}; v uint32}",
    "atomic.Uintptr": "struct{_ struct{}; v uintptr}",
    "atomic.Value": "struct{v any}",
    "json.RawMessage": "[]byte",
    "json.Number": "string",
    "net.IP": "[]byte",
    "net.IPMask": "[]byte",
    "http.Header": "map[string][]string",
    "url.Values": "map[string][]string",
    "bytes.Buffer": "struct{buf []byte; off int; lastRead int8}",
    "strings.Builder": "struct{addr *strings.Builder; buf []byte}",
    "big.Int": "struct{neg bool; abs []uint}",
}

# 64-bit atomics are 8-byte aligned on every platform
_ALIGN64_TYPES = frozenset({"atomic.Int64", "atomic.Uint64"})

# Generic standard library types whose layout does not depend on the argument
_GENERIC_WORD_TYPES = frozenset({"atomic.Pointer"})

_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)?$")


class SizingProvider(Protocol):
    """Capability consumed by the layout core."""

    def size_of(self, type_descriptor: str) -> int:
        ...

    def align_of(self, type_descriptor: str) -> int:
        ...


class GoSizes:
    """Go gc sizing rules for type expressions.

    Args:
        abi: Target platform
        local_types: Names declared in the scanned package mapped to their
            underlying type expression
        generic_types: Names of generic types declared in the package
        type_params: Type parameter names in scope (always indeterminate)
    """

    def __init__(
        self,
        abi: AbiContext,
        local_types: Optional[Mapping[str, str]] = None,
        generic_types: Iterable[str] = (),
        type_params: Iterable[str] = (),
    ):
        self.abi = abi
        self.local_types: Dict[str, str] = dict(local_types or {})
        self.generic_types: FrozenSet[str] = frozenset(generic_types)
        self.type_params: FrozenSet[str] = frozenset(type_params)
        self._cache: Dict[str, Tuple[int, int]] = {}
        self._resolving: set = set()

    def with_type_params(self, type_params: Iterable[str]) -> "GoSizes":
        """Provider sharing this one's declarations with type parameters in scope."""
        return GoSizes(self.abi, self.local_types, self.generic_types, type_params)

    def size_of(self, type_descriptor: str) -> int:
        return self.layout_of(type_descriptor)[0]

    def align_of(self, type_descriptor: str) -> int:
        return self.layout_of(type_descriptor)[1]

    def layout_of(self, type_descriptor: str) -> Tuple[int, int]:
        """(size, align) of a type expression.

        Raises:
            IndeterminateLayoutError: If the type cannot be resolved
        """
        expr = type_descriptor.strip()
        cached = self._cache.get(expr)
        if cached is not None:
            return cached
        result = self._resolve(expr)
        self._cache[expr] = result
        return result

    def field(self, name: str, type_descriptor: str, tag: str = "", comment: str = "") -> Field:
        """Field with resolved size, or with ``size=None`` when indeterminate."""
        try:
            size, align = self.layout_of(type_descriptor)
        except IndeterminateLayoutError:
            size, align = None, None
        return Field(
            name=name,
            type_descriptor=type_descriptor,
            size=size,
            align=align,
            tag=tag,
            comment=comment,
        )

    # -- resolution --

    def _basic(self, size: int, complex_type: bool = False) -> Tuple[int, int]:
        align = size // 2 if complex_type else size
        return size, max(1, min(align, self.abi.max_align))

    def _resolve(self, expr: str) -> Tuple[int, int]:
        word = self.abi.word_size

        if not expr:
            raise IndeterminateLayoutError(expr, "empty type expression")

        if expr.startswith("(") and matching_close(expr, 0) == len(expr) - 1:
            return self.layout_of(expr[1:-1])

        if expr in self.type_params:
            raise IndeterminateLayoutError(expr, "type parameter")

        if expr.startswith("*"):
            return word, word

        if expr.startswith("[]"):
            return 3 * word, word

        if expr.startswith("["):
            return self._array(expr)

        if expr.startswith(("map[", "chan ", "chan<-", "<-chan", "func(", "func ")):
            return word, word

        if expr.startswith("interface"):
            return 2 * word, word

        if expr.startswith("struct"):
            return self._struct(expr)

        if expr in _BASIC_SIZES:
            return self._basic(_BASIC_SIZES[expr], expr in _COMPLEX)

        if expr in _WORD_TYPES:
            return word, word

        if expr == "string":
            return 2 * word, word

        if expr in _INTERFACE_TYPES:
            return 2 * word, word

        if expr in _ALIGN64_TYPES:
            return 8, 8

        bracket = expr.find("[")
        if bracket > 0:
            base = expr[:bracket]
            if base in _GENERIC_WORD_TYPES:
                return word, word
            raise IndeterminateLayoutError(expr, "generic type instantiation")

        if expr in self.local_types:
            return self._named(expr, self.local_types[expr])

        if expr in self.generic_types:
            raise IndeterminateLayoutError(expr, "generic type without arguments")

        if expr in WELL_KNOWN_TYPES:
            return self._named(expr, WELL_KNOWN_TYPES[expr])

        if _NAME_RE.match(expr):
            reason = "external type" if "." in expr else "unknown type"
            raise IndeterminateLayoutError(expr, reason)

        raise IndeterminateLayoutError(expr, "unsupported type expression")

    def _named(self, name: str, underlying: str) -> Tuple[int, int]:
        if name in self._resolving:
            raise IndeterminateLayoutError(name, "recursive type")
        self._resolving.add(name)
        try:
            return self.layout_of(underlying)
        finally:
            self._resolving.discard(name)

    def _array(self, expr: str) -> Tuple[int, int]:
        close = matching_close(expr, 0)
        if close < 0:
            raise IndeterminateLayoutError(expr, "unbalanced array brackets")

        length_text = expr[1:close].strip()
        try:
            length = int(length_text.replace("_", ""), 0)
        except ValueError:
            raise IndeterminateLayoutError(expr, f"array length {length_text!r} is not a literal")

        elem_size, elem_align = self.layout_of(expr[close + 1 :])
        if length <= 0:
            return 0, elem_align
        return elem_size * length, elem_align

    def _struct(self, expr: str) -> Tuple[int, int]:
        open_brace = expr.find("{")
        close = matching_close(expr, open_brace) if open_brace >= 0 else -1
        if close < 0:
            raise IndeterminateLayoutError(expr, "unbalanced struct braces")

        fields = []
        for decl in parse_field_list(expr[open_brace + 1 : close]):
            size, align = self.layout_of(decl.type_expr)
            fields.append(Field(decl.name, decl.type_expr, size, align))

        align = max((f.align for f in fields), default=1)
        return compute_layout(fields, self.abi), align
