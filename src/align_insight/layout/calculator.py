"""Layout calculator: simulates sequential field placement.

Fields are placed in order. Each non-zero-sized field starts at the next
multiple of its alignment; zero-sized fields take no padding. The total is
rounded up to the struct alignment, capped by the platform's max alignment.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Sequence, Tuple

from ..exceptions import IndeterminateLayoutError
from .models import Field

if TYPE_CHECKING:
    from ..abi.platforms import AbiContext


@dataclass(frozen=True)
class FieldSlot:
    """Placement of one field: where it starts and the padding before it."""

    field: Field
    offset: int
    padding_before: int

    @property
    def end(self) -> int:
        return self.offset + (self.field.size or 0)


@dataclass(frozen=True)
class LayoutMap:
    """Fully annotated layout of a field order."""

    slots: Tuple[FieldSlot, ...]
    size: int
    trailing_padding: int

    @property
    def padding(self) -> int:
        """Total bytes of padding, including trailing padding."""
        return sum(s.padding_before for s in self.slots) + self.trailing_padding

    @property
    def data_size(self) -> int:
        return self.size - self.padding


def padding_for(offset: int, align: int) -> int:
    """Bytes needed to advance ``offset`` to a multiple of ``align``."""
    if align <= 0:
        return 0
    return (align - offset % align) % align


def effective_alignment(fields: Sequence[Field], abi: "AbiContext") -> int:
    """Alignment the whole struct is rounded to."""
    struct_align = max((f.align for f in fields if f.align), default=1)
    return max(1, min(struct_align, abi.max_align))


def _place(fields: Sequence[Field]) -> Iterator[FieldSlot]:
    offset = 0
    for f in fields:
        if f.size is None:
            raise IndeterminateLayoutError(
                f.type_descriptor, f"size of field {f.name!r} is unknown"
            )
        pad = 0
        if f.size != 0 and f.align:
            pad = padding_for(offset, f.align)
        offset += pad
        yield FieldSlot(field=f, offset=offset, padding_before=pad)
        offset += f.size


def compute_layout(fields: Sequence[Field], abi: "AbiContext") -> int:
    """Total size of a struct whose fields are laid out in the given order.

    Raises:
        IndeterminateLayoutError: If any field has an unknown size
    """
    end = 0
    for slot in _place(fields):
        end = slot.end
    return end + padding_for(end, effective_alignment(fields, abi))


def annotate_layout(fields: Sequence[Field], abi: "AbiContext") -> LayoutMap:
    """Offsets and padding for every field, for visualisation.

    Raises:
        IndeterminateLayoutError: If any field has an unknown size
    """
    slots = tuple(_place(fields))
    end = slots[-1].end if slots else 0
    trailing = padding_for(end, effective_alignment(fields, abi))
    return LayoutMap(slots=slots, size=end + trailing, trailing_padding=trailing)
