"""Field order optimizer.

Greedy ordering by descending alignment, then descending size. Python's
sort is stable, so equal fields keep their declaration order. A zero-sized
field compares equal to any sized field and is therefore never moved just
because it is empty.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import TYPE_CHECKING, List, Sequence

from .calculator import compute_layout
from .models import Field

if TYPE_CHECKING:
    from ..abi.platforms import AbiContext


def compare_fields(a: Field, b: Field) -> int:
    """Ordering used by ``optimize``: negative when ``a`` goes first."""
    a_size = a.size or 0
    b_size = b.size or 0
    if (a_size == 0) != (b_size == 0):
        return 0

    a_align = a.align or 0
    b_align = b.align or 0
    if a_align != b_align:
        return -1 if a_align > b_align else 1

    if a_size != b_size:
        return -1 if a_size > b_size else 1

    return 0


def optimize(fields: Sequence[Field], abi: "AbiContext") -> List[Field]:
    """Return the fields in minimal-padding order (a permutation of the input).

    The zero-size rule makes ``compare_fields`` intransitive, so a sorted
    candidate can come out larger than the order it started from. A
    candidate is only taken when it is strictly smaller, and sorting repeats
    until it stops shrinking, which makes the result a fixed point:
    ``optimize(optimize(f)) == optimize(f)``.

    Raises:
        IndeterminateLayoutError: If any field has an unknown size
    """
    best = list(fields)
    best_size = compute_layout(best, abi)
    while True:
        candidate = sorted(best, key=cmp_to_key(compare_fields))
        size = compute_layout(candidate, abi)
        if size >= best_size:
            return best
        best, best_size = candidate, size


def optimal_size(fields: Sequence[Field], abi: "AbiContext") -> int:
    """Size of the struct after optimizing its field order."""
    return compute_layout(optimize(fields, abi), abi)
