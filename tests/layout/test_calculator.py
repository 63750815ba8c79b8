"""Tests for layout/calculator.py - sequential field placement."""

import random

import pytest

from align_insight.abi import AbiContext
from align_insight.exceptions import IndeterminateLayoutError
from align_insight.layout import Field, annotate_layout, compute_layout, effective_alignment
from align_insight.layout.calculator import padding_for

from conftest import make_field


def _random_fields(rng, count, allow_zero=True):
    sizes = [1, 2, 4, 8, 12, 16, 24] + ([0] if allow_zero else [])
    fields = []
    for i in range(count):
        size = rng.choice(sizes)
        align = rng.choice([a for a in (1, 2, 4, 8) if size == 0 or size % a == 0])
        fields.append(make_field(f"f{i}", size, align))
    return fields


class TestPaddingFor:
    """Test padding_for helper."""

    @pytest.mark.parametrize(
        "offset,align,expected",
        [(0, 8, 0), (1, 8, 7), (5, 4, 3), (8, 4, 0), (3, 1, 0), (3, 0, 0)],
    )
    def test_padding(self, offset, align, expected):
        assert padding_for(offset, align) == expected


class TestComputeLayout:
    """Test compute_layout against worked examples."""

    def test_padding_between_fields(self, abi8, padded_fields):
        """bool, int64, bool: 1 + 7 pad + 8 + 1 + 7 pad."""
        assert compute_layout(padded_fields, abi8) == 24

    def test_descending_alignment_has_no_padding(self, abi8, aligned_fields):
        assert compute_layout(aligned_fields, abi8) == 16

    def test_empty_record(self, abi8):
        assert compute_layout([], abi8) == 0

    def test_single_byte(self, abi8):
        assert compute_layout([make_field("b", 1)], abi8) == 1

    def test_zero_sized_field_takes_no_padding(self, abi8):
        """A zero-sized field sits at the current offset, unaligned."""
        fields = [
            make_field("a", 1),
            make_field("z", 0, align=4),
            make_field("b", 1),
        ]
        layout = annotate_layout(fields, abi8)
        assert [s.offset for s in layout.slots] == [0, 1, 1]
        assert layout.slots[1].padding_before == 0
        # struct alignment still counts the zero-sized field
        assert compute_layout(fields, abi8) == 4

    def test_only_zero_sized_fields(self, abi8):
        fields = [make_field("z1", 0), make_field("z2", 0)]
        assert compute_layout(fields, abi8) == 0

    def test_struct_alignment_capped_by_platform(self, i386):
        """An 8-aligned field on a 4-byte max-align platform rounds to 4."""
        fields = [make_field("x", 8, align=8), make_field("b", 1)]
        assert compute_layout(fields, i386) == 12

    def test_max_align_from_fields_when_smaller(self, abi8):
        fields = [make_field("a", 2), make_field("b", 1)]
        assert compute_layout(fields, abi8) == 4

    def test_unknown_size_raises(self, abi8):
        fields = [make_field("a", 1), Field("t", "T", None, None)]
        with pytest.raises(IndeterminateLayoutError) as exc_info:
            compute_layout(fields, abi8)
        assert exc_info.value.type_descriptor == "T"


class TestAnnotateLayout:
    """Test annotate_layout offsets and padding."""

    def test_offsets_and_padding(self, abi8, padded_fields):
        layout = annotate_layout(padded_fields, abi8)
        assert [s.offset for s in layout.slots] == [0, 8, 16]
        assert [s.padding_before for s in layout.slots] == [0, 7, 0]
        assert layout.trailing_padding == 7
        assert layout.size == 24
        assert layout.padding == 14
        assert layout.data_size == 10

    def test_matches_compute_layout(self, abi8):
        rng = random.Random(7)
        for _ in range(50):
            fields = _random_fields(rng, rng.randint(0, 8))
            assert annotate_layout(fields, abi8).size == compute_layout(fields, abi8)

    def test_empty(self, abi8):
        layout = annotate_layout([], abi8)
        assert layout.slots == ()
        assert layout.size == 0
        assert layout.trailing_padding == 0


class TestEffectiveAlignment:
    """Test effective_alignment."""

    def test_no_fields(self, abi8):
        assert effective_alignment([], abi8) == 1

    def test_largest_field_alignment(self, abi8, aligned_fields):
        assert effective_alignment(aligned_fields, abi8) == 8

    def test_capped(self, i386, aligned_fields):
        assert effective_alignment(aligned_fields, i386) == 4


class TestLayoutProperties:
    """Properties that hold for every field list."""

    @pytest.mark.parametrize("seed", range(5))
    def test_size_at_least_sum_of_fields(self, abi8, seed):
        rng = random.Random(seed)
        for _ in range(40):
            fields = _random_fields(rng, rng.randint(0, 10))
            assert compute_layout(fields, abi8) >= sum(f.size for f in fields)

    @pytest.mark.parametrize("max_align", [1, 2, 4, 8])
    def test_size_is_multiple_of_effective_alignment(self, max_align):
        abi = AbiContext(name="synthetic", word_size=8, max_align=max_align)
        rng = random.Random(max_align)
        for _ in range(40):
            fields = _random_fields(rng, rng.randint(0, 10))
            assert compute_layout(fields, abi) % effective_alignment(fields, abi) == 0

    def test_pure(self, abi8):
        rng = random.Random(42)
        fields = _random_fields(rng, 12)
        snapshot = list(fields)
        assert compute_layout(fields, abi8) == compute_layout(fields, abi8)
        assert fields == snapshot
