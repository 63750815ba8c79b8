"""Tests for layout/optimizer.py - minimal-padding field order."""

import random
from collections import Counter

import pytest

from align_insight.layout import compare_fields, compute_layout, optimal_size, optimize

from conftest import make_field


def _names(fields):
    return [f.name for f in fields]


def _random_sized_fields(rng, count, zero_sized=False):
    fields = []
    for i in range(count):
        if zero_sized and rng.random() < 0.25:
            fields.append(make_field(f"f{i}", 0, rng.choice([1, 2, 4, 8])))
            continue
        size = rng.choice([1, 2, 4, 8, 12, 16, 24])
        align = rng.choice([a for a in (1, 2, 4, 8) if size % a == 0])
        fields.append(make_field(f"f{i}", size, align))
    return fields


class TestCompareFields:
    """Test the field ordering rules."""

    def test_larger_alignment_first(self):
        assert compare_fields(make_field("a", 8), make_field("b", 4)) < 0
        assert compare_fields(make_field("a", 4), make_field("b", 8)) > 0

    def test_larger_size_first_on_equal_alignment(self):
        string = make_field("s", 16, align=8)
        word = make_field("w", 8, align=8)
        assert compare_fields(string, word) < 0
        assert compare_fields(word, string) > 0

    def test_equal_fields_tie(self):
        assert compare_fields(make_field("a", 4), make_field("b", 4)) == 0

    def test_zero_sized_against_sized_is_equal(self):
        zero = make_field("z", 0, align=1)
        big = make_field("b", 8)
        assert compare_fields(zero, big) == 0
        assert compare_fields(big, zero) == 0

    def test_two_zero_sized_compare_by_alignment(self):
        assert compare_fields(make_field("a", 0, align=8), make_field("b", 0, align=1)) < 0


class TestOptimize:
    """Test optimize on worked examples."""

    def test_moves_largest_alignment_first(self, abi8, padded_fields):
        result = optimize(padded_fields, abi8)
        assert _names(result) == ["b", "a", "c"]
        assert compute_layout(result, abi8) == 16

    def test_already_optimal_keeps_order(self, abi8, aligned_fields):
        result = optimize(aligned_fields, abi8)
        assert _names(result) == ["x", "y", "z"]
        assert compute_layout(result, abi8) == compute_layout(aligned_fields, abi8) == 16

    def test_empty(self, abi8):
        assert optimize([], abi8) == []

    def test_zero_sized_field_keeps_position(self, abi8):
        fields = [make_field("A", 4), make_field("Z", 0, align=1), make_field("B", 4)]
        assert _names(optimize(fields, abi8)) == ["A", "Z", "B"]

    def test_stable_for_ties(self, abi8):
        fields = [make_field(n, 4) for n in "dcba"]
        assert _names(optimize(fields, abi8)) == ["d", "c", "b", "a"]

    def test_descending_alignment(self, abi8):
        fields = [make_field("b1", 1), make_field("w8", 8), make_field("h4", 4)]
        result = optimize(fields, abi8)
        assert _names(result) == ["w8", "h4", "b1"]
        assert compute_layout(result, abi8) == 16

    def test_keeps_declared_order_when_sorting_would_grow(self, abi8):
        # Sorting moves h4 ahead of c2 across the zero-sized field: 8 -> 16 bytes
        fields = [
            make_field("c0", 1),
            make_field("z1", 0, align=8),
            make_field("c2", 1),
            make_field("h4", 4),
        ]
        assert compute_layout(fields, abi8) == 8
        assert _names(optimize(fields, abi8)) == ["c0", "z1", "c2", "h4"]
        assert optimal_size(fields, abi8) == 8

    def test_input_not_mutated(self, abi8, padded_fields):
        before = list(padded_fields)
        optimize(padded_fields, abi8)
        assert padded_fields == before

    def test_optimal_size(self, abi8, padded_fields):
        assert optimal_size(padded_fields, abi8) == 16


class TestOptimizeProperties:
    """Properties of the optimizer over random field lists."""

    @pytest.mark.parametrize("zero_sized", [False, True])
    @pytest.mark.parametrize("seed", range(5))
    def test_result_is_permutation(self, abi8, seed, zero_sized):
        rng = random.Random(seed)
        for _ in range(40):
            fields = _random_sized_fields(rng, rng.randint(0, 10), zero_sized)
            assert Counter(optimize(fields, abi8)) == Counter(fields)

    @pytest.mark.parametrize("zero_sized", [False, True])
    @pytest.mark.parametrize("seed", range(5))
    def test_never_larger(self, abi8, seed, zero_sized):
        rng = random.Random(100 + seed)
        for _ in range(200):
            fields = _random_sized_fields(rng, rng.randint(0, 10), zero_sized)
            assert optimal_size(fields, abi8) <= compute_layout(fields, abi8)

    @pytest.mark.parametrize("zero_sized", [False, True])
    @pytest.mark.parametrize("seed", range(5))
    def test_idempotent(self, abi8, seed, zero_sized):
        rng = random.Random(200 + seed)
        for _ in range(200):
            once = optimize(_random_sized_fields(rng, rng.randint(0, 10), zero_sized), abi8)
            twice = optimize(once, abi8)
            assert twice == once
            assert compute_layout(twice, abi8) == compute_layout(once, abi8)

    def test_deterministic(self, abi8):
        rng = random.Random(3)
        fields = _random_sized_fields(rng, 15, zero_sized=True)
        assert optimize(fields, abi8) == optimize(list(fields), abi8)
