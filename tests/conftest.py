"""Shared test fixtures for align-insight tests."""

import textwrap

import pytest

from align_insight.abi import AbiContext, resolve_platform
from align_insight.layout import Field, Position, RawPackage, RawRecord


def make_field(name, size, align=None, type_descriptor=None, tag="", comment=""):
    """Field with ``align`` defaulting to ``size`` (1 for zero-sized fields)."""
    if align is None:
        align = size if size else 1
    return Field(
        name=name,
        type_descriptor=type_descriptor or f"t{size}",
        size=size,
        align=align,
        tag=tag,
        comment=comment,
    )


def make_raw(name, fields, ignore=False, file="types.go", line=1):
    return RawRecord(
        name=name,
        position=Position(file=file, line=line),
        fields=tuple(fields),
        ignore=ignore,
    )


def write_go(directory, filename, source):
    """Write dedented Go source and return its path."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    path.write_text(textwrap.dedent(source).lstrip(), encoding="utf-8")
    return path


@pytest.fixture
def amd64():
    """64-bit platform: word 8, max align 8."""
    return resolve_platform("amd64")


@pytest.fixture
def i386():
    """32-bit platform: word 4, max align 4."""
    return resolve_platform("386")


@pytest.fixture
def abi8():
    """Synthetic platform matching the worked layout examples."""
    return AbiContext(name="test64", word_size=8, max_align=8)


@pytest.fixture
def padded_fields():
    """bool, int64, bool: 24 bytes as declared, 16 when reordered."""
    return [
        make_field("a", 1, type_descriptor="bool"),
        make_field("b", 8, type_descriptor="int64"),
        make_field("c", 1, type_descriptor="bool"),
    ]


@pytest.fixture
def aligned_fields():
    """int64, int32, int32: already optimal at 16 bytes."""
    return [
        make_field("x", 8, type_descriptor="int64"),
        make_field("y", 4, type_descriptor="int32"),
        make_field("z", 4, type_descriptor="int32"),
    ]


@pytest.fixture
def raw_package(padded_fields, aligned_fields):
    return RawPackage(
        path="example.com/app",
        records=(
            make_raw("Padded", padded_fields, line=3),
            make_raw("Aligned", aligned_fields, line=9),
        ),
    )


@pytest.fixture
def go_module(tmp_path):
    """Small Go module with one misaligned and one aligned struct."""
    write_go(tmp_path, "go.mod", "module example.com/shop\n\ngo 1.21\n")
    write_go(
        tmp_path,
        "order.go",
        """
        package shop

        // Order is a purchase.
        type Order struct {
            Paid   bool
            ID     int64
            Closed bool
        }

        type Item struct {
            Price int64
            Count int32
            Kind  uint16
        }
        """,
    )
    write_go(
        tmp_path / "internal" / "cache",
        "entry.go",
        """
        package cache

        type Entry struct {
            Key   string
            Value []byte
        }
        """,
    )
    return tmp_path
