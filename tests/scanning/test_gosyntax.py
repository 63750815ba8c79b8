"""Tests for scanning/gosyntax.py - Go syntax helpers."""

import pytest

from align_insight.scanning.gosyntax import (
    FieldDecl,
    bracket_depth_delta,
    compact_type,
    embedded_name,
    matching_close,
    parse_field_entry,
    parse_field_list,
    split_comment,
    strip_block_comments,
    split_top_level,
    type_param_names,
)


class TestSplitting:
    """Test top-level splitting and comment separation."""

    def test_nested_separators_kept(self):
        parts = split_top_level("a int; b struct{x int; y int}; c string")
        assert parts == ["a int", "b struct{x int; y int}", "c string"]

    def test_separators_in_tags_kept(self):
        parts = split_top_level('a int `db:"a;b"`; c bool')
        assert parts == ['a int `db:"a;b"`', "c bool"]

    def test_empty_parts_dropped(self):
        assert split_top_level(" ;\n; ") == []

    def test_trailing_comment(self):
        code, comment = split_comment('Name string `json:"name"` // the name')
        assert code == 'Name string `json:"name"`'
        assert comment == "the name"

    def test_slashes_inside_tag_are_not_a_comment(self):
        code, comment = split_comment('URL string `default:"http://example.com"`')
        assert code.endswith("`")
        assert comment == ""

    def test_block_comment_dropped(self):
        code, _ = split_comment("X int /* legacy */")
        assert code.strip() == "X int"

    def test_multiline_block_comment_blanked(self):
        src = "a int\n/*\nb int\n*/ c int\n"
        lines = strip_block_comments(src).split("\n")
        assert [line.strip() for line in lines] == ["a int", "", "", "c int", ""]

    def test_comment_markers_in_literals_kept(self):
        src = 's string `json:"/*"` // see /* here\nr rune\n'
        assert strip_block_comments(src) == src


class TestBrackets:
    """Test bracket helpers."""

    @pytest.mark.parametrize(
        "code,delta",
        [("Inner struct {", 1), ("}", -1), ("m map[string]int", 0), ('t string `x:"{"`', 0)],
    )
    def test_depth_delta(self, code, delta):
        assert bracket_depth_delta(code) == delta

    def test_matching_close(self):
        assert matching_close("[4]int", 0) == 2
        assert matching_close("struct{a struct{}; b int}", 6) == 24
        assert matching_close("[4", 0) == -1


class TestTypeExpressions:
    """Test compact_type and embedded_name."""

    def test_compact_multiline_struct(self):
        expr = "struct {\nCreated time.Time\nTags    []string\n}"
        assert compact_type(expr) == "struct {Created time.Time; Tags []string}"

    def test_compact_single_line_unchanged(self):
        assert compact_type("map[string][]int") == "map[string][]int"

    @pytest.mark.parametrize(
        "expr,name",
        [("Base", "Base"), ("*Base", "Base"), ("sync.Mutex", "Mutex"), ("*pkg.List[T]", "List")],
    )
    def test_embedded_name(self, expr, name):
        assert embedded_name(expr) == name


class TestParseFieldEntry:
    """Test parse_field_entry."""

    def test_named_field(self):
        assert parse_field_entry("Count int", comment="items", line=4) == [
            FieldDecl("Count", "int", "", "items", 4)
        ]

    def test_name_list_shares_type_and_tag(self):
        decls = parse_field_entry('ID, Parent int64 `json:"id"`')
        assert [(d.name, d.type_expr, d.tag) for d in decls] == [
            ("ID", "int64", 'json:"id"'),
            ("Parent", "int64", 'json:"id"'),
        ]

    def test_embedded_field(self):
        (decl,) = parse_field_entry("sync.Mutex")
        assert decl.name == "Mutex"
        assert decl.type_expr == "sync.Mutex"

    def test_embedded_pointer_with_tag(self):
        (decl,) = parse_field_entry('*Base `json:",inline"`')
        assert (decl.name, decl.type_expr, decl.tag) == ("Base", "*Base", 'json:",inline"')

    def test_function_type(self):
        (decl,) = parse_field_entry("OnClose func(code int, reason string) error")
        assert decl.type_expr == "func(code int, reason string) error"

    def test_blank_entry(self):
        assert parse_field_entry("   ") == []

    def test_field_list(self):
        decls = parse_field_list("X, Y int32; Label string")
        assert [(d.name, d.type_expr) for d in decls] == [
            ("X", "int32"),
            ("Y", "int32"),
            ("Label", "string"),
        ]


class TestTypeParams:
    """Test type_param_names."""

    @pytest.mark.parametrize(
        "params,names",
        [
            ("T any", ["T"]),
            ("K comparable, V any", ["K", "V"]),
            ("K, V any", ["K", "V"]),
            ("T interface{ ~int | ~string }", ["T"]),
        ],
    )
    def test_names(self, params, names):
        assert type_param_names(params) == names
