from __future__ import annotations

from cmtstringer.comments import comment_text, is_directive


def test_line_comments_drop_marker_and_one_space():
    assert comment_text(["// StatusOK fine", "//  indented"]) == (
        "StatusOK fine\n indented\n"
    )


def test_block_comment_keeps_inner_lines():
    raw = "/* StatusOK first line\n   second line */"

    assert comment_text([raw]) == " StatusOK first line\n   second line\n"


def test_directives_are_removed():
    raw = [
        "//go:generate cmtstringer -type StatusCode",
        "// StatusOK fine",
        "//line foo.go:10",
    ]

    assert comment_text(raw) == "StatusOK fine\n"


def test_blank_lines_are_collapsed_and_trimmed():
    raw = ["//", "// A first", "//", "//", "// second", "//"]

    assert comment_text(raw) == "A first\n\nsecond\n"


def test_trailing_whitespace_is_stripped():
    assert comment_text(["// A value   \t", "// next\r"]) == "A value\nnext\n"


def test_empty_group_yields_empty_text():
    assert comment_text([]) == ""
    assert comment_text(["//go:embed data"]) == ""


def test_is_directive():
    assert is_directive("go:generate stringer")
    assert is_directive("nolint:errcheck")
    assert is_directive("export Foo")
    assert not is_directive(" go:generate")
    assert not is_directive("Note: spaced")
    assert not is_directive("go:")
