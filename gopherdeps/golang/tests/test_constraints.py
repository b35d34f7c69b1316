"""Tests for build constraint parsing and evaluation."""

from __future__ import annotations

import pytest

from gopherdeps.golang.constraints import (
    TRUE,
    And,
    InvalidBuildConstraintError,
    Not,
    Or,
    Tag,
    evaluate,
    find_directives,
    parse_constraints,
    parse_go_build_expr,
    parse_plus_build_line,
)

PACKAGE_TAIL = '\npackage main\nimport "fmt"\n'


def _included(header: str, tags) -> bool:
    return evaluate(header + PACKAGE_TAIL, set(tags))


# ===========================================================================
# +build lines
# ===========================================================================


def test_single_constraint_with_trailing_line_comment():
    header = """
/*redundant comment*/
// redundant comment
// package main is a special package
// +build appengine // redundant comment
"""
    assert not _included(header, [])
    assert _included(header, ["appengine"])


def test_negated_constraint_with_block_comment_running_onto_next_line():
    header = """
/*redundant comment*/
// redundant comment
// +build !appengine /* redundant
comment*/
"""
    assert _included(header, [])
    assert not _included(header, ["appengine"])


def test_block_comment_left_open_on_constraint_line():
    header = "// +build !appengine /* see notes\n"
    assert _included(header, [])
    assert not _included(header, ["appengine"])


def test_open_block_comment_closed_after_package_is_not_part_of_directive():
    source = "// +build linux /* note\n\npackage main\n\nimport \"fmt\"\n\n/* doc */\nfunc F() {}\n"
    assert [d.text for d in find_directives(source)] == ["// +build linux /* note"]
    assert evaluate(source, {"linux"})
    assert not evaluate(source, {"windows"})


def test_many_negations():
    # (!linux && !darwin) || !cgo
    header = "// +build !linux,!darwin !cgo"
    assert _included(header, [])
    assert _included(header, ["linux"])
    assert not _included(header, ["linux", "cgo"])
    assert _included(header, ["cgo"])
    assert not _included(header, ["linux", "darwin", "cgo"])


def test_groups_are_ored_and_terms_are_anded():
    # (linux && 386) || (darwin && !cgo)
    header = "// +build linux,386 darwin,!cgo"
    assert not _included(header, [])
    assert _included(header, ["darwin"])
    assert not _included(header, ["linux"])
    assert not _included(header, ["386"])
    assert not _included(header, ["darwin", "cgo"])
    assert _included(header, ["linux", "386"])


def test_multiple_lines_are_anded():
    header = """
// +build linux darwin
// +build 386
"""
    assert not _included(header, [])
    assert not _included(header, ["linux"])
    assert _included(header, ["linux", "386"])
    assert _included(header, ["darwin", "386"])


def test_double_negation_raises():
    with pytest.raises(InvalidBuildConstraintError) as excinfo:
        _included("\n// +build !!term\n", [])
    assert excinfo.value.term == "!!term"
    assert excinfo.value.line == 2
    assert isinstance(excinfo.value, ValueError)


def test_double_negation_raises_even_when_another_line_excludes():
    header = "// +build never\n// +build ok,!!bad\n"
    with pytest.raises(InvalidBuildConstraintError):
        _included(header, [])


def test_no_directives_means_included():
    assert _included("", [])
    assert parse_constraints("package p\n") is TRUE


def test_directive_after_package_clause_is_ignored():
    source = "package main\n\n// +build ignore\n\nimport \"fmt\"\n"
    assert evaluate(source, set())
    assert find_directives(source) == []


def test_directive_immediately_before_package_is_honoured():
    source = "// +build linux\npackage main\n"
    assert not evaluate(source, set())
    assert evaluate(source, {"linux"})


def test_directive_inside_block_comment_is_ignored():
    source = "/*\n// +build ignore\n*/\npackage main\n"
    assert evaluate(source, set())


def test_plus_build_requires_word_boundary():
    assert parse_plus_build_line("// +buildfoo linux") is None
    assert parse_plus_build_line("//+build linux") == Tag("linux")


def test_empty_plus_build_line_is_unconstrained():
    assert parse_plus_build_line("// +build") is None
    assert _included("// +build\n", [])


def test_plus_build_stops_at_first_non_group_field():
    expr = parse_plus_build_line("// +build linux darwin: note windows")
    assert expr == Tag("linux")
    assert not expr.evaluate({"windows"})


def test_plus_build_structure():
    expr = parse_plus_build_line("// +build linux,386 !cgo")
    assert expr == Or((And((Tag("linux"), Tag("386"))), Not(Tag("cgo"))))
    assert str(expr) == "(linux && 386) || !cgo"


def test_release_tags_with_dots():
    header = "// +build go1.18"
    assert _included(header, ["go1.18"])
    assert not _included(header, ["go1.17"])


# ===========================================================================
# //go:build lines
# ===========================================================================


def test_go_build_expression():
    expr = parse_go_build_expr("//go:build (linux || darwin) && !cgo")
    assert expr.evaluate({"linux"})
    assert expr.evaluate({"darwin"})
    assert not expr.evaluate({"linux", "cgo"})
    assert not expr.evaluate({"windows"})


def test_go_build_precedence_and_not_binding():
    expr = parse_go_build_expr("//go:build a || b && !c")
    assert expr.evaluate({"a", "c"})
    assert expr.evaluate({"b"})
    assert not expr.evaluate({"b", "c"})


def test_go_build_trailing_comment_is_cut():
    expr = parse_go_build_expr("//go:build linux // only linux")
    assert expr == Tag("linux")


def test_malformed_go_build_is_ignored():
    assert parse_go_build_expr("//go:build linux &&") is None
    assert parse_go_build_expr("//go:build (linux") is None
    assert parse_go_build_expr("//go:build") is None


def test_go_build_is_anded_with_plus_build():
    header = "//go:build linux\n// +build windows\n"
    assert not _included(header, ["linux"])
    assert not _included(header, ["windows"])
    assert _included(header, ["linux", "windows"])


def test_go_build_and_plus_build_agreeing():
    header = "//go:build linux && !cgo\n// +build linux,!cgo\n"
    assert _included(header, ["linux"])
    assert not _included(header, ["linux", "cgo"])
    assert parse_constraints(header + PACKAGE_TAIL) == And(
        (And((Tag("linux"), Not(Tag("cgo")))), And((Tag("linux"), Not(Tag("cgo")))))
    )


def test_go_build_double_negation_raises():
    with pytest.raises(InvalidBuildConstraintError) as excinfo:
        evaluate("//go:build !!linux\n\npackage main\n", {"linux"})
    assert excinfo.value.term == "!!linux"
    assert excinfo.value.line == 1


def test_go_build_double_negation_inside_expression_raises():
    with pytest.raises(InvalidBuildConstraintError):
        parse_go_build_expr("//go:build darwin || (cgo && !!linux)")


def test_go_build_negated_group_is_allowed():
    expr = parse_go_build_expr("//go:build !(!linux)")
    assert expr == Not(Not(Tag("linux")))
    assert expr.evaluate({"linux"})


def test_malformed_go_build_falls_back_to_plus_build():
    header = "//go:build linux &&\n// +build windows\n"
    assert _included(header, ["windows"])
    assert not _included(header, ["linux"])


def test_plus_build_double_negation_raises_next_to_go_build():
    header = "//go:build linux\n// +build !!linux\n"
    with pytest.raises(InvalidBuildConstraintError):
        _included(header, ["linux"])


def test_go_build_with_space_is_not_a_directive():
    assert find_directives("// go:build ignore\npackage p\n") == []


def test_evaluate_accepts_any_iterable():
    source = "// +build a,b\npackage p\n"
    assert evaluate(source, ["a", "b"])
    assert evaluate(source, iter(["a", "b"]))
    assert not evaluate(source, ("a",))
