import pytest

from core.paths import compile_match, glob_match


@pytest.mark.parametrize("path", ["", "a", "a/b/c.go", "weird [x].txt"])
def test_empty_pattern_matches_everything(path):
    assert glob_match(path, "") is True
    assert glob_match(path, None) is True


def test_double_star_recurses_but_star_does_not():
    assert glob_match("a/b/c.go", "**/*.go") is True
    assert glob_match("c.go", "**/*.go") is True
    assert glob_match("a/b/c.go", "*.go") is False
    assert glob_match("c.go", "*.go") is True


def test_double_star_in_middle_matches_zero_or_more_segments():
    assert glob_match("a/z", "a/**/z") is True
    assert glob_match("a/b/z", "a/**/z") is True
    assert glob_match("a/b/c/z", "a/**/z") is True
    assert glob_match("a/bz", "a/**/z") is False
    assert glob_match("b/z", "a/**/z") is False


def test_trailing_double_star():
    assert glob_match("src/", "src/**") is True
    assert glob_match("src/a/b.py", "src/**") is True
    assert glob_match("src", "src/**") is False
    assert glob_match("anything/at/all", "**") is True
    assert glob_match("", "**") is True


def test_question_mark_is_one_non_separator_char():
    assert glob_match("a1.txt", "a?.txt") is True
    assert glob_match("a.txt", "a?.txt") is False
    assert glob_match("a12.txt", "a?.txt") is False
    assert glob_match("a/.txt", "a?.txt") is False


def test_star_never_crosses_separator():
    assert glob_match("src/app.py", "src/*.py") is True
    assert glob_match("src/sub/app.py", "src/*.py") is False
    assert glob_match("src/app.py", "s*") is False


def test_metacharacters_are_literal():
    assert glob_match("axb", "a.b") is False
    assert glob_match("a.b", "a.b") is True
    assert glob_match("x", "[x]") is False
    assert glob_match("[x]", "[x]") is True
    assert glob_match("a+(b)", "a+(b)") is True
    assert glob_match("aab", "a+b") is False


def test_match_is_anchored():
    assert glob_match("src/app.py.bak", "src/*.py") is False
    assert glob_match("lib/src/app.py", "src/*.py") is False


def test_multiple_stars_in_one_segment():
    assert glob_match("test_foo_bar.py", "test_*_*.py") is True
    assert glob_match("test_foo.py", "test_*_*.py") is False


def test_compiled_structure_and_reuse():
    m = compile_match("src/**/*.py")
    assert [s.double_star for s in m.segments] == [False, True, False]
    assert m.segments[0].tokens[0].kind == "literal"
    assert [t.kind for t in m.segments[2].tokens] == ["star", "literal"]
    assert m("src/a.py") and m("src/x/y/a.py")
    assert not m("lib/a.py")
    assert compile_match("").matches_everything
