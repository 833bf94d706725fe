"""
Glob compiler tests
Translation tables for string and path globs, error kinds and matching
"""

import re
import warnings

import pytest

from globz.glob.compiler import (
    PATH_MODE,
    GlobMatcher,
    glob_path_to_regexp,
    glob_string_to_regexp,
    glob_to_regex_text,
)
from globz.glob.errors import (
    BadGlobPatternError,
    GlobError,
    GlobErrorKind,
    MismatchedBraceError,
    MismatchedDoubleBraceError,
    NestedBraceError,
    StrayBracketError,
    TooManyStarsError,
    UnclosedBracketError,
)


# (glob, expected regex, expected error)
STRING_CASES = [
    ("", "", None),
    ("potato", "potato", None),
    ("potato,sausage", "potato,sausage", None),
    ("/potato", "/potato", None),
    ("potato?sausage", "potato.sausage", None),
    ("potat[oa]", "potat[oa]", None),
    ("potat[a-z]or", "potat[a-z]or", None),
    ("potat[[:alpha:]]or", "potat[a-zA-Z]or", None),
    ("'.' '+' '(' ')' '|' '^' '$'", r"'\.' '\+' '\(' '\)' '\|' '\^' '\$'", None),
    ("*.jpg", r".*\.jpg", None),
    ("a{b,c,d}e", "a(b|c|d)e", None),
    ("potato**", None, TooManyStarsError),
    ("potato**sausage", None, TooManyStarsError),
    ("*.p[lm]", r".*\.p[lm]", None),
    (r"[\[\]]", r"[\[\]]", None),
    ("***potato", None, TooManyStarsError),
    ("***", None, TooManyStarsError),
    ("ab]c", None, StrayBracketError),
    ("ab[c", None, UnclosedBracketError),
    ("ab{x{cd", None, NestedBraceError),
    ("ab{}}cd", None, MismatchedBraceError),
    ("ab}c", None, MismatchedBraceError),
    ("ab{c", None, MismatchedBraceError),
    ("*.{jpg,png,gif}", r".*\.(jpg|png|gif)", None),
    ("[a--b]", None, BadGlobPatternError),
    (r"a\*b", r"a\*b", None),
    (r"a\\b", r"a\\b", None),
    ("a{{.*}}b", "a(.*)b", None),
    ("a{{.*}", None, MismatchedDoubleBraceError),
    ("{{regexp}}", "(regexp)", None),
    (r"\{{{regexp}}", r"\{(regexp)", None),
    ("/{{regexp}}", "/(regexp)", None),
    (r"/{{\d{8}}}", r"/(\d{8})", None),
    (r"/{{\}}}", r"/(\})", None),
]

PATH_CASES = [
    ("", "(^|/)$", None),
    ("potato", "(^|/)potato$", None),
    ("potato,sausage", "(^|/)potato,sausage$", None),
    ("/potato", "^potato$", None),
    ("potato?sausage", "(^|/)potato[^/]sausage$", None),
    ("potat[oa]", "(^|/)potat[oa]$", None),
    ("potat[a-z]or", "(^|/)potat[a-z]or$", None),
    ("potat[[:alpha:]]or", "(^|/)potat[a-zA-Z]or$", None),
    ("'.' '+' '(' ')' '|' '^' '$'", r"(^|/)'\.' '\+' '\(' '\)' '\|' '\^' '\$'$", None),
    ("*.jpg", r"(^|/)[^/]*\.jpg$", None),
    ("a{b,c,d}e", "(^|/)a(b|c|d)e$", None),
    ("potato**", "(^|/)potato.*$", None),
    ("potato**sausage", "(^|/)potato.*sausage$", None),
    ("*.p[lm]", r"(^|/)[^/]*\.p[lm]$", None),
    (r"[\[\]]", r"(^|/)[\[\]]$", None),
    ("***potato", None, TooManyStarsError),
    ("***", None, TooManyStarsError),
    ("ab]c", None, StrayBracketError),
    ("ab[c", None, UnclosedBracketError),
    ("ab{x{cd", None, NestedBraceError),
    ("ab{}}cd", None, MismatchedBraceError),
    ("ab}c", None, MismatchedBraceError),
    ("ab{c", None, MismatchedBraceError),
    ("*.{jpg,png,gif}", r"(^|/)[^/]*\.(jpg|png|gif)$", None),
    ("[a--b]", None, BadGlobPatternError),
    (r"a\*b", r"(^|/)a\*b$", None),
    (r"a\\b", r"(^|/)a\\b$", None),
    ("a{{.*}}b", "(^|/)a(.*)b$", None),
    ("a{{.*}", None, MismatchedDoubleBraceError),
    ("{{regexp}}", "(^|/)(regexp)$", None),
    (r"\{{{regexp}}", r"(^|/)\{(regexp)$", None),
    ("/{{regexp}}", "^(regexp)$", None),
    (r"/{{\d{8}}}", r"^(\d{8})$", None),
    (r"/{{\}}}", r"^(\})$", None),
]


@pytest.mark.parametrize("ignore_case", [False, True])
@pytest.mark.parametrize("add_anchors", [False, True])
@pytest.mark.parametrize("glob,want,error", STRING_CASES)
def test_glob_string_to_regexp(glob, want, error, add_anchors, ignore_case):
    if error is not None:
        with pytest.raises(error):
            glob_string_to_regexp(glob, add_anchors=add_anchors, ignore_case=ignore_case)
        return

    prefix = "(?i)" if ignore_case else ""
    suffix = ""
    if add_anchors:
        prefix += "^"
        suffix = "$"
    matcher = glob_string_to_regexp(glob, add_anchors=add_anchors, ignore_case=ignore_case)
    assert matcher.regex == prefix + want + suffix
    assert matcher.mode == "string"


@pytest.mark.parametrize("ignore_case", [False, True])
@pytest.mark.parametrize("glob,want,error", PATH_CASES)
def test_glob_path_to_regexp(glob, want, error, ignore_case):
    if error is not None:
        with pytest.raises(error):
            glob_path_to_regexp(glob, ignore_case=ignore_case)
        return

    prefix = "(?i)" if ignore_case else ""
    matcher = glob_path_to_regexp(glob, ignore_case=ignore_case)
    assert matcher.regex == prefix + want
    assert matcher.mode == "path"
    assert matcher.anchored is True


class TestErrors:
    """Structured error information"""

    @pytest.mark.parametrize("glob,error,offset", [
        ("***potato", TooManyStarsError, 0),
        ("potato**", TooManyStarsError, 6),
        ("ab]c", StrayBracketError, 2),
        ("ab[c", UnclosedBracketError, 2),
        ("ab{x{cd", NestedBraceError, 4),
        ("ab{}}cd", MismatchedBraceError, 4),
        ("ab}c", MismatchedBraceError, 2),
        ("ab{c", MismatchedBraceError, 2),
        ("a{{.*}", MismatchedDoubleBraceError, 1),
        ("ab}}", MismatchedDoubleBraceError, 2),
        ("ab\\", BadGlobPatternError, 2),
        ("[[:bogus:]]", BadGlobPatternError, 1),
    ])
    def test_offsets(self, glob, error, offset):
        """The offset points at the offending character of the glob"""
        with pytest.raises(error) as info:
            glob_string_to_regexp(glob)
        assert info.value.offset == offset
        assert info.value.pattern == glob

    def test_path_offsets_index_the_original_glob(self):
        """A consumed leading / still counts"""
        with pytest.raises(StrayBracketError) as info:
            glob_path_to_regexp("/ab]c")
        assert info.value.offset == 3

    def test_kinds_and_messages(self):
        """Every error is a GlobError with a kind and a readable message"""
        with pytest.raises(GlobError) as info:
            glob_string_to_regexp("potato**")
        assert info.value.kind is GlobErrorKind.TOO_MANY_STARS
        assert "too many stars" in str(info.value)
        assert isinstance(info.value, ValueError)

        with pytest.raises(GlobError) as info:
            glob_string_to_regexp("ab]c")
        assert info.value.kind is GlobErrorKind.STRAY_BRACKET
        assert "mismatched ']'" in str(info.value)

        with pytest.raises(GlobError) as info:
            glob_string_to_regexp("ab{x{cd")
        assert "can't nest" in str(info.value)

    def test_bad_pattern_wraps_re_error(self):
        """Errors found by re are reported as bad glob pattern"""
        with pytest.raises(BadGlobPatternError) as info:
            glob_path_to_regexp("[a--b]")
        assert info.value.offset is None
        assert "bad glob pattern" in str(info.value)
        assert isinstance(info.value.__cause__, re.error)

    def test_raw_regexp_is_not_escaped(self):
        """Text inside {{ }} goes through as is"""
        assert glob_to_regex_text("{{(?i)regexp}}", PATH_MODE) == "(^|/)((?i)regexp)$"

    def test_global_flags_inside_raw_regexp(self):
        """re only accepts global flags at the very start"""
        with pytest.raises(BadGlobPatternError):
            glob_path_to_regexp("{{(?i)regexp}}")


class TestMatching:
    """Behaviour of compiled matchers"""

    def test_star_stays_in_one_directory(self):
        m = glob_path_to_regexp("*.jpg")
        assert m.matches("cat.jpg")
        assert m.matches("photos/2024/cat.jpg")
        assert not m.matches("cat.jpgx")
        assert not m.matches("cat.jpg/readme")

    def test_double_star_crosses_directories(self):
        m = glob_path_to_regexp("/photos/**.jpg")
        assert m.matches("photos/cat.jpg")
        assert m.matches("photos/2024/05/cat.jpg")
        assert not m.matches("music/photos/cat.jpg")

    def test_question_mark(self):
        m = glob_path_to_regexp("a?c")
        assert m.matches("abc")
        assert not m.matches("a/c")
        assert glob_string_to_regexp("a?c").matches("a/c")

    def test_leading_slash_anchors_to_root(self):
        m = glob_path_to_regexp("/potato")
        assert m.matches("potato")
        assert not m.matches("dir/potato")
        assert glob_path_to_regexp("potato").matches("dir/potato")
        assert not glob_path_to_regexp("potato").matches("dirpotato")

    def test_string_glob_anchoring(self):
        assert glob_string_to_regexp("b").matches("abc")
        assert not glob_string_to_regexp("b", add_anchors=True).matches("abc")
        assert glob_string_to_regexp("a*c", add_anchors=True).matches("a/b/c")

    def test_ignore_case(self):
        assert not glob_path_to_regexp("*.JPG").matches("cat.jpg")
        assert glob_path_to_regexp("*.JPG", ignore_case=True).matches("cat.jpg")

    def test_braces_and_brackets(self):
        m = glob_path_to_regexp("*.{jpg,p[ln]g}")
        assert m.matches("a.jpg")
        assert m.matches("a.png")
        assert m.matches("a.plg")
        assert not m.matches("a.gif")

    def test_posix_classes(self):
        m = glob_path_to_regexp("img[[:digit:]][[:digit:]].jpg")
        assert m.matches("img42.jpg")
        assert not m.matches("imgab.jpg")

    def test_literal_bracket_first_in_class(self):
        m = glob_string_to_regexp("[]a]", add_anchors=True)
        assert m.regex == "^[]a]$"
        assert m.matches("]")
        assert m.matches("a")

    def test_raw_regexp(self):
        m = glob_path_to_regexp(r"/logs/{{\d{8}}}.log")
        assert m.matches("logs/20240101.log")
        assert not m.matches("logs/2024.log")

    def test_escaped_metacharacters(self):
        m = glob_path_to_regexp("a+b(1).txt")
        assert m.matches("a+b(1).txt")
        assert not m.matches("aab1.txt")

    def test_escaped_wildcards_are_literal(self):
        m = glob_path_to_regexp(r"a\*b\?")
        assert m.matches("a*b?")
        assert not m.matches("axxb?")

    def test_set_operators_in_brackets_are_literal(self):
        """Doubled &, ~ and | inside a class compile quietly"""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            m = glob_path_to_regexp("[a&&b]")
            assert glob_string_to_regexp("[x~~y||z]").matches("~")
        assert m.matches("&")
        assert m.matches("b")
        assert not m.matches("c")

    def test_bad_range_with_warnings_as_errors(self):
        """A doubled - still surfaces as a glob error"""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            with pytest.raises(BadGlobPatternError):
                glob_path_to_regexp("[z--b]")


class TestGlobMatcher:
    """GlobMatcher value semantics"""

    def test_same_glob_same_regex(self):
        """Compiling twice gives identical regex text"""
        a = glob_path_to_regexp("a/{b,c}/**.jpg", ignore_case=True)
        b = glob_path_to_regexp("a/{b,c}/**.jpg", ignore_case=True)
        assert a.regex == b.regex
        assert str(a) == a.regex

    def test_frozen(self):
        m = glob_path_to_regexp("*.jpg")
        assert isinstance(m, GlobMatcher)
        with pytest.raises(AttributeError):
            m.glob = "*.png"
