"""Glob module for globz - compiles globs and derives directory globs."""

from .compiler import (
    GlobMatcher,
    PATH_MODE,
    STRING_MODE,
    compile_glob,
    glob_path_to_regexp,
    glob_string_to_regexp,
    glob_to_regex_text,
)
from .dirglobs import CATCH_ALL, glob_to_dir_globs
from .errors import (
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

__all__ = [
    # compiler
    "GlobMatcher",
    "PATH_MODE",
    "STRING_MODE",
    "compile_glob",
    "glob_path_to_regexp",
    "glob_string_to_regexp",
    "glob_to_regex_text",
    # directory globs
    "CATCH_ALL",
    "glob_to_dir_globs",
    # errors
    "BadGlobPatternError",
    "GlobError",
    "GlobErrorKind",
    "MismatchedBraceError",
    "MismatchedDoubleBraceError",
    "NestedBraceError",
    "StrayBracketError",
    "TooManyStarsError",
    "UnclosedBracketError",
]
