"""Errors raised while translating a glob into a regular expression."""

from enum import Enum
from typing import Optional


class GlobErrorKind(Enum):
    """The ways a glob pattern can be malformed."""

    TOO_MANY_STARS = "too many stars"
    UNCLOSED_BRACKET = "mismatched '[' and ']'"
    STRAY_BRACKET = "mismatched ']'"
    MISMATCHED_BRACE = "mismatched '{' and '}'"
    MISMATCHED_DOUBLE_BRACE = "mismatched '{{' and '}}'"
    NESTED_BRACE = "can't nest '{' '}' in glob"
    BAD_PATTERN = "bad glob pattern"


class GlobError(ValueError):
    """A glob pattern could not be compiled.

    Attributes:
        kind: Which rule of the glob dialect was broken
        pattern: The glob as supplied by the caller
        offset: Index into ``pattern`` where the problem was detected
        reason: Extra detail, e.g. the message from ``re.error``
    """

    kind: GlobErrorKind = GlobErrorKind.BAD_PATTERN

    def __init__(self, pattern: str, offset: Optional[int] = None, reason: Optional[str] = None):
        self.pattern = pattern
        self.offset = offset
        self.reason = reason
        message = f"{self.kind.value} in glob {pattern!r}"
        if offset is not None:
            message += f" at offset {offset}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class TooManyStarsError(GlobError):
    kind = GlobErrorKind.TOO_MANY_STARS


class UnclosedBracketError(GlobError):
    kind = GlobErrorKind.UNCLOSED_BRACKET


class StrayBracketError(GlobError):
    kind = GlobErrorKind.STRAY_BRACKET


class MismatchedBraceError(GlobError):
    kind = GlobErrorKind.MISMATCHED_BRACE


class MismatchedDoubleBraceError(GlobError):
    kind = GlobErrorKind.MISMATCHED_DOUBLE_BRACE


class NestedBraceError(GlobError):
    kind = GlobErrorKind.NESTED_BRACE


class BadGlobPatternError(GlobError):
    kind = GlobErrorKind.BAD_PATTERN
