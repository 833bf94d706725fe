"""Glob to regular expression compiler.

Supported glob syntax:
  ?          one character (not ``/`` in path mode)
  *          any run of characters (not ``/`` in path mode)
  **         any run of characters including ``/`` (path mode only)
  [...]      character class, POSIX classes like ``[[:alpha:]]`` allowed
  {a,b,c}    alternation
  {{regex}}  raw regular expression, copied through untouched
  \\x         the character x taken literally
"""

import re
import warnings
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from loguru import logger

from .errors import (
    BadGlobPatternError,
    GlobError,
    MismatchedBraceError,
    MismatchedDoubleBraceError,
    NestedBraceError,
    StrayBracketError,
    TooManyStarsError,
    UnclosedBracketError,
)
from .posix import POSIX_CLASSES, match_posix

# Characters the glob dialect takes literally but ``re`` does not.
REGEX_METACHARS = ".+()|^$"


class State(Enum):
    """States of the glob scanner."""

    NORMAL = "normal"
    IN_BRACKET = "in_bracket"
    IN_BRACE = "in_brace"
    IN_DOUBLE_BRACE = "in_double_brace"


@dataclass(frozen=True)
class Mode:
    """Wildcard translation table and anchoring policy of a compile mode."""

    name: str
    any_char: str
    star: str
    double_star: Optional[str]
    path: bool


STRING_MODE = Mode(name="string", any_char=".", star=".*", double_star=None, path=False)
PATH_MODE = Mode(name="path", any_char="[^/]", star="[^/]*", double_star=".*", path=True)


class GlobScanner:
    """Single left-to-right pass turning a glob into regular expression text.

    Args:
        glob: The glob pattern
        mode: Translation table to use for the wildcards
        start: Index to start scanning from (path mode skips a leading ``/``)
    """

    def __init__(self, glob: str, mode: Mode, start: int = 0):
        self.glob = glob
        self.mode = mode
        self.pos = start
        self.state = State.NORMAL
        # State to go back to once a bracket expression closes
        self.resume = State.NORMAL
        self.stars = 0
        self.star_start = 0
        self.bracket_start = 0
        self.bracket_body = 0
        self.brace_start = 0
        self.out: List[str] = []
        self._handlers: Dict[State, Callable[[str], None]] = {
            State.NORMAL: self._normal,
            State.IN_BRACE: self._normal,
            State.IN_BRACKET: self._bracket,
            State.IN_DOUBLE_BRACE: self._double_brace,
        }

    def scan(self) -> str:
        """Run the scanner and return the regular expression body.

        Raises:
            GlobError: If the glob is malformed
        """
        while self.pos < len(self.glob):
            self._handlers[self.state](self.glob[self.pos])
        self._flush_stars()

        if self.state is State.IN_BRACKET:
            raise UnclosedBracketError(self.glob, self.bracket_start)
        if self.state is State.IN_BRACE:
            raise MismatchedBraceError(self.glob, self.brace_start)
        if self.state is State.IN_DOUBLE_BRACE:
            raise MismatchedDoubleBraceError(self.glob, self.brace_start)
        return "".join(self.out)

    def _flush_stars(self) -> None:
        if not self.stars:
            return
        stars, self.stars = self.stars, 0
        if stars == 1:
            self.out.append(self.mode.star)
        elif stars == 2 and self.mode.double_star is not None:
            self.out.append(self.mode.double_star)
        else:
            raise TooManyStarsError(self.glob, self.star_start)

    def _normal(self, c: str) -> None:
        """Handle a character outside brackets, in or out of ``{...}``."""
        glob, pos = self.glob, self.pos

        if c == "*":
            if not self.stars:
                self.star_start = pos
            self.stars += 1
            self.pos += 1
            return
        self._flush_stars()

        if c == "\\":
            if pos + 1 >= len(glob):
                raise BadGlobPatternError(glob, pos, "trailing backslash")
            self.out.append(glob[pos:pos + 2])
            self.pos += 2
            return

        nxt = glob[pos + 1] if pos + 1 < len(glob) else ""
        self.pos += 1

        if c == "?":
            self.out.append(self.mode.any_char)
        elif c == "[":
            self.out.append("[")
            self.resume = self.state
            self.state = State.IN_BRACKET
            self.bracket_start = pos
            if nxt == "^":
                self.out.append("^")
                self.pos += 1
            self.bracket_body = self.pos
        elif c == "]":
            raise StrayBracketError(glob, pos)
        elif c == "{":
            if self.state is State.IN_BRACE:
                raise NestedBraceError(glob, pos)
            self.brace_start = pos
            self.out.append("(")
            if nxt == "{":
                self.state = State.IN_DOUBLE_BRACE
                self.pos += 1
            else:
                self.state = State.IN_BRACE
        elif c == "}":
            if self.state is State.IN_BRACE:
                self.out.append(")")
                self.state = State.NORMAL
            elif nxt == "}":
                raise MismatchedDoubleBraceError(glob, pos)
            else:
                raise MismatchedBraceError(glob, pos)
        elif c == "," and self.state is State.IN_BRACE:
            self.out.append("|")
        elif c in REGEX_METACHARS:
            self.out.append("\\" + c)
        else:
            self.out.append(c)

    def _bracket(self, c: str) -> None:
        """Handle a character inside ``[...]``, copying it mostly verbatim."""
        glob, pos = self.glob, self.pos

        if c == "\\":
            self.out.append(glob[pos:pos + 2])
            self.pos += 2
        elif c == "]" and pos > self.bracket_body:
            # A ']' first in the class is a literal
            self.out.append("]")
            self.state = self.resume
            self.pos += 1
        elif c == "[":
            m = match_posix(glob, pos)
            if m is None:
                self.out.append("\\[")
                self.pos += 1
                return
            body = POSIX_CLASSES.get(m.group(1))
            if body is None:
                raise BadGlobPatternError(glob, pos, f"unknown character class {m.group(0)!r}")
            self.out.append(body)
            self.pos = m.end()
        else:
            self.out.append(c)
            self.pos += 1

    def _double_brace(self, c: str) -> None:
        """Handle a character inside ``{{...}}``, copied through as regex."""
        glob, pos = self.glob, self.pos

        if c == "\\":
            self.out.append(glob[pos:pos + 2])
            self.pos += 2
        elif c == "}":
            end = pos
            while end < len(glob) and glob[end] == "}":
                end += 1
            run = end - pos
            if run < 2:
                self.out.append("}")
                self.pos += 1
                return
            # The last two of a run of '}' close the raw section
            self.out.append("}" * (run - 2) + ")")
            self.state = State.NORMAL
            self.pos = end
        else:
            self.out.append(c)
            self.pos += 1


@dataclass(frozen=True)
class GlobMatcher:
    """A compiled glob.

    The flags are part of the regular expression text, so ``regex`` alone
    describes the matcher completely.
    """

    glob: str
    compiled: "re.Pattern[str]"
    mode: str
    ignore_case: bool = False
    anchored: bool = True

    @property
    def regex(self) -> str:
        return self.compiled.pattern

    def matches(self, candidate: str) -> bool:
        """Return True if ``candidate`` matches the glob."""
        return self.compiled.search(candidate) is not None

    def __str__(self) -> str:
        return self.regex


def glob_to_regex_text(glob: str, mode: Mode, add_anchors: bool = False, ignore_case: bool = False) -> str:
    """Translate ``glob`` to regular expression text without compiling it.

    Path mode is always anchored: a leading ``/`` anchors the glob to the
    start of the path, otherwise it may start after any ``/``.

    Raises:
        GlobError: If the glob is malformed
    """
    start = 1 if mode.path and glob.startswith("/") else 0
    body = GlobScanner(glob, mode, start).scan()

    if mode.path:
        regex = ("^" if start else "(^|/)") + body + "$"
    elif add_anchors:
        regex = "^" + body + "$"
    else:
        regex = body

    if ignore_case:
        regex = "(?i)" + regex
    return regex


def compile_glob(glob: str, mode: Mode, add_anchors: bool = False, ignore_case: bool = False) -> GlobMatcher:
    """Compile ``glob`` into a :class:`GlobMatcher`.

    Raises:
        GlobError: If the glob is malformed or the resulting regular
            expression is rejected by ``re``
    """
    regex = glob_to_regex_text(glob, mode, add_anchors=add_anchors, ignore_case=ignore_case)
    try:
        with warnings.catch_warnings():
            # Set operations like [a&&b] are still literal characters in re
            warnings.simplefilter("ignore", FutureWarning)
            compiled = re.compile(regex)
    except re.error as e:
        raise BadGlobPatternError(glob, reason=str(e)) from e

    logger.debug(f"compiled {mode.name} glob {glob!r} to {regex!r}")
    return GlobMatcher(
        glob=glob,
        compiled=compiled,
        mode=mode.name,
        ignore_case=ignore_case,
        anchored=mode.path or add_anchors,
    )


def glob_string_to_regexp(glob: str, add_anchors: bool = False, ignore_case: bool = False) -> GlobMatcher:
    """Compile a glob meant to match a plain string.

    ``*`` and ``?`` match any character, ``**`` is an error.
    """
    return compile_glob(glob, STRING_MODE, add_anchors=add_anchors, ignore_case=ignore_case)


def glob_path_to_regexp(glob: str, ignore_case: bool = False) -> GlobMatcher:
    """Compile a glob meant to match a ``/`` separated path.

    ``*`` and ``?`` stop at ``/``, ``**`` crosses it.
    """
    return compile_glob(glob, PATH_MODE, ignore_case=ignore_case)


__all__ = [
    "GlobError",
    "GlobMatcher",
    "GlobScanner",
    "Mode",
    "PATH_MODE",
    "STRING_MODE",
    "State",
    "compile_glob",
    "glob_path_to_regexp",
    "glob_string_to_regexp",
    "glob_to_regex_text",
]
