"""Directory globs for a path glob.

Given a path glob, work out which directories a recursive walk has to list
to find everything the glob could match. For ``/a/b/*.jpg`` these are
``/a/b/``, ``/a/`` and ``/``; every other directory can be skipped.

The result may name more directories than strictly needed but must never
leave one out. Whenever the glob can't be split safely the single entry
``/**`` is returned, meaning "list everything".
"""

from enum import Enum
from typing import List, NamedTuple, Optional

from loguru import logger

from .posix import SEPARATOR_CLASSES, match_posix

CATCH_ALL = "/**"

# Characters that make a {a,b} alternative able to span directories
_UNSAFE_IN_BRACES = "/*?[{"


class TokenKind(Enum):
    TEXT = "text"
    SEP = "sep"
    DOUBLE_STAR = "double_star"


class Token(NamedTuple):
    kind: TokenKind
    text: str


class UnsafeGlob(Exception):
    """The glob can't be split into directories without risking a miss."""


def _bracket_end(glob: str, start: int) -> int:
    """Return the index just past the bracket expression opened at ``start``.

    Raises:
        UnsafeGlob: If the expression is unclosed or could match ``/``
    """
    n = len(glob)
    i = start + 1
    if glob[i:i + 1] == "^":
        raise UnsafeGlob("negated character class")
    first = i
    while i < n:
        c = glob[i]
        if c == "\\":
            if glob[i + 1:i + 2] == "/":
                raise UnsafeGlob("escaped separator in character class")
            i += 2
        elif c == "[":
            m = match_posix(glob, i)
            if m is None:
                i += 1
                continue
            if m.group(1) in SEPARATOR_CLASSES:
                raise UnsafeGlob(f"character class {m.group(0)} contains a separator")
            i = m.end()
        elif c == "]" and i > first:
            return i + 1
        elif c == "/":
            raise UnsafeGlob("separator in character class")
        else:
            if c == "-" and i > first and i + 1 < n and glob[i + 1] != "]":
                low = glob[i - 1]
                high = glob[i + 2] if glob[i + 1] == "\\" and i + 2 < n else glob[i + 1]
                if low <= "/" <= high:
                    raise UnsafeGlob(f"range {low}-{high} contains a separator")
            i += 1
    raise UnsafeGlob("unclosed character class")


def _brace_end(glob: str, start: int) -> int:
    """Return the index just past the ``{...}`` opened at ``start``.

    Raises:
        UnsafeGlob: If an alternative could match across directories
    """
    if glob[start + 1:start + 2] == "{":
        raise UnsafeGlob("raw regular expression")
    i = start + 1
    while i < len(glob):
        c = glob[i]
        if c == "}":
            return i + 1
        if c in _UNSAFE_IN_BRACES:
            raise UnsafeGlob(f"alternative contains {c!r}")
        if c == "\\":
            if glob[i + 1:i + 2] == "/":
                raise UnsafeGlob("escaped separator in alternative")
            i += 2
        else:
            i += 1
    raise UnsafeGlob("unclosed brace")


def tokenize(glob: str) -> List[Token]:
    """Split ``glob`` into separators, double stars and everything else.

    Runs of ``/`` collapse into a single separator. Escapes, character
    classes and alternations are kept whole as text.

    Raises:
        UnsafeGlob: If the glob can't be safely split into directories
    """
    tokens: List[Token] = []
    i, n = 0, len(glob)
    while i < n:
        c = glob[i]
        if c == "\\":
            if glob[i + 1:i + 2] == "/":
                raise UnsafeGlob("escaped separator")
            end = i + 2
            kind = TokenKind.TEXT
        elif c == "/":
            end = i + 1
            kind = TokenKind.SEP
            if tokens and tokens[-1].kind is TokenKind.SEP:
                i = end
                continue
        elif c == "*":
            end = i
            while end < n and glob[end] == "*":
                end += 1
            kind = TokenKind.DOUBLE_STAR if end - i > 1 else TokenKind.TEXT
        elif c == "[":
            end = _bracket_end(glob, i)
            kind = TokenKind.TEXT
        elif c == "{":
            end = _brace_end(glob, i)
            kind = TokenKind.TEXT
        else:
            end = i + 1
            kind = TokenKind.TEXT
        tokens.append(Token(kind, glob[i:end]))
        i = end
    return tokens


def _last_boundary(tokens: List[Token]) -> Optional[int]:
    for k in range(len(tokens) - 1, -1, -1):
        if tokens[k].kind is not TokenKind.TEXT:
            return k
    return None


def glob_to_dir_globs(glob: str) -> List[str]:
    """Return the directory globs a walk must list to find matches of ``glob``.

    Entries are ordered deepest first and each ends in ``/``. An anchored
    glob ends with the root ``/``. ``["/**"]`` is returned when no safe
    decomposition exists.

    Args:
        glob: A path glob, already accepted by the glob compiler

    Returns:
        List of directory globs
    """
    try:
        tokens = tokenize(glob)
    except UnsafeGlob as e:
        logger.debug(f"listing everything for glob {glob!r}: {e}")
        return [CATCH_ALL]

    out: List[str] = []
    while True:
        k = _last_boundary(tokens)
        if k is None:
            break
        dir_glob = "".join(t.text for t in tokens[:k + 1])
        if tokens[k].kind is TokenKind.DOUBLE_STAR:
            dir_glob += "/"
        if not out or out[-1] != dir_glob:
            out.append(dir_glob)
        tokens = tokens[:k]

    if not out:
        # Unanchored and no directory part: could match at any depth
        out = [CATCH_ALL]
    logger.debug(f"directory globs for {glob!r}: {out}")
    return out
