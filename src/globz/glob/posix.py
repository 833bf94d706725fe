"""POSIX character classes expanded to ASCII sets usable inside ``re`` brackets."""

import re
from typing import Optional

# Bodies are meant to be placed inside an existing [...] expression.
POSIX_CLASSES = {
    "alnum": "a-zA-Z0-9",
    "alpha": "a-zA-Z",
    "ascii": "\\x00-\\x7f",
    "blank": " \\t",
    "cntrl": "\\x00-\\x1f\\x7f",
    "digit": "0-9",
    "graph": "\\x21-\\x7e",
    "lower": "a-z",
    "print": "\\x20-\\x7e",
    "punct": "!-/:-@\\[-`{-~",
    "space": " \\t\\n\\r\\f\\v",
    "upper": "A-Z",
    "word": "a-zA-Z0-9_",
    "xdigit": "A-Fa-f0-9",
}

# Classes whose members include the path separator.
SEPARATOR_CLASSES = frozenset({"ascii", "graph", "print", "punct"})

RE_POSIX = re.compile(r"\[:([a-z]*):\]")


def match_posix(pattern: str, pos: int) -> Optional[re.Match]:
    """Return the match of a ``[:name:]`` class starting at ``pos``, if any."""
    return RE_POSIX.match(pattern, pos)
