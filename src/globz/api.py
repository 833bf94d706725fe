"""
globz core API

Glob compilation and directory pruning without any CLI dependency,
usable directly as a library.

Example:
    matcher = compile_glob("*.jpg")
    matcher.matches("photos/cat.jpg")        # True

    dirs = compile_dir_globs("/photos/2024/*.jpg")
    dir_is_needed(dirs, "photos/")           # True
    dir_is_needed(dirs, "music/")            # False
"""

from typing import Any, Dict, List, Sequence

from .glob.compiler import GlobMatcher, glob_path_to_regexp, glob_string_to_regexp
from .glob.dirglobs import CATCH_ALL, glob_to_dir_globs
from .glob.errors import GlobError


class GlobMode:
    """Compile modes"""
    PATH = "path"
    STRING = "string"


MODES = (GlobMode.PATH, GlobMode.STRING)


def compile_glob(
    pattern: str,
    mode: str = GlobMode.PATH,
    anchor: bool = False,
    ignore_case: bool = False,
) -> GlobMatcher:
    """
    Compile a glob in the given mode

    Args:
        pattern: Glob pattern
        mode: "path" for ``/`` aware matching, "string" for plain strings
        anchor: Anchor a string glob at both ends (path globs always are)
        ignore_case: Match case-insensitively

    Returns:
        GlobMatcher

    Raises:
        GlobError: The pattern is malformed
        ValueError: Unknown mode
    """
    if mode == GlobMode.PATH:
        return glob_path_to_regexp(pattern, ignore_case=ignore_case)
    elif mode == GlobMode.STRING:
        return glob_string_to_regexp(pattern, add_anchors=anchor, ignore_case=ignore_case)
    else:
        raise ValueError(f"Unknown mode: {mode}")


def compile_dir_globs(pattern: str, ignore_case: bool = False) -> List[GlobMatcher]:
    """
    Compile the directory globs of a path glob into path matchers

    The pattern itself is validated first so a malformed glob is reported
    here rather than silently turned into "list everything".

    Only a glob anchored with a leading ``/`` can prune the walk. An
    unanchored glob may match below any directory, so it gets the single
    catch-all matcher.

    Args:
        pattern: Path glob
        ignore_case: Match case-insensitively

    Returns:
        One matcher per directory glob, deepest first

    Raises:
        GlobError: The pattern is malformed
    """
    glob_path_to_regexp(pattern, ignore_case=ignore_case)
    dir_globs = glob_to_dir_globs(pattern) if pattern.startswith("/") else [CATCH_ALL]
    return [glob_path_to_regexp(d, ignore_case=ignore_case) for d in dir_globs]


def dir_is_needed(dir_matchers: Sequence[GlobMatcher], dir_path: str) -> bool:
    """
    Decide whether a walk has to list ``dir_path``

    Args:
        dir_matchers: Result of compile_dir_globs
        dir_path: Directory relative to the walk root, e.g. "a/b" or "a/b/".
            The root itself is "" and is always needed.

    Returns:
        True if the directory or anything below it may contain a match
    """
    if dir_path in ("", "/"):
        return True
    if not dir_path.endswith("/"):
        dir_path += "/"
    return any(m.matches(dir_path) for m in dir_matchers)


def describe(
    pattern: str,
    mode: str = GlobMode.PATH,
    anchor: bool = False,
    ignore_case: bool = False,
) -> Dict[str, Any]:
    """
    Describe what a glob compiles to

    Returns:
        {
            "pattern": str,
            "mode": "path" | "string",
            "valid": bool,
            "regex": str | None,
            "dir_globs": list[str] | None,   # path mode only
            "error": str | None,
            "error_kind": str | None,
            "offset": int | None,
        }
    """
    result: Dict[str, Any] = {
        "pattern": pattern,
        "mode": mode,
        "valid": False,
        "regex": None,
        "dir_globs": None,
        "error": None,
        "error_kind": None,
        "offset": None,
    }

    try:
        matcher = compile_glob(pattern, mode=mode, anchor=anchor, ignore_case=ignore_case)
    except GlobError as e:
        result["error"] = str(e)
        result["error_kind"] = e.kind.name.lower()
        result["offset"] = e.offset
        return result

    result["valid"] = True
    result["regex"] = matcher.regex
    if mode == GlobMode.PATH:
        result["dir_globs"] = glob_to_dir_globs(pattern)
    return result


def lists_everything(pattern: str) -> bool:
    """True if a walk for ``pattern`` can't skip any directory"""
    return not pattern.startswith("/") or glob_to_dir_globs(pattern) == [CATCH_ALL]


__all__ = [
    "GlobMode",
    "MODES",
    "compile_glob",
    "compile_dir_globs",
    "dir_is_needed",
    "describe",
    "lists_everything",
]
