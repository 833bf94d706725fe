"""globz - extended glob patterns compiled to regular expressions.

Also works out which directories a tree walk has to list to find every
path a glob could match.
"""

__version__ = "0.1.0"
__author__ = "globz contributors"

from .glob.compiler import GlobMatcher, glob_path_to_regexp, glob_string_to_regexp
from .glob.dirglobs import glob_to_dir_globs
from .glob.errors import GlobError, GlobErrorKind

__all__ = [
    "GlobError",
    "GlobErrorKind",
    "GlobMatcher",
    "glob_path_to_regexp",
    "glob_string_to_regexp",
    "glob_to_dir_globs",
]
