"""Extract the template key from a pull-request title.

A title such as ``"[bug] Fix login crash"`` carries the prefix ``bug``. Only
the first bracketed span counts, and surrounding whitespace is stripped.

Examples
--------
>>> extract_prefix("[ bug ] Fix login crash")
'bug'
>>> extract_prefix("[docs][wip] Update README")
'docs'

"""

from __future__ import annotations

import re

from .errors import NoPrefixFoundError, UnsafePrefixError

_PREFIX_PATTERN = re.compile(r"\[(.*?)\]")
_PATH_SEPARATORS = ("/", "\\")
_PARENT_DIRECTORY = ".."


def extract_prefix(title: str) -> str:
    """Return the stripped text inside the first ``[...]`` of ``title``.

    Raises
    ------
    NoPrefixFoundError
        If the title has no ``[`` followed by a ``]``.

    """
    match = _PREFIX_PATTERN.search(title)
    if match is None:
        raise NoPrefixFoundError(title)
    return match.group(1).strip()


def validate_prefix(prefix: str) -> str:
    """Return ``prefix`` unchanged when it is safe to use in a file name.

    Raises
    ------
    UnsafePrefixError
        If the prefix is empty or contains a path separator or ``..``.

    """
    if not prefix:
        raise UnsafePrefixError(prefix)
    if any(sep in prefix for sep in _PATH_SEPARATORS) or _PARENT_DIRECTORY in prefix:
        raise UnsafePrefixError(prefix)
    return prefix
