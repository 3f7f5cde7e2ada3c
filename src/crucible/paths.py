# paths.py
from __future__ import annotations

import posixpath


def join_under(base: str, *parts: str) -> str:
    """
    Join parts onto base and clean the result.

    A leading "/" on a part does not reset the path to the filesystem root,
    so a job called "/etc" still lands under base. ".." segments are
    collapsed the same way filepath.Join does.
    """
    return posixpath.normpath(posixpath.join(base, *(p.lstrip("/") for p in parts)))
