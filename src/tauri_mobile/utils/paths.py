"""Lexical path prefixing against a project root.

Both functions are purely lexical: nothing is resolved against the
filesystem, so symlinks and ``..`` components are taken at face value.
Generated build scripts rely on :func:`unprefix_path` to embed paths
relative to the project root instead of absolute ones.
"""

from __future__ import annotations

import os
from pathlib import PurePath

from tauri_mobile.exceptions import PathNotUnderRootError


def prefix_path(root: str | os.PathLike[str], path: str | os.PathLike[str]) -> str:
    """Join *path* onto *root*.

    An absolute *path* replaces *root* entirely, mirroring
    :meth:`pathlib.PurePath.joinpath`.
    """
    return str(PurePath(root) / path)


def unprefix_path(root: str | os.PathLike[str], path: str | os.PathLike[str]) -> str:
    """Return *path* relative to *root*.

    Raises
    ------
    PathNotUnderRootError
        When *path* is not lexically inside *root*.
    """
    try:
        return str(PurePath(path).relative_to(PurePath(root)))
    except ValueError as exc:
        raise PathNotUnderRootError(str(path), str(root)) from exc
