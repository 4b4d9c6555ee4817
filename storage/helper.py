"""One-shot access to a single comment by path.

Every call loads the folder's descript.ion, applies one change and saves.
Use :class:`storage.description_io.DescriptionStore` directly for batches.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Tuple, Union

from models.config import DescriptionConfig
from models.description import CommentFormat
from storage.description_io import DescriptionStore


PathLike = Union[str, "os.PathLike[str]"]


def split_path(full_path: PathLike) -> Tuple[Path, str]:
    """Return ``(parent directory, leaf name)`` for an absolute file or folder path."""
    if full_path is None:
        raise TypeError("full_path must not be None")
    raw = os.fspath(full_path)
    if not os.path.isabs(raw):
        raise ValueError(f"Path must be absolute: {raw}")
    normalized = raw.rstrip(os.sep + (os.altsep or ""))
    directory, name = os.path.split(normalized)
    if not normalized or not name or not directory:
        raise ValueError(f"Path has no parent folder or leaf name: {raw}")
    return Path(directory), name


def get_comment_in(directory: PathLike, name: str, config: Optional[DescriptionConfig] = None) -> Optional[str]:
    if directory is None:
        raise TypeError("directory must not be None")
    if name is None:
        raise TypeError("name must not be None")
    store = DescriptionStore(Path(directory), CommentFormat.AUTO_DETECT, config)
    store.load()
    return store.get_comment(name)


def get_comment(full_path: PathLike, config: Optional[DescriptionConfig] = None) -> Optional[str]:
    directory, name = split_path(full_path)
    return get_comment_in(directory, name, config)


def set_comment_in(
    directory: PathLike,
    name: str,
    comment: Optional[str],
    config: Optional[DescriptionConfig] = None,
) -> Path:
    """Set ``comment`` for ``name``; ``None`` removes the entry. Returns the descript.ion path."""
    if directory is None:
        raise TypeError("directory must not be None")
    if name is None:
        raise TypeError("name must not be None")
    store = DescriptionStore(Path(directory), CommentFormat.AUTO_DETECT, config)
    store.load()
    if comment is None:
        store.remove_comment(name)
    else:
        store.set_comment(name, comment)
    return store.save()


def set_comment(full_path: PathLike, comment: Optional[str], config: Optional[DescriptionConfig] = None) -> Path:
    directory, name = split_path(full_path)
    return set_comment_in(directory, name, comment, config)
