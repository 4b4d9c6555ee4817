from __future__ import annotations

from pathlib import Path
from typing import Optional


def read_all_bytes(path: Path) -> Optional[bytes]:
    if not path.is_file():
        return None
    with path.open("rb") as fh:
        return fh.read()


def write_all_bytes(path: Path, data: bytes) -> None:
    """Replace the contents of ``path``, creating parent folders as needed.

    An existing file is rewritten in place instead of being recreated:
    Windows refuses to create over a file carrying the hidden attribute,
    which file managers set on descript.ion.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.is_file():
        with path.open("r+b") as fh:
            fh.write(data)
            fh.truncate()
        return
    with path.open("wb") as fh:
        fh.write(data)


def entry_exists(directory: Path, name: str) -> bool:
    target = directory / name
    return target.is_file() or target.is_dir()
