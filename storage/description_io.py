from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional

from models.config import DescriptionConfig
from models.description import CommentFormat, CommentMap, collation_key
from models.dialect import LineMatch, classify_line, resolve_format
from models.encoding import DEFAULT_ENCODING, TextEncoding, decode_bytes, encode_text, sniff_encoding
from models.parsers import render_line, split_lines
from storage.file_io import entry_exists, read_all_bytes, write_all_bytes


logger = logging.getLogger(__name__)


def _require(value: object, name: str) -> None:
    if value is None:
        raise TypeError(f"{name} must not be None")


def _require_name(name: Optional[str]) -> None:
    _require(name, "name")
    if not name:
        raise ValueError("name must not be empty")
    if "\r" in name or "\n" in name:
        raise ValueError("name must not contain line breaks")


class DescriptionStore:
    """Comments of one directory, backed by its descript.ion file.

    Nothing touches the disk except :meth:`load` and :meth:`save`; edits
    stay in memory until saved.
    """

    def __init__(
        self,
        directory: Path,
        fmt: Optional[CommentFormat] = None,
        config: Optional[DescriptionConfig] = None,
    ) -> None:
        _require(directory, "directory")
        self.directory = Path(directory)
        self.config = config or DescriptionConfig()
        self._format = CommentFormat(fmt or self.config.default_format)
        self._encoding: Optional[TextEncoding] = None
        self._comments = CommentMap()
        self.loaded = False

    @property
    def path(self) -> Path:
        return self.directory / self.config.file_name

    @property
    def format(self) -> CommentFormat:
        return self._format

    @format.setter
    def format(self, value: CommentFormat) -> None:
        _require(value, "format")
        self._format = CommentFormat(value)

    @property
    def encoding(self) -> TextEncoding:
        return self._encoding or DEFAULT_ENCODING

    @encoding.setter
    def encoding(self, value: TextEncoding) -> None:
        _require(value, "encoding")
        self._encoding = TextEncoding(value)

    @property
    def has_encoding(self) -> bool:
        return self._encoding is not None

    @property
    def entries(self) -> CommentMap:
        return self._comments.copy()

    def load(self) -> bool:
        data = read_all_bytes(self.path)
        if data is None:
            self._comments.clear()
            self._encoding = None
            self._format = self._format.resolved()
            self.loaded = True
            logger.debug("No %s in %s", self.config.file_name, self.directory)
            return False

        encoding = sniff_encoding(data)
        text = decode_bytes(data, encoding, self.config.legacy_codec())
        comments = CommentMap()
        matches: List[LineMatch] = []
        for line in split_lines(text):
            match = classify_line(line)
            matches.append(match)
            if match.entry is not None:
                comments.set(match.entry.name, match.entry.comment)

        self._comments = comments
        self._encoding = encoding
        if not self._format.is_concrete:
            self._format = resolve_format(matches)
        self.loaded = True
        logger.debug(
            "Loaded %d comments from %s (%s, %s)",
            len(comments),
            self.path,
            self._format.value,
            encoding.value,
        )
        return True

    def render(self) -> str:
        fmt = self._format.resolved()
        lines = [render_line(name, comment, fmt) for name, comment in self._comments.items()]
        return self.config.line_terminator.join(lines)

    def save(self) -> Path:
        data = encode_text(self.render(), self.encoding, self.config.legacy_codec())
        write_all_bytes(self.path, data)
        logger.debug("Saved %d comments to %s", len(self._comments), self.path)
        return self.path

    def get_comment(self, name: str) -> Optional[str]:
        _require(name, "name")
        return self._comments.get(name)

    def set_comment(self, name: str, comment: str) -> None:
        _require_name(name)
        _require(comment, "comment")
        self._comments.set(name, comment)

    def remove_comment(self, name: str) -> bool:
        _require(name, "name")
        return self._comments.remove(name)

    def remove_orphaned_entries(self) -> List[str]:
        orphans = [name for name in self._comments.names() if not entry_exists(self.directory, name)]
        for name in orphans:
            self._comments.remove(name)
        if orphans:
            logger.debug("Dropped %d orphaned comments in %s", len(orphans), self.directory)
        return orphans

    def sort(self, key: Optional[Callable[[str], object]] = None, reverse: bool = False) -> None:
        self._comments.sort(key or collation_key, reverse=reverse)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._comments.items())

    def __contains__(self, name: object) -> bool:
        return name in self._comments

    def __iter__(self) -> Iterator[str]:
        return iter(self._comments)

    def __len__(self) -> int:
        return len(self._comments)
