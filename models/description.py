from __future__ import annotations

import locale
import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Tuple


DESCRIPTION_FILENAME = "descript.ion"

# Total Commander appends EOT + 0xC2 to lines whose comment spans several lines.
TC_MARKER = "\u0004\u00c2"
TC_LINE_BREAK = "\\n"
# Double Commander joins comment lines with NO-BREAK SPACE.
DC_LINE_BREAK = "\u00a0"


class CommentFormat(str, Enum):
    TOTAL_COMMANDER = "total_commander"
    DOUBLE_COMMANDER = "double_commander"
    AUTO_DETECT = "auto_detect"

    @property
    def is_concrete(self) -> bool:
        return self is not CommentFormat.AUTO_DETECT

    def resolved(self) -> "CommentFormat":
        """Return the dialect used for writing; auto-detect falls back to Total Commander."""
        if self is CommentFormat.AUTO_DETECT:
            return CommentFormat.TOTAL_COMMANDER
        return self


@dataclass
class Entry:
    name: str
    comment: str = ""

    @property
    def key(self) -> str:
        return name_key(self.name)


def name_key(name: str) -> str:
    return name.lower()


def collation_key(name: str) -> Tuple[str, str, str]:
    """Sort key close to a culture-aware comparer.

    Accents and case only break ties between otherwise equal names, and
    lowercase sorts first among those. Works the same under the "C" locale.
    """
    base = "".join(c for c in unicodedata.normalize("NFD", name) if not unicodedata.combining(c))
    return (
        locale.strxfrm(base.casefold()),
        locale.strxfrm(name.casefold()),
        name.swapcase(),
    )


class CommentMap:
    """Ordered name -> comment mapping with case-insensitive keys.

    Setting an existing name keeps its position but adopts the casing of the
    new name. Iteration yields names in insertion order.
    """

    def __init__(self, entries: Optional[List[Entry]] = None) -> None:
        self._entries: Dict[str, Entry] = {}
        for entry in entries or []:
            self.set(entry.name, entry.comment)

    def get(self, name: str) -> Optional[str]:
        entry = self._entries.get(name_key(name))
        return entry.comment if entry else None

    def set(self, name: str, comment: str) -> None:
        key = name_key(name)
        entry = self._entries.get(key)
        if entry is None:
            self._entries[key] = Entry(name, comment)
            return
        entry.name = name
        entry.comment = comment

    def remove(self, name: str) -> bool:
        return self._entries.pop(name_key(name), None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def entries(self) -> List[Entry]:
        return [Entry(entry.name, entry.comment) for entry in self._entries.values()]

    def items(self) -> List[Tuple[str, str]]:
        return [(entry.name, entry.comment) for entry in self._entries.values()]

    def names(self) -> List[str]:
        return [entry.name for entry in self._entries.values()]

    def sort(self, key: Callable[[str], object], reverse: bool = False) -> None:
        ordered = sorted(self._entries.values(), key=lambda entry: key(entry.name), reverse=reverse)
        self._entries = {entry.key: entry for entry in ordered}

    def copy(self) -> "CommentMap":
        return CommentMap(self.entries())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name_key(name) in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommentMap):
            return NotImplemented
        mine = {key: entry.comment for key, entry in self._entries.items()}
        theirs = {key: entry.comment for key, entry in other._entries.items()}
        return mine == theirs

    def __repr__(self) -> str:
        return f"CommentMap({self.items()!r})"
