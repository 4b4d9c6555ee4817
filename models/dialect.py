"""Per-line dialect classification for descript.ion content.

A line ending in the EOT marker is Total Commander. A line holding a
NO-BREAK SPACE but no literal backslash-n is Double Commander. Anything else
is read with Total Commander rules, which is how single-line comments look in
both dialects.

The file-level dialect is taken from the last line that matched one of the
two explicit rules. Files with a mixed history can fool this; it is a
heuristic, not a classifier.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from models.description import DC_LINE_BREAK, TC_LINE_BREAK, TC_MARKER, CommentFormat, Entry
from models.parsers import parse_line


@dataclass(frozen=True)
class LineMatch:
    format: CommentFormat
    explicit: bool
    entry: Optional[Entry]


def strip_marker(line: str) -> str:
    if line.endswith(TC_MARKER):
        return line[: -len(TC_MARKER)]
    return line


def classify_line(line: str) -> LineMatch:
    if line.endswith(TC_MARKER):
        return LineMatch(
            CommentFormat.TOTAL_COMMANDER,
            True,
            parse_line(strip_marker(line), CommentFormat.TOTAL_COMMANDER),
        )
    if DC_LINE_BREAK in line and TC_LINE_BREAK not in line:
        return LineMatch(
            CommentFormat.DOUBLE_COMMANDER,
            True,
            parse_line(line, CommentFormat.DOUBLE_COMMANDER),
        )
    return LineMatch(
        CommentFormat.TOTAL_COMMANDER,
        False,
        parse_line(line, CommentFormat.TOTAL_COMMANDER),
    )


def resolve_format(matches: Iterable[LineMatch]) -> CommentFormat:
    resolved = CommentFormat.TOTAL_COMMANDER
    for match in matches:
        if match.explicit:
            resolved = match.format
    return resolved
