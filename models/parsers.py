from __future__ import annotations

import re
from typing import List, Optional, Tuple

from models.description import (
    DC_LINE_BREAK,
    TC_LINE_BREAK,
    TC_MARKER,
    CommentFormat,
    Entry,
)


_LINE_SPLIT = re.compile(r"[\r\n]+")


def split_lines(text: str) -> List[str]:
    """Split on CR/LF only; other Unicode line separators stay inside a line."""
    return [line for line in _LINE_SPLIT.split(text) if line]


def split_name(line: str) -> Tuple[str, str]:
    name: List[str] = []
    in_quotes = False
    i = 0
    length = len(line)
    while i < length:
        ch = line[i]
        if ch == '"':
            if in_quotes and i + 1 < length and line[i + 1] == '"':
                name.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
        elif ch == " " and not in_quotes:
            return "".join(name), line[i + 1:]
        else:
            name.append(ch)
        i += 1
    return "".join(name), ""


def decode_comment(raw: str, fmt: CommentFormat) -> str:
    if fmt is CommentFormat.DOUBLE_COMMANDER:
        return raw.replace(DC_LINE_BREAK, "\n")
    return raw.replace(TC_LINE_BREAK, "\n")


def encode_comment(comment: str, fmt: CommentFormat) -> str:
    comment = comment.replace("\r\n", "\n").replace("\r", "\n")
    if fmt is CommentFormat.DOUBLE_COMMANDER:
        return comment.replace("\n", DC_LINE_BREAK)
    text = comment.replace("\n", TC_LINE_BREAK)
    if "\n" in comment:
        text += TC_MARKER
    return text


def quote_name(name: str) -> str:
    if " " in name or '"' in name:
        return '"' + name.replace('"', '""') + '"'
    return name


def parse_line(line: str, fmt: CommentFormat) -> Optional[Entry]:
    """Parse one physical line with the comment rule of ``fmt``.

    Returns None for blank lines and for lines whose name comes out empty.
    A line without an unquoted space is a name with an empty comment.
    """
    if not line or line.isspace():
        return None
    name, raw_comment = split_name(line)
    if not name:
        return None
    return Entry(name, decode_comment(raw_comment, fmt.resolved()))


def render_line(name: str, comment: str, fmt: CommentFormat) -> str:
    if not fmt.is_concrete:
        raise ValueError("render_line needs a concrete comment format")
    return f"{quote_name(name)} {encode_comment(comment, fmt)}"
