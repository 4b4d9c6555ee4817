"""Defaults for reading and writing descript.ion files."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from models.description import DESCRIPTION_FILENAME, CommentFormat
from models.encoding import legacy_codec


@dataclass
class DescriptionConfig:
    file_name: str = DESCRIPTION_FILENAME
    # Dialect requested when a store is created without an explicit one.
    default_format: CommentFormat = CommentFormat.AUTO_DETECT
    # Codec for files without a byte-order mark; None picks the platform ANSI codec.
    fallback_encoding: Optional[str] = None
    line_terminator: str = field(default_factory=lambda: os.linesep)

    def legacy_codec(self) -> str:
        return self.fallback_encoding or legacy_codec()
