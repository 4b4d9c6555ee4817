"""Byte-order-mark detection and text codecs for descript.ion files.

Files without a BOM use a legacy single-byte codec: the ANSI code page on
Windows and latin-1 elsewhere, which keeps unknown bytes intact on save.
A BOM-less UTF-8 file read as latin-1 shows mojibake, e.g. a stray "\u00c2"
before every Double Commander line break; set
``DescriptionConfig.fallback_encoding`` (or the editor preference) to
"utf-8" or the right code page for such folders.
"""

from __future__ import annotations

import codecs
import sys
from enum import Enum
from typing import Optional


class TextEncoding(str, Enum):
    UTF8_BOM = "utf-8"
    UTF16_LE = "utf-16-le"
    UTF16_BE = "utf-16-be"
    LEGACY = "legacy"

    @property
    def bom(self) -> bytes:
        return _BOMS.get(self, b"")

    def codec(self, fallback: Optional[str] = None) -> str:
        if self is TextEncoding.LEGACY:
            return fallback or legacy_codec()
        return self.value


_BOMS = {
    TextEncoding.UTF8_BOM: codecs.BOM_UTF8,
    TextEncoding.UTF16_LE: codecs.BOM_UTF16_LE,
    TextEncoding.UTF16_BE: codecs.BOM_UTF16_BE,
}

DEFAULT_ENCODING = TextEncoding.UTF8_BOM


def legacy_codec() -> str:
    # "mbcs" is the active ANSI code page and only exists on Windows.
    if sys.platform == "win32":
        return "mbcs"
    return "latin-1"


def sniff_encoding(data: bytes) -> TextEncoding:
    head = bytes(data[:3])
    if len(head) < 2:
        return TextEncoding.LEGACY
    if head.startswith(codecs.BOM_UTF8):
        return TextEncoding.UTF8_BOM
    if head.startswith(codecs.BOM_UTF16_LE):
        return TextEncoding.UTF16_LE
    if head.startswith(codecs.BOM_UTF16_BE):
        return TextEncoding.UTF16_BE
    return TextEncoding.LEGACY


def decode_bytes(data: bytes, encoding: TextEncoding, fallback: Optional[str] = None) -> str:
    bom = encoding.bom
    if bom and data.startswith(bom):
        data = data[len(bom):]
    return data.decode(encoding.codec(fallback), errors="replace")


def encode_text(text: str, encoding: TextEncoding, fallback: Optional[str] = None) -> bytes:
    return encoding.bom + text.encode(encoding.codec(fallback), errors="replace")
