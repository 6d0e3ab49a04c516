"""Exceptions raised by glyph loading, rendering and export."""

from __future__ import annotations


class GlyphExportError(Exception):
    """Base class for errors reported to the user."""


class InputError(GlyphExportError):
    """The requested operation has nothing to work on."""


class ParseError(GlyphExportError):
    """The font file could not be read or parsed."""


class GlyphNotFoundError(GlyphExportError):
    def __init__(self, character: str) -> None:
        super().__init__(f"No glyph for {character!r} (U+{ord(character):04X})")
        self.character = character
