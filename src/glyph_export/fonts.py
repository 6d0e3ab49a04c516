from __future__ import annotations

import asyncio
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

from fontTools.pens.svgPathPen import SVGPathPen
from fontTools.pens.transformPen import TransformPen
from fontTools.ttLib import TTFont
from svgpathtools import parse_path

from .errors import GlyphNotFoundError, ParseError
from .layout import BoundingBox

logger = logging.getLogger(__name__)

# Font space is Y-up with the baseline at 0; outlines are drawn Y-down.
FLIP_Y = (1, 0, 0, -1, 0, 0)

FIRST_PRINTABLE = 32

EMPTY_BOX = BoundingBox(0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class GlyphOutline:
    """A glyph path in drawing space: font units, Y down, origin on the baseline."""

    character: str
    glyph_name: str
    units_per_em: int
    advance_width: float
    path_data: str

    @property
    def is_empty(self) -> bool:
        return not self.path_data.strip()

    def bounding_box(self) -> BoundingBox:
        if self.is_empty:
            return EMPTY_BOX
        try:
            xmin, xmax, ymin, ymax = parse_path(self.path_data).bbox()
        except ValueError:
            return EMPTY_BOX
        return BoundingBox(float(xmin), float(ymin), float(xmax), float(ymax))

    def render(self, x: float, y: float, scale: float) -> str:
        """Return the path scaled by ``scale`` with its origin moved to ``(x, y)``."""
        if self.is_empty:
            return ""
        path = parse_path(self.path_data)
        if len(path) == 0:
            return ""
        return path.scaled(scale).translated(complex(x, y)).d()


class Font:
    def __init__(self, tt_font: TTFont) -> None:
        self._tt_font = tt_font
        self._cmap: Dict[int, str] = tt_font.getBestCmap() or {}
        self._glyph_set = tt_font.getGlyphSet()
        self._glyph_order: List[str] = tt_font.getGlyphOrder()
        self.units_per_em: int = int(tt_font["head"].unitsPerEm)

    @property
    def full_name(self) -> str:
        name = self._tt_font["name"].getDebugName(4) if "name" in self._tt_font else None
        return name or "Unknown"

    @property
    def glyph_count(self) -> int:
        return len(self._glyph_order)

    def enumerate_characters(self) -> List[str]:
        return [
            chr(cp)
            for cp in sorted(self._cmap)
            if cp >= FIRST_PRINTABLE and self._glyph_name_for(chr(cp)) is not None
        ]

    def _glyph_name_for(self, character: str) -> str | None:
        glyph_name = self._cmap.get(ord(character))
        if glyph_name is None:
            return None
        if glyph_name == ".notdef" or glyph_name == self._glyph_order[0]:
            return None
        return glyph_name

    def get_outline_for_char(self, character: str, size: float | None = None) -> GlyphOutline | None:
        """Look up the outline for ``character``.

        ``size`` is a nominal em size; when given the path is scaled from font
        units to that size. Returns None for unmapped characters and for
        characters mapped to the missing-glyph placeholder.
        """
        if len(character) != 1:
            raise ValueError(f"Expected a single character, got {character!r}")
        glyph_name = self._glyph_name_for(character)
        if glyph_name is None:
            return None

        glyph = self._glyph_set[glyph_name]
        pen = SVGPathPen(self._glyph_set)
        glyph.draw(TransformPen(pen, FLIP_Y))
        path_data = pen.getCommands()
        advance_width = float(glyph.width)

        if size is not None and path_data:
            factor = size / self.units_per_em
            path_data = parse_path(path_data).scaled(factor).d()
            advance_width *= factor

        return GlyphOutline(
            character=character,
            glyph_name=glyph_name,
            units_per_em=self.units_per_em,
            advance_width=advance_width,
            path_data=path_data,
        )

    def outline_for_char(self, character: str, size: float | None = None) -> GlyphOutline:
        outline = self.get_outline_for_char(character, size)
        if outline is None:
            raise GlyphNotFoundError(character)
        return outline


def parse_font(data: bytes) -> Font:
    try:
        tt_font = TTFont(io.BytesIO(data))
        # TTFont loads tables lazily; touch the ones we need so bad data fails here.
        font = Font(tt_font)
    except Exception as exc:
        raise ParseError(f"Error parsing font: {exc}") from exc
    logger.debug("parsed %s: %d glyphs, %d upem", font.full_name, font.glyph_count, font.units_per_em)
    return font


async def load_font(path: Path | str) -> Font:
    font_path = Path(path)
    try:
        data = await asyncio.to_thread(font_path.read_bytes)
    except OSError as exc:
        raise ParseError(f"Error reading file {font_path}: {exc}") from exc
    return parse_font(data)
