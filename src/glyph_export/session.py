from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List

from . import export
from .errors import InputError
from .fonts import Font, GlyphOutline, load_font, parse_font
from .layout import LayoutResult
from .render_glyph import RenderSettings, layout_for, render_glyph
from .surface import Surface

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class GlyphCard:
    character: str
    codepoint: int | None
    outline: GlyphOutline
    settings: RenderSettings
    surface: Surface = field(default_factory=Surface)
    layout: LayoutResult | None = None

    @property
    def label(self) -> str:
        if self.codepoint is None:
            return "U+????"
        return f"U+{self.codepoint:04X}"

    def render(self) -> LayoutResult:
        self.layout = layout_for(self.outline, self.settings)
        render_glyph(self.outline, self.layout, self.settings, self.surface)
        return self.layout


class GlyphSession:
    """Loaded font, the character filter and the rendered cards."""

    def __init__(self, defaults: RenderSettings | None = None) -> None:
        self.font: Font | None = None
        self.characters: str = ""
        self.defaults = defaults.copy() if defaults is not None else RenderSettings()
        self.cards: List[GlyphCard] = []

    def _use_font(self, font: Font) -> Font:
        self.font = font
        self.characters = "".join(font.enumerate_characters())
        logger.info("font loaded: %s, %d characters", font.full_name, len(self.characters))
        return font

    async def load(self, path: Path | str) -> Font:
        # a failed load leaves the previous font and filter in place
        return self._use_font(await load_font(path))

    def load_bytes(self, data: bytes) -> Font:
        return self._use_font(parse_font(data))

    def render_all(
        self,
        characters: Iterable[str] | None = None,
        defaults: RenderSettings | None = None,
    ) -> List[GlyphCard]:
        if self.font is None:
            raise InputError("Please load a font first.")

        text = "".join(characters) if characters is not None else self.characters
        if not text:
            raise InputError("No glyphs to render. Please enter characters in the filter box.")

        if defaults is not None:
            self.defaults = defaults.copy()

        self.cards = []
        cards: List[GlyphCard] = []
        for character in text:
            outline = self.font.get_outline_for_char(character)
            if outline is None:
                logger.debug("skipping U+%04X: no glyph", ord(character))
                continue
            card = GlyphCard(
                character=character,
                codepoint=ord(character),
                outline=outline,
                settings=self.defaults.copy(),
            )
            card.render()
            cards.append(card)

        if not cards:
            raise InputError("No valid glyphs found to render.")
        self.cards = cards
        return cards

    def update_all_settings(self, defaults: RenderSettings) -> None:
        self.defaults = defaults.copy()
        for card in self.cards:
            card.settings = self.defaults.copy()
            card.render()

    def update_card(self, card: GlyphCard, **changes) -> LayoutResult:
        card.settings = card.settings.updated(**changes)
        return card.render()

    def export_card(
        self,
        card: GlyphCard,
        image_format: str,
        save: export.SaveFn,
        quality: int | None = None,
    ) -> str:
        index = next((i for i, c in enumerate(self.cards) if c is card), None)
        if index is None:
            raise InputError("Glyph card is not part of the current render")
        return export.export_card(card, image_format, save, quality, index=index)

    async def export_all(
        self,
        image_format: str,
        save: export.SaveFn,
        delay_ms: float = export.DOWNLOAD_DELAY_MS,
        quality: int | None = None,
        cancel: asyncio.Event | None = None,
        sleep: export.SleepFn = asyncio.sleep,
    ) -> int:
        if not self.cards:
            raise InputError("No glyphs to download. Please render previews first.")
        return await export.export_all(
            list(self.cards),
            image_format,
            delay_ms,
            save=save,
            quality=quality,
            cancel=cancel,
            sleep=sleep,
        )
