from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Awaitable, Callable, Sequence

from .errors import InputError
from .surface import mime_subtype

if TYPE_CHECKING:
    from .session import GlyphCard

logger = logging.getLogger(__name__)

DOWNLOAD_DELAY_MS = 100

SaveFn = Callable[[str, bytes], None]
SleepFn = Callable[[float], Awaitable[None]]

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_+.-]")


def generate_file_name(codepoint: int, image_format: str) -> str:
    return f"glyph_U+{codepoint:04X}.{mime_subtype(image_format)}"


def sanitize_file_stem(stem: str) -> str:
    return _UNSAFE_CHARS.sub("", stem).strip(".")


def card_file_name(card: "GlyphCard", index: int, image_format: str) -> str:
    extension = mime_subtype(image_format)
    codepoint = card.codepoint
    if codepoint is None and len(card.character) == 1:
        codepoint = ord(card.character)

    stem = ""
    if codepoint is not None:
        stem = sanitize_file_stem(generate_file_name(codepoint, image_format).rsplit(".", 1)[0])
    if not stem:
        stem = f"glyph_{index:04d}"
    return f"{stem}.{extension}"


class DirectorySaver:
    """Save callable that writes each export into ``directory``."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)
        self.written: list[Path] = []

    def __call__(self, filename: str, data: bytes) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        output_path = self.directory / filename
        output_path.write_bytes(data)
        self.written.append(output_path)


def _emit(card: "GlyphCard", index: int, image_format: str, save: SaveFn, quality: int | None) -> str:
    filename = card_file_name(card, index, image_format)
    data = card.surface.encode(image_format, quality)
    save(filename, data)
    logger.debug("exported %s (%d bytes)", filename, len(data))
    return filename


def export_card(
    card: "GlyphCard",
    image_format: str,
    save: SaveFn,
    quality: int | None = None,
    index: int = 0,
) -> str:
    """Encode and save one card immediately; returns the file name used."""
    return _emit(card, index, image_format, save, quality)


async def export_all(
    cards: Sequence["GlyphCard"],
    image_format: str = "image/png",
    delay_ms: float = DOWNLOAD_DELAY_MS,
    *,
    save: SaveFn,
    quality: int | None = None,
    cancel: asyncio.Event | None = None,
    sleep: SleepFn = asyncio.sleep,
) -> int:
    """Export ``cards`` one at a time, waiting ``delay_ms`` between saves.

    Returns the number of cards saved. Setting ``cancel`` stops the batch
    before the next card.
    """
    if not cards:
        raise InputError("No glyphs to download. Please render previews first.")

    # check the whole batch up front so a bad card cannot stop it halfway
    blank = [card.label for card in cards if card.surface.is_blank]
    if blank:
        raise InputError(f"Cannot export empty canvases: {', '.join(blank)}")

    exported = 0
    for index, card in enumerate(cards):
        if index > 0 and delay_ms > 0:
            await sleep(delay_ms / 1000)
        if cancel is not None and cancel.is_set():
            logger.info("export cancelled after %d of %d glyphs", exported, len(cards))
            break
        _emit(card, index, image_format, save, quality)
        exported += 1

    logger.info("exported %d glyphs", exported)
    return exported
