"""Command line entry point: render a font's glyphs and export them as images."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Sequence

from dotenv import load_dotenv
from PIL import ImageColor

from .config import delay_from_env, format_from_env, quality_from_env, settings_from_env
from .errors import GlyphExportError
from .export import DirectorySaver, card_file_name
from .session import GlyphSession


def _valid_color(parser: argparse.ArgumentParser, option: str, value: str) -> None:
    try:
        ImageColor.getrgb(value)
    except ValueError:
        parser.error(f"{option}: unknown color {value!r}")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render font glyphs into fixed-size images.")
    try:
        defaults = settings_from_env()
        default_format = format_from_env()
        default_quality = quality_from_env()
        default_delay = delay_from_env()
    except ValueError as exc:
        parser.error(str(exc))

    parser.add_argument("font", help="Path to a TTF/OTF/WOFF font file.")
    parser.add_argument(
        "--output-dir",
        required=True,
        help="Directory to write glyph images and manifest.json.",
    )
    parser.add_argument(
        "--chars",
        default=None,
        help="Characters to render (default: every character the font maps).",
    )
    parser.add_argument("--width", type=int, default=defaults.canvas_width, help="Canvas width in pixels.")
    parser.add_argument("--height", type=int, default=defaults.canvas_height, help="Canvas height in pixels.")
    parser.add_argument("--margin", type=int, default=defaults.margin, help="Margin in pixels on every side.")
    parser.add_argument("--scale", type=float, default=defaults.user_scale, help="Scale applied after fitting.")
    parser.add_argument("--color", default=defaults.stroke_color, help="Glyph fill color.")
    parser.add_argument("--bg-color", default=defaults.background_color, help="Background color.")
    parser.add_argument(
        "--transparent",
        action=argparse.BooleanOptionalAction,
        default=defaults.transparent_background,
        help="Leave the background transparent.",
    )
    parser.add_argument(
        "--debug-overlay",
        action=argparse.BooleanOptionalAction,
        default=defaults.debug_overlay,
        help="Draw margin, bounding box, baseline and layout numbers.",
    )
    parser.add_argument("--format", default=default_format, help="Image MIME type, e.g. image/png.")
    parser.add_argument("--quality", type=int, default=default_quality, help="JPEG/WebP quality (1-100).")
    parser.add_argument(
        "--delay-ms",
        type=float,
        default=default_delay,
        help="Pause between successive exports.",
    )
    parser.add_argument("--list", action="store_true", help="Print the font's characters and exit.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    args = parser.parse_args(argv)

    if args.width <= 0 or args.height <= 0:
        parser.error("width and height must be positive")
    if args.margin < 0:
        parser.error("margin must not be negative")
    if args.scale < 0:
        parser.error("scale must not be negative")
    if args.delay_ms < 0:
        parser.error("delay must not be negative")
    _valid_color(parser, "--color", args.color)
    _valid_color(parser, "--bg-color", args.bg_color)
    return args


def build_manifest(session: GlyphSession, image_format: str, output_dir: Path) -> List[Dict[str, Any]]:
    manifest: List[Dict[str, Any]] = []
    for index, card in enumerate(session.cards):
        layout = card.layout
        bbox = card.outline.bounding_box()
        manifest.append(
            {
                "path": str(output_dir / card_file_name(card, index, image_format)),
                "character": card.character,
                "codepoint": card.label,
                "glyph_name": card.outline.glyph_name,
                "canvas_width_px": card.settings.canvas_width,
                "canvas_height_px": card.settings.canvas_height,
                "x1": bbox.x1,
                "y1": bbox.y1,
                "x2": bbox.x2,
                "y2": bbox.y2,
                "font_scale": layout.font_scale if layout else 0.0,
                "origin_x": layout.origin_x if layout else 0.0,
                "origin_y": layout.origin_y if layout else 0.0,
            }
        )
    return manifest


async def run(args: argparse.Namespace) -> int:
    session = GlyphSession()
    font = await session.load(args.font)
    print(f"Font loaded: {font.full_name} ({len(session.characters)} characters)")

    if args.list:
        print(session.characters)
        return 0

    defaults = session.defaults.updated(
        canvas_width=args.width,
        canvas_height=args.height,
        margin=args.margin,
        user_scale=args.scale,
        stroke_color=args.color,
        background_color=args.bg_color,
        transparent_background=args.transparent,
        debug_overlay=args.debug_overlay,
    )
    cards = session.render_all(args.chars, defaults)

    output_dir = Path(args.output_dir).expanduser().resolve()
    saver = DirectorySaver(output_dir)

    def save(filename: str, data: bytes) -> None:
        saver(filename, data)
        index = len(saver.written)
        card = cards[index - 1]
        print(
            f"[{index:02d}] {card.character!r} {card.label} "
            f"-> {saver.written[-1]} "
            f"{card.settings.canvas_width}x{card.settings.canvas_height}px"
        )

    count = await session.export_all(
        args.format,
        save,
        delay_ms=args.delay_ms,
        quality=args.quality,
    )

    manifest_path = output_dir / "manifest.json"
    manifest_path.write_text(json.dumps(build_manifest(session, args.format, output_dir), indent=2))
    print(f"Downloaded {count} glyphs successfully! Wrote metadata to {manifest_path}")
    return count


def main(argv: Sequence[str] | None = None) -> None:
    load_dotenv()
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(levelname)s - %(message)s")

    try:
        asyncio.run(run(args))
    except GlyphExportError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
