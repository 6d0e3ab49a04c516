"""Render single font glyphs into fixed-size images and export them."""

from __future__ import annotations

from .errors import GlyphExportError, GlyphNotFoundError, InputError, ParseError
from .export import export_all, export_card, generate_file_name
from .fonts import Font, GlyphOutline, load_font, parse_font
from .layout import BoundingBox, LayoutResult, compute_layout
from .render_glyph import RenderSettings, draw_debug_overlay, render_glyph
from .session import GlyphCard, GlyphSession
from .surface import Surface

__all__ = [
    "BoundingBox",
    "Font",
    "GlyphCard",
    "GlyphExportError",
    "GlyphNotFoundError",
    "GlyphOutline",
    "GlyphSession",
    "InputError",
    "LayoutResult",
    "ParseError",
    "RenderSettings",
    "Surface",
    "compute_layout",
    "draw_debug_overlay",
    "export_all",
    "export_card",
    "generate_file_name",
    "load_font",
    "parse_font",
    "render_glyph",
]
