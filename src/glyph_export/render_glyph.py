from __future__ import annotations

from dataclasses import dataclass, fields, replace

from .fonts import GlyphOutline
from .layout import LayoutResult, compute_layout
from .surface import Surface

MARGIN_COLOR = "#1e90ff"
BBOX_COLOR = "#ff0000"
BASELINE_COLOR = "#00a000"
CENTERLINE_COLOR = "#ff00ff"
LABEL_COLOR = "#ff0000"
LABEL_LINE_HEIGHT = 12


@dataclass
class RenderSettings:
    canvas_width: int = 256
    canvas_height: int = 256
    margin: int = 20
    user_scale: float = 0.7
    stroke_color: str = "#000000"
    background_color: str = "#ffffff"
    transparent_background: bool = False
    debug_overlay: bool = False

    def copy(self) -> "RenderSettings":
        return replace(self)

    def updated(self, **changes) -> "RenderSettings":
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise TypeError(f"Unknown render settings: {', '.join(sorted(unknown))}")
        return replace(self, **changes)


def layout_for(outline: GlyphOutline, settings: RenderSettings) -> LayoutResult:
    return compute_layout(
        outline.bounding_box(),
        settings.canvas_width,
        settings.canvas_height,
        settings.margin,
        settings.user_scale,
    )


def render_glyph(
    outline: GlyphOutline,
    layout: LayoutResult,
    settings: RenderSettings,
    surface: Surface,
) -> None:
    surface.reset(settings.canvas_width, settings.canvas_height)

    if not settings.transparent_background:
        surface.fill(settings.background_color)

    if not layout.is_empty:
        path_data = outline.render(layout.origin_x, layout.origin_y, layout.font_scale)
        surface.fill_path(path_data, settings.stroke_color)

    if settings.debug_overlay:
        draw_debug_overlay(layout, settings, surface)


def draw_debug_overlay(layout: LayoutResult, settings: RenderSettings, surface: Surface) -> None:
    """Draw layout guides and numbers on top of an already rendered glyph."""
    margin = layout.margin
    surface.stroke_rect(
        (
            margin,
            margin,
            margin + layout.available_width,
            margin + layout.available_height,
        ),
        MARGIN_COLOR,
    )

    bbox = layout.bbox
    scale = layout.font_scale
    left = layout.origin_x + bbox.x1 * scale
    top = layout.origin_y + bbox.y1 * scale
    surface.stroke_rect((left, top, left + layout.scaled_width, top + layout.scaled_height), BBOX_COLOR)

    surface.draw_line((0, layout.origin_y), (settings.canvas_width, layout.origin_y), BASELINE_COLOR)
    surface.draw_line((layout.origin_x, 0), (layout.origin_x, settings.canvas_height), CENTERLINE_COLOR)

    labels = [
        f"origin ({layout.origin_x:.1f}, {layout.origin_y:.1f})",
        f"bbox ({bbox.x1:.0f}, {bbox.y1:.0f}, {bbox.x2:.0f}, {bbox.y2:.0f})",
        f"scale {scale:.4f}",
    ]
    for line_no, text in enumerate(labels):
        surface.draw_text((2, 2 + line_no * LABEL_LINE_HEIGHT), text, LABEL_COLOR)
