from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class BoundingBox:
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def width(self) -> float:
        return self.x2 - self.x1

    @property
    def height(self) -> float:
        return self.y2 - self.y1


@dataclass(frozen=True)
class LayoutResult:
    font_scale: float
    origin_x: float
    origin_y: float
    scaled_width: float
    scaled_height: float
    margin: float
    available_width: float
    available_height: float
    bbox: BoundingBox

    @property
    def is_empty(self) -> bool:
        return self.font_scale == 0


def _axis_ratio(available: float, extent: float) -> float:
    if extent == 0:
        return math.inf
    return available / extent


def compute_layout(
    bbox: BoundingBox,
    canvas_width: float,
    canvas_height: float,
    margin: float,
    user_scale: float,
) -> LayoutResult:
    """Fit ``bbox`` into the margin-inset canvas, centered, aspect preserved.

    A canvas whose margins leave no room gives ``font_scale == 0``. A zero
    extent on one axis leaves the other axis to decide the scale; a glyph with
    no extent at all is drawn at ``user_scale``.
    """
    available_width = canvas_width - margin * 2
    available_height = canvas_height - margin * 2
    glyph_width = bbox.width
    glyph_height = bbox.height

    if available_width <= 0 or available_height <= 0:
        font_scale = 0.0
    else:
        fit = min(
            _axis_ratio(available_width, glyph_width),
            _axis_ratio(available_height, glyph_height),
        )
        if math.isinf(fit):
            font_scale = float(user_scale)
        else:
            font_scale = fit * user_scale

    scaled_width = glyph_width * font_scale
    scaled_height = glyph_height * font_scale
    origin_x = margin + (available_width - scaled_width) / 2 - bbox.x1 * font_scale
    origin_y = margin + (available_height - scaled_height) / 2 - bbox.y1 * font_scale

    return LayoutResult(
        font_scale=font_scale,
        origin_x=origin_x,
        origin_y=origin_y,
        scaled_width=scaled_width,
        scaled_height=scaled_height,
        margin=margin,
        available_width=available_width,
        available_height=available_height,
        bbox=bbox,
    )
