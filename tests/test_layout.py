from __future__ import annotations

import math

import pytest

from glyph_export.layout import BoundingBox
from glyph_export.layout import compute_layout

BOXES = [
    BoundingBox(0, -200, 600, 1400),
    BoundingBox(100, -700, 500, 0),
    BoundingBox(-50, -900, 1200, 250),
    BoundingBox(300, 100, 310, 900),
    BoundingBox(-400, -400, -100, -350),
]
CANVASES = [(256, 256, 20), (512, 128, 10), (100, 300, 0), (64, 64, 31)]


def test_reference_scenario():
    layout = compute_layout(BoundingBox(0, -200, 600, 1400), 256, 256, 20, 0.7)

    assert layout.available_width == 216
    assert layout.available_height == 216
    assert layout.font_scale == pytest.approx(0.0945)
    assert layout.scaled_width == pytest.approx(56.7)
    assert layout.scaled_height == pytest.approx(151.2)
    assert layout.origin_x == pytest.approx(99.65)
    assert layout.origin_y == pytest.approx(71.3)


@pytest.mark.parametrize("bbox", BOXES)
@pytest.mark.parametrize("canvas", CANVASES)
@pytest.mark.parametrize("user_scale", [0.25, 0.7, 1.0, 1.5])
def test_scale_fits_tighter_axis(bbox, canvas, user_scale):
    width, height, margin = canvas
    available_width = width - 2 * margin
    available_height = height - 2 * margin

    layout = compute_layout(bbox, width, height, margin, user_scale)

    expected = min(available_width / bbox.width, available_height / bbox.height) * user_scale
    assert layout.font_scale == pytest.approx(expected)
    assert layout == compute_layout(bbox, width, height, margin, user_scale)


@pytest.mark.parametrize("bbox", BOXES)
@pytest.mark.parametrize("canvas", CANVASES)
@pytest.mark.parametrize("user_scale", [0.5, 1.0])
def test_scaled_box_is_centered_in_margin_area(bbox, canvas, user_scale):
    width, height, margin = canvas
    layout = compute_layout(bbox, width, height, margin, user_scale)

    center_x = layout.origin_x + bbox.x1 * layout.font_scale + layout.scaled_width / 2
    center_y = layout.origin_y + bbox.y1 * layout.font_scale + layout.scaled_height / 2

    assert abs(center_x - (margin + layout.available_width / 2)) <= 0.5
    assert abs(center_y - (margin + layout.available_height / 2)) <= 0.5


def test_full_scale_touches_margin_on_tight_axis():
    bbox = BoundingBox(0, -200, 600, 1400)
    layout = compute_layout(bbox, 256, 256, 20, 1.0)

    top = layout.origin_y + bbox.y1 * layout.font_scale
    bottom = layout.origin_y + bbox.y2 * layout.font_scale
    assert top == pytest.approx(20)
    assert bottom == pytest.approx(236)


def test_zero_height_glyph_uses_width_only():
    bbox = BoundingBox(50, -300, 550, -300)
    layout = compute_layout(bbox, 256, 256, 20, 0.5)

    assert layout.font_scale == pytest.approx(216 / 500 * 0.5)
    assert layout.scaled_height == 0
    assert layout.origin_y == pytest.approx(20 + 108 + 300 * layout.font_scale)


def test_zero_width_glyph_uses_height_only():
    bbox = BoundingBox(10, -100, 10, 300)
    layout = compute_layout(bbox, 200, 100, 10, 1.0)

    assert layout.font_scale == pytest.approx(80 / 400)
    assert math.isfinite(layout.origin_x)


def test_empty_glyph_falls_back_to_user_scale():
    layout = compute_layout(BoundingBox(0, 0, 0, 0), 256, 256, 20, 0.7)

    assert layout.font_scale == 0.7
    assert layout.origin_x == pytest.approx(128)
    assert layout.origin_y == pytest.approx(128)


@pytest.mark.parametrize("width,height,margin", [(40, 256, 20), (256, 30, 20), (256, 256, 200), (0, 0, 0)])
def test_no_available_space_gives_zero_scale(width, height, margin):
    layout = compute_layout(BoundingBox(0, -200, 600, 1400), width, height, margin, 0.7)

    assert layout.font_scale == 0
    assert layout.is_empty
    assert layout.scaled_width == 0
    assert layout.scaled_height == 0


def test_scale_is_never_negative():
    layout = compute_layout(BoundingBox(-900, -900, -100, -100), 128, 64, 4, 1.0)
    assert layout.font_scale > 0


def test_bounding_box_belongs_to_the_layout_engine():
    from glyph_export import fonts

    assert BoundingBox.__module__ == "glyph_export.layout"
    assert fonts.BoundingBox is BoundingBox
