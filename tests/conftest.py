from __future__ import annotations

import io
from pathlib import Path
from typing import Dict, Tuple

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from glyph_export.fonts import Font, parse_font

UPM = 1000
ASCENT = 800
DESCENT = -200

# drawing-space boxes (Y down) of the test glyphs
A_BOX = (100.0, -700.0, 500.0, 0.0)
G_BOX = (100.0, -500.0, 500.0, 200.0)
DASH_BOX = (50.0, -300.0, 550.0, -300.0)


def _rect(x0: int, y0: int, x1: int, y1: int):
    pen = TTGlyphPen(None)
    pen.moveTo((x0, y0))
    pen.lineTo((x0, y1))
    pen.lineTo((x1, y1))
    pen.lineTo((x1, y0))
    pen.closePath()
    return pen.glyph()


def _hairline(x0: int, x1: int, y: int):
    pen = TTGlyphPen(None)
    pen.moveTo((x0, y))
    pen.lineTo((x1, y))
    pen.closePath()
    return pen.glyph()


def build_font_bytes() -> bytes:
    glyph_order = [".notdef", "space", "A", "g", "dash"]
    fb = FontBuilder(UPM, isTTF=True)
    fb.setupGlyphOrder(glyph_order)

    glyf = {
        ".notdef": _rect(50, DESCENT + 50, 450, ASCENT - 50),
        "space": TTGlyphPen(None).glyph(),
        "A": _rect(100, 0, 500, 700),
        "g": _rect(100, -200, 500, 500),
        "dash": _hairline(50, 550, 300),
    }
    hmtx: Dict[str, Tuple[int, int]] = {
        ".notdef": (500, 50),
        "space": (250, 0),
        "A": (600, 100),
        "g": (600, 100),
        "dash": (600, 50),
    }
    fb.setupGlyf(glyf)
    fb.setupHorizontalMetrics(hmtx)
    fb.setupCharacterMap(
        {
            0x09: "space",
            0x20: "space",
            0x41: "A",
            0x67: "g",
            0x2D: "dash",
            0x25A1: ".notdef",
        }
    )
    fb.setupHorizontalHeader(ascent=ASCENT, descent=DESCENT)
    fb.setupOS2(
        sTypoAscender=ASCENT,
        sTypoDescender=DESCENT,
        usWinAscent=ASCENT,
        usWinDescent=-DESCENT,
    )
    fb.setupNameTable(
        {
            "familyName": "Glyph Test",
            "styleName": "Regular",
            "uniqueFontIdentifier": "GlyphTest-Regular",
            "fullName": "Glyph Test Regular",
            "psName": "GlyphTest-Regular",
            "version": "Version 1.000",
        }
    )
    fb.setupPost()

    buffer = io.BytesIO()
    fb.save(buffer)
    return buffer.getvalue()


@pytest.fixture(scope="session")
def font_bytes() -> bytes:
    return build_font_bytes()


@pytest.fixture
def font(font_bytes: bytes) -> Font:
    return parse_font(font_bytes)


@pytest.fixture
def font_path(tmp_path: Path, font_bytes: bytes) -> Path:
    path = tmp_path / "GlyphTest-Regular.ttf"
    path.write_bytes(font_bytes)
    return path
