from __future__ import annotations

import io
import os
from typing import Dict, Sequence, Tuple

os.environ.setdefault("DYLD_LIBRARY_PATH", "/opt/homebrew/lib")
os.environ.setdefault("LD_LIBRARY_PATH", "/opt/homebrew/lib")

from cairosvg import svg2png
from PIL import Image, ImageColor, ImageDraw, ImageFont

from .errors import InputError

Box = Tuple[float, float, float, float]
Point = Tuple[float, float]

# MIME subtype -> Pillow format name
IMAGE_FORMATS: Dict[str, str] = {
    "png": "PNG",
    "jpeg": "JPEG",
    "jpg": "JPEG",
    "webp": "WEBP",
    "bmp": "BMP",
    "gif": "GIF",
    "tiff": "TIFF",
}
DEFAULT_SUBTYPE = "png"

# formats without an alpha channel get flattened onto white
_OPAQUE_FORMATS = {"JPEG", "BMP"}
_QUALITY_FORMATS = {"JPEG", "WEBP"}


def mime_subtype(image_format: str) -> str:
    """``image/jpeg`` -> ``jpeg``; anything unrecognized falls back to png."""
    _, sep, subtype = image_format.strip().lower().partition("/")
    if not sep or subtype not in IMAGE_FORMATS:
        return DEFAULT_SUBTYPE
    return subtype


def _ordered(box: Sequence[float]) -> Box:
    x1, y1, x2, y2 = box
    return (min(x1, x2), min(y1, y2), max(x1, x2), max(y1, y2))


class Surface:
    """An RGBA raster target backed by a Pillow image."""

    def __init__(self, width: int = 0, height: int = 0) -> None:
        self.image = Image.new("RGBA", (width, height), (0, 0, 0, 0))

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def is_blank(self) -> bool:
        return self.width == 0 or self.height == 0

    def reset(self, width: int, height: int) -> None:
        self.image = Image.new("RGBA", (max(int(width), 0), max(int(height), 0)), (0, 0, 0, 0))

    def fill_rect(self, box: Sequence[float], color: str) -> None:
        if self.is_blank:
            return
        ImageDraw.Draw(self.image).rectangle(_ordered(box), fill=color)

    def fill(self, color: str) -> None:
        self.fill_rect((0, 0, self.width - 1, self.height - 1), color)

    def stroke_rect(self, box: Sequence[float], color: str, width: int = 1) -> None:
        if self.is_blank:
            return
        ImageDraw.Draw(self.image).rectangle(_ordered(box), outline=color, width=width)

    def draw_line(self, start: Point, end: Point, color: str, width: int = 1) -> None:
        if self.is_blank:
            return
        ImageDraw.Draw(self.image).line([start, end], fill=color, width=width)

    def draw_text(self, xy: Point, text: str, color: str) -> None:
        if self.is_blank:
            return
        ImageDraw.Draw(self.image).text(xy, text, fill=color, font=ImageFont.load_default())

    def fill_path(self, path_data: str, color: str) -> None:
        """Fill an SVG path given in pixel coordinates of this surface."""
        if self.is_blank or not path_data:
            return
        # only Pillow-parsed rgb() values go into the markup
        red, green, blue, *alpha = ImageColor.getrgb(color)
        opacity = alpha[0] / 255 if alpha else 1.0
        width, height = self.width, self.height
        svg = (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
            f'viewBox="0 0 {width} {height}">'
            f'<path d="{path_data}" fill="rgb({red},{green},{blue})" fill-opacity="{opacity:.4f}" fill-rule="nonzero" />'
            "</svg>"
        )
        png_bytes = svg2png(
            bytestring=svg.encode("utf-8"),
            output_width=width,
            output_height=height,
        )
        layer = Image.open(io.BytesIO(png_bytes)).convert("RGBA")
        if layer.size != self.image.size:
            layer = layer.resize(self.image.size)
        self.image.alpha_composite(layer)

    def encode(self, image_format: str = "image/png", quality: int | None = None) -> bytes:
        if self.is_blank:
            raise InputError(f"Cannot export an empty {self.width}x{self.height} canvas")
        pil_format = IMAGE_FORMATS[mime_subtype(image_format)]
        image = self.image
        if pil_format in _OPAQUE_FORMATS:
            flat = Image.new("RGB", image.size, (255, 255, 255))
            flat.paste(image, mask=image.getchannel("A"))
            image = flat

        params = {}
        if quality is not None and pil_format in _QUALITY_FORMATS:
            params["quality"] = int(quality)

        buffer = io.BytesIO()
        image.save(buffer, format=pil_format, **params)
        return buffer.getvalue()
