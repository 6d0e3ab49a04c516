from __future__ import annotations

import os
from typing import Mapping

from .render_glyph import RenderSettings

ENV_PREFIX = "GLYPH_EXPORT_"
DEFAULT_FORMAT = "image/png"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env(environ: Mapping[str, str], name: str) -> str | None:
    value = environ.get(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    value = _env(environ, name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {value!r}") from None


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    value = _env(environ, name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number, got {value!r}") from None


def _env_bool(environ: Mapping[str, str], name: str, default: bool) -> bool:
    value = _env(environ, name)
    if value is None:
        return default
    return value.lower() in _TRUE_VALUES


def settings_from_env(environ: Mapping[str, str] | None = None) -> RenderSettings:
    """Build render defaults from ``GLYPH_EXPORT_*`` environment variables."""
    environ = os.environ if environ is None else environ
    base = RenderSettings()
    return RenderSettings(
        canvas_width=_env_int(environ, "WIDTH", base.canvas_width),
        canvas_height=_env_int(environ, "HEIGHT", base.canvas_height),
        margin=_env_int(environ, "MARGIN", base.margin),
        user_scale=_env_float(environ, "SCALE", base.user_scale),
        stroke_color=_env(environ, "COLOR") or base.stroke_color,
        background_color=_env(environ, "BG_COLOR") or base.background_color,
        transparent_background=_env_bool(environ, "TRANSPARENT", base.transparent_background),
        debug_overlay=_env_bool(environ, "DEBUG_OVERLAY", base.debug_overlay),
    )


def format_from_env(environ: Mapping[str, str] | None = None) -> str:
    environ = os.environ if environ is None else environ
    return _env(environ, "FORMAT") or DEFAULT_FORMAT


def quality_from_env(environ: Mapping[str, str] | None = None) -> int | None:
    environ = os.environ if environ is None else environ
    if _env(environ, "QUALITY") is None:
        return None
    return _env_int(environ, "QUALITY", 0)


def delay_from_env(environ: Mapping[str, str] | None = None, default: float = 100) -> float:
    environ = os.environ if environ is None else environ
    return _env_float(environ, "DELAY_MS", default)
