# color_utils.py

"""
Color conversion helpers for the firework renderer.

Colors travel through the simulation as plain (R, G, B) tuples of ints in
0-255. The renderer turns them into (R, G, B, A) tuples, also in 0-255, right
before handing them to the drawing backend.

Data Contract:
- Inputs: hue in degrees (wraps), saturation and lightness in percent
  (clamped to 0-100), alpha as a 0-1 fraction.
- Outputs: RGB / RGBA tuples of ints in 0-255.
- Invariants: No function in this module raises on malformed input. Bad
  colors degrade to constants.FALLBACK_COLOR, fully opaque.
"""

import colorsys
import logging
import math
import re

import constants

logger = logging.getLogger("fireworks")

_RGB_PATTERN = re.compile(r"rgb\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)")
_HSL_PATTERN = re.compile(r"hsl\(\s*(-?\d+(?:\.\d+)?)\s*,\s*(\d+(?:\.\d+)?)%\s*,\s*(\d+(?:\.\d+)?)%\s*\)")

# Malformed values already reported, so a bad color logs once, not every frame.
_reported_values = set()


def _to_byte(channel: float) -> int:
    """Rounds a 0-1 channel to 0-255, half away from zero."""
    return int(min(max(channel, 0.0), 1.0) * 255 + 0.5)


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> tuple:
    """
    Converts an HSL triple to an (R, G, B) tuple.

    Hue is in degrees and wraps around 360. Saturation and lightness are
    percentages and are clamped to [0, 100].
    """
    h = (hue % 360) / 360.0
    s = min(max(saturation, 0.0), 100.0) / 100.0
    l = min(max(lightness, 0.0), 100.0) / 100.0
    # colorsys orders the arguments hue, lightness, saturation.
    r, g, b = colorsys.hls_to_rgb(h, l, s)
    return (_to_byte(r), _to_byte(g), _to_byte(b))


def parse_color(value):
    """
    Normalizes a color into an (R, G, B) tuple, or returns None.

    Accepts a 3-sequence of finite numbers, an "rgb(r, g, b)" string or an
    "hsl(h, s%, l%)" string.
    """
    if isinstance(value, str):
        match = _RGB_PATTERN.fullmatch(value.strip())
        if match:
            return tuple(min(int(c), 255) for c in match.groups())
        match = _HSL_PATTERN.fullmatch(value.strip())
        if match:
            return hsl_to_rgb(*(float(c) for c in match.groups()))
        return None

    try:
        channels = tuple(value)
    except TypeError:
        return None
    if len(channels) != 3:
        return None
    try:
        channels = tuple(float(c) for c in channels)
    except (TypeError, ValueError):
        return None
    if not all(math.isfinite(c) for c in channels):
        return None
    return tuple(int(min(max(c, 0.0), 255.0) + 0.5) for c in channels)


def _report_once(kind: str, value):
    key = (kind, repr(value))
    if key not in _reported_values:
        _reported_values.add(key)
        logger.warning(f"Malformed {kind} {value!r}; falling back to an opaque color.")


def with_alpha(color, alpha: float) -> tuple:
    """
    Applies an alpha fraction to a color, returning (R, G, B, A).

    Alpha is clamped to [0, 1]. A malformed color becomes the fallback color
    and a non-numeric alpha becomes fully opaque, so a frame never fails on a
    bad color.
    """
    rgb = parse_color(color)
    if rgb is None:
        _report_once("color", color)
        return (*constants.FALLBACK_COLOR, 255)

    try:
        alpha = float(alpha)
    except (TypeError, ValueError):
        alpha = float("nan")
    if math.isnan(alpha):
        _report_once("alpha", alpha)
        return (*rgb, 255)

    return (*rgb, _to_byte(alpha))


def composite_over(rgba: tuple, background=constants.BLACK) -> tuple:
    """Source-over composites an (R, G, B, A) color onto an opaque background."""
    r, g, b, a = rgba
    weight = a / 255.0
    return tuple(
        int(src * weight + dst * (1.0 - weight) + 0.5)
        for src, dst in zip((r, g, b), background)
    )


def random_hue(rng) -> int:
    """Draws a whole-degree hue in [0, 360]."""
    return int(round(rng.random() * 360))


def burst_palette(hue: float) -> tuple:
    """
    Derives the (trail, halo, highlight) colors of one burst from a hue.

    The halo uses the hue itself, the trail is shifted by TRAIL_HUE_SHIFT and
    the highlight is a lighter version of the halo.
    """
    trail = hsl_to_rgb(hue + constants.TRAIL_HUE_SHIFT, constants.BURST_SATURATION, constants.BURST_LIGHTNESS)
    halo = hsl_to_rgb(hue, constants.BURST_SATURATION, constants.BURST_LIGHTNESS)
    highlight = hsl_to_rgb(hue, constants.BURST_SATURATION, constants.HIGHLIGHT_LIGHTNESS)
    return trail, halo, highlight
