"""
Pixel codec.

Packed pixels use the layout of true-color GD images: bits 24-30 hold a
7-bit alpha where 0 is opaque and 127 is fully transparent, followed by
8 bits each of red, green and blue.

HSL values are floats in [0, 1]. Hue is a fraction of a full turn. Note
that "lightness" here is the value of the brightest channel, so the model
is closer to HSV than to the textbook HSL double cone.
"""

import math
from numbers import Integral
from typing import NamedTuple

import numpy as np

from pixtone.core.errors import DomainError

ALPHA_OPAQUE = 0
ALPHA_TRANSPARENT = 127


class RGBA(NamedTuple):
    """8-bit color channels plus the inverted 7-bit alpha."""
    r: int
    g: int
    b: int
    a: int


class HSLA(NamedTuple):
    """Normalized hue/saturation/lightness plus the untouched inverted alpha."""
    h: float
    s: float
    l: float
    a: int


def pack(r: int, g: int, b: int, a: int = ALPHA_OPAQUE) -> int:
    """Pack 8-bit RGB and 7-bit inverted alpha into a single integer."""
    return ((a & 0x7F) << 24) | ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)


def unpack(pixel: int) -> RGBA:
    """Split a packed pixel into its RGBA components."""
    return RGBA(
        (pixel >> 16) & 0xFF,
        (pixel >> 8) & 0xFF,
        pixel & 0xFF,
        (pixel & 0x7F000000) >> 24,
    )


get_rgba = unpack


def _check_channel(name: str, value) -> None:
    if not isinstance(value, Integral) or value < 0 or value > 255:
        raise DomainError(name, 0, 255, value)


def _check_unit(name: str, value) -> None:
    if not 0.0 <= value <= 1.0:
        raise DomainError(name, 0.0, 1.0, value)


def rgb_to_hsl(r: int, g: int, b: int) -> tuple[float, float, float]:
    """
    Convert 8-bit RGB to normalized (hue, saturation, lightness).

    When two channels share the maximum, red wins over green and green
    wins over blue.

    Raises:
        DomainError: If a channel is not an integer in [0, 255]
    """
    _check_channel("red value", r)
    _check_channel("green value", g)
    _check_channel("blue value", b)

    rf = r / 255
    gf = g / 255
    bf = b / 255

    min_c = min(rf, gf, bf)
    max_c = max(rf, gf, bf)
    delta = max_c - min_c

    lightness = max_c

    if delta == 0:
        return 0.0, 0.0, lightness

    saturation = delta / max_c

    d_r = (((max_c - rf) / 6) + (delta / 2)) / delta
    d_g = (((max_c - gf) / 6) + (delta / 2)) / delta
    d_b = (((max_c - bf) / 6) + (delta / 2)) / delta

    if rf == max_c:
        hue = d_b - d_g
    elif gf == max_c:
        hue = (1 / 3) + d_r - d_b
    else:
        hue = (2 / 3) + d_g - d_r

    if hue < 0:
        hue += 1
    if hue > 1:
        hue -= 1

    return hue, saturation, lightness


def hsl_to_rgb(h: float, s: float, l: float) -> tuple[int, int, int]:
    """
    Convert normalized (hue, saturation, lightness) to 8-bit RGB.

    Channels are truncated toward zero, not rounded, so a round trip
    through rgb_to_hsl can lose one step per channel.

    Raises:
        DomainError: If a component lies outside [0.0, 1.0]
    """
    _check_unit("hue value", h)
    _check_unit("saturation value", s)
    _check_unit("lightness value", l)

    if s == 0:
        gray = int(l * 255)
        return gray, gray, gray

    h6 = h * 6
    # h == 1.0 lands in sector 5 with a full fraction, same color as h == 0
    sector = min(int(math.floor(h6)), 5)
    frac = h6 - sector
    c1 = l * (1 - s)
    c2 = l * (1 - s * frac)
    c3 = l * (1 - s * (1 - frac))

    rgb = (
        (l, c3, c1),
        (c2, l, c1),
        (c1, l, c3),
        (c1, c2, l),
        (c3, c1, l),
        (l, c1, c2),
    )[sector]

    return int(rgb[0] * 255), int(rgb[1] * 255), int(rgb[2] * 255)


def get_hsla(pixel: int) -> HSLA:
    """Decode a packed pixel straight to HSLA."""
    r, g, b, a = unpack(pixel)
    h, s, l = rgb_to_hsl(r, g, b)
    return HSLA(h, s, l, a)


def alpha_to_inverted(alpha: np.ndarray) -> np.ndarray:
    """
    Map conventional 8-bit alpha (255 = opaque) to inverted 7-bit alpha.

    Args:
        alpha: uint8 array of 0-255 alpha values

    Returns:
        uint8 array of 0-127 values, 0 = opaque
    """
    alpha = np.asarray(alpha, dtype=np.uint8)
    return (ALPHA_TRANSPARENT - (alpha >> 1)).astype(np.uint8)


def inverted_to_alpha(alpha: np.ndarray) -> np.ndarray:
    """
    Map inverted 7-bit alpha back to conventional 8-bit alpha.

    Args:
        alpha: uint8 array of 0-127 values, 0 = opaque

    Returns:
        uint8 array of 0-255 alpha values, 255 = opaque
    """
    a7 = np.asarray(alpha, dtype=np.int32)
    return (255 - ((a7 << 1) + (a7 >> 6))).astype(np.uint8)
