"""
HSL-based color adjustments.

Each adjustment validates its parameters, then makes one pass over the
image with the pixel walker, rewriting every pixel in place. The per-pixel
functions are exposed separately so they can be used or tested on a
single packed pixel.

Example:
    >>> image = load_image("photo.png")
    >>> hue_shift(image, 120)
    >>> adjust_saturation(image, 40)
    >>> decolorize(image, red=60, blue=10)
"""

import math
from dataclasses import dataclass, fields
from numbers import Integral
from typing import NamedTuple

from pixtone.core.base import PixelImage, ProgressReporter, resolve_progress
from pixtone.core.errors import check_range
from pixtone.core.pixel import (
    ALPHA_OPAQUE,
    ALPHA_TRANSPARENT,
    get_hsla,
    hsl_to_rgb,
    pack,
    unpack,
)
from pixtone.core.walker import walk_pixels

WEIGHT_MIN = -200
WEIGHT_MAX = 300


# =============================================================================
# Hue
# =============================================================================

def normalize_degrees(degrees: int) -> int:
    """Reduce any integer angle into [0, 360)."""
    if not isinstance(degrees, Integral):
        raise TypeError(f"Hue shift must be an integer number of degrees, got {degrees!r}")
    return int(degrees) % 360


def shift_hue_pixel(pixel: int, shift: float) -> int:
    """
    Rotate the hue of one packed pixel.

    Args:
        pixel: Packed pixel
        shift: Fraction of a turn to add, in [0, 1)
    """
    h, s, l, a = get_hsla(pixel)
    h += shift
    if h > 1:
        h -= 1
    r, g, b = hsl_to_rgb(h, s, l)
    return pack(r, g, b, a)


def hue_shift(
    image: PixelImage,
    degrees: int,
    progress: ProgressReporter | None = None,
) -> None:
    """
    Shift the hue of every pixel by `degrees`.

    A shift that reduces to 0 modulo 360 leaves the image untouched.

    Args:
        image: Image to modify in place
        degrees: Any integer angle; negative values rotate backwards
        progress: Optional progress reporter
    """
    reduced = normalize_degrees(degrees)
    progress = resolve_progress(progress)
    progress.start("Shifting hue")

    if reduced == 0:
        progress.skip()
        return

    shift = reduced / 360
    walk_pixels(image, lambda x, y: shift_hue_pixel(image.get_pixel(x, y), shift), progress)
    progress.done()


# =============================================================================
# Saturation
# =============================================================================

def saturation_scale(amount: int) -> float:
    """
    Map a saturation amount to its curve factor.

    Positive amounts give 0..5 for the saturating curve, negative amounts
    give -1..0 for the linear desaturating one.
    """
    check_range("saturation value", amount, -100, 100)
    if amount >= 0:
        return amount / 20
    return amount / 100


def saturate_pixel(pixel: int, scale: float) -> int:
    """
    Apply a saturation factor from saturation_scale() to one packed pixel.

    Saturation is pushed toward full in proportion to how saturated the
    pixel already is, so near-gray pixels barely move.
    """
    h, s, l, a = get_hsla(pixel)
    s *= 255

    if scale >= 0:
        gray_factor = s / 255
        interval = 255 - s
        s = s + scale * interval * gray_factor
    else:
        interval = s
        s = s + scale * interval

    s = max(0.0, min(s / 255, 1.0))
    r, g, b = hsl_to_rgb(h, s, l)
    return pack(r, g, b, a)


def adjust_saturation(
    image: PixelImage,
    amount: int,
    progress: ProgressReporter | None = None,
) -> None:
    """
    Saturate (amount > 0) or desaturate (amount < 0) the image.

    Args:
        image: Image to modify in place
        amount: -100 ~ 100
        progress: Optional progress reporter

    Raises:
        DomainError: If amount is outside [-100, 100]
    """
    scale = saturation_scale(amount)
    progress = resolve_progress(progress)
    progress.start("Adjusting image saturation")
    walk_pixels(image, lambda x, y: saturate_pixel(image.get_pixel(x, y), scale), progress)
    progress.done()


# =============================================================================
# Decolorize
# =============================================================================

@dataclass(frozen=True)
class DecolorizeWeights:
    """
    Per-color contributions to the gray level, in percent.

    Defaults match the usual "black and white" adjustment layer presets.
    """
    red: int = 40
    yellow: int = 60
    green: int = 40
    cyan: int = 60
    blue: int = 20
    magenta: int = 80

    def __post_init__(self):
        for f in fields(self):
            check_range(f"{f.name} weight", getattr(self, f.name), WEIGHT_MIN, WEIGHT_MAX)

    def as_fractions(self) -> "WeightFractions":
        """Return the weights divided by 100."""
        return WeightFractions(*(getattr(self, f.name) / 100 for f in fields(self)))


class WeightFractions(NamedTuple):
    red: float
    yellow: float
    green: float
    cyan: float
    blue: float
    magenta: float


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def decolorize_pixel(pixel: int, weights: WeightFractions) -> int:
    """
    Convert one packed pixel to gray using per-color weights.

    Args:
        pixel: Packed pixel
        weights: Fractions from DecolorizeWeights.as_fractions()
    """
    r, g, b, a = unpack(pixel)

    gray = min(r, g, b)
    r -= gray
    g -= gray
    b -= gray

    if r == 0:
        cyan = min(g, b)
        g -= cyan
        b -= cyan
        gray += cyan * weights.cyan + g * weights.green + b * weights.blue
    elif g == 0:
        magenta = min(r, b)
        r -= magenta
        b -= magenta
        gray += magenta * weights.magenta + r * weights.red + b * weights.blue
    else:
        yellow = min(r, g)
        r -= yellow
        g -= yellow
        gray += yellow * weights.yellow + r * weights.red + g * weights.green

    gray = _round_half_up(max(0, min(255, gray)))
    return pack(gray, gray, gray, a)


def decolorize(
    image: PixelImage,
    red: int = 40,
    yellow: int = 60,
    green: int = 40,
    cyan: int = 60,
    blue: int = 20,
    magenta: int = 80,
    progress: ProgressReporter | None = None,
) -> None:
    """
    Convert the image to grayscale with tunable per-color weights.

    Each weight is -200 ~ 300 and controls how bright areas of that color
    end up. Alpha is preserved.

    Raises:
        DomainError: If any weight is out of range
    """
    weights = DecolorizeWeights(red, yellow, green, cyan, blue, magenta).as_fractions()
    progress = resolve_progress(progress)
    progress.start("Converting image to grayscale")
    walk_pixels(image, lambda x, y: decolorize_pixel(image.get_pixel(x, y), weights), progress)
    progress.done()


# =============================================================================
# Brightness to alpha
# =============================================================================

def brightness_to_alpha_pixel(pixel: int) -> int:
    """
    Turn an opaque pixel into black with transparency from its brightness.

    Pixels that already carry any transparency are returned unchanged.
    """
    r, g, b, a = unpack(pixel)
    if a != ALPHA_OPAQUE:
        return pixel

    gray = (r + g + b) / 765 * 255
    a = int((gray / 255.0) * ALPHA_TRANSPARENT)
    return pack(0, 0, 0, a)


def brightness_to_alpha(
    image: PixelImage,
    progress: ProgressReporter | None = None,
) -> None:
    """
    Replace every opaque pixel with black whose transparency grows with
    the pixel's brightness; white becomes fully transparent.

    Color information of opaque pixels is lost.
    """
    progress = resolve_progress(progress)
    progress.start("Converting pixel brightness to alpha")
    walk_pixels(image, lambda x, y: brightness_to_alpha_pixel(image.get_pixel(x, y)), progress)
    progress.done()
