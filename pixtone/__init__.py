"""
pixtone - Per-pixel image color and transform toolkit
======================================================

A small Python toolkit for HSL-based color adjustments on raster images,
plus the usual LUT filters and geometric operations around them.

Main modules:
- pixtone.core: Pixel codec, image handle, pixel walker, config
- pixtone.processing: Hue, saturation, decolorize, brightness-to-alpha,
  brightness/contrast/colorize, flips, rotations, resize, tile
- pixtone.pipeline: Operation registry, recipes, chainable editor

Quick start:
    >>> from pixtone import load_image, save_image, hue_shift
    >>> image = load_image("input.png")
    >>> hue_shift(image, 120)
    >>> save_image(image, "output.jpg", quality=90)
"""

__version__ = "0.1.0"

# Convenience imports
from pixtone.core.errors import DomainError
from pixtone.core.image import RasterImage, load_image, save_image
from pixtone.core.base import ConsoleProgress, NullProgress
from pixtone.processing import (
    hue_shift,
    adjust_saturation,
    decolorize,
    brightness_to_alpha,
)
from pixtone.pipeline import ImageEditor, run_recipe

__all__ = [
    "__version__",
    "DomainError",
    "RasterImage",
    "load_image",
    "save_image",
    "ConsoleProgress",
    "NullProgress",
    "hue_shift",
    "adjust_saturation",
    "decolorize",
    "brightness_to_alpha",
    "ImageEditor",
    "run_recipe",
]
