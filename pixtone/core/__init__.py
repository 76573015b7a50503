"""
Core module - Pixel codec, image handle, walker, and shared abstractions.
"""

from pixtone.core.errors import DomainError
from pixtone.core.base import (
    PixelImage,
    ProgressReporter,
    NullProgress,
    ConsoleProgress,
)
from pixtone.core.pixel import (
    RGBA,
    HSLA,
    pack,
    unpack,
    get_rgba,
    get_hsla,
    rgb_to_hsl,
    hsl_to_rgb,
)
from pixtone.core.image import (
    RasterImage,
    load_image,
    decode_image,
    save_image,
    encode_image,
    output_format,
    save_png,
    save_jpeg,
    flatten_on_white,
)
from pixtone.core.walker import walk_pixels
from pixtone.core.config import Recipe, StepConfig, GlobalSettings, load_recipe, save_recipe

__all__ = [
    "DomainError",
    "PixelImage",
    "ProgressReporter",
    "NullProgress",
    "ConsoleProgress",
    "RGBA",
    "HSLA",
    "pack",
    "unpack",
    "get_rgba",
    "get_hsla",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "RasterImage",
    "load_image",
    "decode_image",
    "save_image",
    "encode_image",
    "output_format",
    "save_png",
    "save_jpeg",
    "flatten_on_white",
    "walk_pixels",
    "Recipe",
    "StepConfig",
    "GlobalSettings",
    "load_recipe",
    "save_recipe",
]
