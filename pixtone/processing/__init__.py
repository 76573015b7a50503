"""
Processing module - Color adjustments and geometric operations.

This module provides:
- HSL adjustments: hue shift, saturation, decolorize, brightness to alpha
- LUT filters: brightness, contrast, colorize
- Geometry: flips, quarter-turn rotations, resize, tile
"""

from pixtone.processing.adjust import (
    hue_shift,
    adjust_saturation,
    decolorize,
    brightness_to_alpha,
    shift_hue_pixel,
    saturate_pixel,
    decolorize_pixel,
    brightness_to_alpha_pixel,
    normalize_degrees,
    saturation_scale,
    DecolorizeWeights,
)
from pixtone.processing.color import (
    brightness,
    contrast,
    colorize,
    create_brightness_lut,
    create_contrast_lut,
    create_colorize_lut,
    apply_lut,
)
from pixtone.processing.geometry import (
    flip_horizontal,
    flip_vertical,
    rotate_left,
    rotate_right,
    resize,
    tile,
)

__all__ = [
    # HSL adjustments
    "hue_shift",
    "adjust_saturation",
    "decolorize",
    "brightness_to_alpha",
    "shift_hue_pixel",
    "saturate_pixel",
    "decolorize_pixel",
    "brightness_to_alpha_pixel",
    "normalize_degrees",
    "saturation_scale",
    "DecolorizeWeights",
    # LUT filters
    "brightness",
    "contrast",
    "colorize",
    "create_brightness_lut",
    "create_contrast_lut",
    "create_colorize_lut",
    "apply_lut",
    # Geometry
    "flip_horizontal",
    "flip_vertical",
    "rotate_left",
    "rotate_right",
    "resize",
    "tile",
]
