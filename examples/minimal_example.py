#!/usr/bin/env python3
"""
Minimal Example: pixtone API Usage
==================================

Shows the essential API calls without extra boilerplate.
This is the "quick reference" version.
"""

from pixtone import ConsoleProgress, ImageEditor, load_image, save_image
from pixtone.core.config import Recipe, StepConfig
from pixtone.core.pixel import get_hsla, pack
from pixtone.core.walker import walk_pixels
from pixtone.pipeline.runner import run_recipe
from pixtone.processing import adjust_saturation, decolorize, hue_shift


input_image = "photo.png"


# =============================================================================
# STEP 1: CHAINED EDITS
# Equivalent to: pixtone adjust photo.png photo_warm.jpg --hue 20 \
#                --saturation 30 --contrast 15 --resize 800x600 --quality 90
# =============================================================================

(ImageEditor.open(input_image, verbose=True)
    .hue(20)
    .saturation(30)
    .contrast(15)
    .resize(800, 600)
    .save_jpeg("photo_warm.jpg", quality=90))


# =============================================================================
# STEP 2: FUNCTIONS ON A RASTER
# Every operation modifies the image in place.
# =============================================================================

progress = ConsoleProgress()
image = load_image(input_image)

hue_shift(image, 180, progress)
adjust_saturation(image, -40, progress)
save_image(image, "photo_inverted_hue.png")

mono = load_image(input_image)
# Reds and yellows darker, blues lighter
decolorize(mono, red=-20, yellow=0, green=40, cyan=60, blue=120, magenta=80, progress=progress)
save_image(mono, "photo_mono.png")


# =============================================================================
# STEP 3: CUSTOM PER-PIXEL PASS
# Zero the red channel of every pixel brighter than half lightness.
# =============================================================================

image = load_image(input_image)


def drop_red(x: int, y: int) -> int:
    pixel = image.get_pixel(x, y)
    h, s, l, a = get_hsla(pixel)
    if l < 0.5:
        return pixel
    return pack(0, (pixel >> 8) & 0xFF, pixel & 0xFF, a)


progress.start("Dropping red from highlights")
walk_pixels(image, drop_red, progress)
progress.done()
save_image(image, "photo_no_red.png")


# =============================================================================
# STEP 4: RECIPES
# Equivalent to: pixtone recipe -c recipe.json photo.png photo_recipe.png
# =============================================================================

recipe = Recipe(steps=[
    StepConfig("decolorize"),
    StepConfig("colorize", {"red": 40, "green": 20, "blue": 0}),
    StepConfig("tile", {"width": 1600, "height": 1200}),
])
recipe.global_settings.verbose = True
result = run_recipe(recipe, input_image, "photo_recipe.png")

print("Recipe complete:", result.output_path, f"({result.width}x{result.height})")
