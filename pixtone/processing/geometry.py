"""
Geometric operations: flips, quarter-turn rotations, resize and tile.

These replace the image buffers through RasterImage.replace(), since
most of them change the image dimensions.
"""

from numbers import Integral

import cv2
import numpy as np

from pixtone.core.base import ProgressReporter, resolve_progress
from pixtone.core.errors import DomainError
from pixtone.core.image import RasterImage
from pixtone.core.pixel import ALPHA_TRANSPARENT


def _transform(image: RasterImage, func) -> None:
    image.replace(func(image.rgb), func(image.alpha))


def _check_size(name: str, value) -> None:
    if not isinstance(value, Integral) or value <= 0:
        raise DomainError(name, value=value, requirement="Must be an integer greater than 0.")


def flip_horizontal(image: RasterImage, progress: ProgressReporter | None = None) -> None:
    """Mirror the image left to right."""
    progress = resolve_progress(progress)
    progress.start("Flipping horizontally")
    _transform(image, lambda arr: cv2.flip(arr, 1))
    progress.done()


def flip_vertical(image: RasterImage, progress: ProgressReporter | None = None) -> None:
    """Mirror the image top to bottom."""
    progress = resolve_progress(progress)
    progress.start("Flipping vertically")
    _transform(image, lambda arr: cv2.flip(arr, 0))
    progress.done()


def rotate_left(image: RasterImage, progress: ProgressReporter | None = None) -> None:
    """Rotate the image 90 degrees counter-clockwise."""
    progress = resolve_progress(progress)
    progress.start("Rotating left")
    _transform(image, lambda arr: cv2.rotate(arr, cv2.ROTATE_90_COUNTERCLOCKWISE))
    progress.done()


def rotate_right(image: RasterImage, progress: ProgressReporter | None = None) -> None:
    """Rotate the image 90 degrees clockwise."""
    progress = resolve_progress(progress)
    progress.start("Rotating right")
    _transform(image, lambda arr: cv2.rotate(arr, cv2.ROTATE_90_CLOCKWISE))
    progress.done()


def resize(
    image: RasterImage,
    width: int,
    height: int,
    interpolation: int = cv2.INTER_CUBIC,
    progress: ProgressReporter | None = None,
) -> None:
    """
    Resample the image to width x height.

    Args:
        image: Image to resize in place
        width: New width in pixels, > 0
        height: New height in pixels, > 0
        interpolation: OpenCV interpolation flag (default bicubic)

    Raises:
        DomainError: If width or height is not positive
    """
    _check_size("width", width)
    _check_size("height", height)

    progress = resolve_progress(progress)
    progress.start("Resizing")

    rgb = cv2.resize(image.rgb, (width, height), interpolation=interpolation)
    alpha = cv2.resize(image.alpha, (width, height), interpolation=interpolation)
    # Cubic overshoot can push alpha past the 7-bit range
    alpha = np.minimum(alpha, ALPHA_TRANSPARENT).astype(np.uint8)
    image.replace(rgb, alpha)
    progress.done()


def tile(
    image: RasterImage,
    width: int,
    height: int,
    progress: ProgressReporter | None = None,
) -> None:
    """
    Repeat the image from the top-left corner to fill width x height.

    Tiles on the right and bottom edges are cropped.

    Raises:
        DomainError: If the source image is empty, or the target is not a
            positive size at least as large as the image on both axes
    """
    _check_size("width", width)
    _check_size("height", height)

    tile_width = image.width
    tile_height = image.height
    if tile_width == 0 or tile_height == 0:
        raise DomainError(
            "source image size", value=(tile_width, tile_height),
            requirement="Cannot tile an empty image.",
        )

    if width < tile_width:
        raise DomainError(
            "new image width", value=width,
            requirement=f"Must be greater than or equal to the current width ({tile_width}).",
        )
    if height < tile_height:
        raise DomainError(
            "new image height", value=height,
            requirement=f"Must be greater than or equal to the current height ({tile_height}).",
        )

    progress = resolve_progress(progress)
    progress.start("Tiling image")

    if width == tile_width and height == tile_height:
        progress.skip()
        return

    reps_x = -(-width // tile_width)
    reps_y = -(-height // tile_height)
    rgb = np.tile(image.rgb, (reps_y, reps_x, 1))[:height, :width]
    alpha = np.tile(image.alpha, (reps_y, reps_x))[:height, :width]
    image.replace(rgb, alpha)
    progress.done()
