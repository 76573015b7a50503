"""
Lookup-table color filters.

Brightness, contrast and colorize act on each channel independently, so
they are computed once into a 256-entry table and applied to the RGB
buffer with cv2.LUT(). Alpha is never touched.
"""

import cv2
import numpy as np

from pixtone.core.base import ProgressReporter, resolve_progress
from pixtone.core.errors import check_range
from pixtone.core.image import RasterImage


def create_brightness_lut(offset: int) -> np.ndarray:
    """
    Create a brightness lookup table.

    Args:
        offset: Value added to every channel, -255 ~ 255

    Returns:
        3-channel LUT for use with cv2.LUT()
    """
    identity = np.arange(256, dtype=np.int32)
    identity = np.clip(identity + offset, 0, 255).astype(np.uint8)
    return np.dstack((identity, identity, identity))


def create_contrast_lut(amount: int) -> np.ndarray:
    """
    Create a contrast lookup table.

    Values are scaled away from (or toward) mid-gray by
    ((100 + amount) / 100) squared.

    Args:
        amount: -100 (flat gray) ~ 100 (4x contrast)

    Returns:
        3-channel LUT for use with cv2.LUT()
    """
    factor = ((100.0 + amount) / 100.0) ** 2
    fidentity = np.arange(256, dtype=np.float64) / 255.0
    fidentity = ((fidentity - 0.5) * factor + 0.5) * 255.0
    identity = np.clip(fidentity, 0, 255).astype(np.uint8)
    return np.dstack((identity, identity, identity))


def create_colorize_lut(red: int, green: int, blue: int) -> np.ndarray:
    """
    Create a colorize lookup table adding a fixed amount per channel.

    Returns:
        3-channel LUT in RGB channel order
    """
    identity = np.arange(256, dtype=np.int32)
    channels = [np.clip(identity + v, 0, 255).astype(np.uint8) for v in (red, green, blue)]
    return np.dstack(channels)


def apply_lut(image: RasterImage, lut: np.ndarray) -> None:
    """Apply a LUT to the image's RGB buffer in place."""
    image.rgb[...] = cv2.LUT(image.rgb, lut)


def brightness(
    image: RasterImage,
    amount: int,
    progress: ProgressReporter | None = None,
) -> None:
    """
    Brighten (amount > 0) or darken (amount < 0) the image.

    Args:
        amount: -100 ~ 100, as a percentage of full scale

    Raises:
        DomainError: If amount is outside [-100, 100]
    """
    check_range("brightness value", amount, -100, 100)
    progress = resolve_progress(progress)
    progress.start("Altering brightness")

    if amount == 0:
        progress.skip()
        return

    apply_lut(image, create_brightness_lut(int(255 * amount / 100)))
    progress.done()


def contrast(
    image: RasterImage,
    amount: int,
    progress: ProgressReporter | None = None,
) -> None:
    """
    Increase (amount > 0) or reduce (amount < 0) the contrast.

    Raises:
        DomainError: If amount is outside [-100, 100]
    """
    check_range("contrast value", amount, -100, 100)
    progress = resolve_progress(progress)
    progress.start("Altering contrast")

    if amount == 0:
        progress.skip()
        return

    apply_lut(image, create_contrast_lut(amount))
    progress.done()


def colorize(
    image: RasterImage,
    red: int,
    green: int,
    blue: int,
    progress: ProgressReporter | None = None,
) -> None:
    """
    Tint the image by adding a fixed amount to each channel.

    Raises:
        DomainError: If a component is outside [0, 255]
    """
    check_range("red value", red, 0, 255)
    check_range("green value", green, 0, 255)
    check_range("blue value", blue, 0, 255)
    progress = resolve_progress(progress)
    progress.start("Colorizing")

    if red == 0 and green == 0 and blue == 0:
        progress.skip()
        return

    apply_lut(image, create_colorize_lut(red, green, blue))
    progress.done()
