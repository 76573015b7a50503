"""
Chainable image editor.

Example:
    >>> (ImageEditor.open("photo.png", verbose=True)
    ...     .hue(30)
    ...     .saturation(20)
    ...     .resize(800, 600)
    ...     .save_jpeg("photo.jpg", quality=90))
"""

from pathlib import Path

from pixtone.core.base import ConsoleProgress, ProgressReporter, resolve_progress
from pixtone.core.image import (
    RasterImage,
    load_image,
    output_format,
    save_image,
    save_jpeg,
    save_png,
)
from pixtone.processing import adjust, color, geometry


class ImageEditor:
    """
    Owns one RasterImage and applies operations to it in sequence.

    Every operation method returns the editor so calls can be chained.
    """

    def __init__(self, image: RasterImage, progress: ProgressReporter | None = None):
        self._image = image
        self.progress = resolve_progress(progress)

    @classmethod
    def open(cls, path: str | Path, verbose: bool = False) -> "ImageEditor":
        """Load an image file into a new editor."""
        progress = ConsoleProgress() if verbose else None
        return cls(load_image(path), progress)

    @classmethod
    def from_image(cls, image: RasterImage, verbose: bool = False) -> "ImageEditor":
        """Wrap an existing image."""
        progress = ConsoleProgress() if verbose else None
        return cls(image, progress)

    @property
    def image(self) -> RasterImage:
        return self._image

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    # -- HSL adjustments --------------------------------------------------

    def hue(self, degrees: int) -> "ImageEditor":
        adjust.hue_shift(self._image, degrees, self.progress)
        return self

    def saturation(self, amount: int) -> "ImageEditor":
        adjust.adjust_saturation(self._image, amount, self.progress)
        return self

    def decolorize(
        self,
        red: int = 40,
        yellow: int = 60,
        green: int = 40,
        cyan: int = 60,
        blue: int = 20,
        magenta: int = 80,
    ) -> "ImageEditor":
        adjust.decolorize(
            self._image, red, yellow, green, cyan, blue, magenta, progress=self.progress
        )
        return self

    def brightness_to_alpha(self) -> "ImageEditor":
        adjust.brightness_to_alpha(self._image, self.progress)
        return self

    # -- LUT filters ------------------------------------------------------

    def brightness(self, amount: int) -> "ImageEditor":
        color.brightness(self._image, amount, self.progress)
        return self

    def contrast(self, amount: int) -> "ImageEditor":
        color.contrast(self._image, amount, self.progress)
        return self

    def colorize(self, red: int, green: int, blue: int) -> "ImageEditor":
        color.colorize(self._image, red, green, blue, self.progress)
        return self

    # -- Geometry ---------------------------------------------------------

    def flip_horizontal(self) -> "ImageEditor":
        geometry.flip_horizontal(self._image, self.progress)
        return self

    def flip_vertical(self) -> "ImageEditor":
        geometry.flip_vertical(self._image, self.progress)
        return self

    def rotate_left(self) -> "ImageEditor":
        geometry.rotate_left(self._image, self.progress)
        return self

    def rotate_right(self) -> "ImageEditor":
        geometry.rotate_right(self._image, self.progress)
        return self

    def resize(self, width: int, height: int) -> "ImageEditor":
        geometry.resize(self._image, width, height, progress=self.progress)
        return self

    def tile(self, width: int, height: int) -> "ImageEditor":
        geometry.tile(self._image, width, height, self.progress)
        return self

    # -- Output -----------------------------------------------------------

    def save(self, path: str | Path, quality: int = 85) -> Path:
        """Save, choosing PNG or JPEG from the suffix."""
        fmt = output_format(Path(path).suffix, quality)
        label = "PNG" if fmt == "png" else "JPG"
        self.progress.start(f"Saving image ({label}) to: {path}")
        path = save_image(self._image, path, quality)
        self.progress.done()
        return path

    def save_png(self, path: str | Path) -> Path:
        self.progress.start(f"Saving image (PNG) to: {path}")
        path = save_png(self._image, path)
        self.progress.done()
        return path

    def save_jpeg(self, path: str | Path, quality: int = 85) -> Path:
        output_format(".jpg", quality)
        self.progress.start(f"Saving image (JPG) to: {path}")
        path = save_jpeg(self._image, path, quality)
        self.progress.done()
        return path
