"""
Image handle and load/save collaborator.

RasterImage keeps the color channels and the inverted 7-bit alpha as two
separate numpy buffers, which is the layout the pixel algorithms address
through get_pixel/set_pixel and the layout OpenCV operations can work on
directly.

File I/O goes through OpenCV:
    image = load_image("photo.png")
    hue_shift(image, 120)
    save_image(image, "photo.jpg", quality=90)
"""

from dataclasses import dataclass
from pathlib import Path

import cv2
import numpy as np

from pixtone.core.errors import check_range
from pixtone.core.pixel import (
    ALPHA_OPAQUE,
    ALPHA_TRANSPARENT,
    alpha_to_inverted,
    inverted_to_alpha,
    pack,
    unpack,
)

PNG_EXTENSIONS = {".png"}
JPEG_EXTENSIONS = {".jpg", ".jpeg"}


@dataclass(eq=False)
class RasterImage:
    """
    Mutable raster addressed by packed pixels.

    rgb is (H, W, 3) uint8 in RGB order; alpha is (H, W) uint8 holding
    0 (opaque) to 127 (fully transparent).
    """
    rgb: np.ndarray
    alpha: np.ndarray
    path: Path | None = None

    def __post_init__(self):
        self._validate(self.rgb, self.alpha)

    @staticmethod
    def _validate(rgb: np.ndarray, alpha: np.ndarray) -> None:
        if rgb.ndim != 3 or rgb.shape[2] != 3:
            raise ValueError(f"rgb buffer must be HxWx3, got shape {rgb.shape}")
        if alpha.shape != rgb.shape[:2]:
            raise ValueError(
                f"alpha buffer shape {alpha.shape} does not match rgb {rgb.shape[:2]}"
            )
        if rgb.dtype != np.uint8 or alpha.dtype != np.uint8:
            raise ValueError("rgb and alpha buffers must be uint8")

    @classmethod
    def new(
        cls,
        width: int,
        height: int,
        color: tuple[int, int, int] = (0, 0, 0),
        alpha: int = ALPHA_OPAQUE,
    ) -> "RasterImage":
        """Create a solid-color image."""
        rgb = np.empty((height, width, 3), dtype=np.uint8)
        rgb[:, :] = color
        return cls(rgb, np.full((height, width), alpha, dtype=np.uint8))

    @classmethod
    def from_rgba(cls, rgba: np.ndarray, path: str | Path | None = None) -> "RasterImage":
        """
        Create an image from a conventional RGBA array (255 = opaque).

        Args:
            rgba: (H, W, 4) or (H, W, 3) uint8 array in RGB(A) order
            path: Optional source path for bookkeeping
        """
        rgba = np.asarray(rgba, dtype=np.uint8)
        rgb = np.ascontiguousarray(rgba[:, :, :3])
        if rgba.shape[2] == 4:
            alpha = alpha_to_inverted(rgba[:, :, 3])
        else:
            alpha = np.zeros(rgba.shape[:2], dtype=np.uint8)
        return cls(rgb, alpha, Path(path) if path is not None else None)

    def to_rgba(self) -> np.ndarray:
        """Return a conventional (H, W, 4) RGBA array (255 = opaque)."""
        return np.dstack([self.rgb, inverted_to_alpha(self.alpha)])

    @property
    def width(self) -> int:
        return self.rgb.shape[1]

    @property
    def height(self) -> int:
        return self.rgb.shape[0]

    @property
    def shape(self) -> tuple[int, int]:
        """(height, width), numpy order."""
        return self.rgb.shape[:2]

    def get_pixel(self, x: int, y: int) -> int:
        r, g, b = self.rgb[y, x]
        return pack(int(r), int(g), int(b), int(self.alpha[y, x]))

    def set_pixel(self, x: int, y: int, pixel: int) -> None:
        r, g, b, a = unpack(pixel)
        self.rgb[y, x] = (r, g, b)
        self.alpha[y, x] = a

    def replace(self, rgb: np.ndarray, alpha: np.ndarray) -> None:
        """Swap in new buffers, e.g. after a resize or rotation."""
        rgb = np.ascontiguousarray(rgb)
        alpha = np.ascontiguousarray(alpha)
        self._validate(rgb, alpha)
        self.rgb = rgb
        self.alpha = alpha

    def copy(self) -> "RasterImage":
        return RasterImage(self.rgb.copy(), self.alpha.copy(), self.path)

    def has_transparency(self) -> bool:
        return bool(np.any(self.alpha != ALPHA_OPAQUE))


def _from_decoded(arr: np.ndarray | None, source: str, path: Path | None = None) -> RasterImage:
    if arr is None:
        raise ValueError(f"Unable to decode image: {source}")

    if arr.dtype == np.uint16:
        arr = (arr >> 8).astype(np.uint8)
    elif arr.dtype != np.uint8:
        arr = np.clip(arr, 0, 255).astype(np.uint8)

    if arr.ndim == 2:
        rgba = cv2.cvtColor(arr, cv2.COLOR_GRAY2RGBA)
    elif arr.shape[2] == 4:
        rgba = cv2.cvtColor(arr, cv2.COLOR_BGRA2RGBA)
    else:
        rgba = cv2.cvtColor(arr, cv2.COLOR_BGR2RGBA)

    return RasterImage.from_rgba(rgba, path)


def decode_image(data: bytes) -> RasterImage:
    """
    Decode PNG or JPEG bytes into a RasterImage.

    Raises:
        ValueError: If the bytes cannot be decoded
    """
    buf = np.frombuffer(data, dtype=np.uint8)
    arr = cv2.imdecode(buf, cv2.IMREAD_UNCHANGED) if buf.size else None
    return _from_decoded(arr, "<bytes>")


def load_image(path: str | Path) -> RasterImage:
    """
    Load a PNG or JPEG file.

    Args:
        path: Path to the image file

    Returns:
        RasterImage with path set

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file cannot be decoded
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")

    arr = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    return _from_decoded(arr, str(path), path)


def flatten_on_white(image: RasterImage) -> np.ndarray:
    """
    Composite the image over an opaque white background.

    Returns:
        (H, W, 3) uint8 RGB array
    """
    opacity = (ALPHA_TRANSPARENT - image.alpha.astype(np.float32)) / ALPHA_TRANSPARENT
    opacity_3ch = np.dstack([opacity, opacity, opacity])
    rgb = image.rgb.astype(np.float32)

    # Over operation: foreground * alpha + background * (1 - alpha)
    result = rgb * opacity_3ch + 255.0 * (1 - opacity_3ch)
    return np.clip(result, 0, 255).astype(np.uint8)


def _format_for(ext: str) -> str:
    ext = ext.lower()
    if not ext.startswith("."):
        ext = "." + ext
    if ext in PNG_EXTENSIONS:
        return "png"
    if ext in JPEG_EXTENSIONS:
        return "jpeg"
    raise ValueError(
        f"Unsupported image format: {ext}. "
        f"Available: {sorted(PNG_EXTENSIONS | JPEG_EXTENSIONS)}"
    )


def output_format(ext: str, quality: int = 85) -> str:
    """
    Validate output options for a file suffix.

    Returns:
        "png" or "jpeg"

    Raises:
        DomainError: If quality is out of range for JPEG
        ValueError: If the format is unsupported
    """
    fmt = _format_for(ext)
    if fmt == "jpeg":
        check_range("JPEG quality level", quality, 0, 100)
    return fmt


def encode_image(image: RasterImage, ext: str = ".png", quality: int = 85) -> bytes:
    """
    Encode an image as PNG or JPEG bytes.

    JPEG has no alpha channel, so the image is flattened onto white first.

    Args:
        image: Image to encode
        ext: ".png", ".jpg" or ".jpeg"
        quality: JPEG quality, 0-100 (ignored for PNG)

    Raises:
        DomainError: If quality is out of range
        ValueError: If the format is unsupported or encoding fails
    """
    fmt = output_format(ext, quality)

    if fmt == "jpeg":
        bgr = cv2.cvtColor(flatten_on_white(image), cv2.COLOR_RGB2BGR)
        ok, buf = cv2.imencode(".jpg", bgr, [cv2.IMWRITE_JPEG_QUALITY, int(quality)])
    else:
        bgra = cv2.cvtColor(image.to_rgba(), cv2.COLOR_RGBA2BGRA)
        ok, buf = cv2.imencode(".png", bgra)

    if not ok:
        raise ValueError(f"Failed to encode image as {fmt}")
    return buf.tobytes()


def save_image(image: RasterImage, path: str | Path, quality: int = 85) -> Path:
    """
    Save an image, picking the format from the file suffix.

    Returns:
        The path written
    """
    path = Path(path)
    data = encode_image(image, path.suffix, quality)
    path.write_bytes(data)
    return path


def save_png(image: RasterImage, path: str | Path) -> Path:
    """Save as PNG, keeping the alpha channel."""
    path = Path(path)
    path.write_bytes(encode_image(image, ".png"))
    return path


def save_jpeg(image: RasterImage, path: str | Path, quality: int = 85) -> Path:
    """Save as JPEG, flattened onto a white background."""
    path = Path(path)
    path.write_bytes(encode_image(image, ".jpg", quality))
    return path
