"""
Pixel walker.

Visits every coordinate of an image once, column by column: all y for
x = 0, then all y for x = 1, and so on.
"""

from pixtone.core.base import PixelCallback, PixelImage, ProgressReporter, resolve_progress


def progress_buckets(width: int) -> list[int]:
    """
    Return the progress percentages a pass over `width` columns reports.

    A bucket is reported the first time a column falls into it, so narrow
    images report fewer than ten.
    """
    buckets = []
    last = 0
    for x in range(width):
        bucket = (x * 10 // width + 1) * 10
        if bucket != last:
            buckets.append(bucket)
            last = bucket
    return buckets


def walk_pixels(
    image: PixelImage,
    callback: PixelCallback,
    progress: ProgressReporter | None = None,
) -> None:
    """
    Run `callback(x, y)` for every pixel and store the pixel it returns.

    Args:
        image: Image to traverse; modified in place
        callback: Receives the coordinate, returns the new packed pixel.
            It sees the pre-pass value at its own coordinate since each
            coordinate is written only once.
        progress: Optional reporter, notified once per 10% of columns
    """
    progress = resolve_progress(progress)
    width = image.width
    height = image.height

    last = 0
    for x in range(width):
        bucket = (x * 10 // width + 1) * 10
        if bucket != last:
            progress.update(bucket)
            last = bucket

        for y in range(height):
            image.set_pixel(x, y, callback(x, y))
