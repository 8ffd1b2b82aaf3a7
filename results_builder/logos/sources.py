"""
Rasterizable logo sources.

Raster images are decoded with Pillow; SVG images are rasterized with
cairosvg at their intrinsic size first. Both are reduced to a single pixel
with Pillow's bilinear (triangle) filter, which averages the whole image
when downsampling.
"""

import io
from pathlib import Path

import cairosvg
from PIL import Image, UnidentifiedImageError
from typing_extensions import override

from ..exceptions import ImageDecodeError
from ..interfaces import RGB, LogoSource
from ..logging_config import get_logger

logger = get_logger("logo_sources")

VECTOR_EXTENSIONS = frozenset({".svg", ".svgz"})


def average_pixel(image: Image.Image, path: Path) -> RGB:
    """
    Reduce an image to one pixel and return its RGB channels.

    Resizing RGBA works on premultiplied alpha, so fully transparent
    regions do not pull the average toward their hidden color.
    """
    if image.width == 0 or image.height == 0:
        raise ImageDecodeError(path, "image has zero area")

    rgba = image.convert("RGBA")
    pixel = rgba.resize((1, 1), Image.Resampling.BILINEAR).getpixel((0, 0))
    red, green, blue, _alpha = pixel
    logger.debug(f"Average pixel of {path}: ({red}, {green}, {blue})")
    return (red, green, blue)


class RasterLogoSource(LogoSource):
    """Logo stored in a bitmap format Pillow can decode (PNG, JPEG, GIF, ...)."""

    def __init__(self, path: Path):
        self.path: Path = Path(path)

    @override
    def rasterize_to_single_average_pixel(self) -> RGB:
        try:
            with Image.open(self.path) as image:
                image.load()
                return average_pixel(image, self.path)
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise ImageDecodeError(self.path, str(e)) from e


class VectorLogoSource(LogoSource):
    """SVG logo, rasterized at its intrinsic dimensions."""

    def __init__(self, path: Path):
        self.path: Path = Path(path)

    def rasterize(self) -> bytes:
        """Render the SVG to PNG bytes at its original size."""
        try:
            return cairosvg.svg2png(url=str(self.path))
        except Exception as e:
            # cairosvg surfaces XML, CSS and cairo failures as unrelated types
            raise ImageDecodeError(self.path, f"{type(e).__name__}: {e}") from e

    @override
    def rasterize_to_single_average_pixel(self) -> RGB:
        png = self.rasterize()
        try:
            with Image.open(io.BytesIO(png)) as image:
                image.load()
                return average_pixel(image, self.path)
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise ImageDecodeError(self.path, str(e)) from e


def open_logo_source(path: Path) -> LogoSource:
    """Pick the vector or raster source for a logo by file extension."""
    path = Path(path)
    if path.suffix.lower() in VECTOR_EXTENSIONS:
        return VectorLogoSource(path)
    return RasterLogoSource(path)
