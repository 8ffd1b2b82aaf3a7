"""
Theme color derivation.

A logo's average color is darkened one lightness point at a time until white
text on top of it reaches the WCAG AAA contrast ratio for normal text.
"""

import colorsys
from pathlib import Path

import numpy as np

from ..interfaces import RGB
from ..logging_config import get_logger
from ..models import ThemeColor
from .sources import open_logo_source

logger = get_logger("theme_colors")

WHITE: RGB = (255, 255, 255)
MINIMUM_CONTRAST = 7.0
DARKEN_STEP = 0.01  # one percentage point of HSL lightness
DEFAULT_THEME_COLOR = ThemeColor(0x30, 0x30, 0x30)

# sRGB -> linear luminance weights (WCAG 2.x)
_LUMINANCE_WEIGHTS = np.array([0.2126, 0.7152, 0.0722])


def relative_luminance(color: RGB) -> float:
    """WCAG relative luminance of an 8-bit sRGB color, in [0, 1]."""
    channels = np.asarray(color, dtype=np.float64) / 255.0
    linear = np.where(
        channels <= 0.03928,
        channels / 12.92,
        ((channels + 0.055) / 1.055) ** 2.4,
    )
    return float(linear @ _LUMINANCE_WEIGHTS)


def contrast_ratio(first: RGB, second: RGB) -> float:
    """WCAG contrast ratio between two colors, from 1.0 to 21.0."""
    lighter, darker = sorted(
        (relative_luminance(first), relative_luminance(second)), reverse=True
    )
    return (lighter + 0.05) / (darker + 0.05)


def _hls_to_rgb(hue: float, lightness: float, saturation: float) -> RGB:
    red, green, blue = colorsys.hls_to_rgb(hue, lightness, saturation)
    return (round(red * 255), round(green * 255), round(blue * 255))


def ensure_contrast(
    color: RGB,
    against: RGB = WHITE,
    minimum: float = MINIMUM_CONTRAST,
    step: float = DARKEN_STEP,
) -> ThemeColor:
    """
    Darken `color` until its contrast with `against` is at least `minimum`.

    Hue and saturation are held fixed while lightness drops by `step`, so
    every channel is non-increasing from one step to the next. Stops at
    black, which is the best any darkening can do.
    """
    hue, lightness, saturation = colorsys.rgb_to_hls(*(channel / 255.0 for channel in color))
    candidate = tuple(color)
    steps = 0

    while contrast_ratio(candidate, against) < minimum and lightness > 0.0:
        lightness = max(0.0, lightness - step)
        candidate = _hls_to_rgb(hue, lightness, saturation)
        steps += 1

    logger.debug(
        f"Darkened {color} to {candidate} in {steps} steps "
        f"(contrast {contrast_ratio(candidate, against):.2f})"
    )
    return ThemeColor(*candidate)


def derive_theme_color(asset_path: Path) -> ThemeColor:
    """
    Derive a contrast-safe background color from a logo image.

    Raises:
        ImageDecodeError: If the asset is corrupt or unsupported
    """
    average = open_logo_source(asset_path).rasterize_to_single_average_pixel()
    theme_color = ensure_contrast(average)
    logger.info(f"Theme color for {asset_path}: {theme_color.hex}")
    return theme_color
