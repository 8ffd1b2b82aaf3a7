"""
Logo catalog, theme color derivation and logo resolution.

Available components:
- build_catalog / LogoCatalog: Priority-ordered logo assets per tournament
- derive_theme_color: Contrast-safe background color from a logo image
- LogoResolver: Most specific applicable logo for a result file
"""

from .catalog import LogoCatalog, build_catalog
from .colors import DEFAULT_THEME_COLOR, contrast_ratio, derive_theme_color, ensure_contrast
from .resolver import LogoResolver, default_logo_path
from .sources import RasterLogoSource, VectorLogoSource, open_logo_source

__all__ = [
    "DEFAULT_THEME_COLOR",
    "LogoCatalog",
    "LogoResolver",
    "RasterLogoSource",
    "VectorLogoSource",
    "build_catalog",
    "contrast_ratio",
    "default_logo_path",
    "derive_theme_color",
    "ensure_contrast",
    "open_logo_source",
]
