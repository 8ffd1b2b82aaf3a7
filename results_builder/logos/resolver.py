"""
Logo resolver.

Maps a result file name to the most specific applicable logo and its theme
color, falling back to the default logo and color.
"""

from collections.abc import Callable
from pathlib import Path

from ..logging_config import get_logger
from ..models import LogoAsset, ResolvedLogo, ResultFileIdentity, ThemeColor
from ..naming import parse_result_file_name
from .catalog import LogoCatalog
from .colors import DEFAULT_THEME_COLOR, derive_theme_color

DEFAULT_LOGO_NAME = "default.png"


class LogoResolver:
    """
    Resolves result files against a logo catalog.

    Theme colors are derived at most once per distinct asset; the cache is
    not locked, so resolve from a single thread.
    """

    def __init__(
        self,
        catalog: LogoCatalog,
        default_logo: Path,
        default_color: ThemeColor = DEFAULT_THEME_COLOR,
        color_deriver: Callable[[Path], ThemeColor] = derive_theme_color,
    ):
        """
        Initialize logo resolver.

        Args:
            catalog: Catalog built from the logo directory
            default_logo: Logo used when nothing in the catalog applies
            default_color: Theme color paired with the default logo
            color_deriver: Function deriving a theme color from an asset path
        """
        self.catalog: LogoCatalog = catalog
        self.default_logo: Path = Path(default_logo)
        self.default_color: ThemeColor = default_color
        self._derive: Callable[[Path], ThemeColor] = color_deriver
        self._colors = dict[Path, ThemeColor]()

        self.logger = get_logger("logo_resolver")

    @property
    def default(self) -> ResolvedLogo:
        return ResolvedLogo(path=self.default_logo, theme_color=self.default_color)

    def find_asset(self, identity: ResultFileIdentity) -> LogoAsset | None:
        """First catalog candidate whose division and year bounds admit `identity`."""
        return next(
            (asset for asset in self.catalog.candidates(identity.tournament_name)
             if asset.applies_to(identity)),
            None,
        )

    def theme_color(self, asset: LogoAsset) -> ThemeColor:
        """Theme color for an asset, derived on first use."""
        if asset.path not in self._colors:
            self._colors[asset.path] = self._derive(asset.path)
        return self._colors[asset.path]

    def resolve_identity(self, identity: ResultFileIdentity) -> ResolvedLogo:
        asset = self.find_asset(identity)
        if asset is None:
            self.logger.debug(
                f"No logo for {identity.tournament_name} "
                f"(year={identity.year}, division={identity.division!r}); using default"
            )
            return self.default
        return ResolvedLogo(path=asset.path, theme_color=self.theme_color(asset), asset=asset)

    def resolve(self, result_file_name: str) -> ResolvedLogo:
        """
        Resolve the logo and theme color for a result file name.

        Raises:
            MalformedFileNameError: If the name lacks a leading year or the
                `_<tournament>_<division>` suffix
            ImageDecodeError: If the chosen asset cannot be decoded
        """
        return self.resolve_identity(parse_result_file_name(result_file_name))

    def cached_color_count(self) -> int:
        return len(self._colors)


def default_logo_path(logo_directory: Path) -> Path:
    """Fixed location of the fallback logo inside a logo directory."""
    return Path(logo_directory) / DEFAULT_LOGO_NAME
