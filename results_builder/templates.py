"""
Jinja2 template service.

Constructed once per run and passed to whatever renders HTML.
"""

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from .exceptions import ConfigurationError

PACKAGED_TEMPLATES = Path(__file__).parent / "templates"

RESULT_TEMPLATE = "result.html.j2"
INDEX_TEMPLATE = "results_index.html.j2"


class Templates:
    """Loads and renders page templates from one directory."""

    def __init__(self, directory: Path | None = None):
        self.directory: Path = Path(directory) if directory is not None else PACKAGED_TEMPLATES
        if not self.directory.is_dir():
            raise ConfigurationError(f"Templates directory does not exist: {self.directory}")
        self.environment: Environment = Environment(
            loader=FileSystemLoader(str(self.directory)),
            autoescape=select_autoescape(enabled_extensions=("html", "j2")),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render(self, template_name: str, **context: Any) -> str:
        return self.environment.get_template(template_name).render(**context)
