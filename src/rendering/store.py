# src/rendering/store.py - v1
"""Template source lookup.

Names are slash-separated paths relative to the template root, without the
file suffix for HTML templates: ``layouts/page``, ``partials/header``,
``specialties/dentistry``. Non-HTML files keep their suffix
(``styles/site.css``).
"""

from __future__ import annotations

import logging
from pathlib import Path

from medsite.core.errors import RenderError

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_ROOT = Path(__file__).parent / "templates"


class TemplateStore:
    """Read template sources from a directory tree."""

    def __init__(self, root: Path | str | None = None) -> None:
        self.root = Path(root).expanduser() if root else DEFAULT_TEMPLATE_ROOT

    def path_for(self, name: str) -> Path:
        relative = name if Path(name).suffix else f"{name}.html"
        path = (self.root / relative).resolve()
        if not path.is_relative_to(self.root.resolve()):
            raise RenderError(f"Template name {name!r} escapes the template root")
        return path

    def exists(self, name: str) -> bool:
        try:
            return self.path_for(name).is_file()
        except RenderError:
            return False

    def load(self, name: str) -> str:
        """Return the source of template ``name``.

        Raises:
            RenderError: Template does not exist or cannot be read.
        """
        path = self.path_for(name)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise RenderError(f"Template not found: {name}") from exc
        except OSError as exc:
            raise RenderError(f"Cannot read template {name}: {exc}") from exc
