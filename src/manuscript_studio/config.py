from __future__ import annotations

import configparser
import logging
import os
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


def _default_downloads_dir() -> str:
    return str(Path.home() / "Downloads")


@dataclass(frozen=True)
class StudioConfig:
    host: str = "127.0.0.1"
    port: int = 3000
    root_class: str = "book-content"
    # Project-relative locations
    stylesheet_path: str = "styles/epub-styles.css"
    chapters_dir: str = "Chapters"
    metadata_path: str = "metadata/book-info.json"
    cover_path: str = "images/COVER.png"
    downloads_dir: str = field(default_factory=_default_downloads_dir)
    config_path: str = "config.ini"
    debounce_seconds: float = 0.5
    compile_timeout: float | None = None  # seconds; None waits indefinitely


_ENV_VAR_RE = re.compile(r"%([^%]+)%")


class PandocSettings:
    """Persisted Pandoc location, stored in an INI file.

    The file has a single ``[settings]`` section with a ``pandoc_path`` key.
    """

    SECTION = "settings"
    KEY = "pandoc_path"

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> str | None:
        """Return the saved Pandoc path, or None when nothing is saved."""
        if not self.path.exists():
            return None
        parser = configparser.ConfigParser(interpolation=None)
        try:
            parser.read(self.path, encoding="utf-8")
        except configparser.Error as exc:
            logger.warning("Ignoring unreadable config %s: %s", self.path, exc)
            return None
        value = parser.get(self.SECTION, self.KEY, fallback="").strip()
        if not value:
            return None
        if sys.platform == "win32":
            value = _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)
        return value

    def save(self, pandoc_path: str) -> str:
        """Save *pandoc_path* (surrounding quotes stripped) and return the cleaned value."""
        clean = pandoc_path.strip().strip('"').strip()
        if not clean:
            raise ValueError("No path provided")
        parser = configparser.ConfigParser(interpolation=None)
        parser[self.SECTION] = {self.KEY: clean}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as fh:
            parser.write(fh)
        logger.info("Saved Pandoc path %s to %s", clean, self.path)
        return clean
