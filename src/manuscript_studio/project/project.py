"""Book project folder: chapters, stylesheet file and assets."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from manuscript_studio.config import StudioConfig
from manuscript_studio.errors import PersistenceFailure, ProjectInvalid

logger = logging.getLogger(__name__)

NEW_STYLESHEET = "/* New Stylesheet */"


@dataclass(frozen=True)
class Chapter:
    index: int
    name: str
    content: str


class Project:
    """A project folder laid out as::

        <root>/Chapters/*.md
        <root>/styles/epub-styles.css
        <root>/metadata/book-info.json
        <root>/images/COVER.png
    """

    def __init__(self, root: str | Path, config: StudioConfig | None = None) -> None:
        self.config = config or StudioConfig()
        self.root = Path(root).expanduser()

    @property
    def name(self) -> str:
        return self.root.name

    @property
    def chapters_dir(self) -> Path:
        return self.root / self.config.chapters_dir

    @property
    def stylesheet_path(self) -> Path:
        return self.root / self.config.stylesheet_path

    @property
    def metadata_path(self) -> Path:
        return self.root / self.config.metadata_path

    @property
    def cover_path(self) -> Path:
        return self.root / self.config.cover_path

    def output_path(self) -> Path:
        return Path(self.config.downloads_dir).expanduser() / f"{self.name}.epub"

    # --- chapters -------------------------------------------------------------

    def chapter_files(self) -> list[Path]:
        """Chapter files in book order (alphabetical by file name)."""
        if not self.root.is_dir():
            raise ProjectInvalid(f"Project folder not found: {self.root}")
        if not self.chapters_dir.is_dir():
            raise ProjectInvalid(f"No {self.config.chapters_dir} folder in {self.root}")
        files = sorted(
            p
            for p in self.chapters_dir.iterdir()
            if p.is_file() and p.suffix == ".md" and not p.name.startswith(".")
        )
        if not files:
            raise ProjectInvalid(
                f"No .md files found in {self.config.chapters_dir} folder"
            )
        return files

    def load_chapters(self) -> list[Chapter]:
        return [
            Chapter(index=i, name=path.name, content=path.read_text(encoding="utf-8"))
            for i, path in enumerate(self.chapter_files())
        ]

    # --- stylesheet -----------------------------------------------------------

    def read_stylesheet(self) -> str:
        if not self.stylesheet_path.exists():
            return NEW_STYLESHEET
        return self.stylesheet_path.read_text(encoding="utf-8")

    def save_stylesheet(self, text: str) -> None:
        try:
            self.stylesheet_path.parent.mkdir(parents=True, exist_ok=True)
            self.stylesheet_path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise PersistenceFailure(
                f"Could not save {self.stylesheet_path}: {exc}", cause=exc
            ) from exc
        logger.debug("Saved stylesheet (%d chars) to %s", len(text), self.stylesheet_path)

    # --- assets ---------------------------------------------------------------

    def resolve_asset(self, relative: str) -> Path | None:
        """Find *relative* under the chapters folder first, then the project root.

        Returns None when neither exists or the path leaves the project.
        """
        relative = relative.lstrip("/\\")
        if not relative:
            return None
        root = self.root.resolve()
        for base in (self.chapters_dir, self.root):
            candidate = (base / relative).resolve()
            if not candidate.is_relative_to(root):
                continue
            if candidate.is_file():
                return candidate
        return None
