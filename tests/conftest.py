from __future__ import annotations

from pathlib import Path

import pytest

from manuscript_studio.compiler.pandoc import PandocCompiler
from manuscript_studio.config import PandocSettings, StudioConfig
from manuscript_studio.editor.session import EditorSession
from manuscript_studio.editor.workspace import Workspace
from manuscript_studio.errors import UserCancelled
from manuscript_studio.project.project import Chapter
from manuscript_studio.web.app import create_app

BASE_CSS = """/* EPUB Stylesheet */

.book-content {
  margin: 0;
}

.book-content p {
  color: #333333;
  font-weight: bold;
}
"""


class FakePicker:
    """Folder picker that returns a fixed path, or cancels when given None."""

    def __init__(self, path: str | None = None) -> None:
        self.path = path
        self.calls = 0

    def pick(self) -> str:
        self.calls += 1
        if self.path is None:
            raise UserCancelled("Folder selection cancelled.")
        return self.path


def write_project(root: Path, css: str | None = BASE_CSS) -> Path:
    """Create a small book project under *root* and return it."""
    chapters = root / "Chapters"
    chapters.mkdir(parents=True)
    (chapters / "02-second.md").write_text("# Second\n\nMore text.\n", encoding="utf-8")
    (chapters / "01-first.md").write_text(
        "# First\n\nOpening line.\n\n![[photo.png]]\n", encoding="utf-8"
    )
    (chapters / ".hidden.md").write_text("# Hidden\n", encoding="utf-8")
    (chapters / "notes.txt").write_text("not a chapter", encoding="utf-8")
    (root / "images").mkdir()
    (root / "images" / "photo.png").write_bytes(b"\x89PNG root")
    if css is not None:
        (root / "styles").mkdir()
        (root / "styles" / "epub-styles.css").write_text(css, encoding="utf-8")
    return root


def make_chapters(count: int = 2) -> list[Chapter]:
    return [
        Chapter(index=i, name=f"{i + 1:02d}.md", content=f"# Chapter {i + 1}\n\nText.\n")
        for i in range(count)
    ]


@pytest.fixture
def project_dir(tmp_path):
    return write_project(tmp_path / "My Book")


@pytest.fixture
def config(tmp_path):
    return StudioConfig(
        downloads_dir=str(tmp_path / "Downloads"),
        config_path=str(tmp_path / "config.ini"),
        debounce_seconds=0.05,
    )


@pytest.fixture
def session():
    """A session with two chapters and no project on disk."""
    s = EditorSession(BASE_CSS, chapters=make_chapters(), debounce_seconds=60)
    yield s
    s.close()


@pytest.fixture
def picker():
    return FakePicker()


@pytest.fixture
def workspace(config, picker):
    compiler = PandocCompiler(PandocSettings(config.config_path), platform="linux")
    return Workspace(config, picker=picker, compiler=compiler)


@pytest.fixture
def app(workspace):
    """Create a Flask app for testing."""
    application = create_app(workspace=workspace)
    application.config["TESTING"] = True
    return application


@pytest.fixture
def client(app):
    """Create a Flask test client."""
    return app.test_client()


@pytest.fixture
def opened(workspace, project_dir):
    """Workspace with the sample project already open."""
    workspace.open(project_dir)
    yield workspace
    workspace.session.close()
