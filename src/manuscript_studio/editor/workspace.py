"""Workspace: the process-level holder of the currently open project."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from manuscript_studio.compiler.pandoc import CompileResult, PandocCompiler
from manuscript_studio.config import PandocSettings, StudioConfig
from manuscript_studio.editor.session import EditorSession
from manuscript_studio.errors import ProjectInvalid
from manuscript_studio.events import EventBus, ProjectOpened, StylesheetChanged
from manuscript_studio.project.picker import FolderPicker, SystemFolderPicker
from manuscript_studio.project.project import Project
from manuscript_studio.stylesheet.scoping import validate_root_class

logger = logging.getLogger(__name__)


class Workspace:
    """Wires config, folder picker, compiler and the current EditorSession.

    Opening a project replaces the session wholesale; edits are written to
    the project's stylesheet file as soon as they reach the session.
    """

    def __init__(
        self,
        config: StudioConfig | None = None,
        *,
        picker: FolderPicker | None = None,
        compiler: PandocCompiler | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.config = config or StudioConfig()
        self.picker = picker or SystemFolderPicker()
        self.compiler = compiler or PandocCompiler(
            PandocSettings(self.config.config_path),
            timeout=self.config.compile_timeout,
        )
        self.event_bus = event_bus or EventBus()
        self.root_class = validate_root_class(self.config.root_class)
        self._session: EditorSession | None = None
        self._lock = threading.Lock()
        self.event_bus.subscribe(StylesheetChanged, self._persist)

    @property
    def session(self) -> EditorSession:
        """The open session. Raises ProjectInvalid when none is open."""
        if self._session is None:
            raise ProjectInvalid("No project selected")
        return self._session

    @property
    def has_project(self) -> bool:
        return self._session is not None

    def open(self, path: str | Path) -> EditorSession:
        """Load the project at *path* and make it the current session."""
        project = Project(path, self.config)
        chapters = project.load_chapters()
        text = project.read_stylesheet()

        session = EditorSession(
            text,
            chapters=chapters,
            root_class=self.root_class,
            project=project,
            event_bus=self.event_bus,
            debounce_seconds=self.config.debounce_seconds,
        )
        with self._lock:
            previous, self._session = self._session, session
        if previous is not None:
            previous.close()

        logger.info("Opened project %s (%d chapters)", project.root, len(chapters))
        self.event_bus.emit(ProjectOpened(path=str(project.root), chapter_count=len(chapters)))
        return session

    def pick(self) -> EditorSession:
        """Ask the folder picker for a project and open it.

        UserCancelled from the picker propagates unchanged.
        """
        path = self.picker.pick()
        return self.open(path.strip())

    def set_root_class(self, root_class: str) -> None:
        root_class = validate_root_class(root_class)
        if self._session is not None:
            self._session.set_root_class(root_class)
        self.root_class = root_class

    def compile(self) -> CompileResult:
        return self.compiler.compile(self.session)

    def _persist(self, event: StylesheetChanged) -> None:
        # Saved to the emitting session's project, which may no longer be current.
        if event.project is None:
            return
        event.project.save_stylesheet(event.text)
