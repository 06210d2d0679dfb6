"""EPUB compilation through Pandoc.

The stylesheet file is swapped to its de-namespaced form only while Pandoc
runs, then restored to the editable text whatever the outcome.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Mapping

from manuscript_studio.config import PandocSettings
from manuscript_studio.errors import (
    CompilerExecutionFailure,
    CompilerNotFound,
    PersistenceFailure,
    ProjectInvalid,
)
from manuscript_studio.events import CompileFinished
from manuscript_studio.stylesheet.scoping import stripped_stylesheet

if TYPE_CHECKING:
    from manuscript_studio.editor.session import EditorSession
    from manuscript_studio.project.project import Project

logger = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = "pandoc"

# Shell phrasing for a missing executable (cmd.exe, PowerShell, POSIX shells).
NOT_FOUND_MARKERS = ("is not recognized", "The term", "command not found")


@dataclass(frozen=True)
class CompileResult:
    output_path: str
    command: list[str] = field(default_factory=list)
    stdout: str = ""
    stderr: str = ""

    @property
    def message(self) -> str:
        return f"Success! Compiled to: {self.output_path}"


def locate_pandoc(
    settings: PandocSettings | None = None,
    *,
    platform: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Find the Pandoc executable.

    Checks the Windows per-user and system install folders, then the saved
    path in ``config.ini``, then falls back to ``pandoc`` on PATH.
    """
    platform = platform or sys.platform
    environ = os.environ if environ is None else environ

    if platform == "win32":
        for var in ("LOCALAPPDATA", "ProgramFiles"):
            base = environ.get(var)
            if not base:
                continue
            candidate = Path(base) / "Pandoc" / "pandoc.exe"
            if candidate.exists():
                return str(candidate)

    if settings is not None:
        saved = settings.load()
        if saved:
            return saved

    return DEFAULT_EXECUTABLE


def is_not_found(error_text: str) -> bool:
    return any(marker in error_text for marker in NOT_FOUND_MARKERS)


class PandocCompiler:
    """Builds and runs the Pandoc command line for a project."""

    def __init__(
        self,
        settings: PandocSettings | None = None,
        *,
        timeout: float | None = None,
        platform: str | None = None,
        executable_path: str | None = None,
    ) -> None:
        self.settings = settings
        self.executable_path = executable_path
        self.timeout = timeout
        self.platform = platform or sys.platform

    def executable(self) -> str:
        if self.executable_path:
            return self.executable_path
        return locate_pandoc(self.settings, platform=self.platform)

    def check(self) -> dict[str, object]:
        """Report the Pandoc path in use and whether it can be found."""
        path = self.executable()
        found = shutil.which(path) is not None or Path(path).is_file()
        return {"found": found, "path": path}

    def save_path(self, path: str) -> str:
        if self.settings is None:
            raise ValueError("No config file configured")
        return self.settings.save(path)

    def build_command(self, project: Project, chapter_files: list[Path]) -> list[str]:
        return [
            self.executable(),
            *(str(path) for path in chapter_files),
            "-f",
            "markdown",
            "-t",
            "epub3",
            "--split-level=1",
            f"--metadata-file={project.metadata_path}",
            f"--epub-cover-image={project.cover_path}",
            f"--css={project.stylesheet_path}",
            f"--resource-path={project.root}",
            "-o",
            str(project.output_path()),
        ]

    def run(self, command: list[str]) -> subprocess.CompletedProcess[str]:
        """Run *command*, translating failures into compiler errors."""
        logger.info("Executing on %s: %s", self.platform, " ".join(command))
        try:
            proc = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise CompilerNotFound(
                f"{command[0]}: command not found", command=command, cause=exc
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise CompilerExecutionFailure(
                f"Pandoc did not finish within {self.timeout} seconds",
                command=command,
                cause=exc,
            ) from exc
        except OSError as exc:
            raise CompilerExecutionFailure(str(exc), command=command, cause=exc) from exc

        if proc.returncode != 0:
            error_text = proc.stderr or f"Pandoc exited with status {proc.returncode}"
            if is_not_found(error_text):
                raise CompilerNotFound(error_text, command=command)
            raise CompilerExecutionFailure(error_text, command=command)
        return proc

    def compile(self, session: EditorSession) -> CompileResult:
        """Compile the session's project to an EPUB in the downloads folder."""
        project = session.project
        if project is None:
            raise ProjectInvalid("No project selected")

        with session.lock:
            session.flush_typing()
            canonical = session.text
            chapter_files = project.chapter_files()
            output = project.output_path()
            command = self.build_command(project, chapter_files)
            try:
                output.parent.mkdir(parents=True, exist_ok=True)
                with stripped_stylesheet(
                    project.stylesheet_path, canonical, session.root_class
                ):
                    proc = self.run(command)
            except OSError as exc:
                raise PersistenceFailure(
                    f"Could not write stylesheet for compilation: {exc}", cause=exc
                ) from exc
            except (CompilerNotFound, CompilerExecutionFailure) as exc:
                logger.warning("Compilation failed: %s", exc)
                session.event_bus.emit(
                    CompileFinished(output_path=str(output), succeeded=False, error=str(exc))
                )
                raise

        logger.info("Compiled %s to %s", project.name, output)
        session.event_bus.emit(CompileFinished(output_path=str(output), succeeded=True))
        return CompileResult(
            output_path=str(output),
            command=command,
            stdout=proc.stdout,
            stderr=proc.stderr,
        )
