"""Error hierarchy for Manuscript Studio.

Only the I/O boundaries raise: project folders, the stylesheet file, the
folder picker and the external compiler. The CSS model never does.
"""
from __future__ import annotations

from typing import Any


class StudioError(Exception):
    """Base error for all Manuscript Studio errors."""

    status_code: int = 500
    error_type: str = "ERROR"

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "type": self.error_type}


class UserCancelled(StudioError):
    """The user dismissed the folder picker. Not a failure."""

    status_code = 200
    error_type = "CANCELLED"


class FolderPickerError(StudioError):
    """The native folder picker could not be run."""

    error_type = "PICKER_ERROR"


class ProjectInvalid(StudioError):
    """No project is selected, or the selected folder is not a book project."""

    status_code = 400
    error_type = "PROJECT_INVALID"


class PersistenceFailure(StudioError):
    """Writing to disk failed. The in-memory change is kept."""

    error_type = "PERSISTENCE_FAILURE"


# ---------------------------------------------------------------------------
# Compiler errors
# ---------------------------------------------------------------------------


class CompilerError(StudioError):
    """Base class for document compiler failures."""

    def __init__(
        self,
        message: str,
        *,
        command: list[str] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.command = command or []


class CompilerNotFound(CompilerError):
    """The compiler executable is not installed or not on the configured path."""

    status_code = 404
    error_type = "PANDOC_NOT_FOUND"


class CompilerExecutionFailure(CompilerError):
    """The compiler ran and reported an error. The message is its stderr verbatim."""

    error_type = "COMPILE_ERROR"
