"""Native folder pickers, invoked as external processes."""

from __future__ import annotations

import logging
import re
import subprocess
import sys
from typing import Protocol

from manuscript_studio.errors import FolderPickerError, UserCancelled

logger = logging.getLogger(__name__)

_MAC_COMMAND = [
    "osascript",
    "-e",
    'POSIX path of (choose folder with prompt "Select your Project Folder")',
]

_LINUX_COMMAND = [
    "zenity",
    "--file-selection",
    "--directory",
    "--title=Select Project Folder",
]

_WINDOWS_SCRIPT = """
Add-Type -AssemblyName System.Windows.Forms | Out-Null
$f = New-Object System.Windows.Forms.Form
$f.TopMost = $true
$dialog = New-Object System.Windows.Forms.FolderBrowserDialog
$dialog.Description = "Select Project Folder"
if ($dialog.ShowDialog($f) -eq 'OK') { Write-Output $dialog.SelectedPath }
$f.Close() | Out-Null
"""

_WINDOWS_COMMAND = [
    "powershell.exe",
    "-NoProfile",
    "-ExecutionPolicy",
    "Bypass",
    "-Command",
    "-",
]

_WINDOWS_PATH_RE = re.compile(r"^([a-zA-Z]:\\|\\\\)")


class FolderPicker(Protocol):
    """Protocol for project folder pickers."""

    def pick(self) -> str:
        """Return the chosen folder.

        Raises UserCancelled when the user dismisses the dialog and
        FolderPickerError when the picker cannot be run.
        """
        ...


class SystemFolderPicker:
    """Shows the platform's native folder dialog.

    macOS uses ``osascript``, Windows a PowerShell dialog fed on stdin, and
    everything else ``zenity``.
    """

    def __init__(self, platform: str | None = None) -> None:
        self.platform = platform or sys.platform

    def _command(self) -> tuple[list[str], str | None]:
        if self.platform == "darwin":
            return _MAC_COMMAND, None
        if self.platform == "win32":
            return _WINDOWS_COMMAND, _WINDOWS_SCRIPT
        return _LINUX_COMMAND, None

    def pick(self) -> str:
        command, stdin = self._command()
        try:
            result = subprocess.run(
                command,
                input=stdin,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            logger.error("Folder picker %s failed to start: %s", command[0], exc)
            raise FolderPickerError("Folder selection failed.", cause=exc) from exc

        if result.returncode != 0:
            # Every supported picker exits non-zero when dismissed.
            raise UserCancelled("Folder selection cancelled.")

        path = self._extract_path(result.stdout)
        if not path:
            raise UserCancelled("Folder selection cancelled.")
        return path

    def _extract_path(self, stdout: str) -> str:
        lines = [line.strip() for line in stdout.splitlines() if line.strip()]
        if self.platform == "win32":
            # PowerShell can leak other output; keep the first path-looking line.
            lines = [line for line in lines if _WINDOWS_PATH_RE.match(line)]
        return lines[0] if lines else ""
