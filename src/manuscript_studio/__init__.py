"""Manuscript Studio: live CSS editor and EPUB builder for Markdown books."""
from __future__ import annotations

from manuscript_studio.config import StudioConfig
from manuscript_studio.editor.session import EditorSession
from manuscript_studio.editor.workspace import Workspace

__all__ = [
    "StudioConfig",
    "EditorSession",
    "Workspace",
]
