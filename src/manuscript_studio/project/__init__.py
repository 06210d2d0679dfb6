from manuscript_studio.project.picker import FolderPicker, SystemFolderPicker
from manuscript_studio.project.project import Chapter, Project
from manuscript_studio.project.rendering import render_markdown, rewrite_image_links

__all__ = [
    "Chapter",
    "Project",
    "FolderPicker",
    "SystemFolderPicker",
    "render_markdown",
    "rewrite_image_links",
]
