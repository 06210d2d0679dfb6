"""Preview renderer: stylesheet, overlays and chapter HTML composed for display."""
from __future__ import annotations

import html
from dataclasses import dataclass

from manuscript_studio.editor.session import EditorSession
from manuscript_studio.project.rendering import render_markdown
from manuscript_studio.stylesheet.scoping import chapter_class


@dataclass(frozen=True)
class RenderedChapter:
    index: int
    name: str
    html: str


@dataclass(frozen=True)
class Preview:
    css: str
    chapters: tuple[RenderedChapter, ...]

    @property
    def html(self) -> str:
        return "\n".join(chapter.html for chapter in self.chapters)

    def to_dict(self) -> dict:
        return {
            "css": self.css,
            "html": self.html,
            "chapters": [
                {"index": c.index, "name": c.name} for c in self.chapters
            ],
        }


def render_chapter(session: EditorSession, index: int) -> RenderedChapter:
    """Render one chapter inside its own root-class container."""
    chapter = session.chapters[index]
    classes = f"{session.root_class} {chapter_class(chapter.index)}"
    body = render_markdown(chapter.content)
    markup = (
        f'<section class="{html.escape(classes, quote=True)}" '
        f'data-chapter="{chapter.index}">\n{body}\n</section>'
    )
    return RenderedChapter(index=chapter.index, name=chapter.name, html=markup)


def render_preview(session: EditorSession, chapter_index: int | None = None) -> Preview:
    """Compose the live preview for one chapter, or the whole book.

    The CSS is a throwaway copy: canonical text plus chapter-local overlays.
    """
    with session.lock:
        if chapter_index is None:
            indexes = range(len(session.chapters))
        else:
            session.check_chapter(chapter_index)
            indexes = [chapter_index]
        chapters = tuple(render_chapter(session, i) for i in indexes)
        return Preview(css=session.preview_css(), chapters=chapters)
