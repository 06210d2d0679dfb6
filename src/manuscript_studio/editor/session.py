"""EditorSession: all mutable editor state for one open project."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Iterable

from manuscript_studio.editor.debounce import Debouncer
from manuscript_studio.editor.form import FormFields, FormState, apply_fields, load_fields
from manuscript_studio.editor.history import HistoryStack
from manuscript_studio.events import EventBus, StylesheetChanged
from manuscript_studio.stylesheet.model import RuleSet, Scope
from manuscript_studio.stylesheet.overlay import CenteringFlags, generate_overlay
from manuscript_studio.stylesheet.parser import parse_stylesheet
from manuscript_studio.stylesheet.scoping import scope_class, validate_root_class

if TYPE_CHECKING:
    from manuscript_studio.project.project import Chapter, Project

logger = logging.getLogger(__name__)

DEFAULT_ROOT_CLASS = "book-content"


class EditorSession:
    """The canonical stylesheet text plus everything derived from it.

    Every edit path writes ``text`` first; ``rules`` is re-derived from it
    and never edited directly. Callers serving concurrent requests must hold
    ``lock`` around each operation.
    """

    def __init__(
        self,
        text: str = "",
        *,
        chapters: Iterable[Chapter] = (),
        root_class: str = DEFAULT_ROOT_CLASS,
        project: Project | None = None,
        event_bus: EventBus | None = None,
        debounce_seconds: float = 0.5,
    ) -> None:
        self.project = project
        self.chapters: tuple[Chapter, ...] = tuple(chapters)
        self.root_class = root_class
        self.event_bus = event_bus or EventBus()
        self.lock = threading.RLock()
        # chapter index -> flags; kept in memory only
        self.centering: dict[int, CenteringFlags] = {}
        self._text = text
        self._rules = parse_stylesheet(text)
        self.history = HistoryStack(restore=self._restore)
        self.history.reset(text)
        self._typing = Debouncer(self._record_typing, delay=debounce_seconds)

    # --- stylesheet text ------------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @property
    def rules(self) -> RuleSet:
        return self._rules

    def _replace_text(self, text: str) -> None:
        self._text = text
        self._rules = parse_stylesheet(text)

    def _notify(self, replaying: bool = False) -> None:
        self.event_bus.emit(
            StylesheetChanged(text=self._text, replaying=replaying, project=self.project)
        )

    def commit_text(self, text: str) -> bool:
        """Replace the text as one discrete edit and record a snapshot.

        Returns False when the text is unchanged and no snapshot was added.
        """
        with self.lock:
            self.flush_typing()
            self._replace_text(text)
            recorded = self.history.push(text)
            self._notify()
            return recorded

    def type_text(self, text: str) -> None:
        """Replace the text as keystroke input.

        The snapshot is recorded once typing has been idle for the debounce
        window, or sooner when a discrete action flushes it.
        """
        with self.lock:
            self._replace_text(text)
            self._typing.trigger()
            self._notify()

    def _record_typing(self) -> None:
        with self.lock:
            self.history.push(self._text)

    def flush_typing(self) -> bool:
        return self._typing.flush()

    @property
    def typing_pending(self) -> bool:
        return self._typing.pending

    # --- history --------------------------------------------------------------

    def undo(self) -> bool:
        with self.lock:
            self.flush_typing()
            return self.history.undo()

    def redo(self) -> bool:
        with self.lock:
            self.flush_typing()
            return self.history.redo()

    def _restore(self, text: str) -> None:
        self._replace_text(text)
        self._notify(replaying=True)

    # --- root class -----------------------------------------------------------

    def set_root_class(self, root_class: str) -> None:
        root_class = validate_root_class(root_class)
        with self.lock:
            self.root_class = root_class

    # --- visual form ----------------------------------------------------------

    def load_fields(
        self,
        key: str,
        scope: Scope | str = Scope.GLOBAL,
        chapter_index: int | None = None,
    ) -> FormState:
        with self.lock:
            if Scope(scope) == Scope.CHAPTER:
                self.check_chapter(chapter_index)
            return load_fields(self, key, scope, chapter_index)

    def apply_fields(
        self,
        key: str,
        values: FormFields,
        scope: Scope | str = Scope.GLOBAL,
        chapter_index: int | None = None,
    ) -> str:
        with self.lock:
            if Scope(scope) == Scope.CHAPTER:
                self.check_chapter(chapter_index)
            return apply_fields(self, key, values, scope, chapter_index)

    # --- centering ------------------------------------------------------------

    def check_chapter(self, index: int | None) -> None:
        if index is None or not 0 <= index < len(self.chapters):
            raise IndexError(f"No chapter at index {index}")

    def centering_for(self, index: int) -> CenteringFlags:
        self.check_chapter(index)
        return self.centering.get(index, CenteringFlags())

    def set_centering(self, index: int, flags: CenteringFlags) -> None:
        """Set chapter-local centering. Only the preview ever sees it."""
        with self.lock:
            self.check_chapter(index)
            if flags.any:
                self.centering[index] = flags
            else:
                self.centering.pop(index, None)

    def quick_center(self, flags: CenteringFlags) -> bool:
        """Append book-wide centering rules to the stylesheet text itself.

        Returns False when no flag is set and nothing was appended.
        """
        fragment = generate_overlay(flags, scope_class(self.root_class))
        if not fragment:
            return False
        with self.lock:
            self.flush_typing()
            base = self._text.rstrip()
            text = f"{base}\n\n{fragment}\n" if base else f"{fragment}\n"
            self.commit_text(text)
        return True

    def overlay_css(self) -> str:
        """Chapter-local centering rules for every chapter that has any."""
        fragments = []
        for index in sorted(self.centering):
            fragment = generate_overlay(
                self.centering[index], scope_class(self.root_class, index)
            )
            if fragment:
                fragments.append(fragment)
        return "\n".join(fragments)

    def preview_css(self) -> str:
        """Stylesheet text for the preview: canonical text plus overlays."""
        overlay = self.overlay_css()
        if not overlay:
            return self._text
        return f"{self._text}\n{overlay}\n"

    def close(self) -> None:
        """Record any pending typed edit and stop the debounce timer."""
        self.flush_typing()
        self._typing.cancel()
