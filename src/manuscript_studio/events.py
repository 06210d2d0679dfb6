"""Editor events and the bus that carries them."""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from manuscript_studio.project.project import Project


@dataclass(frozen=True)
class StylesheetChanged:
    """The canonical stylesheet text of a session was replaced.

    ``replaying`` is True when the change comes from undo/redo, so listeners
    must not record it as a new edit. ``project`` is the project of the
    session that changed, if it has one.
    """

    text: str
    replaying: bool = False
    project: Project | None = None


@dataclass(frozen=True)
class ProjectOpened:
    path: str
    chapter_count: int


@dataclass(frozen=True)
class CompileFinished:
    output_path: str
    succeeded: bool
    error: str = ""


Listener = Callable[[Any], None]


class EventBus:
    """Dispatches editor events to listeners in the calling thread.

    A listener that raises stops dispatch and the error reaches whoever
    emitted the event; a failed stylesheet save surfaces this way.
    """

    def __init__(self) -> None:
        self._by_type: defaultdict[type, list[Listener]] = defaultdict(list)
        self._catch_all: list[Listener] = []

    def subscribe(self, event_type: type, callback: Listener) -> None:
        """Call *callback* for every event of exactly *event_type*."""
        self._by_type[event_type].append(callback)

    def on_all(self, callback: Listener) -> None:
        self._catch_all.append(callback)

    def emit(self, event: Any) -> None:
        listeners = [*self._catch_all, *self._by_type.get(type(event), ())]
        for listener in listeners:
            listener(event)
