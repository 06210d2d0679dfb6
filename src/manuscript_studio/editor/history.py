"""Linear undo/redo history over stylesheet text snapshots."""

from __future__ import annotations

from typing import Callable


class HistoryStack:
    """Snapshots of the stylesheet text with a cursor.

    Pushing while the cursor is behind the tail drops every redoable entry.
    While a snapshot is being restored the stack is ``replaying`` and
    ignores pushes, so a restore is never recorded as a new edit.
    """

    def __init__(self, restore: Callable[[str], None] | None = None) -> None:
        self._restore_fn = restore
        self._entries: list[str] = []
        self._index = -1
        self.replaying = False

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def index(self) -> int:
        return self._index

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    @property
    def current(self) -> str | None:
        if self._index < 0:
            return None
        return self._entries[self._index]

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    def push(self, text: str) -> bool:
        """Record *text*. Returns False when the push was suppressed."""
        if self.replaying or text == self.current:
            return False
        del self._entries[self._index + 1 :]
        self._entries.append(text)
        self._index = len(self._entries) - 1
        return True

    def undo(self) -> bool:
        if not self.can_undo:
            return False
        self._index -= 1
        self.restore(self._index)
        return True

    def redo(self) -> bool:
        if not self.can_redo:
            return False
        self._index += 1
        self.restore(self._index)
        return True

    def restore(self, index: int) -> None:
        """Write snapshot *index* back through the restore callback."""
        if not 0 <= index < len(self._entries):
            raise IndexError(f"No history entry at {index}")
        self._index = index
        if self._restore_fn is None:
            return
        self.replaying = True
        try:
            self._restore_fn(self._entries[index])
        finally:
            self.replaying = False

    def reset(self, text: str | None = None) -> None:
        """Forget all entries, optionally seeding the stack with *text*."""
        self._entries.clear()
        self._index = -1
        if text is not None:
            self.push(text)
