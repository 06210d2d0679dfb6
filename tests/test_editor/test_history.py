"""Tests for the undo/redo history stack."""

import pytest

from manuscript_studio.editor.history import HistoryStack


def _stack_with(*texts: str, restored: list | None = None) -> HistoryStack:
    stack = HistoryStack(restore=restored.append if restored is not None else None)
    for text in texts:
        stack.push(text)
    return stack


class TestPush:
    def test_push_appends_and_moves_cursor(self):
        stack = _stack_with("a", "b")
        assert stack.entries == ("a", "b")
        assert stack.index == 1
        assert stack.current == "b"

    def test_duplicate_push_suppressed(self):
        stack = _stack_with("a", "a")
        assert stack.entries == ("a",)

    def test_same_text_later_is_allowed(self):
        stack = _stack_with("a", "b", "a")
        assert stack.entries == ("a", "b", "a")

    def test_push_while_replaying_ignored(self):
        stack = _stack_with("a")
        stack.replaying = True
        assert stack.push("b") is False
        assert stack.entries == ("a",)

    def test_branching_push_discards_redo(self):
        stack = _stack_with("a", "b", "c")
        stack.undo()
        stack.undo()
        stack.push("x")
        assert stack.entries == ("a", "x")
        assert not stack.can_redo


class TestUndoRedo:
    @pytest.mark.parametrize("undos", [0, 1, 2, 3, 4])
    def test_undo_returns_to_earlier_push(self, undos):
        texts = ["t1", "t2", "t3", "t4", "t5"]
        stack = _stack_with(*texts)
        for _ in range(undos):
            stack.undo()
        assert stack.current == texts[len(texts) - 1 - undos]

    def test_redo_walks_forward(self):
        restored: list[str] = []
        stack = _stack_with("a", "b", "c", restored=restored)
        stack.undo()
        stack.undo()
        stack.redo()
        stack.redo()
        assert restored == ["b", "a", "b", "c"]
        assert stack.current == "c"

    def test_undo_at_start_is_noop(self):
        restored: list[str] = []
        stack = _stack_with("a", restored=restored)
        assert stack.undo() is False
        assert restored == []

    def test_redo_at_tail_is_noop(self):
        stack = _stack_with("a", "b")
        assert stack.redo() is False
        assert stack.index == 1

    def test_navigation_never_appends(self):
        stack = _stack_with("a", "b", "c")
        stack.undo()
        stack.redo()
        stack.undo()
        assert len(stack) == 3


class TestRestore:
    def test_restore_sets_replaying_during_callback(self):
        seen: list[bool] = []
        stack = HistoryStack()

        def restore(text: str) -> None:
            seen.append(stack.replaying)
            stack.push("re-entrant " + text)

        stack._restore_fn = restore
        stack.push("a")
        stack.push("b")
        stack.undo()
        assert seen == [True]
        assert stack.replaying is False
        assert stack.entries == ("a", "b")

    def test_replaying_cleared_when_callback_raises(self):
        def boom(text: str) -> None:
            raise OSError("disk full")

        stack = HistoryStack(restore=boom)
        stack.push("a")
        stack.push("b")
        with pytest.raises(OSError):
            stack.undo()
        assert stack.replaying is False

    def test_restore_out_of_range(self):
        stack = _stack_with("a")
        with pytest.raises(IndexError):
            stack.restore(5)

    def test_reset_seeds_single_entry(self):
        stack = _stack_with("a", "b")
        stack.reset("loaded")
        assert stack.entries == ("loaded",)
        assert not stack.can_undo
