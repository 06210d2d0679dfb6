"""Stylesheet model: RuleSet, Scope and ScopedSelector."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


@dataclass
class RuleSet:
    """Ordered mapping of selector text to its property declarations.

    A RuleSet is always derived from stylesheet text and written straight
    back to it; it is never kept as a second source of truth.
    """

    rules: dict[str, dict[str, str]] = field(default_factory=dict)

    def __contains__(self, selector: str) -> bool:
        return selector in self.rules

    def __len__(self) -> int:
        return len(self.rules)

    def selectors(self) -> list[str]:
        return list(self.rules)

    def properties(self, selector: str) -> dict[str, str]:
        """Return a copy of the declarations for *selector* (empty if absent)."""
        return dict(self.rules.get(selector, {}))

    def set_property(self, selector: str, prop: str, value: str) -> None:
        self.rules.setdefault(selector, {})[prop] = value

    def remove_property(self, selector: str, prop: str) -> None:
        props = self.rules.get(selector)
        if props is not None:
            props.pop(prop, None)

    def non_empty(self) -> dict[str, dict[str, str]]:
        """Selectors that still have at least one declaration."""
        return {sel: dict(props) for sel, props in self.rules.items() if props}


class Scope(StrEnum):
    GLOBAL = "global"
    CHAPTER = "chapter"


@dataclass(frozen=True)
class ScopedSelector:
    """A selector paired with the scope it applies to.

    Chapter-scoped selectors carry the zero-based index of their chapter.
    """

    selector: str
    scope: Scope = Scope.GLOBAL
    chapter_index: int | None = None

    def __post_init__(self) -> None:
        if self.scope == Scope.CHAPTER and self.chapter_index is None:
            raise ValueError("chapter scope requires a chapter_index")
        if self.chapter_index is not None and self.chapter_index < 0:
            raise ValueError(f"Invalid chapter index: {self.chapter_index}")

    def resolve(self, root_class: str) -> str:
        """Return the effective selector text for *root_class*."""
        from manuscript_studio.stylesheet.scoping import resolve_selector

        return resolve_selector(self, root_class)
