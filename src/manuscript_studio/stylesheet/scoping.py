"""Selector scoping: chapter qualification and the compiler-only namespace strip.

The book is rendered inside a container carrying the root class (for
example ``book-content``). Chapter-scoped rules add a ``chapter-N`` class to
that same container, so ``.book-content p`` scoped to chapter 2 becomes
``.book-content.chapter-2 p``.
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from manuscript_studio.stylesheet.model import Scope, ScopedSelector

logger = logging.getLogger(__name__)

CHAPTER_CLASS_PREFIX = "chapter-"

# A single CSS class identifier; selectors are built by plain concatenation.
_CLASS_NAME_RE = re.compile(r"-?[_a-zA-Z][_a-zA-Z0-9-]*")


def validate_root_class(name: str) -> str:
    """Return *name* without a leading dot, or raise ValueError.

    The root class must be one CSS class identifier such as ``book-content``;
    spaces, dots and other selector punctuation would change what the
    generated selectors match.
    """
    name = (name or "").strip().lstrip(".")
    if not name:
        raise ValueError("Root class must not be empty")
    if not _CLASS_NAME_RE.fullmatch(name):
        raise ValueError(
            f"Invalid root class {name!r}: use letters, digits, hyphens and underscores"
        )
    return name


def chapter_class(index: int) -> str:
    return f"{CHAPTER_CLASS_PREFIX}{index}"


def _root_token(root_class: str) -> re.Pattern[str]:
    # The class name is user input: match it literally and only as a whole
    # class token (``.book-content`` must not match ``.book-contents``).
    return re.compile(r"\." + re.escape(root_class) + r"(?![\w-])")


def resolve_selector(target: ScopedSelector, root_class: str) -> str:
    """Return the selector text that *target* stands for in the stylesheet.

    Global selectors are returned verbatim. Chapter selectors get
    ``.chapter-N`` inserted right after every root-class token; a selector
    without the token is nested under the chapter container instead.
    """
    selector = target.selector.strip()
    if target.scope == Scope.GLOBAL:
        return selector
    qualifier = "." + chapter_class(target.chapter_index)
    token = _root_token(root_class)
    if token.search(selector):
        return token.sub(lambda m: m.group(0) + qualifier, selector)
    return f".{root_class}{qualifier} {selector}"


def scope_class(root_class: str, chapter_index: int | None = None) -> str:
    """Class chain for the whole book, or for one chapter's container."""
    if chapter_index is None:
        return root_class
    return f"{root_class}.{chapter_class(chapter_index)}"


def strip_namespace(text: str, root_class: str) -> str:
    """Rewrite root-class selectors for a renderer without the book container.

    ``.root {`` becomes ``body {`` and ``.root <descendant>`` loses its
    ``.root `` prefix. Chapter-qualified tokens are left alone. Applying it
    twice gives the same result as applying it once.
    """
    if not text or not root_class:
        return text or ""
    pattern = re.compile(r"\." + re.escape(root_class) + r"(?![\w-])(\s*)(?=(\{)?)")

    def _rewrite(match: re.Match[str]) -> str:
        space = match.group(1)
        if match.group(2):
            return "body" + space
        if space:
            return ""
        return match.group(0)

    return pattern.sub(_rewrite, text)


@contextmanager
def stripped_stylesheet(path: str | Path, canonical: str, root_class: str) -> Iterator[str]:
    """Hold *path* in its stripped form for the duration of the block.

    The stripped text is written on entry; the canonical text is always
    written back on exit, whether the block succeeded or raised.
    """
    path = Path(path)
    stripped = strip_namespace(canonical, root_class)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(stripped, encoding="utf-8")
    logger.debug("Wrote stripped stylesheet to %s", path)
    try:
        yield stripped
    finally:
        path.write_text(canonical, encoding="utf-8")
        logger.debug("Restored canonical stylesheet at %s", path)
