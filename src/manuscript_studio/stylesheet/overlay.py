"""Centering overlays generated from per-chapter boolean flags."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any


@dataclass(frozen=True)
class CenteringFlags:
    headings: bool = False
    paragraphs: bool = False
    images: bool = False
    blockquotes: bool = False

    @property
    def any(self) -> bool:
        return self.headings or self.paragraphs or self.images or self.blockquotes

    def to_dict(self) -> dict[str, bool]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> CenteringFlags:
        # Only JSON true turns a flag on; "false", 1 and the like do not.
        data = data or {}
        return cls(**{f.name: data.get(f.name) is True for f in fields(cls)})


def generate_overlay(flags: CenteringFlags, scope_class: str) -> str:
    """Return the CSS fragment for *flags*, qualified by ``.scope_class``.

    *scope_class* is a class chain such as ``book-content`` or
    ``book-content.chapter-3``. Returns an empty string when no flag is set.
    """
    prefix = f".{scope_class}"
    rules: list[str] = []
    if flags.headings:
        rules.append(
            f"{prefix} h1, {prefix} h2, {prefix} h3 {{ text-align: center; }}"
        )
    if flags.paragraphs:
        rules.append(f"{prefix} p {{ text-align: center; }}")
    if flags.images:
        rules.append(f"{prefix} img {{ display: block; margin: 0 auto; }}")
    if flags.blockquotes:
        rules.append(f"{prefix} blockquote {{ text-align: center; }}")
    return "\n".join(rules)
