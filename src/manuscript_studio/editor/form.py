"""Visual form bridge: the five form fields <-> stylesheet declarations."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, fields
from typing import TYPE_CHECKING, Any

from manuscript_studio.stylesheet.model import Scope, ScopedSelector
from manuscript_studio.stylesheet.parser import parse_stylesheet
from manuscript_studio.stylesheet.serializer import serialize_rules

if TYPE_CHECKING:
    from manuscript_studio.editor.session import EditorSession

# Form field name -> CSS property
FIELD_PROPERTIES: dict[str, str] = {
    "font_family": "font-family",
    "font_size": "font-size",
    "color": "color",
    "background_color": "background-color",
    "text_align": "text-align",
}

# Element keys offered by the form. "body" is the book container itself.
FORM_TARGETS: tuple[str, ...] = (
    "body", "h1", "h2", "h3", "p", "blockquote", "a", "img", "strong", "em", "code",
)

# Inline-level elements: text alignment means nothing for them.
INLINE_TARGETS = frozenset({"strong", "em", "code"})

_HEX_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")

DEFAULT_COLOR_SWATCH = "#000000"
DEFAULT_BACKGROUND_SWATCH = "#ffffff"


@dataclass(frozen=True)
class FormFields:
    font_family: str = ""
    font_size: str = ""
    color: str = ""
    background_color: str = ""
    text_align: str = ""

    def to_dict(self) -> dict[str, str]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> FormFields:
        data = data or {}
        return cls(**{f.name: str(data.get(f.name) or "") for f in fields(cls)})


@dataclass(frozen=True)
class FormState:
    """What the form shows for one selector."""

    selector: str
    fields: FormFields
    color_swatch: str
    background_swatch: str
    text_align_enabled: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "selector": self.selector,
            "fields": self.fields.to_dict(),
            "color_swatch": self.color_swatch,
            "background_swatch": self.background_swatch,
            "text_align_enabled": self.text_align_enabled,
        }


def swatch(value: str, default: str) -> str:
    """Return *value* if a native colour picker accepts it, else *default*."""
    return value if _HEX_COLOR_RE.match(value) else default


def target_selector(key: str, root_class: str) -> str:
    """Base (global) selector text for a form target key.

    Known element keys live under the root class; anything else is taken as
    raw selector text.
    """
    key = key.strip()
    if key == "body":
        return f".{root_class}"
    if key in FORM_TARGETS:
        return f".{root_class} {key}"
    return key


def text_align_enabled(key: str) -> bool:
    return key.strip() not in INLINE_TARGETS


def scoped_target(
    key: str,
    root_class: str,
    scope: Scope | str = Scope.GLOBAL,
    chapter_index: int | None = None,
) -> ScopedSelector:
    scope = Scope(scope)
    return ScopedSelector(
        selector=target_selector(key, root_class),
        scope=scope,
        chapter_index=chapter_index if scope == Scope.CHAPTER else None,
    )


def load_fields(
    session: EditorSession,
    key: str,
    scope: Scope | str = Scope.GLOBAL,
    chapter_index: int | None = None,
) -> FormState:
    """Read the tracked properties of a form target from the current text."""
    rules = parse_stylesheet(session.text)
    selector = scoped_target(key, session.root_class, scope, chapter_index).resolve(
        session.root_class
    )
    props = rules.properties(selector)
    values = FormFields(
        **{name: props.get(prop, "") for name, prop in FIELD_PROPERTIES.items()}
    )
    return FormState(
        selector=selector,
        fields=values,
        color_swatch=swatch(values.color, DEFAULT_COLOR_SWATCH),
        background_swatch=swatch(values.background_color, DEFAULT_BACKGROUND_SWATCH),
        text_align_enabled=text_align_enabled(key),
    )


def apply_fields(
    session: EditorSession,
    key: str,
    values: FormFields,
    scope: Scope | str = Scope.GLOBAL,
    chapter_index: int | None = None,
) -> str:
    """Write the form values into the stylesheet and commit a snapshot.

    Empty values remove the property. Properties the form does not track
    are left as they are. Returns the resolved selector.
    """
    rules = parse_stylesheet(session.text)
    selector = scoped_target(key, session.root_class, scope, chapter_index).resolve(
        session.root_class
    )
    align_enabled = text_align_enabled(key)
    for name, prop in FIELD_PROPERTIES.items():
        if name == "text_align" and not align_enabled:
            continue
        value = getattr(values, name).strip()
        if value:
            rules.set_property(selector, prop, value)
        else:
            rules.remove_property(selector, prop)
    session.commit_text(serialize_rules(rules))
    return selector
