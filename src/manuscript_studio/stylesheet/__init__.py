from manuscript_studio.stylesheet.model import RuleSet, Scope, ScopedSelector
from manuscript_studio.stylesheet.overlay import CenteringFlags, generate_overlay
from manuscript_studio.stylesheet.parser import parse_stylesheet
from manuscript_studio.stylesheet.scoping import (
    chapter_class,
    resolve_selector,
    strip_namespace,
    stripped_stylesheet,
    validate_root_class,
)
from manuscript_studio.stylesheet.serializer import HEADER_COMMENT, serialize_rules

__all__ = [
    "parse_stylesheet",
    "serialize_rules",
    "HEADER_COMMENT",
    "RuleSet",
    "Scope",
    "ScopedSelector",
    "CenteringFlags",
    "generate_overlay",
    "chapter_class",
    "resolve_selector",
    "strip_namespace",
    "stripped_stylesheet",
    "validate_root_class",
]
