"""Tolerant parser for flat CSS stylesheets.

Syntax example:
    .book-content { margin: 0; }
    .book-content h1 { font-size: 2em; color: #333333; }

Only flat ``selector { body }`` blocks are recognised. Braces do not nest:
a literal ``}`` inside a body ends the block early.
"""

from __future__ import annotations

import re

from manuscript_studio.stylesheet.model import RuleSet

__all__ = ["parse_stylesheet"]

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)

# One flat block: selector text, then a brace-delimited declaration list
_RULE_RE = re.compile(
    r"""
    (?P<selector>[^{]+)     # selector text up to the block
    \{
    (?P<body>[^}]*)          # declarations, up to the first closing brace
    \}
    """,
    re.VERBOSE,
)


def _parse_properties(body: str) -> dict[str, str]:
    """Split a block body into property -> value, later duplicates winning."""
    props: dict[str, str] = {}
    for declaration in body.split(";"):
        # Split on the first colon only: url(http://...) and times keep theirs.
        key, sep, value = declaration.partition(":")
        if not sep:
            continue
        key = key.strip()
        value = value.strip()
        if key and value:
            props[key] = value
    return props


def parse_stylesheet(source: str) -> RuleSet:
    """Parse stylesheet text into a RuleSet.

    A selector that appears in several blocks keeps only its last block.
    Never raises: unparseable input gives an empty or partial RuleSet.
    """
    rules = RuleSet()
    if not isinstance(source, str) or not source:
        return rules
    source = _COMMENT_RE.sub("", source)
    for match in _RULE_RE.finditer(source):
        selector = match.group("selector").strip()
        if not selector:
            continue
        rules.rules[selector] = _parse_properties(match.group("body"))
    return rules
