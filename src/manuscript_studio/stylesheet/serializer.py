"""Serialize a RuleSet back to stylesheet text."""

from __future__ import annotations

from manuscript_studio.stylesheet.model import RuleSet

HEADER_COMMENT = "/* EPUB Stylesheet */"

_INDENT = "  "


def serialize_rules(rules: RuleSet) -> str:
    """Render *rules* as normalized CSS text.

    Output is the header comment followed by one block per non-empty
    selector in insertion order, separated by blank lines. Comments and
    stray text from the source are not carried over.
    """
    blocks = [HEADER_COMMENT]
    for selector, props in rules.non_empty().items():
        lines = [f"{selector} {{"]
        lines.extend(f"{_INDENT}{prop}: {value};" for prop, value in props.items())
        lines.append("}")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks) + "\n"
