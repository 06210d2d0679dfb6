"""Markdown rendering for the preview, with image links routed to project assets."""

from __future__ import annotations

import re
from urllib.parse import quote

import markdown

ASSET_ROUTE = "/project-assets"

# ![[photo.png]] (wiki-style embed)
_WIKI_IMAGE_RE = re.compile(r"!\[\[([^\]\|]+)(?:\|[^\]]*)?\]\]")

# ![alt](target "title"), with an optional <angle-bracketed> target and a
# double-quoted, single-quoted or parenthesised title
_IMAGE_RE = re.compile(
    r"""
    !\[(?P<alt>[^\]]*)\]                     # alt text
    \(\s*
    (?:<(?P<angled>[^>\n]*)>|(?P<target>[^)\s]+))
    (?P<title>\s+(?:"[^"]*"|'[^']*'|\([^)]*\)))?
    \s*\)
    """,
    re.VERBOSE,
)

_EXTERNAL_PREFIXES = ("http://", "https://", "data:", "//", ASSET_ROUTE + "/")


def _asset_url(path: str) -> str:
    return f"{ASSET_ROUTE}/{quote(path.lstrip('/'), safe='/')}"


def rewrite_image_links(text: str) -> str:
    """Point local image references at the project asset route.

    ``![[name]]`` becomes an image under ``images/``; ``![alt](path)`` is
    routed through the asset route unless it is already a web, protocol
    relative or data URL.
    """

    def _standard(match: re.Match[str]) -> str:
        target = match.group("angled")
        if target is None:
            target = match.group("target")
        target = target.strip()
        if not target or target.lower().startswith(_EXTERNAL_PREFIXES):
            return match.group(0)
        title = match.group("title") or ""
        return f"![{match.group('alt')}]({_asset_url(target)}{title})"

    def _wiki(match: re.Match[str]) -> str:
        name = match.group(1).strip()
        return f"![{name}]({_asset_url('images/' + name)})"

    text = _IMAGE_RE.sub(_standard, text)
    return _WIKI_IMAGE_RE.sub(_wiki, text)


def render_markdown(text: str) -> str:
    """Render chapter Markdown to HTML."""
    return markdown.markdown(
        rewrite_image_links(text),
        extensions=["extra", "sane_lists"],
    )
