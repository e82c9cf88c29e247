"""Conversion between remote HTML fields and local Markdown."""

from __future__ import annotations

import re

import markdown
from markdownify import ATX, markdownify

# A single container wrapping the whole fragment
_WRAPPER_RE = re.compile(r"\A<(div|p)(?:\s[^>]*)?>(.*)</\1>\Z", re.DOTALL | re.IGNORECASE)
_TAG_RE = re.compile(r"<[^<>]*>")
_BLANK_LINES_RE = re.compile(r"\n[ \t]*\n(?:[ \t]*\n)+")


def _is_balanced(inner: str, tag: str) -> bool:
    """True when every ``tag`` opened inside ``inner`` is closed before it ends."""
    depth = 0
    for match in re.finditer(rf"<(/?){tag}(?:\s[^>]*)?>", inner, re.IGNORECASE):
        depth += -1 if match.group(1) else 1
        if depth < 0:
            return False
    return depth == 0


def _strip_wrapper(fragment: str) -> str:
    match = _WRAPPER_RE.match(fragment)
    if match is None:
        return fragment
    tag, inner = match.group(1), match.group(2)
    if not _is_balanced(inner, tag):
        return fragment
    return inner


def to_remote_markup(text: str | None) -> str:
    """Render local Markdown to the HTML fragment stored in a remote field.

    No table of contents, heading numbering or title is generated. One
    outermost ``<div>``/``<p>`` wrapping the whole fragment is removed so a
    single paragraph is stored as inline HTML.
    """
    if not text:
        return ""
    html = markdown.markdown(text, output_format="html").strip()
    return _strip_wrapper(html).strip()


def to_local_markup(html: str | None) -> str:
    """Convert a remote HTML fragment to Markdown.

    Best effort and lossy. The result never contains ``<`` or ``>``: tags the
    converter leaves behind are removed and stray angle brackets are escaped
    as entities.
    """
    if not html:
        return ""
    text = markdownify(
        html,
        heading_style=ATX,
        bullets="-",
        autolinks=False,
        strip=["blockquote"],
        escape_misc=False,
    )
    text = _TAG_RE.sub("", text)
    text = text.replace("<", "&lt;").replace(">", "&gt;")
    text = _BLANK_LINES_RE.sub("\n\n", text)
    return text.strip()
