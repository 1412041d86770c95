"""
Markdown link extraction and resolution for archive files.
See docs/CleanArchitecture.md for the layering rationale.

Only relative links are of interest: anything carrying a URI scheme
(https:, mailto:), protocol-relative links and pure in-page anchors are
skipped. Fenced code blocks and inline code spans are ignored.
"""

import posixpath
import re
from typing import Optional
from urllib.parse import unquote

_FENCE = re.compile(r"^\s*(```|~~~)")
_INLINE_LINK = re.compile(
    r"\[((?:\\.|\[[^\]]*\]\([^)]*\)|[^\]\\])*)\]"
    r"\(\s*<?([^)\s>]*)>?(?:\s+\"[^\"]*\")?\s*\)"
)
_CODE_SPAN = re.compile(r"(`+).+?\1")
_REFERENCE_DEFINITION = re.compile(r"^\s{0,3}\[(?!\^)[^\]]+\]:\s*<?(\S+?)>?(?:\s+.*)?$")
_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")


def extract_links(text: str) -> list[str]:
    """Return every link target in *text*, in document order, as written."""
    links: list[str] = []
    in_fence = False
    for line in text.splitlines():
        if _FENCE.match(line):
            in_fence = not in_fence
            continue
        if in_fence:
            continue
        line = _CODE_SPAN.sub("", line)
        definition = _REFERENCE_DEFINITION.match(line)
        if definition:
            links.append(definition.group(1))
            continue
        links.extend(_inline_links(line))
    return links


def _inline_links(line: str) -> list[str]:
    links = []
    for match in _INLINE_LINK.finditer(line):
        # a linked image nests one link inside the text of another
        links.extend(inner.group(2) for inner in _INLINE_LINK.finditer(match.group(1)))
        links.append(match.group(2))
    return links


def resolve_link(base_dir: str, link: str) -> Optional[str]:
    """Resolve *link* written in a file under *base_dir* to an archive-relative path.

    Returns None for links that do not point at a file in the archive
    (external URLs, anchors, empty targets).
    """
    link = link.strip()
    if not link or link.startswith("#") or link.startswith("//") or _SCHEME.match(link):
        return None
    path = unquote(link.split("#", 1)[0].split("?", 1)[0])
    if not path:
        return None
    if path.startswith("/"):
        joined = path.lstrip("/")
    else:
        joined = posixpath.join(base_dir, path) if base_dir else path
    return posixpath.normpath(joined)
