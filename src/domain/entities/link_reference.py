"""
Domain entity for a relative link found in an archive file.
See docs/CleanArchitecture.md for the layering rationale.
Zero external dependencies: pure Python dataclass only.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LinkReference:
    source: str  # archive-relative path of the file containing the link
    target: str  # archive-relative path the link resolves to
    raw: str
