"""
Infrastructure adapter helper: markdown meeting notes -> MeetingDocument.
See docs/CleanArchitecture.md for the layering rationale.

Notes are hand-authored, so parsing is lenient:
  - the meeting date comes from the file name (first YYYY-MM-DD in it),
  - the title is the first level-1 heading (ATX or setext style),
  - topics are the items of the 'Agenda' list, or failing that the
    level-2 section headings.
"""

import re
from datetime import date
from typing import Optional

from src.domain.entities.meeting_document import MeetingDocument
from src.domain.errors import InvalidMeetingDocument

_DATE_IN_NAME = re.compile(r"(\d{4})-(\d{2})-(\d{2})")
_FENCE = re.compile(r"^\s*(```|~~~)")
_HEADING = re.compile(r"^(#{1,6})\s+(.*?)(?:\s+#+)?\s*$")
_SETEXT_UNDERLINE = re.compile(r"^ {0,3}(=+|-+)\s*$")
_TOP_LEVEL_ITEM = re.compile(r"^ ?(?:[-*+]|\d+[.)])\s+(.*\S)\s*$")
_INLINE_LINK = re.compile(r"!?\[((?:\\.|[^\]\\])*)\]\([^)]*\)")
_EMPHASIS = re.compile(r"(\*\*|__|`)")

_AGENDA = "agenda"
_BOILERPLATE_SECTIONS = {"agenda", "quote of the day", "quotes of the day", "quote(s) of the day"}


def date_from_filename(filename: str) -> Optional[date]:
    """Return the meeting date encoded in *filename*, or None if it carries no date.

    Raises:
        InvalidMeetingDocument: if the name holds a YYYY-MM-DD that is not a calendar date.
    """
    match = _DATE_IN_NAME.search(filename)
    if not match:
        return None
    try:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    except ValueError as exc:
        raise InvalidMeetingDocument(filename, f"invalid meeting date: {exc}") from exc


def parse_meeting_notes(filename: str, text: str) -> MeetingDocument:
    """Parse one meeting-notes file into a MeetingDocument.

    Raises:
        InvalidMeetingDocument: if *filename* does not carry a valid date.
    """
    meeting_date = date_from_filename(filename)
    if meeting_date is None:
        raise InvalidMeetingDocument(filename, "file name does not contain a YYYY-MM-DD date")

    headings, agenda = _scan(text)
    title = next((heading for level, heading in headings if level == 1), None)
    if not title:
        title = f"Meeting Notes for {meeting_date:%b} {meeting_date.day}, {meeting_date.year}"

    if agenda:
        topics = agenda
    else:
        topics = [
            heading
            for level, heading in headings
            if level == 2 and heading.lower() not in _BOILERPLATE_SECTIONS
        ]

    return MeetingDocument(
        date=meeting_date,
        title=title,
        topics=tuple(topics),
        body=text,
        filename=filename,
    )


def _scan(text: str) -> tuple[list[tuple[int, str]], list[str]]:
    headings: list[tuple[int, str]] = []
    agenda: list[str] = []
    in_fence = False
    in_agenda = False
    lines = text.splitlines()
    skip_underline = False
    for position, line in enumerate(lines):
        if skip_underline:
            skip_underline = False
            continue
        if _FENCE.match(line):
            in_fence = not in_fence
            continue
        if in_fence:
            continue

        heading = _heading(line, lines[position + 1] if position + 1 < len(lines) else "")
        if heading:
            level, heading_text = heading
            skip_underline = not _HEADING.match(line)
            headings.append((level, heading_text))
            # only the first agenda section counts
            in_agenda = heading_text.lower() == _AGENDA and not agenda
            continue

        if in_agenda:
            item = _TOP_LEVEL_ITEM.match(line)
            if item:
                agenda.append(_plain(item.group(1)))
    return headings, agenda


def _heading(line: str, next_line: str) -> Optional[tuple[int, str]]:
    """Return (level, text) for an ATX heading, or a setext heading underlined by *next_line*."""
    atx = _HEADING.match(line)
    if atx:
        return len(atx.group(1)), _plain(atx.group(2))
    underline = _SETEXT_UNDERLINE.match(next_line)
    if not underline or not line.strip() or line.startswith("    "):
        return None
    # list items and thematic breaks are never setext heading text
    if _TOP_LEVEL_ITEM.match(line) or _SETEXT_UNDERLINE.match(line):
        return None
    return (1 if underline.group(1).startswith("=") else 2), _plain(line)


def _plain(text: str) -> str:
    """Reduce inline markdown (links, emphasis markers) to its visible text."""
    text = _INLINE_LINK.sub(lambda m: m.group(1), text)
    text = _EMPHASIS.sub("", text)
    return text.strip()
