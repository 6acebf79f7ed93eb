"""Values computed from a listing at read time and never stored.

``to_line_breaks`` is the write-side transform of the raw description; the
other two helpers derive output-only fields from stored data.
"""

from __future__ import annotations

from datetime import datetime

from django.utils.text import normalize_newlines
from django.utils.timesince import timesince

LINE_BREAK = "<br>"
SHORT_DESCRIPTION_LENGTH = 40
ELLIPSIS = "..."


def to_line_breaks(text: str) -> str:
    """Replace every newline (``\\r\\n``, ``\\r`` or ``\\n``) with ``<br>``."""
    return normalize_newlines(text).replace("\n", LINE_BREAK)


def short_description(text: str | None) -> str | None:
    """First 40 characters of ``text`` followed by ``...``.

    Text shorter than 40 characters is returned unchanged.  A cut that would
    land inside a ``<br>`` moves back to the start of that tag.
    """
    if text is None or len(text) < SHORT_DESCRIPTION_LENGTH:
        return text

    cut = SHORT_DESCRIPTION_LENGTH
    tag_start = text.rfind("<", 0, cut)
    if (
        tag_start != -1
        and text.startswith(LINE_BREAK, tag_start)
        and tag_start + len(LINE_BREAK) > cut
    ):
        cut = tag_start
    return text[:cut] + ELLIPSIS


def created_at_ago(created_at: datetime, now: datetime | None = None) -> str:
    """Human phrase for the age of ``created_at``, e.g. ``"3 hours ago"``."""
    delta = timesince(created_at, now, depth=1)
    # timesince joins number and unit with a non-breaking space
    return f"{delta} ago".replace("\xa0", " ")
