"""Display helpers.

Stored data always holds raw text; escaping and input filtering happen only
at the display boundary through these functions.
"""

from __future__ import annotations

import html
import re
from datetime import datetime, timezone

_NON_DIGIT = re.compile(r"[^0-9]")
_NON_DECIMAL = re.compile(r"[^0-9.]")
_NON_RANGE = re.compile(r"[^0-9-]")


def escape_html(text: str | None) -> str | None:
    """Escape ``text`` for safe insertion into markup."""

    if not text:
        return text
    return html.escape(str(text), quote=True)


def filter_numeric(text: str, decimal: bool = False) -> str:
    """Strip everything but digits (and one decimal point if ``decimal``)."""

    if not decimal:
        return _NON_DIGIT.sub("", text or "")
    cleaned = _NON_DECIMAL.sub("", text or "")
    head, sep, tail = cleaned.partition(".")
    return head + sep + tail.replace(".", "")


def filter_rep_range(text: str) -> str:
    """Allow digits and a single dash, e.g. ``"8-12"``."""

    cleaned = _NON_RANGE.sub("", text or "")
    head, sep, tail = cleaned.partition("-")
    return head + sep + tail.replace("-", "")


def format_duration(seconds: int) -> str:
    mins, secs = divmod(max(0, int(seconds)), 60)
    return f"{mins}:{secs:02d}"


def format_last_done(date: datetime | None, now: datetime | None = None) -> str | None:
    """Return a short relative label such as ``"Today"`` or ``"3d ago"``."""

    if date is None:
        return None
    now = now or datetime.now(timezone.utc)
    diff_days = int((now - date).total_seconds() // 86400)
    if diff_days == 0:
        return "Today"
    if diff_days == 1:
        return "Yesterday"
    if diff_days < 7:
        return f"{diff_days}d ago"
    if diff_days < 30:
        return f"{diff_days // 7}w ago"
    return f"{date.strftime('%b')} {date.day}"
