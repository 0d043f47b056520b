"""Display helpers for video cards and the create form."""

import re
from datetime import datetime

from vidto.errors import ValidationError
from vidto.schemas.video import SortKey

DURATION_CHARS = re.compile(r"^[\d:\s]+$")


def format_duration(seconds: int) -> str:
    """Format seconds as M:SS, or H:MM:SS from one hour up."""
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def parse_duration(text: str) -> int:
    """
    Parse a duration typed as MM:SS or HH:MM:SS.

    Returns:
        Total seconds (always > 0)

    Raises:
        ValidationError: Empty input, wrong shape or out-of-range parts
    """
    text = (text or "").strip()
    if not text:
        raise ValidationError("Duration is required", field="duration")
    if not DURATION_CHARS.match(text):
        raise ValidationError(
            "Duration can only contain numbers and colons (:)", field="duration"
        )

    parts = []
    for part in text.split(":"):
        part = part.strip()
        if not part.isdigit():
            raise ValidationError("Invalid duration format", field="duration")
        parts.append(int(part))

    if len(parts) == 2:
        minutes, secs = parts
        if secs >= 60:
            raise ValidationError(
                "Invalid MM:SS format (seconds must be 0-59)", field="duration"
            )
        total = minutes * 60 + secs
    elif len(parts) == 3:
        hours, minutes, secs = parts
        if minutes >= 60 or secs >= 60:
            raise ValidationError(
                "Invalid HH:MM:SS format (minutes and seconds must be 0-59)",
                field="duration",
            )
        total = hours * 3600 + minutes * 60 + secs
    else:
        raise ValidationError("Use MM:SS or HH:MM:SS format", field="duration")

    if total <= 0:
        raise ValidationError("Duration must be greater than 0", field="duration")
    return total


def format_created_at(created_at: str | datetime) -> str:
    """Long date such as 'January 5, 2025'."""
    if isinstance(created_at, str):
        created_at = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
    return f"{created_at:%B} {created_at.day}, {created_at.year}"


def sort_label(sort: SortKey) -> str:
    match sort:
        case SortKey.NEWEST:
            return "Newest to Oldest"
        case SortKey.OLDEST:
            return "Oldest to Newest"
        case SortKey.MOST_VIEWS:
            return "Most to Least Views"
        case SortKey.LEAST_VIEWS:
            return "Least to Most Views"
    raise ValueError(f"Unknown sort key: {sort!r}")
