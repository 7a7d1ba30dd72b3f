# formatting.py
"""Pure display helpers. None of them raise; absent input degrades to a fixed default."""
import re
from datetime import date
from enum import Enum
from typing import List, Optional, Sequence

from models import Image, Schedule

PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/210x295/1f2937/9ca3af?text=No+Image"
NO_SUMMARY = "No summary available."
UNKNOWN = "Unknown"

_TAG_RE = re.compile(r"<[^>]*>")
_YEAR_RE = re.compile(r"^\s*(\d{4})")


class RatingTier(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"


def get_image_url(image: Optional[Image], size: str = "medium", placeholder: str = PLACEHOLDER_IMAGE_URL) -> str:
    if image is None:
        return placeholder
    url = image.original if size == "original" else image.medium
    return url or placeholder


def strip_html_tags(html: Optional[str]) -> str:
    if not html:
        return NO_SUMMARY
    text = _TAG_RE.sub("", html).strip()
    return text or NO_SUMMARY


def format_year(date_string: Optional[str]) -> str:
    match = _YEAR_RE.match(date_string or "")
    return match.group(1) if match else UNKNOWN


def format_date(date_string: Optional[str]) -> str:
    """Formats an ISO date as 'Sep 22, 1994', falling back to the raw value."""
    if not date_string:
        return UNKNOWN
    try:
        parsed = date.fromisoformat(date_string)
    except ValueError:
        return date_string
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def rating_tier(rating: Optional[float]) -> RatingTier:
    if rating is None:
        return RatingTier.NONE
    if rating >= 8:
        return RatingTier.HIGH
    if rating >= 6:
        return RatingTier.MEDIUM
    return RatingTier.LOW


def format_rating(rating: Optional[float]) -> Optional[str]:
    if rating is None:
        return None
    return f"{rating:.1f}"


def format_runtime(runtime: Optional[int]) -> str:
    if not runtime:
        return UNKNOWN
    return f"{runtime} min"


def format_schedule(schedule: Optional[Schedule]) -> str:
    if schedule is None or not schedule.days:
        return "No schedule available"
    return f"{', '.join(schedule.days)} at {schedule.time or 'Time TBA'}"


def imdb_url(imdb_id: Optional[str]) -> Optional[str]:
    if not imdb_id:
        return None
    return f"https://www.imdb.com/title/{imdb_id}"


def genre_badges(genres: Sequence[str], limit: int = 3) -> List[str]:
    """The first `limit` genres, plus a '+N' marker for the rest."""
    badges = list(genres[:limit])
    if len(genres) > limit:
        badges.append(f"+{len(genres) - limit}")
    return badges
