"""Experience Estimator: total non-duplicated experience from free text.

Strategy:
    1. "[Month] Year - [Month] Year|Present" ranges; either side may carry a
       month, a side without one maps to January
    2. merge overlapping/touching periods and sum their months
    3. no periods at all -> first "<n> years" / "<n>+ years" mention

Works on text alone; model-supplied figures are reconciled separately in
``resolve_years`` with explicit precedence.
"""

import logging
import math
import re
from datetime import date

from models.schemas.experience_period import ExperiencePeriod

logger = logging.getLogger(__name__)

MIN_START_YEAR = 1980
MAX_YEARS = 40.0

MONTHS: dict[str, int] = {
    "jan": 1, "january": 1, "feb": 2, "february": 2, "mar": 3, "march": 3,
    "apr": 4, "april": 4, "may": 5, "jun": 6, "june": 6,
    "jul": 7, "july": 7, "aug": 8, "august": 8, "sep": 9, "sept": 9,
    "september": 9, "oct": 10, "october": 10, "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}

_DASH = r"\s*(?:-|–|—|\bto\b|\buntil\b)\s*"
_OPEN_END = r"present|current|now|today"
_YEAR = r"(?:19|20)\d{2}"
# Longest names first so "sept" wins over "sep"
_MONTH = "|".join(sorted(MONTHS, key=len, reverse=True))
_SIDE = rf"\b(?:({_MONTH})\.?,?\s*)?({_YEAR})"

# Only known month words are captured; any other word before a year is
# ignored, so "Acme 2016" reads as a bare year.
DATE_RANGE_RE = re.compile(
    rf"{_SIDE}{_DASH}(?:(?:({_MONTH})\.?,?\s*)?({_YEAR})|({_OPEN_END}))\b",
    re.IGNORECASE,
)
YEARS_MENTION_RE = re.compile(
    r"(\d+(?:\.\d+)?)\s*\+?\s*(?:years?|yrs?)\b",
    re.IGNORECASE,
)


def resolve_month(word: str) -> int | None:
    """Month number for a month name or abbreviation, ``None`` if unknown."""
    return MONTHS.get(word.lower().rstrip("."))


def _valid_period(start: date, end: date, today: date) -> ExperiencePeriod | None:
    if start.year < MIN_START_YEAR:
        return None
    if start > end or end.year > today.year + 1:
        return None
    return ExperiencePeriod(start=start, end=end)


def _side(month_word: str | None, year: str) -> date:
    month = resolve_month(month_word) if month_word else None
    return date(int(year), month or 1, 1)


def extract_periods(text: str, today: date | None = None) -> list[ExperiencePeriod]:
    """All valid employment periods mentioned in text, in text order."""
    today = today or date.today()
    current = today.replace(day=1)
    periods: list[ExperiencePeriod] = []

    for m in DATE_RANGE_RE.finditer(text):
        start = _side(m.group(1), m.group(2))
        end = current if m.group(5) else _side(m.group(3), m.group(4))
        period = _valid_period(start, end, today)
        if period is not None:
            periods.append(period)

    return periods


def merge_periods(periods: list[ExperiencePeriod]) -> list[ExperiencePeriod]:
    """Union of periods: sorted, pairwise non-overlapping and non-touching.

    Idempotent: merging an already-merged list returns an equal list.
    """
    merged: list[ExperiencePeriod] = []
    for period in sorted(periods, key=lambda p: (p.start, p.end)):
        if merged and period.start <= merged[-1].end:
            last = merged[-1]
            if period.end > last.end:
                merged[-1] = ExperiencePeriod(start=last.start, end=period.end)
        else:
            merged.append(period)
    return merged


def total_months(periods: list[ExperiencePeriod]) -> int:
    return sum(p.months for p in merge_periods(periods))


def _finalize(years: float) -> float:
    """Clamp to [0, 40], round to whole months, report with 2 decimals."""
    years = max(0.0, min(MAX_YEARS, years))
    months = round(years * 12)
    return round(months / 12, 2)


def estimate_years(text: str, today: date | None = None) -> float:
    """Total years of experience from resume text alone."""
    if not text or not text.strip():
        return 0.0

    periods = extract_periods(text, today=today)
    if periods:
        months = total_months(periods)
        logger.debug("Experience: %d periods, %d merged months", len(periods), months)
        return _finalize(months / 12)

    mention = YEARS_MENTION_RE.search(text)
    if mention:
        return _finalize(float(mention.group(1)))
    return 0.0


def _usable(value: float | None) -> bool:
    return value is not None and math.isfinite(value) and value > 0


def resolve_years(
    text_years: float,
    profile_years: float | None = None,
    grade_years: float | None = None,
) -> float:
    """Pick the experience figure with explicit precedence.

    1. profile extraction value, when finite and positive
    2. the text estimate
    3. grading estimate, only when the text estimate found nothing
    """
    if _usable(profile_years):
        return _finalize(profile_years)
    if text_years > 0:
        return _finalize(text_years)
    if _usable(grade_years):
        return _finalize(grade_years)
    return 0.0
