"""Education Fit Mapper: free-text education -> coarse level -> 0-1 fit.

The scale is intentionally coarse and ordinal-ish rather than a strict
hierarchy check; ties favor the candidate.
"""

import re
from enum import Enum


class EducationLevel(str, Enum):
    PHD = "PhD"
    MASTER = "Master"
    BACHELOR = "Bachelor"
    INTERMEDIATE_OR_HIGH_SCHOOL = "Intermediate/High School"
    UNKNOWN = "Unknown"


# Order matters: check highest first
DEGREE_PATTERNS: dict[EducationLevel, re.Pattern] = {
    EducationLevel.PHD: re.compile(r"\bph\.?\s?d\b|\bdoctor", re.IGNORECASE),
    EducationLevel.MASTER: re.compile(r"master|\bm\.?sc\b|\bm\.?s\b\.?|\bmba\b", re.IGNORECASE),
    EducationLevel.BACHELOR: re.compile(r"bachelor|\bb\.?sc\b|\bb\.?s\b\.?|\bb\.?a\b\.?", re.IGNORECASE),
    EducationLevel.INTERMEDIATE_OR_HIGH_SCHOOL: re.compile(
        r"intermediate|high\s*school|\bhs\b|secondary school", re.IGNORECASE
    ),
}

NO_REQUIREMENT_FIT = 0.7


def map_education_level(text: str | None) -> EducationLevel:
    """Highest recognizable degree level mentioned in ``text``."""
    if not text or not text.strip():
        return EducationLevel.UNKNOWN
    for level, pattern in DEGREE_PATTERNS.items():
        if pattern.search(text):
            return level
    return EducationLevel.UNKNOWN


def education_label(text: str | None) -> str:
    """Level name when recognized, otherwise the raw text passed through."""
    level = map_education_level(text)
    if level is not EducationLevel.UNKNOWN:
        return level.value
    return (text or "").strip()


def education_fit(required: str | None, have: str | None) -> float:
    """Score the candidate's education against the required level.

    Both arguments are free text or level names. No requirement gives a
    neutral-positive 0.7.
    """
    if not required or not required.strip():
        return NO_REQUIREMENT_FIT

    req = map_education_level(required)
    got = map_education_level(have)

    if req is EducationLevel.PHD:
        return 1.0 if got is EducationLevel.PHD else 0.6
    if req is EducationLevel.MASTER:
        if got in (EducationLevel.MASTER, EducationLevel.PHD):
            return 1.0
        return 0.7 if got is EducationLevel.BACHELOR else 0.4
    if req is EducationLevel.BACHELOR:
        if got in (EducationLevel.BACHELOR, EducationLevel.MASTER, EducationLevel.PHD):
            return 1.0
        return 0.5
    return 0.7 if have and have.strip() else 0.3
