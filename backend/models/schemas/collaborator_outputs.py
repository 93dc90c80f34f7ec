"""Typed contracts for the optional language-model collaborator.

Every field is optional. The model may return partial objects, wrong types or
junk values; validators coerce those to ``None`` / empty lists instead of
failing, so one bad field never discards the rest of the response. Merge
precedence against the deterministic signals lives in the screening stages,
not here.
"""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


def _opt_text(v: Any) -> str | None:
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        v = str(v)
    if not isinstance(v, str):
        return None
    v = v.strip()
    return v or None


def _text_list(v: Any) -> list[str]:
    if not isinstance(v, list):
        return []
    out: list[str] = []
    for item in v:
        text = _opt_text(item)
        if text:
            out.append(text)
    return out


def _opt_number(v: Any) -> float | None:
    if isinstance(v, bool) or v is None:
        return None
    try:
        num = float(v)
    except (TypeError, ValueError):
        return None
    return num if math.isfinite(num) else None


class EducationEntry(BaseModel):
    model_config = _CONFIG

    degree: str | None = None
    field: str | None = None
    institution: str | None = None

    @field_validator("degree", "field", "institution", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str | None:
        return _opt_text(v)

    def describe(self) -> str:
        return " ".join(p for p in (self.degree, self.field, self.institution) if p)


class ProfileExtraction(BaseModel):
    """Structured profile pulled out of a resume by the model."""

    model_config = _CONFIG

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    headline: str | None = None
    summary: str | None = None
    skills: list[str] = []
    years_experience: float | None = None
    education: list[EducationEntry] = []

    @field_validator("name", "email", "phone", "location", "headline", "summary", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str | None:
        return _opt_text(v)

    @field_validator("skills", mode="before")
    @classmethod
    def _skills(cls, v: Any) -> list[str]:
        return _text_list(v)

    @field_validator("years_experience", mode="before")
    @classmethod
    def _years(cls, v: Any) -> float | None:
        return _opt_number(v)

    @field_validator("education", mode="before")
    @classmethod
    def _education(cls, v: Any) -> list[Any]:
        if not isinstance(v, list):
            return []
        return [e for e in v if isinstance(e, (dict, EducationEntry))]


class CandidateGrade(BaseModel):
    """Recruiter-style grading of one resume against the JD."""

    model_config = _CONFIG

    score: float = 0.0  # 0-100
    matched_skills: list[str] = []
    missing_skills: list[str] = []
    strengths: list[str] = []
    weaknesses: list[str] = []
    questions: list[str] = []
    years_experience_estimate: float | None = None
    education_summary: str | None = None

    @field_validator("score", mode="before")
    @classmethod
    def _score(cls, v: Any) -> float:
        num = _opt_number(v)
        if num is None:
            return 0.0
        return max(0.0, min(100.0, num))

    @field_validator(
        "matched_skills", "missing_skills", "strengths", "weaknesses", "questions",
        mode="before",
    )
    @classmethod
    def _lists(cls, v: Any) -> list[str]:
        return _text_list(v)

    @field_validator("years_experience_estimate", mode="before")
    @classmethod
    def _years(cls, v: Any) -> float | None:
        return _opt_number(v)

    @field_validator("education_summary", mode="before")
    @classmethod
    def _edu(cls, v: Any) -> str | None:
        return _opt_text(v)
