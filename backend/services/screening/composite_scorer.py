"""Composite Scorer & Narrative Builder.

overall = 0.55*coverage + 0.25*experience_fit + 0.10*education_fit + 0.10*model_grade

A failed domain gate forces the score to 0 and drops interview questions;
every signal is still computed and kept in the breakdown. The narrative
always carries deterministic lines built from the evidence, so a result is
explainable with the language model switched off.
"""

import logging

from models.responses import ScoreBreakdown
from models.schemas.collaborator_outputs import CandidateGrade
from models.schemas.evidence_result import EvidenceResult
from models.schemas.narrative import ScoreCard

logger = logging.getLogger(__name__)

W_COVERAGE = 0.55
W_EXPERIENCE = 0.25
W_EDUCATION = 0.10
W_MODEL = 0.10

MAX_MODEL_ITEMS = 5
MAX_ITEM_CHARS = 240
MISSING_SUMMARY_TERMS = 8
MENTORING_TOPICS = 3
MAX_QUESTIONS = 8


def clamp01(n: float) -> float:
    return max(0.0, min(1.0, n))


def experience_fit(years: float, min_years: float | None) -> float:
    """Full credit without a requirement, otherwise the capped ratio.

    A minimum of 0 (or below) asks for nothing, so it counts as no requirement
    rather than a ratio against the 0.1-year floor.
    """
    if min_years is None or min_years <= 0:
        return 1.0
    return clamp01(years / max(0.1, min_years))


def composite(
    coverage: float,
    exp_fit: float,
    edu_fit: float,
    model_grade: float,
    domain_match: bool,
) -> int:
    """Weighted 0-100 match score; 0 when the domain gate failed."""
    if not domain_match:
        return 0
    overall = (
        W_COVERAGE * coverage
        + W_EXPERIENCE * exp_fit
        + W_EDUCATION * edu_fit
        + W_MODEL * model_grade
    )
    return round(100 * clamp01(overall))


def _cap(items: list[str]) -> list[str]:
    capped: list[str] = []
    for item in items[:MAX_MODEL_ITEMS]:
        if len(item) > MAX_ITEM_CHARS:
            item = item[:MAX_ITEM_CHARS - 3].rstrip() + "..."
        capped.append(item)
    return capped


def _fmt_years(years: float) -> str:
    return f"{years:g}"


def _deterministic_strengths(
    evidence: EvidenceResult,
    years: float,
    min_years: float | None,
    edu_fit: float,
    edu_label: str,
) -> list[str]:
    strengths: list[str] = []
    if evidence.matched:
        strengths.append(f"Evidence found for: {', '.join(evidence.matched[:MISSING_SUMMARY_TERMS])}")
    if min_years and years >= min_years:
        strengths.append(
            f"{_fmt_years(years)} years of experience meets the {_fmt_years(min_years)}-year minimum"
        )
    elif not min_years and years > 0:
        strengths.append(f"{_fmt_years(years)} years of experience")
    if edu_fit >= 1.0 and edu_label:
        strengths.append(f"Education ({edu_label}) meets the requirement")
    return strengths


def _deterministic_weaknesses(
    years: float,
    min_years: float | None,
    edu_fit: float,
    required_education: str | None,
) -> list[str]:
    weaknesses: list[str] = []
    if min_years and years < min_years:
        weaknesses.append(
            f"Experience below the {_fmt_years(min_years)}-year minimum "
            f"({_fmt_years(years)} years found)"
        )
    if required_education and edu_fit < 0.7:
        weaknesses.append(f"Education below the stated requirement ({required_education})")
    return weaknesses


def build_scorecard(
    evidence: EvidenceResult,
    years: float,
    min_years: float | None,
    edu_fit: float,
    edu_label: str,
    domain_match: bool,
    grade: CandidateGrade | None = None,
    required_education: str | None = None,
) -> ScoreCard:
    """Combine all signals into the final score and narrative lists."""
    exp_fit = experience_fit(years, min_years)
    model_grade = grade.score / 100 if grade is not None else 0.0
    match_score = composite(evidence.coverage, exp_fit, edu_fit, model_grade, domain_match)

    breakdown = ScoreBreakdown(
        coverage=round(evidence.coverage, 4),
        experience_fit=round(exp_fit, 4),
        education_fit=round(edu_fit, 4),
        model_grade=round(model_grade, 4),
    )

    model_strengths = _cap(grade.strengths) if grade is not None else []
    model_weaknesses = _cap(grade.weaknesses) if grade is not None else []

    strengths = model_strengths or _deterministic_strengths(
        evidence, years, min_years, edu_fit, edu_label
    )
    weaknesses = model_weaknesses or _deterministic_weaknesses(
        years, min_years, edu_fit, required_education
    )

    missing = list(evidence.missing)
    if missing:
        weaknesses.append(f"Missing vs JD: {', '.join(missing[:MISSING_SUMMARY_TERMS])}")
    if not domain_match:
        weaknesses.insert(0, "Resume vocabulary does not match the job's domain; score set to 0")

    questions: list[str] = []
    if domain_match and grade is not None:
        questions = grade.questions[:MAX_QUESTIONS]

    return ScoreCard(
        match_score=match_score,
        skills_evidence_pct=round(100 * clamp01(evidence.coverage)),
        breakdown=breakdown,
        strengths=tuple(strengths),
        weaknesses=tuple(weaknesses),
        gaps=tuple(f"Missing requirement: {term}" for term in missing),
        mentoring_needs=tuple(f"Coaching on {term}" for term in missing[:MENTORING_TOPICS]),
        questions=tuple(questions),
    )
