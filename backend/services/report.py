"""Human-readable renderings of screening results: summary text, CSV, fallback questions."""

import csv
import io
import math

from models.responses import CandidateResult

PLACEHOLDER = "-"
MAX_FALLBACK_QUESTIONS = 5

CSV_HEADERS = [
    "Rank",
    "Name",
    "Email",
    "Phone",
    "Title",
    "Match Score",
    "Years Experience",
    "Education",
    "Skills",
    "Strengths",
    "Weaknesses",
    "DomainMismatch",
]


def format_experience(years: float | None) -> str:
    """0.5 -> "6 months", 2.0 -> "2 years", 2.25 -> "2 yr 3 mo"."""
    if years is None or not math.isfinite(years) or years < 0:
        return PLACEHOLDER
    months = round(years * 12)
    if months < 12:
        return f"{months} month{'' if months == 1 else 's'}"
    y, rem = divmod(months, 12)
    if rem == 0:
        return f"{y} year{'' if y == 1 else 's'}"
    return f"{y} yr {rem} mo"


def _bullets(items: list[str]) -> str:
    if not items:
        return f"  * {PLACEHOLDER}"
    return "\n".join(f"  * {item}" for item in items)


def format_candidate_text(c: CandidateResult) -> str:
    """Plain-text candidate card, suitable for pasting into notes or email."""
    years = format_experience(c.years_experience) if c.years_experience > 0 else PLACEHOLDER
    questions = (
        "\n".join(f"  {i}. {q}" for i, q in enumerate(c.questions, start=1))
        or f"  {PLACEHOLDER}"
    )
    lines = [
        f"Candidate: {c.name or c.filename}",
        "",
        "Personal Information",
        f"  * Email: {c.email or PLACEHOLDER}",
        f"  * Phone: {c.phone or PLACEHOLDER}",
        f"  * Location: {c.location or PLACEHOLDER}",
        "",
        "Professional Summary",
        f"  {c.summary or PLACEHOLDER}",
        "",
        "Match Breakdown",
        f"  * Overall Match: {c.match_score}%",
        f"  * Experience: {years}",
        f"  * Skills & Evidence: {c.skills_evidence_pct}%",
        f"  * Education: {c.education_label or PLACEHOLDER}",
    ]
    if c.domain_mismatch:
        lines.append("  * Domain: does not match the job")
    lines += [
        "",
        "Skills",
        f"  {', '.join(c.skills) or PLACEHOLDER}",
        "",
        "Interview Questions",
        questions,
        "",
        "Strengths",
        _bullets(c.strengths),
        "",
        "Areas for Improvement",
        _bullets(c.weaknesses),
        "",
        "Identified Gaps (vs JD)",
        _bullets(c.gaps),
        "",
        "Mentoring Needs",
        _bullets(c.mentoring_needs),
    ]
    return "\n".join(lines) + "\n"


def candidates_to_csv(candidates: list[CandidateResult]) -> str:
    """Ranked CSV export; rows keep the order they are given in."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for rank, c in enumerate(candidates, start=1):
        writer.writerow([
            rank,
            c.name,
            c.email,
            c.phone,
            c.headline,
            f"{c.match_score}%",
            c.years_experience,
            c.education_label,
            "; ".join(c.skills),
            "; ".join(c.strengths),
            "; ".join(c.weaknesses),
            "Yes" if c.domain_mismatch else "No",
        ])
    return buf.getvalue()


def fallback_questions(c: CandidateResult) -> list[str]:
    """Interview questions built from a candidate's gaps and matches.

    Used when the question-generation call is unavailable. Candidates whose
    domain does not match the job get none.
    """
    if c.domain_mismatch:
        return []
    questions = [
        f"Walk us through any hands-on experience you have with {term}."
        for term in c.missing_requirements[:3]
    ]
    questions += [
        f"Describe a recent result you delivered using {term}."
        for term in c.matched_requirements[:2]
    ]
    return questions[:MAX_FALLBACK_QUESTIONS]
