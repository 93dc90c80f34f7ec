"""Composite Scorer output: score plus human-readable rationale."""

from pydantic import BaseModel, ConfigDict

from models.responses import ScoreBreakdown


class ScoreCard(BaseModel):
    model_config = ConfigDict(frozen=True)

    match_score: int = 0  # 0-100, forced to 0 on domain mismatch
    skills_evidence_pct: int = 0  # 0-100
    breakdown: ScoreBreakdown = ScoreBreakdown()
    strengths: tuple[str, ...] = ()
    weaknesses: tuple[str, ...] = ()
    gaps: tuple[str, ...] = ()
    mentoring_needs: tuple[str, ...] = ()
    questions: tuple[str, ...] = ()
