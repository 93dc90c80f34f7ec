from pydantic import BaseModel, ConfigDict

from models.schemas.requirement_set import RequirementSet


class ScoreBreakdown(BaseModel):
    """Individual 0-1 signals behind a match score, kept for auditing."""

    model_config = ConfigDict(frozen=True)

    coverage: float = 0.0
    experience_fit: float = 0.0
    education_fit: float = 0.0
    model_grade: float = 0.0


class CandidateResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    filename: str
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    headline: str = ""
    summary: str = ""
    years_experience: float = 0.0
    education_label: str = ""
    education_summary: str = ""
    skills: list[str] = []
    match_score: int = 0  # 0-100
    skills_evidence_pct: int = 0  # 0-100
    score_breakdown: ScoreBreakdown = ScoreBreakdown()
    matched_requirements: list[str] = []
    missing_requirements: list[str] = []
    strengths: list[str] = []
    weaknesses: list[str] = []
    gaps: list[str] = []
    mentoring_needs: list[str] = []
    questions: list[str] = []
    domain_mismatch: bool = False
    domain_similarity: float = 0.0  # informational only, not scored
    degraded: bool = False  # an optional model call failed for this file
    formatted: str = ""


class FileError(BaseModel):
    file: str
    message: str


class BatchMeta(BaseModel):
    requirement_set: RequirementSet
    domain_tokens: list[str] = []
    peak_concurrency: int = 0


class BatchResponse(BaseModel):
    candidates: list[CandidateResult] = []
    errors: list[FileError] = []
    meta: BatchMeta


class QuestionsResponse(BaseModel):
    questions: dict[str, list[str]] = {}  # candidate id -> questions
    generated_by: str = "heuristic"  # "model" | "heuristic"
