from pydantic import BaseModel, ConfigDict, Field

from models.responses import CandidateResult


class JobRequirement(BaseModel):
    """The job a batch of resumes is screened against. Immutable per batch."""

    model_config = ConfigDict(frozen=True)

    title: str = Field("", max_length=300)
    description: str = Field("", max_length=20000, description="Free-text job description")
    min_years_experience: float | None = Field(None, ge=0, le=60)
    education_level: str | None = Field(None, max_length=100)

    @property
    def jd_text(self) -> str:
        """Title, description and education preference as one prompt-ready block."""
        parts = [self.title.strip(), self.description.strip()]
        if self.education_level:
            parts.append(f"Education pref: {self.education_level.strip()}")
        return "\n\n".join(p for p in parts if p)


class QuestionsRequest(BaseModel):
    job_requirements: JobRequirement
    top_candidates: list[CandidateResult] = Field(..., min_length=1, max_length=10)


class ExportRequest(BaseModel):
    candidates: list[CandidateResult] = []
