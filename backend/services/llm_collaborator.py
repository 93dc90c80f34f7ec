"""Optional language-model collaborator for the screening pipeline.

The engine only depends on the ``ScreeningCollaborator`` protocol; any object
with these four coroutines can stand in (tests use in-memory fakes). Every
failure surfaces as ``CollaboratorError``.
"""

import logging
from typing import Any, Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from models.requests import JobRequirement
from models.responses import CandidateResult
from models.schemas.collaborator_outputs import CandidateGrade, ProfileExtraction
from models.schemas.requirement_set import RequirementDraft
from services import gemini_client, prompt_builder
from services.errors import CollaboratorError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class ScreeningCollaborator(Protocol):
    async def derive_requirements(self, jd_text: str) -> RequirementDraft: ...

    async def extract_profile(self, resume_text: str) -> ProfileExtraction: ...

    async def grade(self, jd_text: str, resume_text: str) -> CandidateGrade: ...

    async def generate_questions(
        self, job: JobRequirement, candidates: list[CandidateResult]
    ) -> dict[str, list[str]]: ...


def _validate(model: type[M], data: Any, label: str) -> M:
    if not isinstance(data, dict):
        raise CollaboratorError(label, f"expected a JSON object, got {type(data).__name__}")
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise CollaboratorError(label, f"unexpected response shape: {e.error_count()} errors") from e


def _question_map(data: Any, known_ids: set[str]) -> dict[str, list[str]]:
    if not isinstance(data, dict) or not isinstance(data.get("questions"), dict):
        raise CollaboratorError("generate-questions", "missing 'questions' object")
    out: dict[str, list[str]] = {}
    for cid, questions in data["questions"].items():
        if cid not in known_ids or not isinstance(questions, list):
            continue
        cleaned = [q.strip() for q in questions if isinstance(q, str) and q.strip()]
        if cleaned:
            out[cid] = cleaned
    return out


class GeminiCollaborator:
    """``ScreeningCollaborator`` backed by Google Gemini."""

    async def derive_requirements(self, jd_text: str) -> RequirementDraft:
        data = await gemini_client.generate_json(
            prompt_builder.build_keywords_prompt(jd_text), "jd-keywords"
        )
        return _validate(RequirementDraft, data, "jd-keywords")

    async def extract_profile(self, resume_text: str) -> ProfileExtraction:
        data = await gemini_client.generate_json(
            prompt_builder.build_profile_prompt(resume_text), "extract-profile"
        )
        return _validate(ProfileExtraction, data, "extract-profile")

    async def grade(self, jd_text: str, resume_text: str) -> CandidateGrade:
        data = await gemini_client.generate_json(
            prompt_builder.build_grading_prompt(jd_text, resume_text), "grade-candidate"
        )
        return _validate(CandidateGrade, data, "grade-candidate")

    async def generate_questions(
        self, job: JobRequirement, candidates: list[CandidateResult]
    ) -> dict[str, list[str]]:
        data = await gemini_client.generate_json(
            prompt_builder.build_questions_prompt(job, candidates),
            "generate-questions",
            temperature=0.4,
        )
        questions = _question_map(data, {c.id for c in candidates})
        logger.info("Generated questions for %d/%d candidates", len(questions), len(candidates))
        return questions
