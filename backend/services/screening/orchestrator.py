"""Batch Orchestrator: screen up to ``max_batch_files`` resumes against one job.

Flow: validate batch -> requirement set + domain tokens (once) -> per file,
under the admission gate: decode -> optional profile/grading calls ->
evidence, experience, education -> composite score -> CandidateResult.

Per-file failures become ``FileError`` entries and never abort the batch.
Collaborator failures only degrade the affected candidate.
"""

import asyncio
import logging
import uuid
from collections import Counter
from pathlib import Path
from typing import Awaitable, Callable, NamedTuple, TypeVar

from config import settings
from models.requests import JobRequirement
from models.responses import BatchMeta, BatchResponse, CandidateResult, FileError
from models.schemas.collaborator_outputs import CandidateGrade, ProfileExtraction
from models.schemas.requirement_set import RequirementSet
from models.schemas.resume_document import ResumeDocument, ResumeFile
from services import document_parser
from services.errors import BatchInputError, CollaboratorError, DocumentExtractionError
from services.llm_collaborator import ScreeningCollaborator
from services.report import format_candidate_text
from services.screening.admission import AdmissionGate
from services.screening.composite_scorer import build_scorecard
from services.screening.domain_gate import infer_domain_tokens, is_domain_match
from services.screening.education_fit import (
    EducationLevel,
    education_fit,
    education_label,
    map_education_level,
)
from services.screening.evidence_scorer import score_evidence
from services.screening.experience_estimator import estimate_years, resolve_years
from services.screening.requirement_extractor import extract_requirements
from services.section_parser import extract_contact_info, parse_sections
from services.text_normalizer import STOP_WORDS, cosine_similarity, frequency_bag

logger = logging.getLogger(__name__)

T = TypeVar("T")
Extractor = Callable[[bytes, str], str]

MAX_SKILLS = 40


class BatchContext(NamedTuple):
    """Everything computed once per batch and shared read-only by every file."""

    job: JobRequirement
    requirement_set: RequirementSet
    domain_tokens: list[str]
    jd_bag: Counter


def validate_batch(job: JobRequirement, files: list[ResumeFile], max_files: int) -> None:
    if not job.description.strip():
        raise BatchInputError("Job description is required")
    if not files:
        raise BatchInputError("At least one resume file is required")
    if len(files) > max_files:
        raise BatchInputError(f"Too many files: {len(files)} (max {max_files})")


async def build_context(
    job: JobRequirement, collaborator: ScreeningCollaborator | None = None
) -> BatchContext:
    requirement_set = await extract_requirements(job, collaborator)
    domain_tokens = infer_domain_tokens(job.title, job.description)
    logger.info("Domain tokens: %s", ", ".join(domain_tokens))
    return BatchContext(job, requirement_set, domain_tokens, frequency_bag(job.jd_text))


async def _optional(call: Awaitable[T], label: str, filename: str) -> T | None:
    """Await an optional collaborator call, turning failure into ``None``."""
    try:
        return await call
    except CollaboratorError as e:
        logger.warning("%s unavailable for %s, using heuristics: %s", label, filename, e)
        return None


def merge_skills(profile_skills: list[str], matched: tuple[str, ...]) -> list[str]:
    """Insertion-ordered union of model skills and evidence matches."""
    seen: set[str] = set()
    skills: list[str] = []
    for skill in [*profile_skills, *matched]:
        name = " ".join(skill.split())
        key = name.lower()
        if len(key) < 2 or key in STOP_WORDS or key in seen:
            continue
        seen.add(key)
        skills.append(name)
    return skills[:MAX_SKILLS]


def education_source(
    profile: ProfileExtraction, grade: CandidateGrade | None, text: str
) -> str:
    """Candidate's education text: profile entry, then grading summary, then resume scan."""
    for entry in profile.education:
        described = entry.describe()
        if described:
            return described
    if grade is not None and grade.education_summary:
        return grade.education_summary
    level = map_education_level(parse_sections(text).get("education", ""))
    return "" if level is EducationLevel.UNKNOWN else level.value


async def evaluate_document(
    document: ResumeDocument,
    context: BatchContext,
    collaborator: ScreeningCollaborator | None = None,
) -> CandidateResult:
    """Run the full pipeline over one decoded resume."""
    job = context.job
    text = document.text
    domain_match = is_domain_match(text, context.domain_tokens)

    profile_result: ProfileExtraction | None = None
    grade: CandidateGrade | None = None
    degraded = False
    if collaborator is not None:
        calls = [_optional(collaborator.extract_profile(text), "Profile extraction", document.filename)]
        want_grade = domain_match and settings.enable_grading
        if want_grade:
            calls.append(_optional(collaborator.grade(job.jd_text, text), "Grading", document.filename))
        results = await asyncio.gather(*calls)
        profile_result = results[0]
        if want_grade:
            grade = results[1]
        degraded = any(r is None for r in results)
    profile = profile_result or ProfileExtraction()

    evidence = score_evidence(text, context.requirement_set)
    years = resolve_years(
        estimate_years(text),
        profile_years=profile.years_experience,
        grade_years=grade.years_experience_estimate if grade is not None else None,
    )

    edu_text = education_source(profile, grade, text)
    edu_fit = education_fit(job.education_level, edu_text)
    edu_label = education_label(edu_text) or EducationLevel.UNKNOWN.value

    card = build_scorecard(
        evidence,
        years=years,
        min_years=job.min_years_experience,
        edu_fit=edu_fit,
        edu_label=edu_label,
        domain_match=domain_match,
        grade=grade,
        required_education=job.education_level,
    )
    contact = extract_contact_info(text)

    result = CandidateResult(
        id=uuid.uuid4().hex,
        filename=document.filename,
        name=profile.name or Path(document.filename).stem,
        email=profile.email or contact["email"] or "",
        phone=profile.phone or contact["phone"] or "",
        location=profile.location or "",
        headline=profile.headline or "",
        summary=profile.summary or "",
        years_experience=years,
        education_label=edu_label,
        education_summary=(grade.education_summary if grade is not None else None) or "",
        skills=merge_skills(profile.skills, evidence.matched),
        match_score=card.match_score,
        skills_evidence_pct=card.skills_evidence_pct,
        score_breakdown=card.breakdown,
        matched_requirements=list(evidence.matched),
        missing_requirements=list(evidence.missing),
        strengths=list(card.strengths),
        weaknesses=list(card.weaknesses),
        gaps=list(card.gaps),
        mentoring_needs=list(card.mentoring_needs),
        questions=list(card.questions),
        domain_mismatch=not domain_match,
        domain_similarity=round(cosine_similarity(context.jd_bag, frequency_bag(text)), 4),
        degraded=degraded,
    )
    return result.model_copy(update={"formatted": format_candidate_text(result)})


async def screen_resume(
    file: ResumeFile,
    context: BatchContext,
    collaborator: ScreeningCollaborator | None = None,
    extractor: Extractor = document_parser.extract_text,
    max_bytes: int | None = None,
) -> CandidateResult:
    """Decode one uploaded file and screen it.

    Raises DocumentExtractionError for oversized or unreadable files.
    """
    max_bytes = settings.max_upload_size_mb * 1024 * 1024 if max_bytes is None else max_bytes
    if len(file.content) > max_bytes:
        raise DocumentExtractionError(
            file.filename, f"file too large ({len(file.content)} bytes, max {max_bytes})"
        )
    text = await asyncio.to_thread(extractor, file.content, file.filename)
    return await evaluate_document(
        ResumeDocument(filename=file.filename, text=text), context, collaborator
    )


async def screen_batch(
    job: JobRequirement,
    files: list[ResumeFile],
    gate: AdmissionGate | None = None,
    collaborator: ScreeningCollaborator | None = None,
    extractor: Extractor = document_parser.extract_text,
    max_files: int | None = None,
    max_bytes: int | None = None,
) -> BatchResponse:
    """Screen a batch of resumes with bounded concurrency.

    Raises BatchInputError before any work starts when the batch itself is
    invalid. Candidates come back stably sorted by descending match score.
    """
    validate_batch(job, files, settings.max_batch_files if max_files is None else max_files)
    gate = gate or AdmissionGate(settings.max_concurrency)
    context = await build_context(job, collaborator)

    candidates: list[CandidateResult] = []
    errors: list[FileError] = []

    async def run(file: ResumeFile) -> None:
        async with gate:
            try:
                result = await screen_resume(file, context, collaborator, extractor, max_bytes)
            except DocumentExtractionError as e:
                logger.warning("Skipping %s: %s", file.filename, e.reason)
                errors.append(FileError(file=file.filename, message=e.reason))
            except Exception as e:
                logger.exception("Unexpected failure screening %s", file.filename)
                errors.append(FileError(file=file.filename, message=f"Screening failed: {e}"))
            else:
                candidates.append(result)

    await asyncio.gather(*(run(f) for f in files))

    candidates.sort(key=lambda c: -c.match_score)
    logger.info(
        "Screened %d files: %d candidates, %d errors, peak concurrency %d",
        len(files), len(candidates), len(errors), gate.peak_in_flight,
    )
    return BatchResponse(
        candidates=candidates,
        errors=errors,
        meta=BatchMeta(
            requirement_set=context.requirement_set,
            domain_tokens=context.domain_tokens,
            peak_concurrency=gate.peak_in_flight,
        ),
    )
