import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import Response
from pydantic import ValidationError
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_admission_gate, get_collaborator
from config import settings
from models.requests import ExportRequest, JobRequirement, QuestionsRequest
from models.responses import BatchResponse, QuestionsResponse
from models.schemas.resume_document import ResumeFile
from services import report
from services.errors import BatchInputError, CollaboratorError
from services.llm_collaborator import ScreeningCollaborator
from services.screening import orchestrator
from services.screening.admission import AdmissionGate

logger = logging.getLogger(__name__)

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "gemini_configured": bool(settings.gemini_api_key),
        "max_concurrency": settings.max_concurrency,
        "max_batch_files": settings.max_batch_files,
    }


@router.post("/screen", response_model=BatchResponse)
@limiter.limit("10/minute")
async def screen(
    request: Request,
    job_requirements: str = Form(...),
    resumes: list[UploadFile] = File(...),
    collaborator: ScreeningCollaborator | None = Depends(get_collaborator),
    gate: AdmissionGate = Depends(get_admission_gate),
):
    try:
        job = JobRequirement.model_validate_json(job_requirements)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid job_requirements: {e.error_count()} errors")

    if len(resumes) > settings.max_batch_files:
        raise HTTPException(
            status_code=400,
            detail=f"Too many files. Max: {settings.max_batch_files}",
        )

    files = [
        ResumeFile(filename=upload.filename or f"resume-{i + 1}", content=await upload.read())
        for i, upload in enumerate(resumes)
    ]

    try:
        return await orchestrator.screen_batch(job, files, gate=gate, collaborator=collaborator)
    except BatchInputError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/questions", response_model=QuestionsResponse)
@limiter.limit("20/minute")
async def questions(
    request: Request,
    body: QuestionsRequest,
    collaborator: ScreeningCollaborator | None = Depends(get_collaborator),
):
    generated: dict[str, list[str]] = {}
    if collaborator is not None:
        try:
            generated = await collaborator.generate_questions(body.job_requirements, body.top_candidates)
        except CollaboratorError as e:
            logger.warning("Question generation unavailable, using gap-based questions: %s", e)

    result: dict[str, list[str]] = {}
    for candidate in body.top_candidates:
        if candidate.domain_mismatch:
            result[candidate.id] = []
        else:
            result[candidate.id] = generated.get(candidate.id) or report.fallback_questions(candidate)

    return QuestionsResponse(
        questions=result,
        generated_by="model" if generated else "heuristic",
    )


@router.post("/export/csv")
@limiter.limit("30/minute")
async def export_csv(request: Request, body: ExportRequest):
    return Response(
        content=report.candidates_to_csv(body.candidates),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="candidate_rankings.csv"'},
    )
