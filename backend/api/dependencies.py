"""Shared dependencies for API routes."""

from config import settings
from services.llm_collaborator import GeminiCollaborator, ScreeningCollaborator
from services.screening.admission import AdmissionGate


def get_collaborator() -> ScreeningCollaborator | None:
    """Gemini collaborator when an API key is configured, else heuristics only."""
    if not settings.gemini_api_key:
        return None
    return GeminiCollaborator()


def get_admission_gate() -> AdmissionGate:
    """A fresh gate per request, so each batch gets its own ceiling."""
    return AdmissionGate(settings.max_concurrency)
