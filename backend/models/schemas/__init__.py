"""Inter-stage Pydantic contracts for the screening pipeline."""

from models.schemas.collaborator_outputs import CandidateGrade, EducationEntry, ProfileExtraction
from models.schemas.evidence_result import EvidenceResult
from models.schemas.experience_period import ExperiencePeriod
from models.schemas.requirement_set import (
    DraftItem,
    RequirementDraft,
    RequirementItem,
    RequirementSet,
)

__all__ = [
    "CandidateGrade",
    "DraftItem",
    "EducationEntry",
    "EvidenceResult",
    "ExperiencePeriod",
    "ProfileExtraction",
    "RequirementDraft",
    "RequirementItem",
    "RequirementSet",
]
