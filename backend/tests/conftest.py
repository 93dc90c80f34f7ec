"""Shared test configuration, pytest markers and an in-memory collaborator."""

import asyncio
from collections import Counter

import pytest

from models.schemas.collaborator_outputs import CandidateGrade, ProfileExtraction
from models.schemas.requirement_set import RequirementDraft
from services.errors import CollaboratorError


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: exercises the HTTP surface end to end"
    )


class FakeCollaborator:
    """Stands in for the language model. Every call is counted.

    Names listed in ``fail`` raise CollaboratorError; ``delay`` makes each call
    yield to the event loop so concurrency can be observed.
    """

    def __init__(
        self,
        draft: RequirementDraft | None = None,
        profile: ProfileExtraction | None = None,
        grade: CandidateGrade | None = None,
        questions: dict[str, list[str]] | None = None,
        fail: tuple[str, ...] = (),
        delay: float = 0.0,
    ):
        self.draft = draft or RequirementDraft()
        self.profile = profile or ProfileExtraction()
        self.grade_result = grade or CandidateGrade()
        self.questions = questions or {}
        self.fail = set(fail)
        self.delay = delay
        self.calls: Counter = Counter()

    async def _call(self, name, value):
        self.calls[name] += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if name in self.fail:
            raise CollaboratorError(name, "simulated failure")
        return value

    async def derive_requirements(self, jd_text):
        return await self._call("derive_requirements", self.draft)

    async def extract_profile(self, resume_text):
        return await self._call("extract_profile", self.profile)

    async def grade(self, jd_text, resume_text):
        return await self._call("grade", self.grade_result)

    async def generate_questions(self, job, candidates):
        return await self._call("generate_questions", self.questions)


@pytest.fixture
def make_collaborator():
    return FakeCollaborator
