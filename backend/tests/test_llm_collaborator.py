import pytest

from models.requests import JobRequirement
from models.responses import CandidateResult
from services import gemini_client
from services.errors import CollaboratorError
from services.llm_collaborator import GeminiCollaborator


def _reply_with(monkeypatch, payload):
    prompts = []

    async def fake_generate_json(prompt, label, temperature=0.0):
        prompts.append((label, prompt))
        return payload

    monkeypatch.setattr(gemini_client, "generate_json", fake_generate_json)
    return prompts


class TestGeminiCollaborator:
    @pytest.mark.asyncio
    async def test_profile_junk_values_are_coerced(self, monkeypatch):
        _reply_with(monkeypatch, {
            "name": "Ann Lee",
            "email": None,
            "yearsExperience": "lots",
            "skills": ["Python", 3, None, "  "],
            "education": [{"degree": "BSc", "field": "Physics"}, "junk"],
        })
        profile = await GeminiCollaborator().extract_profile("resume text")
        assert profile.name == "Ann Lee"
        assert profile.email is None
        assert profile.years_experience is None
        assert profile.skills == ["Python", "3"]
        assert profile.education[0].describe() == "BSc Physics"

    @pytest.mark.asyncio
    async def test_non_object_reply_is_an_error(self, monkeypatch):
        _reply_with(monkeypatch, ["not", "an", "object"])
        with pytest.raises(CollaboratorError, match="JSON object"):
            await GeminiCollaborator().extract_profile("resume text")

    @pytest.mark.asyncio
    async def test_grade_score_is_clamped(self, monkeypatch):
        _reply_with(monkeypatch, {"score": 150, "strengths": ["ADP"], "yearsExperienceEstimate": 6})
        grade = await GeminiCollaborator().grade("jd", "resume")
        assert grade.score == 100
        assert grade.strengths == ["ADP"]
        assert grade.years_experience_estimate == 6.0

    @pytest.mark.asyncio
    async def test_requirements_accept_bare_strings(self, monkeypatch):
        prompts = _reply_with(monkeypatch, {
            "must": ["payroll", {"name": "ADP", "synonyms": ["automatic data processing", 7]}],
            "nice": "junk",
        })
        draft = await GeminiCollaborator().derive_requirements("Payroll specialist, ADP")
        assert [d.name for d in draft.must] == ["payroll", "ADP"]
        assert draft.must[1].synonyms == ["automatic data processing"]
        assert draft.nice == []
        assert prompts[0][0] == "jd-keywords"
        assert "Payroll specialist, ADP" in prompts[0][1]

    @pytest.mark.asyncio
    async def test_questions_ignore_unknown_candidates(self, monkeypatch):
        _reply_with(monkeypatch, {"questions": {"c1": ["Why ADP?", ""], "zz": ["Who?"]}})
        job = JobRequirement(title="Payroll Specialist", description="ADP payroll")
        candidates = [CandidateResult(id="c1", filename="a.txt")]
        questions = await GeminiCollaborator().generate_questions(job, candidates)
        assert questions == {"c1": ["Why ADP?"]}

    @pytest.mark.asyncio
    async def test_questions_missing_object(self, monkeypatch):
        _reply_with(monkeypatch, {"oops": []})
        job = JobRequirement(title="Payroll Specialist", description="ADP payroll")
        with pytest.raises(CollaboratorError):
            await GeminiCollaborator().generate_questions(job, [CandidateResult(id="c1", filename="a.txt")])
