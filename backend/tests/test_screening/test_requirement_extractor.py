"""Tests for JD -> requirement set derivation."""

import pytest

from models.requests import JobRequirement
from models.schemas.requirement_set import DraftItem, RequirementDraft
from services.screening.requirement_extractor import (
    MAX_MUST,
    MAX_NICE,
    build_requirement_set,
    extract_requirements,
    heuristic_requirements,
    local_synonyms,
)

PAYROLL_JD = JobRequirement(
    title="Senior Payroll Specialist",
    description=(
        "Own end-to-end payroll processing in ADP. Ensure payroll compliance, "
        "tax filings and benefits deductions. Partner with HR on reconciliation."
    ),
    min_years_experience=5,
)


class TestLocalSynonyms:
    def test_separator_variants_and_plural(self):
        variants = local_synonyms("Payroll Compliance")
        assert variants[0] == "payroll compliance"
        for expected in ("payrollcompliance", "payroll-compliance", "payroll.compliance", "payroll compliances"):
            assert expected in variants

    def test_plural_toggle_drops_trailing_s(self):
        assert "benefit" in local_synonyms("benefits")

    def test_abbreviation_both_directions(self):
        assert "js" in local_synonyms("JavaScript")
        assert "human resources" in local_synonyms("hr")
        assert "machine learning ops" in local_synonyms("ml ops")

    def test_no_duplicates(self):
        variants = local_synonyms("python")
        assert len(variants) == len(set(variants))

    def test_empty(self):
        assert local_synonyms("   ") == []


class TestBuildRequirementSet:
    def test_dedupes_and_lowercases(self):
        rs = build_requirement_set(
            [DraftItem(name="ADP"), DraftItem(name="adp "), DraftItem(name="Payroll", synonyms=["Pay-roll"])],
            [DraftItem(name="adp"), DraftItem(name="Tax")],
            source="model",
        )
        assert [i.canonical_name for i in rs.must] == ["adp", "payroll"]
        assert [i.canonical_name for i in rs.nice] == ["tax"]
        assert "pay-roll" in rs.must[1].synonyms
        assert rs.source == "model"

    def test_drops_stop_word_names(self):
        rs = build_requirement_set([DraftItem(name="experience"), DraftItem(name="ADP")], [], "model")
        assert [i.canonical_name for i in rs.must] == ["adp"]

    def test_caps_tiers(self):
        many = [DraftItem(name=f"skill{i}") for i in range(30)]
        rs = build_requirement_set(many, many[::-1], "model")
        assert len(rs.must) == MAX_MUST
        assert len(rs.nice) == MAX_NICE

    def test_variants_start_with_canonical_name(self):
        rs = build_requirement_set([DraftItem(name="Payroll Compliance")], [], "model")
        assert rs.must[0].variants[0] == "payroll compliance"


class TestHeuristicRequirements:
    def test_most_frequent_terms_first(self):
        rs = heuristic_requirements("Python Python Python Django Django Flask")
        assert rs.must[0].canonical_name == "python"
        assert "django" in [i.canonical_name for i in rs.must]
        assert rs.source == "heuristic"

    def test_tiers_do_not_overlap(self):
        rs = heuristic_requirements(PAYROLL_JD.jd_text)
        must = {i.canonical_name for i in rs.must}
        nice = {i.canonical_name for i in rs.nice}
        assert len(rs.must) <= MAX_MUST
        assert len(rs.nice) <= MAX_NICE
        assert not must & nice
        assert "payroll" in must

    def test_realistic_jd_has_no_filler_items(self):
        rs = heuristic_requirements(
            "Python Developer\n"
            "We need someone to build backend services in Python with Django and PostgreSQL. "
            "You will design REST APIs and deploy them to the cloud."
        )
        names = [i.canonical_name for i in rs.must + rs.nice]
        assert names[0] == "python"
        assert {"django", "postgresql", "backend"} <= set(names)
        filler = {"need", "someone", "build", "we", "you"}
        for name in names:
            assert not filler & set(name.split()), name


class TestExtractRequirements:
    @pytest.mark.asyncio
    async def test_without_collaborator(self):
        rs = await extract_requirements(PAYROLL_JD)
        assert rs.source == "heuristic"
        assert rs.must

    @pytest.mark.asyncio
    async def test_model_items_are_expanded(self, make_collaborator):
        draft = RequirementDraft(
            must=[DraftItem(name="ADP", synonyms=["ADP Workforce Now"]), DraftItem(name="Payroll Compliance")],
            nice=[DraftItem(name="Workday")],
        )
        rs = await extract_requirements(PAYROLL_JD, make_collaborator(draft=draft))
        assert rs.source == "model"
        assert [i.canonical_name for i in rs.must] == ["adp", "payroll compliance"]
        assert "adp workforce now" in rs.must[0].synonyms
        assert "payroll-compliance" in rs.must[1].synonyms

    @pytest.mark.asyncio
    async def test_collaborator_failure_falls_back(self, make_collaborator):
        fake = make_collaborator(fail=("derive_requirements",))
        rs = await extract_requirements(PAYROLL_JD, fake)
        assert fake.calls["derive_requirements"] == 1
        assert rs.source == "heuristic"
        assert rs.must

    @pytest.mark.asyncio
    async def test_empty_model_reply_falls_back(self, make_collaborator):
        rs = await extract_requirements(PAYROLL_JD, make_collaborator(draft=RequirementDraft()))
        assert rs.source == "heuristic"
        assert rs.must

    @pytest.mark.asyncio
    async def test_nice_only_model_reply_gets_heuristic_must(self, make_collaborator):
        draft = RequirementDraft(nice=[DraftItem(name="Workday")])
        rs = await extract_requirements(PAYROLL_JD, make_collaborator(draft=draft))
        assert rs.must
        assert [i.canonical_name for i in rs.nice] == ["workday"]

    @pytest.mark.asyncio
    async def test_stop_word_only_jd_still_has_a_must_item(self):
        rs = await extract_requirements(JobRequirement(description="the and of the"))
        assert [i.canonical_name for i in rs.must] == ["the"]
