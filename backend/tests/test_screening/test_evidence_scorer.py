"""Tests for fuzzy requirement matching and coverage."""

import pytest

from models.schemas.requirement_set import RequirementItem, RequirementSet
from services.screening.evidence_scorer import (
    fuzzy_contains,
    score_evidence,
    within_one_substitution,
)


def item(name: str, *synonyms: str) -> RequirementItem:
    return RequirementItem(canonical_name=name, synonyms=synonyms)


RESUME = "Built payroll pipelines in Python; deployed on Kubernetes. Partnered with HR."


class TestFuzzyContains:
    def test_word_boundary_match(self):
        assert fuzzy_contains(RESUME, "python")

    def test_substring_match(self):
        assert fuzzy_contains(RESUME, "pipeline")

    def test_one_substitution(self):
        assert fuzzy_contains(RESUME, "kubernetis")

    def test_deletion_is_not_tolerated(self):
        assert not fuzzy_contains(RESUME, "kubrnetes")

    def test_short_phrases_need_word_boundaries(self):
        assert fuzzy_contains(RESUME, "hr")
        assert not fuzzy_contains("three chairs", "hr")
        assert not fuzzy_contains("Built with Python", "pt")

    def test_case_and_punctuation_insensitive(self):
        assert fuzzy_contains("Node.JS, React.", "node.js")

    def test_empty(self):
        assert not fuzzy_contains("", "python")
        assert not fuzzy_contains(RESUME, "   ")


class TestWithinOneSubstitution:
    def test_match(self):
        assert within_one_substitution("abcdef", "abxd")
        assert within_one_substitution("abcdef", "cdef")

    def test_no_match(self):
        assert not within_one_substitution("abcdef", "xyzw")
        assert not within_one_substitution("abc", "abcd")

    def test_mismatch_in_either_half(self):
        assert within_one_substitution("the payroll team", "pxyroll")
        assert within_one_substitution("the payroll team", "payrolx")


class TestScoreEvidence:
    def test_weighted_coverage(self):
        rs = RequirementSet(must=(item("python"), item("docker")), nice=(item("aws"),))
        result = score_evidence("python and aws", rs)
        assert result.coverage == pytest.approx(0.75 * 0.5 + 0.25 * 1.0)
        assert result.matched == ("python", "aws")
        assert result.missing == ("docker",)

    def test_empty_requirement_set_scores_one(self):
        assert score_evidence("anything", RequirementSet()).coverage == 1.0

    def test_empty_nice_tier_counts_as_covered(self):
        rs = RequirementSet(must=(item("python"),))
        assert score_evidence("python", rs).coverage == 1.0

    def test_missing_never_lists_nice_items(self):
        rs = RequirementSet(must=(item("python"),), nice=(item("terraform"),))
        result = score_evidence("python", rs)
        assert result.missing == ()
        assert result.coverage == pytest.approx(0.75)

    def test_synonym_counts_as_match(self):
        rs = RequirementSet(must=(item("javascript", "js"),))
        result = score_evidence("Frontend in JS and CSS", rs)
        assert result.matched == ("javascript",)

    @pytest.mark.parametrize("text", ["", "python", "python docker aws", "unrelated text entirely"])
    def test_coverage_bounds(self, text):
        rs = RequirementSet(must=(item("python"), item("docker")), nice=(item("aws"), item("gcp")))
        assert 0.0 <= score_evidence(text, rs).coverage <= 1.0

    def test_adding_a_matching_synonym_never_decreases_coverage(self):
        text = "Services written in Golang"
        before = RequirementSet(must=(item("go"), item("rust")))
        after = RequirementSet(must=(item("go", "golang"), item("rust")))
        assert score_evidence(text, after).coverage >= score_evidence(text, before).coverage
        assert score_evidence(text, after).coverage > score_evidence(text, before).coverage
