import csv
import io

import pytest

from models.responses import CandidateResult
from services.report import (
    CSV_HEADERS,
    candidates_to_csv,
    fallback_questions,
    format_candidate_text,
    format_experience,
)


def _candidate(**overrides) -> CandidateResult:
    fields = {
        "id": "c1",
        "filename": "maria.pdf",
        "name": "Maria Lopez",
        "email": "maria@example.com",
        "headline": "Payroll Specialist",
        "years_experience": 6.0,
        "education_label": "Bachelor",
        "skills": ["ADP", "payroll compliance"],
        "match_score": 72,
        "skills_evidence_pct": 64,
        "matched_requirements": ["payroll", "adp"],
        "missing_requirements": ["workday"],
        "strengths": ["Runs ADP payroll", 'Says "hello"'],
        "weaknesses": ["Missing vs JD: workday"],
        "gaps": ["Missing requirement: workday"],
    }
    fields.update(overrides)
    return CandidateResult(**fields)


@pytest.mark.parametrize(
    "years,expected",
    [
        (0.5, "6 months"),
        (1 / 12, "1 month"),
        (0, "0 months"),
        (1.0, "1 year"),
        (2.0, "2 years"),
        (2.25, "2 yr 3 mo"),
        (-1, "-"),
        (None, "-"),
        (float("nan"), "-"),
    ],
)
def test_format_experience(years, expected):
    assert format_experience(years) == expected


def test_candidate_text():
    text = format_candidate_text(_candidate())
    assert text.startswith("Candidate: Maria Lopez")
    assert "Overall Match: 72%" in text
    assert "Experience: 6 years" in text
    assert "ADP, payroll compliance" in text
    assert "  * Missing requirement: workday" in text
    assert "Domain: does not match" not in text


def test_candidate_text_placeholders():
    text = format_candidate_text(CandidateResult(id="c2", filename="blank.txt"))
    assert text.startswith("Candidate: blank.txt")
    assert "Email: -" in text
    assert "Experience: -" in text


def test_candidate_text_flags_domain_mismatch():
    text = format_candidate_text(_candidate(domain_mismatch=True, match_score=0))
    assert "Domain: does not match the job" in text


def test_csv_export():
    rows = list(csv.reader(io.StringIO(candidates_to_csv([
        _candidate(),
        _candidate(id="c2", name="Bo", match_score=0, domain_mismatch=True),
    ]))))
    assert rows[0] == CSV_HEADERS
    assert rows[1][0] == "1"
    assert rows[1][1] == "Maria Lopez"
    assert rows[1][5] == "72%"
    assert rows[1][8] == "ADP; payroll compliance"
    assert rows[1][9] == 'Runs ADP payroll; Says "hello"'
    assert rows[1][11] == "No"
    assert rows[2][0] == "2"
    assert rows[2][11] == "Yes"


def test_csv_export_empty():
    assert candidates_to_csv([]).strip() == ",".join(f'"{h}"' for h in CSV_HEADERS)


class TestFallbackQuestions:
    def test_built_from_gaps_and_matches(self):
        questions = fallback_questions(_candidate())
        assert questions[0] == "Walk us through any hands-on experience you have with workday."
        assert len(questions) == 3

    def test_none_for_domain_mismatch(self):
        assert fallback_questions(_candidate(domain_mismatch=True)) == []
