"""Evidence Scorer: fuzzy-match requirement synonyms against resume text.

Matching rule for one phrase against normalized resume text:
    1. exact containment on word boundaries
    2. plain substring containment (phrases of FUZZY_MIN_LENGTH+ chars)
    3. some window of the text, equal in length to the phrase, differs from it
       in at most one character (Hamming distance <= 1; substitutions only,
       no insertions or deletions). Same length floor as (2).

Short phrases such as "js" or "hr" only match as whole words; a single
substitution over two characters would match almost anything.
"""

import logging

from rapidfuzz.distance import Hamming

from models.schemas.evidence_result import EvidenceResult
from models.schemas.requirement_set import RequirementItem, RequirementSet
from services.text_normalizer import normalize_spaces

logger = logging.getLogger(__name__)

FUZZY_MIN_LENGTH = 4

MUST_WEIGHT = 0.75
NICE_WEIGHT = 0.25


def _find_all(text: str, sub: str) -> list[int]:
    positions: list[int] = []
    start = text.find(sub)
    while start != -1:
        positions.append(start)
        start = text.find(sub, start + 1)
    return positions


def within_one_substitution(text: str, phrase: str) -> bool:
    """True if a window of ``text`` is within Hamming distance 1 of ``phrase``.

    A window with at most one mismatch matches one half of the phrase
    exactly, so candidate windows are located with ``str.find`` on each half
    and only those are verified. Worst case O(n*m) for a text of length n and
    phrase of length m, close to linear on real resumes.
    """
    size = len(phrase)
    if size == 0 or size > len(text):
        return False

    half = size // 2
    left, right = phrase[:half], phrase[half:]
    last_start = len(text) - size

    candidates: set[int] = set()
    if left:
        candidates.update(p for p in _find_all(text, left) if p <= last_start)
    candidates.update(
        p - half for p in _find_all(text, right) if 0 <= p - half <= last_start
    )

    for start in sorted(candidates):
        window = text[start:start + size]
        if Hamming.distance(window, phrase, score_cutoff=1) <= 1:
            return True
    return False


def fuzzy_contains(text: str, phrase: str, normalized: bool = False) -> bool:
    """Check one phrase against text with the word/substring/Hamming rule.

    Pass ``normalized=True`` when ``text`` already went through
    ``normalize_spaces`` to avoid re-normalizing it per phrase.
    """
    haystack = text if normalized else normalize_spaces(text)
    needle = normalize_spaces(phrase)
    if not needle or not haystack:
        return False

    if f" {needle} " in f" {haystack} ":
        return True
    if len(needle) < FUZZY_MIN_LENGTH:
        return False
    if needle in haystack:
        return True
    return within_one_substitution(haystack, needle)


def item_matches(normalized_text: str, item: RequirementItem) -> bool:
    """An item is evidenced when any of its variants fuzzy-matches."""
    return any(fuzzy_contains(normalized_text, v, normalized=True) for v in item.variants)


def score_evidence(resume_text: str, requirements: RequirementSet) -> EvidenceResult:
    """Measure requirement coverage in a resume.

    coverage = 0.75 * must_matched/must_total + 0.25 * nice_matched/max(1, nice_total)
    An empty tier counts as fully covered, so an empty set scores 1.0.
    """
    text = normalize_spaces(resume_text)

    matched: list[str] = []
    missing: list[str] = []

    must_hits = 0
    for item in requirements.must:
        if item_matches(text, item):
            must_hits += 1
            matched.append(item.canonical_name)
        else:
            missing.append(item.canonical_name)

    nice_hits = 0
    for item in requirements.nice:
        if item_matches(text, item):
            nice_hits += 1
            if item.canonical_name not in matched:
                matched.append(item.canonical_name)

    must_cov = must_hits / len(requirements.must) if requirements.must else 1.0
    nice_cov = nice_hits / max(1, len(requirements.nice)) if requirements.nice else 1.0
    coverage = MUST_WEIGHT * must_cov + NICE_WEIGHT * nice_cov

    logger.debug(
        "Evidence: %d/%d must, %d/%d nice, coverage=%.3f",
        must_hits, len(requirements.must), nice_hits, len(requirements.nice), coverage,
    )
    return EvidenceResult(
        coverage=max(0.0, min(1.0, coverage)),
        matched=tuple(matched),
        missing=tuple(missing),
    )
