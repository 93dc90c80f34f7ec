"""Requirement Extractor: job description -> must/nice requirement set.

Primary path asks the optional language-model collaborator for competencies
with synonyms. Fallback takes the most frequent 1-3-grams of the JD itself.
Every item, whatever its source, is expanded with deterministic local
synonyms so fuzzy matching tolerates separator, plural and abbreviation
variants.
"""

import logging
import re
from collections import Counter
from typing import TYPE_CHECKING

from models.requests import JobRequirement
from models.schemas.requirement_set import DraftItem, RequirementItem, RequirementSet
from services.errors import CollaboratorError
from services.text_normalizer import STOP_WORDS, frequency_bag, ngrams, tokenize, top_phrases

if TYPE_CHECKING:
    from services.llm_collaborator import ScreeningCollaborator

logger = logging.getLogger(__name__)

MAX_MUST = 10
MAX_NICE = 8
HEURISTIC_TERM_COUNT = 20

# (long form, abbreviation); applied in both directions on word boundaries
ABBREVIATION_PAIRS: tuple[tuple[str, str], ...] = (
    ("javascript", "js"),
    ("typescript", "ts"),
    ("user experience", "ux"),
    ("user interface", "ui"),
    ("human resources", "hr"),
    ("machine learning", "ml"),
    ("artificial intelligence", "ai"),
    ("quality assurance", "qa"),
    ("search engine optimization", "seo"),
    ("customer relationship management", "crm"),
    ("continuous integration", "ci"),
    ("kubernetes", "k8s"),
)

_WS_RE = re.compile(r"\s+")
_SEPARATOR_RE = re.compile(r"[-._]+")


def _norm(term: str) -> str:
    return _WS_RE.sub(" ", (term or "").lower()).strip()


def _unique(values: list[str]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for v in values:
        n = _norm(v)
        if n and n not in seen:
            seen[n] = None
    return tuple(seen)


def local_synonyms(term: str) -> list[str]:
    """Deterministic spelling variants of a term.

    "payroll compliance" -> "payrollcompliance", "payroll-compliance",
    "payroll.compliance", "payroll compliances", ...
    """
    t = _norm(term)
    if not t:
        return []

    out = [
        t,
        _WS_RE.sub("", t),
        _WS_RE.sub("-", t),
        _WS_RE.sub(".", t),
        _norm(_SEPARATOR_RE.sub(" ", t)),
        t[:-1] if t.endswith("s") else t + "s",
    ]

    for long_form, short_form in ABBREVIATION_PAIRS:
        long_re = re.compile(rf"\b{re.escape(long_form)}\b")
        short_re = re.compile(rf"\b{re.escape(short_form)}\b")
        if long_re.search(t):
            out.append(long_re.sub(short_form, t, count=1))
        if short_re.search(t):
            out.append(short_re.sub(long_form, t, count=1))

    return list(_unique(out))


def _build_items(drafts: list[DraftItem], limit: int, exclude: set[str]) -> list[RequirementItem]:
    items: list[RequirementItem] = []
    seen = set(exclude)
    for draft in drafts:
        name = _norm(draft.name)
        if not name or name in STOP_WORDS or name in seen:
            continue
        seen.add(name)
        items.append(RequirementItem(
            canonical_name=name,
            synonyms=_unique([*draft.synonyms, *local_synonyms(name)]),
        ))
        if len(items) >= limit:
            break
    return items


def build_requirement_set(
    must: list[DraftItem], nice: list[DraftItem], source: str
) -> RequirementSet:
    """Normalize, de-duplicate and synonym-expand raw must/nice items."""
    must_items = _build_items(must, MAX_MUST, exclude=set())
    nice_items = _build_items(nice, MAX_NICE, exclude={i.canonical_name for i in must_items})
    return RequirementSet(must=tuple(must_items), nice=tuple(nice_items), source=source)


def heuristic_requirements(jd_text: str) -> RequirementSet:
    """Most frequent JD phrases: first 10 as must, next 8 as nice."""
    terms = top_phrases(frequency_bag(jd_text), HEURISTIC_TERM_COUNT)
    return build_requirement_set(
        [DraftItem(name=t) for t in terms[:MAX_MUST]],
        [DraftItem(name=t) for t in terms[MAX_MUST:MAX_MUST + MAX_NICE]],
        source="heuristic",
    )


def _last_resort(jd_text: str) -> RequirementSet:
    """Any JD phrase at all, stop-words included, as a single must item."""
    bag = Counter(ngrams(tokenize(jd_text, drop_stop_words=False), max_n=1))
    terms = top_phrases(bag, 1, min_length=1)
    if not terms:
        return RequirementSet(source="heuristic")
    item = RequirementItem(canonical_name=terms[0], synonyms=tuple(local_synonyms(terms[0])))
    return RequirementSet(must=(item,), source="heuristic")


async def extract_requirements(
    job: JobRequirement,
    collaborator: "ScreeningCollaborator | None" = None,
) -> RequirementSet:
    """Derive the batch's requirement set. Never raises.

    The must tier is non-empty whenever the JD has any alphanumeric content.
    """
    jd_text = job.jd_text
    requirement_set: RequirementSet | None = None

    if collaborator is not None:
        try:
            draft = await collaborator.derive_requirements(jd_text)
            if draft.must or draft.nice:
                requirement_set = build_requirement_set(draft.must, draft.nice, source="model")
        except CollaboratorError as e:
            logger.warning("Requirement derivation unavailable, using JD term frequencies: %s", e)

    if requirement_set is None or not (requirement_set.must or requirement_set.nice):
        requirement_set = heuristic_requirements(jd_text)

    if not requirement_set.must:
        heuristic = heuristic_requirements(jd_text)
        if heuristic.must:
            requirement_set = RequirementSet(
                must=heuristic.must,
                nice=requirement_set.nice or heuristic.nice,
                source=requirement_set.source,
            )
        else:
            requirement_set = _last_resort(jd_text)

    logger.info(
        "Requirement set (%s): %d must, %d nice",
        requirement_set.source, len(requirement_set.must), len(requirement_set.nice),
    )
    return requirement_set
