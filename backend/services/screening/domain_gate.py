"""Domain Token Inferrer & Domain Gate.

A cheap binary pre-filter: does the resume's vocabulary plausibly belong to
the job's field at all? It never contributes to the score directly; a failed
gate forces the composite score to 0, suppresses interview questions and
skips the grading call.
"""

import logging
import math
from collections import Counter

from services.screening.evidence_scorer import fuzzy_contains
from services.text_normalizer import normalize_spaces, tokenize

logger = logging.getLogger(__name__)

# Tunable gate constants
DOMAIN_TOKEN_LIMIT = 8
MIN_TOKEN_LENGTH = 4
TITLE_BOOST = 3
MIN_BIGRAM_COUNT = 2
SMALL_SET_SIZE = 3  # sets this small need a single hit
MIN_HIT_RATIO = 0.30  # larger sets need ceil(30%) of tokens


def infer_domain_tokens(title: str, description: str, limit: int = DOMAIN_TOKEN_LIMIT) -> list[str]:
    """Top topical unigrams of the JD, with title terms boosted.

    A bigram joins the ranking only when it occurs at least
    ``MIN_BIGRAM_COUNT`` times. Independent of the Requirement Extractor.
    Ties keep first-occurrence order (title first), so the result is
    deterministic.
    """
    counts: Counter = Counter()

    title_tokens = [t for t in tokenize(title) if len(t) >= MIN_TOKEN_LENGTH]
    for tok in title_tokens:
        counts[tok] += TITLE_BOOST

    bigrams: Counter = Counter()
    tokens = tokenize(f"{title} {description}")
    for i, tok in enumerate(tokens):
        if len(tok) >= MIN_TOKEN_LENGTH:
            counts[tok] += 1
        if i + 1 < len(tokens):
            bigrams[f"{tok} {tokens[i + 1]}"] += 1

    for bigram, n in bigrams.items():
        if n >= MIN_BIGRAM_COUNT:
            counts[bigram] = n

    ranked = sorted(counts.items(), key=lambda kv: -kv[1])
    return [tok for tok, _ in ranked[:limit]]


def required_hits(token_count: int) -> int:
    """Minimum number of domain tokens a resume must contain."""
    if token_count == 0:
        return 0
    if token_count <= SMALL_SET_SIZE:
        return 1
    return math.ceil(MIN_HIT_RATIO * token_count)


def domain_hits(resume_text: str, domain_tokens: list[str]) -> list[str]:
    text = normalize_spaces(resume_text)
    return [tok for tok in domain_tokens if fuzzy_contains(text, tok, normalized=True)]


def is_domain_match(resume_text: str, domain_tokens: list[str]) -> bool:
    """True when enough domain tokens fuzzy-match the resume.

    An empty token set has nothing to test and always passes.
    """
    if not domain_tokens:
        return True
    hits = domain_hits(resume_text, domain_tokens)
    needed = required_hits(len(domain_tokens))
    logger.debug("Domain gate: %d/%d hits (need %d)", len(hits), len(domain_tokens), needed)
    return len(hits) >= needed
