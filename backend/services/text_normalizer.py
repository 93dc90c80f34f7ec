"""Text normalization, tokenization and n-gram frequency bags.

Shared by every screening stage so the JD and resumes are always compared
in the same normalized space.
"""

import logging
import re
from collections import Counter

from sklearn.feature_extraction import DictVectorizer
from sklearn.metrics.pairwise import cosine_similarity as sklearn_cosine

logger = logging.getLogger(__name__)

# Fixed stop-word set: English function words plus JD boilerplate that never
# identifies a competency on its own.
STOP_WORDS: frozenset[str] = frozenset({
    # Function words
    "the", "a", "an", "and", "or", "of", "for", "to", "in", "on", "at", "by",
    "with", "from", "as", "is", "are", "be", "been", "was", "were", "this",
    "that", "these", "those", "will", "can", "should", "must", "may", "not",
    "we", "you", "our", "their", "your", "it", "its", "they", "i", "he", "she",
    "them", "us", "who", "what", "which", "all", "any", "into", "than", "also",
    "have", "has", "had", "do", "does", "if", "but", "such", "other", "more",
    "per", "via", "etc", "e.g", "i.e", "&", "-", "+", ".",
    # JD boilerplate
    "role", "roles", "job", "candidate", "candidates", "position", "responsibilities",
    "requirements", "required", "preferred", "experience", "years", "year",
    "team", "work", "working", "ability", "able", "skills", "skill", "plus",
    "including", "best", "practices", "practice", "proactive", "strong",
    "understanding", "knowledge", "looking", "join", "ideal", "company",
    "opportunity", "senior", "junior", "responsible", "excellent", "good",
    "great", "new", "well", "related", "within", "across", "using",
    # JD filler verbs and pronouns
    "need", "needs", "needed", "someone", "anyone", "seeking", "seek", "want",
    "wants", "build", "builds", "building", "write", "help",
    "helps", "make", "ensure", "own", "handle", "partner", "like", "would",
    "about", "each", "every", "day", "ll", "re", "ve", "s", "hire", "hiring",
})

# Characters kept inside tokens so "c++", "c#", "node.js" and "r&d" survive.
_DISALLOWED_RE = re.compile(r"[^a-z0-9+.\-#& ]+")
_SENTENCE_DOT_RE = re.compile(r"\.(\s|$)")
_SPACES_RE = re.compile(r"\s+")
_HAS_ALNUM_RE = re.compile(r"[a-z0-9]")

MAX_NGRAM = 3
MIN_PHRASE_COUNT = 2


def normalize_spaces(text: str) -> str:
    """Lower-case, collapse punctuation to single spaces and trim.

    Sentence-ending periods are dropped; dots inside terms are kept.
    """
    if not text:
        return ""
    lowered = _SENTENCE_DOT_RE.sub(" ", text.lower())
    cleaned = _DISALLOWED_RE.sub(" ", lowered)
    return _SPACES_RE.sub(" ", cleaned).strip()


def tokenize(text: str, drop_stop_words: bool = True) -> list[str]:
    """Split normalized text into tokens, optionally removing stop-words."""
    tokens = [t.strip(".-") for t in normalize_spaces(text).split(" ")]
    tokens = [t for t in tokens if t and _HAS_ALNUM_RE.search(t)]
    if drop_stop_words:
        tokens = [t for t in tokens if t not in STOP_WORDS]
    return tokens


def ngrams(tokens: list[str], max_n: int = MAX_NGRAM) -> list[str]:
    """All 1..max_n-gram phrases from a sliding window, in text order.

    For each start position the unigram comes first, then longer phrases.
    """
    phrases: list[str] = []
    for i in range(len(tokens)):
        for n in range(1, max_n + 1):
            if i + n > len(tokens):
                break
            phrases.append(" ".join(tokens[i:i + n]))
    return phrases


def frequency_bag(text: str, max_n: int = MAX_NGRAM) -> Counter:
    """Phrase -> count over the stop-word-filtered token stream.

    Empty or whitespace-only text yields an empty bag.
    """
    return Counter(ngrams(tokenize(text), max_n=max_n))


def top_phrases(
    bag: Counter, count: int, min_length: int = 3, min_phrase_count: int = MIN_PHRASE_COUNT
) -> list[str]:
    """Most frequent phrases; ties keep first-occurrence order.

    Multi-word phrases only compete once they occur ``min_phrase_count`` times.
    """
    ranked = sorted(bag.items(), key=lambda kv: -kv[1])
    return [
        p for p, n in ranked
        if len(p) >= min_length and (" " not in p or n >= min_phrase_count)
    ][:count]


def cosine_similarity(bag_a: Counter, bag_b: Counter) -> float:
    """Cosine similarity of two frequency bags, 0.0 when either is empty."""
    if not bag_a or not bag_b:
        return 0.0
    vectorizer = DictVectorizer()
    matrix = vectorizer.fit_transform([dict(bag_a), dict(bag_b)])
    score = sklearn_cosine(matrix[0:1], matrix[1:2])[0][0]
    return float(score)
