from collections import Counter

import pytest

from services.text_normalizer import (
    cosine_similarity,
    frequency_bag,
    ngrams,
    normalize_spaces,
    tokenize,
    top_phrases,
)


def test_normalize_keeps_technical_tokens():
    assert normalize_spaces("Skilled in C++, C# and Node.js.") == "skilled in c++ c# and node.js"


def test_normalize_collapses_punctuation_and_whitespace():
    assert normalize_spaces("  Payroll/HR;\n\tCompliance!! ") == "payroll hr compliance"


def test_normalize_empty():
    assert normalize_spaces("") == ""
    assert normalize_spaces("   \n ") == ""


def test_tokenize_drops_stop_words():
    assert tokenize("The team uses Python and SQL") == ["uses", "python", "sql"]


def test_tokenize_can_keep_stop_words():
    assert tokenize("The team", drop_stop_words=False) == ["the", "team"]


def test_ngrams_sliding_window():
    assert ngrams(["a", "b", "c"]) == ["a", "a b", "a b c", "b", "b c", "c"]


def test_ngrams_no_wraparound():
    assert ngrams(["a", "b"], max_n=3) == ["a", "a b", "b"]


def test_frequency_bag_is_deterministic():
    text = "Python developer, Django and Python APIs"
    assert frequency_bag(text) == frequency_bag(text)
    assert frequency_bag(text)["python"] == 2


def test_frequency_bag_empty_text():
    assert frequency_bag("") == Counter()
    assert frequency_bag("   ") == Counter()


def test_top_phrases_orders_by_count_then_first_occurrence():
    bag = frequency_bag("python django python flask")
    assert top_phrases(bag, 3) == ["python", "django", "flask"]


def test_top_phrases_admits_repeated_phrases_only():
    bag = frequency_bag("machine learning pipelines, machine learning models, data platform")
    phrases = top_phrases(bag, 10)
    assert phrases[:3] == ["machine", "machine learning", "learning"]
    assert "data platform" not in phrases
    assert "data platform" in top_phrases(bag, 10, min_phrase_count=1)


def test_top_phrases_min_length():
    bag = Counter({"go": 5, "rust": 1})
    assert top_phrases(bag, 5) == ["rust"]


class TestCosineSimilarity:
    def test_identical_bags(self):
        bag = frequency_bag("payroll compliance and ADP")
        assert cosine_similarity(bag, bag) == pytest.approx(1.0)

    def test_disjoint_bags(self):
        assert cosine_similarity(Counter({"payroll": 2}), Counter({"react": 1})) == 0.0

    def test_empty_bag(self):
        assert cosine_similarity(Counter(), Counter({"react": 1})) == 0.0

    def test_partial_overlap_between_zero_and_one(self):
        a = frequency_bag("payroll processing with adp")
        b = frequency_bag("payroll audits and tax filings")
        assert 0.0 < cosine_similarity(a, b) < 1.0
