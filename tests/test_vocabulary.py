"""Tests for the vocabulary analyzer."""

from speaking_placement.assessment import tables
from speaking_placement.assessment.vocabulary import (
    _tier_bonus,
    analyze_vocabulary,
    find_repeated_words,
    is_advanced_word,
)

PROFILE_TEXT = (
    "I am a software developer with five years experience. "
    "I enjoy working on challenging projects and learning new technologies."
)


class TestAdvancedWords:
    def test_length_criterion(self):
        assert is_advanced_word("journey")
        assert not is_advanced_word("travel")

    def test_domain_lists(self):
        assert is_advanced_word("theory")  # academic
        assert is_advanced_word("solution")  # professional, also long
        assert is_advanced_word("study")

    def test_repeated_words_ignore_short_words(self):
        tokens = ["the", "the", "the", "data", "data", "data", "code", "code"]
        assert find_repeated_words(tokens) == ["data"]


class TestVocabularyScore:
    def test_empty_text_is_base(self):
        result = analyze_vocabulary("")
        assert result.score == 60
        assert result.metrics.total_words == 0
        assert result.metrics.lexical_diversity == 0.0
        assert result.metrics.readability == 0.0

    def test_simple_sentence(self):
        # diversity 5/6 -> +25, average length < 4, no advanced words
        result = analyze_vocabulary("The cat sat on the mat.")
        assert result.score == 85
        assert "Consider using more sophisticated vocabulary" in result.suggestions

    def test_repetition_penalty_per_word_type(self):
        # diversity 1/3 -> +10, average length 42/9 -> +5, two repeated types -> -6
        result = analyze_vocabulary(
            "Coffee coffee coffee tea tea tea water water water."
        )
        assert result.score == 60 + 10 + 5 - 6
        assert set(result.metrics.repeated_words) == {"coffee", "water"}
        assert "Avoid repeating the same words too often" in result.suggestions

    def test_rich_profile_answer(self):
        result = analyze_vocabulary(PROFILE_TEXT)
        assert result.score == 100
        assert result.metrics.advanced_words == 8
        assert result.metrics.advanced_ratio > 0.3

    def test_score_always_in_range(self):
        for text in ["a", "a a a a a a", "Pneumonoultramicroscopic " * 3, "!!!"]:
            assert 0 <= analyze_vocabulary(text).score <= 100

    def test_readability_is_informational(self):
        result = analyze_vocabulary(PROFILE_TEXT)
        assert isinstance(result.metrics.readability, float)


class TestTierEdges:
    def test_diversity_threshold_is_exclusive(self):
        assert _tier_bonus(0.8, tables.DIVERSITY_TIERS) == 20
        assert _tier_bonus(0.81, tables.DIVERSITY_TIERS) == 25
        assert _tier_bonus(0.2, tables.DIVERSITY_TIERS) == 0

    def test_word_length_threshold_is_exclusive(self):
        assert _tier_bonus(6, tables.WORD_LENGTH_TIERS) == 10
        assert _tier_bonus(6.01, tables.WORD_LENGTH_TIERS) == 15
        assert _tier_bonus(4, tables.WORD_LENGTH_TIERS) == 0

    def test_advanced_ratio_threshold_is_exclusive(self):
        assert _tier_bonus(0.3, tables.ADVANCED_RATIO_TIERS) == 10
        assert _tier_bonus(0.31, tables.ADVANCED_RATIO_TIERS) == 15
        assert _tier_bonus(0.1, tables.ADVANCED_RATIO_TIERS) == 0

    def test_diversity_of_exactly_point_eight(self):
        # 4 unique of 5 tokens, average length 3, no advanced words
        result = analyze_vocabulary("The cat saw the dog.")
        assert result.metrics.lexical_diversity == 0.8
        assert result.score == 60 + 20
