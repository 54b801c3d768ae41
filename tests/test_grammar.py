"""Tests for the grammar analyzer."""

import pytest

from speaking_placement.assessment import tables
from speaking_placement.assessment.grammar import analyze_grammar

BASE = tables.GRAMMAR_BASE_SCORE

# Each sentence is capitalized, punctuated, has 5-25 words, uses no
# conjunction and triggers exactly one catalogue pattern.
PATTERN_SENTENCES = [
    (r"\bi am going to went\b", "I am going to went home today.", 10),
    (r"\bhe don't\b", "He don't like strong coffee.", 8),
    (r"\bshe don't\b", "She don't like strong coffee.", 8),
    (r"\bit don't\b", "It don't work very well.", 8),
    (r"\bmuch people\b", "There were much people at the party.", 6),
    (r"\bless people\b", "There were less people at the party.", 6),
    (r"\bmore better\b", "This phone is more better than mine.", 6),
    (r"\bmost best\b", "This is the most best movie ever.", 6),
    (r"\bcan able to\b", "I can able to finish the work.", 5),
    (r"\bwould of\b", "I would of helped you with that.", 8),
    (r"\bcould of\b", "We could of won the game easily.", 8),
    (r"\bshould of\b", "You should of called me much earlier.", 8),
    (r"\bdid went\b", "He did went to the store yesterday.", 8),
    (r"\bdoes goes\b", "She does goes to school every day.", 8),
    (r"\bchilds\b", "The childs played in the garden.", 6),
    (r"\bgoed\b", "Yesterday he goed to the market.", 6),
]


class TestCatalogue:
    def test_catalogue_covers_every_pattern(self):
        assert {p.pattern for p in tables.GRAMMAR_PATTERNS} == {
            pattern for pattern, _, _ in PATTERN_SENTENCES
        }

    def test_at_least_twelve_patterns(self):
        assert len(tables.GRAMMAR_PATTERNS) >= 12

    def test_penalties_in_range(self):
        assert all(5 <= p.penalty <= 10 for p in tables.GRAMMAR_PATTERNS)


class TestPatternIsolation:
    def test_clean_sentence_scores_base(self):
        result = analyze_grammar("She likes strong black coffee.")
        assert result.score == BASE
        assert result.errors == []

    @pytest.mark.parametrize("pattern,sentence,penalty", PATTERN_SENTENCES)
    def test_single_pattern_delta(self, pattern, sentence, penalty):
        catalogue_penalty = next(
            p.penalty for p in tables.GRAMMAR_PATTERNS if p.pattern == pattern
        )
        assert catalogue_penalty == penalty
        result = analyze_grammar(sentence)
        assert result.score == BASE - penalty
        assert len(result.errors) == 1

    def test_short_example_also_pays_length_deduction(self):
        # 4 words in one sentence: pattern (8) plus too-simplistic (5)
        result = analyze_grammar("He don't like coffee.")
        assert result.score == BASE - 8 - tables.SHORT_SENTENCE_PENALTY

    def test_case_insensitive(self):
        assert analyze_grammar("WE COULD OF WON THE GAME EASILY.").score == BASE - 8

    def test_patterns_are_additive(self):
        result = analyze_grammar("He don't know and she don't care.")
        assert result.score == BASE - 8 - 8 + tables.CONJUNCTION_BONUS
        assert len(result.errors) == 2

    def test_pattern_counted_once_per_pattern(self):
        result = analyze_grammar("He don't sing very often. He don't dance very often.")
        assert result.score == BASE - 8


class TestStructuralChecks:
    def test_missing_capital(self):
        assert analyze_grammar("she likes strong black coffee.").score == BASE - 5

    def test_missing_punctuation(self):
        result = analyze_grammar("She likes strong black coffee")
        assert result.score == BASE - 5
        assert "Missing ending punctuation" in result.errors

    def test_missing_both(self):
        assert analyze_grammar("she likes strong black coffee").score == BASE - 10

    def test_short_sentences(self):
        result = analyze_grammar("I run. She sits.")
        assert result.score == BASE - 5
        assert "Try using longer, more complex sentences" in result.suggestions

    def test_run_on_sentence(self):
        text = (
            "Students from many different countries met in the large hall to discuss "
            "their plans for the coming year with teachers from several local schools "
            "near the river."
        )
        assert analyze_grammar(text).score == BASE - tables.LONG_SENTENCE_PENALTY

    def test_conjunction_bonus(self):
        assert analyze_grammar("She likes coffee and he likes tea.").score == BASE + 5

    def test_numerals_count_toward_sentence_length(self):
        # 5 whitespace words, although only 3 are alphabetic tokens
        assert analyze_grammar("I was 25 in 2019.").score == BASE

    def test_conjunction_needs_whole_word(self):
        # "understand" and "button" must not count as conjunctions
        assert analyze_grammar("They understand the red button.").score == BASE


class TestBoundsAndPurity:
    def test_empty_text(self):
        result = analyze_grammar("")
        assert result.score == BASE - 15
        assert len(result.errors) == 2

    def test_clamped_at_zero(self):
        text = (
            "he don't it don't she don't would of could of should of "
            "did went does goes childs goed"
        )
        assert analyze_grammar(text).score == 0

    def test_idempotent(self):
        text = "There were much people at the party."
        assert analyze_grammar(text) == analyze_grammar(text)
