"""Pattern-based grammar scoring."""

import re

import structlog

from speaking_placement.assessment import tables
from speaking_placement.assessment.lexical import contains_phrase, extract_lexical_features
from speaking_placement.models.assessment import GrammarAnalysis, clamp_score

logger = structlog.get_logger()

_COMPILED_PATTERNS = [
    (re.compile(p.pattern, re.IGNORECASE), p) for p in tables.GRAMMAR_PATTERNS
]


def analyze_grammar(text: str) -> GrammarAnalysis:
    """Score grammar by deducting for known error signatures.

    Starts from a fixed base and applies, in order: capitalization and
    terminal punctuation checks, each matched catalogue pattern (once per
    pattern), the sentence-length check, and the conjunction bonus.

    Args:
        text: Transcript text.

    Returns:
        GrammarAnalysis with score clamped to [0, 100].
    """
    text = text or ""
    features = extract_lexical_features(text)
    errors: list[str] = []
    suggestions: list[str] = []
    score = tables.GRAMMAR_BASE_SCORE

    if not features.starts_capitalized:
        errors.append("Missing capital letter at start")
        suggestions.append("Start sentences with capital letters")
        score -= tables.MISSING_CAPITAL_PENALTY

    if not features.ends_with_punctuation:
        errors.append("Missing ending punctuation")
        suggestions.append("End sentences with proper punctuation")
        score -= tables.MISSING_PUNCTUATION_PENALTY

    for regex, pattern in _COMPILED_PATTERNS:
        if regex.search(text):
            errors.append(pattern.error)
            suggestions.append(pattern.suggestion)
            score -= pattern.penalty

    words_per_sentence = features.words_per_sentence
    if words_per_sentence < tables.SHORT_SENTENCE_THRESHOLD:
        suggestions.append("Try using longer, more complex sentences")
        score -= tables.SHORT_SENTENCE_PENALTY
    elif words_per_sentence > tables.LONG_SENTENCE_THRESHOLD:
        suggestions.append("Break down very long sentences for clarity")
        score -= tables.LONG_SENTENCE_PENALTY

    # Subordination and coordination
    if contains_phrase(text, tables.GRAMMAR_CONJUNCTIONS):
        score += tables.CONJUNCTION_BONUS

    result = GrammarAnalysis(score=clamp_score(score), errors=errors, suggestions=suggestions)
    logger.debug("grammar_analyzed", score=result.score, error_count=len(errors))
    return result
