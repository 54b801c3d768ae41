"""Vocabulary range scoring."""

from collections import Counter

import structlog
import textstat

from speaking_placement.assessment import tables
from speaking_placement.assessment.lexical import extract_lexical_features
from speaking_placement.models.assessment import (
    VocabularyAnalysis,
    VocabularyMetrics,
    clamp_score,
)

logger = structlog.get_logger()


def is_advanced_word(word: str) -> bool:
    """Length or domain-list criterion for vocabulary sophistication."""
    return (
        len(word) >= tables.ADVANCED_WORD_MIN_LENGTH
        or word in tables.ACADEMIC_WORDS
        or word in tables.PROFESSIONAL_WORDS
    )


def find_repeated_words(tokens: list[str]) -> list[str]:
    """Words longer than 3 letters used more than twice, in first-seen order."""
    counts = Counter(t for t in tokens if len(t) >= tables.REPETITION_MIN_LENGTH)
    return [w for w, n in counts.items() if n > tables.REPETITION_MAX_OCCURRENCES]


def _tier_bonus(value: float, tiers: tuple[tuple[float, int], ...]) -> int:
    for threshold, bonus in tiers:
        if value > threshold:
            return bonus
    return 0


def _readability(text: str) -> float:
    if not text.strip():
        return 0.0
    try:
        return float(textstat.flesch_reading_ease(text))
    except Exception as e:
        logger.debug("readability_failed", error=str(e))
        return 0.0


def analyze_vocabulary(text: str) -> VocabularyAnalysis:
    """Score vocabulary from diversity, word length and advanced-word usage.

    Args:
        text: Transcript text.

    Returns:
        VocabularyAnalysis; an empty transcript scores the base with no bonuses.
    """
    text = text or ""
    features = extract_lexical_features(text)
    tokens = features.tokens
    total = features.word_count

    advanced = [t for t in tokens if is_advanced_word(t)]
    advanced_ratio = len(advanced) / max(total, 1)
    repeated = find_repeated_words(tokens)

    score = tables.VOCABULARY_BASE_SCORE
    score += _tier_bonus(features.lexical_diversity, tables.DIVERSITY_TIERS)
    score += _tier_bonus(features.average_word_length, tables.WORD_LENGTH_TIERS)
    score += _tier_bonus(advanced_ratio, tables.ADVANCED_RATIO_TIERS)

    suggestions: list[str] = []
    if repeated:
        score -= len(repeated) * tables.REPETITION_PENALTY
        suggestions.append("Avoid repeating the same words too often")
    if features.lexical_diversity < 0.5:
        suggestions.append("Try using more varied vocabulary")
    if features.average_word_length < 4.5:
        suggestions.append("Include some longer, more descriptive words")
    if not advanced:
        suggestions.append("Consider using more sophisticated vocabulary")

    metrics = VocabularyMetrics(
        total_words=total,
        unique_words=features.unique_word_count,
        lexical_diversity=features.lexical_diversity,
        average_word_length=features.average_word_length,
        advanced_words=len(advanced),
        advanced_ratio=advanced_ratio,
        repeated_words=repeated,
        readability=_readability(text),
    )
    result = VocabularyAnalysis(score=clamp_score(score), metrics=metrics, suggestions=suggestions)
    logger.debug(
        "vocabulary_analyzed",
        score=result.score,
        diversity=round(metrics.lexical_diversity, 3),
        advanced_ratio=round(advanced_ratio, 3),
    )
    return result
