"""Content relevance, completeness and coherence analysis."""

import re

import structlog

from speaking_placement.assessment import tables
from speaking_placement.assessment.lexical import (
    contains_phrase,
    extract_lexical_features,
    split_sentences,
    tokenize,
)
from speaking_placement.models.assessment import (
    ContentAnalysis,
    LexicalFeatures,
    SentimentAnalysis,
    clamp_score,
)
from speaking_placement.models.section import SectionId

logger = structlog.get_logger()


def _synonym_key(word: str) -> str:
    """Map a plural to its singular when only the singular is listed."""
    if any(word in group for group in tables.SYNONYM_GROUPS):
        return word
    if len(word) > 3 and word.endswith("s"):
        return word[:-1]
    return word


def are_synonyms(first: str, second: str) -> bool:
    a, b = _synonym_key(first), _synonym_key(second)
    return any(a in group and b in group for group in tables.SYNONYM_GROUPS)


def hint_tokens(expected_answer: str | None) -> list[str]:
    """Content words of an expected-answer hint."""
    if not expected_answer:
        return []
    return [t for t in tokenize(expected_answer) if t not in tables.HINT_STOPWORDS]


def _matches(hint: str, words: set[str]) -> bool:
    return any(
        hint in word
        or (len(word) >= tables.REVERSE_MATCH_MIN_LENGTH and word in hint)
        or are_synonyms(word, hint)
        for word in words
    )


def score_relevance(tokens: list[str], expected_answer: str | None) -> int:
    """Soft overlap between the transcript and an expected-answer hint.

    Each hint token counts once if any transcript word contains it, is
    contained in it, or shares a synonym group with it.
    """
    expected = hint_tokens(expected_answer)
    if not expected:
        return tables.RELEVANCE_DEFAULT
    words = set(tokens)
    matched = sum(1 for hint in expected if _matches(hint, words))
    relevance = tables.RELEVANCE_BASE + matched / len(expected) * tables.RELEVANCE_RANGE
    return clamp_score(min(100, relevance))


def score_completeness(
    text: str, features: LexicalFeatures, section: SectionId | None
) -> int:
    """Length and structure expectations for the given section."""
    completeness = tables.COMPLETENESS_BASE
    words = features.word_count

    if section is None:
        for threshold, bonus in tables.GENERIC_COMPLETENESS_TIERS:
            if words > threshold:
                completeness += bonus
                break
        if features.sentence_count > tables.GENERIC_SENTENCE_THRESHOLD:
            completeness += tables.GENERIC_SENTENCE_BONUS
        return clamp_score(completeness)

    profile = tables.SECTION_COMPLETENESS[section]
    for threshold, bonus in profile.tiers:
        if words >= threshold:
            completeness += bonus
            break

    lowered = text.lower()
    for pattern, bonus in profile.keyword_bonuses:
        if re.search(pattern, lowered):
            completeness += bonus

    if profile.min_sentences is not None and features.sentence_count >= profile.min_sentences:
        completeness += profile.sentence_bonus

    return clamp_score(completeness)


def score_coherence(text: str) -> int:
    coherence = tables.COHERENCE_BASE
    if contains_phrase(text, tables.DISCOURSE_CONNECTIVES):
        coherence += tables.CONNECTIVE_BONUS
    if contains_phrase(text, tables.EXAMPLE_MARKERS):
        coherence += tables.EXAMPLE_BONUS
    return clamp_score(coherence)


def extract_key_points(text: str) -> list[str]:
    """First few substantial sentences, verbatim."""
    return [
        s for s in split_sentences(text) if len(s) > tables.KEY_POINT_MIN_LENGTH
    ][: tables.MAX_KEY_POINTS]


def analyze_sentiment(tokens: list[str]) -> SentimentAnalysis:
    """Lexicon-based tone estimate."""
    positive = sum(1 for t in tokens if t in tables.POSITIVE_WORDS)
    negative = sum(1 for t in tokens if t in tables.NEGATIVE_WORDS)
    total = max(len(tokens), 1)

    if positive > negative:
        return SentimentAnalysis(
            label="positive",
            confidence=min(0.9, 0.5 + (positive - negative) / total * 2),
            tone="enthusiastic" if positive > negative * 2 else "positive",
        )
    if negative > positive:
        return SentimentAnalysis(
            label="negative",
            confidence=min(0.9, 0.5 + (negative - positive) / total * 2),
            tone="pessimistic" if negative > positive * 2 else "cautious",
        )
    return SentimentAnalysis()


def analyze_content(
    text: str,
    expected_answer: str | None = None,
    section: SectionId | str | None = None,
) -> ContentAnalysis:
    """Analyze how relevant, complete and coherent a response is.

    Args:
        text: Transcript text.
        expected_answer: Free-text description of anticipated content.
        section: Section id selecting the completeness thresholds.

    Returns:
        ContentAnalysis with every score clamped to [0, 100].
    """
    text = text or ""
    features = extract_lexical_features(text)
    section_id = SectionId.parse(section)
    if section is not None and section_id is None:
        logger.warning("unknown_section", section=str(section))

    result = ContentAnalysis(
        relevance=score_relevance(features.tokens, expected_answer),
        completeness=score_completeness(text, features, section_id),
        coherence=score_coherence(text),
        key_points=extract_key_points(text),
        sentiment=analyze_sentiment(features.tokens),
    )
    logger.debug(
        "content_analyzed",
        relevance=result.relevance,
        completeness=result.completeness,
        coherence=result.coherence,
    )
    return result
