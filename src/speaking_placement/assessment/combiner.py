"""Merges analyzer outputs into the five scoring parameters."""

from collections.abc import Callable, Sequence

import structlog

from speaking_placement.assessment import tables
from speaking_placement.assessment.lexical import (
    contains_phrase,
    count_fillers,
    count_phrases,
    extract_lexical_features,
    split_sentences,
)
from speaking_placement.assessment.sources import (
    DEFAULT_PRONUNCIATION_SOURCES,
    PronunciationSource,
    TextProxyPronunciation,
)
from speaking_placement.models.assessment import (
    AudioMetrics,
    ContentAnalysis,
    GrammarAnalysis,
    ScoringParameters,
    VocabularyAnalysis,
    clamp_score,
)

logger = structlog.get_logger()


def fluency_from_audio(speaking_rate: float, pause_ratio: float) -> int:
    """Fluency from speaking rate bands and pause pattern."""
    fluency = tables.SPEAKING_RATE_DEFAULT
    for low, high, score in tables.SPEAKING_RATE_BANDS:
        if low <= speaking_rate <= high:
            fluency = score
            break

    natural_low, natural_high = tables.NATURAL_PAUSE_RANGE
    if natural_low < pause_ratio < natural_high:
        fluency += tables.NATURAL_PAUSE_BONUS
    elif pause_ratio > tables.EXCESSIVE_PAUSE_THRESHOLD:
        fluency -= tables.EXCESSIVE_PAUSE_PENALTY

    return clamp_score(fluency)


def fluency_from_text(text: str) -> int:
    """Text-only fluency proxy, floored at 40."""
    words = text.split()
    sentences = split_sentences(text)
    score = 70

    # Longer responses suggest better fluency
    if len(words) > 20:
        score += 15
    elif len(words) > 15:
        score += 10
    elif len(words) > 10:
        score += 5

    score -= count_fillers(text) * 3

    avg_words_per_sentence = len(words) / max(len(sentences), 1)
    if avg_words_per_sentence > 12:
        score += 10
    elif avg_words_per_sentence > 8:
        score += 5

    conjunctions = count_phrases(text, tables.FLUENCY_CONJUNCTIONS)
    if conjunctions:
        score += min(10, conjunctions * 2)

    return clamp_score(score, low=40)


def fallback_grammar(text: str) -> int:
    features = extract_lexical_features(text)
    score = 70
    if features.sentence_count > 1:
        score += 10
    if features.word_count > 10:
        score += 10
    if features.starts_capitalized:
        score += 5
    if features.ends_with_punctuation:
        score += 5
    return clamp_score(score)


def fallback_vocabulary(text: str) -> int:
    features = extract_lexical_features(text)
    score = 60
    if features.lexical_diversity > 0.7:
        score += 20
    if features.average_word_length > 5:
        score += 15
    if any(len(t) > 7 for t in features.tokens):
        score += 5
    return clamp_score(score)


def fallback_comprehension(text: str) -> int:
    features = extract_lexical_features(text)
    score = 65
    if features.word_count > 12:
        score += 20
    if features.sentence_count > 2:
        score += 10
    if contains_phrase(text, ("because", "therefore", "however")):
        score += 5
    return clamp_score(score)


class ScoreCombiner:
    """Builds ScoringParameters, degrading each dimension independently.

    Args:
        pronunciation_sources: Tried in order; the first non-None estimate wins.
    """

    def __init__(
        self,
        pronunciation_sources: Sequence[PronunciationSource] = DEFAULT_PRONUNCIATION_SOURCES,
    ):
        self.pronunciation_sources = tuple(pronunciation_sources)
        self._text_pronunciation = TextProxyPronunciation()

    def combine(
        self,
        text: str,
        grammar: GrammarAnalysis | None = None,
        vocabulary: VocabularyAnalysis | None = None,
        content: ContentAnalysis | None = None,
        audio: AudioMetrics | None = None,
    ) -> tuple[ScoringParameters, list[str]]:
        """Merge analyzer results.

        Args:
            text: Transcript, used by the text-only fallbacks.
            grammar: Grammar analysis, or None if it failed.
            vocabulary: Vocabulary analysis, or None if it failed.
            content: Content analysis, or None if it failed.
            audio: Audio metrics, or None when audio is absent or failed.

        Returns:
            Tuple of parameters and names of dimensions that used a fallback.
        """
        text = text or ""
        fallbacks: list[str] = []

        def guarded(
            dimension: str,
            primary: Callable[[], float] | None,
            fallback: Callable[[], float],
        ) -> float:
            if primary is not None:
                try:
                    return primary()
                except Exception as e:
                    logger.warning("dimension_failed", dimension=dimension, error=str(e))
            fallbacks.append(dimension)
            try:
                return fallback()
            except Exception:
                logger.exception("dimension_fallback_failed", dimension=dimension)
                return tables.NEUTRAL_SCORE

        values = {
            "grammar": guarded(
                "grammar",
                (lambda: grammar.score) if grammar is not None else None,
                lambda: fallback_grammar(text),
            ),
            "vocabulary": guarded(
                "vocabulary",
                (lambda: vocabulary.score) if vocabulary is not None else None,
                lambda: fallback_vocabulary(text),
            ),
            "comprehension": guarded(
                "comprehension",
                (lambda: content.relevance) if content is not None else None,
                lambda: fallback_comprehension(text),
            ),
            "pronunciation": self._pronunciation(text, audio, fallbacks),
        }
        if audio is not None and audio.speaking_rate:
            values["fluency"] = guarded(
                "fluency",
                lambda: fluency_from_audio(audio.speaking_rate, audio.pause_ratio),
                lambda: fluency_from_text(text),
            )
        else:
            values["fluency"] = guarded(
                "fluency",
                lambda: fluency_from_text(text),
                lambda: tables.NEUTRAL_SCORE,
            )
        return ScoringParameters(**values), fallbacks

    def _pronunciation(
        self, text: str, audio: AudioMetrics | None, fallbacks: list[str]
    ) -> float:
        for source in self.pronunciation_sources:
            try:
                estimate = source.estimate(text, audio)
            except Exception as e:
                logger.warning(
                    "pronunciation_source_failed",
                    source=type(source).__name__,
                    error=str(e),
                )
                continue
            if estimate is not None:
                return estimate
        fallbacks.append("pronunciation")
        try:
            return self._text_pronunciation.estimate(text)
        except Exception:
            logger.exception("dimension_fallback_failed", dimension="pronunciation")
            return tables.NEUTRAL_SCORE

    def fallback_parameters(self, text: str) -> ScoringParameters:
        """All-dimensions text-only result used when combination itself fails."""
        parameters, _ = self.combine(text)
        return parameters
