"""Assessment score models."""

import math
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from speaking_placement.models.section import SectionId

DIMENSIONS: tuple[str, ...] = (
    "fluency",
    "pronunciation",
    "grammar",
    "vocabulary",
    "comprehension",
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (62.5 -> 63)."""
    return math.floor(value + 0.5)


def clamp_score(value: object, low: int = 0, high: int = 100) -> int:
    """Coerce any value to an integer score in [low, high].

    Non-numeric values and NaN map to ``low``.
    """
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return low
    if math.isnan(number):
        return low
    number = min(max(number, low), high)
    return round_half_up(number)


class ScoreLevel(StrEnum):
    """Qualitative level for a 0-100 score."""

    EXCELLENT = "Excellent"
    VERY_GOOD = "Very Good"
    GOOD = "Good"
    FAIR = "Fair"
    NEEDS_IMPROVEMENT = "Needs Improvement"

    @classmethod
    def from_score(cls, score: float) -> "ScoreLevel":
        """Determine level from 0-100 score."""
        if score >= 85:
            return cls.EXCELLENT
        elif score >= 75:
            return cls.VERY_GOOD
        elif score >= 65:
            return cls.GOOD
        elif score >= 55:
            return cls.FAIR
        else:
            return cls.NEEDS_IMPROVEMENT


class ScoringParameters(BaseModel):
    """The five dimension scores for one response (integers, 0-100 each)."""

    model_config = ConfigDict(frozen=True)

    fluency: int = 0
    pronunciation: int = 0
    grammar: int = 0
    vocabulary: int = 0
    comprehension: int = 0

    @field_validator(*DIMENSIONS, mode="before")
    @classmethod
    def _clamp(cls, value: object) -> int:
        return clamp_score(value)

    def as_dict(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in DIMENSIONS}


class AudioMetrics(BaseModel):
    """Coarse metrics estimated from a decoded waveform."""

    speaking_rate: float = 0.0  # words per minute
    pause_ratio: float = 0.0  # 0-1
    volume_variation: float = 0.0
    clarity: float = 60.0  # 0-100
    duration_seconds: float = 0.0


class LexicalFeatures(BaseModel):
    """Surface features of a transcript."""

    tokens: list[str] = Field(default_factory=list)
    word_count: int = 0
    raw_word_count: int = 0  # whitespace-separated, numerals included
    unique_word_count: int = 0
    lexical_diversity: float = 0.0
    average_word_length: float = 0.0
    syllable_counts: list[int] = Field(default_factory=list)
    filler_count: int = 0
    sentence_count: int = 0
    starts_capitalized: bool = False
    ends_with_punctuation: bool = False

    @property
    def has_fillers(self) -> bool:
        return self.filler_count > 0

    @property
    def words_per_sentence(self) -> float:
        return self.raw_word_count / max(self.sentence_count, 1)


class GrammarAnalysis(BaseModel):
    score: int = 0
    errors: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class VocabularyMetrics(BaseModel):
    total_words: int = 0
    unique_words: int = 0
    lexical_diversity: float = 0.0
    average_word_length: float = 0.0
    advanced_words: int = 0
    advanced_ratio: float = 0.0
    repeated_words: list[str] = Field(default_factory=list)
    readability: float = 0.0  # Flesch reading ease, informational only


class VocabularyAnalysis(BaseModel):
    score: int = 0
    metrics: VocabularyMetrics = Field(default_factory=VocabularyMetrics)
    suggestions: list[str] = Field(default_factory=list)


class SentimentAnalysis(BaseModel):
    label: str = "neutral"  # "positive", "neutral", "negative"
    confidence: float = 0.5
    tone: str = "neutral"


class ContentAnalysis(BaseModel):
    relevance: int = 70
    completeness: int = 60
    coherence: int = 70
    key_points: list[str] = Field(default_factory=list)
    sentiment: SentimentAnalysis = Field(default_factory=SentimentAnalysis)


class ResponseAssessment(BaseModel):
    """Final parameters plus the analyses that produced them."""

    parameters: ScoringParameters
    grammar: GrammarAnalysis | None = None
    vocabulary: VocabularyAnalysis | None = None
    content: ContentAnalysis | None = None
    audio: AudioMetrics | None = None
    fallbacks: list[str] = Field(default_factory=list)


class SectionScore(BaseModel):
    """Score for one completed test section."""

    model_config = ConfigDict(frozen=True)

    section: SectionId
    score: int
    parameters: ScoringParameters
    feedback: str


class TestResult(BaseModel):
    """Aggregate of all section scores for one sitting."""

    model_config = ConfigDict(frozen=True)

    section_scores: tuple[SectionScore, ...] = ()
    overall_score: int = 0
    level: ScoreLevel = ScoreLevel.NEEDS_IMPROVEMENT
    completed_at: datetime = Field(default_factory=datetime.now)
