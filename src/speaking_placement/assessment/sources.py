"""Capability interfaces for transcription and pronunciation providers.

The engine talks to these protocols only. A new provider is added by
implementing the protocol, never by branching on a provider name.
"""

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field

from speaking_placement.assessment import tables
from speaking_placement.assessment.lexical import tokenize
from speaking_placement.audio.decoder import AudioClip
from speaking_placement.models.assessment import AudioMetrics, clamp_score


class WordTiming(BaseModel):
    word: str
    start_time: float
    end_time: float
    confidence: float = 1.0


class TranscriptionResult(BaseModel):
    """Text produced by a speech recognizer for one response."""

    text: str = ""
    confidence: float = 0.0
    words: list[WordTiming] = Field(default_factory=list)


@runtime_checkable
class TranscriptionSource(Protocol):
    async def transcribe(self, clip: AudioClip) -> TranscriptionResult: ...


@runtime_checkable
class PronunciationSource(Protocol):
    def estimate(self, transcript: str, audio: AudioMetrics | None) -> int | None:
        """Return a 0-100 pronunciation score, or None when it has no basis."""
        ...


class PassthroughTranscription:
    """Transcription source for hosts that already hold the recognized text."""

    def __init__(self, result: TranscriptionResult | str):
        if isinstance(result, str):
            result = TranscriptionResult(text=result, confidence=1.0 if result else 0.0)
        self.result = result

    async def transcribe(self, clip: AudioClip) -> TranscriptionResult:
        return self.result


class AudioClarityPronunciation:
    """Uses the spectral clarity proxy when audio metrics exist."""

    def estimate(self, transcript: str, audio: AudioMetrics | None) -> int | None:
        if audio is None or not audio.clarity:
            return None
        return clamp_score(audio.clarity)


class TextProxyPronunciation:
    """Text-only estimate: longer answers with longer words score higher."""

    def estimate(self, transcript: str, audio: AudioMetrics | None = None) -> int:
        words = (transcript or "").split()
        score = 75

        # Longer responses suggest more confident pronunciation
        if len(words) > 15:
            score += 10
        elif len(words) > 10:
            score += 5

        if any(len(w) > 6 for w in words):
            score += 5

        domain_words = tables.ACADEMIC_WORDS | tables.PROFESSIONAL_WORDS
        if any(t in domain_words for t in tokenize(transcript or "")):
            score += 5

        return clamp_score(score)


DEFAULT_PRONUNCIATION_SOURCES: tuple[PronunciationSource, ...] = (
    AudioClarityPronunciation(),
    TextProxyPronunciation(),
)
