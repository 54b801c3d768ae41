"""Lexical feature extraction shared by all text analyzers."""

import re

from speaking_placement.assessment.tables import FILLERS
from speaking_placement.models.assessment import LexicalFeatures

_WORD_RE = re.compile(r"[a-z]+(?:'[a-z]+)*")
_VOWEL_GROUP_RE = re.compile(r"[aeiouy]+")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_FILLER_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(f) for f in FILLERS) + r")\b", re.IGNORECASE
)


def tokenize(text: str) -> list[str]:
    """Lower-case word tokens; punctuation and digits are separators."""
    return _WORD_RE.findall(text.lower().replace("’", "'"))


def split_sentences(text: str) -> list[str]:
    """Split on terminal punctuation, dropping blank pieces."""
    return [s.strip() for s in _SENTENCE_SPLIT_RE.split(text) if s.strip()]


def estimate_syllables(word: str) -> int:
    """Vowel-group syllable estimate, never below 1."""
    word = word.lower()
    count = len(_VOWEL_GROUP_RE.findall(word))
    if word.endswith("e"):
        count -= 1
    return max(count, 1)


def count_fillers(text: str) -> int:
    return len(_FILLER_RE.findall(text))


def contains_phrase(text: str, phrases: tuple[str, ...] | frozenset[str]) -> bool:
    """True if any phrase occurs in text as whole words (case-insensitive)."""
    lowered = text.lower()
    return any(re.search(rf"\b{re.escape(p)}\b", lowered) for p in phrases)


def count_phrases(text: str, phrases: tuple[str, ...]) -> int:
    """Total whole-word occurrences of all phrases."""
    lowered = text.lower()
    return sum(len(re.findall(rf"\b{re.escape(p)}\b", lowered)) for p in phrases)


def extract_lexical_features(text: str) -> LexicalFeatures:
    """Compute surface features of a transcript.

    Args:
        text: Raw transcript, possibly empty.

    Returns:
        LexicalFeatures; all ratios are 0 for an empty transcript.
    """
    text = text or ""
    tokens = tokenize(text)
    stripped = text.strip()
    word_count = len(tokens)
    unique_count = len(set(tokens))

    return LexicalFeatures(
        tokens=tokens,
        word_count=word_count,
        raw_word_count=len(text.split()),
        unique_word_count=unique_count,
        lexical_diversity=unique_count / word_count if word_count else 0.0,
        average_word_length=(
            sum(len(t) for t in tokens) / word_count if word_count else 0.0
        ),
        syllable_counts=[estimate_syllables(t) for t in tokens],
        filler_count=count_fillers(text),
        sentence_count=len(split_sentences(text)),
        starts_capitalized=bool(re.match(r"[A-Z]", stripped)),
        ends_with_punctuation=bool(re.search(r"[.!?]$", stripped)),
    )
