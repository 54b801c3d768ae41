"""Word lists, pattern catalogues and thresholds used by the analyzers.

Bump TABLES_VERSION whenever a table changes so stored scores can be traced
back to the tables that produced them.
"""

from typing import NamedTuple

from speaking_placement.models.section import SectionId

TABLES_VERSION = "2024.1"


# Lexical -----------------------------------------------------------------

FILLERS: tuple[str, ...] = (
    "um", "uh", "like", "you know", "basically", "actually", "sort of", "kind of",
)


# Grammar -----------------------------------------------------------------

GRAMMAR_BASE_SCORE = 85
MISSING_CAPITAL_PENALTY = 5
MISSING_PUNCTUATION_PENALTY = 5
SHORT_SENTENCE_THRESHOLD = 5  # average words per sentence
SHORT_SENTENCE_PENALTY = 5
LONG_SENTENCE_THRESHOLD = 25
LONG_SENTENCE_PENALTY = 3
CONJUNCTION_BONUS = 5


class GrammarPattern(NamedTuple):
    pattern: str
    error: str
    suggestion: str
    penalty: int


GRAMMAR_PATTERNS: tuple[GrammarPattern, ...] = (
    GrammarPattern(r"\bi am going to went\b", "Incorrect verb tense",
                   'Use "I went" or "I am going to go"', 10),
    GrammarPattern(r"\bhe don't\b", "Subject-verb disagreement",
                   'Use "he doesn\'t"', 8),
    GrammarPattern(r"\bshe don't\b", "Subject-verb disagreement",
                   'Use "she doesn\'t"', 8),
    GrammarPattern(r"\bit don't\b", "Subject-verb disagreement",
                   'Use "it doesn\'t"', 8),
    GrammarPattern(r"\bmuch people\b", 'Use "many people" not "much people"',
                   'Use "many" with countable nouns', 6),
    GrammarPattern(r"\bless people\b", 'Use "fewer people" not "less people"',
                   'Use "fewer" with countable nouns', 6),
    GrammarPattern(r"\bmore better\b", 'Use "better" not "more better"',
                   "Avoid double comparatives", 6),
    GrammarPattern(r"\bmost best\b", 'Use "best" not "most best"',
                   "Avoid double superlatives", 6),
    GrammarPattern(r"\bcan able to\b", 'Use either "can" or "able to"',
                   'Use "can" or "am able to", not both', 5),
    GrammarPattern(r"\bwould of\b", 'Use "would have" not "would of"',
                   'Write "would have"', 8),
    GrammarPattern(r"\bcould of\b", 'Use "could have" not "could of"',
                   'Write "could have"', 8),
    GrammarPattern(r"\bshould of\b", 'Use "should have" not "should of"',
                   'Write "should have"', 8),
    GrammarPattern(r"\bdid went\b", 'Use "did go" or "went" not "did went"',
                   "Use the base verb after did", 8),
    GrammarPattern(r"\bdoes goes\b", 'Use "does go" or "goes" not "does goes"',
                   "Use the base verb after does", 8),
    GrammarPattern(r"\bchilds\b", 'Use "children" not "childs"',
                   "Review irregular plurals", 6),
    GrammarPattern(r"\bgoed\b", 'Use "went" not "goed"',
                   "Review irregular past tenses", 6),
)

GRAMMAR_CONJUNCTIONS: tuple[str, ...] = (
    "and", "but", "because", "although", "however", "therefore", "moreover", "furthermore",
)


# Vocabulary --------------------------------------------------------------

VOCABULARY_BASE_SCORE = 60
ADVANCED_WORD_MIN_LENGTH = 7
REPETITION_MIN_LENGTH = 4  # only words longer than 3 letters count
REPETITION_MAX_OCCURRENCES = 2
REPETITION_PENALTY = 3

# (threshold, bonus), checked in order; first tier strictly exceeded wins
DIVERSITY_TIERS: tuple[tuple[float, int], ...] = ((0.8, 25), (0.6, 20), (0.4, 15), (0.2, 10))
WORD_LENGTH_TIERS: tuple[tuple[float, int], ...] = ((6, 15), (5, 10), (4, 5))
ADVANCED_RATIO_TIERS: tuple[tuple[float, int], ...] = ((0.3, 15), (0.2, 10), (0.1, 5))

ACADEMIC_WORDS: frozenset[str] = frozenset({
    "analyze", "concept", "theory", "research", "study", "examine", "investigate",
    "demonstrate", "illustrate", "significant", "substantial", "comprehensive",
    "methodology", "hypothesis", "conclusion", "evidence", "criteria", "assessment",
})

PROFESSIONAL_WORDS: frozenset[str] = frozenset({
    "experience", "responsibility", "management", "leadership", "collaboration",
    "communication", "development", "implementation", "strategy", "objective",
    "achievement", "performance", "efficiency", "productivity", "innovation",
    "solution", "challenge", "opportunity", "professional", "expertise",
})


# Content -----------------------------------------------------------------

RELEVANCE_DEFAULT = 70
RELEVANCE_BASE = 50
RELEVANCE_RANGE = 50
REVERSE_MATCH_MIN_LENGTH = 4

HINT_STOPWORDS: frozenset[str] = frozenset({
    "a", "an", "the", "and", "or", "of", "to", "in", "on", "for", "with", "about",
    "is", "are", "be", "your", "their", "etc",
})

SYNONYM_GROUPS: tuple[frozenset[str], ...] = (
    frozenset({"good", "great", "excellent", "wonderful", "amazing"}),
    frozenset({"work", "job", "career", "profession", "employment"}),
    frozenset({"learn", "study", "education", "knowledge", "training"}),
    frozenset({"help", "assist", "support", "aid"}),
    frozenset({"important", "significant", "crucial", "essential", "vital"}),
    frozenset({"company", "organization", "business", "firm", "corporation"}),
    frozenset({"skill", "ability", "capability", "competence", "expertise"}),
    frozenset({"goal", "objective", "target", "aim", "purpose"}),
    frozenset({"background", "experience", "history"}),
)

COMPLETENESS_BASE = 60
COHERENCE_BASE = 70
CONNECTIVE_BONUS = 15
EXAMPLE_BONUS = 10
KEY_POINT_MIN_LENGTH = 15  # characters, exclusive
MAX_KEY_POINTS = 3

DISCOURSE_CONNECTIVES: tuple[str, ...] = (
    "first", "second", "then", "next", "finally", "however", "therefore", "because", "although",
)
EXAMPLE_MARKERS: tuple[str, ...] = ("for example", "for instance", "such as", "including")


class CompletenessProfile(NamedTuple):
    """Word-count tiers plus optional content checks for one section.

    ``tiers`` holds (minimum word count, bonus) pairs, highest first; the
    first one met applies.
    """

    tiers: tuple[tuple[int, int], ...]
    keyword_bonuses: tuple[tuple[str, int], ...] = ()
    min_sentences: int | None = None
    sentence_bonus: int = 0


_DEFAULT_PROFILE = CompletenessProfile(tiers=((15, 25), (10, 15), (5, 10)))

SECTION_COMPLETENESS: dict[SectionId, CompletenessProfile] = {
    SectionId.A: CompletenessProfile(tiers=((8, 30), (5, 20), (3, 10))),
    SectionId.B: CompletenessProfile(
        tiers=((25, 30), (15, 20), (10, 10)),
        keyword_bonuses=(
            (r"situation|problem|challenge|experience", 5),
            (r"solution|action|did|decided|resolved", 5),
        ),
    ),
    SectionId.C: _DEFAULT_PROFILE,
    SectionId.D: _DEFAULT_PROFILE,
    SectionId.E: _DEFAULT_PROFILE,
    SectionId.F: _DEFAULT_PROFILE,
    SectionId.G: CompletenessProfile(
        tiers=((50, 30), (35, 20), (20, 10)),
        min_sentences=4,
        sentence_bonus=10,
    ),
}

# Used when no section is given: strictly-greater word-count tiers
GENERIC_COMPLETENESS_TIERS: tuple[tuple[int, int], ...] = ((20, 25), (15, 20), (10, 15), (5, 10))
GENERIC_SENTENCE_THRESHOLD = 2  # sentences, exclusive
GENERIC_SENTENCE_BONUS = 15

POSITIVE_WORDS: frozenset[str] = frozenset({
    "good", "great", "excellent", "amazing", "wonderful", "fantastic", "love", "like", "enjoy",
    "happy", "excited", "passionate", "confident", "successful", "achieve", "accomplish",
    "opportunity", "growth", "development", "improvement", "positive", "optimistic",
})

NEGATIVE_WORDS: frozenset[str] = frozenset({
    "bad", "terrible", "awful", "hate", "dislike", "horrible", "worst", "difficult", "problem",
    "challenge", "struggle", "fail", "failure", "disappointed", "frustrated", "worried",
    "concerned", "negative", "pessimistic", "unfortunate", "regret",
})


# Combiner ----------------------------------------------------------------

NEUTRAL_SCORE = 50

FLUENCY_CONJUNCTIONS: tuple[str, ...] = (
    "and", "but", "because", "although", "however", "therefore", "moreover", "furthermore",
    "while", "since",
)

# (low, high, score) speaking-rate bands in words per minute, narrowest first
SPEAKING_RATE_BANDS: tuple[tuple[float, float, int], ...] = (
    (140, 180, 90),
    (120, 200, 80),
    (100, 220, 70),
)
SPEAKING_RATE_DEFAULT = 60
NATURAL_PAUSE_RANGE = (0.1, 0.3)  # exclusive bounds
NATURAL_PAUSE_BONUS = 5
EXCESSIVE_PAUSE_THRESHOLD = 0.4
EXCESSIVE_PAUSE_PENALTY = 10
