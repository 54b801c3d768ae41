"""Section and overall score aggregation."""

from collections.abc import Sequence

import structlog

from speaking_placement.analysis.feedback import generate_feedback
from speaking_placement.models.assessment import (
    DIMENSIONS,
    ScoreLevel,
    ScoringParameters,
    SectionScore,
    TestResult,
    round_half_up,
)
from speaking_placement.models.section import SectionId

logger = structlog.get_logger()


def calculate_section_score(parameters: ScoringParameters) -> int:
    """Equal-weight mean of the five dimensions, rounded."""
    values = parameters.as_dict().values()
    return round_half_up(sum(values) / len(DIMENSIONS))


def calculate_overall_score(section_scores: Sequence[SectionScore]) -> int:
    """Mean of section scores, rounded; 0 when there are none."""
    if not section_scores:
        return 0
    return round_half_up(sum(s.score for s in section_scores) / len(section_scores))


def average_parameters(responses: Sequence[ScoringParameters]) -> ScoringParameters:
    """Dimension-wise mean of several responses."""
    if not responses:
        return ScoringParameters()
    return ScoringParameters(**{
        name: sum(getattr(r, name) for r in responses) / len(responses)
        for name in DIMENSIONS
    })


def score_section(
    section: SectionId | str, responses: Sequence[ScoringParameters]
) -> SectionScore:
    """Build the SectionScore for all responses given in one section.

    Args:
        section: Section id.
        responses: Per-response parameters from the engine.

    Returns:
        Immutable SectionScore.

    Raises:
        ValueError: If the section id is unknown.
    """
    section_id = SectionId.parse(section)
    if section_id is None:
        raise ValueError(f"Unknown section: {section!r}")

    parameters = average_parameters(responses)
    score = calculate_section_score(parameters)
    logger.info(
        "section_scored", section=section_id.value, responses=len(responses), score=score
    )
    return SectionScore(
        section=section_id,
        score=score,
        parameters=parameters,
        feedback=generate_feedback(parameters),
    )


def build_test_result(section_scores: Sequence[SectionScore]) -> TestResult:
    """Aggregate section scores into the result of one sitting."""
    overall = calculate_overall_score(section_scores)
    return TestResult(
        section_scores=tuple(section_scores),
        overall_score=overall,
        level=ScoreLevel.from_score(overall),
    )
