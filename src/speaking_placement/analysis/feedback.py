"""Score levels and human-readable feedback."""

from speaking_placement.models.assessment import ScoreLevel, ScoringParameters

STRENGTH_THRESHOLD = 80
WEAKNESS_THRESHOLD = 60
GENERIC_ENCOURAGEMENT = "Good overall performance. Keep practicing to improve further."

LEVEL_FEEDBACK: dict[ScoreLevel, str] = {
    ScoreLevel.EXCELLENT: (
        "Excellent performance! You are very well-prepared for the placement test."
    ),
    ScoreLevel.VERY_GOOD: (
        "Very good! Your communication skills are strong. Keep practicing to reach excellence."
    ),
    ScoreLevel.GOOD: (
        "Good effort! You have solid fundamentals. Focus on improving weak areas."
    ),
    ScoreLevel.FAIR: "Fair performance. Dedicate more time to practice and improvement.",
    ScoreLevel.NEEDS_IMPROVEMENT: "Keep practicing! Focus on all areas of communication skills.",
}


def generate_feedback(parameters: ScoringParameters) -> str:
    """List strong (>= 80) and weak (< 60) dimensions.

    Args:
        parameters: Scores for one response or section.

    Returns:
        Feedback sentence(s); a generic encouragement when nothing stands out.
    """
    scores = [(name.capitalize(), value) for name, value in parameters.as_dict().items()]
    strengths = [name for name, value in scores if value >= STRENGTH_THRESHOLD]
    weaknesses = [name for name, value in scores if value < WEAKNESS_THRESHOLD]

    parts = []
    if strengths:
        parts.append(f"Strengths: {', '.join(strengths)}.")
    if weaknesses:
        parts.append(f"Areas to improve: {', '.join(weaknesses)}.")

    return " ".join(parts) if parts else GENERIC_ENCOURAGEMENT


def get_score_level(score: float) -> str:
    return ScoreLevel.from_score(score).value


def get_score_feedback(score: float) -> str:
    return LEVEL_FEEDBACK[ScoreLevel.from_score(score)]
