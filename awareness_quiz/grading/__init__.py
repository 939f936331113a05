"""Answer grading."""

from .scorer import (
    GradedSubmission,
    grade_answer,
    grade_submission,
    parse_submission,
    round_half_up,
)

__all__ = [
    "GradedSubmission",
    "grade_answer",
    "grade_submission",
    "parse_submission",
    "round_half_up",
]
