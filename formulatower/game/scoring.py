"""Points awarded for the number of correct answers in one game."""

from typing import Sequence, Tuple

# (points, correct answers required), highest first
SCORE_THRESHOLDS: Tuple[Tuple[int, int], ...] = (
    (10, 35),
    (9, 33),
    (8, 32),
    (7, 31),
    (6, 30),
    (5, 29),
    (4, 28),
    (3, 27),
    (2, 26),
    (1, 24),
)


def compute_points(
    correct: int, thresholds: Sequence[Tuple[int, int]] = SCORE_THRESHOLDS
) -> int:
    """First rule whose requirement is met wins; below every rule scores 0."""
    for points, need in thresholds:
        if correct >= need:
            return points
    return 0


def format_time(seconds: float) -> str:
    """``MM:SS`` countdown display, floored at zero."""
    s = max(0, int(seconds))
    return f"{s // 60:02d}:{s % 60:02d}"
