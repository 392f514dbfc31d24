"""
SM-2 scheduler.

apply_rating() is a pure transition: one card plus one quality rating (1-5)
gives the card's next scheduling state. Ratings below PASS_THRESHOLD restart
the repetition ladder; the easiness factor is updated on every rating.
"""
from __future__ import annotations

import math
from typing import TypeVar

from sonoglyph.models.card import MIN_EASINESS, Card

R = TypeVar("R")

DAY_MS = 86_400_000
PASS_THRESHOLD = 3
MIN_QUALITY = 1
MAX_QUALITY = 5

QUALITY_LABELS = {1: "Again", 2: "Hard", 3: "OK", 4: "Good", 5: "Easy"}


class InvalidQualityError(ValueError):
    """Raised by validate_quality() for ratings outside 1-5."""


def validate_quality(quality: int) -> int:
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise InvalidQualityError(f"quality must be an integer, got {quality!r}")
    if not MIN_QUALITY <= quality <= MAX_QUALITY:
        raise InvalidQualityError(
            f"quality must be between {MIN_QUALITY} and {MAX_QUALITY}, got {quality}"
        )
    return quality


def is_valid_quality(quality: int) -> bool:
    try:
        validate_quality(quality)
    except InvalidQualityError:
        return False
    return True


def _round_half_up(value: float) -> int:
    # round() is banker's rounding; intervals round .5 upwards
    return int(math.floor(value + 0.5))


def next_easiness(easiness: float, quality: int) -> float:
    """Standard SM-2 EF update, floored at MIN_EASINESS."""
    miss = 5 - quality
    return max(MIN_EASINESS, easiness + (0.1 - miss * (0.08 + miss * 0.02)))


def next_interval(reps: int, interval: int, easiness: float, quality: int) -> tuple[int, int]:
    """
    Compute (new_reps, new_interval) from the pre-update ladder position.

    The growth step uses the previous interval and previous easiness factor.
    """
    if quality < PASS_THRESHOLD:
        # Incorrect recall: reset streak and retry tomorrow
        return 0, 1
    if reps == 0:
        new_interval = 1
    elif reps == 1:
        new_interval = 6
    else:
        new_interval = max(1, _round_half_up(interval * easiness))
    return reps + 1, new_interval


def apply_rating(card: Card[R], quality: int, now_ms: int) -> Card[R]:
    """Return a copy of *card* rescheduled for a *quality* rating made at *now_ms*.

    Quality must already be within 1-5; see validate_quality().
    """
    reps, interval = next_interval(
        card.consecutive_correct_reps,
        card.interval_days,
        card.easiness_factor,
        quality,
    )
    return card.model_copy(
        update={
            "easiness_factor": next_easiness(card.easiness_factor, quality),
            "interval_days": interval,
            "consecutive_correct_reps": reps,
            "next_review_ms": now_ms + interval * DAY_MS,
        }
    )
