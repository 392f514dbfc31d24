"""
Review session queue.

Session lifecycle:
  start_session()  -> first card presented, answer hidden
  reveal()         -> answer shown
  rate()           -> rating committed (due-only) or skipped (practice-all),
                      next card presented, answer hidden
  ...until current_card is None (exhausted).

Due-only sessions re-derive the next card from the live collection after each
rating instead of consuming a snapshot taken at start. Only the identity just
rated is excluded from that recomputation. Ratings are applied to the card as
it currently stands in the collection, not to the copy the session was
started with.

Degraded input (no current card, answer not revealed, quality outside 1-5)
is logged and returns the session and collection unchanged.
"""
from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from typing import TypeVar

from sonoglyph.models.card import Card
from sonoglyph.models.review import ReviewMode, ReviewSession
from sonoglyph.services.deck import due_cards, find_card, replace_card
from sonoglyph.services.scheduler import QUALITY_LABELS, apply_rating, is_valid_quality

logger = logging.getLogger(__name__)

R = TypeVar("R")


def _present(mode: ReviewMode, queue: list[Card[R]]) -> ReviewSession:
    return ReviewSession(
        mode=mode,
        current_card=queue[0] if queue else None,
        pending_queue=queue[1:],
        revealed=False,
    )


def start_session(
    cards: Sequence[Card[R]],
    mode: ReviewMode,
    now_ms: int,
    rng: random.Random | None = None,
) -> ReviewSession:
    """Open a session over *cards*.

    due-only presents the cards due at *now_ms* in collection order.
    practice-all presents every card in a uniformly random order; pass *rng*
    for a reproducible shuffle.
    """
    mode = ReviewMode(mode)
    if mode is ReviewMode.PRACTICE_ALL:
        queue = list(cards)
        (rng or random.SystemRandom()).shuffle(queue)
    else:
        queue = due_cards(cards, now_ms)

    logger.info("Starting %s session with %d card(s)", mode.value, len(queue))
    return _present(mode, queue)


def reveal(session: ReviewSession) -> ReviewSession:
    if session.current_card is None or session.revealed:
        return session
    return session.model_copy(update={"revealed": True})


def rate(
    session: ReviewSession,
    cards: Sequence[Card[R]],
    quality: int,
    now_ms: int,
) -> tuple[ReviewSession, list[Card[R]]]:
    """Record *quality* for the current card and advance.

    Returns the advanced session and the collection, which differs from
    *cards* in exactly one entry for due-only sessions (none if the card has
    since been removed) and not at all for practice-all sessions.
    """
    current = session.current_card
    if current is None:
        logger.warning("Rating ignored: session has no current card")
        return session, list(cards)
    if not session.revealed:
        logger.warning("Rating ignored: answer for %r not revealed", current.identity)
        return session, list(cards)
    if not is_valid_quality(quality):
        logger.warning("Rating ignored: invalid quality %r for %r", quality, current.identity)
        return session, list(cards)

    if session.mode is ReviewMode.PRACTICE_ALL:
        logger.debug("Practice rating %s for %r (not scheduled)", QUALITY_LABELS[quality], current.identity)
        advanced = _present(session.mode, list(session.pending_queue))
        return advanced, list(cards)

    live = find_card(cards, current.identity)
    if live is None:
        logger.warning("Rating skipped: %r is no longer in the collection", current.identity)
        new_cards = list(cards)
    else:
        updated = apply_rating(live, quality, now_ms)
        logger.debug(
            "Rated %r %s: interval=%d reps=%d ef=%.2f",
            live.identity,
            QUALITY_LABELS[quality],
            updated.interval_days,
            updated.consecutive_correct_reps,
            updated.easiness_factor,
        )
        new_cards = replace_card(cards, updated)
    remaining = [c for c in due_cards(new_cards, now_ms) if c.identity != current.identity]
    advanced = _present(session.mode, remaining)
    if advanced.exhausted:
        logger.info("Due-only session exhausted")
    return advanced, new_cards
