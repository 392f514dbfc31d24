"""
Card collection helpers.

The collection is an ordered list of cards keyed by a unique identity.
Functions here never mutate their input; they return new lists.
"""
from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from typing import Any, TypeVar

from sonoglyph.models.card import DEFAULT_EASINESS, Card, DeckStats, SourceStats, content_source
from sonoglyph.services.scheduler import DAY_MS

logger = logging.getLogger(__name__)

R = TypeVar("R")


def now_ms() -> int:
    return int(time.time() * 1000)


def new_card(identity: str, content: R, now: int) -> Card[R]:
    """Fresh card, first due one day after creation."""
    return Card[type(content)](
        identity=identity,
        easiness_factor=DEFAULT_EASINESS,
        interval_days=1,
        consecutive_correct_reps=0,
        next_review_ms=now + DAY_MS,
        content=content,
    )


def _same_identity(a: str, b: str) -> bool:
    return a.casefold() == b.casefold()


def find_card(cards: Sequence[Card[R]], identity: str) -> Card[R] | None:
    for card in cards:
        if _same_identity(card.identity, identity):
            return card
    return None


def add_card(cards: Sequence[Card[R]], identity: str, content: R, now: int) -> list[Card[R]]:
    """Append a new card unless one with the same identity (any case) exists."""
    if find_card(cards, identity) is not None:
        logger.debug("Card %r already in collection, not added", identity)
        return list(cards)
    logger.info("Adding card %r", identity)
    return [*cards, new_card(identity, content, now)]


def replace_card(cards: Sequence[Card[R]], updated: Card[R]) -> list[Card[R]]:
    """Swap in *updated* for the first card with the same identity."""
    result = list(cards)
    for i, card in enumerate(result):
        if card.identity == updated.identity:
            result[i] = updated
            break
    return result


def remove_card(cards: Sequence[Card[R]], identity: str) -> list[Card[R]]:
    return [c for c in cards if not _same_identity(c.identity, identity)]


def is_due(card: Card[Any], now: int) -> bool:
    return card.next_review_ms <= now


def due_cards(cards: Sequence[Card[R]], now: int) -> list[Card[R]]:
    """Cards due at *now*, in collection order."""
    return [c for c in cards if is_due(c, now)]


def deck_stats(cards: Sequence[Card[Any]], now: int) -> DeckStats:
    """Total cards, cards due now, and a per-source breakdown."""
    per_source: dict[str, list[int]] = {}
    for card in cards:
        counts = per_source.setdefault(content_source(card), [0, 0])
        counts[0] += 1
        if is_due(card, now):
            counts[1] += 1
    return DeckStats(
        total_cards=len(cards),
        due_now=len(due_cards(cards, now)),
        per_source=[
            SourceStats(source=source, total=total, due=due)
            for source, (total, due) in sorted(per_source.items())
        ],
    )
