from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from sonoglyph.models.mnemonic import MnemonicResult

R = TypeVar("R")

DEFAULT_EASINESS = 2.5
MIN_EASINESS = 1.3


class Card(BaseModel, Generic[R]):
    identity: str
    easiness_factor: float = Field(default=DEFAULT_EASINESS, ge=MIN_EASINESS)
    interval_days: int = Field(default=1, ge=1)       # days until next review
    consecutive_correct_reps: int = Field(default=0, ge=0)
    next_review_ms: int                               # epoch milliseconds
    content: R


MnemonicCard = Card[MnemonicResult]


class CardList(BaseModel):
    items: list[MnemonicCard]
    total: int


class SourceStats(BaseModel):
    source: str
    total: int
    due: int


class DeckStats(BaseModel):
    total_cards: int
    due_now: int
    per_source: list[SourceStats]


def content_source(card: Card[Any]) -> str:
    """Category tag carried by the card's content, or ``"unknown"``."""
    source = getattr(card.content, "source", None)
    if source is None and isinstance(card.content, dict):
        source = card.content.get("source")
    if source is None:
        return "unknown"
    return getattr(source, "value", str(source))
