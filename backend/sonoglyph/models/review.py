from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from sonoglyph.models.card import Card, MnemonicCard


class ReviewMode(str, Enum):
    DUE_ONLY = "due-only"
    PRACTICE_ALL = "practice-all"


class ReviewSession(BaseModel):
    mode: ReviewMode
    pending_queue: list[Card] = Field(default_factory=list)
    current_card: Card | None = None
    revealed: bool = False

    @property
    def exhausted(self) -> bool:
        return self.current_card is None


# --- HTTP payloads ---


class SessionStart(BaseModel):
    mode: ReviewMode = ReviewMode.DUE_ONLY


class RateRequest(BaseModel):
    quality: int = Field(ge=1, le=5)  # 1=Again, 2=Hard, 3=OK, 4=Good, 5=Easy


class SessionView(BaseModel):
    id: str
    mode: ReviewMode
    current_card: MnemonicCard | None
    revealed: bool
    remaining: int  # cards queued after the current one
    exhausted: bool
