from typing import Protocol

from sonoglyph.models.card import MnemonicCard
from sonoglyph.models.mnemonic import HistoryEntry


class CardRepository(Protocol):
    """Load/save port for the card collection and generation history."""

    async def load_cards(self) -> list[MnemonicCard]: ...

    async def save_cards(self, cards: list[MnemonicCard]) -> None: ...

    async def load_history(self) -> list[HistoryEntry]: ...

    async def save_history(self, history: list[HistoryEntry]) -> None: ...
