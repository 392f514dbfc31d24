from sonoglyph.models.card import (
    Card,
    CardList,
    DeckStats,
    MnemonicCard,
    SourceStats,
)
from sonoglyph.models.mnemonic import (
    CardSource,
    HistoryEntry,
    HistoryList,
    MnemonicResult,
    PhoneticMap,
    SceneMode,
)
from sonoglyph.models.review import (
    RateRequest,
    ReviewMode,
    ReviewSession,
    SessionStart,
    SessionView,
)

__all__ = [
    "Card",
    "CardList",
    "CardSource",
    "DeckStats",
    "HistoryEntry",
    "HistoryList",
    "MnemonicCard",
    "MnemonicResult",
    "PhoneticMap",
    "RateRequest",
    "ReviewMode",
    "ReviewSession",
    "SceneMode",
    "SessionStart",
    "SessionView",
    "SourceStats",
]
