from __future__ import annotations

from collections.abc import Sequence

from sonoglyph.models.mnemonic import HistoryEntry, MnemonicResult


def record_history(
    history: Sequence[HistoryEntry], result: MnemonicResult, now_ms: int
) -> list[HistoryEntry]:
    """Put a fresh generation first, dropping any older entry for the same word."""
    key = result.word.casefold()
    kept = [h for h in history if h.word.casefold() != key]
    entry = HistoryEntry(word=result.word, mode=result.mode, result=result, timestamp_ms=now_ms)
    return [entry, *kept]


def refine_history(
    history: Sequence[HistoryEntry], result: MnemonicResult, now_ms: int
) -> tuple[list[HistoryEntry], bool]:
    """Replace the result of an existing entry in place.

    Returns the new history and whether an entry matched.
    """
    key = result.word.casefold()
    found = False
    updated: list[HistoryEntry] = []
    for h in history:
        if h.word.casefold() == key:
            h = h.model_copy(update={"result": result, "timestamp_ms": now_ms})
            found = True
        updated.append(h)
    return updated, found
