import asyncio

from fastapi import APIRouter, Depends, HTTPException

from sonoglyph.db.repository import CardRepository
from sonoglyph.db.sqlite import get_repository
from sonoglyph.dependencies import get_collection_lock
from sonoglyph.models.mnemonic import HistoryEntry, HistoryList, MnemonicResult
from sonoglyph.services.deck import now_ms
from sonoglyph.services.history import refine_history

router = APIRouter()


@router.get("/", response_model=HistoryList)
async def list_history(repo: CardRepository = Depends(get_repository)):
    items = await repo.load_history()
    return HistoryList(items=items, total=len(items))


@router.put("/", response_model=HistoryEntry)
async def refine_entry(
    body: MnemonicResult,
    repo: CardRepository = Depends(get_repository),
    lock: asyncio.Lock = Depends(get_collection_lock),
):
    """Swap in a refined result for a word already in the history."""
    async with lock:
        history, found = refine_history(await repo.load_history(), body, now_ms())
        if not found:
            raise HTTPException(status_code=404, detail="No history entry for word")
        await repo.save_history(history)
    key = body.word.casefold()
    return next(h for h in history if h.word.casefold() == key)


@router.delete("/", status_code=204)
async def clear_history(
    repo: CardRepository = Depends(get_repository),
    lock: asyncio.Lock = Depends(get_collection_lock),
) -> None:
    """Forget every history entry. Cards are left alone."""
    async with lock:
        await repo.save_history([])
