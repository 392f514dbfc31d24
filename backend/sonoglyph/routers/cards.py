"""
Card collection router.

Endpoints:
  GET    /cards              — all cards, collection order
  POST   /cards              — add a card for a freshly generated mnemonic
  GET    /cards/{identity}   — single card
  DELETE /cards/{identity}   — remove card
"""
from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException

from sonoglyph.db.repository import CardRepository
from sonoglyph.db.sqlite import get_repository
from sonoglyph.dependencies import get_collection_lock
from sonoglyph.models.card import CardList, MnemonicCard
from sonoglyph.models.mnemonic import MnemonicResult
from sonoglyph.services.deck import add_card, find_card, now_ms, remove_card
from sonoglyph.services.history import record_history

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=CardList)
async def list_cards(repo: CardRepository = Depends(get_repository)) -> CardList:
    cards = await repo.load_cards()
    return CardList(items=cards, total=len(cards))


@router.post("/", response_model=MnemonicCard, status_code=201)
async def create_card(
    body: MnemonicResult,
    repo: CardRepository = Depends(get_repository),
    lock: asyncio.Lock = Depends(get_collection_lock),
) -> MnemonicCard:
    """Store a generated mnemonic as a new card and log it in the history."""
    identity = body.word.strip()
    if not identity:
        raise HTTPException(status_code=422, detail="word must not be empty")

    async with lock:
        cards = await repo.load_cards()
        existing = find_card(cards, identity)
        if existing:
            raise HTTPException(409, f"Card already exists: {existing.identity}")

        now = now_ms()
        result = body.model_copy(update={"word": identity})
        cards = add_card(cards, identity, result, now)
        await repo.save_cards(cards)

        history = record_history(await repo.load_history(), result, now)
        await repo.save_history(history)

    return cards[-1]


@router.get("/{identity}", response_model=MnemonicCard)
async def get_card(
    identity: str,
    repo: CardRepository = Depends(get_repository),
) -> MnemonicCard:
    card = find_card(await repo.load_cards(), identity)
    if not card:
        raise HTTPException(status_code=404, detail="Card not found")
    return card


@router.delete("/{identity}", status_code=204)
async def delete_card(
    identity: str,
    repo: CardRepository = Depends(get_repository),
    lock: asyncio.Lock = Depends(get_collection_lock),
) -> None:
    async with lock:
        cards = await repo.load_cards()
        remaining = remove_card(cards, identity)
        if len(remaining) == len(cards):
            raise HTTPException(status_code=404, detail="Card not found")
        await repo.save_cards(remaining)
    logger.info("Deleted card %r", identity)
