"""
Review session router.

Endpoints:
  POST   /review/sessions              — start a due-only or practice-all session
  GET    /review/sessions/{id}         — current card and progress
  POST   /review/sessions/{id}/reveal  — show the answer
  POST   /review/sessions/{id}/rate    — submit quality 1-5, advance
  DELETE /review/sessions/{id}         — abandon session
  GET    /review/stats                 — total / due-now counts
"""
from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException

from sonoglyph.db.repository import CardRepository
from sonoglyph.db.sqlite import get_repository
from sonoglyph.dependencies import get_collection_lock, get_sessions
from sonoglyph.models.card import DeckStats
from sonoglyph.models.review import RateRequest, ReviewSession, SessionStart, SessionView
from sonoglyph.services import review_queue
from sonoglyph.services.deck import deck_stats, now_ms
from sonoglyph.services.session_registry import SessionRegistry

logger = logging.getLogger(__name__)
router = APIRouter()


def _view(session_id: str, session: ReviewSession) -> SessionView:
    return SessionView(
        id=session_id,
        mode=session.mode,
        current_card=session.current_card,
        revealed=session.revealed,
        remaining=len(session.pending_queue),
        exhausted=session.exhausted,
    )


def _require(sessions: SessionRegistry, session_id: str) -> ReviewSession:
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Review session not found")
    return session


@router.post("/sessions", response_model=SessionView, status_code=201)
async def start_session(
    body: SessionStart,
    repo: CardRepository = Depends(get_repository),
    sessions: SessionRegistry = Depends(get_sessions),
) -> SessionView:
    cards = await repo.load_cards()
    session = review_queue.start_session(cards, body.mode, now_ms())
    session_id = sessions.open(session)
    return _view(session_id, session)


@router.get("/sessions/{session_id}", response_model=SessionView)
async def get_session(
    session_id: str,
    sessions: SessionRegistry = Depends(get_sessions),
) -> SessionView:
    return _view(session_id, _require(sessions, session_id))


@router.post("/sessions/{session_id}/reveal", response_model=SessionView)
async def reveal_answer(
    session_id: str,
    sessions: SessionRegistry = Depends(get_sessions),
) -> SessionView:
    session = review_queue.reveal(_require(sessions, session_id))
    sessions.put(session_id, session)
    return _view(session_id, session)


@router.post("/sessions/{session_id}/rate", response_model=SessionView)
async def rate_card(
    session_id: str,
    body: RateRequest,
    repo: CardRepository = Depends(get_repository),
    sessions: SessionRegistry = Depends(get_sessions),
    lock: asyncio.Lock = Depends(get_collection_lock),
) -> SessionView:
    """Commit a rating for the current card and move to the next one.

    A session the rating exhausts is dropped from the registry.
    """
    async with lock:
        session = _require(sessions, session_id)
        cards = await repo.load_cards()
        advanced, updated = review_queue.rate(session, cards, body.quality, now_ms())
        if updated != cards:
            await repo.save_cards(updated)
        if advanced.exhausted and not session.exhausted:
            sessions.discard(session_id)
        else:
            sessions.put(session_id, advanced)
    return _view(session_id, advanced)


@router.delete("/sessions/{session_id}", status_code=204)
async def abandon_session(
    session_id: str,
    sessions: SessionRegistry = Depends(get_sessions),
) -> None:
    if not sessions.discard(session_id):
        raise HTTPException(status_code=404, detail="Review session not found")


@router.get("/stats", response_model=DeckStats)
async def review_stats(repo: CardRepository = Depends(get_repository)) -> DeckStats:
    return deck_stats(await repo.load_cards(), now_ms())
