import asyncio

from fastapi import Request

from sonoglyph.services.session_registry import SessionRegistry


def get_sessions(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def get_collection_lock(request: Request) -> asyncio.Lock:
    """Lock held around every load-modify-save of cards or history."""
    return request.app.state.collection_lock
