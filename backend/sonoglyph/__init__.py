import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sonoglyph.config import settings
from sonoglyph.db import init_all_databases
from sonoglyph.services.session_registry import SessionRegistry


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_all_databases(settings.data_dir)
    app.state.sessions = SessionRegistry(max_sessions=settings.max_sessions)
    app.state.collection_lock = asyncio.Lock()
    yield


def create_app() -> FastAPI:
    application = FastAPI(
        title="Sonoglyph Backend", version="0.1.0", lifespan=lifespan
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from sonoglyph.routers import cards, health, history, review

    application.include_router(health.router)
    application.include_router(cards.router, prefix="/cards", tags=["cards"])
    application.include_router(
        history.router, prefix="/history", tags=["history"]
    )
    application.include_router(review.router, prefix="/review", tags=["review"])

    return application


app = create_app()
