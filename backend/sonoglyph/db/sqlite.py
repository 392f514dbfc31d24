import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import AsyncIterator

import aiosqlite
from pydantic import ValidationError

from sonoglyph.config import settings
from sonoglyph.models.card import MnemonicCard
from sonoglyph.models.mnemonic import HistoryEntry

logger = logging.getLogger(__name__)

_db_path: Path | None = None

CARDS_KEY = "sonoglyph_cards"
HISTORY_KEY = "sonoglyph_history"

SCHEMA_SQL = """
PRAGMA journal_mode=WAL;

CREATE TABLE IF NOT EXISTS kv_store (
    key        TEXT PRIMARY KEY,
    value      TEXT NOT NULL DEFAULT '[]',
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS schema_version (
    version    INTEGER PRIMARY KEY,
    applied_at TEXT NOT NULL DEFAULT (datetime('now'))
);
INSERT OR IGNORE INTO schema_version(version) VALUES (1);
"""


async def init_sqlite(data_dir: Path) -> None:
    global _db_path
    _db_path = data_dir / settings.sqlite_filename
    async with aiosqlite.connect(_db_path) as db:
        await db.executescript(SCHEMA_SQL)
        await db.commit()


async def get_db() -> AsyncIterator[aiosqlite.Connection]:
    assert _db_path is not None, "SQLite not initialized"
    async with aiosqlite.connect(_db_path) as db:
        db.row_factory = aiosqlite.Row
        yield db


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


# --- Key-value store ---


async def get_value(db: aiosqlite.Connection, key: str) -> str | None:
    cursor = await db.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
    row = await cursor.fetchone()
    return row[0] if row else None


async def set_value(db: aiosqlite.Connection, key: str, value: str) -> None:
    await db.execute(
        "INSERT INTO kv_store(key, value, updated_at) VALUES (?, ?, ?) "
        "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at",
        (key, value, _now()),
    )
    await db.commit()


async def _load_array(db: aiosqlite.Connection, key: str) -> list:
    raw = await get_value(db, key)
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Stored value for %s is not valid JSON, starting empty", key)
        return []
    if not isinstance(data, list):
        logger.warning("Stored value for %s is not a JSON array, starting empty", key)
        return []
    return data


# --- Card repository ---


class SqliteCardRepository:
    """Card collection and generation history stored as JSON arrays."""

    def __init__(self, db: aiosqlite.Connection, history_limit: int | None = None):
        self.db = db
        self.history_limit = history_limit if history_limit is not None else settings.history_limit

    async def load_cards(self) -> list[MnemonicCard]:
        cards: list[MnemonicCard] = []
        for item in await _load_array(self.db, CARDS_KEY):
            try:
                cards.append(MnemonicCard.model_validate(item))
            except ValidationError as e:
                logger.warning("Skipping unreadable card record: %s", e)
        return cards

    async def save_cards(self, cards: list[MnemonicCard]) -> None:
        payload = [c.model_dump(mode="json") for c in cards]
        await set_value(self.db, CARDS_KEY, json.dumps(payload))

    async def load_history(self) -> list[HistoryEntry]:
        history: list[HistoryEntry] = []
        for item in await _load_array(self.db, HISTORY_KEY):
            try:
                history.append(HistoryEntry.model_validate(item))
            except ValidationError as e:
                logger.warning("Skipping unreadable history record: %s", e)
        return history

    async def save_history(self, history: list[HistoryEntry]) -> None:
        kept = history[: self.history_limit]
        payload = [h.model_dump(mode="json") for h in kept]
        await set_value(self.db, HISTORY_KEY, json.dumps(payload))


async def get_repository() -> AsyncIterator[SqliteCardRepository]:
    async for db in get_db():
        yield SqliteCardRepository(db)
