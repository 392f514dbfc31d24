import asyncio

import aiosqlite

from conftest import make_card
from sonoglyph.config import settings
from sonoglyph.db.sqlite import CARDS_KEY, SqliteCardRepository, init_sqlite, set_value
from sonoglyph.models import MnemonicResult
from sonoglyph.services.history import record_history


def run_with_repo(tmp_path, body, history_limit=None):
    async def _run():
        await init_sqlite(tmp_path)
        async with aiosqlite.connect(tmp_path / settings.sqlite_filename) as db:
            return await body(SqliteCardRepository(db, history_limit=history_limit))

    return asyncio.run(_run())


def test_cards_persist_in_collection_order(tmp_path):
    cards = [make_card("yarrow"), make_card("alder"), make_card("moss")]

    async def body(repo):
        assert await repo.load_cards() == []
        await repo.save_cards(cards)
        return await repo.load_cards()

    assert run_with_repo(tmp_path, body) == cards


def test_corrupt_card_blob_loads_empty(tmp_path):
    async def body(repo):
        await set_value(repo.db, CARDS_KEY, "{not json")
        return await repo.load_cards()

    assert run_with_repo(tmp_path, body) == []


def test_unreadable_records_are_skipped(tmp_path):
    async def body(repo):
        await set_value(repo.db, CARDS_KEY, '[{"identity": "x"}, 3]')
        await repo.save_cards([*await repo.load_cards(), make_card("kept")])
        return await repo.load_cards()

    assert [c.identity for c in run_with_repo(tmp_path, body)] == ["kept"]


def test_history_is_truncated_on_save(tmp_path):
    history = []
    for i in range(8):
        history = record_history(history, MnemonicResult(word=f"w{i}"), i)

    async def body(repo):
        await repo.save_history(history)
        return await repo.load_history()

    loaded = run_with_repo(tmp_path, body, history_limit=5)
    assert [h.word for h in loaded] == ["w7", "w6", "w5", "w4", "w3"]
