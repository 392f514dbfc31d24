import pytest
from fastapi.testclient import TestClient

from sonoglyph import create_app
from sonoglyph.config import settings
from sonoglyph.models import CardSource, MnemonicCard, MnemonicResult

T0 = 1_700_000_000_000


def make_card(identity: str, next_review_ms: int = T0, source=CardSource.WORD, **fields) -> MnemonicCard:
    return MnemonicCard(
        identity=identity,
        next_review_ms=next_review_ms,
        content=MnemonicResult(word=identity, definition=f"meaning of {identity}", source=source),
        **fields,
    )


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "data_dir", tmp_path)
    with TestClient(create_app()) as test_client:
        yield test_client
