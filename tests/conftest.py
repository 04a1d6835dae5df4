"""
Pytest configuration and fixtures for spell-check service tests.
"""
from pathlib import Path
from typing import AsyncGenerator, List

import pytest
from httpx import AsyncClient, ASGITransport

from spellcheck_service.main import app
from spellcheck_service.services.dictionary import Dictionary
from spellcheck_service.services.spellcheck import SpellcheckClient, get_spellcheck_client


PLANET_WORDS: List[str] = ["jupiter", "neptune", "earth", "hello", "something", "random"]

# Short timeouts keep failure cases fast
TEST_REPLY_TIMEOUT = 2.0
TEST_SHUTDOWN_TIMEOUT = 2.0


def write_dictionary(path: Path, words: List[str]) -> Path:
    """Write a newline-delimited word list."""
    path.write_text("\n".join(words) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def dictionary_path(tmp_path) -> Path:
    """Dictionary file with the planet word list."""
    return write_dictionary(tmp_path / "words.txt", PLANET_WORDS)


@pytest.fixture
def missing_path(tmp_path) -> Path:
    """A path that does not exist."""
    return tmp_path / "does-not-exist.txt"


@pytest.fixture
def planet_dictionary() -> Dictionary:
    """In-memory dictionary with the planet word list."""
    return Dictionary(PLANET_WORDS, max_suggestions=3)


@pytest.fixture
async def spellcheck_client(tmp_path) -> AsyncGenerator[SpellcheckClient, None]:
    """
    Spell-check client whose fallback dictionary does not exist, so tests
    never depend on the host's /usr/share/dict/words.
    """
    client = SpellcheckClient(
        fallback_path=str(tmp_path / "no-fallback.txt"),
        max_suggestions=3,
        reply_timeout=TEST_REPLY_TIMEOUT,
        shutdown_timeout=TEST_SHUTDOWN_TIMEOUT,
    )
    yield client
    await client.disable()


@pytest.fixture
async def client(spellcheck_client: SpellcheckClient) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client for the FastAPI application, with the spell-check
    client dependency pointed at the per-test client.
    """
    app.dependency_overrides[get_spellcheck_client] = lambda: spellcheck_client

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
