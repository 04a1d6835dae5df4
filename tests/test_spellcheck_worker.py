"""
Unit tests for the spell-check worker lifecycle and request loop.
"""
import asyncio
import time

import pytest

from spellcheck_service.schemas.spellcheck import SuggestionRequest
from spellcheck_service.services.dictionary import Dictionary, load_dictionary
from spellcheck_service.services.spellcheck_base import ChannelClosedError, WorkerState
from spellcheck_service.services.spellcheck_worker import SpellcheckWorker


async def start_worker(dictionary_path, fallback_path, max_suggestions=3):
    """Create a worker, start its task and wait for loading to finish."""
    worker = SpellcheckWorker(
        dictionary_path=str(dictionary_path),
        fallback_path=str(fallback_path),
        max_suggestions=max_suggestions,
    )
    task = asyncio.create_task(worker.run())
    ready = await worker.wait_until_settled()
    return worker, task, ready


async def stop_worker(worker, task):
    worker.shutdown()
    await asyncio.wait_for(task, timeout=2)


@pytest.mark.asyncio
async def test_initial_state_is_uninitialized(dictionary_path):
    worker = SpellcheckWorker(dictionary_path=str(dictionary_path))
    assert worker.state == WorkerState.UNINITIALIZED
    assert worker.word_count == 0


@pytest.mark.asyncio
async def test_ready_worker_answers_request(dictionary_path, missing_path):
    worker, task, ready = await start_worker(dictionary_path, missing_path)
    assert ready is True
    assert worker.state == WorkerState.READY
    assert worker.word_count == 6

    await worker.submit(SuggestionRequest(words=["cello"], request_id=1))
    response = await asyncio.wait_for(worker.receive(), timeout=2)

    assert response.request_id == 1
    assert len(response.suggestions) == 3
    assert response.suggestions[0] == "hello"

    await stop_worker(worker, task)
    assert worker.state == WorkerState.STOPPED


@pytest.mark.asyncio
async def test_sequential_requests_answered_in_order(dictionary_path, missing_path):
    worker, task, _ = await start_worker(dictionary_path, missing_path)

    await worker.submit(SuggestionRequest(words=["cello"], request_id=1))
    first = await asyncio.wait_for(worker.receive(), timeout=2)
    await worker.submit(SuggestionRequest(words=["eart"], request_id=2))
    second = await asyncio.wait_for(worker.receive(), timeout=2)

    assert first.request_id == 1
    assert first.suggestions[0] == "hello"
    assert second.request_id == 2
    assert second.suggestions[0] == "earth"

    await stop_worker(worker, task)


@pytest.mark.asyncio
async def test_correct_words_get_empty_reply(dictionary_path, missing_path):
    worker, task, _ = await start_worker(dictionary_path, missing_path)

    await worker.submit(SuggestionRequest(words=["hello", "earth"], request_id=1))
    response = await asyncio.wait_for(worker.receive(), timeout=2)

    assert response.suggestions == []

    await stop_worker(worker, task)


@pytest.mark.asyncio
async def test_missing_dictionary_uses_fallback(dictionary_path, missing_path):
    worker, task, ready = await start_worker(missing_path, dictionary_path)

    assert ready is True
    assert worker.dictionary_path == str(dictionary_path)

    await stop_worker(worker, task)


@pytest.mark.asyncio
async def test_empty_path_uses_fallback(dictionary_path):
    worker = SpellcheckWorker(dictionary_path="", fallback_path=str(dictionary_path))
    task = asyncio.create_task(worker.run())

    assert await worker.wait_until_settled() is True
    assert worker.dictionary_path == str(dictionary_path)

    await stop_worker(worker, task)


@pytest.mark.asyncio
async def test_missing_dictionary_and_fallback_stops_worker(tmp_path, missing_path):
    worker, task, ready = await start_worker(missing_path, tmp_path / "also-missing.txt")
    await asyncio.wait_for(task, timeout=2)

    assert ready is False
    assert worker.state == WorkerState.STOPPED
    assert worker.word_count == 0

    with pytest.raises(ChannelClosedError):
        await worker.submit(SuggestionRequest(words=["cello"], request_id=1))


@pytest.mark.asyncio
async def test_unreadable_dictionary_does_not_use_fallback(tmp_path, dictionary_path):
    """Only a missing dictionary triggers the fallback; other errors disable spellchecking."""
    worker, task, ready = await start_worker(tmp_path, dictionary_path)
    await asyncio.wait_for(task, timeout=2)

    assert ready is False
    assert worker.state == WorkerState.STOPPED


@pytest.mark.asyncio
async def test_submit_after_shutdown_does_not_block(dictionary_path, missing_path):
    worker, task, _ = await start_worker(dictionary_path, missing_path)
    await stop_worker(worker, task)

    start = time.monotonic()
    with pytest.raises(ChannelClosedError):
        await worker.submit(SuggestionRequest(words=["cello"], request_id=1))
    with pytest.raises(ChannelClosedError):
        await worker.receive()
    assert time.monotonic() - start < 0.5


@pytest.mark.asyncio
async def test_shutdown_is_observed_while_idle(dictionary_path, missing_path):
    worker, task, _ = await start_worker(dictionary_path, missing_path)

    worker.shutdown()
    worker.shutdown()
    await asyncio.wait_for(task, timeout=1)

    assert worker.state == WorkerState.STOPPED


@pytest.mark.asyncio
async def test_closing_request_queue_stops_worker(dictionary_path, missing_path):
    worker, task, _ = await start_worker(dictionary_path, missing_path)

    await worker.close()
    await asyncio.wait_for(task, timeout=2)

    assert worker.state == WorkerState.STOPPED


@pytest.mark.asyncio
async def test_worker_cannot_be_started_twice(dictionary_path, missing_path):
    worker, task, _ = await start_worker(dictionary_path, missing_path)

    with pytest.raises(RuntimeError):
        await worker.run()

    await stop_worker(worker, task)


@pytest.mark.asyncio
async def test_suggestions_computed_off_the_event_loop_thread(dictionary_path, missing_path, monkeypatch):
    """The suggestion computation runs in the worker thread, not the caller's."""
    import threading

    threads = []

    def recording_suggest_all(words, dictionary, k):
        threads.append(threading.current_thread().name)
        return ["recorded"]

    monkeypatch.setattr(
        "spellcheck_service.services.spellcheck_worker.suggest_all",
        recording_suggest_all,
    )
    worker, task, _ = await start_worker(dictionary_path, missing_path)

    await worker.submit(SuggestionRequest(words=["cello"], request_id=1))
    response = await asyncio.wait_for(worker.receive(), timeout=2)

    assert response.suggestions == ["recorded"]
    assert threads and threads[0].startswith("spellcheck")
    assert threads[0] != threading.current_thread().name

    await stop_worker(worker, task)


@pytest.mark.asyncio
async def test_reply_capped_by_loaded_dictionary_suggestion_count(dictionary_path, missing_path, monkeypatch):
    """The loaded dictionary's suggestion count bounds each word's suggestions."""

    def load_with_two_suggestions(path, max_suggestions=0):
        loaded = load_dictionary(path, max_suggestions)
        return Dictionary(loaded.words, max_suggestions=2, source=loaded.source)

    monkeypatch.setattr(
        "spellcheck_service.services.spellcheck_worker.load_dictionary",
        load_with_two_suggestions,
    )
    worker, task, ready = await start_worker(dictionary_path, missing_path, max_suggestions=3)
    assert ready is True

    await worker.submit(SuggestionRequest(words=["cello"], request_id=1))
    response = await asyncio.wait_for(worker.receive(), timeout=2)

    assert len(response.suggestions) == 2
    assert response.suggestions[0] == "hello"

    await stop_worker(worker, task)
