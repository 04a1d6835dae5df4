"""
Spell-check client adapter and singleton management.

The client is the only component that starts, stops or talks to the
spell-check worker. It serialises every call so at most one request is in
flight and toggling never races an outstanding request.
"""
import asyncio
import itertools
from typing import Optional, Sequence

from spellcheck_service.config import settings
from spellcheck_service.schemas.spellcheck import SuggestionRequest, SuggestionResponse
from spellcheck_service.services.spellcheck_base import ChannelClosedError, WorkerState
from spellcheck_service.services.spellcheck_worker import SpellcheckWorker
from spellcheck_service.utils.logger import get_logger

logger = get_logger("services.spellcheck")


class SpellcheckClient:
    """
    Front-end facing adapter for the spell-check worker.

    Usage:
        client = SpellcheckClient()
        if await client.enable("/usr/share/dict/words"):
            response = await client.check_words(["helo", "wrld"])
        await client.disable()
    """

    def __init__(
        self,
        fallback_path: Optional[str] = None,
        max_suggestions: Optional[int] = None,
        queue_size: Optional[int] = None,
        reply_timeout: Optional[float] = None,
        shutdown_timeout: Optional[float] = None,
    ):
        """
        Initialize the client. No worker is started until enable() is called.

        Args:
            fallback_path: Dictionary tried when the requested one does not exist
            max_suggestions: Maximum suggestions per misspelled word
            queue_size: Capacity of the worker's request and reply queues
            reply_timeout: Seconds to wait for a reply before giving up
            shutdown_timeout: Seconds to wait for the worker to exit on disable
        """
        self._fallback_path = fallback_path
        self._max_suggestions = (
            max_suggestions if max_suggestions is not None
            else settings.SPELLCHECK_SUGGESTION_COUNT
        )
        self._queue_size = queue_size
        self._reply_timeout = reply_timeout or settings.SPELLCHECK_REPLY_TIMEOUT_SECONDS
        self._shutdown_timeout = shutdown_timeout or settings.SPELLCHECK_SHUTDOWN_TIMEOUT_SECONDS

        self._worker: Optional[SpellcheckWorker] = None
        self._task: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()
        self._request_ids = itertools.count(1)

    @property
    def state(self) -> WorkerState:
        if self._worker is None:
            return WorkerState.UNINITIALIZED
        return self._worker.state

    @property
    def enabled(self) -> bool:
        """True while a worker is READY to answer requests."""
        return self.state == WorkerState.READY

    @property
    def dictionary_path(self) -> Optional[str]:
        return self._worker.dictionary_path if self._worker is not None else None

    @property
    def word_count(self) -> int:
        return self._worker.word_count if self._worker is not None else 0

    @property
    def max_suggestions(self) -> int:
        return self._max_suggestions

    def _running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def enable(self, dictionary_path: Optional[str] = None) -> bool:
        """
        Turn spellchecking on.

        Starts a worker unless one is already running, then waits for it to
        finish loading its dictionary.

        Args:
            dictionary_path: Dictionary to load (defaults to SPELLCHECK_DICTIONARY_PATH)

        Returns:
            True if a worker is READY, False if no dictionary could be loaded
        """
        async with self._lock:
            if self._running():
                logger.info(
                    "Spell-check already running",
                    dictionary_path=self._worker.dictionary_path,
                    requested_path=dictionary_path,
                )
                return await self._worker.wait_until_settled()

            path = dictionary_path or settings.SPELLCHECK_DICTIONARY_PATH
            self._worker = SpellcheckWorker(
                dictionary_path=path,
                fallback_path=self._fallback_path,
                max_suggestions=self._max_suggestions,
                queue_size=self._queue_size,
            )
            self._task = asyncio.create_task(self._worker.run(), name="spellcheck-worker")

            ready = await self._worker.wait_until_settled()
            if ready:
                logger.info("Spell-check enabled", dictionary_path=self._worker.dictionary_path)
            else:
                logger.warning("Spell-check could not be enabled (no dictionary loaded)", dictionary_path=path)
            return ready

    async def disable(self) -> None:
        """Turn spellchecking off and wait (bounded) for the worker to exit."""
        async with self._lock:
            if not self._running():
                return

            self._worker.shutdown()
            done, _ = await asyncio.wait({self._task}, timeout=self._shutdown_timeout)
            if not done:
                logger.warning(
                    "Spell-check worker did not stop in time, cancelling",
                    timeout_seconds=self._shutdown_timeout,
                )
                self._task.cancel()
            logger.info("Spell-check disabled")

    async def check_words(self, words: Sequence[str]) -> SuggestionResponse:
        """
        Get correction suggestions for a batch of words.

        Returns an empty response, without contacting the worker, when
        spellchecking is off. A worker that stops or does not answer within
        the reply timeout also yields an empty response.

        Args:
            words: Tokens from one line of user text

        Returns:
            SuggestionResponse with suggestions flattened in input order
        """
        async with self._lock:
            worker = self._worker
            if worker is None or worker.state != WorkerState.READY or not words:
                return SuggestionResponse()

            request = SuggestionRequest(words=list(words), request_id=next(self._request_ids))
            try:
                return await asyncio.wait_for(
                    self._exchange(worker, request),
                    timeout=self._reply_timeout,
                )
            except ChannelClosedError as e:
                logger.info("No suggestions, worker unavailable", request_id=request.request_id, error=str(e))
            except asyncio.TimeoutError:
                logger.warning(
                    "Timed out waiting for suggestions",
                    request_id=request.request_id,
                    timeout_seconds=self._reply_timeout,
                )
            return SuggestionResponse(request_id=request.request_id)

    async def _exchange(self, worker: SpellcheckWorker, request: SuggestionRequest) -> SuggestionResponse:
        """Submit a request and wait for its reply, discarding replies to abandoned requests."""
        await worker.submit(request)
        while True:
            response = await worker.receive()
            if response.request_id == request.request_id:
                return response
            logger.debug(
                "Discarding stale reply",
                request_id=response.request_id,
                expected_request_id=request.request_id,
            )


# Singleton client shared by the application
_spellcheck_client: Optional[SpellcheckClient] = None


def get_spellcheck_client() -> SpellcheckClient:
    """
    Get or create the global spell-check client.

    Returns:
        Shared SpellcheckClient instance
    """
    global _spellcheck_client
    if _spellcheck_client is None:
        _spellcheck_client = SpellcheckClient()
    return _spellcheck_client


async def initialize_spellcheck() -> bool:
    """
    Enable spellchecking with the configured dictionary.

    Called during app startup when SPELLCHECK_ENABLED is set.

    Returns:
        True if initialized successfully, False otherwise
    """
    logger.info("Initializing spell-check service...")
    if await get_spellcheck_client().enable():
        logger.info("Spell-check service initialized successfully")
        return True

    logger.warning("Failed to initialize spell-check service")
    return False
