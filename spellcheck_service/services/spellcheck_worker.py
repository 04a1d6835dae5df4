"""
Long-lived spell-check worker.

The worker owns a Dictionary and serves suggestion requests arriving on an
inbound queue, answering each one on a reply queue. It runs as an asyncio task
next to whatever loop is accepting user input; dictionary loading and the
suggestion computation run on a dedicated single thread so the event loop is
never blocked by a full dictionary scan.

Lifecycle:
    UNINITIALIZED -> LOADING -> READY -> SHUTTING_DOWN -> STOPPED

If neither the requested dictionary nor the fallback can be loaded the worker
goes from LOADING straight to STOPPED and never accepts a request.

Usage:
    worker = SpellcheckWorker("/path/to/words")
    task = asyncio.create_task(worker.run())
    if await worker.wait_until_settled():
        await worker.submit(SuggestionRequest(words=["helo"], request_id=1))
        response = await worker.receive()
    worker.shutdown()
    await task
"""
import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Awaitable, Optional, Tuple

from spellcheck_service.config import settings
from spellcheck_service.schemas.spellcheck import SuggestionRequest, SuggestionResponse
from spellcheck_service.services.dictionary import Dictionary, load_dictionary
from spellcheck_service.services.spellcheck_base import (
    ChannelClosedError,
    DictionaryNotFoundError,
    LoadError,
    WorkerState,
)
from spellcheck_service.services.suggestions import suggest_all
from spellcheck_service.utils.logger import get_logger


logger = get_logger("services.spellcheck_worker")


async def _until(awaitable: Awaitable[Any], event: asyncio.Event) -> Tuple[bool, Any]:
    """
    Await ``awaitable`` unless ``event`` is set first.

    The event wins a tie, so work that completes in the same iteration as the
    event is discarded.

    Returns:
        (True, result) if the awaitable finished first, (False, None) otherwise
    """
    work = asyncio.ensure_future(awaitable)
    signal = asyncio.ensure_future(event.wait())
    try:
        await asyncio.wait({work, signal}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        signal.cancel()
        if event.is_set() or not work.done():
            work.cancel()

    if event.is_set():
        return False, None
    return True, work.result()


class SpellcheckWorker:
    """
    Single-threaded suggestion service owning one Dictionary.

    Requests are served strictly one at a time in arrival order. Callers are
    expected to keep at most one request in flight (see SpellcheckClient).
    """

    def __init__(
        self,
        dictionary_path: Optional[str] = None,
        fallback_path: Optional[str] = None,
        max_suggestions: Optional[int] = None,
        queue_size: Optional[int] = None,
    ):
        """
        Initialize the worker. Nothing is loaded until run() is awaited.

        Args:
            dictionary_path: Dictionary to load first
            fallback_path: Dictionary tried once if the first one does not exist
            max_suggestions: Maximum suggestions per misspelled word
            queue_size: Capacity of the request and reply queues
        """
        self._dictionary_path = dictionary_path or ""
        self._fallback_path = (
            fallback_path if fallback_path is not None
            else settings.SPELLCHECK_FALLBACK_DICTIONARY_PATH
        )
        self._max_suggestions = (
            max_suggestions if max_suggestions is not None
            else settings.SPELLCHECK_SUGGESTION_COUNT
        )
        queue_size = queue_size or settings.SPELLCHECK_QUEUE_SIZE

        self._requests: "asyncio.Queue[Optional[SuggestionRequest]]" = asyncio.Queue(maxsize=queue_size)
        self._responses: "asyncio.Queue[SuggestionResponse]" = asyncio.Queue(maxsize=queue_size)

        self._shutdown = asyncio.Event()
        self._settled = asyncio.Event()
        self._stopped = asyncio.Event()

        self._state = WorkerState.UNINITIALIZED
        self._dictionary: Optional[Dictionary] = None
        self._executor: Optional[ThreadPoolExecutor] = None

    @property
    def state(self) -> WorkerState:
        return self._state

    @property
    def dictionary_path(self) -> Optional[str]:
        """Path of the loaded dictionary, or the requested path before loading."""
        if self._dictionary is not None:
            return self._dictionary.source
        return self._dictionary_path or None

    @property
    def word_count(self) -> int:
        return len(self._dictionary) if self._dictionary is not None else 0

    @property
    def max_suggestions(self) -> int:
        return self._max_suggestions

    def _set_state(self, state: WorkerState) -> None:
        if state != self._state:
            logger.debug("Worker state changed", old_state=self._state.value, new_state=state.value)
            self._state = state

    async def run(self) -> None:
        """
        Load the dictionary and serve requests until shutdown.

        Never raises on load or processing failures; they are logged and leave
        the worker STOPPED.
        """
        if self._state != WorkerState.UNINITIALIZED:
            raise RuntimeError(f"Spell-check worker already started (state={self._state.value})")

        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="spellcheck")
        try:
            self._set_state(WorkerState.LOADING)
            self._dictionary = await self._load()
            if self._dictionary is None:
                return

            self._set_state(WorkerState.READY)
            self._settled.set()
            logger.info(
                "Spell-check worker ready",
                dictionary_path=self._dictionary.source,
                word_count=len(self._dictionary),
                max_suggestions=self._dictionary.max_suggestions,
            )
            await self._serve()

        except Exception as e:
            logger.error("Spell-check worker failed", error=str(e), exc_info=True)

        finally:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._set_state(WorkerState.STOPPED)
            self._settled.set()
            self._stopped.set()
            logger.info("Spell-check worker stopped")

    async def _load(self) -> Optional[Dictionary]:
        """Load the requested dictionary, falling back once if it does not exist."""
        try:
            return await self._in_worker_thread(
                load_dictionary, self._dictionary_path, self._max_suggestions
            )
        except DictionaryNotFoundError:
            logger.warning(
                "Dictionary file not found, trying fallback",
                dictionary_path=self._dictionary_path,
                fallback_path=self._fallback_path,
            )
        except LoadError as e:
            logger.error(
                "Failed to load dictionary (spell-check disabled)",
                dictionary_path=self._dictionary_path,
                error=str(e),
            )
            return None

        try:
            return await self._in_worker_thread(
                load_dictionary, self._fallback_path, self._max_suggestions
            )
        except LoadError as e:
            logger.error(
                "Fallback dictionary not available (spell-check disabled)",
                fallback_path=self._fallback_path,
                error=str(e),
            )
            return None

    async def _serve(self) -> None:
        """Answer requests until shutdown is signalled or the request queue is closed."""
        try:
            while True:
                received, request = await _until(self._requests.get(), self._shutdown)
                if not received:
                    logger.info("Spell-check worker received shutdown signal")
                    break
                if request is None:
                    logger.info("Spell-check request queue closed")
                    break

                computed, suggestions = await _until(
                    self._in_worker_thread(
                        suggest_all, request.words, self._dictionary, self._dictionary.max_suggestions
                    ),
                    self._shutdown,
                )
                if not computed:
                    logger.info("Shutdown during request, reply dropped", request_id=request.request_id)
                    break

                logger.debug(
                    "Suggestions computed",
                    request_id=request.request_id,
                    word_count=len(request.words),
                    suggestion_count=len(suggestions),
                )
                response = SuggestionResponse(suggestions=suggestions, request_id=request.request_id)
                replied, _ = await _until(self._responses.put(response), self._shutdown)
                if not replied:
                    break
        finally:
            self._set_state(WorkerState.SHUTTING_DOWN)

    async def _in_worker_thread(self, func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, func, *args)

    async def wait_until_settled(self) -> bool:
        """
        Wait until the worker has left LOADING.

        Returns:
            True if the worker is READY, False if it stopped without loading
        """
        await self._settled.wait()
        return self._state == WorkerState.READY

    async def submit(self, request: SuggestionRequest) -> None:
        """
        Put a request on the inbound queue.

        Raises:
            ChannelClosedError: The worker is not READY or stops before accepting the request
        """
        if self._state != WorkerState.READY or self._shutdown.is_set():
            raise ChannelClosedError(f"Spell-check worker is {self._state.value}")

        accepted, _ = await _until(self._requests.put(request), self._stopped)
        if not accepted:
            raise ChannelClosedError("Spell-check worker stopped before accepting the request")

    async def receive(self) -> SuggestionResponse:
        """
        Take the next reply from the reply queue.

        Replies already queued are still delivered after the worker stops.

        Raises:
            ChannelClosedError: The worker stopped and no reply is queued
        """
        if not self._responses.empty():
            return self._responses.get_nowait()

        received, response = await _until(self._responses.get(), self._stopped)
        if not received:
            raise ChannelClosedError("Spell-check worker stopped before replying")
        return response

    async def close(self) -> None:
        """Close the request queue; the worker exits after the requests already queued."""
        await _until(self._requests.put(None), self._stopped)

    def shutdown(self) -> None:
        """Signal the worker to stop. Safe to call more than once."""
        self._shutdown.set()
