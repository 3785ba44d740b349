"""
Generic pagination over "fetch page N of size S" endpoints.

Every resource family that supports paged listing implements ``Pageable``.
On top of it:

- ``loop_until`` scans elements until a predicate says stop
- ``stream_async`` pushes every element of every page to an async consumer

Pages are always fetched one at a time, strictly in order.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
import inspect
import logging
from typing import Any, Generic, NoReturn, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from anxcloud.errors import (
    ConditionNeverMetError,
    DecodeError,
    InvalidContentTypeError,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10


class Page(BaseModel, Generic[T]):
    """
    One fetched page of a paginated listing.

    Field names are the engine's wire names aliased to the names the
    pagination engine works with.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    num: int = Field(alias="page", ge=1, description="1-based page index")
    size: int = Field(alias="limit", ge=1, description="Page size used for this fetch")
    total: int = Field(alias="total_pages", ge=0, description="Total number of pages")
    total_items: int = Field(default=0, ge=0)
    content: list[T] = Field(alias="data", default_factory=list)

    @property
    def has_next(self) -> bool:
        return has_next(self)


class PageEnvelope(BaseModel, Generic[T]):
    """Outer ``{"data": <page>}`` envelope of a paged listing response."""

    data: Page[T]


@runtime_checkable
class Pageable(Protocol[T]):
    """Should be implemented by every API that supports pagination."""

    async def get_page(self, page: int, limit: int) -> Page[T]:
        """Fetch ``page`` with ``limit`` elements in exactly one round trip."""
        ...

    async def next_page(self, page: Page[T]) -> Page[T]:
        """Fetch the page following ``page`` at the same size."""
        ...


Predicate = Callable[[T], bool | Awaitable[bool]]


def has_next(page: Any) -> bool:
    """Whether there are more pages to fetch after ``page``."""
    return page.num < page.total


def decode_page(payload: Any, element_type: type[T]) -> Page[T]:
    """
    Decode an enveloped page payload into a typed Page.

    Raises:
        DecodeError: If the payload does not have the page shape
    """
    try:
        return PageEnvelope[element_type].model_validate(payload).data
    except ValidationError as e:
        raise DecodeError(f"could not parse page response: {e}") from e


def _content_of(page: Any) -> Sequence[Any]:
    content = page.content
    if not isinstance(content, (list, tuple)):
        raise InvalidContentTypeError(content)
    return content


async def loop_until(
    pageable: Pageable[T],
    until: Predicate[T],
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
    all_pages: bool = False,
) -> T:
    """
    Scan a pageable until ``until`` returns true.

    Only the first page is scanned unless ``all_pages`` is set; callers rely
    on that limit, so following ``next_page`` is opt-in.

    Args:
        pageable: Source of pages
        until: Predicate called per element, sync or async; exceptions propagate
        page_size: Size of the pages to request
        all_pages: Follow next_page until the last page

    Returns:
        The element that satisfied the predicate

    Raises:
        ConditionNeverMetError: If no scanned element satisfied the predicate
        InvalidContentTypeError: If a page's content is not a list
    """
    page = await pageable.get_page(1, page_size)
    while True:
        logger.debug(f"Scanning page {page.num}/{page.total}")
        for element in _content_of(page):
            stop = until(element)
            if inspect.isawaitable(stop):
                stop = await stop
            if stop:
                return element

        if not (all_pages and has_next(page)):
            raise ConditionNeverMetError()
        page = await pageable.next_page(page)


class PageStream(Generic[T]):
    """
    Async iterator over every element of a pageable.

    A single background task fetches pages and hands their elements to the
    consumer one at a time: each push waits until the consumer has taken the
    element, so the next page is only fetched after the last element of the
    current one was received. Cancellation is checked only while waiting to
    push, so a fetch in flight always completes first. Fetch errors end the
    stream and are kept in ``error``; with ``raise_on_error`` the consumer
    also gets them raised once the delivered elements are drained.

    Example:
        >>> async with stream_async(api) as stream:
        ...     async for backend in stream:
        ...         print(backend.name)
    """

    def __init__(
        self,
        pageable: Pageable[T],
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        raise_on_error: bool = False,
    ):
        self._pageable = pageable
        self._page_size = page_size
        self._raise_on_error = raise_on_error
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=1)
        self._cancelled = asyncio.Event()
        self._task: asyncio.Task | None = None
        self._error_raised = False
        self.error: Exception | None = None

    def start(self) -> "PageStream[T]":
        """Schedule the background task. Requires a running event loop."""
        if self._task is None:
            self._task = asyncio.get_running_loop().create_task(self._run())
        return self

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def closed(self) -> bool:
        """Whether the background task has ended."""
        return self._task is not None and self._task.done()

    def cancel(self) -> None:
        """Ask the background task to stop. Safe to call any number of times."""
        self._cancelled.set()

    async def wait_closed(self) -> None:
        """Wait until the background task has ended."""
        if self._task is not None:
            await asyncio.wait({self._task})

    async def aclose(self) -> None:
        self.cancel()
        await self.wait_closed()

    async def __aenter__(self) -> "PageStream[T]":
        return self.start()

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def __aiter__(self) -> "PageStream[T]":
        return self

    async def __anext__(self) -> T:
        task = self.start()._task
        while self._queue.empty():
            if task.done():
                self._finish()
            getter = asyncio.ensure_future(self._queue.get())
            try:
                await asyncio.wait({getter, task}, return_when=asyncio.FIRST_COMPLETED)
            finally:
                if not getter.done():
                    # An item that raced in stays queued for the next loop.
                    getter.cancel()
            if getter.done():
                return self._received(getter.result())
        return self._received(self._queue.get_nowait())

    def _received(self, element: T) -> T:
        # Releases the producer waiting in _push.
        self._queue.task_done()
        return element

    def _finish(self) -> NoReturn:
        if self.error is not None and self._raise_on_error and not self._error_raised:
            self._error_raised = True
            raise self.error
        raise StopAsyncIteration

    async def _run(self) -> None:
        pushed = 0
        try:
            page = await self._pageable.get_page(1, self._page_size)
            while True:
                logger.debug(f"Streaming page {page.num}/{page.total}")
                for element in _content_of(page):
                    if not await self._push(element):
                        logger.debug(f"Page stream cancelled after {pushed} items")
                        return
                    pushed += 1
                if not has_next(page):
                    return
                page = await self._pageable.next_page(page)
        except Exception as e:
            self.error = e
            logger.warning(f"Page stream stopped after {pushed} items: {e}")

    async def _push(self, element: T) -> bool:
        """
        Hand ``element`` to the consumer and wait until it was received.

        Returns False if the stream was cancelled before that. An element
        offered when cancellation arrives stays available to the consumer.
        """
        if self._cancelled.is_set():
            return False

        # The previous push waited for its element to be taken, so the slot is free.
        self._queue.put_nowait(element)
        received = asyncio.ensure_future(self._queue.join())
        cancelled = asyncio.ensure_future(self._cancelled.wait())
        try:
            await asyncio.wait({received, cancelled}, return_when=asyncio.FIRST_COMPLETED)
            delivered = received.done() and not received.cancelled()
        finally:
            cancelled.cancel()
            if not received.done():
                received.cancel()
        return delivered


def stream_async(
    pageable: Pageable[T],
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
    raise_on_error: bool = False,
) -> PageStream[T]:
    """
    Stream every element of ``pageable`` until no pages remain or the
    consumer calls ``cancel()``.

    Must be called from a running event loop.
    """
    return PageStream(
        pageable, page_size=page_size, raise_on_error=raise_on_error
    ).start()
