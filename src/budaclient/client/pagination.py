"""Concurrent retrieval of paginated collections."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

from ..errors import AggregateFetchError
from ..models.envelope import Envelope, decode_envelope
from ..utils.logger import logger

T = TypeVar("T")

# (path, query params, authenticated) -> raw response body
PageFetch = Callable[[str, dict[str, Any], bool], Awaitable[bytes]]


class PaginatedFetcher(Generic[T]):
    """
    Fetches every page of a collection.

    Page 1 is fetched first to learn ``total_pages``; pages 2..N are then
    fetched concurrently, at most ``max_concurrency`` at a time, each
    decoded into its own envelope. Results are merged in completion order.
    The first failing page cancels the rest and is raised as
    AggregateFetchError, so callers get either every item or nothing.
    """

    def __init__(self, fetch: PageFetch, page_size: int = 300, max_concurrency: int = 8):
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be positive, got {max_concurrency}")
        self._fetch = fetch
        self.page_size = page_size
        self.max_concurrency = max_concurrency

    def page_params(self, page: int, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Query parameters for one page: page, per, then any filters.

        Raises:
            ValueError: If the filters try to set page or per
        """
        reserved = {"page", "per"}.intersection(params or ())
        if reserved:
            raise ValueError(f"Pagination parameters are set by the fetcher: {sorted(reserved)}")
        query: dict[str, Any] = {"page": page, "per": self.page_size}
        if params:
            query.update({k: v for k, v in params.items() if v is not None})
        return query

    async def fetch_page(
        self,
        path: str,
        key: str,
        item_factory: Callable[[dict], T],
        page: int,
        params: dict[str, Any] | None = None,
        authenticated: bool = True,
    ) -> Envelope[T]:
        """
        Fetch and decode a single page.

        Args:
            path: Endpoint path (e.g. "/markets/btc-clp/orders")
            key: Envelope key holding the items (e.g. "orders")
            item_factory: Builds one item from its JSON object
            page: 1-based page number
            params: Extra filters such as {"state": "traded"}
            authenticated: Whether to sign the request

        Returns:
            Envelope for that page
        """
        raw = await self._fetch(path, self.page_params(page, params), authenticated)
        return decode_envelope(raw, key, item_factory)

    async def fetch_all(
        self,
        path: str,
        key: str,
        item_factory: Callable[[dict], T],
        params: dict[str, Any] | None = None,
        authenticated: bool = True,
    ) -> list[T]:
        """
        Fetch all pages of a collection.

        Returns:
            Items of every page. Order within a page is preserved; pages are
            appended in the order they complete.

        Raises:
            AggregateFetchError: If any page after the first fails
            ValueError: If params include page or per
        """
        first = await self.fetch_page(path, key, item_factory, 1, params, authenticated)
        items = list(first.items)
        total_pages = first.total_pages

        if total_pages <= 1:
            return items

        logger.debug(f"{path}: fetching pages 2..{total_pages} (total_count={first.meta.total_count})")

        # Unbounded, so abandoned tasks can always deliver without a reader
        results: asyncio.Queue[tuple[int, list[T] | None, Exception | None]] = asyncio.Queue()
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def fetch_one(page: int) -> None:
            try:
                async with semaphore:
                    envelope = await self.fetch_page(
                        path, key, item_factory, page, params, authenticated
                    )
            except Exception as e:
                results.put_nowait((page, None, e))
            else:
                results.put_nowait((page, envelope.items, None))

        tasks = [
            asyncio.create_task(fetch_one(page), name=f"{path}#page={page}")
            for page in range(2, total_pages + 1)
        ]

        try:
            for _ in range(len(tasks)):
                page, page_items, error = await results.get()
                if error is not None:
                    logger.error(f"{path}: page {page}/{total_pages} failed - {error}")
                    raise AggregateFetchError(page, error) from error
                items.extend(page_items)
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()

        logger.debug(f"{path}: fetched {len(items)} items from {total_pages} pages")
        return items
