"""Bounded-concurrency HTTP downloads for launcher artifacts."""

import asyncio
import itertools
import logging
from dataclasses import dataclass
from typing import Iterable, List, NewType, Optional

import aiohttp

from ..exceptions import NetworkError
from ..utils.async_http import create_session

log = logging.getLogger(__name__)

CorrelationId = NewType("CorrelationId", int)


@dataclass(frozen=True)
class DownloadItem:
    key: CorrelationId
    url: str


@dataclass
class DownloadResult:
    """Outcome of one batch item: either the body bytes or the transport error."""
    key: CorrelationId
    url: str
    data: Optional[bytes] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DownloadQueue:
    """Pending batch of downloads. Ids are fresh per queue and never reused."""

    def __init__(self, manager: "DownloadManager"):
        self._manager = manager
        self._ids = itertools.count()
        self._pending: List[DownloadItem] = []

    def add(self, url: str) -> CorrelationId:
        key = CorrelationId(next(self._ids))
        self._pending.append(DownloadItem(key, url))
        return key

    @property
    def pending(self) -> List[DownloadItem]:
        return list(self._pending)

    def __len__(self) -> int:
        return len(self._pending)

    async def download_all(self) -> List[DownloadResult]:
        """Drain the queue and fetch everything in it."""
        items, self._pending = self._pending, []
        return await self._manager.download_all(items)


class DownloadManager:
    def __init__(self, concurrent_downloads: int = 8, timeout: float = 60.0,
                 session: Optional[aiohttp.ClientSession] = None):
        self.concurrent_downloads = concurrent_downloads
        self.timeout = timeout
        self.session = session
        self._owns_session = session is None
        self.semaphore = asyncio.Semaphore(concurrent_downloads)

    async def __aenter__(self):
        self._get_session()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self.session is None:
            self.session = create_session(self.timeout)
            self._owns_session = True
        return self.session

    async def close(self):
        if self.session and self._owns_session:
            await self.session.close()
        self.session = None

    def queue(self) -> DownloadQueue:
        """Start a new, independent download batch."""
        return DownloadQueue(self)

    async def _get(self, url: str) -> bytes:
        async with self._get_session().get(url) as resp:
            resp.raise_for_status()
            return await resp.read()

    async def download_one(self, url: str) -> bytes:
        """Fetch a single URL outside of any batch."""
        log.debug(f"Fetching {url}")
        try:
            return await self._get(url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(url, e) from e

    async def _fetch(self, item: DownloadItem) -> DownloadResult:
        async with self.semaphore:
            try:
                data = await self._get(item.url)
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                log.debug(f"Download of {item.url} failed: {e!r}")
                return DownloadResult(item.key, item.url, error=e)
            return DownloadResult(item.key, item.url, data=data)

    async def download_all(self, items: Iterable[DownloadItem]) -> List[DownloadResult]:
        """
        Download every item, at most ``concurrent_downloads`` at a time.

        Results are returned in completion order; use ``key`` to pair them
        with caller context. A failed item never aborts its siblings.
        """
        tasks = [asyncio.ensure_future(self._fetch(item)) for item in items]
        if not tasks:
            return []

        log.debug(f"Downloading batch of {len(tasks)} files")
        results = []
        try:
            for next_done in asyncio.as_completed(tasks):
                results.append(await next_done)
        finally:
            for task in tasks:
                task.cancel()
        return results

    async def retry_failed(self, results: Iterable[DownloadResult]) -> List[DownloadResult]:
        """Re-run only the failed items of a previous batch, keeping their keys."""
        items = [DownloadItem(result.key, result.url) for result in results if not result.ok]
        log.info(f"Retrying {len(items)} failed downloads")
        return await self.download_all(items)
