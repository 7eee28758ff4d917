from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import Awaitable, Callable, Optional

from data_source.errors import IoError, NoCacheFileError, TimeError
from data_source.models import CachedPathSlot, CachePolicy, Freshness

logger = logging.getLogger(__name__)


def atomic_write_bytes(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_bytes(data)
    tmp_path.replace(path)


class CacheGate:
    """
    On-disk cache in front of a remote fetch.

    The cache file holds the raw fetched bytes. Freshness only depends on whether
    the file exists and on its modification time.
    """

    def __init__(self, policy: CachePolicy, *, cached_path: Optional[CachedPathSlot] = None) -> None:
        self._policy = policy
        self._cached_path = cached_path if cached_path is not None else CachedPathSlot()

    @property
    def cache_file(self) -> Optional[Path]:
        if not self._policy.cache_file:
            return None
        return Path(self._policy.cache_file)

    @property
    def cached_path(self) -> CachedPathSlot:
        return self._cached_path

    def is_stale(self, now: Optional[float] = None) -> Freshness:
        cache_file = self.cache_file
        if cache_file is None:
            return Freshness.ABSENT
        try:
            mtime = cache_file.stat().st_mtime
        except FileNotFoundError:
            return Freshness.ABSENT
        except OSError as e:
            raise IoError(f"Failed to stat cache file. path={cache_file} error={e}") from e

        interval = self._policy.refresh_interval_seconds
        if interval is None:
            return Freshness.FRESH

        if now is None:
            now = time.time()
        elapsed = now - mtime
        if elapsed < 0:
            raise TimeError(f"Cache file modification time is in the future. path={cache_file} elapsed={elapsed}")
        return Freshness.FRESH if elapsed <= interval else Freshness.STALE

    def read_cached(self) -> bytes:
        cache_file = self.cache_file
        if cache_file is None:
            raise NoCacheFileError()
        try:
            data = cache_file.read_bytes()
        except OSError as e:
            raise IoError(f"Failed to read cache file. path={cache_file} error={e}") from e
        self._cached_path.set(str(cache_file))
        return data

    def write_cached(self, data: bytes) -> None:
        cache_file = self.cache_file
        if cache_file is None:
            raise NoCacheFileError()
        try:
            atomic_write_bytes(cache_file, data)
        except OSError as e:
            raise IoError(f"Failed to write cache file. path={cache_file} error={e}") from e
        self._cached_path.set(str(cache_file))

    async def fetch_with_cache(self, fetch: Callable[[], Awaitable[bytes]]) -> bytes:
        freshness = await asyncio.to_thread(self.is_stale)
        if freshness is Freshness.FRESH:
            logger.debug("Cache hit. path=%s", self.cache_file)
            return await asyncio.to_thread(self.read_cached)

        logger.debug(
            "Cache miss, fetching. freshness=%s path=%s last_known=%s",
            freshness.value,
            self.cache_file,
            self._cached_path.get(),
        )
        data = await fetch()

        if self.cache_file is None:
            return data
        try:
            await asyncio.to_thread(self.write_cached, data)
        except IoError as e:
            logger.warning("Failed to persist fetched content to cache. path=%s error=%s", self.cache_file, e)
        return data
