from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from data_source.bridge import run_sync
from data_source.cache_gate import CacheGate
from data_source.errors import IoError
from data_source.models import FileContent, FilePathSource, InlineSource, RemoteSource, SingleSource
from data_source.remote_fetcher import RemoteFetcher

logger = logging.getLogger(__name__)


def read_file_bytes(path: str | Path) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise IoError(f"Failed to read file. path={path} error={e}") from e


async def _load_remote(source: RemoteSource) -> FileContent:
    gate = CacheGate(source.cache, cached_path=source.spec.cached_path)
    fetcher = RemoteFetcher(source.spec)
    data = await gate.fetch_with_cache(fetcher.fetch)
    provenance = gate.cached_path.get() if gate.cache_file is not None else None
    return data, provenance


async def load_single_source_async(source: SingleSource) -> FileContent:
    if isinstance(source, InlineSource):
        return source.data, None
    if isinstance(source, FilePathSource):
        data = await asyncio.to_thread(read_file_bytes, source.path)
        return data, source.path
    if isinstance(source, RemoteSource):
        return await _load_remote(source)
    raise TypeError(f"Unsupported single source: {type(source).__name__}")


def load_single_source(source: SingleSource) -> FileContent:
    if isinstance(source, InlineSource):
        return source.data, None
    if isinstance(source, FilePathSource):
        return read_file_bytes(source.path), source.path
    if isinstance(source, RemoteSource):
        return run_sync(lambda: _load_remote(source))
    raise TypeError(f"Unsupported single source: {type(source).__name__}")
