from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict

from data_source.config.models import (
    ArchiveSettings,
    DataSourceSettings,
    FileSourceSettings,
    FoldersSettings,
    InlineSourceSettings,
    NameMapSettings,
    PlainFileSettings,
    RemoteSourceSettings,
    SingleSourceSettings,
)
from data_source.models import CachePolicy, FilePathSource, InlineSource, RemoteSource, RemoteSpec, SingleSource
from data_source.resolver import SourceResolver

logger = logging.getLogger(__name__)


def build_single_source(settings: SingleSourceSettings) -> SingleSource:
    if isinstance(settings, InlineSourceSettings):
        return InlineSource(settings.text.encode("utf-8"))
    if isinstance(settings, FileSourceSettings):
        return FilePathSource(settings.path)
    if isinstance(settings, RemoteSourceSettings):
        spec = RemoteSpec(
            url=settings.url,
            proxy=settings.proxy,
            headers=tuple((name, value) for name, value in settings.headers),
            use_proxy_by_default=settings.use_proxy_by_default,
            size_limit=settings.size_limit,
            timeout_seconds=settings.timeout_seconds,
        )
        cache = CachePolicy(
            refresh_interval_seconds=settings.refresh_interval_seconds,
            cache_file=settings.cache_file,
        )
        return RemoteSource(spec=spec, cache=cache)
    raise TypeError(f"Unsupported source settings: {type(settings).__name__}")


def build_resolver(settings: DataSourceSettings) -> SourceResolver:
    """Construct the resolver once at configuration time."""
    if isinstance(settings, PlainFileSettings):
        return SourceResolver()
    if isinstance(settings, FoldersSettings):
        resolver = SourceResolver.folders(list(settings.directories))
        if settings.include_cwd:
            resolver.insert_current_working_dir()
        return resolver
    if isinstance(settings, ArchiveSettings):
        data = Path(settings.path).read_bytes()
        logger.info("Loaded archive into memory. path=%s size=%d", settings.path, len(data))
        return SourceResolver.archive(data)
    if isinstance(settings, NameMapSettings):
        sources: Dict[str, SingleSource] = {
            name: build_single_source(source) for name, source in settings.sources.items()
        }
        return SourceResolver.name_map(sources)
    raise TypeError(f"Unsupported data source settings: {type(settings).__name__}")
