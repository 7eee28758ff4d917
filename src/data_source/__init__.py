"""Resolve logical file names to bytes from folders, archives, name maps or remote URLs."""

from __future__ import annotations

from data_source.cache_gate import CacheGate
from data_source.errors import (
    ArchiveFormatError,
    FetchError,
    FetchErrorKind,
    IoError,
    NetworkError,
    NoCacheFileError,
    NotFoundError,
    NotFoundInDirectoriesError,
    SizeLimitExceededError,
    TimeError,
    status_code_for,
)
from data_source.interfaces import AsyncFileContentSource, FileContentSource
from data_source.models import (
    CachedPathSlot,
    CachePolicy,
    FilePathSource,
    Freshness,
    InlineSource,
    RemoteSource,
    RemoteSpec,
    SingleSource,
)
from data_source.remote_fetcher import RemoteFetcher
from data_source.resolver import Archive, FolderList, NameMap, PlainFile, Pluggable, SourceResolver

__all__ = [
    "Archive",
    "ArchiveFormatError",
    "AsyncFileContentSource",
    "CacheGate",
    "CachePolicy",
    "CachedPathSlot",
    "FetchError",
    "FetchErrorKind",
    "FileContentSource",
    "FilePathSource",
    "FolderList",
    "Freshness",
    "InlineSource",
    "IoError",
    "NameMap",
    "NetworkError",
    "NoCacheFileError",
    "NotFoundError",
    "NotFoundInDirectoriesError",
    "PlainFile",
    "Pluggable",
    "RemoteFetcher",
    "RemoteSource",
    "RemoteSpec",
    "SingleSource",
    "SizeLimitExceededError",
    "SourceResolver",
    "TimeError",
    "status_code_for",
]
