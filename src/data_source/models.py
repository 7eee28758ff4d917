from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

DEFAULT_TIMEOUT_SECONDS = 30.0

Header = Tuple[str, str]


class Freshness(str, Enum):
    FRESH = "fresh"
    STALE = "stale"
    ABSENT = "absent"


class CachedPathSlot:
    """
    Last known good cache file path for one remote source.

    Advisory only: a lost or stale value just costs a redundant fetch.
    The lock is held for the read or write of the value and never across I/O.
    """

    def __init__(self, value: Optional[str] = None) -> None:
        self._lock = threading.Lock()
        self._value = value

    def get(self) -> Optional[str]:
        with self._lock:
            return self._value

    def set(self, value: Optional[str]) -> None:
        with self._lock:
            self._value = value

    def __repr__(self) -> str:
        return f"CachedPathSlot({self.get()!r})"


@dataclass(frozen=True, slots=True)
class RemoteSpec:
    url: str
    proxy: Optional[str] = None
    headers: Sequence[Header] = ()
    use_proxy_by_default: bool = False
    size_limit: Optional[int] = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    cached_path: CachedPathSlot = field(default_factory=CachedPathSlot, compare=False)


@dataclass(frozen=True, slots=True)
class CachePolicy:
    refresh_interval_seconds: Optional[float] = None
    cache_file: Optional[str] = None


@dataclass(frozen=True, slots=True)
class InlineSource:
    data: bytes


@dataclass(frozen=True, slots=True)
class FilePathSource:
    path: str


@dataclass(frozen=True, slots=True)
class RemoteSource:
    spec: RemoteSpec
    cache: CachePolicy = field(default_factory=CachePolicy)


SingleSource = Union[InlineSource, FilePathSource, RemoteSource]

# (content, provenance)
FileContent = Tuple[bytes, Optional[str]]
