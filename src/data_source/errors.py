from __future__ import annotations

from enum import Enum
from typing import Sequence


class FetchErrorKind(str, Enum):
    NETWORK = "network"
    IO = "io"
    TIME = "time"
    SIZE_LIMIT_EXCEEDED = "size_limit_exceeded"
    NOT_FOUND = "not_found"
    NOT_FOUND_IN_DIRECTORIES = "not_found_in_directories"
    NO_CACHE_FILE = "no_cache_file"


class FetchError(Exception):
    """Base class for every failure raised while resolving file content."""

    kind: FetchErrorKind = FetchErrorKind.IO


class NetworkError(FetchError):
    kind = FetchErrorKind.NETWORK


class IoError(FetchError):
    kind = FetchErrorKind.IO


class ArchiveFormatError(IoError):
    """The in-memory archive could not be parsed."""


class TimeError(FetchError):
    kind = FetchErrorKind.TIME


class SizeLimitExceededError(FetchError):
    kind = FetchErrorKind.SIZE_LIMIT_EXCEEDED

    def __init__(self, *, content_length: int, size_limit: int) -> None:
        super().__init__(f"Content length {content_length} exceeds size limit {size_limit}")
        self.content_length = content_length
        self.size_limit = size_limit


class NotFoundError(FetchError):
    kind = FetchErrorKind.NOT_FOUND

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message)


class NotFoundInDirectoriesError(NotFoundError):
    kind = FetchErrorKind.NOT_FOUND_IN_DIRECTORIES

    def __init__(self, file_name: str, directories: Sequence[str]) -> None:
        self.file_name = file_name
        self.directories = list(directories)
        super().__init__(f"File not found in specified directories: {file_name!r} directories={self.directories}")


class NoCacheFileError(FetchError):
    kind = FetchErrorKind.NO_CACHE_FILE

    def __init__(self, message: str = "No cache file configured") -> None:
        super().__init__(message)


def status_code_for(error: FetchError) -> int:
    """Map an error to the HTTP status a file server should answer with."""
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, SizeLimitExceededError):
        return 413
    return 500


__all__ = [
    "ArchiveFormatError",
    "FetchError",
    "FetchErrorKind",
    "IoError",
    "NetworkError",
    "NoCacheFileError",
    "NotFoundError",
    "NotFoundInDirectoriesError",
    "SizeLimitExceededError",
    "TimeError",
    "status_code_for",
]
