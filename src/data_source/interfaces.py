from __future__ import annotations

from typing import Protocol, runtime_checkable

from data_source.models import FileContent


@runtime_checkable
class FileContentSource(Protocol):
    def get_file_content(self, name: str) -> FileContent:
        """Return (content, provenance) for the name, or raise a FetchError."""
        ...


@runtime_checkable
class AsyncFileContentSource(Protocol):
    async def get_file_content_async(self, name: str) -> FileContent:
        """Async counterpart of FileContentSource.get_file_content."""
        ...
