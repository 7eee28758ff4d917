from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass, field
from typing import List, Mapping, Union

from data_source.archive import get_file_from_archive
from data_source.bridge import run_sync
from data_source.errors import NotFoundError
from data_source.folders import find_in_folders
from data_source.interfaces import AsyncFileContentSource, FileContentSource
from data_source.models import FileContent, SingleSource
from data_source.single_source import load_single_source, load_single_source_async, read_file_bytes

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PlainFile:
    """Read the requested name as a path, relative to the working directory."""


@dataclass(slots=True)
class FolderList:
    directories: List[str] = field(default_factory=list)

    def append(self, directory: str) -> None:
        self.directories.append(directory)


@dataclass(frozen=True, slots=True)
class Archive:
    data: bytes = field(repr=False)


@dataclass(frozen=True, slots=True)
class NameMap:
    sources: Mapping[str, SingleSource]


@dataclass(frozen=True, slots=True)
class Pluggable:
    backend: Union[FileContentSource, AsyncFileContentSource]


Backend = Union[PlainFile, FolderList, Archive, NameMap, Pluggable]


class SourceResolver:
    """
    Resolve a logical file name to bytes through exactly one backend.

    Every lookup returns (content, provenance) where provenance names the directory or
    path the content came from, when the backend knows one.
    """

    def __init__(self, backend: Backend | None = None) -> None:
        self._backend: Backend = backend if backend is not None else PlainFile()

    @classmethod
    def folders(cls, directories: List[str]) -> SourceResolver:
        return cls(FolderList(list(directories)))

    @classmethod
    def archive(cls, data: bytes) -> SourceResolver:
        return cls(Archive(bytes(data)))

    @classmethod
    def name_map(cls, sources: Mapping[str, SingleSource]) -> SourceResolver:
        return cls(NameMap(dict(sources)))

    @classmethod
    def pluggable(cls, backend: Union[FileContentSource, AsyncFileContentSource]) -> SourceResolver:
        return cls(Pluggable(backend))

    @property
    def backend(self) -> Backend:
        return self._backend

    def insert_current_working_dir(self) -> None:
        """Append the current working directory to a folder list; other backends are left untouched."""
        if isinstance(self._backend, FolderList):
            self._backend.append(os.getcwd())

    def get_file_content(self, file_name: str) -> FileContent:
        backend = self._backend
        if isinstance(backend, PlainFile):
            return read_file_bytes(file_name), None
        if isinstance(backend, FolderList):
            return find_in_folders(file_name, list(backend.directories))
        if isinstance(backend, Archive):
            return get_file_from_archive(file_name, backend.data)
        if isinstance(backend, NameMap):
            return load_single_source(self._lookup(backend, file_name))
        if isinstance(backend, Pluggable):
            if isinstance(backend.backend, FileContentSource):
                return backend.backend.get_file_content(file_name)
            plugged = backend.backend
            return run_sync(lambda: plugged.get_file_content_async(file_name))
        raise TypeError(f"Unsupported backend: {type(backend).__name__}")

    async def get_file_content_async(self, file_name: str) -> FileContent:
        backend = self._backend
        if isinstance(backend, PlainFile):
            return await asyncio.to_thread(read_file_bytes, file_name), None
        if isinstance(backend, FolderList):
            return await asyncio.to_thread(find_in_folders, file_name, list(backend.directories))
        if isinstance(backend, Archive):
            return await asyncio.to_thread(get_file_from_archive, file_name, backend.data)
        if isinstance(backend, NameMap):
            return await load_single_source_async(self._lookup(backend, file_name))
        if isinstance(backend, Pluggable):
            if isinstance(backend.backend, AsyncFileContentSource):
                return await backend.backend.get_file_content_async(file_name)
            return await asyncio.to_thread(backend.backend.get_file_content, file_name)
        raise TypeError(f"Unsupported backend: {type(backend).__name__}")

    def read_to_string(self, file_name: str) -> str:
        data, _ = self.get_file_content(file_name)
        return data.decode("utf-8", errors="replace")

    async def read_to_string_async(self, file_name: str) -> str:
        data, _ = await self.get_file_content_async(file_name)
        return data.decode("utf-8", errors="replace")

    @staticmethod
    def _lookup(backend: NameMap, file_name: str) -> SingleSource:
        source = backend.sources.get(file_name)
        if source is None:
            logger.debug("Name not present in source map. file_name=%s", file_name)
            raise NotFoundError()
        return source

    def __repr__(self) -> str:
        return f"SourceResolver({self._backend!r})"
