from __future__ import annotations

import io
import logging
import lzma
import tarfile
import zlib
from pathlib import PurePosixPath
from typing import Tuple

from data_source.errors import ArchiveFormatError, NotFoundError

logger = logging.getLogger(__name__)

# Raised by tarfile or the decompressors on truncated or corrupt input. The buffer is
# in memory, so an OSError here (e.g. BadGzipFile) also means corrupt data.
_MALFORMED_ERRORS = (tarfile.TarError, OSError, EOFError, zlib.error, lzma.LZMAError)


def get_file_from_archive(file_name: str, archive: bytes) -> Tuple[bytes, str]:
    """
    Extract one entry from an in-memory tar archive.

    Entries are scanned in archive order and compared by exact path, so the first
    occurrence of a duplicated name wins. Compressed archives are opened transparently.
    Only regular files carry data: a matched directory or link yields empty content and
    links are never followed. Returns the entry content and the entry path.
    """
    wanted = PurePosixPath(file_name)
    logger.debug("Searching archive. file_name=%s archive_size=%d", file_name, len(archive))

    try:
        with tarfile.open(fileobj=io.BytesIO(archive), mode="r:*") as tar:
            for member in tar:
                if PurePosixPath(member.name) != wanted:
                    continue
                logger.debug("Found archive entry. name=%s size=%d type=%r", member.name, member.size, member.type)
                if not member.isfile():
                    return b"", member.name
                extracted = tar.extractfile(member)
                return (extracted.read() if extracted is not None else b""), member.name
    except _MALFORMED_ERRORS as e:
        raise ArchiveFormatError(f"Malformed archive data. error={e!r}") from e

    raise NotFoundError(f"File not found in archive: {file_name!r}")
