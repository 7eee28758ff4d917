from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence, Tuple

from data_source.errors import IoError, NotFoundInDirectoriesError

logger = logging.getLogger(__name__)


def find_in_folders(file_name: str, directories: Sequence[str]) -> Tuple[bytes, str]:
    """
    Read file_name from the first directory that contains it.

    Returns the content and the directory it was found in. The existence check and the
    read are separate observations, so a concurrent delete surfaces as an IoError.
    """
    for directory in directories:
        candidate = Path(directory) / file_name
        if not candidate.exists():
            continue
        logger.debug("Found file in directory. file_name=%s directory=%s", file_name, directory)
        try:
            return candidate.read_bytes(), directory
        except OSError as e:
            raise IoError(f"Failed to read file. path={candidate} error={e}") from e

    raise NotFoundInDirectoriesError(file_name, directories)
