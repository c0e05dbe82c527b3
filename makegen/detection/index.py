"""Index file lookup for a single directory listing."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Iterable, List, Optional

from ..errors import AmbiguousIndex
from ..models import DirectoryEntry

_INDEX_PATTERN = re.compile(r"^index\.[mc]?js$")


def is_index_name(name: str) -> bool:
    return _INDEX_PATTERN.match(name) is not None


def locate_index(
    entries: Iterable[DirectoryEntry], *, directory: Path | str | None = None
) -> Optional[str]:
    """Return the single index file name in ``entries``, or None when absent.

    ``index.js``, ``index.mjs`` and ``index.cjs`` are recognised. Finding more
    than one raises :class:`AmbiguousIndex`; ``directory`` is only used to give
    the error some context.
    """
    matches = [entry.name for entry in entries if is_index_name(entry.name)]
    if len(matches) > 1:
        raise AmbiguousIndex(matches, path=directory)
    if not matches:
        return None
    return matches[0]


def list_directory(path: Path) -> List[DirectoryEntry]:
    """Return the direct entries of ``path`` sorted by name."""
    with os.scandir(path) as iterator:
        entries = [DirectoryEntry.from_dir_entry(entry) for entry in iterator]
    return sorted(entries, key=lambda entry: entry.name)


__all__ = ["is_index_name", "list_directory", "locate_index"]
