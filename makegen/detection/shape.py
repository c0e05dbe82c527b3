"""Infer library and executable entry points from a package source layout."""

from __future__ import annotations

import re
from pathlib import Path, PurePosixPath
from typing import Callable, List, Optional, Sequence

from ..errors import AmbiguousExecutableDirectory, InvalidMainEntry
from ..logging import get_logger
from ..models import DetectedShape, DirectoryEntry, EntryPointSpec
from .index import list_directory, locate_index

LIBRARY_DIR = "lib"
EXECUTABLE_DIRS = ("bin", "cli", "exec", "executable")

_JS_EXTENSION = re.compile(r"\.[mc]?js$")


def derive_executable_name(main_entry: str) -> str:
    """Return ``<stem>-exec.js`` for the last path segment of ``main_entry``.

    >>> derive_executable_name("src/index.js")
    'index-exec.js'
    """
    segment = PurePosixPath(main_entry.replace("\\", "/")).name
    stem, count = _JS_EXTENSION.subn("", segment)
    if count == 0 or not stem:
        raise InvalidMainEntry(
            f"Cannot derive an executable name from main entry '{main_entry}'; "
            "expected a .js, .mjs or .cjs file."
        )
    return f"{stem}-exec.js"


class ShapeDetector:
    """Decides whether a source root holds a library, an executable, both or neither.

    A root-level index makes the whole package a single unit. Otherwise a
    ``lib/`` index marks a library and an index under exactly one of
    ``bin/``, ``cli/``, ``exec/`` or ``executable/`` marks an executable.
    """

    def __init__(
        self, lister: Callable[[Path], List[DirectoryEntry]] | None = None
    ) -> None:
        self._list = lister or list_directory
        self.logger = get_logger("detection")

    def detect(self, source_root: Path, *, is_executable: bool, main_entry: str) -> DetectedShape:
        shape = DetectedShape()
        root_entries = self._list(source_root)

        root_index = locate_index(root_entries, directory=source_root)
        if root_index is not None:
            kind = "executable" if is_executable else "library"
            self.logger.info("Found root index, treating as single %s.", kind)
            spec = EntryPointSpec(path=root_index, name=main_entry)
            if is_executable:
                shape.with_executables.append(spec)
            else:
                shape.with_libraries.append(spec)
            return shape

        library = self._detect_library(source_root, root_entries, main_entry)
        if library is not None:
            shape.with_libraries.append(library)

        executable = self._detect_executable(source_root, root_entries, main_entry)
        if executable is not None:
            shape.with_executables.append(executable)

        return shape

    def _detect_library(
        self, source_root: Path, entries: Sequence[DirectoryEntry], main_entry: str
    ) -> Optional[EntryPointSpec]:
        if not any(entry.is_directory and entry.name == LIBRARY_DIR for entry in entries):
            return None
        lib_dir = source_root / LIBRARY_DIR
        lib_index = locate_index(self._list(lib_dir), directory=lib_dir)
        if lib_index is None:
            self.logger.debug("No index under %s", lib_dir)
            return None
        self.logger.info("Found lib index, adding to library build list.")
        return EntryPointSpec(path=f"{LIBRARY_DIR}/{lib_index}", name=main_entry)

    def _detect_executable(
        self, source_root: Path, entries: Sequence[DirectoryEntry], main_entry: str
    ) -> Optional[EntryPointSpec]:
        candidates = [
            entry.name
            for entry in entries
            if entry.is_directory and entry.name in EXECUTABLE_DIRS
        ]
        if len(candidates) > 1:
            raise AmbiguousExecutableDirectory(candidates, path=source_root)
        if not candidates:
            return None

        exec_dir_name = candidates[0]
        exec_dir = source_root / exec_dir_name
        exec_index = locate_index(self._list(exec_dir), directory=exec_dir)
        if exec_index is None:
            self.logger.debug("No index under %s", exec_dir)
            return None
        self.logger.info("Found exec index, adding to executable build list.")
        return EntryPointSpec(
            path=f"{exec_dir_name}/{exec_index}",
            name=derive_executable_name(main_entry),
        )


__all__ = ["EXECUTABLE_DIRS", "LIBRARY_DIR", "ShapeDetector", "derive_executable_name"]
