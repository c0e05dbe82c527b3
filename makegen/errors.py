"""Exception hierarchy for makegen.

Every failure raised while preparing a build plan is a configuration problem
the caller can fix: nothing here is retryable. Errors carry the offending
path (and matched names where relevant) so the message is self-explanatory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class MakegenError(Exception):
    """Base exception for all makegen errors."""


class ConfigurationError(MakegenError):
    """Bad input or package layout; aborts the whole setup run."""

    def __init__(self, message: str = "", *, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class MissingPackageRoot(ConfigurationError):
    """No package.json found at the working package root."""


class MissingSourceDirectory(ConfigurationError):
    """The resolved source directory does not exist."""


class MissingMainEntry(ConfigurationError):
    """package.json lacks the 'main' field while layout detection must run."""


class InvalidMainEntry(ConfigurationError):
    """The 'main' field cannot be turned into an executable output name."""


class NoBuildableUnit(ConfigurationError):
    """Neither a library nor an executable could be identified."""


class MissingOption(ConfigurationError):
    """A mandatory setup option was not supplied."""

    def __init__(self, option: str) -> None:
        super().__init__(f"Missing required '{option}' option.")
        self.option = option


class InvalidEntryPointSpec(ConfigurationError):
    """An entry point string is not of the form '<path>:<name>'."""


class _AmbiguousMatch(ConfigurationError):
    def __init__(self, message: str, matches: Sequence[str], *, path: Path | str | None = None) -> None:
        super().__init__(f"{message}: {', '.join(matches)}", path=path)
        self.matches = list(matches)


class AmbiguousIndex(_AmbiguousMatch):
    """More than one index file found in a scanned directory."""

    def __init__(self, matches: Sequence[str], *, path: Path | str | None = None) -> None:
        super().__init__("Multiple index files found, bailing out", matches, path=path)


class AmbiguousExecutableDirectory(_AmbiguousMatch):
    """More than one of bin/, cli/, exec/, executable/ exists under the source root."""

    def __init__(self, matches: Sequence[str], *, path: Path | str | None = None) -> None:
        super().__init__("Found multiple executable candidates, bailing out", matches, path=path)


__all__ = [
    "AmbiguousExecutableDirectory",
    "AmbiguousIndex",
    "ConfigurationError",
    "InvalidEntryPointSpec",
    "InvalidMainEntry",
    "MakegenError",
    "MissingMainEntry",
    "MissingOption",
    "MissingPackageRoot",
    "MissingSourceDirectory",
    "NoBuildableUnit",
]
