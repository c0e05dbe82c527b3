"""Core data models shared across makegen components."""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

from .errors import InvalidEntryPointSpec


@dataclass(frozen=True)
class DirectoryEntry:
    """A single name from a directory listing."""

    name: str
    is_directory: bool

    @classmethod
    def from_dir_entry(cls, entry: os.DirEntry) -> "DirectoryEntry":
        return cls(name=entry.name, is_directory=entry.is_dir())


@dataclass(frozen=True)
class EntryPointSpec:
    """Index file path (relative to the source root) and its logical output name."""

    path: str
    name: str

    def serialize(self) -> str:
        return f"{self.path}:{self.name}"

    @classmethod
    def parse(cls, text: str) -> "EntryPointSpec":
        """Parse ``"<path>:<name>"``; the name is everything after the last colon."""
        path, sep, name = text.rpartition(":")
        if not sep or not path.strip() or not name.strip():
            raise InvalidEntryPointSpec(
                f"Entry point '{text}' must be of the form '<path>:<name>'."
            )
        return cls(path=path.strip(), name=name.strip())

    def __str__(self) -> str:
        return self.serialize()


@dataclass
class Artifact:
    """A generated build script fragment.

    Only ``priority`` is interpreted by the aggregator; everything else belongs
    to the collaborator that produced it.
    """

    priority: int
    path: str = ""
    content: str = ""
    purpose: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ScriptBuilderResult:
    """Uniform return value of every script-builder collaborator."""

    artifacts: List[Artifact] = field(default_factory=list)
    dependencies: List[str] = field(default_factory=list)


@dataclass
class BuildPlan:
    """Deduplicated dependencies plus priority-ordered artifacts."""

    dependencies: List[str]
    artifacts: List[Artifact]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dependencies": list(self.dependencies),
            "artifacts": [asdict(artifact) for artifact in self.artifacts],
        }


@dataclass
class DetectedShape:
    """Library and executable entry points inferred from the source layout."""

    with_libraries: List[EntryPointSpec] = field(default_factory=list)
    with_executables: List[EntryPointSpec] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.with_libraries and not self.with_executables
