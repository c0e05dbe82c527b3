"""Script-builder collaborators and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Dict, Iterable, List, Sequence

from .base import ALWAYS, BUILD, LINT, TEST, ScriptBuilder, TemplateScriptBuilder
from .builds import ExecutableBuildsBuilder, LibraryBuildsBuilder
from .infra import InfraBuilder, LocationsBuilder
from .quality import LintBuilder, TestBuilder
from .sources import DataFilesBuilder, JSFilesBuilder, ResourcesBuilder

_ENTRY_POINT_GROUP = "makegen.builders"

# Invocation order; the aggregator's stable sort relies on it for ties.
_BUILTIN_FACTORIES: Dict[str, Callable[[], ScriptBuilder]] = {
    "infra": InfraBuilder,
    "locations": LocationsBuilder,
    "data-files": DataFilesBuilder,
    "resources": ResourcesBuilder,
    "js-files": JSFilesBuilder,
    "library-builds": LibraryBuildsBuilder,
    "executable-builds": ExecutableBuildsBuilder,
    "lint": LintBuilder,
    "test": TestBuilder,
}

BUILTIN_BUILDERS = tuple(_BUILTIN_FACTORIES)


def discover_builders(enabled: Sequence[str] | None = None) -> Dict[str, ScriptBuilder]:
    """Return builders keyed by role name, in invocation order.

    Plugins registered under the ``makegen.builders`` entry point group replace
    the built-in builder of the same name. A plugin name that matches no
    built-in role, or an unknown name in ``enabled``, raises ``ValueError``.
    """
    factories: Dict[str, Callable[[], ScriptBuilder]] = dict(_BUILTIN_FACTORIES)

    for entry in _iter_entry_points():
        key = entry.name.lower()
        if key not in factories:
            raise ValueError(
                f"Builder entry point '{entry.name}' does not match a known role "
                f"({', '.join(BUILTIN_BUILDERS)})"
            )
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover - depends on installed plugins
            raise RuntimeError(f"Failed to load builder entry point '{entry.name}': {exc}") from exc

        def _factory(obj: object = loaded) -> ScriptBuilder:
            return _coerce_builder(obj)

        factories[key] = _factory

    names: List[str] = list(factories)
    if enabled is not None:
        requested = [name.lower() for name in enabled]
        missing = sorted(set(requested) - set(factories))
        if missing:
            raise ValueError(f"Unknown builders requested: {', '.join(missing)}")
        names = [name for name in names if name in requested]

    builders: Dict[str, ScriptBuilder] = {}
    for name in names:
        instance = factories[name]()
        if not isinstance(instance, ScriptBuilder):
            raise TypeError(f"Builder factory for '{name}' did not return a ScriptBuilder instance")
        builders[name] = instance
    return builders


def _coerce_builder(obj: object) -> ScriptBuilder:
    if isinstance(obj, ScriptBuilder):
        return obj
    if isinstance(obj, type) and issubclass(obj, ScriptBuilder):
        return obj()
    if callable(obj):
        instance = obj()
        if isinstance(instance, ScriptBuilder):
            return instance
    raise TypeError("Builder entry point must be a ScriptBuilder subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "ALWAYS",
    "BUILD",
    "BUILTIN_BUILDERS",
    "LINT",
    "ScriptBuilder",
    "TEST",
    "TemplateScriptBuilder",
    "discover_builders",
]
