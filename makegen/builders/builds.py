"""Library and executable bundling rules."""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Dict, Sequence

from ..config import SetupOptions
from ..logging import get_logger
from ..models import EntryPointSpec
from .base import BUILD, TemplateScriptBuilder, entry_context

BUNDLER_DEPENDENCIES = (
    "@babel/core",
    "@babel/preset-env",
    "@rollup/plugin-babel",
    "@rollup/plugin-commonjs",
    "@rollup/plugin-node-resolve",
    "rollup",
)


class _EntryBuildsBuilder(TemplateScriptBuilder):
    group = BUILD
    template = "entry-builds.mk.j2"
    priority = 55
    dependencies = BUNDLER_DEPENDENCIES
    prefix = ""
    executable = False

    @abstractmethod
    def entries(self, options: SetupOptions) -> Sequence[EntryPointSpec]:
        """Entry points this builder bundles."""

    def should_render(self, options: SetupOptions) -> bool:
        entries = self.entries(options)
        if not entries:
            get_logger("builders").debug("No %s entries; skipping %s", self.prefix.lower(), self.name)
        return bool(entries)

    def context(self, options: SetupOptions) -> Dict[str, Any]:
        context = super().context(options)
        context.update(
            entries=entry_context(self.entries(options)),
            prefix=self.prefix,
            executable=self.executable,
        )
        return context


class LibraryBuildsBuilder(_EntryBuildsBuilder):
    name = "library-builds"
    output = "make/55-library-builds.mk"
    purpose = "Bundle each library entry point into the distribution."
    prefix = "LIB"

    def entries(self, options: SetupOptions) -> Sequence[EntryPointSpec]:
        return options.with_libraries


class ExecutableBuildsBuilder(_EntryBuildsBuilder):
    name = "executable-builds"
    output = "make/55-executable-builds.mk"
    purpose = "Bundle each executable entry point and mark it runnable."
    prefix = "EXEC"
    executable = True

    def entries(self, options: SetupOptions) -> Sequence[EntryPointSpec]:
        return options.with_executables


__all__ = ["BUNDLER_DEPENDENCIES", "ExecutableBuildsBuilder", "LibraryBuildsBuilder"]
