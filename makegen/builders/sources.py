"""Builders that gather non-compiled source files into the distribution."""

from __future__ import annotations

from .base import ALWAYS, TemplateScriptBuilder


class DataFilesBuilder(TemplateScriptBuilder):
    name = "data-files"
    group = ALWAYS
    template = "data-files.mk.j2"
    output = "make/50-data-files.mk"
    priority = 50
    purpose = "Copy data files from the source tree into the distribution."


class ResourcesBuilder(TemplateScriptBuilder):
    name = "resources"
    group = ALWAYS
    template = "resources.mk.j2"
    output = "make/50-resources.mk"
    priority = 50
    purpose = "Copy resource files; stage them for tests and docs when enabled."


class JSFilesBuilder(TemplateScriptBuilder):
    """Declares the JavaScript source set other fragments depend on."""

    name = "js-files"
    group = ALWAYS
    template = "js-files.mk.j2"
    output = "make/50-js-files.mk"
    priority = 50
    purpose = "Enumerate JavaScript sources."


__all__ = ["DataFilesBuilder", "JSFilesBuilder", "ResourcesBuilder"]
