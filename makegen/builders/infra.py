"""Core makefile infrastructure and location variables."""

from __future__ import annotations

from .base import ALWAYS, TemplateScriptBuilder


class InfraBuilder(TemplateScriptBuilder):
    """Top-level Makefile with the phony targets enabled by the feature flags."""

    name = "infra"
    group = ALWAYS
    template = "infra.mk.j2"
    output = "Makefile"
    priority = 0
    purpose = "Top-level Makefile and shared phony targets."


class LocationsBuilder(TemplateScriptBuilder):
    name = "locations"
    group = ALWAYS
    template = "locations.mk.j2"
    output = "make/10-locations.mk"
    priority = 10
    purpose = "Source, distribution, QA and documentation directory variables."


__all__ = ["InfraBuilder", "LocationsBuilder"]
