"""Base classes for script-builder collaborators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from functools import lru_cache
from pathlib import Path
from typing import Any, ClassVar, Dict, List, Tuple

from jinja2 import Environment, FileSystemLoader

from ..config import SetupOptions
from ..models import Artifact, ScriptBuilderResult

TEMPLATES_DIR = Path(__file__).with_name("templates")

ALWAYS = "always"
BUILD = "build"
LINT = "lint"
TEST = "test"


class ScriptBuilder(ABC):
    """Contract for collaborators that contribute build script artifacts.

    ``build`` receives the resolved, read-only setup options and must return a
    :class:`ScriptBuilderResult`; an empty result means "no contribution".
    Builders run concurrently and must not share mutable state.
    """

    name: ClassVar[str] = ""
    group: ClassVar[str] = ALWAYS

    @abstractmethod
    def build(self, options: SetupOptions) -> ScriptBuilderResult:
        """Produce artifacts and the external dependencies they need."""


@lru_cache(maxsize=None)
def _template_env(templates_dir: str) -> Environment:
    loader = FileSystemLoader(templates_dir)
    return Environment(
        loader=loader,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


class TemplateScriptBuilder(ScriptBuilder):
    """Renders a single makefile fragment from a jinja2 template."""

    template: ClassVar[str] = ""
    output: ClassVar[str] = ""
    priority: ClassVar[int] = 50
    purpose: ClassVar[str] = ""
    dependencies: ClassVar[Tuple[str, ...]] = ()

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or TEMPLATES_DIR

    def build(self, options: SetupOptions) -> ScriptBuilderResult:
        if not self.should_render(options):
            return ScriptBuilderResult()
        content = self.render(self.template, **self.context(options))
        artifact = Artifact(
            priority=self.priority,
            path=self.output,
            content=content,
            purpose=self.purpose,
            metadata={"builder": self.name},
        )
        return ScriptBuilderResult(artifacts=[artifact], dependencies=list(self.dependencies))

    def should_render(self, options: SetupOptions) -> bool:
        return True

    def context(self, options: SetupOptions) -> Dict[str, Any]:
        return {"options": options, "builder": self.name}

    def render(self, template_name: str, **context: Any) -> str:
        template = _template_env(str(self.templates_dir)).get_template(template_name)
        return template.render(**context)


def entry_context(entries) -> List[Dict[str, str]]:
    """Flatten entry point specs into template-friendly dictionaries."""
    return [
        {"path": entry.path, "name": entry.name, "spec": entry.serialize()}
        for entry in entries
    ]


__all__ = [
    "ALWAYS",
    "BUILD",
    "LINT",
    "ScriptBuilder",
    "TEMPLATES_DIR",
    "TEST",
    "TemplateScriptBuilder",
    "entry_context",
]
