"""Lint and unit test rules."""

from __future__ import annotations

from .base import LINT, TEST, TemplateScriptBuilder


class LintBuilder(TemplateScriptBuilder):
    name = "lint"
    group = LINT
    template = "lint.mk.j2"
    output = "make/60-lint.mk"
    priority = 60
    purpose = "Run eslint over the sources and record a QA report."
    dependencies = ("eslint",)


class TestBuilder(TemplateScriptBuilder):
    name = "test"
    group = TEST
    template = "test.mk.j2"
    output = "make/60-test.mk"
    priority = 60
    purpose = "Stage transpiled sources and run the unit tests."
    dependencies = ("@babel/cli", "@babel/core", "@babel/preset-env", "jest")

    # Keep pytest from collecting this class as a test case.
    __test__ = False


__all__ = ["LintBuilder", "TestBuilder"]
