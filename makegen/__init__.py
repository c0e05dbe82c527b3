"""Makefile build-plan scaffolding for JavaScript packages."""

__version__ = "0.1.0"
