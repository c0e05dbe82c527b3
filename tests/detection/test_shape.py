"""Tests for package shape detection."""

from __future__ import annotations

import pytest

from makegen.detection.shape import ShapeDetector, derive_executable_name
from makegen.errors import AmbiguousExecutableDirectory, AmbiguousIndex, InvalidMainEntry
from makegen.models import DirectoryEntry, EntryPointSpec
from tests._fixtures.package_builder import PackageBuilder


def _serialized(entries):
    return [entry.serialize() for entry in entries]


def test_root_index_short_circuits_sub_layouts(package_builder: PackageBuilder) -> None:
    package_builder.touch(["src/index.js", "src/lib/index.js", "src/bin/index.js", "src/cli/index.js"])

    shape = ShapeDetector().detect(
        package_builder.path("src"), is_executable=False, main_entry="dist/demo.js"
    )

    assert _serialized(shape.with_libraries) == ["index.js:dist/demo.js"]
    assert shape.with_executables == []


def test_root_index_is_executable_when_hinted(package_builder: PackageBuilder) -> None:
    package_builder.touch(["src/index.mjs"])

    shape = ShapeDetector().detect(
        package_builder.path("src"), is_executable=True, main_entry="dist/demo.js"
    )

    assert shape.with_libraries == []
    assert shape.with_executables == [EntryPointSpec(path="index.mjs", name="dist/demo.js")]


def test_lib_index_yields_library(package_builder: PackageBuilder) -> None:
    package_builder.touch(["src/lib/index.mjs", "src/lib/util.mjs"])

    shape = ShapeDetector().detect(
        package_builder.path("src"), is_executable=False, main_entry="dist/demo.js"
    )

    assert _serialized(shape.with_libraries) == ["lib/index.mjs:dist/demo.js"]
    assert shape.with_executables == []


def test_cli_index_yields_executable_with_derived_name(package_builder: PackageBuilder) -> None:
    package_builder.touch(["src/cli/index.cjs"])

    shape = ShapeDetector().detect(
        package_builder.path("src"), is_executable=False, main_entry="src/index.js"
    )

    assert shape.with_libraries == []
    assert _serialized(shape.with_executables) == ["cli/index.cjs:index-exec.js"]


def test_library_and_executable_detected_together(package_builder: PackageBuilder) -> None:
    package_builder.touch(["src/lib/index.js", "src/executable/index.js"])

    shape = ShapeDetector().detect(
        package_builder.path("src"), is_executable=False, main_entry="dist/tool.mjs"
    )

    assert _serialized(shape.with_libraries) == ["lib/index.js:dist/tool.mjs"]
    assert _serialized(shape.with_executables) == ["executable/index.js:tool-exec.js"]


def test_directories_without_index_yield_nothing(package_builder: PackageBuilder) -> None:
    package_builder.touch(["src/lib/util.js", "src/bin/run.js", "src/other.js"])

    shape = ShapeDetector().detect(
        package_builder.path("src"), is_executable=False, main_entry="dist/demo.js"
    )

    assert shape.is_empty


def test_files_named_like_convention_dirs_are_ignored(package_builder: PackageBuilder) -> None:
    package_builder.touch(["src/lib", "src/bin", "src/cli/index.js"])

    shape = ShapeDetector().detect(
        package_builder.path("src"), is_executable=False, main_entry="dist/demo.js"
    )

    assert shape.with_libraries == []
    assert _serialized(shape.with_executables) == ["cli/index.js:demo-exec.js"]


def test_multiple_executable_directories_fail(package_builder: PackageBuilder) -> None:
    package_builder.mkdir("src/bin", "src/cli")

    with pytest.raises(AmbiguousExecutableDirectory) as excinfo:
        ShapeDetector().detect(
            package_builder.path("src"), is_executable=False, main_entry="dist/demo.js"
        )

    assert excinfo.value.matches == ["bin", "cli"]


def test_ambiguous_lib_index_propagates(package_builder: PackageBuilder) -> None:
    package_builder.touch(["src/lib/index.js", "src/lib/index.cjs"])

    with pytest.raises(AmbiguousIndex) as excinfo:
        ShapeDetector().detect(
            package_builder.path("src"), is_executable=False, main_entry="dist/demo.js"
        )

    assert excinfo.value.path == package_builder.path("src/lib")


def test_ambiguous_root_index_propagates(package_builder: PackageBuilder) -> None:
    package_builder.touch(["src/index.js", "src/index.mjs"])

    with pytest.raises(AmbiguousIndex):
        ShapeDetector().detect(
            package_builder.path("src"), is_executable=False, main_entry="dist/demo.js"
        )


def test_detector_uses_injected_lister(package_builder: PackageBuilder) -> None:
    listings = {
        "src": [DirectoryEntry("bin", True)],
        "bin": [DirectoryEntry("index.js", False)],
    }
    calls = []

    def lister(path):
        calls.append(path.name)
        return listings[path.name]

    shape = ShapeDetector(lister=lister).detect(
        package_builder.path("src"), is_executable=False, main_entry="cli.js"
    )

    assert calls == ["src", "bin"]
    assert _serialized(shape.with_executables) == ["bin/index.js:cli-exec.js"]


@pytest.mark.parametrize(
    ("main", "expected"),
    [
        ("src/index.js", "index-exec.js"),
        ("dist/tool.mjs", "tool-exec.js"),
        ("main.cjs", "main-exec.js"),
        ("a/b/c.d.js", "c.d-exec.js"),
    ],
)
def test_derive_executable_name(main: str, expected: str) -> None:
    assert derive_executable_name(main) == expected


@pytest.mark.parametrize("main", ["dist/index.ts", "index", "lib/data.json", "dist/.js"])
def test_derive_executable_name_rejects_non_js_main(main: str) -> None:
    with pytest.raises(InvalidMainEntry):
        derive_executable_name(main)
