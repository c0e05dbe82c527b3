"""Tests for makegen.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from makegen.config import (
    ConfigError,
    MakegenConfig,
    SetupOptions,
    build_setup_options,
    load_config,
)
from makegen.errors import ConfigurationError, InvalidEntryPointSpec, MissingOption
from makegen.models import EntryPointSpec


def _required(tmp_path: Path) -> dict:
    return {"working_pkg_root": tmp_path, "my_name": "makegen", "my_version": "1.2.3"}


def test_build_setup_options_applies_defaults(tmp_path: Path) -> None:
    options = build_setup_options(**_required(tmp_path))

    assert isinstance(options, SetupOptions)
    assert options.src_path == "src"
    assert options.dist_path == "dist"
    assert options.doc_build_path == "doc"
    assert options.doc_src_path == "doc"
    assert options.qa_path == "qa"
    assert options.test_staging_path == "test-staging"
    assert options.is_executable is False
    assert (options.no_build, options.no_doc, options.no_lint, options.no_test) == (
        False,
        False,
        False,
        False,
    )
    assert options.with_libraries == ()
    assert options.with_executables == ()
    assert options.package_json_path == tmp_path / "package.json"
    assert options.source_root == tmp_path / "src"
    assert options.make_dir == tmp_path / "make"


@pytest.mark.parametrize("missing", ["working_pkg_root", "my_name", "my_version"])
def test_build_setup_options_requires_mandatory_fields(tmp_path: Path, missing: str) -> None:
    values = _required(tmp_path)
    del values[missing]

    with pytest.raises(MissingOption) as excinfo:
        build_setup_options(**values)

    assert excinfo.value.option == missing
    assert missing in str(excinfo.value)


def test_build_setup_options_treats_blank_and_none_as_missing(tmp_path: Path) -> None:
    with pytest.raises(MissingOption):
        build_setup_options(**{**_required(tmp_path), "my_name": "  "})
    with pytest.raises(MissingOption):
        build_setup_options(**{**_required(tmp_path), "my_version": None})


def test_build_setup_options_none_falls_back_to_default(tmp_path: Path) -> None:
    options = build_setup_options(**_required(tmp_path), src_path=None, no_lint=None)
    assert options.src_path == "src"
    assert options.no_lint is False


def test_build_setup_options_parses_boolean_strings(tmp_path: Path) -> None:
    options = build_setup_options(**_required(tmp_path), no_lint="false", is_executable="yes")
    assert options.no_lint is False
    assert options.is_executable is True


@pytest.mark.parametrize("value", ["maybe", 2, ["true"]])
def test_build_setup_options_rejects_non_boolean_flags(tmp_path: Path, value: object) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        build_setup_options(**_required(tmp_path), no_test=value)
    assert "no_test" in str(excinfo.value)


def test_build_setup_options_parses_entry_points(tmp_path: Path) -> None:
    options = build_setup_options(
        **_required(tmp_path),
        with_libraries=["lib/index.js:dist/lib.js"],
        with_executables=[EntryPointSpec("bin/index.js", "cli-exec.js")],
    )
    assert options.with_libraries == (EntryPointSpec("lib/index.js", "dist/lib.js"),)
    assert options.with_executables == (EntryPointSpec("bin/index.js", "cli-exec.js"),)


def test_build_setup_options_rejects_bad_entry_point(tmp_path: Path) -> None:
    with pytest.raises(InvalidEntryPointSpec):
        build_setup_options(**_required(tmp_path), with_libraries=["no-colon"])


def test_build_setup_options_rejects_unknown_keys(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        build_setup_options(**_required(tmp_path), with_libs=["a:b"])
    assert "with_libs" in str(excinfo.value)


def test_setup_options_are_immutable(tmp_path: Path) -> None:
    options = build_setup_options(**_required(tmp_path))
    with pytest.raises(AttributeError):
        options.no_build = True  # type: ignore[misc]


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, MakegenConfig)
    assert config.root == tmp_path.resolve()
    assert config.src_path is None
    assert config.no_build is None
    assert config.with_libraries == []
    assert config.option_values() == {}


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".makegen.yml"
    config_file.write_text(
        """
paths:
  src: source
  dist: build
  qa: reports
executable: true
features:
  doc: false
  lint: no
  test: true
entries:
  libraries:
    - "lib/index.js:dist/lib.js"
  executables: "bin/index.js:cli-exec.js"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.src_path == "source"
    assert config.dist_path == "build"
    assert config.qa_path == "reports"
    assert config.doc_build_path is None
    assert config.is_executable is True
    assert config.no_doc is True
    assert config.no_lint is True
    assert config.no_test is False
    assert config.no_build is None
    assert config.with_libraries == ["lib/index.js:dist/lib.js"]
    assert config.with_executables == ["bin/index.js:cli-exec.js"]

    assert config.option_values() == {
        "src_path": "source",
        "dist_path": "build",
        "qa_path": "reports",
        "is_executable": True,
        "no_doc": True,
        "no_lint": True,
        "no_test": False,
        "with_libraries": ["lib/index.js:dist/lib.js"],
        "with_executables": ["bin/index.js:cli-exec.js"],
    }


def test_load_config_values_feed_setup_options(tmp_path: Path) -> None:
    (tmp_path / ".makegen.yml").write_text("paths:\n  src: code\n", encoding="utf-8")

    values = load_config(tmp_path).option_values()
    options = build_setup_options(**_required(tmp_path), **values)

    assert options.source_root == tmp_path / "code"


def test_load_config_empty_file(tmp_path: Path) -> None:
    (tmp_path / ".makegen.yml").write_text("\n", encoding="utf-8")
    assert load_config(tmp_path).option_values() == {}


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / ".makegen.yml").write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_reports_parse_errors(tmp_path: Path) -> None:
    (tmp_path / ".makegen.yml").write_text("paths: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError) as excinfo:
        load_config(tmp_path)
    assert isinstance(excinfo.value, ConfigurationError)
