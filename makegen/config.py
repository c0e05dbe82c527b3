"""Setup options and the optional .makegen.yml package configuration."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import yaml

from .errors import ConfigurationError, MissingOption
from .models import EntryPointSpec

CONFIG_FILENAME = ".makegen.yml"

_REQUIRED_OPTIONS = ("working_pkg_root", "my_name", "my_version")


class ConfigError(ConfigurationError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class SetupOptions:
    """Validated input for a single project setup run.

    Instances are immutable and shared read-only with every collaborator.
    """

    working_pkg_root: Path
    my_name: str
    my_version: str
    src_path: str = "src"
    dist_path: str = "dist"
    doc_build_path: str = "doc"
    doc_src_path: str = "doc"
    qa_path: str = "qa"
    test_staging_path: str = "test-staging"
    is_executable: bool = False
    no_build: bool = False
    no_doc: bool = False
    no_lint: bool = False
    no_test: bool = False
    with_libraries: Tuple[EntryPointSpec, ...] = ()
    with_executables: Tuple[EntryPointSpec, ...] = ()

    @property
    def package_json_path(self) -> Path:
        return self.working_pkg_root / "package.json"

    @property
    def source_root(self) -> Path:
        return self.working_pkg_root / self.src_path

    @property
    def make_dir(self) -> Path:
        return self.working_pkg_root / "make"


_OPTION_NAMES = frozenset(f.name for f in fields(SetupOptions))


def build_setup_options(**values: Any) -> SetupOptions:
    """Validate raw option values and return :class:`SetupOptions`.

    Mandatory options are checked here, before any filesystem work happens.
    ``None`` values fall back to the field default. Entry point lists accept
    ``"<path>:<name>"`` strings or :class:`EntryPointSpec` instances.
    """
    unknown = sorted(set(values) - _OPTION_NAMES)
    if unknown:
        raise ConfigurationError(f"Unknown setup option(s): {', '.join(unknown)}")

    cleaned = {key: value for key, value in values.items() if value is not None}
    for option in _REQUIRED_OPTIONS:
        value = cleaned.get(option)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise MissingOption(option)

    cleaned["working_pkg_root"] = Path(cleaned["working_pkg_root"]).expanduser()
    cleaned["my_name"] = str(cleaned["my_name"])
    cleaned["my_version"] = str(cleaned["my_version"])
    for key in ("with_libraries", "with_executables"):
        if key in cleaned:
            cleaned[key] = tuple(_coerce_entries(cleaned[key]))
    for key in ("is_executable", "no_build", "no_doc", "no_lint", "no_test"):
        if key in cleaned:
            flag = _as_bool(cleaned[key])
            if flag is None:
                raise ConfigurationError(
                    f"Option '{key}' must be a boolean, got {cleaned[key]!r}"
                )
            cleaned[key] = flag

    return SetupOptions(**cleaned)


def _coerce_entries(values: Iterable[Any]) -> List[EntryPointSpec]:
    if isinstance(values, (str, EntryPointSpec)):
        values = [values]
    entries: List[EntryPointSpec] = []
    for value in values:
        if isinstance(value, EntryPointSpec):
            entries.append(value)
        else:
            entries.append(EntryPointSpec.parse(str(value)))
    return entries


@dataclass
class MakegenConfig:
    """Package-level defaults read from .makegen.yml.

    ``None`` means "not set in the file" so explicit caller values can win.
    """

    root: Path
    src_path: Optional[str] = None
    dist_path: Optional[str] = None
    doc_build_path: Optional[str] = None
    doc_src_path: Optional[str] = None
    qa_path: Optional[str] = None
    test_staging_path: Optional[str] = None
    is_executable: Optional[bool] = None
    no_build: Optional[bool] = None
    no_doc: Optional[bool] = None
    no_lint: Optional[bool] = None
    no_test: Optional[bool] = None
    with_libraries: List[str] = field(default_factory=list)
    with_executables: List[str] = field(default_factory=list)

    def option_values(self) -> Dict[str, Any]:
        """Return the values set in the file, keyed by setup option name."""
        values: Dict[str, Any] = {}
        for f in fields(self):
            if f.name == "root":
                continue
            value = getattr(self, f.name)
            if value is None or value == []:
                continue
            values[f.name] = value
        return values


_PATH_KEYS = {
    "src": "src_path",
    "dist": "dist_path",
    "doc_build": "doc_build_path",
    "doc_src": "doc_src_path",
    "qa": "qa_path",
    "test_staging": "test_staging_path",
}

_FEATURE_KEYS = {
    "build": "no_build",
    "doc": "no_doc",
    "lint": "no_lint",
    "test": "no_test",
}


def load_config(config_path: Path) -> MakegenConfig:
    """Load configuration from disk; a missing file yields empty defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return MakegenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root", path=config_file)

    config = MakegenConfig(root=root)

    paths = _as_dict(data.get("paths"))
    for key, attr in _PATH_KEYS.items():
        setattr(config, attr, _as_str(paths.get(key)))

    config.is_executable = _as_bool(data.get("executable"))

    # Features are expressed positively in the file and stored as "no_*" flags.
    features = _as_dict(data.get("features"))
    for key, attr in _FEATURE_KEYS.items():
        enabled = _as_bool(features.get(key))
        setattr(config, attr, None if enabled is None else not enabled)

    entries = _as_dict(data.get("entries"))
    config.with_libraries = _as_str_list(entries.get("libraries"))
    config.with_executables = _as_str_list(entries.get("executables"))

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = Path(config_path).expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}", path=path) from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, str)]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "MakegenConfig",
    "SetupOptions",
    "build_setup_options",
    "load_config",
]
