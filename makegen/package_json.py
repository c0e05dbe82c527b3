"""Read the fields makegen needs from a package's package.json."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict

from .errors import ConfigurationError, MissingMainEntry, MissingPackageRoot


def load_package_json(root: Path) -> Dict[str, object]:
    """Return the parsed package.json at ``root``.

    Unlike a best-effort read, every failure here is fatal: the file must exist,
    parse as JSON and hold an object.
    """
    package_json = root / "package.json"
    try:
        text = package_json.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise MissingPackageRoot(f"No 'package.json' found in {root}", path=package_json) from exc
    except OSError as exc:
        raise MissingPackageRoot(f"Cannot read {package_json}: {exc}", path=package_json) from exc
    except UnicodeDecodeError as exc:
        raise ConfigurationError(f"Cannot decode {package_json}: {exc}", path=package_json) from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid JSON in {package_json}: {exc}", path=package_json) from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"{package_json} must contain a JSON object", path=package_json)
    return data


def read_package_main(root: Path) -> str:
    """Return the package's declared 'main' entry."""
    data = load_package_json(root)
    main = data.get("main")
    if not isinstance(main, str) or not main.strip():
        package_json = root / "package.json"
        raise MissingMainEntry(
            f"Package {package_json} does not define 'main'; bailing out.", path=package_json
        )
    return main


__all__ = ["load_package_json", "read_package_main"]
