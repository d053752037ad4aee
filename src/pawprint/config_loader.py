"""Load PawprintConfig from pawprint.yaml / pawprint.toml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

import yaml

from pawprint._errors import ConfigError
from pawprint.config import CopyEntry, PawprintConfig

_KNOWN_KEYS = frozenset({
    "output",
    "base_url",
    "routes_dir",
    "sitemap",
    "expose",
    "crawl",
    "copy",
})

_COPY_KEYS = frozenset({"src", "dest", "fail_if_missing", "ignore_dot_files", "excludes"})


def load_config(root: Path, **overrides: object) -> PawprintConfig:
    """Load PawprintConfig from root, optionally merging a config file.

    Looks for pawprint.yaml, pawprint.yml, or pawprint.toml in root. If
    found, loads and merges with overrides. Overrides take precedence.

    Raises:
        ConfigError: If the file cannot be parsed or holds unknown keys.

    """
    file_config = _read_pawprint_config(root)
    merged = {**file_config, **overrides}
    if "output" in merged and not isinstance(merged["output"], Path):
        merged["output"] = Path(str(merged["output"]))
    if "copy" in merged:
        merged["copy"] = _parse_copy(merged["copy"])
    try:
        return PawprintConfig(root=root, **merged)
    except TypeError as exc:
        msg = f"Invalid pawprint configuration: {exc}"
        raise ConfigError(msg) from exc


def _read_pawprint_config(root: Path) -> dict[str, Any]:
    """Read pawprint config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("pawprint.yaml", "pawprint.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "pawprint.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Failed to read {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path}: expected a mapping at top level"
        raise ConfigError(msg)
    return _flatten_pawprint_section(data, path)


def _parse_toml(path: Path) -> dict[str, Any]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"Failed to read {path}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_pawprint_section(data, path)


def _flatten_pawprint_section(data: dict[str, Any], path: Path) -> dict[str, Any]:
    """Extract pawprint.* keys into top-level config."""
    result: dict[str, Any] = {}
    section = data.get("pawprint")
    if isinstance(section, dict):
        result.update(section)
    for k, v in data.items():
        if k != "pawprint":
            result[k] = v

    unknown = sorted(set(result) - _KNOWN_KEYS)
    if unknown:
        msg = f"{path}: unknown configuration keys: {', '.join(unknown)}"
        raise ConfigError(msg)
    return result


def _parse_copy(value: object) -> tuple[CopyEntry, ...]:
    """Normalise the ``copy`` setting into CopyEntry records.

    Accepts CopyEntry instances, bare path strings, or mappings with
    CopyEntry field names.

    """
    if not isinstance(value, (list, tuple)):
        msg = f"'copy' must be a list, got {type(value).__name__}"
        raise ConfigError(msg)

    entries: list[CopyEntry] = []
    for item in value:
        if isinstance(item, CopyEntry):
            entries.append(item)
        elif isinstance(item, (str, Path)):
            entries.append(CopyEntry(src=Path(item)))
        elif isinstance(item, dict):
            unknown = sorted(set(item) - _COPY_KEYS)
            if unknown or "src" not in item:
                msg = f"Invalid copy entry {item!r}: needs 'src', unknown keys {unknown}"
                raise ConfigError(msg)
            entries.append(CopyEntry(**item))
        else:
            msg = f"Invalid copy entry {item!r}"
            raise ConfigError(msg)
    return tuple(entries)
