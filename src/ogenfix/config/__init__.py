"""Configuration files and utilities for ogenfix."""

import os
from pathlib import Path

import yaml

builtin_config_dir = Path(__file__).parent


def get_config_path(config_spec: str | Path) -> Path:
    """Get the path to a config file.

    Looks the spec up as given, with a `.yaml` suffix, and inside the builtin config directory.
    """
    config_spec = Path(config_spec)
    if config_spec.suffix != ".yaml":
        config_spec = config_spec.with_suffix(".yaml")
    candidates = [
        Path(config_spec),
        Path(os.getenv("OGENFIX_CONFIG_DIR", ".")) / config_spec,
        builtin_config_dir / config_spec,
    ]
    for candidate in candidates:
        if candidate.exists():
            return candidate

    raise FileNotFoundError(f"Could not find config file for {config_spec} (tried: {candidates})")


def _key_value_spec_to_nested_dict(config_spec: str) -> dict:
    """Interpret key-value specs like `patchers.fixnull.enabled=false` as nested dicts.

    The value is parsed with YAML, so `false`, `[a.go, b.go]` etc. keep their types.
    """
    key, _, value = config_spec.partition("=")
    if not key:
        raise ValueError(f"Invalid config spec {config_spec!r}: empty key")
    try:
        value = yaml.safe_load(value)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid config spec {config_spec!r}: {e}") from e
    keys = key.split(".")
    result: dict = {}
    current = result
    for k in keys[:-1]:
        current[k] = {}
        current = current[k]
    current[keys[-1]] = value
    return result


def get_config_from_spec(config_spec: str | Path) -> dict:
    """Get a config from a config spec."""
    if isinstance(config_spec, str) and "=" in config_spec:
        return _key_value_spec_to_nested_dict(config_spec)
    path = get_config_path(config_spec)
    return yaml.safe_load(path.read_text()) or {}
