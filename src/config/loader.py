"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ──────────────────────────────────────────
#
#   1. config/config.yaml : Static values checked into the deployment
#   2. .env file          : Local developer overrides (not committed)
#   3. Environment vars   : Set at deploy time
#
# The YAML file may be flat (``page_size: 20``) or grouped by section
# (``search: {page_size: 20}``); sections are flattened before the values
# reach Settings, so every key must still be a Settings field name.
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from src.config.settings import Settings
from src.utils.errors import ConfigurationError

DEFAULT_CONFIG_PATH = "config/config.yaml"


def load_yaml(path: str | Path = DEFAULT_CONFIG_PATH) -> dict[str, Any]:
    """Read the YAML file at *path*; a missing file yields ``{}``."""
    config_path = Path(path)
    if not config_path.exists():
        return {}
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Cannot parse {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_path} must contain a mapping at the top level")
    return _flatten_sections(data)


def load_settings(path: str | Path = DEFAULT_CONFIG_PATH, **overrides: Any) -> Settings:
    """Build the process-wide :class:`Settings`.

    Args:
        path: YAML configuration file.
        **overrides: Extra init values layered over the YAML file (still
            below environment variables).  Used by tests and the CLI.

    Returns:
        Fully validated settings.

    Raises:
        ConfigurationError: If a required field is missing or any value is
            invalid.  Callers treat this as fatal.
    """
    values = load_yaml(path)
    values.update(overrides)
    try:
        return Settings(**values)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from exc


def _flatten_sections(data: dict[str, Any]) -> dict[str, Any]:
    """Lift nested section mappings into one flat dict (inner keys win)."""
    flat: dict[str, Any] = {}
    nested: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            nested.update(_flatten_sections(value))
        else:
            flat[key] = value
    flat.update(nested)
    return flat
