"""
Options: Project-level option lookup for seedstream.

This module provides:

- find_config_file: Walk up directories to locate .seedstream.toml
- deep_merge: Recursively merge two dicts (override wins for leaf values)
- parse_bool: Parse boolean option values given as strings
- Options: Resolved option values with load/get interface
- debug_enabled: The debug option as read by the seed functions

Options are read from the ``[options]`` table of `.seedstream.toml` with
optional `.seedstream.local.toml` overrides. The resolution order is:

    defaults → project file → local file → SEEDSTREAM_* environment variables

Example:
    >>> options = Options.load()
    >>> options.get("debug")
    False
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".seedstream.toml"
LOCAL_CONFIG_FILENAME = ".seedstream.local.toml"
ENV_PREFIX = "SEEDSTREAM_"

DEFAULTS: dict[str, Any] = {
    "debug": False,
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


# ---------------------------------------------------------------------------
# Utility helpers
# ---------------------------------------------------------------------------


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """
    Walk up from *start_dir* to find `.seedstream.toml`.

    Args:
        start_dir: Directory to start searching from. Defaults to ``Path.cwd()``.

    Returns:
        Path to the config file, or ``None`` if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate

        parent = current.parent
        if parent == current:
            return None
        current = parent


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep-merge two dicts. *override* wins for leaf values.

    Neither input is mutated; a new dict is returned.
    """
    merged: dict[str, Any] = {}

    for key in base.keys() | override.keys():
        if key in base and key in override:
            base_val = base[key]
            over_val = override[key]
            if isinstance(base_val, dict) and isinstance(over_val, dict):
                merged[key] = deep_merge(base_val, over_val)
            else:
                merged[key] = over_val
        elif key in base:
            merged[key] = base[key]
        else:
            merged[key] = override[key]

    return merged


def parse_bool(value: str) -> bool:
    """
    Parse a boolean given as text (``1/0``, ``true/false``, ``yes/no``, ``on/off``).

    Raises:
        ValueError: If *value* is not a recognised boolean spelling.
    """
    text = value.strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"Cannot interpret {value!r} as a boolean")


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Options:
    """
    Resolved seedstream options.

    Attributes:
        values: Option values after all layers have been merged.
        source: The project config file the values were read from, if any.
    """

    values: dict[str, Any] = field(default_factory=lambda: dict(DEFAULTS))
    source: Path | None = None

    @property
    def debug(self) -> bool:
        """Whether seed generation emits debug progress lines."""
        return bool(self.get("debug", False))

    def get(self, name: str, default: Any = None) -> Any:
        """Return the option *name*, or *default* if unset."""
        return self.values.get(name, default)

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        local_overrides: dict[str, Any] | None = None,
        environ: Mapping[str, str] | None = None,
        source: Path | None = None,
    ) -> Options:
        """
        Build options from parsed TOML data.

        Args:
            data: Parsed project config file.
            local_overrides: Parsed local override file.
            environ: Environment mapping (default: ``os.environ``).
            source: Path of the project config file.

        Raises:
            ValueError: If an environment override cannot be parsed.
        """
        merged = deep_merge(DEFAULTS, data.get("options", {}))
        if local_overrides:
            merged = deep_merge(merged, local_overrides.get("options", {}))

        environ = os.environ if environ is None else environ
        for key, raw in environ.items():
            if not key.startswith(ENV_PREFIX):
                continue
            name = key[len(ENV_PREFIX):].lower()
            if isinstance(DEFAULTS.get(name), bool):
                merged[name] = parse_bool(raw)
            else:
                merged[name] = raw

        return cls(values=merged, source=source)

    @classmethod
    def load(
        cls,
        start_dir: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> Options:
        """
        Find and load options.

        A missing `.seedstream.toml` is not an error: defaults and
        environment overrides still apply.
        """
        config_path = find_config_file(start_dir)
        if config_path is None:
            return cls.from_dict({}, environ=environ)

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        local_overrides: dict[str, Any] = {}
        local_path = config_path.parent / LOCAL_CONFIG_FILENAME
        if local_path.is_file():
            with open(local_path, "rb") as f:
                local_overrides = tomllib.load(f)

        return cls.from_dict(
            data, local_overrides=local_overrides, environ=environ, source=config_path
        )


def debug_enabled() -> bool:
    """
    Return the debug option for the current directory.

    The option only controls logging, so an unreadable config file or a
    bad environment value is logged and treated as ``False``.
    """
    try:
        return Options.load().debug
    except (OSError, ValueError) as e:
        logger.warning(f"Ignoring seedstream options: {e}")
        return False
