# Copyright 2026 rsts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the rsts translator configuration file.

Example::

    markers: [Serialize, Deserialize, TS]
    timestamp-alias: Timestamp
    primitives:
      bool: boolean
      usize: number
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from rsts.translator.filter import DEFAULT_MARKERS
from rsts.translator.renderer import DEFAULT_TIMESTAMP_ALIAS, RenderOptions

# ###############
# Public Interface
# ###############


class ConfigError(Exception):
    """Raised when a translator configuration file is invalid or cannot be loaded."""


@dataclass
class TranslatorConfig:
    """Settings for a translation run.

    Attributes:
        markers: Derive names that make a struct eligible for translation.
        timestamp_alias: TypeScript alias name used for ``DateTime<Utc>``.
        primitives: Extra Rust type names mapped to TypeScript type names.
    """

    markers: list[str] = field(default_factory=lambda: sorted(DEFAULT_MARKERS))
    timestamp_alias: str = DEFAULT_TIMESTAMP_ALIAS
    primitives: dict[str, str] = field(default_factory=dict)

    def render_options(self) -> RenderOptions:
        """Return the rendering settings derived from this configuration."""
        return RenderOptions(timestamp_alias=self.timestamp_alias, primitives=dict(self.primitives))


def load_config(path: Path) -> TranslatorConfig:
    """Load and parse a translator configuration file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        A TranslatorConfig populated from the file; omitted keys keep their defaults.

    Raises:
        ConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    return _parse_config(text, source_label=str(path))


# ################
# Implementation
# ################

_KNOWN_KEYS = frozenset({"markers", "timestamp-alias", "primitives"})


def _parse_config(text: str, source_label: str = "<string>") -> TranslatorConfig:
    """Parse configuration YAML text into a TranslatorConfig.

    An empty document yields the default configuration.

    Raises:
        ConfigError: If the YAML is invalid, has unknown keys, or has values of the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return TranslatorConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: config must be a YAML mapping")

    unknown = sorted(str(key) for key in data if key not in _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"{source_label}: unknown key(s): {', '.join(unknown)}")

    config = TranslatorConfig()
    if "markers" in data:
        config.markers = _require_string_list(data["markers"], "markers", source_label)
    if "timestamp-alias" in data:
        alias = data["timestamp-alias"]
        if not isinstance(alias, str) or not alias.isidentifier():
            raise ConfigError(f"{source_label}: 'timestamp-alias' must be an identifier")
        config.timestamp_alias = alias
    if "primitives" in data:
        config.primitives = _require_string_mapping(data["primitives"], "primitives", source_label)
    return config


def _require_string_list(value: object, key: str, source_label: str) -> list[str]:
    """Validate that a value is a list of strings."""
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{source_label}: '{key}' must be a list of strings")
    return list(value)


def _require_string_mapping(value: object, key: str, source_label: str) -> dict[str, str]:
    """Validate that a value is a mapping from strings to strings."""
    if not isinstance(value, dict):
        raise ConfigError(f"{source_label}: '{key}' must be a YAML mapping")
    mapping: dict[str, str] = {}
    for name, target in value.items():
        if not isinstance(name, str) or not isinstance(target, str):
            raise ConfigError(f"{source_label}: '{key}' entries must map names to strings")
        mapping[name] = target
    return mapping
