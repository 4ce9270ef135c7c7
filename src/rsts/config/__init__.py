# Copyright 2026 rsts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Translator configuration for rsts."""

from rsts.config.loader import ConfigError, TranslatorConfig, load_config

__all__ = [
    "ConfigError",
    "TranslatorConfig",
    "load_config",
]
