# Copyright 2026 rsts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Translation of Rust type declarations into TypeScript: normalize, render, assemble."""

from rsts.translator.declarations import (
    TranslationError,
    TranslationWarning,
    build_record,
    build_union,
    render_record,
    render_union,
)
from rsts.translator.filter import DEFAULT_MARKERS, is_eligible
from rsts.translator.normalizer import NormalizationError, NormalizationErrorKind, normalize_type
from rsts.translator.pipeline import TranslationResult, render_declaration_set, translate_file, translate_source
from rsts.translator.renderer import RenderOptions, render_type, timestamp_alias_declaration

__all__ = [
    "normalize_type",
    "NormalizationError",
    "NormalizationErrorKind",
    "render_type",
    "RenderOptions",
    "timestamp_alias_declaration",
    "build_record",
    "build_union",
    "render_record",
    "render_union",
    "TranslationError",
    "TranslationWarning",
    "is_eligible",
    "DEFAULT_MARKERS",
    "translate_source",
    "translate_file",
    "render_declaration_set",
    "TranslationResult",
]
