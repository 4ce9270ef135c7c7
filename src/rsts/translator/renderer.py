# Copyright 2026 rsts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Rendering of type references as TypeScript type expressions.

Rendering is total: shapes with no TypeScript counterpart produce a
placeholder (``TODO1`` / ``TODO2``) that keeps the output well-formed and
easy to grep for manual follow-up.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from rsts.model.types import TypeReference

# ###############
# Public Interface
# ###############

DEFAULT_TIMESTAMP_ALIAS = "DateTimeUtc"

NUMERIC_PRIMITIVES: frozenset[str] = frozenset(
    {"i8", "i16", "i32", "i64", "u8", "u16", "u32", "u64", "f32", "f64"}
)

# Multi-segment path without generic arguments, e.g. ``chrono::NaiveDate``.
UNRESOLVED_PATH_PLACEHOLDER = "TODO1"

# Generic type with no special-cased rendering, e.g. ``Box<T>``.
UNSUPPORTED_GENERIC_PLACEHOLDER = "TODO2"


@dataclass(frozen=True)
class RenderOptions:
    """Settings that influence rendering.

    Attributes:
        timestamp_alias: TypeScript alias emitted for ``DateTime<Utc>``.
        primitives: Extra single-segment Rust names mapped to TypeScript names,
            consulted after the built-in numeric and string mappings.
    """

    timestamp_alias: str = DEFAULT_TIMESTAMP_ALIAS
    primitives: dict[str, str] = field(default_factory=dict)


def render_type(type_ref: TypeReference, options: RenderOptions | None = None) -> str:
    """Render a TypeReference as a TypeScript type expression.

    Rules, first match wins:

    1. ``Option<T>`` -> ``T | null``
    2. ``Vec<T>`` -> ``T[]``, parenthesizing ``T`` when it is compound
    3. ``DateTime<Utc>`` -> the timestamp alias
    4. ``HashMap<K, V>`` -> ``Record<K, V>``
    5. single-segment name without arguments -> ``number``, ``string``, a
       configured primitive, or the name unchanged
    6. multi-segment path without arguments -> ``TODO1``
    7. anything else -> ``TODO2``

    Args:
        type_ref: The type to render.
        options: Rendering settings; defaults reproduce the stock output.

    Returns:
        The TypeScript type expression.
    """
    return _TypeRenderer(options or RenderOptions()).render(type_ref)


def timestamp_alias_declaration(options: RenderOptions | None = None) -> str:
    """Return the alias line that declares the timestamp type as a string."""
    alias = (options or RenderOptions()).timestamp_alias
    return f"export type {alias} = string;\n"


# ################
# Implementation
# ################


def _is_wrapper(type_ref: TypeReference, name: str, arity: int) -> bool:
    return type_ref.path == (name,) and len(type_ref.generic_args) == arity


def _is_optional(type_ref: TypeReference) -> bool:
    return _is_wrapper(type_ref, "Option", 1)


def _is_sequence(type_ref: TypeReference) -> bool:
    return _is_wrapper(type_ref, "Vec", 1)


def _is_utc_timestamp(type_ref: TypeReference) -> bool:
    if not _is_wrapper(type_ref, "DateTime", 1):
        return False
    marker = type_ref.generic_args[0]
    return marker.path == ("Utc",) and not marker.generic_args


def _is_map(type_ref: TypeReference) -> bool:
    return _is_wrapper(type_ref, "HashMap", 2)


def _is_plain_name(type_ref: TypeReference) -> bool:
    return not type_ref.generic_args and len(type_ref.path) == 1


def _is_plain_path(type_ref: TypeReference) -> bool:
    return not type_ref.generic_args


class _TypeRenderer:
    """Applies the ordered rendering rules recursively."""

    def __init__(self, options: RenderOptions) -> None:
        self._options = options
        # Order matters: wrappers carry generic arguments and must be matched
        # before the argument-free rules and the TODO2 fallback.
        self._rules: list[tuple[Callable[[TypeReference], bool], Callable[[TypeReference], str]]] = [
            (_is_optional, self._render_optional),
            (_is_sequence, self._render_sequence),
            (_is_utc_timestamp, self._render_timestamp),
            (_is_map, self._render_map),
            (_is_plain_name, self._render_name),
            (_is_plain_path, lambda _: UNRESOLVED_PATH_PLACEHOLDER),
        ]

    def render(self, type_ref: TypeReference) -> str:
        for matches, render in self._rules:
            if matches(type_ref):
                return render(type_ref)
        return UNSUPPORTED_GENERIC_PLACEHOLDER

    def _render_optional(self, type_ref: TypeReference) -> str:
        return f"{self.render(type_ref.generic_args[0])} | null"

    def _render_sequence(self, type_ref: TypeReference) -> str:
        inner = self.render(type_ref.generic_args[0])
        if " " in inner:
            inner = f"({inner})"
        return f"{inner}[]"

    def _render_timestamp(self, type_ref: TypeReference) -> str:
        return self._options.timestamp_alias

    def _render_map(self, type_ref: TypeReference) -> str:
        key, value = type_ref.generic_args
        return f"Record<{self.render(key)}, {self.render(value)}>"

    def _render_name(self, type_ref: TypeReference) -> str:
        name = type_ref.path[0]
        if name in NUMERIC_PRIMITIVES:
            return "number"
        if name == "String":
            return "string"
        return self._options.primitives.get(name, name)
