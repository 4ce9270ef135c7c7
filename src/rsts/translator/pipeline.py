# Copyright 2026 rsts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Per-file translation workflow: parse, filter, build, render.

Each file is handled independently; nothing is shared between files. Enums
are always translated, structs only when they carry a recognized derive
marker. Field-level problems become warnings; unreadable or unparsable
files raise :class:`TranslationError`.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from rsts.model.declarations import DeclarationSet
from rsts.parser.lexer import LexerError
from rsts.parser.parser import ParseError, parse
from rsts.parser.syntax import EnumDecl, StructDecl
from rsts.translator.declarations import (
    TranslationError,
    TranslationWarning,
    build_record,
    build_union,
    render_record,
    render_union,
)
from rsts.translator.filter import DEFAULT_MARKERS, is_eligible
from rsts.translator.renderer import RenderOptions

# ###############
# Public Interface
# ###############


@dataclass
class TranslationResult:
    """Outcome of translating one source file.

    Attributes:
        declarations: The unions and records selected for output.
        warnings: Members skipped because their types could not be normalized.
    """

    declarations: DeclarationSet
    warnings: list[TranslationWarning] = field(default_factory=list)


def translate_source(
    source: str,
    source_name: str,
    *,
    markers: Iterable[str] = DEFAULT_MARKERS,
) -> TranslationResult:
    """Translate the struct and enum declarations of one Rust source text.

    Args:
        source: The full text of a .rs file.
        source_name: Display label for the file.
        markers: Derive names that make a struct eligible for translation.

    Returns:
        The selected declarations in source order, with any warnings.

    Raises:
        TranslationError: If the source cannot be tokenized or parsed.
    """
    try:
        source_file = parse(source)
    except (LexerError, ParseError) as exc:
        raise TranslationError(f"Unable to parse '{source_name}': {exc}") from exc

    recognized = frozenset(markers)
    result = TranslationResult(declarations=DeclarationSet(source_name=source_name))
    for item in source_file.items:
        if isinstance(item, EnumDecl):
            union, warnings = build_union(item)
            result.warnings.extend(warnings)
            if union is not None:
                result.declarations.unions.append(union)
        elif isinstance(item, StructDecl) and is_eligible(item.markers, recognized):
            record, warnings = build_record(item)
            result.warnings.extend(warnings)
            result.declarations.records.append(record)
    return result


def translate_file(path: Path, *, markers: Iterable[str] = DEFAULT_MARKERS) -> TranslationResult:
    """Read and translate one Rust source file, labelled by its file name.

    Raises:
        TranslationError: If the file cannot be read or parsed.
    """
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TranslationError(f"Unable to read '{path}': {exc}") from exc
    return translate_source(source, path.name, markers=markers)


def render_declaration_set(declarations: DeclarationSet, options: RenderOptions | None = None) -> str:
    """Render a file's declarations: a name comment, then all unions, then all records.

    Raises:
        TranslationError: If a record has no translatable fields.
    """
    parts = [f"// {declarations.source_name}\n"]
    parts.extend(render_union(union, options) for union in declarations.unions)
    parts.extend(render_record(record, options) for record in declarations.records)
    return "".join(parts)
