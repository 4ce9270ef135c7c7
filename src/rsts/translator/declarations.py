# Copyright 2026 rsts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Translation of struct and enum declarations into TypeScript declarations.

Building turns raw parser declarations into the translation model, field by
field; a field whose type cannot be normalized is dropped with a warning
while the rest of its record is kept. Rendering turns the model into text.
"""

from __future__ import annotations

from dataclasses import dataclass

from rsts.model.declarations import Field, Record, Union, Variant
from rsts.parser.syntax import EnumDecl, StructDecl
from rsts.translator.normalizer import NormalizationError, normalize_type
from rsts.translator.renderer import RenderOptions, render_type

# ###############
# Public Interface
# ###############


class TranslationError(Exception):
    """Raised when a declaration or file cannot be translated at all.

    Covers unreadable or unparsable input files and records with no
    translatable fields.
    """


@dataclass(frozen=True)
class TranslationWarning:
    """A declaration member left out of the output because its type was not normalizable.

    Attributes:
        declaration: Name of the enclosing struct or enum.
        member: Field name, positional index, or variant name.
        error: The normalization failure.
    """

    declaration: str
    member: str
    error: NormalizationError

    @property
    def message(self) -> str:
        """Human-readable description of the warning."""
        return f"{self.declaration}.{self.member}: {self.error.kind.value} ({self.error.message})"


def build_record(decl: StructDecl) -> tuple[Record, list[TranslationWarning]]:
    """Normalize the fields of a struct declaration.

    Args:
        decl: The parsed struct.

    Returns:
        The record holding every normalizable field in order, and one warning
        per skipped field.
    """
    record = Record(name=decl.name)
    warnings: list[TranslationWarning] = []
    for index, field_decl in enumerate(decl.fields):
        ty = normalize_type(field_decl.type)
        if isinstance(ty, NormalizationError):
            member = field_decl.name if field_decl.name is not None else str(index)
            warnings.append(TranslationWarning(declaration=decl.name, member=member, error=ty))
            continue
        record.fields.append(Field(name=field_decl.name, type=ty))
    return record, warnings


def build_union(decl: EnumDecl) -> tuple[Union | None, list[TranslationWarning]]:
    """Normalize the variants of an enum declaration.

    A union cannot lose a variant without changing its meaning, so when any
    payload type fails to normalize the whole union is dropped.

    Args:
        decl: The parsed enum.

    Returns:
        The union, or None if it was dropped, and the warnings explaining why.
    """
    union = Union(name=decl.name)
    warnings: list[TranslationWarning] = []
    for variant_decl in decl.variants:
        variant = Variant(name=variant_decl.name)
        for ty in (normalize_type(raw) for raw in variant_decl.payload):
            if isinstance(ty, NormalizationError):
                warnings.append(TranslationWarning(declaration=decl.name, member=variant_decl.name, error=ty))
            else:
                variant.payload_types.append(ty)
        union.variants.append(variant)
    if warnings:
        return None, warnings
    return union, warnings


def render_record(record: Record, options: RenderOptions | None = None) -> str:
    """Render a record as a TypeScript declaration.

    - One positional field: ``export type Name = T;``
    - Several positional fields: ``export type Name = [T, U];``
    - Named fields: ``export interface Name { field: T; ... }``

    Raises:
        TranslationError: If the record has no fields, or mixes named and
            positional fields.
    """
    if not record.fields:
        raise TranslationError(f"Struct '{record.name}' has no translatable fields; empty structs are not supported")

    rendered = [render_type(f.type, options) for f in record.fields]
    positional = [f.name is None for f in record.fields]
    if all(positional):
        if len(rendered) == 1:
            return f"export type {record.name} = {rendered[0]};\n"
        return f"export type {record.name} = [{', '.join(rendered)}];\n"
    if any(positional):
        raise TranslationError(f"Struct '{record.name}' mixes named and positional fields")

    lines = [f"export interface {record.name} {{\n"]
    for f, ty in zip(record.fields, rendered):
        lines.append(f"  {f.name}: {ty};\n")
    lines.append("}\n")
    return "".join(lines)


def render_union(union: Union, options: RenderOptions | None = None) -> str:
    """Render a union as a TypeScript discriminated union type alias.

    Unit variants become string literals, single-payload variants
    ``{ Name: T }`` and multi-payload variants ``{ Name: [T, U] }``, matching
    serde's externally tagged enum representation.
    """
    if not union.variants:
        return f"export type {union.name} = never;\n"

    members: list[str] = []
    for variant in union.variants:
        payload = [render_type(ty, options) for ty in variant.payload_types]
        if not payload:
            members.append(f'  "{variant.name}"')
        elif len(payload) == 1:
            members.append(f"  {{ {variant.name}: {payload[0]} }}")
        else:
            members.append(f"  {{ {variant.name}: [{', '.join(payload)}] }}")
    return f"export type {union.name} =\n" + " |\n".join(members) + ";\n"
