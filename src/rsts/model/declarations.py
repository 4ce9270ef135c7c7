# Copyright 2026 rsts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Record and union declarations ready for rendering."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic import Field as _Field

from rsts.model.types import TypeReference

# ###############
# Public Interface
# ###############


class Field(BaseModel):
    """A record field. ``name`` is None for positional (tuple struct) fields."""

    name: str | None = None
    type: TypeReference


class Record(BaseModel):
    """A product type translated from a Rust ``struct``."""

    name: str
    fields: list[Field] = _Field(default_factory=list)


class Variant(BaseModel):
    """A union variant: no payload (unit), one payload, or a positional tuple of payloads."""

    name: str
    payload_types: list[TypeReference] = _Field(default_factory=list)


class Union(BaseModel):
    """A sum type translated from a Rust ``enum``."""

    name: str
    variants: list[Variant] = _Field(default_factory=list)


class DeclarationSet(BaseModel):
    """All translatable declarations of one source file, in source order.

    Attributes:
        source_name: Display label for the file, used in the output header comment.
        unions: Translated enums.
        records: Translated structs that passed the marker filter.
    """

    source_name: str
    unions: list[Union] = _Field(default_factory=list)
    records: list[Record] = _Field(default_factory=list)
