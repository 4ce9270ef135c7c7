# Copyright 2026 rsts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Canonical type reference for the rsts translation model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

# ###############
# Public Interface
# ###############


class TypeReference(BaseModel):
    """A normalized type: a path plus the generic arguments of its last segment.

    ``Vec<Option<i32>>`` is ``TypeReference(path=("Vec",), generic_args=(
    TypeReference(path=("Option",), generic_args=(TypeReference(path=("i32",)),)),))``.
    Path segments are kept verbatim; ``std::string::String`` stays three segments.
    Instances are immutable and compare by value.
    """

    model_config = ConfigDict(frozen=True)

    path: tuple[str, ...]
    generic_args: tuple[TypeReference, ...] = ()

    @field_validator("path")
    @classmethod
    def _path_not_empty(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("a type reference needs at least one path segment")
        return value

    @classmethod
    def named(cls, *path: str, args: tuple[TypeReference, ...] = ()) -> TypeReference:
        """Shorthand constructor: ``TypeReference.named("HashMap", args=(k, v))``."""
        return cls(path=path, generic_args=args)


TypeReference.model_rebuild()
