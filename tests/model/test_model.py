# Copyright 2026 rsts Contributors
# SPDX-License-Identifier: Apache-2.0

"""High-level tests demonstrating how to construct the rsts translation model."""

import pytest
from pydantic import ValidationError

from rsts.model import (
    DeclarationSet,
    Field,
    Record,
    TypeReference,
    Union,
    Variant,
)


def test_simple_type_reference() -> None:
    """A single-segment type reference has no generic arguments by default."""
    ref = TypeReference(path=("String",))
    assert ref.path == ("String",)
    assert ref.generic_args == ()


def test_named_shorthand() -> None:
    """TypeReference.named builds the same value as the full constructor."""
    inner = TypeReference.named("i32")
    ref = TypeReference.named("Option", args=(inner,))
    assert ref == TypeReference(path=("Option",), generic_args=(TypeReference(path=("i32",)),))


def test_multi_segment_path_is_kept_verbatim() -> None:
    """Path segments are not collapsed or resolved."""
    ref = TypeReference.named("std", "string", "String")
    assert ref.path == ("std", "string", "String")


def test_list_input_is_coerced_to_tuple() -> None:
    """Lists passed for path and generic_args are stored as tuples."""
    ref = TypeReference(path=["Vec"], generic_args=[TypeReference.named("u8")])
    assert ref.path == ("Vec",)
    assert isinstance(ref.generic_args, tuple)


def test_empty_path_is_rejected() -> None:
    """A type reference needs at least one path segment."""
    with pytest.raises(ValidationError, match="at least one path segment"):
        TypeReference(path=())


def test_type_reference_is_immutable_and_hashable() -> None:
    """Type references compare by value and can be used as dict keys."""
    a = TypeReference.named("Vec", args=(TypeReference.named("u8"),))
    b = TypeReference.named("Vec", args=(TypeReference.named("u8"),))
    assert a == b
    assert len({a, b}) == 1
    with pytest.raises(ValidationError):
        a.path = ("Other",)  # type: ignore[misc]


def test_record_with_named_and_positional_fields() -> None:
    """Record fields carry an optional name and a type reference."""
    record = Record(
        name="User",
        fields=[
            Field(name="id", type=TypeReference.named("u64")),
            Field(name="email", type=TypeReference.named("String")),
        ],
    )
    wrapper = Record(name="Meters", fields=[Field(type=TypeReference.named("f64"))])

    assert [f.name for f in record.fields] == ["id", "email"]
    assert wrapper.fields[0].name is None


def test_union_variants() -> None:
    """Union variants carry zero or more payload types."""
    union = Union(
        name="Shape",
        variants=[
            Variant(name="Empty"),
            Variant(name="Circle", payload_types=[TypeReference.named("f64")]),
            Variant(name="Rect", payload_types=[TypeReference.named("f64"), TypeReference.named("f64")]),
        ],
    )
    assert [len(v.payload_types) for v in union.variants] == [0, 1, 2]


def test_default_collections_are_independent() -> None:
    """Default lists are not shared between instances."""
    first = Record(name="A")
    second = Record(name="B")
    first.fields.append(Field(name="x", type=TypeReference.named("u8")))
    assert second.fields == []


def test_declaration_set() -> None:
    """A DeclarationSet groups one file's unions and records under its display name."""
    decls = DeclarationSet(
        source_name="models.rs",
        unions=[Union(name="Status", variants=[Variant(name="Active")])],
        records=[Record(name="User", fields=[Field(name="id", type=TypeReference.named("u64"))])],
    )
    assert decls.source_name == "models.rs"
    assert decls.unions[0].name == "Status"
    assert decls.records[0].name == "User"
