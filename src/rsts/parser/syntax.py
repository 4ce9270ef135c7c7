# Copyright 2026 rsts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Raw syntax nodes produced by the Rust parser.

These nodes mirror the surface syntax of Rust type expressions closely enough
for the normalizer to decide which shapes it can represent. They carry no
semantic interpretation.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############

# -------- Generic arguments --------


class TypeArg(BaseModel):
    """A type in a generic argument list, e.g. the ``T`` in ``Vec<T>``."""

    kind: Literal["type"] = "type"
    type: RawType


class LifetimeArg(BaseModel):
    """A lifetime in a generic argument list, e.g. ``'a``."""

    kind: Literal["lifetime"] = "lifetime"
    name: str


class ConstArg(BaseModel):
    """A const expression in a generic argument list, e.g. ``3`` or ``{ N + 1 }``."""

    kind: Literal["const"] = "const"
    expression: str


class BindingArg(BaseModel):
    """An associated type binding, e.g. ``Item = T``."""

    kind: Literal["binding"] = "binding"
    name: str
    type: RawType


class ConstraintArg(BaseModel):
    """An associated type constraint, e.g. ``Item: Display``."""

    kind: Literal["constraint"] = "constraint"
    name: str
    bounds: list[PathType] = _Field(default_factory=list)


GenericArgument = Annotated[
    TypeArg | LifetimeArg | ConstArg | BindingArg | ConstraintArg,
    _Field(discriminator="kind"),
]


class AngleBracketedArgs(BaseModel):
    """Generic arguments in angle brackets: ``<A, B>`` or turbofish ``::<A, B>``."""

    kind: Literal["angle_bracketed"] = "angle_bracketed"
    args: list[GenericArgument] = _Field(default_factory=list)


class ParenthesizedArgs(BaseModel):
    """Function-call style arguments on a path segment, e.g. ``Fn(A, B) -> C``."""

    kind: Literal["parenthesized"] = "parenthesized"
    inputs: list[RawType] = _Field(default_factory=list)
    output: RawType | None = None


PathArguments = Annotated[AngleBracketedArgs | ParenthesizedArgs, _Field(discriminator="kind")]


class PathSegment(BaseModel):
    """One ``::``-separated segment of a path, with its optional argument list."""

    ident: str
    arguments: PathArguments | None = None


# -------- Types --------


class PathType(BaseModel):
    """A path type such as ``Vec<u8>``, ``::std::string::String`` or ``<T as Trait>::Item``.

    Attributes:
        qself: The self type of a qualified path (``<T as Trait>::Item``), if any.
        leading_colon: True when the path is root-qualified (``::std::...``).
        segments: The path segments in source order.
    """

    kind: Literal["path"] = "path"
    qself: RawType | None = None
    leading_colon: bool = False
    segments: list[PathSegment] = _Field(default_factory=list)


class ReferenceType(BaseModel):
    """A borrowed reference: ``&'a mut T``."""

    kind: Literal["reference"] = "reference"
    lifetime: str | None = None
    mutable: bool = False
    elem: RawType


class PointerType(BaseModel):
    """A raw pointer: ``*const T`` or ``*mut T``."""

    kind: Literal["pointer"] = "pointer"
    mutable: bool = False
    elem: RawType


class TupleType(BaseModel):
    """A tuple type; the unit type ``()`` has no elements."""

    kind: Literal["tuple"] = "tuple"
    elems: list[RawType] = _Field(default_factory=list)


class ParenType(BaseModel):
    """A parenthesized type: ``(T)``."""

    kind: Literal["paren"] = "paren"
    elem: RawType


class ArrayType(BaseModel):
    """A fixed-size array: ``[T; N]``."""

    kind: Literal["array"] = "array"
    elem: RawType
    length: str


class SliceType(BaseModel):
    """A dynamically sized slice: ``[T]``."""

    kind: Literal["slice"] = "slice"
    elem: RawType


class FnPointerType(BaseModel):
    """A function pointer: ``fn(A, B) -> C``."""

    kind: Literal["fn_pointer"] = "fn_pointer"
    inputs: list[RawType] = _Field(default_factory=list)
    output: RawType | None = None


class TraitObjectType(BaseModel):
    """A trait object: ``dyn Trait + Send`` (or the bare pre-2021 form)."""

    kind: Literal["trait_object"] = "trait_object"
    dyn: bool = True
    bounds: list[PathType] = _Field(default_factory=list)


class ImplTraitType(BaseModel):
    """An anonymous ``impl Trait`` type."""

    kind: Literal["impl_trait"] = "impl_trait"
    bounds: list[PathType] = _Field(default_factory=list)


class NeverType(BaseModel):
    """The never type ``!``."""

    kind: Literal["never"] = "never"


class InferType(BaseModel):
    """The inferred type ``_``."""

    kind: Literal["infer"] = "infer"


class MacroType(BaseModel):
    """A macro invocation in type position, e.g. ``ty!(...)``."""

    kind: Literal["macro"] = "macro"
    name: str


# A raw type expression exactly as written in the source.
RawType = Annotated[
    PathType
    | ReferenceType
    | PointerType
    | TupleType
    | ParenType
    | ArrayType
    | SliceType
    | FnPointerType
    | TraitObjectType
    | ImplTraitType
    | NeverType
    | InferType
    | MacroType,
    _Field(discriminator="kind"),
]


# -------- Declarations --------


class FieldDecl(BaseModel):
    """A struct field; ``name`` is None for positional (tuple struct) fields."""

    name: str | None = None
    type: RawType


class StructDecl(BaseModel):
    """A top-level ``struct`` item.

    Attributes:
        name: The struct identifier.
        markers: Names listed in the item's ``#[derive(...)]`` attributes.
        fields: Fields in declaration order. Empty for unit structs.
    """

    kind: Literal["struct"] = "struct"
    name: str
    markers: list[str] = _Field(default_factory=list)
    fields: list[FieldDecl] = _Field(default_factory=list)


class VariantDecl(BaseModel):
    """An enum variant with its payload types in declaration order."""

    name: str
    payload: list[RawType] = _Field(default_factory=list)


class EnumDecl(BaseModel):
    """A top-level ``enum`` item."""

    kind: Literal["enum"] = "enum"
    name: str
    markers: list[str] = _Field(default_factory=list)
    variants: list[VariantDecl] = _Field(default_factory=list)


Item = Annotated[StructDecl | EnumDecl, _Field(discriminator="kind")]


class SourceFile(BaseModel):
    """The struct and enum items of one parsed source file, in source order."""

    items: list[Item] = _Field(default_factory=list)


# Resolve forward references for the mutually recursive node types.
TypeArg.model_rebuild()
BindingArg.model_rebuild()
ConstraintArg.model_rebuild()
AngleBracketedArgs.model_rebuild()
ParenthesizedArgs.model_rebuild()
PathSegment.model_rebuild()
PathType.model_rebuild()
ReferenceType.model_rebuild()
PointerType.model_rebuild()
TupleType.model_rebuild()
ParenType.model_rebuild()
ArrayType.model_rebuild()
SliceType.model_rebuild()
FnPointerType.model_rebuild()
TraitObjectType.model_rebuild()
ImplTraitType.model_rebuild()
FieldDecl.model_rebuild()
VariantDecl.model_rebuild()
