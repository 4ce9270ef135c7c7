# Copyright 2026 rsts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the Rust recursive-descent parser."""

import pytest

from rsts.parser.lexer import LexerError
from rsts.parser.parser import ParseError, parse
from rsts.parser.syntax import (
    AngleBracketedArgs,
    ArrayType,
    BindingArg,
    ConstArg,
    ConstraintArg,
    EnumDecl,
    FnPointerType,
    ImplTraitType,
    InferType,
    LifetimeArg,
    MacroType,
    NeverType,
    ParenthesizedArgs,
    ParenType,
    PathType,
    PointerType,
    RawType,
    ReferenceType,
    SliceType,
    SourceFile,
    StructDecl,
    TraitObjectType,
    TupleType,
    TypeArg,
)

# ###############
# Test Helpers
# ###############


def _parse(source: str) -> SourceFile:
    """Parse a source string and return the SourceFile."""
    return parse(source)


def _struct(source: str) -> StructDecl:
    """Parse a source string holding exactly one struct."""
    items = _parse(source).items
    assert len(items) == 1
    assert isinstance(items[0], StructDecl)
    return items[0]


def _enum(source: str) -> EnumDecl:
    """Parse a source string holding exactly one enum."""
    items = _parse(source).items
    assert len(items) == 1
    assert isinstance(items[0], EnumDecl)
    return items[0]


def _field_type(type_source: str) -> RawType:
    """Parse the type of a single-field struct: struct S { f: <type_source> }."""
    return _struct(f"struct S {{ f: {type_source} }}").fields[0].type


def _segment_names(ty: RawType) -> list[str]:
    assert isinstance(ty, PathType)
    return [seg.ident for seg in ty.segments]


# ###############
# Empty Input
# ###############


class TestEmptyInput:
    def test_empty_string_returns_empty_source_file(self) -> None:
        assert _parse("").items == []

    def test_comment_only_returns_empty_source_file(self) -> None:
        assert _parse("// nothing\n/* here */").items == []

    def test_shebang_line_is_ignored(self) -> None:
        source = "#!/usr/bin/env rust\nfn main() {}\nstruct A { x: u8 }"
        assert [item.name for item in _parse(source).items] == ["A"]


# ###############
# Struct Declarations
# ###############


class TestStructDeclarations:
    def test_named_fields(self) -> None:
        struct = _struct("struct User { id: u64, name: String }")
        assert struct.name == "User"
        assert [f.name for f in struct.fields] == ["id", "name"]
        assert _segment_names(struct.fields[1].type) == ["String"]

    def test_trailing_comma(self) -> None:
        struct = _struct("struct A { x: i32, }")
        assert len(struct.fields) == 1

    def test_tuple_struct(self) -> None:
        struct = _struct("struct Meters(pub f64);")
        assert len(struct.fields) == 1
        assert struct.fields[0].name is None
        assert _segment_names(struct.fields[0].type) == ["f64"]

    def test_tuple_struct_multiple_fields(self) -> None:
        struct = _struct("struct Pair(i32, String);")
        assert [f.name for f in struct.fields] == [None, None]

    def test_unit_struct(self) -> None:
        assert _struct("struct Marker;").fields == []

    def test_field_visibility_and_attributes(self) -> None:
        source = """\
pub struct Account {
    /// Primary key.
    #[serde(rename = "accountId")]
    pub(crate) id: u64,
    pub(in crate::models) owner: String,
}"""
        struct = _struct(source)
        assert [f.name for f in struct.fields] == ["id", "owner"]

    def test_raw_identifier_field(self) -> None:
        struct = _struct("struct Token { r#type: String }")
        assert struct.fields[0].name == "type"

    def test_generic_params_are_skipped(self) -> None:
        struct = _struct("struct Page<'a, T: Clone + 'a, const N: usize = { 4 }> { items: Vec<T> }")
        assert struct.name == "Page"
        assert [f.name for f in struct.fields] == ["items"]

    def test_where_clause_is_skipped(self) -> None:
        struct = _struct("struct Wrapper<T> where T: Iterator<Item = u8> { inner: T }")
        assert [f.name for f in struct.fields] == ["inner"]

    def test_tuple_struct_with_where_clause(self) -> None:
        struct = _struct("struct Wrapper<T>(T) where T: Copy;")
        assert len(struct.fields) == 1

    def test_missing_colon_raises(self) -> None:
        with pytest.raises(ParseError, match="Expected ':'"):
            _parse("struct A { x i32 }")

    def test_unclosed_struct_raises(self) -> None:
        with pytest.raises(ParseError):
            _parse("struct A { x: i32,")


# ###############
# Derive Markers
# ###############


class TestDeriveMarkers:
    def test_derive_names_are_collected(self) -> None:
        struct = _struct("#[derive(Debug, Serialize, Deserialize)]\nstruct A { x: i32 }")
        assert struct.markers == ["Debug", "Serialize", "Deserialize"]

    def test_multiple_derive_attributes_accumulate(self) -> None:
        struct = _struct("#[derive(Debug)]\n#[derive(Serialize)]\nstruct A { x: i32 }")
        assert struct.markers == ["Debug", "Serialize"]

    def test_qualified_derive_uses_last_segment(self) -> None:
        struct = _struct("#[derive(serde::Serialize, ::serde::Deserialize)]\nstruct A { x: i32 }")
        assert struct.markers == ["Serialize", "Deserialize"]

    def test_non_derive_attributes_contribute_nothing(self) -> None:
        source = '#[serde(rename_all = "camelCase")]\n#[cfg(test)]\nstruct A { x: i32 }'
        assert _struct(source).markers == []

    def test_derive_with_trailing_comma(self) -> None:
        assert _struct("#[derive(Serialize,)]\nstruct A { x: i32 }").markers == ["Serialize"]

    def test_enum_markers_are_collected(self) -> None:
        assert _enum("#[derive(Clone)]\nenum E { A }").markers == ["Clone"]


# ###############
# Enum Declarations
# ###############


class TestEnumDeclarations:
    def test_unit_variants(self) -> None:
        enum = _enum("enum Color { Red, Green, Blue }")
        assert enum.name == "Color"
        assert [v.name for v in enum.variants] == ["Red", "Green", "Blue"]
        assert all(v.payload == [] for v in enum.variants)

    def test_tuple_variant_payload(self) -> None:
        enum = _enum("enum Shape { Circle(f64), Rect(f64, f64) }")
        assert len(enum.variants[0].payload) == 1
        assert len(enum.variants[1].payload) == 2

    def test_struct_variant_payload_keeps_types_in_order(self) -> None:
        enum = _enum("enum Event { Moved { x: i32, label: String } }")
        payload = enum.variants[0].payload
        assert [_segment_names(ty) for ty in payload] == [["i32"], ["String"]]

    def test_explicit_discriminants_are_skipped(self) -> None:
        enum = _enum("enum Level { Low = 1, High = (1 << 4) + 2 }")
        assert [v.name for v in enum.variants] == ["Low", "High"]

    def test_variant_attributes_are_skipped(self) -> None:
        enum = _enum('enum E {\n    #[serde(rename = "a")]\n    A,\n    B,\n}')
        assert [v.name for v in enum.variants] == ["A", "B"]

    def test_empty_enum(self) -> None:
        assert _enum("enum Void {}").variants == []

    def test_generic_enum(self) -> None:
        enum = _enum("enum Either<L, R> { Left(L), Right(R) }")
        assert [v.name for v in enum.variants] == ["Left", "Right"]


# ###############
# Skipped Items
# ###############


class TestSkippedItems:
    def test_functions_impls_and_modules_are_skipped(self) -> None:
        source = """\
#![allow(dead_code)]
use std::collections::{HashMap, HashSet};
extern crate serde;

const LIMIT: usize = 10;
static NAMES: [&str; 2] = ["a", "b"];
type Id = u64;

pub fn helper<T>(x: T) -> impl Fn() -> u8 where T: Copy {
    struct Hidden { a: u8 }
    || 1
}

impl User {
    fn new() -> Self { User { id: 0 } }
}

mod tests {
    enum Inner { A }
}

macro_rules! noop { ($x:expr) => {}; }
noop!(1);

struct User { id: u64 }
"""
        items = _parse(source).items
        assert [item.name for item in items] == ["User"]

    def test_const_with_struct_literal(self) -> None:
        source = "const ORIGIN: Point = Point { x: 0, y: 0 };\nstruct Point { x: i32, y: i32 }"
        assert [item.name for item in _parse(source).items] == ["Point"]

    def test_const_fn_is_skipped(self) -> None:
        source = "pub const fn zero() -> u8 { 0 }\nenum E { A }"
        assert [item.name for item in _parse(source).items] == ["E"]

    def test_trait_and_union_are_skipped(self) -> None:
        source = "trait Named { fn name(&self) -> String; }\nunion Bits { i: u32, f: f32 }\nenum E { A }"
        assert [item.name for item in _parse(source).items] == ["E"]

    def test_items_keep_source_order(self) -> None:
        source = "struct A { x: u8 }\nenum B { X }\nstruct C { y: u8 }"
        assert [item.name for item in _parse(source).items] == ["A", "B", "C"]

    def test_unbalanced_brace_raises(self) -> None:
        with pytest.raises(ParseError):
            _parse("fn main() { if true { }")

    def test_mismatched_delimiter_raises(self) -> None:
        with pytest.raises(ParseError, match="Mismatched"):
            _parse("fn main() { foo(] }")

    def test_stray_closing_brace_raises(self) -> None:
        with pytest.raises(ParseError, match="Unexpected '}'"):
            _parse("}")

    def test_lexer_errors_propagate(self) -> None:
        with pytest.raises(LexerError):
            _parse('fn main() { let s = "unterminated; }')


# ###############
# Path Types
# ###############


class TestPathTypes:
    def test_simple_name(self) -> None:
        ty = _field_type("i32")
        assert isinstance(ty, PathType)
        assert _segment_names(ty) == ["i32"]
        assert ty.segments[0].arguments is None

    def test_multi_segment_path(self) -> None:
        assert _segment_names(_field_type("std::collections::HashMap<String, u8>")) == [
            "std",
            "collections",
            "HashMap",
        ]

    def test_nested_generics(self) -> None:
        ty = _field_type("Vec<Option<i32>>")
        assert isinstance(ty, PathType)
        args = ty.segments[0].arguments
        assert isinstance(args, AngleBracketedArgs)
        inner = args.args[0]
        assert isinstance(inner, TypeArg)
        assert _segment_names(inner.type) == ["Option"]

    def test_leading_colon(self) -> None:
        ty = _field_type("::std::string::String")
        assert isinstance(ty, PathType)
        assert ty.leading_colon is True

    def test_crate_and_self_segments(self) -> None:
        assert _segment_names(_field_type("crate::models::Id")) == ["crate", "models", "Id"]
        assert _segment_names(_field_type("self::Id")) == ["self", "Id"]

    def test_qualified_self(self) -> None:
        ty = _field_type("<Vec<u8> as IntoIterator>::Item")
        assert isinstance(ty, PathType)
        assert ty.qself is not None
        assert _segment_names(ty) == ["IntoIterator", "Item"]

    def test_generic_args_on_inner_segment(self) -> None:
        ty = _field_type("Foo<u8>::Bar")
        assert isinstance(ty, PathType)
        assert ty.segments[0].arguments is not None
        assert ty.segments[1].arguments is None

    def test_turbofish(self) -> None:
        ty = _field_type("Vec::<u8>")
        assert isinstance(ty, PathType)
        assert isinstance(ty.segments[0].arguments, AngleBracketedArgs)

    def test_empty_angle_brackets_are_kept(self) -> None:
        ty = _field_type("Foo<>")
        assert isinstance(ty, PathType)
        args = ty.segments[0].arguments
        assert isinstance(args, AngleBracketedArgs)
        assert args.args == []

    def test_parenthesized_arguments(self) -> None:
        ty = _field_type("Box<Fn(u8, String) -> bool>")
        assert isinstance(ty, PathType)
        outer = ty.segments[0].arguments
        assert isinstance(outer, AngleBracketedArgs)
        fn_arg = outer.args[0]
        assert isinstance(fn_arg, TypeArg)
        assert isinstance(fn_arg.type, PathType)
        fn_args = fn_arg.type.segments[0].arguments
        assert isinstance(fn_args, ParenthesizedArgs)
        assert len(fn_args.inputs) == 2
        assert fn_args.output is not None


# ###############
# Generic Arguments
# ###############


class TestGenericArguments:
    def _args(self, type_source: str) -> list:
        ty = _field_type(type_source)
        assert isinstance(ty, PathType)
        args = ty.segments[-1].arguments
        assert isinstance(args, AngleBracketedArgs)
        return args.args

    def test_lifetime_argument(self) -> None:
        args = self._args("Cow<'static, str>")
        assert isinstance(args[0], LifetimeArg)
        assert args[0].name == "'static"
        assert isinstance(args[1], TypeArg)

    def test_const_argument(self) -> None:
        args = self._args("ArrayVec<u8, 16>")
        assert isinstance(args[1], ConstArg)
        assert args[1].expression == "16"

    def test_negative_const_argument(self) -> None:
        args = self._args("Offset<-3>")
        assert isinstance(args[0], ConstArg)
        assert args[0].expression == "-3"

    def test_block_const_argument(self) -> None:
        args = self._args("Buffer<{ N * 2 }>")
        assert isinstance(args[0], ConstArg)

    def test_binding_argument(self) -> None:
        args = self._args("Box<dyn Iterator<Item = u8>>")
        assert isinstance(args[0], TypeArg)
        trait_object = args[0].type
        assert isinstance(trait_object, TraitObjectType)
        iterator_args = trait_object.bounds[0].segments[0].arguments
        assert isinstance(iterator_args, AngleBracketedArgs)
        assert isinstance(iterator_args.args[0], BindingArg)
        assert iterator_args.args[0].name == "Item"

    def test_constraint_argument(self) -> None:
        args = self._args("Wrapper<Item: Display>")
        assert isinstance(args[0], ConstraintArg)
        assert args[0].name == "Item"


# ###############
# Non-Path Types
# ###############


class TestNonPathTypes:
    def test_reference(self) -> None:
        ty = _field_type("&'a mut str")
        assert isinstance(ty, ReferenceType)
        assert ty.lifetime == "'a"
        assert ty.mutable is True

    def test_double_reference(self) -> None:
        ty = _field_type("&&str")
        assert isinstance(ty, ReferenceType)
        assert isinstance(ty.elem, ReferenceType)

    def test_pointer(self) -> None:
        ty = _field_type("*const u8")
        assert isinstance(ty, PointerType)
        assert ty.mutable is False

    def test_unit(self) -> None:
        ty = _field_type("()")
        assert isinstance(ty, TupleType)
        assert ty.elems == []

    def test_tuple(self) -> None:
        ty = _field_type("(i32, String)")
        assert isinstance(ty, TupleType)
        assert len(ty.elems) == 2

    def test_one_tuple(self) -> None:
        ty = _field_type("(i32,)")
        assert isinstance(ty, TupleType)
        assert len(ty.elems) == 1

    def test_paren(self) -> None:
        assert isinstance(_field_type("(i32)"), ParenType)

    def test_array(self) -> None:
        ty = _field_type("[u8; 32]")
        assert isinstance(ty, ArrayType)
        assert ty.length == "32"

    def test_slice(self) -> None:
        ty = _field_type("Box<[u8]>")
        assert isinstance(ty.segments[0].arguments.args[0].type, SliceType)  # type: ignore[union-attr]

    def test_fn_pointer(self) -> None:
        ty = _field_type('unsafe extern "C" fn(a: i32, ...) -> i32')
        assert isinstance(ty, FnPointerType)
        assert len(ty.inputs) == 1
        assert ty.output is not None

    def test_higher_ranked_fn_pointer(self) -> None:
        assert isinstance(_field_type("for<'a> fn(&'a str)"), FnPointerType)

    def test_dyn_trait_object_with_lifetime(self) -> None:
        ty = _field_type("Box<dyn Error + Send + Sync + 'static>")
        assert isinstance(ty, PathType)
        inner = ty.segments[0].arguments.args[0].type  # type: ignore[union-attr]
        assert isinstance(inner, TraitObjectType)
        assert [b.segments[0].ident for b in inner.bounds] == ["Error", "Send", "Sync"]

    def test_fn_trait_output_stops_before_plus(self) -> None:
        ty = _field_type("Box<dyn Fn(u8) -> u8 + Send>")
        inner = ty.segments[0].arguments.args[0].type  # type: ignore[union-attr]
        assert isinstance(inner, TraitObjectType)
        assert len(inner.bounds) == 2

    def test_impl_trait(self) -> None:
        assert isinstance(_field_type("impl Iterator<Item = u8>"), ImplTraitType)

    def test_never(self) -> None:
        assert isinstance(_field_type("!"), NeverType)

    def test_infer(self) -> None:
        assert isinstance(_field_type("_"), InferType)

    def test_macro(self) -> None:
        ty = _field_type("my_type!(u8)")
        assert isinstance(ty, MacroType)
        assert ty.name == "my_type"

    def test_invalid_type_raises(self) -> None:
        with pytest.raises(ParseError, match="Expected a type"):
            _field_type("=")
