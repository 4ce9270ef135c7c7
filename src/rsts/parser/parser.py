# Copyright 2026 rsts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for Rust source files.

Converts a token stream produced by the lexer into a SourceFile holding the
top-level ``struct`` and ``enum`` items. Every other item is skipped by
balanced-delimiter scanning, so a file only has to be lexically sound and
well-bracketed outside of struct and enum bodies.
"""

from rsts.parser.lexer import Token, TokenType, tokenize
from rsts.parser.syntax import (
    AngleBracketedArgs,
    ArrayType,
    BindingArg,
    ConstArg,
    ConstraintArg,
    EnumDecl,
    FieldDecl,
    FnPointerType,
    GenericArgument,
    ImplTraitType,
    InferType,
    Item,
    LifetimeArg,
    MacroType,
    NeverType,
    ParenthesizedArgs,
    ParenType,
    PathSegment,
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
    VariantDecl,
)

# ###############
# Public Interface
# ###############


class ParseError(Exception):
    """Raised when the parser encounters a syntactically invalid construct.

    Attributes:
        line: 1-based line number of the error.
        column: 1-based column number of the error.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column


def parse(source: str) -> SourceFile:
    """Parse Rust source text into its top-level struct and enum declarations.

    Args:
        source: The full text of a .rs file.

    Returns:
        A SourceFile listing struct and enum items in source order.

    Raises:
        LexerError: If the source contains invalid characters or unterminated literals.
        ParseError: If the source has unbalanced delimiters or a malformed
            struct or enum item.
    """
    tokens = tokenize(source)
    return _Parser(tokens).parse()


# ################
# Implementation
# ################

_OPENERS: dict[TokenType, TokenType] = {
    TokenType.LBRACE: TokenType.RBRACE,
    TokenType.LPAREN: TokenType.RPAREN,
    TokenType.LBRACKET: TokenType.RBRACKET,
}

_CLOSERS: frozenset[TokenType] = frozenset(_OPENERS.values())

# Tokens that can name a path segment.
_SEGMENT_TYPES: frozenset[TokenType] = frozenset(
    {
        TokenType.IDENTIFIER,
        TokenType.SELF,
        TokenType.SELF_TYPE,
        TokenType.SUPER,
        TokenType.CRATE,
    }
)

_RESTRICTED_VISIBILITY: frozenset[TokenType] = frozenset(
    {
        TokenType.CRATE,
        TokenType.SELF,
        TokenType.SUPER,
        TokenType.IN,
    }
)

# Items whose body never terminates them; they always end with ';'.
_SEMICOLON_ITEMS: frozenset[TokenType] = frozenset(
    {
        TokenType.CONST,
        TokenType.STATIC,
        TokenType.TYPE,
        TokenType.USE,
    }
)

_FUNCTION_QUALIFIERS: frozenset[str] = frozenset({"fn", "unsafe", "extern", "async"})


class _Parser:
    """Recursive-descent parser for Rust token streams."""

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0

    def parse(self) -> SourceFile:
        """Parse the full token stream and return a SourceFile."""
        result = SourceFile()
        while not self._at_end():
            item = self._parse_item()
            if item is not None:
                result.items.append(item)
        return result

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        """Return the current (un-consumed) token."""
        return self._tokens[self._pos]

    def _peek(self, offset: int = 0) -> Token:
        """Return the token *offset* positions ahead, or the EOF token past the end."""
        return self._tokens[min(self._pos + offset, len(self._tokens) - 1)]

    def _peek_type(self, offset: int = 0) -> TokenType:
        """Return the type of the token *offset* positions ahead."""
        return self._peek(offset).type

    def _at_end(self) -> bool:
        """Return True if the current token is the EOF token."""
        return self._peek_type() == TokenType.EOF

    def _advance(self) -> Token:
        """Consume and return the current token, stopping at EOF."""
        tok = self._tokens[self._pos]
        if self._pos < len(self._tokens) - 1:
            self._pos += 1
        return tok

    def _expect(self, *types: TokenType) -> Token:
        """Consume the current token if it matches any of the given types.

        Raises ParseError if the current token does not match.
        """
        tok = self._current()
        if tok.type not in types:
            expected = ", ".join(repr(t.value) for t in types)
            raise ParseError(
                f"Expected {expected}, got {tok.value or 'end of input'!r}",
                tok.line,
                tok.column,
            )
        return self._advance()

    def _check(self, *types: TokenType) -> bool:
        """Return True if the current token matches any of the given types (without
        consuming).
        """
        return self._peek_type() in types

    def _accept(self, token_type: TokenType) -> bool:
        """Consume the current token if it has the given type and report whether it did."""
        if self._check(token_type):
            self._advance()
            return True
        return False

    # ------------------------------------------------------------------
    # Delimiter skipping
    # ------------------------------------------------------------------

    def _skip_group(self) -> str:
        """Consume a balanced (), [] or {} group starting at the current token.

        Returns the source text of the tokens inside the group, space separated.
        """
        open_tok = self._current()
        if open_tok.type not in _OPENERS:
            raise ParseError(f"Expected a delimiter, got {open_tok.value!r}", open_tok.line, open_tok.column)
        stack = [_OPENERS[self._advance().type]]
        inner: list[str] = []
        while stack:
            tok = self._current()
            if tok.type == TokenType.EOF:
                raise ParseError(f"Unclosed {open_tok.value!r}", open_tok.line, open_tok.column)
            if tok.type in _OPENERS:
                stack.append(_OPENERS[tok.type])
            elif tok.type in _CLOSERS:
                if tok.type != stack[-1]:
                    raise ParseError(f"Mismatched closing delimiter {tok.value!r}", tok.line, tok.column)
                stack.pop()
            self._advance()
            if stack:
                inner.append(tok.value)
        return " ".join(inner)

    def _skip_generic_params(self) -> None:
        """Consume a ``<...>`` generic parameter list if one is present."""
        if not self._check(TokenType.LANGLE):
            return
        start = self._current()
        depth = 0
        while True:
            tok = self._current()
            if tok.type == TokenType.EOF:
                raise ParseError("Unclosed generic parameter list", start.line, start.column)
            if tok.type in _OPENERS:
                self._skip_group()
                continue
            if tok.type in _CLOSERS:
                raise ParseError(f"Unexpected {tok.value!r} in generic parameter list", tok.line, tok.column)
            self._advance()
            if tok.type == TokenType.LANGLE:
                depth += 1
            elif tok.type == TokenType.RANGLE:
                depth -= 1
                if depth == 0:
                    return

    def _skip_where_clause(self) -> None:
        """Consume a ``where`` clause up to (not including) the body or terminator."""
        if not self._accept(TokenType.WHERE):
            return
        depth = 0
        while True:
            tok = self._current()
            if tok.type == TokenType.EOF:
                raise ParseError("Unexpected end of input in where clause", tok.line, tok.column)
            if depth == 0 and tok.type in (TokenType.LBRACE, TokenType.SEMICOLON):
                return
            if tok.type in _OPENERS:
                self._skip_group()
                continue
            if tok.type in _CLOSERS:
                raise ParseError(f"Unexpected {tok.value!r} in where clause", tok.line, tok.column)
            if tok.type == TokenType.LANGLE:
                depth += 1
            elif tok.type == TokenType.RANGLE:
                depth -= 1
            self._advance()

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def _parse_item(self) -> Item | None:
        """Parse one top-level item. Returns None for items that are skipped."""
        if self._accept(TokenType.SEMICOLON):
            return None
        if self._check(TokenType.POUND) and self._peek_type(1) == TokenType.BANG:
            self._advance()  # #
            self._advance()  # !
            self._skip_group()
            return None

        markers: list[str] = []
        while self._check(TokenType.POUND):
            markers.extend(self._parse_outer_attribute())
        self._skip_visibility()

        if self._check(TokenType.STRUCT):
            return self._parse_struct(markers)
        if self._check(TokenType.ENUM):
            return self._parse_enum(markers)
        self._skip_item()
        return None

    def _skip_item(self) -> None:
        """Skip an item that is not a struct or enum.

        The item ends at a ';' outside any delimiter group, or at the first
        top-level brace group for block items such as ``fn``, ``impl`` or ``mod``.
        """
        start = self._current()
        if start.type in _CLOSERS:
            raise ParseError(f"Unexpected {start.value!r} at top level", start.line, start.column)
        until_semicolon = start.type in _SEMICOLON_ITEMS and not (
            start.type == TokenType.CONST and self._peek(1).value in _FUNCTION_QUALIFIERS
        )
        while True:
            tok = self._current()
            if tok.type == TokenType.EOF:
                raise ParseError(
                    f"Unexpected end of input in item starting with {start.value!r}",
                    start.line,
                    start.column,
                )
            if tok.type == TokenType.SEMICOLON:
                self._advance()
                return
            if tok.type in _CLOSERS:
                raise ParseError(f"Unexpected {tok.value!r}", tok.line, tok.column)
            if tok.type in _OPENERS:
                self._skip_group()
                if tok.type == TokenType.LBRACE and not until_semicolon:
                    return
            else:
                self._advance()

    def _parse_outer_attribute(self) -> list[str]:
        """Parse ``#[...]`` and return the names it derives, if it is a derive attribute."""
        self._expect(TokenType.POUND)
        if not (
            self._peek_type(1) == TokenType.IDENTIFIER
            and self._peek(1).value == "derive"
            and self._peek_type(2) == TokenType.LPAREN
        ):
            self._skip_group()
            return []
        self._expect(TokenType.LBRACKET)
        self._advance()  # derive
        self._expect(TokenType.LPAREN)
        markers: list[str] = []
        while not self._check(TokenType.RPAREN):
            self._accept(TokenType.PATH_SEP)
            name = self._expect(*_SEGMENT_TYPES).value
            while self._accept(TokenType.PATH_SEP):
                name = self._expect(*_SEGMENT_TYPES).value
            markers.append(name)
            if not self._accept(TokenType.COMMA):
                break
        self._expect(TokenType.RPAREN)
        self._expect(TokenType.RBRACKET)
        return markers

    def _skip_attributes(self) -> None:
        """Skip any outer attributes on a field or variant."""
        while self._accept(TokenType.POUND):
            self._skip_group()

    def _skip_visibility(self) -> None:
        """Consume ``pub``, ``pub(crate)``, ``pub(in path)`` and similar."""
        if not self._accept(TokenType.PUB):
            return
        if self._check(TokenType.LPAREN) and self._peek_type(1) in _RESTRICTED_VISIBILITY:
            self._skip_group()

    # ------------------------------------------------------------------
    # Struct declarations
    # ------------------------------------------------------------------

    def _parse_struct(self, markers: list[str]) -> StructDecl:
        """Parse: struct <Name> [<generics>] ( {fields} | (fields) [where]; | ; )"""
        self._expect(TokenType.STRUCT)
        name_tok = self._expect(TokenType.IDENTIFIER)
        self._skip_generic_params()
        struct = StructDecl(name=name_tok.value, markers=markers)
        if self._check(TokenType.LPAREN):
            struct.fields = self._parse_tuple_fields()
            self._skip_where_clause()
            self._expect(TokenType.SEMICOLON)
            return struct
        self._skip_where_clause()
        if not self._accept(TokenType.SEMICOLON):
            struct.fields = self._parse_named_fields()
        return struct

    def _parse_named_fields(self) -> list[FieldDecl]:
        """Parse: { [attrs] [vis] name: Type, ... }"""
        self._expect(TokenType.LBRACE)
        fields: list[FieldDecl] = []
        while not self._check(TokenType.RBRACE):
            self._skip_attributes()
            self._skip_visibility()
            name_tok = self._expect(TokenType.IDENTIFIER)
            self._expect(TokenType.COLON)
            fields.append(FieldDecl(name=name_tok.value, type=self._parse_type()))
            if not self._accept(TokenType.COMMA):
                break
        self._expect(TokenType.RBRACE)
        return fields

    def _parse_tuple_fields(self) -> list[FieldDecl]:
        """Parse: ( [attrs] [vis] Type, ... )"""
        self._expect(TokenType.LPAREN)
        fields: list[FieldDecl] = []
        while not self._check(TokenType.RPAREN):
            self._skip_attributes()
            self._skip_visibility()
            fields.append(FieldDecl(type=self._parse_type()))
            if not self._accept(TokenType.COMMA):
                break
        self._expect(TokenType.RPAREN)
        return fields

    # ------------------------------------------------------------------
    # Enum declarations
    # ------------------------------------------------------------------

    def _parse_enum(self, markers: list[str]) -> EnumDecl:
        """Parse: enum <Name> [<generics>] [where] { variant, ... }"""
        self._expect(TokenType.ENUM)
        name_tok = self._expect(TokenType.IDENTIFIER)
        self._skip_generic_params()
        self._skip_where_clause()
        enum = EnumDecl(name=name_tok.value, markers=markers)
        self._expect(TokenType.LBRACE)
        while not self._check(TokenType.RBRACE):
            enum.variants.append(self._parse_variant())
            if not self._accept(TokenType.COMMA):
                break
        self._expect(TokenType.RBRACE)
        return enum

    def _parse_variant(self) -> VariantDecl:
        """Parse: [attrs] Name [(types) | {fields}] [= discriminant]

        Struct-like variants contribute their field types in order; the field
        names are not kept.
        """
        self._skip_attributes()
        self._skip_visibility()
        name_tok = self._expect(TokenType.IDENTIFIER)
        variant = VariantDecl(name=name_tok.value)
        if self._check(TokenType.LPAREN):
            variant.payload = [f.type for f in self._parse_tuple_fields()]
        elif self._check(TokenType.LBRACE):
            variant.payload = [f.type for f in self._parse_named_fields()]
        if self._accept(TokenType.EQUALS):
            self._skip_discriminant()
        return variant

    def _skip_discriminant(self) -> None:
        """Consume an explicit discriminant expression up to the next ',' or '}'."""
        while not self._check(TokenType.COMMA, TokenType.RBRACE):
            tok = self._current()
            if tok.type == TokenType.EOF:
                raise ParseError("Unexpected end of input in enum discriminant", tok.line, tok.column)
            if tok.type in _OPENERS:
                self._skip_group()
            elif tok.type in _CLOSERS:
                raise ParseError(f"Unexpected {tok.value!r} in enum discriminant", tok.line, tok.column)
            else:
                self._advance()

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    def _parse_type(self, allow_plus: bool = True) -> RawType:
        """Parse a single type expression.

        With *allow_plus* False a trailing ``+ Bound`` is left unconsumed, as in the
        return type of ``Fn(A) -> B + Send``.
        """
        tok = self._current()
        if tok.type == TokenType.AMPERSAND:
            self._advance()
            lifetime = self._advance().value if self._check(TokenType.LIFETIME) else None
            mutable = self._accept(TokenType.MUT)
            return ReferenceType(lifetime=lifetime, mutable=mutable, elem=self._parse_type(allow_plus=False))
        if tok.type == TokenType.STAR:
            self._advance()
            mutable = self._expect(TokenType.CONST, TokenType.MUT).type == TokenType.MUT
            return PointerType(mutable=mutable, elem=self._parse_type(allow_plus=False))
        if tok.type == TokenType.LPAREN:
            return self._parse_tuple_or_paren_type()
        if tok.type == TokenType.LBRACKET:
            return self._parse_array_or_slice_type()
        if tok.type == TokenType.BANG:
            self._advance()
            return NeverType()
        if tok.type == TokenType.IDENTIFIER and tok.value == "_":
            self._advance()
            return InferType()
        if tok.type == TokenType.FOR:
            self._advance()
            self._skip_generic_params()
            if self._check(TokenType.FN, TokenType.UNSAFE, TokenType.EXTERN):
                return self._parse_fn_pointer_type()
            return TraitObjectType(dyn=False, bounds=self._parse_bounds())
        if tok.type in (TokenType.FN, TokenType.UNSAFE, TokenType.EXTERN):
            return self._parse_fn_pointer_type()
        if tok.type == TokenType.DYN:
            self._advance()
            return TraitObjectType(dyn=True, bounds=self._parse_bounds())
        if tok.type == TokenType.IMPL:
            self._advance()
            return ImplTraitType(bounds=self._parse_bounds())
        if tok.type in _SEGMENT_TYPES or tok.type in (TokenType.PATH_SEP, TokenType.LANGLE):
            path = self._parse_path_type()
            if self._check(TokenType.BANG) and path.qself is None:
                self._advance()
                self._skip_group()
                return MacroType(name="::".join(s.ident for s in path.segments))
            if allow_plus and self._check(TokenType.PLUS):
                bounds = [path]
                while self._accept(TokenType.PLUS):
                    bounds.extend(self._parse_bounds())
                return TraitObjectType(dyn=False, bounds=bounds)
            return path
        raise ParseError(f"Expected a type, got {tok.value or 'end of input'!r}", tok.line, tok.column)

    def _parse_tuple_or_paren_type(self) -> RawType:
        """Parse ``()``, ``(T)``, ``(T,)`` or ``(A, B, ...)``."""
        self._expect(TokenType.LPAREN)
        if self._accept(TokenType.RPAREN):
            return TupleType()
        first = self._parse_type()
        if self._accept(TokenType.RPAREN):
            return ParenType(elem=first)
        elems = [first]
        while self._accept(TokenType.COMMA):
            if self._check(TokenType.RPAREN):
                break
            elems.append(self._parse_type())
        self._expect(TokenType.RPAREN)
        return TupleType(elems=elems)

    def _parse_array_or_slice_type(self) -> RawType:
        """Parse ``[T]`` or ``[T; N]``."""
        self._expect(TokenType.LBRACKET)
        elem = self._parse_type()
        if self._accept(TokenType.RBRACKET):
            return SliceType(elem=elem)
        self._expect(TokenType.SEMICOLON)
        parts: list[str] = []
        while not self._check(TokenType.RBRACKET):
            tok = self._current()
            if tok.type == TokenType.EOF:
                raise ParseError("Unexpected end of input in array length", tok.line, tok.column)
            if tok.type in _OPENERS:
                parts.append(tok.value + self._skip_group() + _OPENERS[tok.type].value)
            elif tok.type in _CLOSERS:
                raise ParseError(f"Unexpected {tok.value!r} in array length", tok.line, tok.column)
            else:
                parts.append(self._advance().value)
        self._expect(TokenType.RBRACKET)
        return ArrayType(elem=elem, length=" ".join(parts))

    def _parse_fn_pointer_type(self) -> FnPointerType:
        """Parse: [unsafe] [extern ["abi"]] fn(params) [-> Type]"""
        self._accept(TokenType.UNSAFE)
        if self._accept(TokenType.EXTERN):
            self._accept(TokenType.STRING)
        self._expect(TokenType.FN)
        self._expect(TokenType.LPAREN)
        inputs: list[RawType] = []
        while not self._check(TokenType.RPAREN):
            self._skip_attributes()
            if self._check(TokenType.DOT):
                # C variadic: ...
                while self._accept(TokenType.DOT):
                    pass
            else:
                if self._check(TokenType.IDENTIFIER) and self._peek_type(1) == TokenType.COLON:
                    self._advance()  # parameter name
                    self._advance()  # :
                inputs.append(self._parse_type())
            if not self._accept(TokenType.COMMA):
                break
        self._expect(TokenType.RPAREN)
        output = self._parse_type(allow_plus=False) if self._accept(TokenType.ARROW) else None
        return FnPointerType(inputs=inputs, output=output)

    def _parse_bounds(self) -> list[PathType]:
        """Parse ``Bound + Bound + 'a`` and return the trait bounds; lifetimes are dropped."""
        bounds: list[PathType] = []
        while True:
            if self._check(TokenType.LIFETIME):
                self._advance()
            elif self._accept(TokenType.LPAREN):
                bounds.extend(self._parse_bounds())
                self._expect(TokenType.RPAREN)
            else:
                self._accept(TokenType.QUESTION)
                self._accept(TokenType.TILDE)
                self._accept(TokenType.CONST)
                if self._accept(TokenType.FOR):
                    self._skip_generic_params()
                bounds.append(self._parse_path_type())
            if not self._check(TokenType.PLUS):
                return bounds
            self._advance()

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def _parse_path_type(self) -> PathType:
        """Parse a possibly qualified path: ``[::]a::b<T>``, ``<T as Trait>::Item``."""
        if self._accept(TokenType.LANGLE):
            qself = self._parse_type()
            segments: list[PathSegment] = []
            if self._accept(TokenType.AS):
                segments = self._parse_path_type().segments
            self._expect(TokenType.RANGLE)
            self._expect(TokenType.PATH_SEP)
            segments.append(self._parse_path_segment())
            while self._check(TokenType.PATH_SEP) and self._peek_type(1) in _SEGMENT_TYPES:
                self._advance()
                segments.append(self._parse_path_segment())
            return PathType(qself=qself, segments=segments)

        leading_colon = self._accept(TokenType.PATH_SEP)
        segments = [self._parse_path_segment()]
        while self._check(TokenType.PATH_SEP) and self._peek_type(1) in _SEGMENT_TYPES:
            self._advance()
            segments.append(self._parse_path_segment())
        return PathType(leading_colon=leading_colon, segments=segments)

    def _parse_path_segment(self) -> PathSegment:
        """Parse an identifier with an optional ``<...>``, ``::<...>`` or ``(...)`` argument list."""
        ident = self._expect(*_SEGMENT_TYPES).value
        if self._check(TokenType.PATH_SEP) and self._peek_type(1) == TokenType.LANGLE:
            self._advance()  # turbofish ::
        if self._check(TokenType.LANGLE):
            return PathSegment(ident=ident, arguments=self._parse_angle_bracketed_args())
        if self._check(TokenType.LPAREN):
            return PathSegment(ident=ident, arguments=self._parse_parenthesized_args())
        return PathSegment(ident=ident)

    def _parse_angle_bracketed_args(self) -> AngleBracketedArgs:
        """Parse: < arg, arg, ... >"""
        self._expect(TokenType.LANGLE)
        args: list[GenericArgument] = []
        while not self._check(TokenType.RANGLE):
            args.append(self._parse_generic_argument())
            if not self._accept(TokenType.COMMA):
                break
        self._expect(TokenType.RANGLE)
        return AngleBracketedArgs(args=args)

    def _parse_generic_argument(self) -> GenericArgument:
        """Parse one generic argument: a lifetime, const, binding, constraint, or type."""
        tok = self._current()
        if tok.type == TokenType.LIFETIME:
            self._advance()
            return LifetimeArg(name=tok.value)
        if tok.type in (TokenType.NUMBER, TokenType.STRING, TokenType.CHAR):
            self._advance()
            return ConstArg(expression=tok.value)
        if tok.type == TokenType.MINUS:
            self._advance()
            return ConstArg(expression="-" + self._expect(TokenType.NUMBER).value)
        if tok.type == TokenType.LBRACE:
            return ConstArg(expression="{ " + self._skip_group() + " }")
        if tok.type == TokenType.IDENTIFIER and self._peek_type(1) == TokenType.EQUALS:
            self._advance()  # name
            self._advance()  # =
            return BindingArg(name=tok.value, type=self._parse_type())
        if tok.type == TokenType.IDENTIFIER and self._peek_type(1) == TokenType.COLON:
            self._advance()  # name
            self._advance()  # :
            return ConstraintArg(name=tok.value, bounds=self._parse_bounds())
        return TypeArg(type=self._parse_type())

    def _parse_parenthesized_args(self) -> ParenthesizedArgs:
        """Parse: ( Type, ... ) [-> Type]"""
        self._expect(TokenType.LPAREN)
        inputs: list[RawType] = []
        while not self._check(TokenType.RPAREN):
            inputs.append(self._parse_type())
            if not self._accept(TokenType.COMMA):
                break
        self._expect(TokenType.RPAREN)
        output = self._parse_type(allow_plus=False) if self._accept(TokenType.ARROW) else None
        return ParenthesizedArgs(inputs=inputs, output=output)
