# Copyright 2026 rsts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexer, parser, and raw syntax model for Rust source files."""

from rsts.parser.lexer import LexerError, Token, TokenType, tokenize
from rsts.parser.parser import ParseError, parse
from rsts.parser.syntax import EnumDecl, FieldDecl, RawType, SourceFile, StructDecl, VariantDecl

__all__ = [
    "tokenize",
    "Token",
    "TokenType",
    "LexerError",
    "parse",
    "ParseError",
    # Syntax model
    "RawType",
    "FieldDecl",
    "StructDecl",
    "VariantDecl",
    "EnumDecl",
    "SourceFile",
]
