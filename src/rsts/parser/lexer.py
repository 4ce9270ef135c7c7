# Copyright 2026 rsts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for Rust source files.

Converts raw source text into a sequence of tokens for subsequent parsing.
Only the lexical structure is recognized: literals are kept as their raw
source text, and comments (including doc comments) are dropped.
"""

import enum
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the Rust lexer."""

    # Keywords the parser dispatches on
    AS = "as"
    CONST = "const"
    CRATE = "crate"
    DYN = "dyn"
    ENUM = "enum"
    EXTERN = "extern"
    FN = "fn"
    FOR = "for"
    IMPL = "impl"
    IN = "in"
    MUT = "mut"
    PUB = "pub"
    SELF = "self"
    SELF_TYPE = "Self"
    STATIC = "static"
    STRUCT = "struct"
    SUPER = "super"
    TYPE = "type"
    UNSAFE = "unsafe"
    USE = "use"
    WHERE = "where"

    # Delimiters
    LBRACE = "{"
    RBRACE = "}"
    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"

    # Symbols and operators
    LANGLE = "<"
    RANGLE = ">"
    COMMA = ","
    SEMICOLON = ";"
    COLON = ":"
    PATH_SEP = "::"
    ARROW = "->"
    FAT_ARROW = "=>"
    EQUALS = "="
    POUND = "#"
    BANG = "!"
    AMPERSAND = "&"
    STAR = "*"
    PLUS = "+"
    MINUS = "-"
    QUESTION = "?"
    DOT = "."
    AT = "@"
    PIPE = "|"
    CARET = "^"
    PERCENT = "%"
    SLASH = "/"
    TILDE = "~"
    DOLLAR = "$"

    # Literals
    STRING = "STRING"
    CHAR = "CHAR"
    NUMBER = "NUMBER"
    LIFETIME = "LIFETIME"

    # Identifiers
    IDENTIFIER = "IDENTIFIER"

    # End of file
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        value: The raw text of the token. Raw identifiers (``r#type``) carry
            the identifier without the ``r#`` prefix.
        line: 1-based line number where the token starts.
        column: 1-based column number where the token starts.
    """

    type: TokenType
    value: str
    line: int
    column: int


class LexerError(Exception):
    """Raised when the scanner encounters an invalid character or unterminated literal.

    Attributes:
        line: 1-based line number of the error.
        column: 1-based column number of the error.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column


def tokenize(source: str) -> list[Token]:
    """Tokenize Rust source text into a sequence of tokens.

    Returns a list of tokens. The final token is always an EOF token.
    Comments and whitespace are consumed and not included in the output.

    Args:
        source: The full text of a .rs file.

    Returns:
        A list of Token objects ending with a single EOF token.

    Raises:
        LexerError: On unexpected characters, unterminated string or character
            literals, or unterminated block comments.
    """
    return _Lexer(source).tokenize()


# ################
# Implementation
# ################

_KEYWORDS: dict[str, TokenType] = {
    "as": TokenType.AS,
    "const": TokenType.CONST,
    "crate": TokenType.CRATE,
    "dyn": TokenType.DYN,
    "enum": TokenType.ENUM,
    "extern": TokenType.EXTERN,
    "fn": TokenType.FN,
    "for": TokenType.FOR,
    "impl": TokenType.IMPL,
    "in": TokenType.IN,
    "mut": TokenType.MUT,
    "pub": TokenType.PUB,
    "self": TokenType.SELF,
    "Self": TokenType.SELF_TYPE,
    "static": TokenType.STATIC,
    "struct": TokenType.STRUCT,
    "super": TokenType.SUPER,
    "type": TokenType.TYPE,
    "unsafe": TokenType.UNSAFE,
    "use": TokenType.USE,
    "where": TokenType.WHERE,
}

_DOUBLE_CHAR_TOKENS: dict[str, TokenType] = {
    "::": TokenType.PATH_SEP,
    "->": TokenType.ARROW,
    "=>": TokenType.FAT_ARROW,
}

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "<": TokenType.LANGLE,
    ">": TokenType.RANGLE,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    ":": TokenType.COLON,
    "=": TokenType.EQUALS,
    "#": TokenType.POUND,
    "!": TokenType.BANG,
    "&": TokenType.AMPERSAND,
    "*": TokenType.STAR,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "?": TokenType.QUESTION,
    ".": TokenType.DOT,
    "@": TokenType.AT,
    "|": TokenType.PIPE,
    "^": TokenType.CARET,
    "%": TokenType.PERCENT,
    "/": TokenType.SLASH,
    "~": TokenType.TILDE,
    "$": TokenType.DOLLAR,
}


def _is_ident_start(ch: str) -> bool:
    return ch.isalpha() or ch == "_"


def _is_ident_continue(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


class _Lexer:
    """Internal scanner state machine."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._column = 1
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Run the scanner and return all tokens including the terminal EOF."""
        if self._source.startswith("#!") and not self._source[2:].lstrip().startswith("["):
            self._skip_line_comment()
        while self._pos < len(self._source):
            self._skip_whitespace_and_comments()
            if self._pos >= len(self._source):
                break
            self._scan_token()
        self._tokens.append(Token(TokenType.EOF, "", self._line, self._column))
        return self._tokens

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _peek(self, offset: int = 1) -> str:
        """Return the character *offset* positions ahead, or '' past end of input."""
        if self._pos + offset < len(self._source):
            return self._source[self._pos + offset]
        return ""

    def _advance(self) -> str:
        """Consume the current character, update position tracking, and return it."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    def _emit(self, token_type: TokenType, start: int, line: int, col: int) -> None:
        """Append a token whose value is the source text from *start* to the current position."""
        self._tokens.append(Token(token_type, self._source[start : self._pos], line, col))

    # ------------------------------------------------------------------
    # Whitespace and comment skipping
    # ------------------------------------------------------------------

    def _skip_whitespace_and_comments(self) -> None:
        """Skip all whitespace and comment runs at the current position."""
        while self._pos < len(self._source):
            ch = self._current()
            if ch.isspace():
                self._advance()
            elif ch == "/" and self._peek() == "/":
                self._skip_line_comment()
            elif ch == "/" and self._peek() == "*":
                self._skip_block_comment()
            else:
                break

    def _skip_line_comment(self) -> None:
        """Consume from '//' through end-of-line (exclusive of the newline itself)."""
        while self._pos < len(self._source) and self._current() != "\n":
            self._advance()

    def _skip_block_comment(self) -> None:
        """Consume from '/*' through the matching '*/'. Block comments nest."""
        start_line = self._line
        start_col = self._column
        depth = 0
        while self._pos < len(self._source):
            if self._current() == "/" and self._peek() == "*":
                self._advance()  # /
                self._advance()  # *
                depth += 1
            elif self._current() == "*" and self._peek() == "/":
                self._advance()  # *
                self._advance()  # /
                depth -= 1
                if depth == 0:
                    return
            else:
                self._advance()
        raise LexerError("Unterminated block comment", start_line, start_col)

    # ------------------------------------------------------------------
    # Token scanning dispatcher
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        """Dispatch to the appropriate handler based on the current character."""
        ch = self._current()
        line = self._line
        col = self._column

        pair = ch + self._peek()
        if pair in _DOUBLE_CHAR_TOKENS:
            self._advance()
            self._advance()
            self._tokens.append(Token(_DOUBLE_CHAR_TOKENS[pair], pair, line, col))
        elif ch in _SINGLE_CHAR_TOKENS:
            self._advance()
            self._tokens.append(Token(_SINGLE_CHAR_TOKENS[ch], ch, line, col))
        elif ch == '"':
            self._scan_string(self._pos, line, col)
        elif ch == "'":
            self._scan_quote(line, col)
        elif ch.isdigit():
            self._scan_number(line, col)
        elif _is_ident_start(ch):
            self._scan_prefixed_literal_or_identifier(line, col)
        else:
            raise LexerError(f"Unexpected character: {ch!r}", line, col)

    # ------------------------------------------------------------------
    # Literal scanners
    # ------------------------------------------------------------------

    def _scan_string(self, start: int, line: int, col: int) -> None:
        """Scan a double-quoted string literal; the opening quote is the current character."""
        self._advance()  # opening "
        while self._pos < len(self._source):
            ch = self._current()
            if ch == '"':
                self._advance()  # closing "
                self._scan_suffix()
                self._emit(TokenType.STRING, start, line, col)
                return
            if ch == "\\":
                self._advance()
                if self._pos >= len(self._source):
                    break
            self._advance()
        raise LexerError("Unterminated string literal", line, col)

    def _scan_raw_string(self, start: int, line: int, col: int) -> None:
        """Scan a raw string literal; the current character is the first '#' or the opening quote."""
        hashes = 0
        while self._current() == "#":
            self._advance()
            hashes += 1
        if self._current() != '"':
            raise LexerError("Malformed raw string literal", line, col)
        self._advance()  # opening "
        terminator = '"' + "#" * hashes
        while self._pos < len(self._source):
            if self._source.startswith(terminator, self._pos):
                for _ in terminator:
                    self._advance()
                self._scan_suffix()
                self._emit(TokenType.STRING, start, line, col)
                return
            self._advance()
        raise LexerError("Unterminated raw string literal", line, col)

    def _scan_char(self, start: int, line: int, col: int) -> None:
        """Scan a character literal; the opening quote is the current character."""
        self._advance()  # opening '
        if self._current() == "\\":
            self._advance()
            if self._pos < len(self._source):
                self._advance()  # escaped character
        while self._pos < len(self._source) and self._current() not in "'\n":
            self._advance()
        if self._current() != "'":
            raise LexerError("Unterminated character literal", line, col)
        self._advance()  # closing '
        self._scan_suffix()
        self._emit(TokenType.CHAR, start, line, col)

    def _scan_quote(self, line: int, col: int) -> None:
        """Scan either a lifetime (``'a``) or a character literal (``'a'``)."""
        start = self._pos
        nxt = self._peek()
        if nxt != "\\" and self._peek(2) != "'" and _is_ident_start(nxt):
            self._advance()  # '
            while self._pos < len(self._source) and _is_ident_continue(self._current()):
                self._advance()
            self._emit(TokenType.LIFETIME, start, line, col)
        else:
            self._scan_char(start, line, col)

    def _scan_suffix(self) -> None:
        """Consume a literal suffix such as the ``u8`` in ``b'a'u8``."""
        if _is_ident_start(self._current()):
            while self._pos < len(self._source) and _is_ident_continue(self._current()):
                self._advance()

    def _scan_number(self, line: int, col: int) -> None:
        """Scan an integer or floating-point literal including any type suffix.

        A decimal point is part of the literal only when followed by a digit
        and the number does not itself follow a '.', so ranges (``0..n``) and
        tuple indexing (``x.0.1``) stay separate tokens.
        """
        start = self._pos
        is_hex = self._current() == "0" and self._peek() in "xXoObB"
        previous = [tok.type for tok in self._tokens[-2:]]
        is_tuple_index = previous[-1:] == [TokenType.DOT] and previous != [TokenType.DOT, TokenType.DOT]
        self._scan_digits(is_hex)
        if self._current() == "." and self._peek().isdigit() and not (is_hex or is_tuple_index):
            self._advance()  # .
            self._scan_digits(is_hex)
        self._emit(TokenType.NUMBER, start, line, col)

    def _scan_digits(self, is_hex: bool) -> None:
        """Consume digits, separators, and suffix characters, including signed exponents."""
        while self._pos < len(self._source) and _is_ident_continue(self._current()):
            ch = self._advance()
            if not is_hex and ch in "eE" and self._current() in "+-" and self._peek().isdigit():
                self._advance()  # sign

    def _scan_prefixed_literal_or_identifier(self, line: int, col: int) -> None:
        """Scan an identifier, keyword, raw identifier, or prefixed literal.

        Handles ``r"…"``/``r#"…"#`` raw strings, ``b"…"``/``br"…"`` byte strings,
        ``c"…"``/``cr"…"`` C strings, ``b'…'`` byte characters and ``r#ident``.
        """
        start = self._pos
        ch = self._current()
        nxt = self._peek()

        if ch == "r" and nxt == "#" and _is_ident_start(self._peek(2)):
            self._advance()  # r
            self._advance()  # #
            name_start = self._pos
            while self._pos < len(self._source) and _is_ident_continue(self._current()):
                self._advance()
            self._tokens.append(Token(TokenType.IDENTIFIER, self._source[name_start : self._pos], line, col))
            return
        if ch == "r" and nxt in '"#':
            self._advance()  # r
            self._scan_raw_string(start, line, col)
            return
        if ch in "bc" and nxt == "r" and self._peek(2) in '"#':
            self._advance()  # b / c
            self._advance()  # r
            self._scan_raw_string(start, line, col)
            return
        if ch in "bc" and nxt == '"':
            self._advance()  # b / c
            self._scan_string(start, line, col)
            return
        if ch == "b" and nxt == "'":
            self._advance()  # b
            self._scan_char(start, line, col)
            return

        while self._pos < len(self._source) and _is_ident_continue(self._current()):
            self._advance()
        value = self._source[start : self._pos]
        token_type = _KEYWORDS.get(value, TokenType.IDENTIFIER)
        self._tokens.append(Token(token_type, value, line, col))
