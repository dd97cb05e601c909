"""
Lexer/Tokenizer for the errordef DSL.

Converts raw definition text into a stream of tokens with source location
tracking. Whitespace, including newlines, only separates tokens.

A `#` starts a comment that runs to the end of the line, unless it is
immediately followed by `[`, in which case it opens a field attribute
such as `#[from]`.

A string with a Python prefix (`f"..."`, `r"..."`, `b"..."`) is kept as
written, so that expressions re-rendered from tokens mean the same thing.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import ParseError, make_parse_error


class TokenType(Enum):
    """Token types in the errordef DSL."""

    # Literals
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    # r"..", f"..", b"..": value is the verbatim source, prefix and quotes included
    PREFIXED_STRING = "PREFIXED_STRING"
    NUMBER = "NUMBER"

    # Keywords
    ERROR_DEF = "error_def"

    # Punctuation
    FAT_ARROW = "=>"
    HASH = "#"
    LBRACE = "{"
    RBRACE = "}"
    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"
    COMMA = ","
    COLON = ":"
    DOT = "."
    EQUALS = "="

    # Any other operator, kept verbatim for expressions and types
    OPERATOR = "OPERATOR"

    # Special
    EOF = "EOF"


KEYWORDS = {
    "error_def",
}

# Longest first so that `**` wins over `*`
OPERATORS = (
    "**=",
    "//=",
    ">>=",
    "<<=",
    "==",
    "!=",
    "<=",
    ">=",
    "**",
    "//",
    "->",
    "<<",
    ">>",
    ":=",
    "+=",
    "-=",
    "*=",
    "/=",
    "%=",
    "&=",
    "|=",
    "^=",
    "+",
    "-",
    "*",
    "/",
    "%",
    "<",
    ">",
    "&",
    "|",
    "^",
    "~",
    "@",
    "!",
    "?",
    ";",
)

PUNCTUATION = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
}

SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "\\": "\\",
}

# Python string prefixes, matched case-insensitively
STRING_PREFIXES = {"r", "u", "f", "b", "br", "rb", "fr", "rf"}

# \xNN and \uNNNN
HEX_ESCAPE_WIDTHS = {"x": 2, "u": 4}
HEX_DIGITS = "0123456789abcdefABCDEF"


@dataclass(frozen=True)
class Token:
    """
    One lexeme and where it starts.

    Strings carry their unescaped text in `value`; every other token
    carries its source text. Positions are 1-indexed.
    """

    type: TokenType
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"<{self.type.name} {self.value!r} @{self.line}:{self.column}>"


class Lexer:
    """
    Scanner for definition files.

    Keeps a cursor (offset, line, column) into the text and emits tokens
    until the text runs out, then a final EOF.
    """

    def __init__(self, text: str, file: Path):
        self.text = text
        self.file = file
        self.offset = 0
        self.line = 1
        self.column = 1

    # Cursor

    def at(self, ahead: int = 0) -> str:
        """Character `ahead` positions past the cursor, or "" past the end."""
        index = self.offset + ahead
        return self.text[index] if index < len(self.text) else ""

    def bump(self, count: int = 1) -> str:
        """Consume `count` characters and return them."""
        start = self.offset
        for _ in range(count):
            if self.offset >= len(self.text):
                break
            if self.text[self.offset] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.offset += 1
        return self.text[start : self.offset]

    def bump_while(self, accept: Callable[[str], bool]) -> str:
        start = self.offset
        while self.at() and accept(self.at()):
            self.bump()
        return self.text[start : self.offset]

    def fail(self, message: str, line: int, column: int) -> ParseError:
        return make_parse_error(message, self.file, line, column)

    # Lexemes

    def scan_string(self, line: int, column: int) -> str:
        """Scan a quoted string starting at the cursor and return its unescaped text."""
        quote = self.bump()
        parts: list[str] = []
        while True:
            ch = self.at()
            if not ch:
                raise self.fail("Unterminated string literal", line, column)
            if ch == quote:
                self.bump()
                return "".join(parts)
            if ch == "\\":
                self.bump()
                parts.append(self.scan_escape(line, column))
            else:
                parts.append(self.bump())

    def scan_verbatim_string(self, line: int, column: int) -> str:
        """Scan a quoted string starting at the cursor and return its source text unchanged."""
        start = self.offset
        quote = self.bump()
        while True:
            ch = self.at()
            if not ch or ch == "\n":
                raise self.fail("Unterminated string literal", line, column)
            if ch == quote:
                self.bump()
                return self.text[start : self.offset]
            self.bump(2 if ch == "\\" else 1)

    def scan_escape(self, line: int, column: int) -> str:
        kind = self.at()
        if kind in SIMPLE_ESCAPES:
            self.bump()
            return SIMPLE_ESCAPES[kind]
        if kind in HEX_ESCAPE_WIDTHS:
            width = HEX_ESCAPE_WIDTHS[kind]
            digits = self.text[self.offset + 1 : self.offset + 1 + width]
            if len(digits) != width or not all(c in HEX_DIGITS for c in digits):
                raise self.fail(f"Invalid \\{kind} escape in string literal", line, column)
            self.bump(width + 1)
            return chr(int(digits, 16))
        # Quotes, and anything else, stand for themselves
        return self.bump()

    def scan_number(self) -> str:
        def accept(ch: str) -> bool:
            return ch.isalnum() or ch == "_" or (ch == "." and self.at(1).isdigit())

        return self.bump_while(accept)

    def scan_operator(self) -> str | None:
        for op in OPERATORS:
            if self.text.startswith(op, self.offset):
                return self.bump(len(op))
        return None

    def next_token(self) -> Token | None:
        """
        Scan one token, skipping whitespace and comments first.

        Returns None at the end of the text.
        """
        while True:
            self.bump_while(str.isspace)
            if self.at() == "#" and self.at(1) != "[":
                self.bump_while(lambda ch: ch != "\n")
                continue
            break

        ch = self.at()
        if not ch:
            return None
        line, column = self.line, self.column

        if ch == "#":
            return Token(TokenType.HASH, self.bump(), line, column)
        if ch in "\"'":
            return Token(TokenType.STRING, self.scan_string(line, column), line, column)
        if ch.isdigit():
            return Token(TokenType.NUMBER, self.scan_number(), line, column)
        if ch.isalpha() or ch == "_":
            word = self.bump_while(lambda c: c.isalnum() or c == "_")
            if word.lower() in STRING_PREFIXES and self.at() in ("\"", "'"):
                literal = word + self.scan_verbatim_string(line, column)
                return Token(TokenType.PREFIXED_STRING, literal, line, column)
            token_type = TokenType(word) if word in KEYWORDS else TokenType.IDENTIFIER
            return Token(token_type, word, line, column)
        if ch in PUNCTUATION:
            return Token(PUNCTUATION[ch], self.bump(), line, column)
        if ch == "=":
            pair = ch + self.at(1)
            if pair == "=>":
                return Token(TokenType.FAT_ARROW, self.bump(2), line, column)
            if pair == "==":
                return Token(TokenType.OPERATOR, self.bump(2), line, column)
            return Token(TokenType.EQUALS, self.bump(), line, column)
        if ch == ":" and self.at(1) != "=":
            return Token(TokenType.COLON, self.bump(), line, column)

        op = self.scan_operator()
        if op is None:
            raise self.fail(f"Unexpected character: {ch!r}", line, column)
        return Token(TokenType.OPERATOR, op, line, column)

    def tokenize(self) -> list[Token]:
        """
        Scan the whole text.

        Returns:
            All tokens, terminated by EOF

        Raises:
            ParseError: On an unterminated string, a bad escape or an unknown character
        """
        tokens: list[Token] = []
        while (token := self.next_token()) is not None:
            tokens.append(token)
        tokens.append(Token(TokenType.EOF, "", self.line, self.column))
        return tokens


def tokenize(text: str, file: Path) -> list[Token]:
    """Tokenize definition text read from `file`."""
    return Lexer(text, file).tokenize()
