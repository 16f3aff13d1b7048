"""
Selection Lexer
===============
Tokenizes a `select` expression such as

    category = "work" and (status = on or date > 2024-05-01)

into a flat list of typed tokens. Keywords (and, or, not, like) are left
as WORD tokens; the parser decides what they mean from their position.
"""
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional


class SelectionError(ValueError):
    """A select expression could not be tokenized, parsed, or typed."""

    def __init__(self, message: str, column: Optional[int] = None):
        self.message = message
        self.column = column
        if column is not None:
            message = f"{message} (column {column})"
        super().__init__(message)


class TokenType(Enum):
    """All token types in a selection expression."""
    LPAREN   = auto()   # (
    RPAREN   = auto()   # )
    COMMA    = auto()   # , (same as "and")
    OPERATOR = auto()   # = == != < > <= >=
    STRING   = auto()   # "..." or '...'
    DATE     = auto()   # 2024-05-20 or 2024-05-20 10:00, unquoted
    WORD     = auto()   # field names, keywords, bare values
    EOF      = auto()


@dataclass
class Token:
    """A single token and the 1-based column it starts at."""
    type: TokenType
    value: str
    col: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, col {self.col})"


# Longest operators first so "<=" wins over "<"
OPERATORS = ("==", "!=", "<=", ">=", "=", "<", ">")

# Characters that end a bare word
WORD_BREAKS = set(" \t\r\n()\"',=<>!")

# A bare date, optionally followed by a space and HH:MM
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}(?: \d{2}:\d{2})?(?![\w:-])")


class Lexer:
    """
    Tokenizes a selection expression.

    Usage:
        tokens = Lexer('status = "done"').tokenize()
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0

    def _current(self) -> Optional[str]:
        if self.pos >= len(self.source):
            return None
        return self.source[self.pos]

    def _skip_whitespace(self):
        while self.pos < len(self.source) and self.source[self.pos].isspace():
            self.pos += 1

    def _read_string(self) -> Token:
        """Read a quoted string; backslash escapes the next character."""
        start = self.pos
        quote = self.source[self.pos]
        self.pos += 1
        chars = []
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            self.pos += 1
            if ch == quote:
                return Token(TokenType.STRING, "".join(chars), start + 1)
            if ch == "\\" and self.pos < len(self.source):
                chars.append(self.source[self.pos])
                self.pos += 1
            else:
                chars.append(ch)
        raise SelectionError("Unterminated string", start + 1)

    def _read_word(self) -> Token:
        start = self.pos
        while self.pos < len(self.source) and self.source[self.pos] not in WORD_BREAKS:
            self.pos += 1
        return Token(TokenType.WORD, self.source[start:self.pos], start + 1)

    def tokenize(self) -> list[Token]:
        """Tokenize the entire expression, ending with an EOF token."""
        tokens = list(self._iter_tokens())
        tokens.append(Token(TokenType.EOF, "", len(self.source) + 1))
        return tokens

    def _iter_tokens(self) -> Iterator[Token]:
        while True:
            self._skip_whitespace()
            ch = self._current()
            if ch is None:
                return
            col = self.pos + 1

            if ch == "(":
                self.pos += 1
                yield Token(TokenType.LPAREN, ch, col)
                continue

            if ch == ")":
                self.pos += 1
                yield Token(TokenType.RPAREN, ch, col)
                continue

            if ch == ",":
                self.pos += 1
                yield Token(TokenType.COMMA, ch, col)
                continue

            if ch in ('"', "'"):
                yield self._read_string()
                continue

            operator = next((op for op in OPERATORS if self.source.startswith(op, self.pos)), None)
            if operator:
                self.pos += len(operator)
                yield Token(TokenType.OPERATOR, operator, col)
                continue

            if ch == "!":
                raise SelectionError("Unexpected character '!'", col)

            match = DATE_PATTERN.match(self.source, self.pos)
            if match:
                self.pos = match.end()
                yield Token(TokenType.DATE, match.group(0), col)
                continue

            yield self._read_word()
