"""
Selection module.

Parses and evaluates the predicate expressions used by `select`.
"""

from todolist.selection.lexer import (
    Lexer,
    Token,
    TokenType,
    SelectionError,
)
from todolist.selection.predicates import (
    Predicate,
    TextComparison,
    StatusComparison,
    DateComparison,
    And,
    Or,
    Not,
    FIELDS,
    make_comparison,
    parse_date_span,
)
from todolist.selection.parser import (
    Parser,
    parse_selection,
    select,
)

__all__ = [
    # Tokens
    "Lexer",
    "Token",
    "TokenType",
    "SelectionError",
    # Predicate tree
    "Predicate",
    "TextComparison",
    "StatusComparison",
    "DateComparison",
    "And",
    "Or",
    "Not",
    "FIELDS",
    "make_comparison",
    "parse_date_span",
    # Parsing
    "Parser",
    "parse_selection",
    "select",
]
