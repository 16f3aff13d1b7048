"""
Selection Parser
================
Recursive-descent parser that turns the tokens of a `select` expression
into a predicate tree.

Grammar (keywords and field names are case-insensitive):

    expression := and_expr ( "or" and_expr )*
    and_expr   := not_expr ( ( "and" | "," )? not_expr )*
    not_expr   := "not" not_expr | primary
    primary    := "(" expression ")" | comparison
    comparison := FIELD OPERATOR VALUE

Two comparisons written next to each other are joined with "and", so
`category = "work" status = on` selects active work tasks.
"""
from typing import List

from todolist.models.task import Task
from todolist.selection.lexer import Lexer, SelectionError, Token, TokenType
from todolist.selection.predicates import FIELDS, And, Not, Or, Predicate, make_comparison


KEYWORDS = ("and", "or", "not", "like")


class Parser:
    """
    Builds a Predicate from a token list.

    Usage:
        predicate = Parser(Lexer(text).tokenize()).parse()
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def _current(self) -> Token:
        return self.tokens[self.pos]

    def _advance(self) -> Token:
        token = self.tokens[self.pos]
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def _is_keyword(self, word: str) -> bool:
        token = self._current()
        return token.type == TokenType.WORD and token.value.lower() == word

    def _starts_operand(self) -> bool:
        """Whether the current token can begin another and-operand."""
        token = self._current()
        if token.type == TokenType.LPAREN:
            return True
        return token.type == TokenType.WORD and token.value.lower() not in ("and", "or")

    def parse(self) -> Predicate:
        if self._current().type == TokenType.EOF:
            raise SelectionError("Empty predicate", 1)
        predicate = self._parse_or()
        token = self._current()
        if token.type != TokenType.EOF:
            raise SelectionError(f"Unexpected {token.value!r}", token.col)
        return predicate

    def _parse_or(self) -> Predicate:
        children = [self._parse_and()]
        while self._is_keyword("or"):
            self._advance()
            children.append(self._parse_and())
        return children[0] if len(children) == 1 else Or(tuple(children))

    def _parse_and(self) -> Predicate:
        children = [self._parse_not()]
        while True:
            if self._is_keyword("and") or self._current().type == TokenType.COMMA:
                self._advance()
            elif not self._starts_operand():
                break
            children.append(self._parse_not())
        return children[0] if len(children) == 1 else And(tuple(children))

    def _parse_not(self) -> Predicate:
        if self._is_keyword("not"):
            self._advance()
            return Not(self._parse_not())
        return self._parse_primary()

    def _parse_primary(self) -> Predicate:
        token = self._current()
        if token.type == TokenType.LPAREN:
            self._advance()
            inner = self._parse_or()
            closing = self._current()
            if closing.type != TokenType.RPAREN:
                raise SelectionError("Missing ')'", closing.col)
            self._advance()
            return inner
        return self._parse_comparison()

    def _parse_comparison(self) -> Predicate:
        field = self._current()
        if field.type != TokenType.WORD or field.value.lower() in KEYWORDS:
            found = repr(field.value) if field.type != TokenType.EOF else "end of input"
            raise SelectionError(f"Expected a field name, found {found}", field.col)
        self._advance()

        operator = self._current()
        if operator.type == TokenType.OPERATOR or (
            operator.type == TokenType.WORD and operator.value.lower() == "like"
        ):
            self._advance()
        elif field.value.lower() not in FIELDS:
            # "invalid predicate" is reported as an unknown field
            raise SelectionError(f"Unknown predicate: {field.value}", field.col)
        else:
            raise SelectionError(f"Expected an operator after '{field.value}'", operator.col)

        value = self._current()
        if value.type not in (TokenType.STRING, TokenType.DATE, TokenType.WORD):
            raise SelectionError(f"Expected a value after '{operator.value}'", value.col)
        self._advance()

        return make_comparison(field.value, operator.value, value.value, field.col)


def parse_selection(expression: str) -> Predicate:
    """
    Parse a select expression into a predicate tree.

    Raises:
        SelectionError: If the expression is malformed.
    """
    return Parser(Lexer(expression).tokenize()).parse()


def select(tasks: List[Task], expression: str) -> List[Task]:
    """
    Return the tasks matching expression, in their original order.

    Raises:
        SelectionError: If the expression is malformed.
    """
    predicate = parse_selection(expression)
    return [task for task in tasks if predicate.matches(task)]
