"""Restricted arithmetic: digits, ``+ - * /``, parentheses and decimals.

Expressions are checked against an allow-list and then evaluated by a small
recursive-descent parser, so no general evaluation primitive is involved::

    expression := term (("+" | "-") term)*
    term       := factor (("*" | "/") factor)*
    factor     := ("+" | "-") factor | NUMBER | "(" expression ")"
"""

from __future__ import annotations

import re
from typing import List, Tuple, Union

SAFE_EXPRESSION = re.compile(r"^[0-9+\-*/().\s]+$")
_TOKEN = re.compile(r"\s*(?:(\d+(?:\.\d*)?|\.\d+)|(.))")

Number = Union[int, float]


class ExpressionError(ValueError):
    """Raised for expressions that are unsafe, malformed or undefined."""


def is_safe_expression(expression: str) -> bool:
    return bool(SAFE_EXPRESSION.match(expression or ""))


def _tokenize(expression: str) -> List[Tuple[str, str]]:
    tokens: List[Tuple[str, str]] = []
    for number, symbol in _TOKEN.findall(expression):
        if number:
            tokens.append(("num", number))
        elif symbol.strip():
            tokens.append(("op", symbol))
    return tokens


class _Parser:
    def __init__(self, tokens: List[Tuple[str, str]]) -> None:
        self.tokens = tokens
        self.pos = 0

    def _peek(self) -> Tuple[str, str] | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def _take(self) -> Tuple[str, str]:
        token = self._peek()
        if token is None:
            raise ExpressionError("Unexpected end of expression")
        self.pos += 1
        return token

    def parse(self) -> Number:
        value = self._expression()
        if self._peek() is not None:
            raise ExpressionError(f"Unexpected token: {self._peek()[1]}")
        return value

    def _expression(self) -> Number:
        value = self._term()
        while self._peek() in (("op", "+"), ("op", "-")):
            _, op = self._take()
            right = self._term()
            value = value + right if op == "+" else value - right
        return value

    def _term(self) -> Number:
        value = self._factor()
        while self._peek() in (("op", "*"), ("op", "/")):
            _, op = self._take()
            right = self._factor()
            if op == "*":
                value = value * right
            else:
                if right == 0:
                    raise ExpressionError("Division by zero")
                value = value / right
        return value

    def _factor(self) -> Number:
        kind, text = self._take()
        if kind == "num":
            return float(text) if "." in text else int(text)
        if text == "-":
            return -self._factor()
        if text == "+":
            return self._factor()
        if text == "(":
            value = self._expression()
            if self._take() != ("op", ")"):
                raise ExpressionError("Missing closing parenthesis")
            return value
        raise ExpressionError(f"Unexpected token: {text}")


def evaluate(expression: str) -> Number:
    """Evaluate ``expression``; integral float results come back as ``int``."""

    if not is_safe_expression(expression):
        raise ExpressionError("Expression may only contain digits, + - * / ( ) . and spaces")
    tokens = _tokenize(expression)
    if not tokens:
        raise ExpressionError("Empty expression")
    value = _Parser(tokens).parse()
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value
