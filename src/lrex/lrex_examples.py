"""
The arithmetic demo grammar: integer expressions inside `print(...)`.

Match-table order matters (first match wins) and rule order sets precedence:
`*` and `/` are tried before `+` and `-` whenever a reduction is possible.

Example:
    >>> forest = arithmetic_grammar().parse("print(1 + 2)")
    >>> forest[0].ast_type
    <ArithNode.Print: 2>
"""

from enum import auto

from lrex.lrex_grammar import NodeKind, TokenKind, rule
from lrex.lrex_match import match_digits
from lrex.lrex_parser import Grammar


class ArithToken(TokenKind):
    INT = auto()
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    LPAREN = auto()
    RPAREN = auto()
    PRINT = auto()


class ArithNode(NodeKind):
    Expr = auto()
    Print = auto()


T = ArithToken
N = ArithNode

ARITH_MATCHERS = [
    (match_digits, T.INT),
    ("+", T.PLUS),
    ("-", T.MINUS),
    ("*", T.STAR),
    ("/", T.SLASH),
    ("(", T.LPAREN),
    (")", T.RPAREN),
    ("print", T.PRINT),
]

ARITH_RULES = [
    # print(<expr>)
    rule(T.PRINT, T.LPAREN, N.Expr, T.RPAREN, result=N.Print),
    # (<expr>)
    rule(T.LPAREN, N.Expr, T.RPAREN, result=N.Expr),
    rule(T.INT, result=N.Expr),
    rule(N.Expr, T.STAR, N.Expr, result=N.Expr),
    rule(N.Expr, T.SLASH, N.Expr, result=N.Expr),
    rule(N.Expr, T.PLUS, N.Expr, result=N.Expr),
    rule(N.Expr, T.MINUS, N.Expr, result=N.Expr),
]


def arithmetic_grammar() -> Grammar:
    return Grammar(ARITH_MATCHERS, ARITH_RULES)


__all__ = ["ARITH_MATCHERS", "ARITH_RULES", "ArithNode", "ArithToken", "arithmetic_grammar"]
