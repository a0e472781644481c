"""
Grammar model: symbol enumerations, production items, and production rules.

Grammar authors declare two closed enumerations:

    class Tok(TokenKind):
        INT = auto()
        PLUS = auto()

    class Node(NodeKind):
        Expr = auto()

Members of a `TokenKind` subclass are terminals and members of a `NodeKind`
subclass are non-terminals. Rules then name them directly:

    rule(Node.Expr, Tok.PLUS, Node.Expr, result=Node.Expr)

Rules carry no behavior; recognition and reduction live in `ParseStack`.
The order in which rules are handed to the parser is significant: it is the
only way precedence and associativity are expressed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from lrex.lrex_errors import GrammarError


class TokenKind(Enum):
    """Base class for a grammar's terminal symbols."""


class NodeKind(Enum):
    """Base class for a grammar's non-terminal symbols (AST node types)."""


@dataclass(frozen=True)
class Terminal:
    token_type: TokenKind

    def __str__(self) -> str:
        return self.token_type.name


@dataclass(frozen=True)
class NonTerminal:
    ast_type: NodeKind

    def __str__(self) -> str:
        return self.ast_type.name


ProductionItem = Union[Terminal, NonTerminal]
"""A grammar symbol: either a terminal or a non-terminal."""


def item(value: ProductionItem | TokenKind | NodeKind) -> ProductionItem:
    """Coerces a symbol enum member (or an existing item) to a ProductionItem.

    Raises:
        GrammarError: If `value` is neither a TokenKind nor a NodeKind member.
    """
    if isinstance(value, (Terminal, NonTerminal)):
        return value
    if isinstance(value, TokenKind):
        return Terminal(value)
    if isinstance(value, NodeKind):
        return NonTerminal(value)
    raise GrammarError(
        f"Production items must be TokenKind or NodeKind members, got {value!r}"
    )


@dataclass(frozen=True, repr=False)
class ProductionRule:
    """A pattern of production items and the non-terminal it reduces to.

    Components and result may be given as enum members; they are coerced with
    `item()`. Any iterable of components is stored as a tuple.

    Attributes:
        components (tuple[ProductionItem, ...]): The pattern, oldest item first.
        result (NonTerminal): The node type created when the pattern is reduced.

    Raises:
        GrammarError: If the pattern is empty, the result is a terminal, or the
            rule is `[X] -> X`.
    """

    components: tuple[ProductionItem, ...]
    result: NonTerminal

    def __post_init__(self) -> None:
        comps = tuple(item(c) for c in self.components)
        res = item(self.result)
        if not comps:
            raise GrammarError(f"Rule for {res} has no components")
        if not isinstance(res, NonTerminal):
            raise GrammarError(f"Rule result must be a non-terminal, got terminal {res}")
        if comps == (res,):
            raise GrammarError(f"Rule {res} -> {res} would reduce forever")
        object.__setattr__(self, "components", comps)
        object.__setattr__(self, "result", res)

    def __len__(self) -> int:
        return len(self.components)

    def __str__(self) -> str:
        return f"{' '.join(str(c) for c in self.components)} -> {self.result}"

    def __repr__(self) -> str:
        return f"ProductionRule({self})"


def rule(
    *components: ProductionItem | TokenKind | NodeKind,
    result: ProductionItem | NodeKind,
) -> ProductionRule:
    """Shorthand for `ProductionRule(components, result)`."""
    return ProductionRule(components, result)  # type: ignore[arg-type]


__all__ = [
    "NodeKind",
    "NonTerminal",
    "ProductionItem",
    "ProductionRule",
    "Terminal",
    "TokenKind",
    "item",
    "rule",
]
