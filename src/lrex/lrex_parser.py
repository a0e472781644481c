"""
lrex Shift/Reduce Parser

Builds a forest of `ASTNode` trees from a token list using an ordered set of
production rules.

Algorithm
---------
For each token, in order:

1. Shift check: if any rule (in declaration order) could still be completed
   with the token pushed next (`ParseStack.matches_partial`), push the token
   as a leaf.
2. Otherwise reduce: apply the first rule whose pattern matches the top of
   the stack and go back to step 1 with the same token. Reductions may cascade.
3. If no rule can be extended and none can be reduced, raise `ParseError`.

After the last token the stack is drained: the first matching rule is applied
repeatedly until no rule matches. The stack contents, bottom to top, are the
result. Several top-level trees are a valid result (e.g. a statement list).

Rule order is the only disambiguation mechanism, both for which partial match
licenses a shift and for which rule wins a reduction. Reordering otherwise
identical rules can change the resulting trees.

Strict Mode
-----------
By default a token left as a bare top-level leaf after draining was never
incorporated into any reduction, and the parse fails with `ParseError` naming
that token. Pass `strict=False` to get the forest back unchanged instead.

Entry Points
------------
- `Parser(rules).parse(tokens)`: parse a token list.
- `parse(rules, tokens)`: functional form of the above.
- `Grammar(match_pairs, rules).parse(text)`: lex then parse.

Raises
------
ParseError
    For tokens that can be neither shifted nor reduced, and for unreduced
    top-level tokens in strict mode.
GrammarError
    When a rule set would reduce forever through a cycle of single-item
    rules.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum
from typing import Any

from lrex.lrex_ast import ASTNode
from lrex.lrex_errors import GrammarError, ParseError
from lrex.lrex_grammar import NonTerminal, ProductionRule, Terminal
from lrex.lrex_lexer import Lexer, Token
from lrex.lrex_match import MatchPair
from lrex.lrex_stack import ParseStack

LOGGER = logging.getLogger(__name__)


class Parser:
    """
    Shift/reduce driver over an ordered rule set.

    A Parser holds no per-call state: every `parse` call builds its own
    ParseStack, so one instance may be used from several threads at once.

    Attributes
    ----------
    rules : tuple[ProductionRule, ...]
        The production rules in priority order.

    Raises
    ------
    GrammarError
        If single-item rules form a cycle such as `[A] -> B`, `[B] -> A`.
    """

    def __init__(self, rules: Iterable[ProductionRule]) -> None:
        self.rules: tuple[ProductionRule, ...] = tuple(rules)
        _check_unit_cycles(self.rules)

    def parse(self, tokens: Iterable[Token], strict: bool = True) -> list[ASTNode]:
        """
        Parses `tokens` into a forest of AST nodes.

        Parameters
        ----------
        tokens : Iterable[Token]
            The lexer output.
        strict : bool
            Reject tokens left unreduced at the top level.

        Returns
        -------
        list[ASTNode]
            The final stack contents, bottom to top.

        Raises
        ------
        ParseError
            If a token can be neither shifted nor reduced toward.
        """
        stack = ParseStack()
        for token in tokens:
            self._consume(stack, token)
        self._drain(stack)

        forest = stack.nodes()
        if strict:
            for node in forest:
                if node.is_leaf():
                    raise ParseError(node.token, len(stack), reason="Unreduced token")
        return forest

    def _consume(self, stack: ParseStack, token: Token) -> None:
        next_item = Terminal(token.type)  # type: ignore[arg-type]
        while True:
            if self._can_shift(stack, next_item):
                stack.push(ASTNode.leaf(token))
                LOGGER.debug("shift %r (depth %d)", token, len(stack))
                return
            rule = self._reducible(stack)
            if rule is None:
                raise ParseError(token, len(stack))
            stack.apply(rule)
            LOGGER.debug("reduce %s (depth %d)", rule, len(stack))

    def _drain(self, stack: ParseStack) -> None:
        rule = self._reducible(stack)
        while rule is not None:
            stack.apply(rule)
            LOGGER.debug("drain %s (depth %d)", rule, len(stack))
            rule = self._reducible(stack)

    def _can_shift(self, stack: ParseStack, next_item: Terminal) -> bool:
        return any(stack.matches_partial(next_item, rule) for rule in self.rules)

    def _reducible(self, stack: ParseStack) -> ProductionRule | None:
        for rule in self.rules:
            if stack.matches(rule):
                return rule
        return None


def _check_unit_cycles(rules: tuple[ProductionRule, ...]) -> None:
    """Rejects single-item rules that rewrite a node type back into itself.

    Each reduction by such a rule keeps the stack size, so a cycle of them
    would never stop reducing.
    """
    edges: dict[Enum, list[Enum]] = {}
    for rule in rules:
        first = rule.components[0]
        if len(rule) == 1 and isinstance(first, NonTerminal):
            edges.setdefault(first.ast_type, []).append(rule.result.ast_type)

    done: set[Enum] = set()
    for start in edges:
        path: list[Enum] = []
        if _find_cycle(start, edges, path, done):
            names = " -> ".join(kind.name for kind in path)
            raise GrammarError(f"Single-item rules form a cycle: {names}")


def _find_cycle(
    kind: Enum, edges: dict[Enum, list[Enum]], path: list[Enum], done: set[Enum]
) -> bool:
    if kind in path:
        path[:] = path[path.index(kind) :] + [kind]
        return True
    if kind in done:
        return False
    path.append(kind)
    for target in edges.get(kind, []):
        if _find_cycle(target, edges, path, done):
            return True
    path.pop()
    done.add(kind)
    return False


def parse(
    rules: Iterable[ProductionRule], tokens: Iterable[Token], strict: bool = True
) -> list[ASTNode]:
    """Parses `tokens` with `rules`; see `Parser.parse`."""
    return Parser(rules).parse(tokens, strict=strict)


class Grammar:
    """
    A match table and a rule set, bundled for end-to-end use.

    Attributes
    ----------
    lexer : Lexer
        Lexer built from the match table.
    parser : Parser
        Parser built from the rules.
    """

    def __init__(
        self,
        match_pairs: Iterable[MatchPair | tuple[Any, Enum]],
        rules: Iterable[ProductionRule],
    ) -> None:
        self.lexer = Lexer(match_pairs)
        self.parser = Parser(rules)

    @property
    def rules(self) -> tuple[ProductionRule, ...]:
        return self.parser.rules

    def lex(self, text: str, ignore_whitespace: bool = True) -> list[Token]:
        return self.lexer.lex(text, ignore_whitespace)

    def parse(
        self, text: str, ignore_whitespace: bool = True, strict: bool = True
    ) -> list[ASTNode]:
        """Lexes and parses `text`.

        Raises:
            LexError: If the text cannot be tokenized.
            ParseError: If the tokens do not form a valid forest.
        """
        return self.parser.parse(self.lex(text, ignore_whitespace), strict=strict)


__all__ = ["Grammar", "Parser", "parse"]
