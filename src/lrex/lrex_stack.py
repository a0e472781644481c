"""
The parse stack: pattern tests and reductions over partially parsed input.

Entries are ASTNodes, bottom (oldest) first. Read left to right they are the
input seen so far, some of it already folded into subtrees. Entries are only
ever pushed, or popped by a reduction; nothing is modified in place.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from lrex.lrex_ast import ASTNode
from lrex.lrex_grammar import ProductionItem, ProductionRule, Terminal


def _entry_matches(node: ASTNode, pattern_item: ProductionItem) -> bool:
    if isinstance(pattern_item, Terminal):
        return node.is_leaf() and node.token.type == pattern_item.token_type
    return node.is_internal() and node.ast_type == pattern_item.ast_type


class ParseStack:
    """A growable stack of ASTNodes with rule matching and reduction."""

    def __init__(self) -> None:
        self._items: list[ASTNode] = []

    def push(self, node: ASTNode) -> None:
        self._items.append(node)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ASTNode]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"ParseStack({' '.join(_label(n) for n in self._items)})"

    def nodes(self) -> list[ASTNode]:
        """Returns the current contents, bottom to top, as a new list."""
        return list(self._items)

    def matches(self, rule: ProductionRule) -> bool:
        """True if the top `len(rule)` entries match the rule's pattern."""
        return self._matches_pattern(rule.components)

    def matches_partial(self, next_item: ProductionItem, rule: ProductionRule) -> bool:
        """True if pushing `next_item` keeps a full match of `rule` reachable.

        That is the case when `next_item` occurs at some position `k` of the
        pattern and the top `k` entries already match the pattern's first `k`
        items. An occurrence at position 0 always qualifies.
        """
        pattern = rule.components
        return any(
            self._matches_pattern(pattern[:k])
            for k, pattern_item in enumerate(pattern)
            if pattern_item == next_item
        )

    def apply(self, rule: ProductionRule) -> ASTNode:
        """Reduces the top of the stack by `rule` and returns the new node.

        Raises:
            AssertionError: If the stack top does not match the rule.
        """
        if not self.matches(rule):
            raise AssertionError(f"Cannot apply {rule} to {self!r}")
        size = len(rule.components)
        children = self._items[-size:]
        del self._items[-size:]
        node = ASTNode.internal(rule.result.ast_type, children)
        self._items.append(node)
        return node

    def _matches_pattern(self, pattern: Sequence[ProductionItem]) -> bool:
        if len(pattern) > len(self._items):
            return False
        window = self._items[len(self._items) - len(pattern) :]
        return all(_entry_matches(node, p) for node, p in zip(window, pattern))


def _label(node: ASTNode) -> str:
    return node.token.type.name if node.is_leaf() else node.ast_type.name


__all__ = ["ParseStack"]
