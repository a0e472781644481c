"""
Defines the abstract syntax tree (AST) node produced by the lrex parser.

Classes:
    ASTNode:
        A two-case tree value. A *leaf* wraps a single Token; an *internal* node
        carries a NodeKind and an ordered tuple of child ASTNodes.

    ASTDict:
        TypedDict shape of `ASTNode.to_dict()`, suitable for JSON output.

Every token the lexer produced survives as a leaf somewhere in the final tree,
so the source text can always be recovered with `leaves()`.

Nodes are immutable once built. Children are held in a tuple and are never
shared between parents by the parser: a reduction moves the popped stack
entries into the new node.

Example:
    >>> one = ASTNode.leaf(Token(Tok.INT, "1", 1, 1))
    >>> expr = ASTNode.internal(Node.Expr, [one])
    >>> print(expr.pretty())
    {Expr:
        [INT: '1']
    }
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any, TypedDict

from lrex.lrex_grammar import NodeKind
from lrex.lrex_lexer import Token


class ASTDict(TypedDict, total=False):
    """
    Serialized form of an ASTNode.

    Leaves carry `token`; internal nodes carry `type` and `children`.

    Fields:
        kind (str): "leaf" or "internal".
        token (dict[str, Any]): The token's own `to_dict()` (leaves only).
        type (str): The node type's name (internal nodes only).
        children (list[ASTDict]): Serialized children (internal nodes only).
    """

    kind: str
    token: dict[str, Any]
    type: str
    children: list["ASTDict"]


class ASTNode:
    """
    A node in the parse forest.

    Build nodes with `ASTNode.leaf(token)` or `ASTNode.internal(ast_type, children)`.
    The variant-specific accessors (`token`, `ast_type`, `children`) raise
    `TypeError` when used on the other variant; check `is_leaf()` or
    `is_internal()` first.
    """

    __slots__ = ("_token", "_ast_type", "_children")

    def __init__(
        self,
        token: Token | None = None,
        ast_type: NodeKind | None = None,
        children: Iterable[ASTNode] = (),
    ):
        if (token is None) == (ast_type is None):
            raise TypeError("ASTNode needs exactly one of a token or an AST type")
        self._token = token
        self._ast_type = ast_type
        self._children: tuple[ASTNode, ...] = tuple(children)
        if token is not None and self._children:
            raise TypeError("Leaf ASTNodes cannot have children")

    @classmethod
    def leaf(cls, token: Token) -> ASTNode:
        return cls(token=token)

    @classmethod
    def internal(cls, ast_type: NodeKind, children: Iterable[ASTNode]) -> ASTNode:
        return cls(ast_type=ast_type, children=children)

    def is_leaf(self) -> bool:
        return self._token is not None

    def is_internal(self) -> bool:
        return self._ast_type is not None

    @property
    def token(self) -> Token:
        if self._token is None:
            name = self._ast_type.name  # type: ignore[union-attr]
            raise TypeError(f"Internal node {name} has no token")
        return self._token

    @property
    def ast_type(self) -> NodeKind:
        if self._ast_type is None:
            raise TypeError(f"Leaf node {self._token!r} has no AST type")
        return self._ast_type

    @property
    def children(self) -> tuple[ASTNode, ...]:
        if self._ast_type is None:
            raise TypeError(f"Leaf node {self._token!r} has no children")
        return self._children

    def walk(self) -> Iterator[ASTNode]:
        """Yields this node and all descendants, depth-first, parents first."""
        yield self
        for child in self._children:
            yield from child.walk()

    def leaves(self) -> Iterator[Token]:
        """Yields the tokens under this node in source order."""
        for node in self.walk():
            if node.is_leaf():
                yield node.token

    def __repr__(self) -> str:
        if self._token is not None:
            return f"ASTNode({self._token!r})"
        preview = ", ".join(repr(c) for c in self._children[:3])
        if len(self._children) > 3:
            preview += ", ..."
        return f"ASTNode({self.ast_type.name}, children=[{preview}])"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ASTNode):
            return NotImplemented
        return (
            self._token == other._token
            and self._ast_type == other._ast_type
            and self._children == other._children
        )

    def __hash__(self) -> int:
        return hash((self._token, self._ast_type, self._children))

    def to_dict(self) -> ASTDict:
        if self._token is not None:
            return {"kind": "leaf", "token": self._token.to_dict()}
        return {
            "kind": "internal",
            "type": self.ast_type.name,
            "children": [c.to_dict() for c in self._children],
        }

    def pretty(self, depth: int = 0) -> str:
        """Renders the node as an indented brace/bracket tree."""
        indent = " " * (4 * depth)
        if self._token is not None:
            tok = self._token
            delim = "'" if len(tok.text) == 1 else '"'
            return f"{indent}[{tok.type.name}: {delim}{tok.text}{delim}]"
        lines = [f"{indent}{{{self.ast_type.name}:"]
        lines.extend(child.pretty(depth + 1) for child in self._children)
        lines.append(f"{indent}}}")
        return "\n".join(lines)


__all__ = ["ASTDict", "ASTNode"]
