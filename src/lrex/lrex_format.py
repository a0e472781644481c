"""
Renders parse forests and token streams as text.

Classes and Features:
    - Renderer (Protocol): Interface for output renderers.
    - TreeRenderer: Indented brace/bracket layout, one tree after another.
    - JsonRenderer: An indented JSON list of `ASTNode.to_dict()` values.
    - Formatter: Picks a renderer by target name and hands it each top-level
      node of a forest.
    - format_tokens: One `LINE:COLUMN TYPE 'text'` line per token.

Example:
    >>> Formatter("tree").format(forest)

Raises:
    ValueError: If the target name is not supported.
"""

import json
from typing import Protocol

from lrex.lrex_ast import ASTNode
from lrex.lrex_lexer import Token


class Renderer(Protocol):  # pragma: no cover
    """Protocol for forest renderers.

    `Formatter` makes a fresh renderer per call, passes it each top-level
    node with `render`, then reads the finished text from `get_output`.
    """

    def render(self, node: ASTNode) -> None: ...

    def get_output(self) -> str: ...


class TreeRenderer:
    def __init__(self) -> None:
        self.blocks: list[str] = []

    def render(self, node: ASTNode) -> None:
        self.blocks.append(node.pretty())

    def get_output(self) -> str:
        return "\n".join(self.blocks)


class JsonRenderer:
    def __init__(self) -> None:
        self.items: list[object] = []

    def render(self, node: ASTNode) -> None:
        self.items.append(node.to_dict())

    def get_output(self) -> str:
        return json.dumps(self.items, indent=2)


RENDERERS: dict[str, type[Renderer]] = {
    "tree": TreeRenderer,
    "json": JsonRenderer,
}


class Formatter:
    """Renders forests with the renderer for a target format.

    Attributes:
        renderer_cls (type[Renderer]): The renderer class for the chosen target.
    """

    def __init__(self, target: str = "tree") -> None:
        """
        Args:
            target: One of the keys of `RENDERERS` (case-insensitive).

        Raises:
            ValueError: If the target is not supported.
        """
        target = target.lower()
        if target not in RENDERERS:
            raise ValueError(f"Unknown output format: {target!r}")
        self.target = target
        self.renderer_cls: type[Renderer] = RENDERERS[target]

    def format(self, forest: list[ASTNode]) -> str:
        """Renders every node of `forest` and returns the output.

        Raises:
            TypeError: If the forest contains something other than ASTNodes.
        """
        if not all(isinstance(node, ASTNode) for node in forest):
            raise TypeError("All items in the forest must be ASTNode instances.")
        renderer = self.renderer_cls()
        for node in forest:
            renderer.render(node)
        return renderer.get_output()


def format_tokens(tokens: list[Token]) -> str:
    return "\n".join(f"{t.line}:{t.column} {t.type.name} {t.text!r}" for t in tokens)


__all__ = [
    "Formatter",
    "JsonRenderer",
    "RENDERERS",
    "Renderer",
    "TreeRenderer",
    "format_tokens",
]
