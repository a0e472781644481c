"""
Error types raised by the lrex lexer, parser, and grammar loader.

Classes:
    LexError: No match-table entry could advance the cursor.
    ParseError: A token could neither be shifted nor made reducible.
    GrammarError: A rule, item, or grammar configuration is malformed.

Lexing and parsing failures subclass `SyntaxError` so that callers can treat
malformed input uniformly. Both are terminal for the call that raised them:
no partial token list or forest is ever returned alongside an error.

Example:
    >>> err = LexError(1, 3, "& 2", prefix="1 ")
    >>> print(err.render())
    Invalid token at 1:3:
        1 & 2
          ~~~
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lrex.lrex_lexer import Token

SNIPPET_LIMIT = 20


class LexError(SyntaxError):
    """Raised when the lexer cannot match any token at the current position.

    Attributes:
        line (int): 1-based line of the offending input.
        column (int): 1-based column of the offending input.
        snippet (str): Up to `SNIPPET_LIMIT` characters of the remaining input,
            cut at the first newline.
        prefix (str): Text of the current line preceding the offending input.
    """

    def __init__(self, line: int, column: int, snippet: str, prefix: str = ""):
        super().__init__(f"Invalid token at {line}:{column}: {snippet!r}")
        self.line = line
        self.column = column
        self.snippet = snippet
        self.prefix = prefix

    def render(self) -> str:
        """Renders a caret-style diagnostic underlining the snippet.

        Returns:
            A three-line message: location, source line, and `~` markers.
        """
        indent = " " * 4
        return "\n".join(
            [
                f"Invalid token at {self.line}:{self.column}:",
                f"{indent}{self.prefix}{self.snippet}",
                f"{indent}{' ' * len(self.prefix)}{'~' * max(len(self.snippet), 1)}",
            ]
        )


class ParseError(SyntaxError):
    """Raised when the shift/reduce driver cannot consume a token.

    Attributes:
        token (Token): The token that could not be shifted or incorporated.
        line (int): Line of that token.
        column (int): Column of that token.
        stack_depth (int): Number of parse stack entries at the time of failure.
    """

    def __init__(self, token: Token, stack_depth: int, reason: str = "Unexpected token"):
        super().__init__(
            f"{reason} {token.type.name} {token.text!r} at {token.line}:{token.column} "
            f"(stack depth {stack_depth})"
        )
        self.token = token
        self.line = token.line
        self.column = token.column
        self.stack_depth = stack_depth


class GrammarError(ValueError):
    """Raised for malformed production items, rules, or grammar files.

    Attributes:
        problems (list[str]): Individual issues found, when several were collected.
    """

    def __init__(self, message: str, problems: list[str] | None = None):
        super().__init__(message)
        self.problems = problems or []

    def __str__(self) -> str:
        base = super().__str__()
        if not self.problems:
            return base
        return base + "".join(f"\n - {p}" for p in self.problems)


__all__ = ["GrammarError", "LexError", "ParseError", "SNIPPET_LIMIT"]
