"""
Match functions: the scanning primitives behind every lexer rule.

A match function takes the input text and a start index and returns the index
just past a successful match, or the start index unchanged on failure. Match
functions are pure, so the lexer may call them repeatedly and in any order.

Classes:
    MatchFunction: Wraps a callable, literal string, literal character, or regex.
    MatchPair: Pairs a MatchFunction with the token type it produces.

Functions:
    match_digits, match_identifier, match_newline: Stock scanners.

Example:
    >>> plus = MatchFunction("+")
    >>> plus("1+2", 1)
    2
    >>> plus("1+2", 0)
    0
"""

from __future__ import annotations

import re
from collections.abc import Callable
from enum import Enum
from typing import Any, NamedTuple

from lrex.lrex_errors import GrammarError

Scanner = Callable[[str, int], int]
"""Signature shared by all scanners: `(text, index) -> new_index`."""


class MatchFunction:
    """A single scanning unit with a uniform `(text, index) -> int` contract.

    `MatchFunction(source)` accepts:
        - a callable, used as-is;
        - a one-character string, matched as a literal character;
        - a longer string, matched as a literal prefix.

    Attributes:
        description (str): Human-readable summary used in reprs and rule dumps.
    """

    def __init__(self, source: Scanner | str, description: str | None = None):
        if isinstance(source, MatchFunction):
            self._func: Scanner = source._func
            self.description = description or source.description
        elif isinstance(source, str):
            if not source:
                raise GrammarError("Literal matchers cannot be empty")
            self._func = _char_scanner(source) if len(source) == 1 else _literal_scanner(source)
            self.description = description or repr(source)
        elif callable(source):
            self._func = source
            self.description = description or getattr(source, "__name__", repr(source))
        else:
            raise GrammarError(f"Cannot build a matcher from {source!r}")

    @classmethod
    def literal(cls, text: str) -> MatchFunction:
        """Matches `text` exactly at the current index."""
        if not text:
            raise GrammarError("Literal matchers cannot be empty")
        return cls(_literal_scanner(text), repr(text))

    @classmethod
    def char(cls, c: str) -> MatchFunction:
        """Matches the single character `c` at the current index."""
        if len(c) != 1:
            raise GrammarError(f"Character matcher needs exactly one character, got {c!r}")
        return cls(_char_scanner(c), repr(c))

    @classmethod
    def regex(cls, pattern: str | re.Pattern[str]) -> MatchFunction:
        """Matches a regular expression anchored at the current index.

        A zero-length match counts as a failure.
        """
        try:
            compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
        except re.error as e:
            raise GrammarError(f"Invalid regex {pattern!r}: {e}") from e

        def scan(text: str, index: int) -> int:
            m = compiled.match(text, index)
            return m.end() if m else index

        return cls(scan, f"/{compiled.pattern}/")

    def __call__(self, text: str, index: int) -> int:
        return self._func(text, index)

    def __repr__(self) -> str:
        return f"MatchFunction({self.description})"


def _literal_scanner(literal: str) -> Scanner:
    def scan(text: str, index: int) -> int:
        return index + len(literal) if text.startswith(literal, index) else index

    return scan


def _char_scanner(c: str) -> Scanner:
    def scan(text: str, index: int) -> int:
        return index + 1 if index < len(text) and text[index] == c else index

    return scan


def match_digits(text: str, index: int) -> int:
    """Scans a run of ASCII decimal digits."""
    end = index
    while end < len(text) and "0" <= text[end] <= "9":
        end += 1
    return end


def match_identifier(text: str, index: int) -> int:
    """Scans a letter or underscore followed by letters, digits, or underscores."""
    if index >= len(text) or not (text[index].isalpha() or text[index] == "_"):
        return index
    end = index + 1
    while end < len(text) and (text[end].isalnum() or text[end] == "_"):
        end += 1
    return end


def match_newline(text: str, index: int) -> int:
    """Scans one line feed."""
    return index + 1 if index < len(text) and text[index] == "\n" else index


STOCK_MATCHERS: dict[str, Scanner] = {
    "digits": match_digits,
    "identifier": match_identifier,
    "newline": match_newline,
}


class MatchPair(NamedTuple):
    """One entry of a lexer's match table."""

    func: MatchFunction
    token_type: Enum

    @classmethod
    def of(cls, source: Any, token_type: Enum) -> MatchPair:
        """Builds a pair, coercing `source` through `MatchFunction`."""
        return cls(MatchFunction(source), token_type)

    def __repr__(self) -> str:
        return f"MatchPair({self.func.description} -> {self.token_type.name})"


__all__ = [
    "MatchFunction",
    "MatchPair",
    "STOCK_MATCHERS",
    "Scanner",
    "match_digits",
    "match_identifier",
    "match_newline",
]
