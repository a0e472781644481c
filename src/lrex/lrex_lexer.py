"""
Table-driven lexical analyzer for lrex grammars.

This module converts raw input text into a list of typed tokens using an ordered
match table supplied by the grammar author:

Classes:
    CharacterStream: Cursor over the input with line/column tracking.
    Token: An immutable token with type, text, and source location.
    Lexer: Applies a match table to produce tokens.

Features:
    - First-match semantics: match-table entries are tried in declaration order
      and the first one that advances the cursor wins. Put specific entries
      (keywords such as `print`) before general ones (identifiers).
    - Optionally skips space characters (only `" "`) around tokens.
    - Tracks 1-based line and column numbers; a newline starts a new line.

Raises:
    LexError: If no match-table entry advances the cursor.

Example:
    >>> lexer = Lexer([(match_digits, Tok.INT), ("+", Tok.PLUS)])
    >>> lexer.lex("1 + 2")
    [Token(INT, '1', 1:1), Token(PLUS, '+', 1:3), Token(INT, '2', 1:5)]
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from lrex.lrex_errors import SNIPPET_LIMIT, LexError
from lrex.lrex_match import MatchPair

LOGGER = logging.getLogger(__name__)


class CharacterStream:
    """
    A cursor over a string source with line and column tracking.

    The lexer advances the stream by whole matches; the stream keeps the
    location metadata used for tokens and error messages.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
        line_start (int): Index of the first character of the current line.
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column
        self.line_start = position

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            IndexError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise IndexError(
                "Attempted to read past end of source at "
                f"position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        self.position += 1
        if char == "\n":
            self.line += 1
            self.column = 1
            self.line_start = self.position
        else:
            self.column += 1
        return char

    def advance_to(self, index: int) -> str:
        """Consumes characters up to `index` and returns the consumed text."""
        start = self.position
        while self.position < index:
            self.next()
        return self.source[start:index]

    def skip_spaces(self) -> None:
        """Consumes space characters (not tabs or newlines)."""
        while self.current() == " ":
            self.next()

    def current(self) -> str | None:
        """Returns the character under the cursor, or None at end of input."""
        return self.source[self.position] if self.position < len(self.source) else None

    def line_prefix(self) -> str:
        """Returns the consumed text of the current line."""
        return self.source[self.line_start : self.position]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    Attributes:
        type (Enum): The grammar's token type (a `TokenKind` member).
        text (str): The matched source text.
        line (int): 1-based line where the token starts.
        column (int): 1-based column where the token starts.
    """

    type: Enum
    text: str
    line: int = 0
    column: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.text!r}, {self.line}:{self.column})"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.name,
            "text": self.text,
            "line": self.line,
            "column": self.column,
        }


class Lexer:
    """Converts input text into tokens using an ordered match table.

    Attributes:
        match_pairs (tuple[MatchPair, ...]): The match table, in priority order.
    """

    def __init__(self, match_pairs: Iterable[MatchPair | tuple[Any, Enum]]) -> None:
        """Initializes the lexer.

        Args:
            match_pairs: `MatchPair` objects or `(matcher, token_type)` tuples.
                Matchers are coerced through `MatchFunction`.
        """
        self.match_pairs: tuple[MatchPair, ...] = tuple(
            pair if isinstance(pair, MatchPair) else MatchPair.of(*pair)
            for pair in match_pairs
        )

    def lex(self, text: str, ignore_whitespace: bool = True) -> list[Token]:
        """Tokenizes `text` completely.

        Args:
            text: The input string.
            ignore_whitespace: If True, spaces before and after tokens are skipped.

        Returns:
            The tokens in input order; empty for empty (or all-space) input.

        Raises:
            LexError: If some position matches no entry of the match table.
        """
        return list(self.iter_tokens(text, ignore_whitespace))

    def iter_tokens(self, text: str, ignore_whitespace: bool = True) -> Iterator[Token]:
        """Lazily yields tokens; see `lex`."""
        stream = CharacterStream(text)
        if ignore_whitespace:
            stream.skip_spaces()

        while not stream.end_of_file():
            start = stream.position
            pair, end = self._match_at(text, start)
            if pair is None:
                raise self._error(stream)

            line, column = stream.line, stream.column
            token = Token(pair.token_type, stream.advance_to(end), line, column)
            LOGGER.debug("lexed %r", token)
            yield token

            if ignore_whitespace:
                stream.skip_spaces()

    def _match_at(self, text: str, index: int) -> tuple[MatchPair | None, int]:
        for pair in self.match_pairs:
            new_index = pair.func(text, index)
            if new_index > len(text) or new_index < index:
                raise ValueError(
                    f"Matcher {pair.func.description} returned out-of-range index "
                    f"{new_index} (start {index}, input length {len(text)})"
                )
            if new_index > index:
                return pair, new_index
        return None, index

    @staticmethod
    def _error(stream: CharacterStream) -> LexError:
        snippet = stream.source[stream.position : stream.position + SNIPPET_LIMIT]
        snippet = snippet.split("\n", 1)[0]
        return LexError(stream.line, stream.column, snippet, prefix=stream.line_prefix())


__all__ = ["CharacterStream", "Lexer", "Token"]
