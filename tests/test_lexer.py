from enum import auto

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lrex.lrex_errors import LexError
from lrex.lrex_examples import ArithToken as T
from lrex.lrex_grammar import TokenKind
from lrex.lrex_lexer import CharacterStream, Lexer, Token
from lrex.lrex_match import MatchPair, match_digits, match_identifier, match_newline


class Tok(TokenKind):
    PRINT = auto()
    NAME = auto()
    NUM = auto()
    NL = auto()


def types(tokens: list[Token]) -> list[str]:
    return [t.type.name for t in tokens]


def test_character_stream_tracks_lines() -> None:
    cs = CharacterStream("ab\ncd")
    assert cs.advance_to(4) == "ab\nc"
    assert (cs.line, cs.column) == (2, 2)
    assert cs.line_prefix() == "c"
    assert cs.current() == "d"


def test_character_stream_read_past_end() -> None:
    cs = CharacterStream("")
    assert cs.end_of_file()
    assert cs.current() is None
    with pytest.raises(IndexError):
        cs.next()


def test_character_stream_skips_spaces_only() -> None:
    cs = CharacterStream("  \t x")
    cs.skip_spaces()
    assert cs.position == 2
    assert cs.column == 3


def test_arith_tokens(arith) -> None:  # type: ignore[no-untyped-def]
    tokens = arith.lex("print(1 + 22)")
    assert types(tokens) == ["PRINT", "LPAREN", "INT", "PLUS", "INT", "RPAREN"]
    assert [t.text for t in tokens] == ["print", "(", "1", "+", "22", ")"]


def test_token_positions(arith) -> None:  # type: ignore[no-untyped-def]
    tokens = arith.lex("  12 *  3")
    assert [(t.line, t.column) for t in tokens] == [(1, 3), (1, 6), (1, 9)]


def test_token_repr_and_dict() -> None:
    tok = Token(T.INT, "7", 2, 4)
    assert repr(tok) == "Token(INT, '7', 2:4)"
    assert tok.to_dict() == {"type": "INT", "text": "7", "line": 2, "column": 4}


def test_token_is_immutable() -> None:
    tok = Token(T.INT, "7", 1, 1)
    with pytest.raises(AttributeError):
        tok.text = "8"  # type: ignore[misc]


def test_empty_and_blank_input(arith) -> None:  # type: ignore[no-untyped-def]
    assert arith.lex("") == []
    assert arith.lex("    ") == []


def test_first_match_wins_keyword_first() -> None:
    lexer = Lexer([("print", Tok.PRINT), (match_identifier, Tok.NAME)])
    assert types(lexer.lex("print printer")) == ["PRINT", "PRINT", "NAME"]


def test_first_match_wins_identifier_first() -> None:
    lexer = Lexer([(match_identifier, Tok.NAME), ("print", Tok.PRINT)])
    assert types(lexer.lex("print printer")) == ["NAME", "NAME"]


def test_accepts_match_pairs() -> None:
    lexer = Lexer([MatchPair.of(match_digits, Tok.NUM)])
    assert lexer.lex("42") == [Token(Tok.NUM, "42", 1, 1)]


def test_spaces_kept_when_not_ignoring() -> None:
    lexer = Lexer([(match_digits, Tok.NUM)])
    with pytest.raises(LexError) as e:
        lexer.lex("1 2", ignore_whitespace=False)
    assert (e.value.line, e.value.column) == (1, 2)


def test_tabs_are_not_skipped() -> None:
    lexer = Lexer([(match_digits, Tok.NUM)])
    with pytest.raises(LexError):
        lexer.lex("1\t2")


def test_lex_error_location_and_snippet(arith) -> None:  # type: ignore[no-untyped-def]
    with pytest.raises(LexError) as e:
        arith.lex("1 & 2")
    err = e.value
    assert (err.line, err.column) == (1, 3)
    assert err.snippet == "& 2"
    assert err.prefix == "1 "
    assert err.render() == "Invalid token at 1:3:\n    1 & 2\n      ~~~"


def test_lex_error_snippet_is_bounded(arith) -> None:  # type: ignore[no-untyped-def]
    with pytest.raises(LexError) as e:
        arith.lex("1 + " + "x" * 50)
    assert e.value.snippet == "x" * 20


def test_lex_error_snippet_stops_at_newline() -> None:
    lexer = Lexer([(match_digits, Tok.NUM), (match_newline, Tok.NL)])
    with pytest.raises(LexError) as e:
        lexer.lex("12\n3?4\n56")
    assert (e.value.line, e.value.column) == (2, 2)
    assert e.value.snippet == "?4"
    assert e.value.prefix == "3"


def test_newlines_advance_lines() -> None:
    lexer = Lexer([(match_digits, Tok.NUM), (match_newline, Tok.NL)])
    tokens = lexer.lex("1 \n 22\n\n3")
    nums = [(t.text, t.line, t.column) for t in tokens if t.type is Tok.NUM]
    assert nums == [("1", 1, 1), ("22", 2, 2), ("3", 4, 1)]


def test_out_of_range_matcher_is_a_fault() -> None:
    lexer = Lexer([(lambda text, index: index + 5, Tok.NUM)])
    with pytest.raises(ValueError, match="out-of-range"):
        lexer.lex("12")


def test_iter_tokens_is_lazy(arith) -> None:  # type: ignore[no-untyped-def]
    gen = arith.lexer.iter_tokens("1 + &")
    assert next(gen).text == "1"
    assert next(gen).text == "+"
    with pytest.raises(LexError):
        next(gen)


@given(st.text(alphabet="0123456789+-*/() ", max_size=40))  # type: ignore[misc]
def test_lexing_is_deterministic(source: str) -> None:
    lexer = Lexer([(match_digits, T.INT), ("+", T.PLUS), ("-", T.MINUS), ("*", T.STAR),
                   ("/", T.SLASH), ("(", T.LPAREN), (")", T.RPAREN)])
    first = lexer.lex(source)
    assert lexer.lex(source) == first
    assert "".join(t.text for t in first) == source.replace(" ", "")


@given(
    st.lists(st.text(alphabet="0123456789", min_size=1, max_size=5), min_size=1, max_size=10)
)  # type: ignore[misc]
def test_one_line_per_newline(lines: list[str]) -> None:
    lexer = Lexer([(match_digits, Tok.NUM), (match_newline, Tok.NL)])
    tokens = lexer.lex("\n".join(lines))
    nums = [t for t in tokens if t.type is Tok.NUM]
    assert [(t.line, t.column) for t in nums] == [(i + 1, 1) for i in range(len(lines))]
    newlines = [t for t in tokens if t.type is Tok.NL]
    assert [(t.line, t.column) for t in newlines] == [
        (i + 1, len(line) + 1) for i, line in enumerate(lines[:-1])
    ]
