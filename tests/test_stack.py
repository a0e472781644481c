import pytest

from lrex.lrex_ast import ASTNode
from lrex.lrex_examples import ArithNode as N
from lrex.lrex_examples import ArithToken as T
from lrex.lrex_grammar import NonTerminal, Terminal, rule
from lrex.lrex_lexer import Token
from lrex.lrex_stack import ParseStack

ADD = rule(N.Expr, T.PLUS, N.Expr, result=N.Expr)
INT = rule(T.INT, result=N.Expr)
PRINT = rule(T.PRINT, T.LPAREN, N.Expr, T.RPAREN, result=N.Print)


def leaf(kind: T, text: str = "x") -> ASTNode:
    return ASTNode.leaf(Token(kind, text, 1, 1))


def expr(text: str = "1") -> ASTNode:
    return ASTNode.internal(N.Expr, [leaf(T.INT, text)])


def stack_of(*nodes: ASTNode) -> ParseStack:
    stack = ParseStack()
    for node in nodes:
        stack.push(node)
    return stack


def test_push_len_iter() -> None:
    a, b = leaf(T.INT, "1"), leaf(T.PLUS, "+")
    stack = stack_of(a, b)
    assert len(stack) == 2
    assert list(stack) == [a, b]
    assert stack.nodes() == [a, b]
    assert repr(stack) == "ParseStack(INT PLUS)"


def test_nodes_returns_a_copy() -> None:
    stack = stack_of(leaf(T.INT))
    stack.nodes().clear()
    assert len(stack) == 1


def test_matches_tail_window() -> None:
    stack = stack_of(expr(), leaf(T.PLUS), expr())
    assert stack.matches(ADD)
    assert not stack.matches(INT)


def test_matches_ignores_entries_below_window() -> None:
    stack = stack_of(leaf(T.RPAREN), leaf(T.STAR), expr(), leaf(T.PLUS), expr())
    assert stack.matches(ADD)


def test_matches_short_stack() -> None:
    assert not stack_of(leaf(T.PLUS), expr()).matches(ADD)
    assert not ParseStack().matches(INT)


def test_terminal_does_not_match_internal_node() -> None:
    # An Expr node does not satisfy the INT terminal even though it wraps an INT.
    assert not stack_of(expr()).matches(INT)
    assert stack_of(leaf(T.INT)).matches(INT)


def test_non_terminal_does_not_match_leaf() -> None:
    assert not stack_of(leaf(T.INT), leaf(T.PLUS), leaf(T.INT)).matches(ADD)


def test_matches_partial_at_start_of_pattern() -> None:
    assert ParseStack().matches_partial(Terminal(T.INT), INT)
    assert ParseStack().matches_partial(Terminal(T.PRINT), PRINT)


def test_matches_partial_in_middle_of_pattern() -> None:
    stack = stack_of(leaf(T.PRINT, "print"))
    assert stack.matches_partial(Terminal(T.LPAREN), PRINT)
    assert not stack.matches_partial(Terminal(T.RPAREN), PRINT)
    stack.push(leaf(T.LPAREN, "("))
    stack.push(expr())
    assert stack.matches_partial(Terminal(T.RPAREN), PRINT)


def test_matches_partial_needs_prefix() -> None:
    assert not stack_of(leaf(T.INT)).matches_partial(Terminal(T.PLUS), ADD)
    assert stack_of(expr()).matches_partial(Terminal(T.PLUS), ADD)


def test_matches_partial_item_not_in_rule() -> None:
    assert not stack_of(expr()).matches_partial(Terminal(T.STAR), ADD)
    assert not ParseStack().matches_partial(NonTerminal(N.Print), ADD)


def test_matches_partial_does_not_mutate() -> None:
    stack = stack_of(expr(), leaf(T.PLUS))
    before = stack.nodes()
    stack.matches_partial(NonTerminal(N.Expr), ADD)
    assert stack.nodes() == before


def test_apply_reduces_window() -> None:
    bottom = leaf(T.LPAREN, "(")
    window = [expr("1"), leaf(T.PLUS, "+"), expr("2")]
    stack = stack_of(bottom, *window)
    node = stack.apply(ADD)
    assert len(stack) == 4 - (len(ADD) - 1)
    assert stack.nodes() == [bottom, node]
    assert node.ast_type is N.Expr
    assert list(node.children) == window


def test_apply_single_component() -> None:
    stack = stack_of(leaf(T.INT, "7"))
    node = stack.apply(INT)
    assert len(stack) == 1
    assert node.children[0].token.text == "7"


def test_apply_without_match_is_a_fault() -> None:
    stack = stack_of(leaf(T.INT))
    with pytest.raises(AssertionError):
        stack.apply(ADD)
    assert len(stack) == 1
