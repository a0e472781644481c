"""
Loads lrex grammars from JSON configuration files.

A grammar file lists the match table and the production rules, both in
priority order:

    {
        "tokens": [
            {"type": "INT", "match": "digits"},
            {"type": "PLUS", "literal": "+"},
            {"type": "NAME", "regex": "[a-z]+"}
        ],
        "rules": [
            {"pattern": ["INT"], "result": "Expr"},
            {"pattern": ["Expr", "PLUS", "Expr"], "result": "Expr"}
        ]
    }

Each token entry names its `type` and exactly one matcher: `match` (a stock
scanner from `STOCK_MATCHERS`), `literal`, or `regex`. Token types are the
distinct `type` values; node types are the distinct rule `result` values.
Pattern symbols resolve against both sets.

All problems in a configuration are collected and reported together in a
single GrammarError.

Usage:
    >>> grammar = load_grammar("calc.json")
    >>> grammar.parse("1+2")
"""

import json
import logging
from typing import Any

from lrex.lrex_errors import GrammarError
from lrex.lrex_grammar import (
    NodeKind,
    NonTerminal,
    ProductionItem,
    ProductionRule,
    Terminal,
    TokenKind,
)
from lrex.lrex_match import STOCK_MATCHERS, MatchFunction, MatchPair
from lrex.lrex_parser import Grammar

LOGGER = logging.getLogger(__name__)

MATCHER_KEYS = ("match", "literal", "regex")


def load_grammar(path: str) -> Grammar:
    """
    Reads a JSON grammar file and builds a Grammar from it.

    Args:
        path: Path to the JSON file.

    Raises:
        GrammarError: If the file cannot be read or decoded, or the grammar is invalid.
    """
    try:
        with open(path, encoding="utf-8") as f:
            raw_cfg = json.load(f)
    except (OSError, ValueError) as e:
        raise GrammarError(f"Failed to load grammar file {path}: {e}") from e
    grammar = grammar_from_dict(raw_cfg)
    LOGGER.info(
        "loaded grammar %s: %d matchers, %d rules",
        path,
        len(grammar.lexer.match_pairs),
        len(grammar.rules),
    )
    return grammar


def grammar_from_dict(cfg: Any, name: str = "Grammar") -> Grammar:
    """
    Builds a Grammar from an already-decoded configuration object.

    Args:
        cfg: A dict with `tokens` and `rules` lists.
        name: Prefix for the generated enumeration class names.

    Raises:
        GrammarError: Listing every problem found in `cfg`.
    """
    if not isinstance(cfg, dict):
        raise GrammarError("Grammar configuration must be a JSON object")
    token_entries = cfg.get("tokens")
    rule_entries = cfg.get("rules")
    if not isinstance(token_entries, list) or not isinstance(rule_entries, list):
        raise GrammarError("Grammar configuration needs 'tokens' and 'rules' lists")

    problems: list[str] = []

    token_names = _unique(e.get("type") for e in token_entries if isinstance(e, dict))
    node_names = _unique(r.get("result") for r in rule_entries if isinstance(r, dict))
    for clash in sorted(set(token_names) & set(node_names)):
        problems.append(f"'{clash}' is both a token type and a node type")
    for sym in token_names + node_names:
        if not sym.isidentifier() or sym.startswith("_"):
            problems.append(f"'{sym}' is not a valid symbol name")
    if not token_names:
        problems.append("no token types declared")
    if not node_names:
        problems.append("no rules declared")
    if problems:
        raise GrammarError("Invalid grammar configuration", problems)

    token_kind = TokenKind(f"{name}Token", token_names)  # type: ignore[call-overload]
    node_kind = NodeKind(f"{name}Node", node_names)  # type: ignore[call-overload]

    pairs: list[MatchPair] = []
    for idx, entry in enumerate(token_entries):
        try:
            pairs.append(MatchPair(_matcher(entry), token_kind[entry["type"]]))
        except (GrammarError, KeyError, TypeError) as e:
            problems.append(f"tokens[{idx}]: {_describe(e)}")

    rules: list[ProductionRule] = []
    for idx, entry in enumerate(rule_entries):
        try:
            pattern = [_resolve(sym, token_kind, node_kind) for sym in entry["pattern"]]
            rules.append(ProductionRule(pattern, NonTerminal(node_kind[entry["result"]])))
        except (GrammarError, KeyError, TypeError) as e:
            problems.append(f"rules[{idx}]: {_describe(e)}")

    if problems:
        raise GrammarError("Invalid grammar configuration", problems)
    return Grammar(pairs, rules)


def _unique(names: Any) -> list[str]:
    seen: list[str] = []
    for n in names:
        if isinstance(n, str) and n and n not in seen:
            seen.append(n)
    return seen


def _matcher(entry: dict[str, Any]) -> MatchFunction:
    keys = [k for k in MATCHER_KEYS if k in entry]
    if len(keys) != 1:
        raise GrammarError(
            f"expected exactly one of {', '.join(MATCHER_KEYS)}, got {keys or 'none'}"
        )
    key = keys[0]
    value = entry[key]
    if not isinstance(value, str):
        raise GrammarError(f"'{key}' must be a string")
    if key == "match":
        if value not in STOCK_MATCHERS:
            raise GrammarError(f"unknown stock matcher '{value}'")
        return MatchFunction(STOCK_MATCHERS[value], value)
    if key == "regex":
        return MatchFunction.regex(value)
    return MatchFunction.literal(value)


def _resolve(symbol: Any, token_kind: type[TokenKind], node_kind: type[NodeKind]) -> ProductionItem:
    if symbol in token_kind.__members__:
        return Terminal(token_kind[symbol])
    if symbol in node_kind.__members__:
        return NonTerminal(node_kind[symbol])
    raise GrammarError(f"unknown symbol {symbol!r}")


def _describe(e: Exception) -> str:
    if isinstance(e, KeyError):
        return f"missing or unknown key {e}"
    return str(e)


__all__ = ["grammar_from_dict", "load_grammar"]
