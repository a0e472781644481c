"""
lrex CLI Entrypoint.

This module provides the command-line interface for lexing and parsing input
with an lrex grammar.

Features:
    - Read input from a file or an inline string.
    - Use the built-in arithmetic grammar or load a JSON grammar file.
    - Print the token stream or the parse forest (tree or JSON layout).
    - Output to console or file.
    - Launch an interactive REPL.

Example usage:
    lrex -s "print(1 + 2 * 3)"
    lrex input.txt -g calc.json -f json -o forest.json
    lrex -s "1 + 2" --tokens
    lrex --repl --verbose

Functions:
    run_lrex(source, is_string=False, grammar_path=None, fmt="tree", out=None,
             tokens_only=False, ignore_whitespace=True, strict=True) -> str:
        Runs the lex → parse → format pipeline and writes the result.

    main(argv=None) -> int:
        Parses CLI arguments, configures logging, and dispatches.
"""

import argparse
import logging
import sys

from lrex.lrex_config import load_grammar
from lrex.lrex_errors import GrammarError, LexError, ParseError
from lrex.lrex_examples import arithmetic_grammar
from lrex.lrex_format import RENDERERS, Formatter, format_tokens
from lrex.lrex_parser import Grammar


def resolve_grammar(grammar_path: str | None) -> Grammar:
    return load_grammar(grammar_path) if grammar_path else arithmetic_grammar()


def run_lrex(
    source: str,
    is_string: bool = False,
    grammar_path: str | None = None,
    fmt: str = "tree",
    out: str | None = None,
    tokens_only: bool = False,
    ignore_whitespace: bool = True,
    strict: bool = True,
) -> str:
    """
    Run the lrex pipeline: lex, parse, format, and print or write the output.

    Args:
        source (str): Input text, or a path to a file holding it.
        is_string (bool): If True, treats `source` as the input text itself.
        grammar_path (str | None): JSON grammar file; defaults to the arithmetic grammar.
        fmt (str): Output layout for the forest ('tree' or 'json').
        out (str | None): Optional path to write the output to instead of stdout.
        tokens_only (bool): If True, stop after lexing and print the tokens.
        ignore_whitespace (bool): Skip spaces around tokens. Defaults to True.
        strict (bool): Reject tokens left unreduced. Defaults to True.

    Returns:
        The formatted output.

    Raises:
        LexError, ParseError, GrammarError: On invalid input or grammar.
    """
    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    grammar = resolve_grammar(grammar_path)

    # 2. Lexing
    tokens = grammar.lex(source, ignore_whitespace)

    # 3. Parsing and formatting
    if tokens_only:
        output = format_tokens(tokens)
    else:
        forest = grammar.parser.parse(tokens, strict=strict)
        output = Formatter(fmt).format(forest)

    # 4. Output result
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(output + "\n")
    else:
        print(output)
    return output


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lrex")
    parser.add_argument("source", nargs="?", help="Input file, or raw input (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal input"
    )
    parser.add_argument("-g", "--grammar", metavar="FILE", help="JSON grammar file")
    parser.add_argument(
        "-f",
        "--format",
        dest="fmt",
        choices=sorted(RENDERERS),
        default="tree",
        help="Forest output layout (default: tree)",
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Print the token stream instead of parsing"
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "--no-skip-spaces",
        dest="ignore_whitespace",
        action="store_false",
        help="Do not skip spaces between tokens",
    )
    parser.add_argument(
        "--lax",
        dest="strict",
        action="store_false",
        help="Allow tokens left unreduced at the top level",
    )
    parser.add_argument("--repl", action="store_true", help="Launch the interactive REPL")
    parser.add_argument("--verbose", action="store_true", help="Log shift/reduce steps")
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the lrex CLI.

    With no arguments, or with `--repl`, starts the REPL. Otherwise runs the
    pipeline once. Lexing, parsing and grammar errors are printed to stderr
    and give exit status 1.
    """
    args = build_arg_parser().parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.repl or args.source is None:
            from lrex.lrex_repl import start_repl

            start_repl(grammar=resolve_grammar(args.grammar), fmt=args.fmt)
            return 0
        run_lrex(
            source=args.source,
            is_string=args.string,
            grammar_path=args.grammar,
            fmt=args.fmt,
            out=args.out,
            tokens_only=args.tokens,
            ignore_whitespace=args.ignore_whitespace,
            strict=args.strict,
        )
    except LexError as e:
        print(e.render(), file=sys.stderr)
        return 1
    except (ParseError, GrammarError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
