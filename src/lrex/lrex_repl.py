import logging

from lrex.lrex_config import load_grammar
from lrex.lrex_errors import GrammarError, LexError, ParseError
from lrex.lrex_examples import arithmetic_grammar
from lrex.lrex_format import RENDERERS, Formatter, format_tokens
from lrex.lrex_parser import Grammar

HELP = """Commands:
  :tokens <input>   show the token stream for <input>
  :load <path>      switch to a JSON grammar file
  :rules            list the production rules in priority order
  :format <name>    set the output layout (tree, json)
  verbose-mode      toggle shift/reduce logging
  exit, quit        leave the REPL"""


class ReplSession:
    """State of one REPL session: the active grammar and output layout."""

    def __init__(self, grammar: Grammar | None = None, fmt: str = "tree") -> None:
        self.grammar = grammar or arithmetic_grammar()
        self.fmt = fmt
        self.verbose = False

    def handle_command(self, src: str) -> bool:
        """Runs a `:` command or mode toggle. Returns False if `src` is input to parse."""
        if src.lower() == "verbose-mode":
            self.verbose = not self.verbose
            logging.getLogger("lrex").setLevel(logging.DEBUG if self.verbose else logging.WARNING)
            print(f"[mode] >>> Verbose mode {'ON' if self.verbose else 'OFF'}")
            return True
        if not src.startswith(":"):
            return False

        command, _, arg = src[1:].partition(" ")
        arg = arg.strip()
        if command == "help":
            print(HELP)
        elif command == "rules":
            for idx, r in enumerate(self.grammar.rules):
                print(f"{idx:>3}  {r}")
        elif command == "tokens":
            print(format_tokens(self.grammar.lex(arg)))
        elif command == "format":
            if arg not in RENDERERS:
                print(f"[error] >>> Unknown format: {arg!r}")
            else:
                self.fmt = arg
                print(f"[format] >>> {arg}")
        elif command == "load":
            path = arg.strip('"').strip("'")
            self.grammar = load_grammar(path)
            print(f"[loaded] >>> {path} ({len(self.grammar.rules)} rules)")
        else:
            print(f"[error] >>> Unknown command: :{command}")
        return True

    def evaluate(self, src: str) -> str:
        forest = self.grammar.parse(src)
        return Formatter(self.fmt).format(forest)


def start_repl(grammar: Grammar | None = None, fmt: str = "tree") -> None:
    session = ReplSession(grammar, fmt)
    print("lrex REPL. Type ':help' for commands, 'exit' or 'quit' to leave.")

    while True:
        try:
            src = input(">>> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return
        if src in ("exit", "quit"):
            print("Exiting lrex REPL.")
            return
        if not src:
            continue
        try:
            if session.handle_command(src):
                continue
            print(session.evaluate(src))
        except LexError as e:
            print("[lex error] >>>")
            print(e.render())
        except ParseError as e:
            print(f"[parse error] >>> {e}")
        except GrammarError as e:
            print(f"[grammar error] >>> {e}")
