import json
import os
from pathlib import Path
from typing import Any

import pytest

from lrex.lrex_examples import arithmetic_grammar
from lrex.lrex_parser import Grammar

# Start coverage in subprocesses spawned by CLI tests
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()


CALC_CONFIG: dict[str, Any] = {
    "tokens": [
        {"type": "LET", "literal": "let"},
        {"type": "NAME", "match": "identifier"},
        {"type": "NUM", "regex": "[0-9]+"},
        {"type": "EQ", "literal": "="},
        {"type": "PLUS", "literal": "+"},
        {"type": "SEMI", "literal": ";"},
        {"type": "NL", "match": "newline"},
    ],
    "rules": [
        {"pattern": ["LET", "NAME", "EQ", "Value", "SEMI"], "result": "Stmt"},
        {"pattern": ["NUM"], "result": "Value"},
        {"pattern": ["NAME"], "result": "Value"},
        {"pattern": ["Value", "PLUS", "Value"], "result": "Value"},
        {"pattern": ["Stmt", "NL", "Stmt"], "result": "Stmt"},
    ],
}


@pytest.fixture
def arith() -> Grammar:
    return arithmetic_grammar()


@pytest.fixture
def calc_config() -> dict[str, Any]:
    return json.loads(json.dumps(CALC_CONFIG))


@pytest.fixture
def grammar_file(tmp_path: Path) -> Path:
    path = tmp_path / "calc.json"
    path.write_text(json.dumps(CALC_CONFIG), encoding="utf-8")
    return path
