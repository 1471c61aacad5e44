from pathlib import Path
import logging

from .ast import NodeIds, Program
from .lexer import Token, tokenize
from .parser import Parser
from .visitors import dump_json


DEMO_SOURCE = """\
int a; real r; bool ok;
5 -> a; 2.5 -> r; true -> ok;
if (a < 10 and not (r >= 2.0)) print(1); else print(0);
"""


def parse_source(source: str, ids: NodeIds | None = None) -> Program:
    """
    Lex and parse one input unit.

    Raises LexError or ParseError; a failed parse never yields a partial tree.
    """
    tokens = tokenize(source)
    logging.debug(f"Lexed {len(tokens) - 1} tokens")
    return Parser(tokens, ids).parse()


def format_tokens(tokens: list[Token]) -> str:
    lines = [f"{t.kind}\t'{t.lexeme}' @{t.line}:{t.col}" for t in tokens]
    count = sum(1 for t in tokens if t.kind != "EOF")
    lines.append(f"Total tokens (without EOF): {count}")
    return "\n".join(lines)


def write_json(program: Program, output_path: str | Path) -> Path:
    """
    Serialize `program` to JSON and write it to disk.
    """
    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(dump_json(program) + "\n", encoding="utf-8")
    logging.info(f"Generated {out}")
    return out
