import sys
import logging
import argparse
from pathlib import Path

from .ast import NodeIds
from .frontend import DEMO_SOURCE, format_tokens, parse_source, write_json
from .lexer import LexError, tokenize
from .parser import ParseError
from .visitors import dump_json, print_tree


def load_inputs(paths: list[str]) -> list[tuple[str, str | None]]:
    """
    Read every input file; unreadable ones come back with source None.
    With no paths, the built-in demo program is used.
    """
    if not paths:
        return [("(inline)", DEMO_SOURCE)]
    inputs = []
    for p in paths:
        try:
            inputs.append((p, Path(p).read_text(encoding="utf-8")))
        except OSError as e:
            logging.error(f"Error: cannot read '{p}' ({e.strerror or e})")
            inputs.append((p, None))
    return inputs


def report_parse_error(name: str, e: ParseError) -> None:
    logging.error(f"{name}:{e}")
    logging.error(f"  last token: {e.last_token}")
    logging.error(f"  error token: {e.error_token}")


def json_output_path(output_dir: str, name: str, taken: set[Path]) -> Path:
    """
    DIR/<stem>.json for `name`; inputs sharing a stem get <stem>_2.json, ...
    so no output overwrites another from the same batch.
    """
    stem = Path(name).stem if name != "(inline)" else "program"
    out = Path(output_dir) / f"{stem}.json"
    n = 2
    while out in taken:
        out = Path(output_dir) / f"{stem}_{n}.json"
        n += 1
    if n > 2:
        logging.warning(f"Warning: '{name}' shares its name with an earlier input, writing {out}")
    taken.add(out)
    return out


def run_one(command: str, name: str, source: str, ids: NodeIds,
            output_dir: str | None, taken: set[Path]):
    if command == "tokens":
        print(f"=== TOKENS for: {name} ===")
        print(format_tokens(tokenize(source)))
        return

    program = parse_source(source, ids)
    if command == "tree":
        print(f"=== SYNTAX TREE for: {name} ===")
        print(print_tree(program))
    elif command == "json":
        if output_dir is None:
            print(dump_json(program))
        else:
            write_json(program, json_output_path(output_dir, name, taken))


def main(argv=None):
    parser = argparse.ArgumentParser(prog="begend")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="If set, show full Python traceback on errors"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    tokens_p = subparsers.add_parser("tokens", help="List the tokens of each input")
    tokens_p.add_argument("inputs", nargs="*", help="Input source files")

    tree_p = subparsers.add_parser("tree", help="Print the syntax tree of each input")
    tree_p.add_argument("inputs", nargs="*", help="Input source files")

    json_p = subparsers.add_parser("json", help="Serialize the syntax tree of each input to JSON")
    json_p.add_argument("inputs", nargs="*", help="Input source files")
    json_p.add_argument(
        "-o", "--output-dir",
        default=None,
        help="Write <name>.json files here instead of printing"
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    output_dir = getattr(args, "output_dir", None)
    # one counter for the whole batch so ids never repeat between inputs
    ids = NodeIds()
    taken: set[Path] = set()
    failed = 0

    for name, source in load_inputs(args.inputs):
        if source is None:
            failed += 1
            continue
        try:
            run_one(args.command, name, source, ids, output_dir, taken)

        except LexError as e:
            if args.debug:
                raise
            logging.error(f"{name}:{e}")
            failed += 1

        except ParseError as e:
            if args.debug:
                raise
            report_parse_error(name, e)
            failed += 1

        except RecursionError:
            # a parsed tree deeper than the visitors can recurse
            if args.debug:
                raise
            logging.error(f"{name}: syntax tree is nested too deeply to render")
            failed += 1

        except Exception as e:
            # Catch any other unexpected exception
            if args.debug:
                raise
            logging.error(f"Unexpected error in '{name}': {e}")
            failed += 1

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
