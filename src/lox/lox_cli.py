"""
lox CLI Entrypoint.

This module provides the command-line interface for evaluating lox expressions.

Features:
    - Read source from `.lox` files or inline strings.
    - Scan, parse and evaluate, stopping at the first stage that fails.
    - Optionally dump the token stream, the canonical AST or the AST as JSON.
    - Launch an interactive REPL with optional verbosity.

Example usage:
    lox expr.lox
    lox -s "3 + 7 * (48 - 6)"
    lox -s "-(1 + 2)" --tokens --ast
    lox --repl --verbose

Exit status follows the sysexits convention used by lox implementations:
0 on success, 65 (EX_DATAERR) for lexical or syntax errors and 70
(EX_SOFTWARE) for evaluation errors.

Functions:
    run_lox(source: str, is_string: bool = False, show_tokens: bool = False,
            show_ast: bool = False, as_json: bool = False) -> int:
        Executes the full pipeline (scan → parse → evaluate → print).

    main() -> None:
        Parses CLI arguments and invokes the appropriate action (REPL or evaluate).
"""

import argparse
import json
import sys

from lox.lox_errors import EvaluationError, ParseError
from lox.lox_interpreter import evaluate, stringify
from lox.lox_lexer import scan
from lox.lox_parser import parse

EX_OK = 0
EX_DATAERR = 65
EX_SOFTWARE = 70


def report(error: Exception) -> None:
    print(f"[error] >>> {error}", file=sys.stderr)


def run_lox(
    source: str,
    is_string: bool = False,
    show_tokens: bool = False,
    show_ast: bool = False,
    as_json: bool = False,
) -> int:
    """
    Run the lox pipeline: scan, parse, evaluate and print the result.

    Args:
        source (str): The lox source code or path to a `.lox` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path. Defaults to False.
        show_tokens (bool): If True, prints every scanned token before parsing.
        show_ast (bool): If True, prints the canonical AST rendering before evaluating.
        as_json (bool): If True, prints the AST as indented JSON before evaluating.

    Returns:
        int: Process exit status (0, 65 or 70).

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.lox'.

    Side Effects:
        - Prints the result and any dumps to stdout.
        - Prints diagnostics to stderr.
    """
    if not is_string and not source.endswith(".lox"):
        raise ValueError("Only .lox files are supported.")
    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Scanning
    result = scan(source)
    if show_tokens:
        for tok in result.tokens:
            print(tok)
    if result.had_error:
        for err in result.errors:
            report(err)
        return EX_DATAERR

    # 3. Parsing
    try:
        expr = parse(result.tokens)
    except ParseError as e:
        report(e)
        return EX_DATAERR

    if show_ast:
        print(expr)
    if as_json:
        print(json.dumps(expr.to_dict(), indent=2, allow_nan=False))

    # 4. Evaluating
    try:
        value = evaluate(expr)
    except EvaluationError as e:
        report(e)
        return EX_SOFTWARE

    print(stringify(value))
    return EX_OK


def main() -> None:
    """
    Entry point for the lox CLI.

    Parses command-line arguments and dispatches to the appropriate mode:
    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Otherwise, runs the full pipeline and exits with its status.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `--tokens`: Print the token stream.
        - `--ast`: Print the canonical AST rendering.
        - `--json`: Print the AST as JSON.
        - `--repl`: Launch the interactive REPL.
        - `--verbose`: Enable verbose REPL mode.
    """
    if len(sys.argv) == 1:
        # No args passed: open REPL instead
        from lox.lox_repl import start_repl

        start_repl()
        return
    parser = argparse.ArgumentParser(prog="lox")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument("--tokens", action="store_true", help="Print scanned tokens")
    parser.add_argument("--ast", action="store_true", help="Print the parsed AST")
    parser.add_argument(
        "--json", dest="as_json", action="store_true", help="Print the AST as JSON"
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL instead of evaluating a source",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Verbose REPL mode (if --repl)"
    )

    args = parser.parse_args()

    if args.repl or args.source is None:
        from lox.lox_repl import start_repl

        start_repl(verbose=args.verbose)
        return

    try:
        status = run_lox(
            source=args.source,
            is_string=args.string,
            show_tokens=args.tokens,
            show_ast=args.ast,
            as_json=args.as_json,
        )
    except (ValueError, OSError) as e:
        parser.error(str(e))
    if status != EX_OK:
        sys.exit(status)


if __name__ == "__main__":
    main()
