import io
import traceback

from lox.lox_constants import TokenKind
from lox.lox_errors import LoxError
from lox.lox_interpreter import Interpreter, stringify
from lox.lox_lexer import scan
from lox.lox_parser import Parser


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def run_line(src: str, interpreter: Interpreter, verbose: bool = False) -> None:
    """Scan, parse and evaluate one REPL entry, printing the value or the errors."""
    result = scan(src)
    if result.had_error:
        for err in result.errors:
            print(f"[error] >>> {err}")
        return
    # comment-only input
    if all(tok.kind is TokenKind.EOF for tok in result.tokens):
        return

    try:
        expr = Parser(result.tokens).parse()
        if verbose:
            print(f"[ast] >>> {expr}")
        value = interpreter.evaluate(expr)
    except LoxError as e:
        print(f"[error] >>> {e}")
        return

    print(stringify(value))


def start_repl(verbose: bool = False) -> None:
    print("lox REPL. Type 'exit' or 'quit' to leave.")
    interpreter = Interpreter()

    while True:
        try:
            src = input(">>> ").strip()
            if src in ("exit", "quit"):
                print("Exiting lox REPL.")
                return
            if not src:
                continue
            if src.lower() == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue
            try:
                run_line(src, interpreter, verbose)
            except Exception:
                print_traceback()
        except (KeyboardInterrupt, EOFError):
            print("\nExiting lox REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
