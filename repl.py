import argparse
import logging
import sys
from typing import Callable, Optional, Sequence

from calculator.errors import CalculatorError
from calculator.runtime import calculate
from calculator.tokenizer import tokenize

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"

BANNER = [
    "Simple calculator interpreter",
    f'Type "{EXIT_COMMAND}" to quit',
    "Supported operations: +, -, *, /, (, )",
]


def is_exit_command(line: str) -> bool:
    return line.strip().lower() == EXIT_COMMAND


def format_tokens(code: str) -> Optional[str]:
    try:
        tokens = tokenize(code)
    except CalculatorError:
        # the same error is reported by the evaluation of this line
        return None
    return "tokens: " + " ".join(str(t) for t in tokens)


def run_session(
    read_line: Callable[[str], str],
    write: Callable[[str], None],
    prompt: str = ">> ",
    show_tokens: bool = False,
) -> None:
    """Reads and evaluates lines until the exit command or the end of input"""
    while True:
        try:
            line = read_line(prompt)
        except (EOFError, KeyboardInterrupt):
            break

        code = line.strip()
        if is_exit_command(code):
            break
        if not code:
            continue

        if show_tokens:
            tokens_line = format_tokens(code)
            if tokens_line is not None:
                write(tokens_line)
        write(calculate(code))


def run_once(expressions: Sequence[str], show_tokens: bool = False) -> int:
    exit_code = 0
    for code in expressions:
        if is_exit_command(code):
            break
        if show_tokens:
            tokens_line = format_tokens(code)
            if tokens_line is not None:
                print(tokens_line)
        output = calculate(code)
        print(output)
        if output.startswith("Error:"):
            exit_code = 1
    return exit_code


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="calculator",
        usage="%(prog)s [options] [expression ...]",
        description=(
            "Evaluate arithmetic expressions. Every argument that is not an option is an expression; "
            "an interactive session starts when none is given."
        ),
        allow_abbrev=False,
    )
    parser.add_argument("--prompt", default=">> ", help="Prompt shown in the interactive session")
    parser.add_argument("--tokens", action="store_true", help="Also print the tokens of every expression")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    # expressions like "-(3+4)" or "--5" look like options, so they are collected from the leftovers
    args, expressions = parser.parse_known_args(argv)
    if "--" in expressions:
        expressions.remove("--")
    args.expressions = expressions
    return args


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.expressions:
        return run_once(args.expressions, show_tokens=args.tokens)

    interactive = sys.stdin.isatty()
    logger.info("Starting %s session", "interactive" if interactive else "batch")
    if interactive:
        print("\n".join(BANNER))
    run_session(input, print, prompt=args.prompt if interactive else "", show_tokens=args.tokens)
    return 0


if __name__ == "__main__":
    sys.exit(main())
