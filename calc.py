import argparse
import logging
import math
import sys
from typing import Optional

from evaluator import evaluate
from lexer import ParseError
from normalizer import normalize
from parser import parse

try:
    # importing readline is enough for input() to edit lines and record history
    import readline
except ImportError:  # no line editing on this platform
    readline = None

logger = logging.getLogger(__name__)

PROMPT = "> "


def evaluate_line(raw: str) -> Optional[float]:
    """Normalize, parse and evaluate one line.

    Returns None when the line is not a complete formula. Division by zero
    is not a failure: it yields inf or nan.
    """
    text = normalize(raw)
    try:
        node = parse(text)
    except ParseError as e:
        logger.debug("rejected %r: %s", raw, e)
        return None
    return evaluate(node)


def format_result(value: float) -> str:
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


def _report(line, debug=False):
    if debug:
        text = normalize(line)
        print(f"normalized: {text}")
        try:
            print(f"AST: {parse(text)}")
        except ParseError as e:
            print(f"AST: none ({e})")

    result = evaluate_line(line)
    if result is None:
        print(f"invalid formula: {line}", file=sys.stderr)
        return False
    print(format_result(result))
    return True


def repl(prompt=PROMPT, debug=False, read=input):
    while True:
        try:
            line = read(prompt)
        except (EOFError, KeyboardInterrupt):
            break
        _report(line, debug=debug)


def build_arg_parser():
    parser = argparse.ArgumentParser(
        prog='calc',
        description='Evaluate arithmetic formulas over decimal numbers'
    )
    parser.add_argument('-e', '--expression', action='append', default=[],
                        help='Evaluate EXPRESSION and exit (may be repeated)')
    parser.add_argument('--prompt', default=PROMPT, help='Prompt shown in interactive mode')
    parser.add_argument('--history-file', help='Load and save line history here')
    parser.add_argument('--debug', action='store_true', help='Print the normalized input and AST')
    return parser


def main(argv=None, read=input):
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s'
    )

    if args.expression:
        results = [_report(expr, debug=args.debug) for expr in args.expression]
        return 0 if all(results) else 1

    if args.history_file and readline is not None:
        try:
            readline.read_history_file(args.history_file)
        except FileNotFoundError:
            logger.info("no history at %s yet", args.history_file)

    try:
        repl(prompt=args.prompt, debug=args.debug, read=read)
    finally:
        if args.history_file and readline is not None:
            readline.write_history_file(args.history_file)
    return 0


if __name__ == "__main__":
    sys.exit(main())
