#!/usr/bin/env python3
"""
Expression calculator: runs the full pipeline for one infix expression.

    validate -> to_postfix -> build_tree -> evaluate

Also parses "<letter>=<integer>" assignment lines into a bindings table and
provides the interactive command-line front end.
"""

import re
import sys
import argparse
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple, Callable, List

from .config import CalculatorConfig
from .errors import ExpressionError, InvalidExpression, InvalidAssignment
from .expression_tree import build_tree, to_postfix, is_valid_expression
from .logging_system import (
    LogLevel, configure_logging, log_info, log_milestone, log_warning
)

_ASSIGNMENT_RE = re.compile(r'^\s*([A-Za-z])\s*=\s*([+-]?\d+)\s*$')


@dataclass
class CalculationResult:
    expression: str
    postfix: Optional[str] = None
    tree: Optional[str] = None
    value: Optional[int] = None
    error: Optional[ExpressionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_assignment(text: str) -> Tuple[str, int]:
    """Parse 'a=5' (spaces around '=' allowed, signed integers allowed)."""
    match = _ASSIGNMENT_RE.match(text)
    if match is None:
        raise InvalidAssignment(text)
    return match.group(1), int(match.group(2))


def parse_bindings(lines: Iterable[str]) -> Dict[str, int]:
    """
    Build a bindings table from assignment lines.

    Reading stops at the first empty line. A line holds one assignment or
    several separated by whitespace ('a=5 b=3'). Malformed assignments are
    logged and skipped; a later assignment to the same name wins.
    """
    bindings: Dict[str, int] = {}
    for line in lines:
        line = line.rstrip('\r\n')
        if not line.strip():
            break
        try:
            name, value = parse_assignment(line)
            bindings[name] = value
            continue
        except InvalidAssignment:
            pass
        for token in line.split():
            try:
                name, value = parse_assignment(token)
            except InvalidAssignment as e:
                log_warning(f"Skipping {e}")
                continue
            bindings[name] = value
    return bindings


def read_bindings(input_fn: Optional[Callable[[], str]] = None) -> Dict[str, int]:
    """Read assignment lines interactively until an empty line or EOF."""
    input_fn = input_fn or input

    def _lines():
        while True:
            try:
                yield input_fn()
            except EOFError:
                return

    return parse_bindings(_lines())


class ExpressionCalculator:
    """Runs the pipeline and captures pipeline errors in the result"""

    def __init__(self, config: Optional[CalculatorConfig] = None):
        self.config = config or CalculatorConfig()

    def convert(self, expression: str) -> str:
        """Validate an infix expression and return its postfix form."""
        if not is_valid_expression(expression):
            raise InvalidExpression(expression)
        if not expression.strip():
            raise InvalidExpression(expression, "empty expression")
        postfix = to_postfix(expression)
        log_info(f"Postfix for {expression!r}: {postfix}", LogLevel.DETAILED)
        return postfix

    def calculate(self, expression: str,
                  bindings: Optional[Dict[str, int]] = None) -> CalculationResult:
        result = CalculationResult(expression=expression)
        try:
            result.postfix = self.convert(expression)
            with build_tree(result.postfix) as tree:
                result.tree = tree.to_string()
                log_info(f"Tree for {expression!r}: {result.tree}", LogLevel.DETAILED)
                result.value = tree.evaluate(bindings or {})
        except ExpressionError as e:
            result.error = e
            log_info(f"Failed to evaluate {expression!r}: {e}", LogLevel.DETAILED)
            return result

        log_milestone(f"{expression!r} = {result.value}")
        return result


def calculate(expression: str, bindings: Optional[Dict[str, int]] = None) -> int:
    """Evaluate an infix expression, raising on any pipeline error."""
    with build_tree(ExpressionCalculator().convert(expression)) as tree:
        return tree.evaluate(bindings or {})


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="infix-tree",
        description="Evaluate an infix expression with single-character operands")
    parser.add_argument("expression", nargs="?",
                        help="Infix expression, e.g. '(a+2)*3'; prompted for when omitted")
    parser.add_argument("-v", "--var", action="append", default=[], metavar="NAME=VALUE",
                        help="Variable binding, repeatable; read interactively when omitted")
    parser.add_argument("--show-postfix", action="store_true", help="Print the postfix form")
    parser.add_argument("--show-tree", action="store_true", help="Print the parenthesised tree")
    parser.add_argument("--symbolic", action="store_true", help="Print the SymPy rendering")
    parser.add_argument("--log-level", default="minimal",
                        choices=[level.name.lower() for level in LogLevel])
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    config = CalculatorConfig.from_args(args)
    configure_logging(config.log_level, config.log_to_file, config.log_file_path)

    expression = args.expression
    if expression is None:
        try:
            expression = input("Enter an arithmetic expression: ")
        except EOFError:
            expression = ""

    # Bindings are only asked for once the expression has a tree
    try:
        postfix = ExpressionCalculator(config).convert(expression)
        tree = build_tree(postfix)
    except ExpressionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    with tree:
        try:
            if config.show_postfix:
                print(f"Postfix: {postfix}")
            if config.show_tree:
                print(f"Tree: {tree.to_string()}")
            if config.symbolic:
                print(f"Symbolic: {tree.to_sympy()}")

            if args.var:
                bindings = dict(parse_assignment(item) for item in args.var)
            else:
                print("Enter variable values (e.g. a=5 b=3), empty line to finish:")
                bindings = read_bindings()
            value = tree.evaluate(bindings)
        except ExpressionError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    log_milestone(f"{expression!r} = {value}")
    print(f"Result: {value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
