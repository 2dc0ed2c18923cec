"""Infix Expression Tree Package

Validates single-character infix arithmetic, converts it to postfix, builds
an explicit expression tree and evaluates it with integer variable bindings.
"""

from .errors import (
  ExpressionError, InvalidExpression, MalformedPostfix,
  UndefinedVariable, DivisionByZero, InvalidOperator, InvalidAssignment
)
from .expression_tree import (
  Expression, Node, VariableNode, ConstantNode, BinaryOpNode,
  is_valid_expression, to_postfix, build_tree, evaluate_tree, get_priority
)
from .calculator import (
  ExpressionCalculator, CalculationResult, calculate,
  parse_assignment, parse_bindings
)
from .config import CalculatorConfig
from .logging_system import LogLevel, configure_logging, get_logger

__version__ = "0.1.0"
__all__ = [
  "ExpressionError", "InvalidExpression", "MalformedPostfix",
  "UndefinedVariable", "DivisionByZero", "InvalidOperator", "InvalidAssignment",
  "Expression", "Node", "VariableNode", "ConstantNode", "BinaryOpNode",
  "is_valid_expression", "to_postfix", "build_tree", "evaluate_tree", "get_priority",
  "ExpressionCalculator", "CalculationResult", "calculate",
  "parse_assignment", "parse_bindings",
  "CalculatorConfig",
  "LogLevel", "configure_logging", "get_logger"
]
