import string
import numpy as np
import numba
from enum import IntEnum

from ...errors import DivisionByZero, InvalidOperator, UndefinedVariable

class NodeType(IntEnum):
  VARIABLE = 0
  CONSTANT = 1
  BINARY_OP = 2

class OpType(IntEnum):
  ADD = 0
  SUB = 1
  MUL = 2
  DIV = 3

# Mapping dictionaries
BINARY_OP_MAP = {'+': OpType.ADD, '-': OpType.SUB, '*': OpType.MUL, '/': OpType.DIV}

# Plain ints for the compiled kernels
_ADD = int(OpType.ADD)
_SUB = int(OpType.SUB)
_MUL = int(OpType.MUL)
_DIV = int(OpType.DIV)

# Single-character operands only: ASCII digits are constants, ASCII letters are variables
DIGITS = frozenset(string.digits)
LETTERS = frozenset(string.ascii_letters)
OPERANDS = DIGITS | LETTERS
# Only blanks and tabs separate tokens; newlines and other spaces are illegal
WHITESPACE = frozenset(' \t')


def is_operand(ch: str) -> bool:
  return ch in OPERANDS


def is_whitespace(ch: str) -> bool:
  return ch in WHITESPACE


def get_priority(op: str) -> int:
  if op == '+' or op == '-':
    return 1
  if op == '*' or op == '/':
    return 2
  return 0


def truncating_div(left: int, right: int) -> int:
  """Integer division rounding toward zero (-7 / 2 == -3)."""
  quotient = abs(left) // abs(right)
  if (left < 0) != (right < 0):
    return -quotient
  return quotient


def evaluate_binary_op(left_val: int, right_val: int, operator: str) -> int:
  if operator == '+':
    return left_val + right_val
  elif operator == '-':
    return left_val - right_val
  elif operator == '*':
    return left_val * right_val
  elif operator == '/':
    if right_val == 0:
      raise DivisionByZero()
    return truncating_div(left_val, right_val)
  raise InvalidOperator(operator)


def evaluate_variable(bindings, name: str) -> int:
  if name not in bindings:
    raise UndefinedVariable(name)
  return int(bindings[name])


def evaluate_constant(symbol: str) -> int:
  return ord(symbol) - ord('0')

@numba.njit(cache=True, inline='always')
def evaluate_constant_batch(n_samples, value):
  return np.full(n_samples, value, dtype=np.int64)

@numba.njit(cache=True)
def _truncating_div_batch(left_val, right_val):
  out = np.empty_like(left_val)
  for i in range(left_val.shape[0]):
    quotient = abs(left_val[i]) // abs(right_val[i])
    if (left_val[i] < 0) != (right_val[i] < 0):
      quotient = -quotient
    out[i] = quotient
  return out

@numba.njit(cache=True)
def evaluate_binary_op_fast(left_val, right_val, op_type):
  if op_type == _ADD:
    return left_val + right_val
  elif op_type == _SUB:
    return left_val - right_val
  elif op_type == _MUL:
    return left_val * right_val
  elif op_type == _DIV:
    return _truncating_div_batch(left_val, right_val)
  return np.zeros_like(left_val)


def evaluate_binary_op_batch(left_val: np.ndarray, right_val: np.ndarray, operator: str) -> np.ndarray:
  op_type = BINARY_OP_MAP.get(operator)
  if op_type is None:
    raise InvalidOperator(operator)
  if op_type == OpType.DIV and np.any(right_val == 0):
    raise DivisionByZero()
  return evaluate_binary_op_fast(left_val, right_val, int(op_type))
